# medcrypt/params.py
import os
from dataclasses import dataclass, field
import numpy as np

# -----------------------------
# CLI Colors
# -----------------------------
class bcolors:
    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    GREY = '\033[90m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'

# -----------------------------
# RC5-32/12 constants
# -----------------------------
W = 32                  # word size in bits
R = 12                  # rounds
T = 2 * (R + 1)         # expanded table size
P = 0xB7E15163
Q = 0x9E3779B9
MASK = 0xFFFFFFFF
BLOCK_SIZE = 8          # bytes, two words
DTYPE = np.uint32
WIRE_DTYPE = '<u4'    # little-endian words on the wire

# Wire names used by the records API, in order:
# name, address, phone number, complaint, diagnosis, procedure,
# prescription, responsible physician.
ENCRYPTABLE_FIELDS = (
    "nama",
    "alamat",
    "nomor_hp",
    "keluhan",
    "diagnosa",
    "tindakan",
    "resep_obat",
    "dokter_penanggung_jawab",
)

# Key baked into the old browser client. Only for reading data it wrote.
LEGACY_CLIENT_KEY = "medic-secret-key-2025"

ENV_KEY = "MEDCRYPT_KEY"
ENV_KEY_HEX = "MEDCRYPT_KEY_HEX"


def key_bytes(key) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise TypeError(f"Key must be str or bytes-like, got {type(key).__name__}")
    return bytes(key)


@dataclass(frozen=True)
class FieldCryptoConfig:
    key: bytes
    fields: tuple = field(default=ENCRYPTABLE_FIELDS)

    def __post_init__(self):
        object.__setattr__(self, "key", key_bytes(self.key))
        object.__setattr__(self, "fields", tuple(self.fields))

    @classmethod
    def from_env(cls, environ=None) -> "FieldCryptoConfig":
        """Build a config from MEDCRYPT_KEY (text) or MEDCRYPT_KEY_HEX."""
        environ = os.environ if environ is None else environ
        if environ.get(ENV_KEY_HEX):
            return cls(key=bytes.fromhex(environ[ENV_KEY_HEX]))
        if ENV_KEY in environ:
            return cls(key=environ[ENV_KEY])
        raise KeyError(f"Neither {ENV_KEY} nor {ENV_KEY_HEX} is set")
