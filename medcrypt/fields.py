# medcrypt/fields.py
from typing import Optional
from .log import get_logger
from .params import ENCRYPTABLE_FIELDS, FieldCryptoConfig
from .errors import ErrorKind
from .codec import StreamCodec

logger = get_logger(__name__)

# -----------------------------
# Field-level record encryption
# -----------------------------
class FieldEncryptor:
    """Encrypts the sensitive string fields of a medical record.

    Only the allow-listed fields holding a non-empty string are touched;
    identifiers, dates, numbers and unknown fields pass through as they are.
    Records are shallow-copied, never modified in place.
    """

    def __init__(self, key, fields=ENCRYPTABLE_FIELDS):
        self.codec = StreamCodec(key)
        self.fields = tuple(fields)

    @classmethod
    def from_config(cls, config: FieldCryptoConfig) -> "FieldEncryptor":
        return cls(config.key, config.fields)

    def encryptable_fields(self) -> tuple:
        return self.fields

    def _selected(self, record: dict):
        for name in self.fields:
            value = record.get(name)
            if value and isinstance(value, str):
                yield name, value

    def encrypt_record(self, record: dict) -> dict:
        out = dict(record)
        for name, value in self._selected(record):
            result = self.codec.encode_result(value)
            if not result.ok:
                logger.warning("Field left in clear", field=name, error=result.error.value)
            out[name] = result.value
        return out

    def decrypt_record(self, record: dict) -> dict:
        return self.decrypt_record_checked(record)[0]

    def decrypt_record_checked(self, record: dict) -> tuple[dict, dict]:
        """Decrypt ``record`` and report the fields that did not decrypt cleanly.

        Returns the decrypted copy (identical to ``decrypt_record``) and a
        mapping of field name to ErrorKind for every field whose value came
        back through the pass-through path.
        """
        out = dict(record)
        failures: dict[str, ErrorKind] = {}
        for name, value in self._selected(record):
            result = self.codec.decode_result(value)
            if not result.ok:
                failures[name] = result.error
            out[name] = result.value
        if failures:
            logger.debug("Record fields did not decrypt cleanly",
                         fields=sorted(failures), id=record.get("id"))
        return out, failures

    def encrypt_records(self, items):
        if not isinstance(items, list):
            return items
        return [self.encrypt_record(item) if isinstance(item, dict) else item for item in items]

    def decrypt_records(self, items):
        if not isinstance(items, list):
            return items
        return [self.decrypt_record(item) if isinstance(item, dict) else item for item in items]


def encryptor_from_env(environ: Optional[dict] = None) -> FieldEncryptor:
    return FieldEncryptor.from_config(FieldCryptoConfig.from_env(environ))
