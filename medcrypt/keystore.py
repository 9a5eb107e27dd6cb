# medcrypt/keystore.py
import json
import secrets
from base64 import b64encode, b64decode
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives import hashes
from .log import get_logger
from .params import bcolors, key_bytes
from .errors import KeystoreError

logger = get_logger(__name__)

KDF_ITERATIONS = 100000

# -----------------------------
# Key Management
# -----------------------------
# The keystore only holds pre-shared field keys under a name. The passphrase
# protects the file; it is never used as a field key itself.
def _fernet(passphrase: str, salt: bytes) -> Fernet:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=KDF_ITERATIONS,
    )
    return Fernet(b64encode(kdf.derive(passphrase.encode())))

def create_keystore(passphrase: str, keystore_file: str):
    salt = secrets.token_bytes(16)
    _fernet(passphrase, salt)  # materialized to ensure validity
    keystore = {"salt": b64encode(salt).decode(), "keys": {}}
    with open(keystore_file, "w") as kf:
        json.dump(keystore, kf)
    logger.info("Keystore created", path=keystore_file)

def load_keystore(passphrase: str, keystore_file: str):
    try:
        with open(keystore_file, "r") as kf:
            keystore = json.load(kf)
        salt = b64decode(keystore["salt"])
    except (OSError, ValueError, KeyError) as e:
        raise KeystoreError(f"{bcolors.FAIL}Cannot read keystore {keystore_file}: {e}{bcolors.ENDC}") from e
    return keystore, _fernet(passphrase, salt)

def store_key_in_keystore(passphrase: str, key_name: str, key, keystore_file: str):
    keystore, fernet = load_keystore(passphrase, keystore_file)
    encrypted_key = fernet.encrypt(key_bytes(key)).decode()
    keystore["keys"][key_name] = encrypted_key
    with open(keystore_file, "w") as kf:
        json.dump(keystore, kf)
    logger.info("Key stored", path=keystore_file, key_name=key_name)

def retrieve_key_from_keystore(passphrase: str, key_name: str, keystore_file: str) -> bytes:
    keystore, fernet = load_keystore(passphrase, keystore_file)
    if key_name not in keystore["keys"]:
        raise KeystoreError(f"{bcolors.FAIL}Key {key_name} not found in keystore{bcolors.ENDC}")
    encrypted_key = keystore["keys"][key_name]
    try:
        return fernet.decrypt(encrypted_key.encode())
    except InvalidToken:
        raise KeystoreError(f"{bcolors.FAIL}Failed to decrypt key. Wrong passphrase?{bcolors.ENDC}")

def list_keys(keystore_file: str) -> list[str]:
    try:
        with open(keystore_file, "r") as kf:
            return sorted(json.load(kf).get("keys", {}))
    except (OSError, ValueError) as e:
        raise KeystoreError(f"{bcolors.FAIL}Cannot read keystore {keystore_file}: {e}{bcolors.ENDC}") from e
