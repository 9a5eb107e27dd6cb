# medcrypt/__init__.py
from .params import (
    W, R, T, P, Q, BLOCK_SIZE, DTYPE,
    ENCRYPTABLE_FIELDS, LEGACY_CLIENT_KEY, FieldCryptoConfig,
)
from .errors import (
    ErrorKind, CodecResult,
    MedcryptError, InvalidEncodingError, PaddingMismatchError, KeystoreError,
)
from .utils import rotl32, rotr32, pkcs7_pad, pkcs7_unpad, check_padding
from .serialization import bytes_to_words, words_to_bytes, unwrap_envelope, read_records, write_records
from .key_schedule import RC5Key, key_from_bytes, expand_key
from .cipher import encrypt_block, decrypt_block, encrypt_blocks, decrypt_blocks, encrypt_words, decrypt_words
from .codec import StreamCodec, encode, decode, encode_result, decode_result
from .fields import FieldEncryptor, encryptor_from_env
from .keystore import create_keystore, load_keystore, store_key_in_keystore, retrieve_key_from_keystore, list_keys
from .log import get_logger, configure_logging
