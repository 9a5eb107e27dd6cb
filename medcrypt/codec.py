# medcrypt/codec.py
import re
import base64
import binascii
from .log import get_logger
from .errors import CodecResult, ErrorKind, InvalidEncodingError, PaddingMismatchError
from .key_schedule import RC5Key, key_from_bytes
from .cipher import encrypt_words, decrypt_words
from .serialization import bytes_to_words, words_to_bytes
from .utils import pkcs7_pad, check_padding

logger = get_logger(__name__)

_B64_WHITESPACE = re.compile(r"[\t\n\f\r ]")
_B64_BODY = re.compile(r"[A-Za-z0-9+/]*")

# -----------------------------
# Transport encoding
# -----------------------------
def b64encode_text(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")

def b64decode_text(text: str) -> bytes:
    """Decode base64 the way browsers' atob() does.

    ASCII whitespace is ignored and the trailing ``=`` padding is optional;
    any other deviation raises InvalidEncodingError.
    """
    s = _B64_WHITESPACE.sub("", text)
    if len(s) % 4 == 0:
        if s.endswith("=="):
            s = s[:-2]
        elif s.endswith("="):
            s = s[:-1]
    if len(s) % 4 == 1 or not _B64_BODY.fullmatch(s):
        raise InvalidEncodingError("Malformed base64 text")
    try:
        return base64.b64decode(s + "=" * (-len(s) % 4), validate=True)
    except binascii.Error as e:
        raise InvalidEncodingError(str(e)) from e

# -----------------------------
# Text <-> transport string
# -----------------------------
def encrypt_bytes(data: bytes, key: RC5Key) -> bytes:
    words = bytes_to_words(pkcs7_pad(data))
    return words_to_bytes(encrypt_words(words, key))

def decrypt_bytes(data: bytes, key: RC5Key) -> bytes:
    """Decrypt without unpadding. Output length is rounded up to whole blocks."""
    return words_to_bytes(decrypt_words(bytes_to_words(data), key))

def encode_result(plaintext: str, key: RC5Key) -> CodecResult:
    if not plaintext:
        return CodecResult("")
    try:
        data = plaintext.encode("utf-8")
    except UnicodeEncodeError:
        logger.warning("Plaintext is not encodable, passing through", length=len(plaintext))
        return CodecResult(plaintext, ErrorKind.INVALID_ENCODING)
    return CodecResult(b64encode_text(encrypt_bytes(data, key)))

def decode_result(text: str, key: RC5Key) -> CodecResult:
    if not text:
        return CodecResult("")
    try:
        raw = b64decode_text(text)
    except InvalidEncodingError:
        logger.debug("Transport text is not base64, passing through", length=len(text))
        return CodecResult(text, ErrorKind.INVALID_ENCODING)
    plain = decrypt_bytes(raw, key)
    try:
        plain = plain[:-check_padding(plain)]
        error = None
    except PaddingMismatchError:
        logger.debug("Padding check failed, keeping decrypted bytes", length=len(plain))
        error = ErrorKind.PADDING_MISMATCH
    return CodecResult(plain.decode("utf-8", errors="replace"), error)

def encode(plaintext: str, key: RC5Key) -> str:
    return encode_result(plaintext, key).value

def decode(text: str, key: RC5Key) -> str:
    return decode_result(text, key).value

class StreamCodec:
    """RC5 text codec bound to one key.

    ``encode``/``decode`` keep the pass-through behaviour existing clients
    depend on; ``encode_result``/``decode_result`` report what went wrong.
    """

    def __init__(self, key):
        self._key = key if isinstance(key, RC5Key) else key_from_bytes(key)

    @property
    def key(self) -> RC5Key:
        return self._key

    def encode(self, plaintext: str) -> str:
        return encode(plaintext, self._key)

    def decode(self, text: str) -> str:
        return decode(text, self._key)

    def encode_result(self, plaintext: str) -> CodecResult:
        return encode_result(plaintext, self._key)

    def decode_result(self, text: str) -> CodecResult:
        return decode_result(text, self._key)
