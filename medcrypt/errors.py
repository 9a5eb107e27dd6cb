# medcrypt/errors.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_ENCODING = "invalid_encoding"
    PADDING_MISMATCH = "padding_mismatch"


class MedcryptError(ValueError):
    kind: Optional[ErrorKind] = None


class InvalidEncodingError(MedcryptError):
    kind = ErrorKind.INVALID_ENCODING


class PaddingMismatchError(MedcryptError):
    kind = ErrorKind.PADDING_MISMATCH


class KeystoreError(MedcryptError):
    pass


_ERRORS = {
    ErrorKind.INVALID_ENCODING: InvalidEncodingError,
    ErrorKind.PADDING_MISMATCH: PaddingMismatchError,
}


@dataclass(frozen=True)
class CodecResult:
    """Outcome of a codec call.

    ``value`` is always what the compatibility API hands back: the converted
    text on success, or the fallback value when ``error`` is set. Callers that
    need to tell "decrypted to something equal to the input" apart from
    "decryption failed" should look at ``error`` or call ``unwrap()``.
    """
    value: str
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        if self.error is not None:
            raise _ERRORS[self.error](f"codec failed: {self.error.value}")
        return self.value
