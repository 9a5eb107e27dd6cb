# medcrypt/utils.py
from .params import W, MASK, BLOCK_SIZE
from .errors import PaddingMismatchError

# -----------------------------
# Word rotation
# -----------------------------
# Both helpers accept Python ints or uint32 numpy arrays. The shift amount is
# taken mod W, and a zero amount leaves the word unchanged.
def rotl32(x, s):
    s = s & (W - 1)
    return ((x << s) | (x >> ((W - s) & (W - 1)))) & MASK

def rotr32(x, s):
    s = s & (W - 1)
    return ((x >> s) | (x << ((W - s) & (W - 1)))) & MASK

# -----------------------------
# Padding
# -----------------------------
def pkcs7_pad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    padding_len = block_size - (len(data) % block_size)
    padding = bytes([padding_len] * padding_len)
    return data + padding

def check_padding(data: bytes, block_size: int = BLOCK_SIZE) -> int:
    """Return the pad length at the end of ``data`` or raise PaddingMismatchError."""
    if not data:
        raise PaddingMismatchError("Cannot unpad empty data")
    padding_len = data[-1]
    if padding_len == 0 or padding_len > block_size or padding_len > len(data):
        raise PaddingMismatchError("Invalid padding length")
    if not all(b == padding_len for b in data[-padding_len:]):
        raise PaddingMismatchError("Invalid padding")
    return padding_len

def pkcs7_unpad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    # Lenient: anything that does not look padded comes back unchanged.
    try:
        padding_len = check_padding(data, block_size)
    except PaddingMismatchError:
        return data
    return data[:-padding_len]
