# medcrypt/cipher.py
import numpy as np
from .params import R, DTYPE
from .key_schedule import RC5Key
from .utils import rotl32, rotr32

# -----------------------------
# Block rounds
# -----------------------------
# There is no chaining between blocks, so the rounds run over whole word
# arrays at once: a[k], b[k] is the k-th block.
def encrypt_blocks(a, b, key: RC5Key):
    S = key.table
    A = np.asarray(a, dtype=DTYPE) + S[0]
    B = np.asarray(b, dtype=DTYPE) + S[1]
    assert A.shape == B.shape, f"Block halves mismatch: {A.shape} vs {B.shape}"
    for i in range(1, R + 1):
        A = rotl32(A ^ B, B) + S[2 * i]
        B = rotl32(B ^ A, A) + S[2 * i + 1]
    return A.astype(DTYPE), B.astype(DTYPE)

def decrypt_blocks(a, b, key: RC5Key):
    S = key.table
    A = np.asarray(a, dtype=DTYPE)
    B = np.asarray(b, dtype=DTYPE)
    assert A.shape == B.shape, f"Block halves mismatch: {A.shape} vs {B.shape}"
    for i in range(R, 0, -1):
        B = rotr32(B - S[2 * i + 1], A) ^ A
        A = rotr32(A - S[2 * i], B) ^ B
    B = B - S[1]
    A = A - S[0]
    return A.astype(DTYPE), B.astype(DTYPE)

def encrypt_block(a: int, b: int, key: RC5Key) -> tuple[int, int]:
    A, B = encrypt_blocks(np.array([a], dtype=DTYPE), np.array([b], dtype=DTYPE), key)
    return int(A[0]), int(B[0])

def decrypt_block(a: int, b: int, key: RC5Key) -> tuple[int, int]:
    A, B = decrypt_blocks(np.array([a], dtype=DTYPE), np.array([b], dtype=DTYPE), key)
    return int(A[0]), int(B[0])

# -----------------------------
# Word streams
# -----------------------------
def _split(words: np.ndarray):
    words = np.asarray(words, dtype=DTYPE)
    if len(words) % 2:
        words = np.append(words, DTYPE(0))
    return words[0::2], words[1::2]

def _join(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    out = np.empty(2 * len(A), dtype=DTYPE)
    out[0::2] = A
    out[1::2] = B
    return out

def encrypt_words(words, key: RC5Key) -> np.ndarray:
    return _join(*encrypt_blocks(*_split(words), key))

def decrypt_words(words, key: RC5Key) -> np.ndarray:
    return _join(*decrypt_blocks(*_split(words), key))
