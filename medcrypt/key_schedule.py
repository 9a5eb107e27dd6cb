# medcrypt/key_schedule.py
import numpy as np
from dataclasses import dataclass
from .params import T, P, Q, MASK, DTYPE, key_bytes
from .utils import rotl32

@dataclass(frozen=True, eq=False)
class RC5Key:
    key: bytes
    table: np.ndarray       # S, T words, read-only

    def __repr__(self):
        return f"RC5Key(b={len(self.key)}, t={len(self.table)})"

def pack_key_words(key: bytes) -> list[int]:
    # An empty key still yields one zero word so the mixing loop can index it.
    c = max(1, -(-len(key) // 4))
    L = [0] * c
    for i, byte in enumerate(key):
        L[i // 4] |= byte << (8 * (i % 4))
    return L

def expand_key(key: bytes) -> list[int]:
    L = pack_key_words(key)
    S = [P]
    for i in range(1, T):
        S.append((S[i - 1] + Q) & MASK)

    A = B = i = j = 0
    for _ in range(3 * max(T, len(L))):
        A = S[i] = rotl32((S[i] + A + B) & MASK, 3)
        B = L[j] = rotl32((L[j] + A + B) & MASK, (A + B) & 31)
        i = (i + 1) % T
        j = (j + 1) % len(L)
    return S

def key_from_bytes(key) -> RC5Key:
    key = key_bytes(key)
    table = np.array(expand_key(key), dtype=DTYPE)
    table.setflags(write=False)
    assert table.shape == (T,), f"Table shape mismatch: expected {(T,)}, got {table.shape}"
    return RC5Key(key=key, table=table)
