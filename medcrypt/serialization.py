# medcrypt/serialization.py
import json
import numpy as np
from .params import DTYPE, WIRE_DTYPE

# -----------------------------
# Word Helpers
# -----------------------------
def bytes_to_words(b: bytes) -> np.ndarray:
    # A trailing partial word is zero-filled in its high-order bytes.
    padded = bytes(b).ljust(-(-len(b) // 4) * 4, b'\x00')
    arr = np.frombuffer(padded, dtype=WIRE_DTYPE).copy()
    return arr.astype(DTYPE)

def words_to_bytes(x) -> bytes:
    return np.asarray(x, dtype=DTYPE).astype(WIRE_DTYPE).tobytes()

# -----------------------------
# Record File Helpers
# -----------------------------
def unwrap_envelope(payload):
    """Return the records inside an API response body.

    The records endpoint answers either with the records themselves or with
    ``{"data": [...]}``; an empty or missing ``data`` leaves the body as is.
    """
    if isinstance(payload, dict) and payload.get("data"):
        return payload["data"]
    return payload

def read_records(path: str):
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    return unwrap_envelope(payload)

def write_records(path: str, records, indent: int = 2):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, ensure_ascii=False, indent=indent)
