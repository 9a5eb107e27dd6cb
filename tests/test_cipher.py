# tests/test_cipher.py
import numpy as np
import pytest

from medcrypt import (
    T, P, Q, BLOCK_SIZE,
    key_from_bytes, expand_key,
    encrypt_block, decrypt_block, encrypt_words, decrypt_words,
    bytes_to_words, words_to_bytes,
    pkcs7_pad, pkcs7_unpad, check_padding, PaddingMismatchError,
    rotl32, rotr32,
)
from medcrypt.key_schedule import pack_key_words

ZERO_KEY = bytes(16)

# ---------- reference vector ----------
# The published RC5-32/12/16 vector 21A5DBEE154B8F6D is a byte string;
# read as little-endian words it is (0xEEDBA521, 0x6D8F4B15).
def test_reference_vector_encrypt():
    key = key_from_bytes(ZERO_KEY)
    assert words_to_bytes(encrypt_block(0, 0, key)) == bytes.fromhex("21A5DBEE154B8F6D")
    assert encrypt_block(0, 0, key) == (0xEEDBA521, 0x6D8F4B15)

def test_reference_vector_decrypt():
    key = key_from_bytes(ZERO_KEY)
    assert decrypt_block(0xEEDBA521, 0x6D8F4B15, key) == (0, 0)
    words = bytes_to_words(bytes.fromhex("21A5DBEE154B8F6D")).tolist()
    assert decrypt_block(*words, key) == (0, 0)

@pytest.mark.parametrize("bad", [16, 3.5, None, [1, 2]])
def test_non_bytes_key_rejected(bad):
    with pytest.raises(TypeError):
        key_from_bytes(bad)

def test_bytes_like_keys_accepted():
    expected = key_from_bytes(b"kunci").table
    assert np.array_equal(key_from_bytes(bytearray(b"kunci")).table, expected)
    assert np.array_equal(key_from_bytes(memoryview(b"kunci")).table, expected)

@pytest.mark.parametrize("block", [
    (0, 0),
    (0xFFFFFFFF, 0xFFFFFFFF),
    (0x01234567, 0x89ABCDEF),
    (0x80000000, 0x00000001),
])
def test_block_round_trip(block):
    key = key_from_bytes(b"medic-secret-key-2025")
    assert decrypt_block(*encrypt_block(*block, key), key) == block

# ---------- key schedule ----------
def test_table_shape_and_readonly():
    key = key_from_bytes(b"k")
    assert key.table.shape == (T,)
    assert key.table.dtype == np.uint32
    assert not key.table.flags.writeable
    with pytest.raises(ValueError):
        key.table[0] = 0

def test_key_schedule_deterministic():
    k1 = key_from_bytes(b"same key bytes")
    k2 = key_from_bytes(b"same key bytes")
    assert np.array_equal(k1.table, k2.table)

def test_str_key_matches_utf8_bytes():
    assert np.array_equal(key_from_bytes("kunci").table, key_from_bytes(b"kunci").table)

def test_different_keys_give_different_tables():
    assert not np.array_equal(key_from_bytes(b"key-one").table, key_from_bytes(b"key-two").table)

def test_empty_key_is_accepted():
    assert pack_key_words(b"") == [0]
    key = key_from_bytes(b"")
    assert len(key.table) == T
    assert decrypt_block(*encrypt_block(7, 9, key), key) == (7, 9)

def test_pack_key_words_little_endian():
    assert pack_key_words(b"\x01\x02\x03\x04\x05") == [0x04030201, 0x00000005]

def test_expand_key_mixes_in_key():
    S = expand_key(b"abc")
    assert len(S) == T
    assert all(0 <= s <= 0xFFFFFFFF for s in S)
    assert S != [(P + i * Q) & 0xFFFFFFFF for i in range(T)]

def test_repr_hides_key():
    assert "secret" not in repr(key_from_bytes(b"secret"))

# ---------- rotations ----------
def test_rotations_int():
    assert rotl32(0x80000001, 1) == 0x00000003
    assert rotr32(0x00000003, 1) == 0x80000001
    assert rotl32(0x12345678, 0) == 0x12345678
    assert rotl32(0x12345678, 32) == 0x12345678
    assert rotr32(rotl32(0xDEADBEEF, 13), 13) == 0xDEADBEEF

def test_rotations_array():
    x = np.array([0x80000001, 0x12345678], dtype=np.uint32)
    s = np.array([1, 0], dtype=np.uint32)
    assert rotl32(x, s).tolist() == [0x00000003, 0x12345678]
    assert rotr32(rotl32(x, s), s).tolist() == x.tolist()

# ---------- word codec ----------
def test_bytes_to_words_partial_tail():
    assert bytes_to_words(b"\x01\x02\x03\x04\x05").tolist() == [0x04030201, 0x00000005]
    assert bytes_to_words(b"").tolist() == []

def test_words_to_bytes_length():
    words = bytes_to_words(b"\x01\x02\x03\x04\x05")
    assert words_to_bytes(words) == b"\x01\x02\x03\x04\x05\x00\x00\x00"
    assert words_to_bytes([0xAABBCCDD]) == b"\xdd\xcc\xbb\xaa"

# ---------- stream of blocks ----------
def test_vectorized_blocks_match_single_block():
    key = key_from_bytes(b"vector")
    words = bytes_to_words(bytes(range(32)))
    enc = encrypt_words(words, key).tolist()
    expected = []
    for i in range(0, len(words), 2):
        expected.extend(encrypt_block(int(words[i]), int(words[i + 1]), key))
    assert enc == expected
    assert decrypt_words(enc, key).tolist() == words.tolist()

def test_odd_word_count_gets_zero_partner():
    key = key_from_bytes(b"odd")
    enc = encrypt_words([5], key)
    assert enc.tolist() == list(encrypt_block(5, 0, key))

def test_equal_blocks_encrypt_equally():
    key = key_from_bytes(b"ecb")
    enc = encrypt_words(bytes_to_words(b"ABCDEFGH" * 2), key).tolist()
    assert enc[0:2] == enc[2:4]

# ---------- padding ----------
@pytest.mark.parametrize("n", [0, 1, 7, 8, 9, 16, 17])
def test_pad_length(n):
    padded = pkcs7_pad(b"x" * n)
    assert len(padded) % BLOCK_SIZE == 0
    assert 1 <= len(padded) - n <= BLOCK_SIZE
    if n % BLOCK_SIZE == 0:
        assert len(padded) == n + BLOCK_SIZE
    assert pkcs7_unpad(padded) == b"x" * n

def test_unpad_lenient():
    assert pkcs7_unpad(b"") == b""
    assert pkcs7_unpad(b"abcdefg\x00") == b"abcdefg\x00"
    assert pkcs7_unpad(b"abcdefg\x09") == b"abcdefg\x09"
    assert pkcs7_unpad(b"abcdef\x01\x02") == b"abcdef\x01\x02"
    assert pkcs7_unpad(b"\x03\x03") == b"\x03\x03"
    assert pkcs7_unpad(b"abcdef\x02\x02") == b"abcdef"

def test_check_padding_strict():
    assert check_padding(b"abcde\x03\x03\x03") == 3
    for bad in (b"", b"abcdefg\x00", b"abcdefg\x09", b"abcdef\x01\x02"):
        with pytest.raises(PaddingMismatchError):
            check_padding(bad)
