"""
AES-256 key expansion.

Nk = 8 key words, Nr = 14 rounds, 4 * (Nr + 1) = 60 expanded words. Only
this one key size exists; the constants below are not parameters.
"""

from .errors import KeyLengthMismatch
from .tables import SBOX, RCON

KEY_SIZE = 32
NK = 8
NUM_ROUNDS = 14
NUM_WORDS = 4 * (NUM_ROUNDS + 1)


def rot_word(word: bytes) -> bytes:
    """Rotate a 4-byte word left by one byte."""
    return word[1:] + word[:1]


def sub_word(word: bytes) -> bytes:
    """Apply the S-box to each byte of a word."""
    return bytes(SBOX[b] for b in word)


def _xor_word(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def expand_key(key: bytes) -> list[bytes]:
    """
    Expand a 256-bit key into 60 four-byte words.

    Args:
        key: 32-byte AES-256 key

    Returns:
        List of 60 words; round key r is words[4r:4r+4]

    Raises:
        KeyLengthMismatch: If key is not 32 bytes
    """
    if len(key) != KEY_SIZE:
        raise KeyLengthMismatch(f"Key must be 32 bytes, got {len(key)}")

    w = [bytes(key[i:i + 4]) for i in range(0, KEY_SIZE, 4)]

    for i in range(NK, NUM_WORDS):
        temp = w[i - 1]
        if i % NK == 0:
            # RotWord + SubWord + Rcon (first byte only)
            temp = sub_word(rot_word(temp))
            temp = bytes([temp[0] ^ RCON[i // NK - 1]]) + temp[1:]
        elif i % NK == 4:
            temp = sub_word(temp)
        w.append(_xor_word(temp, w[i - NK]))

    return w


def key_expansion(key: bytes) -> list[list[list[int]]]:
    """
    Expand a key into 15 round keys laid out as 4x4 states.

    Column c of round key r holds word 4r + c, so a round key can be
    XORed directly onto a state matrix.
    """
    words = expand_key(key)
    round_keys = []
    for round_num in range(NUM_ROUNDS + 1):
        rk = [[0] * 4 for _ in range(4)]
        for col in range(4):
            word = words[round_num * 4 + col]
            for row in range(4):
                rk[row][col] = word[row]
        round_keys.append(rk)
    return round_keys
