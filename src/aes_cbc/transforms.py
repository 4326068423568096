"""
AES round transforms on a 4x4 state matrix.

Every function takes a state (``state[row][col]``, see ``utils``) and
returns a new matrix; the input is never modified. Only table lookups and
XOR are used.
"""

from .tables import SBOX, INV_SBOX, MUL2, MUL3, MUL9, MUL11, MUL13, MUL14

State = list[list[int]]


def sub_bytes(state: State) -> State:
    """Apply S-box to each byte."""
    return [[SBOX[b] for b in row] for row in state]


def inv_sub_bytes(state: State) -> State:
    """Apply inverse S-box to each byte."""
    return [[INV_SBOX[b] for b in row] for row in state]


def shift_rows(state: State) -> State:
    """Rotate row r left by r positions."""
    return [[state[row][(col + row) % 4] for col in range(4)] for row in range(4)]


def inv_shift_rows(state: State) -> State:
    """Rotate row r right by r positions."""
    return [[state[row][(col - row) % 4] for col in range(4)] for row in range(4)]


def mix_columns(state: State) -> State:
    """
    Multiply each column by the fixed MixColumns matrix.

    [02 03 01 01]
    [01 02 03 01]
    [01 01 02 03]
    [03 01 01 02]
    """
    result = [[0] * 4 for _ in range(4)]
    for col in range(4):
        s0, s1, s2, s3 = (state[row][col] for row in range(4))
        result[0][col] = MUL2[s0] ^ MUL3[s1] ^ s2 ^ s3
        result[1][col] = s0 ^ MUL2[s1] ^ MUL3[s2] ^ s3
        result[2][col] = s0 ^ s1 ^ MUL2[s2] ^ MUL3[s3]
        result[3][col] = MUL3[s0] ^ s1 ^ s2 ^ MUL2[s3]
    return result


def inv_mix_columns(state: State) -> State:
    """
    Multiply each column by the inverse MixColumns matrix.

    [0e 0b 0d 09]
    [09 0e 0b 0d]
    [0d 09 0e 0b]
    [0b 0d 09 0e]
    """
    result = [[0] * 4 for _ in range(4)]
    for col in range(4):
        s0, s1, s2, s3 = (state[row][col] for row in range(4))
        result[0][col] = MUL14[s0] ^ MUL11[s1] ^ MUL13[s2] ^ MUL9[s3]
        result[1][col] = MUL9[s0] ^ MUL14[s1] ^ MUL11[s2] ^ MUL13[s3]
        result[2][col] = MUL13[s0] ^ MUL9[s1] ^ MUL14[s2] ^ MUL11[s3]
        result[3][col] = MUL11[s0] ^ MUL13[s1] ^ MUL9[s2] ^ MUL14[s3]
    return result


def add_round_key(state: State, round_key: State) -> State:
    """XOR state with round key (word c of the key is column c)."""
    return [
        [state[row][col] ^ round_key[row][col] for col in range(4)]
        for row in range(4)
    ]
