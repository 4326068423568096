"""
Utility functions for byte/state/hex/text conversions.

AES state is 4x4 bytes in column-major order:
  state[row][col] where row, col in [0..3]

Column-major mapping from 16-byte array:
  byte[0]  -> state[0][0]
  byte[1]  -> state[1][0]
  byte[2]  -> state[2][0]
  byte[3]  -> state[3][0]
  byte[4]  -> state[0][1]
  ...
  byte[15] -> state[3][3]
"""

import binascii

from .errors import BlockLengthMismatch, MalformedHexInput

BLOCK_SIZE = 16


def bytes_to_state(data: bytes) -> list[list[int]]:
    """
    Convert 16 bytes to 4x4 AES state (column-major).

    Args:
        data: 16 bytes of input

    Returns:
        4x4 list of integers (0-255)
    """
    if len(data) != BLOCK_SIZE:
        raise BlockLengthMismatch(f"Expected 16 bytes, got {len(data)}")

    state = [[0 for _ in range(4)] for _ in range(4)]
    for col in range(4):
        for row in range(4):
            state[row][col] = data[col * 4 + row]
    return state


def state_to_bytes(state: list[list[int]]) -> bytes:
    """
    Convert 4x4 AES state to 16 bytes (column-major).
    """
    result = []
    for col in range(4):
        for row in range(4):
            result.append(state[row][col])
    return bytes(result)


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Convert hex string to bytes.

    Unlike ``bytes.fromhex`` this rejects embedded whitespace, so a hex
    string always maps to exactly ``len(hex_str) // 2`` bytes.

    Args:
        hex_str: Hex string, upper or lower case

    Returns:
        bytes

    Raises:
        MalformedHexInput: On odd length or non-hex characters
    """
    if len(hex_str) % 2:
        raise MalformedHexInput(f"Hex string must have even length, got {len(hex_str)}")
    try:
        return binascii.unhexlify(hex_str)
    except (binascii.Error, ValueError) as e:
        raise MalformedHexInput(f"Invalid hex string: {e}") from e


def bytes_to_hex(data: bytes) -> str:
    """
    Convert bytes to hex string.

    Returns:
        Lowercase hex string
    """
    return data.hex()


def text_to_bytes(message: str) -> bytes:
    """
    Map each character of a string to a single byte.

    This is a byte-oriented codec: every character must have a code point
    of at most 255.

    Raises:
        ValueError: If a character does not fit in one byte
    """
    try:
        return message.encode("latin-1")
    except UnicodeEncodeError as e:
        raise ValueError(
            f"Character {message[e.start]!r} at position {e.start} "
            f"does not fit in one byte"
        ) from e


def bytes_to_text(data: bytes) -> str:
    """
    Map each byte back to the character with the same code point.
    """
    return data.decode("latin-1")


def state_to_hex(state: list[list[int]]) -> str:
    """
    Convert state to hex string (via bytes).
    """
    return bytes_to_hex(state_to_bytes(state))


def format_state_grid(state: list[list[int]]) -> str:
    """
    Format state as a readable 4x4 grid.

    Returns multi-line string like:
      2b 28 ab 09
      7e ae f7 cf
      15 d2 15 4f
      16 a6 88 3c
    """
    lines = []
    for row in range(4):
        row_hex = [f"{state[row][col]:02x}" for col in range(4)]
        lines.append("  " + " ".join(row_hex))
    return "\n".join(lines)


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """
    XOR two byte sequences of equal length.
    """
    if len(a) != len(b):
        raise ValueError(f"Length mismatch: {len(a)} vs {len(b)}")
    return bytes(x ^ y for x, y in zip(a, b))


def copy_state(state: list[list[int]]) -> list[list[int]]:
    """
    Deep copy a 4x4 state.
    """
    return [[state[row][col] for col in range(4)] for row in range(4)]
