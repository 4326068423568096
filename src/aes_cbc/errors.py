"""Input validation errors raised by the cipher core.

All errors subclass ValueError so callers that only care about bad input can
catch the builtin, while callers that need to tell a corrupted payload from a
wrong key can catch the specific class.
"""


class CipherError(ValueError):
    """Base class for all cipher input errors."""


class MalformedHexInput(CipherError):
    """A hex string contained non-hex characters or had odd length."""


class InvalidPadding(CipherError):
    """The trailing pad bytes of a decrypted payload are not valid."""


class KeyLengthMismatch(CipherError):
    """The key is not exactly 32 bytes."""


class BlockLengthMismatch(CipherError):
    """A block or ciphertext is not aligned to the 16-byte block size."""


class IVLengthMismatch(BlockLengthMismatch):
    """The IV is not exactly one block (16 bytes)."""
