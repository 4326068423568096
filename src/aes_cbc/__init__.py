"""
AES-256-CBC payload cipher.

A from-scratch FIPS-197 AES-256 block cipher driven in CBC mode with
PKCS#7-style padding and a hex wire format.
"""

__version__ = "0.1.0"

# FIPS-197 Appendix C.3 (AES-256)
DEFAULT_KEY_HEX = "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
DEFAULT_PT_HEX = "00112233445566778899aabbccddeeff"
DEFAULT_CT_HEX = "8ea2b7ca516745bfeafc49904b496089"

from .codec import AES256CBC
from .config import CipherConfig
from .errors import (
    BlockLengthMismatch,
    CipherError,
    InvalidPadding,
    IVLengthMismatch,
    KeyLengthMismatch,
    MalformedHexInput,
)
from .key_source import KeySource, RandomKeySource, TimestampKeySource

__all__ = [
    "AES256CBC",
    "CipherConfig",
    "KeySource",
    "RandomKeySource",
    "TimestampKeySource",
    "CipherError",
    "MalformedHexInput",
    "InvalidPadding",
    "KeyLengthMismatch",
    "BlockLengthMismatch",
    "IVLengthMismatch",
]
