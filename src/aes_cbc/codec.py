"""
Public AES-256-CBC entry points.

A sender creates an ``AES256CBC`` instance, which owns a fresh key and IV,
and calls ``encrypt``. The key is then wrapped for the receiver (see
``keywrap``) and travels with the IV next to the ciphertext. The receiver
unwraps the key and calls ``decrypt`` with the key and IV given explicitly;
``decrypt`` never looks at the instance's own key.
"""

from __future__ import annotations

import logging
import secrets

from .cbc import decrypt_message, encrypt_message, pad
from .config import CipherConfig
from .errors import BlockLengthMismatch, IVLengthMismatch, KeyLengthMismatch
from .golden import validate_against_golden
from .key_schedule import KEY_SIZE
from .key_source import KeySource, get_key_source
from .trace import TraceRecorder
from .utils import (
    BLOCK_SIZE,
    bytes_to_hex,
    bytes_to_text,
    hex_to_bytes,
    text_to_bytes,
)

logger = logging.getLogger(__name__)


class AES256CBC:
    """AES-256 in CBC mode with an instance-owned key and IV."""

    def __init__(
        self,
        key_source: KeySource | None = None,
        config: CipherConfig | None = None,
    ):
        """
        Create a cipher with a fresh key and IV.

        Args:
            key_source: Key source to draw the key from; defaults to the
                source named in ``config.key_source``
            config: Optional configuration
        """
        self.config = config or CipherConfig()
        if key_source is None:
            key_source = get_key_source(self.config.key_source)()
        self._key = key_source()
        self._iv = secrets.token_bytes(BLOCK_SIZE)
        self.tracer: TraceRecorder | None = (
            TraceRecorder(verbose=self.config.verbose) if self.config.trace else None
        )
        logger.debug("Created cipher with %r", key_source)

    @property
    def key(self) -> bytes:
        return self._key

    @property
    def iv(self) -> bytes:
        return self._iv

    @property
    def key_hex(self) -> str:
        return bytes_to_hex(self._key)

    @property
    def iv_hex(self) -> str:
        return bytes_to_hex(self._iv)

    def encrypt(self, message: str) -> str:
        """
        Encrypt a text message with this instance's key and IV.

        Args:
            message: Text whose characters all have code points <= 255

        Returns:
            Lowercase hex ciphertext, a multiple of 32 characters
        """
        return self.encrypt_bytes(text_to_bytes(message))

    def encrypt_bytes(self, data: bytes) -> str:
        """Encrypt a binary payload with this instance's key and IV."""
        ciphertext = encrypt_message(self._key, self._iv, data, self.tracer)

        if self.config.verify_blocks:
            correct, error_detail = validate_against_golden(
                self._key, self._iv, pad(data), ciphertext
            )
            if not correct:
                raise RuntimeError(error_detail)

        return bytes_to_hex(ciphertext)

    def decrypt(self, key: str, iv: str, ciphertext: str) -> str:
        """
        Decrypt a hex ciphertext with an explicitly supplied key and IV.

        Args:
            key: 64 hex digit key
            iv: 32 hex digit IV
            ciphertext: Hex ciphertext, a multiple of 32 characters

        Returns:
            The recovered text
        """
        return bytes_to_text(self.decrypt_bytes(key, iv, ciphertext))

    def decrypt_bytes(self, key: str, iv: str, ciphertext: str) -> bytes:
        """Decrypt a hex ciphertext to raw bytes."""
        key_bytes, iv_bytes, data = parse_decrypt_inputs(key, iv, ciphertext)
        return decrypt_message(key_bytes, iv_bytes, data, self.tracer)

    def __repr__(self) -> str:
        # Never show key material
        return f"{self.__class__.__name__}(iv={self.iv_hex!r})"


def parse_decrypt_inputs(key: str, iv: str, ciphertext: str) -> tuple[bytes, bytes, bytes]:
    """
    Parse and validate hex decrypt inputs before any cipher work.

    Raises:
        MalformedHexInput: If any input is not valid hex
        KeyLengthMismatch: If the key is not 32 bytes
        IVLengthMismatch: If the IV is not 16 bytes
        BlockLengthMismatch: If the ciphertext is empty or not a multiple
            of 32 hex characters
    """
    key_bytes = hex_to_bytes(key)
    iv_bytes = hex_to_bytes(iv)
    data = hex_to_bytes(ciphertext)

    if len(key_bytes) != KEY_SIZE:
        raise KeyLengthMismatch(f"Key must be 64 hex chars (32 bytes), got {len(key)} chars")
    if len(iv_bytes) != BLOCK_SIZE:
        raise IVLengthMismatch(f"IV must be 32 hex chars (16 bytes), got {len(iv)} chars")
    if not data or len(data) % BLOCK_SIZE:
        raise BlockLengthMismatch(
            f"Ciphertext must be a non-empty multiple of 32 hex chars, got {len(ciphertext)}"
        )
    return key_bytes, iv_bytes, data
