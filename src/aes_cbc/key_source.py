"""Key sources for new cipher instances.

The cipher core never chooses how a key is made; it asks a KeySource. The
default ``TimestampKeySource`` hashes a time-derived string, which has very
little entropy. It is kept so existing deployments see the same behaviour;
use ``RandomKeySource`` for new data.
"""

from __future__ import annotations

import logging
import secrets
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable

from Crypto.Hash import SHA256

from .errors import KeyLengthMismatch
from .key_schedule import KEY_SIZE

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%a %b %d %Y %H:%M:%S GMT%z (%Z)"


class KeySource(ABC):
    """Abstract base class for AES-256 key sources."""

    name: str = "base"
    description: str = "Base key source (abstract)"

    @abstractmethod
    def generate_key(self) -> bytes:
        """Return a fresh 32-byte key."""
        raise NotImplementedError

    def __call__(self) -> bytes:
        key = self.generate_key()
        if len(key) != KEY_SIZE:
            raise KeyLengthMismatch(
                f"{self.name} key source produced {len(key)} bytes, expected 32"
            )
        return key

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class TimestampKeySource(KeySource):
    """Derive the key as SHA-256 of the current local time string.

    Two instances created within the same second get the same key.
    """

    name = "timestamp"
    description = "SHA-256 of the local time string (weak, legacy behaviour)"

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now().astimezone())

    def seed(self) -> str:
        """The time-derived string that gets hashed."""
        return self._clock().strftime(TIMESTAMP_FORMAT)

    def generate_key(self) -> bytes:
        logger.debug("Deriving key from timestamp seed")
        return SHA256.new(self.seed().encode("utf-8")).digest()


class RandomKeySource(KeySource):
    """Draw the key from the operating system CSPRNG."""

    name = "random"
    description = "32 bytes from the OS random number generator"

    def generate_key(self) -> bytes:
        return secrets.token_bytes(KEY_SIZE)


# Registry of available key sources
KEY_SOURCES: dict[str, type[KeySource]] = {
    "timestamp": TimestampKeySource,
    "random": RandomKeySource,
}


def get_key_source(name: str) -> type[KeySource]:
    """Get key source class by name.

    Raises:
        KeyError: If key source not found
    """
    if name not in KEY_SOURCES:
        available = ", ".join(KEY_SOURCES.keys())
        raise KeyError(f"Unknown key source '{name}'. Available: {available}")
    return KEY_SOURCES[name]
