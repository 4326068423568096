"""Configuration for cipher instances."""

from __future__ import annotations

from dataclasses import dataclass

from .key_source import KEY_SOURCES


@dataclass
class CipherConfig:
    """Configuration object for an ``AES256CBC`` instance."""

    # Registry name of the key source used when no source object is given
    key_source: str = "timestamp"

    # Re-encrypt every payload with the golden reference and fail on mismatch
    verify_blocks: bool = False

    # Record round-by-round state for every block (slow, debugging only)
    trace: bool = False

    # Print each trace record as it is made (requires trace=True)
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.key_source not in KEY_SOURCES:
            available = ", ".join(KEY_SOURCES.keys())
            raise ValueError(
                f"Unknown key_source '{self.key_source}'. Available: {available}"
            )
        if self.verbose and not self.trace:
            raise ValueError("verbose requires trace=True")
