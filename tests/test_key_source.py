"""Tests for key sources and configuration."""

import hashlib
from datetime import datetime, timezone

import pytest

from aes_cbc.config import CipherConfig
from aes_cbc.errors import KeyLengthMismatch
from aes_cbc.key_source import (
    KEY_SOURCES,
    KeySource,
    RandomKeySource,
    TimestampKeySource,
    get_key_source,
)

FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class TestTimestampKeySource:
    """Tests for the legacy timestamp-derived key."""

    def test_seed_format(self) -> None:
        source = TimestampKeySource(clock=lambda: FIXED_TIME)
        assert source.seed() == "Tue Jan 02 2024 03:04:05 GMT+0000 (UTC)"

    def test_key_is_sha256_of_seed(self) -> None:
        source = TimestampKeySource(clock=lambda: FIXED_TIME)
        expected = hashlib.sha256(source.seed().encode("utf-8")).digest()
        assert source() == expected

    def test_same_second_same_key(self) -> None:
        """The weak construction: identical clock readings collide."""
        a = TimestampKeySource(clock=lambda: FIXED_TIME)
        b = TimestampKeySource(clock=lambda: FIXED_TIME)
        assert a() == b()

    def test_default_clock(self) -> None:
        assert len(TimestampKeySource()()) == 32


class TestRandomKeySource:
    """Tests for the CSPRNG key source."""

    def test_length_and_uniqueness(self) -> None:
        source = RandomKeySource()
        keys = {source() for _ in range(10)}
        assert len(keys) == 10
        assert all(len(k) == 32 for k in keys)


class TestKeySourceBase:
    """Tests for the abstract base class."""

    def test_cannot_instantiate(self) -> None:
        with pytest.raises(TypeError):
            KeySource()  # type: ignore[abstract]

    def test_length_enforced(self) -> None:
        class Short(KeySource):
            name = "short"

            def generate_key(self) -> bytes:
                return bytes(31)

        with pytest.raises(KeyLengthMismatch, match="short key source produced 31 bytes"):
            Short()()

    def test_repr(self) -> None:
        assert repr(RandomKeySource()) == "RandomKeySource(name='random')"


class TestRegistry:
    """Tests for the key source registry."""

    def test_registered(self) -> None:
        assert KEY_SOURCES["timestamp"] is TimestampKeySource
        assert KEY_SOURCES["random"] is RandomKeySource

    def test_get_valid(self) -> None:
        assert get_key_source("random") is RandomKeySource

    def test_get_invalid(self) -> None:
        with pytest.raises(KeyError, match="Unknown key source"):
            get_key_source("dice")


class TestCipherConfig:
    """Tests for CipherConfig validation."""

    def test_defaults(self) -> None:
        config = CipherConfig()
        assert config.key_source == "timestamp"
        assert config.verify_blocks is False
        assert config.trace is False

    def test_unknown_key_source(self) -> None:
        with pytest.raises(ValueError, match="Unknown key_source"):
            CipherConfig(key_source="dice")

    def test_verbose_requires_trace(self) -> None:
        with pytest.raises(ValueError, match="verbose requires trace"):
            CipherConfig(verbose=True)
        assert CipherConfig(trace=True, verbose=True).verbose
