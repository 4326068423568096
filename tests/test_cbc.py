"""Tests for CBC chaining and padding."""

import logging
import random

import pytest

from aes_cbc.cbc import (
    cbc_decrypt_blocks,
    cbc_encrypt_blocks,
    decrypt_message,
    encrypt_message,
    pad,
    split_blocks,
    unpad,
)
from aes_cbc.engine import encrypt_block
from aes_cbc.errors import (
    BlockLengthMismatch,
    InvalidPadding,
    IVLengthMismatch,
    KeyLengthMismatch,
)
from aes_cbc.golden import SP800_38A_CBC_VECTOR, golden_cbc_decrypt, golden_cbc_encrypt
from aes_cbc.key_schedule import key_expansion
from aes_cbc.utils import xor_bytes

ZERO_KEY = bytes(32)
ZERO_IV = bytes(16)


def random_bytes(n: int, rng: random.Random) -> bytes:
    """Generate n random bytes."""
    return bytes(rng.randint(0, 255) for _ in range(n))


def flip_bit(data: bytes, byte_index: int, bit: int = 0) -> bytes:
    flipped = bytearray(data)
    flipped[byte_index] ^= 1 << bit
    return bytes(flipped)


class TestPadding:
    """Tests for pad and unpad."""

    @pytest.mark.parametrize("length", range(0, 49))
    def test_padding_invariants(self, length: int) -> None:
        """Padded length is a positive multiple of 16 and pad is 1..16."""
        data = bytes(i % 251 for i in range(length))
        padded = pad(data)
        pad_len = len(padded) - length

        assert len(padded) % 16 == 0
        assert len(padded) > 0
        assert 1 <= pad_len <= 16
        assert padded[-pad_len:] == bytes([pad_len]) * pad_len
        assert len(unpad(padded)) == length

    def test_aligned_input_gets_full_block(self) -> None:
        """A block-aligned message gains a whole block of 0x10."""
        assert pad(bytes(16)) == bytes(16) + bytes([0x10]) * 16

    def test_empty_message(self) -> None:
        """Scenario B: empty message pads to sixteen 0x10 bytes."""
        assert pad(b"") == bytes([0x10]) * 16

    def test_hello(self) -> None:
        """Scenario A: 'HELLO' gets eleven 0x0b bytes."""
        assert pad(b"HELLO") == b"HELLO" + bytes([0x0b]) * 11

    def test_zero_pad_byte(self) -> None:
        with pytest.raises(InvalidPadding, match="Pad length must be 1..16, got 0"):
            unpad(bytes(16))

    def test_pad_byte_too_large(self) -> None:
        with pytest.raises(InvalidPadding, match="got 17"):
            unpad(bytes(15) + bytes([17]))

    def test_pad_exceeds_buffer(self) -> None:
        with pytest.raises(InvalidPadding, match="exceeds buffer length"):
            unpad(bytes([5, 5, 5]))

    def test_inconsistent_pad_bytes(self) -> None:
        with pytest.raises(InvalidPadding, match="do not all match"):
            unpad(b"abcdefghijklm" + bytes([1, 3, 3]))

    def test_empty_buffer(self) -> None:
        with pytest.raises(InvalidPadding):
            unpad(b"")


class TestSplitBlocks:
    """Tests for split_blocks."""

    def test_split(self) -> None:
        blocks = split_blocks(bytes(range(48)))
        assert len(blocks) == 3
        assert blocks[1] == bytes(range(16, 32))

    def test_unaligned(self) -> None:
        with pytest.raises(BlockLengthMismatch, match="multiple of 16"):
            split_blocks(bytes(20))


class TestKnownVectors:
    """NIST SP 800-38A F.2.5 / F.2.6 CBC-AES256."""

    def test_encrypt(self) -> None:
        vec = SP800_38A_CBC_VECTOR
        assert cbc_encrypt_blocks(vec["key"], vec["iv"], vec["plaintext"]) == vec["ciphertext"]

    def test_decrypt(self) -> None:
        vec = SP800_38A_CBC_VECTOR
        assert cbc_decrypt_blocks(vec["key"], vec["iv"], vec["ciphertext"]) == vec["plaintext"]


class TestChainOrdering:
    """The chaining value is XORed in before the round-0 AddRoundKey."""

    def test_single_block_matches_manual_chain(self) -> None:
        """One block of CBC equals E(P XOR IV)."""
        rng = random.Random(11)
        key = random_bytes(32, rng)
        iv = random_bytes(16, rng)
        block = random_bytes(16, rng)

        expected = encrypt_block(xor_bytes(block, iv), key_expansion(key))
        assert cbc_encrypt_blocks(key, iv, block) == expected

    def test_second_block_chains_on_first_ciphertext(self) -> None:
        rng = random.Random(12)
        key = random_bytes(32, rng)
        iv = random_bytes(16, rng)
        data = random_bytes(32, rng)
        round_keys = key_expansion(key)

        ct = cbc_encrypt_blocks(key, iv, data)
        c0 = encrypt_block(xor_bytes(data[:16], iv), round_keys)
        c1 = encrypt_block(xor_bytes(data[16:], c0), round_keys)
        assert ct == c0 + c1

    def test_zero_iv_single_block_is_plain_aes(self) -> None:
        """With an all-zero IV the first block is the FIPS-197 result."""
        key = bytes(range(32))
        block = bytes.fromhex("00112233445566778899aabbccddeeff")
        ct = cbc_encrypt_blocks(key, ZERO_IV, block)
        assert ct.hex() == "8ea2b7ca516745bfeafc49904b496089"


class TestScenarios:
    """End-to-end message scenarios."""

    def test_hello_zero_key(self) -> None:
        """Scenario A: 'HELLO' under zero key/IV is one block and round-trips."""
        ct = encrypt_message(ZERO_KEY, ZERO_IV, b"HELLO")
        assert len(ct) == 16
        assert ct == golden_cbc_encrypt(ZERO_KEY, ZERO_IV, b"HELLO" + bytes([0x0b]) * 11)
        assert decrypt_message(ZERO_KEY, ZERO_IV, ct) == b"HELLO"

    def test_empty_message(self) -> None:
        """Scenario B: the empty message is one block of padding."""
        ct = encrypt_message(ZERO_KEY, ZERO_IV, b"")
        assert len(ct) == 16
        assert golden_cbc_decrypt(ZERO_KEY, ZERO_IV, ct) == bytes([0x10]) * 16
        assert decrypt_message(ZERO_KEY, ZERO_IV, ct) == b""

    def test_twenty_bytes(self) -> None:
        """Scenario C: 20 bytes become two blocks and round-trip."""
        message = bytes(range(20))
        ct = encrypt_message(ZERO_KEY, ZERO_IV, message)
        assert len(ct) == 32
        assert decrypt_message(ZERO_KEY, ZERO_IV, ct) == message


class TestRoundTrip:
    """Randomized round trips and library comparison."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_messages(self, seed: int) -> None:
        rng = random.Random(seed)
        key = random_bytes(32, rng)
        iv = random_bytes(16, rng)
        message = random_bytes(rng.randint(0, 80), rng)

        ct = encrypt_message(key, iv, message)
        assert ct == golden_cbc_encrypt(key, iv, pad(message))
        assert decrypt_message(key, iv, ct) == message

    def test_library_ciphertext_decrypts(self) -> None:
        """Ciphertext produced by PyCryptodome decrypts here."""
        rng = random.Random(99)
        key = random_bytes(32, rng)
        iv = random_bytes(16, rng)
        message = b"attack at dawn, bring snacks"
        ct = golden_cbc_encrypt(key, iv, pad(message))
        assert decrypt_message(key, iv, ct) == message


class TestAvalanche:
    """Error propagation properties of CBC."""

    def setup_method(self) -> None:
        rng = random.Random(5)
        self.key = random_bytes(32, rng)
        self.iv = random_bytes(16, rng)
        self.data = random_bytes(64, rng)

    def test_plaintext_flip_changes_later_blocks_only(self) -> None:
        """Flipping a bit in plaintext block 1 changes ciphertext blocks 1..3."""
        base = split_blocks(cbc_encrypt_blocks(self.key, self.iv, self.data))
        changed = split_blocks(
            cbc_encrypt_blocks(self.key, self.iv, flip_bit(self.data, 16 + 3))
        )
        assert changed[0] == base[0]
        for i in range(1, 4):
            assert changed[i] != base[i]

    def test_ciphertext_flip_corrupts_two_blocks(self) -> None:
        """Flipping a bit in ciphertext block 1 garbles block 1 and flips one bit of block 2."""
        ct = cbc_encrypt_blocks(self.key, self.iv, self.data)
        tampered = flip_bit(ct, 16 + 6, bit=2)
        base = split_blocks(self.data)
        out = split_blocks(cbc_decrypt_blocks(self.key, self.iv, tampered))

        assert out[0] == base[0]
        assert out[1] != base[1]
        assert out[2] == flip_bit(base[2], 6, bit=2)
        assert out[3] == base[3]


class TestValidation:
    """Input validation before chaining begins."""

    def test_bad_key(self) -> None:
        with pytest.raises(KeyLengthMismatch):
            encrypt_message(bytes(16), ZERO_IV, b"x")

    def test_bad_iv(self) -> None:
        with pytest.raises(IVLengthMismatch, match="IV must be 16 bytes"):
            encrypt_message(ZERO_KEY, bytes(8), b"x")
        with pytest.raises(BlockLengthMismatch):
            decrypt_message(ZERO_KEY, bytes(17), bytes(16))

    def test_unaligned_ciphertext(self) -> None:
        with pytest.raises(BlockLengthMismatch):
            decrypt_message(ZERO_KEY, ZERO_IV, bytes(20))

    def test_empty_ciphertext(self) -> None:
        with pytest.raises(BlockLengthMismatch, match="at least one block"):
            decrypt_message(ZERO_KEY, ZERO_IV, b"")

    def test_wrong_key_fails_padding_or_differs(self) -> None:
        """Decrypting with the wrong key never silently returns the message."""
        ct = encrypt_message(ZERO_KEY, ZERO_IV, b"HELLO")
        wrong_key = bytes([1]) + bytes(31)
        try:
            result = decrypt_message(wrong_key, ZERO_IV, ct)
        except InvalidPadding:
            return
        assert result != b"HELLO"


class TestStatelessness:
    """A failed call leaves later calls unaffected."""

    def test_failure_then_success(self) -> None:
        with pytest.raises(InvalidPadding):
            decrypt_message(ZERO_KEY, ZERO_IV, cbc_encrypt_blocks(ZERO_KEY, ZERO_IV, bytes(16)))
        ct = encrypt_message(ZERO_KEY, ZERO_IV, b"after")
        assert decrypt_message(ZERO_KEY, ZERO_IV, ct) == b"after"


class TestLogging:
    """Debug logging of message sizes."""

    def test_debug_logs_block_count(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="aes_cbc.cbc"):
            encrypt_message(ZERO_KEY, ZERO_IV, b"HELLO")
        assert "Encrypting 5 bytes as 1 blocks" in caplog.text
