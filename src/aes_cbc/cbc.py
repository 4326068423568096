"""
CBC chaining over the AES-256 block engine.

Encryption:
    chain = IV
    for each block P_i:  C_i = E(P_i XOR chain);  chain = C_i

Decryption:
    chain = IV
    for each block C_i:  P_i = D(C_i) XOR chain;  chain = C_i

The plaintext is XORed with the chaining value before the engine's own
round-0 AddRoundKey. Each decrypted block depends only on its own
ciphertext and the previous ciphertext block.
"""

from __future__ import annotations

import logging

from .engine import decrypt_block, encrypt_block
from .errors import BlockLengthMismatch, InvalidPadding, IVLengthMismatch
from .key_schedule import key_expansion
from .trace import TraceRecorder
from .utils import BLOCK_SIZE, xor_bytes

logger = logging.getLogger(__name__)


def pad(data: bytes) -> bytes:
    """
    Pad data to a positive multiple of 16 bytes.

    The pad length is 16 - len % 16, so a full block of padding is added
    when the input is already aligned. Every pad byte holds the pad length.
    """
    pad_len = BLOCK_SIZE - (len(data) % BLOCK_SIZE)
    return data + bytes([pad_len]) * pad_len


def unpad(data: bytes) -> bytes:
    """
    Strip padding added by ``pad``.

    Raises:
        InvalidPadding: If the pad length byte is 0, larger than 16, larger
            than the buffer, or the pad bytes are not all equal to it
    """
    if not data:
        raise InvalidPadding("Cannot unpad an empty buffer")

    pad_len = data[-1]
    if pad_len == 0 or pad_len > BLOCK_SIZE:
        raise InvalidPadding(f"Pad length must be 1..16, got {pad_len}")
    if pad_len > len(data):
        raise InvalidPadding(
            f"Pad length {pad_len} exceeds buffer length {len(data)}"
        )
    if data[-pad_len:] != bytes([pad_len]) * pad_len:
        raise InvalidPadding("Pad bytes do not all match the pad length")
    return data[:-pad_len]


def split_blocks(data: bytes) -> list[bytes]:
    """Split a block-aligned buffer into 16-byte blocks."""
    if len(data) % BLOCK_SIZE:
        raise BlockLengthMismatch(
            f"Data length must be a multiple of 16 bytes, got {len(data)}"
        )
    return [data[i:i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE)]


def _check_iv(iv: bytes) -> None:
    if len(iv) != BLOCK_SIZE:
        raise IVLengthMismatch(f"IV must be 16 bytes, got {len(iv)}")


def cbc_encrypt_blocks(
    key: bytes,
    iv: bytes,
    data: bytes,
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    CBC-encrypt a block-aligned buffer without padding.

    Args:
        key: 32-byte key
        iv: 16-byte initialization vector
        data: Plaintext, length a multiple of 16
        tracer: Optional round trace recorder

    Returns:
        Ciphertext of the same length
    """
    _check_iv(iv)
    blocks = split_blocks(data)
    round_keys = key_expansion(key)

    chain = bytes(iv)
    out = []
    for index, block in enumerate(blocks):
        cipher_block = encrypt_block(xor_bytes(block, chain), round_keys, tracer, index)
        out.append(cipher_block)
        chain = cipher_block
    return b"".join(out)


def cbc_decrypt_blocks(
    key: bytes,
    iv: bytes,
    data: bytes,
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    CBC-decrypt a block-aligned buffer without removing padding.
    """
    _check_iv(iv)
    blocks = split_blocks(data)
    round_keys = key_expansion(key)

    # Block i chains with ciphertext block i-1 (IV for block 0)
    chains = [bytes(iv)] + blocks[:-1]
    out = []
    for index, (block, chain) in enumerate(zip(blocks, chains)):
        intermediate = decrypt_block(block, round_keys, tracer, index)
        out.append(xor_bytes(intermediate, chain))
    return b"".join(out)


def encrypt_message(
    key: bytes,
    iv: bytes,
    message: bytes,
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    Pad and CBC-encrypt an arbitrary message.

    Returns:
        Ciphertext, a positive multiple of 16 bytes
    """
    padded = pad(message)
    logger.debug(
        "Encrypting %d bytes as %d blocks", len(message), len(padded) // BLOCK_SIZE
    )
    return cbc_encrypt_blocks(key, iv, padded, tracer)


def decrypt_message(
    key: bytes,
    iv: bytes,
    ciphertext: bytes,
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    CBC-decrypt a ciphertext and strip its padding.

    Raises:
        BlockLengthMismatch: If the ciphertext is empty or not block aligned
        InvalidPadding: If the recovered padding is malformed
    """
    if not ciphertext:
        raise BlockLengthMismatch("Ciphertext must contain at least one block")
    logger.debug("Decrypting %d blocks", len(ciphertext) // BLOCK_SIZE)
    return unpad(cbc_decrypt_blocks(key, iv, ciphertext, tracer))
