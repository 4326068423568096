"""Golden reference AES-256 implementation using PyCryptodome."""

from Crypto.Cipher import AES


def golden_encrypt_block(key: bytes, plaintext: bytes) -> bytes:
    """Encrypt a single block using PyCryptodome as golden reference.

    Args:
        key: 32-byte AES-256 key
        plaintext: 16-byte plaintext block

    Returns:
        16-byte ciphertext block

    Raises:
        ValueError: If key is not 32 bytes or plaintext is not 16 bytes
    """
    if len(key) != 32:
        raise ValueError(f"Key must be 32 bytes, got {len(key)}")
    if len(plaintext) != 16:
        raise ValueError(f"Plaintext must be 16 bytes, got {len(plaintext)}")

    cipher = AES.new(key, AES.MODE_ECB)
    return cipher.encrypt(plaintext)


def golden_cbc_encrypt(key: bytes, iv: bytes, data: bytes) -> bytes:
    """CBC-encrypt an already padded buffer with PyCryptodome."""
    if len(key) != 32:
        raise ValueError(f"Key must be 32 bytes, got {len(key)}")
    cipher = AES.new(key, AES.MODE_CBC, iv=iv)
    return cipher.encrypt(data)


def golden_cbc_decrypt(key: bytes, iv: bytes, data: bytes) -> bytes:
    """CBC-decrypt a buffer with PyCryptodome, leaving padding in place."""
    if len(key) != 32:
        raise ValueError(f"Key must be 32 bytes, got {len(key)}")
    cipher = AES.new(key, AES.MODE_CBC, iv=iv)
    return cipher.decrypt(data)


def validate_against_golden(
    key: bytes, iv: bytes, padded: bytes, candidate_ciphertext: bytes
) -> tuple[bool, str]:
    """Validate a candidate CBC ciphertext against the golden reference.

    Args:
        key: 32-byte AES-256 key
        iv: 16-byte IV
        padded: Padded plaintext that was encrypted
        candidate_ciphertext: Ciphertext to validate

    Returns:
        Tuple of (is_correct, error_detail)
    """
    expected = golden_cbc_encrypt(key, iv, padded)
    if candidate_ciphertext == expected:
        return True, ""
    else:
        return False, (
            f"Ciphertext mismatch: expected {expected.hex()}, "
            f"got {candidate_ciphertext.hex()}"
        )


# FIPS-197 Appendix C.3 and other AES-256 single-block vectors
FIPS_197_TEST_VECTORS = [
    {
        "key": bytes.fromhex(
            "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
        ),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("8ea2b7ca516745bfeafc49904b496089"),
    },
    {
        "key": bytes(32),
        "plaintext": bytes(16),
        "ciphertext": bytes.fromhex("dc95c078a2408989ad48a21492842087"),
    },
]


# NIST SP 800-38A F.2.5 CBC-AES256.Encrypt (no padding)
SP800_38A_CBC_VECTOR = {
    "key": bytes.fromhex(
        "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
    ),
    "iv": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
    "plaintext": bytes.fromhex(
        "6bc1bee22e409f96e93d7e117393172a"
        "ae2d8a571e03ac9c9eb76fac45af8e51"
        "30c81c46a35ce411e5fbc1191a0a52ef"
        "f69f2445df4f9b17ad2b417be66c3710"
    ),
    "ciphertext": bytes.fromhex(
        "f58c4c04d6e5f1ba779eabfb5f7bfbd6"
        "9cfc4e967edb808d679f777bc6702c7d"
        "39f23369a9d9bacfa530e26304231461"
        "b2eb05e2c39be9fcda6c19078c6a9d1b"
    ),
}
