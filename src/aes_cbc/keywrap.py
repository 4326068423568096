"""RSA-OAEP wrapping of symmetric keys for transport between parties.

The sender wraps its AES key with the receiver's public key and stores the
wrapped key next to the ciphertext and IV. The receiver unwraps it with the
private key and passes the raw key to ``AES256CBC.decrypt``.
"""

from __future__ import annotations

from Crypto.Cipher import PKCS1_OAEP
from Crypto.Hash import SHA256
from Crypto.PublicKey import RSA

from .utils import bytes_to_hex, hex_to_bytes


def _import_key(key: RSA.RsaKey | str | bytes) -> RSA.RsaKey:
    if isinstance(key, RSA.RsaKey):
        return key
    return RSA.import_key(key)


def generate_key_pair(bits: int = 2048) -> tuple[str, str]:
    """Generate an RSA key pair.

    Returns:
        Tuple of (public_pem, private_pem)
    """
    private_key = RSA.generate(bits)
    return (
        private_key.publickey().export_key().decode("ascii"),
        private_key.export_key().decode("ascii"),
    )


def wrap_key(raw_key_hex: str, public_key: RSA.RsaKey | str | bytes) -> str:
    """Encrypt a hex key with an RSA public key.

    Args:
        raw_key_hex: Symmetric key as hex
        public_key: RSA public key object or PEM

    Returns:
        Wrapped key as lowercase hex
    """
    cipher = PKCS1_OAEP.new(_import_key(public_key), hashAlgo=SHA256)
    return bytes_to_hex(cipher.encrypt(hex_to_bytes(raw_key_hex)))


def unwrap_key(wrapped_key_hex: str, private_key: RSA.RsaKey | str | bytes) -> str:
    """Recover a hex key wrapped by ``wrap_key``.

    Raises:
        ValueError: If the wrapped key was not made for this private key
    """
    key = _import_key(private_key)
    if not key.has_private():
        raise ValueError("Unwrapping requires an RSA private key")
    cipher = PKCS1_OAEP.new(key, hashAlgo=SHA256)
    return bytes_to_hex(cipher.decrypt(hex_to_bytes(wrapped_key_hex)))
