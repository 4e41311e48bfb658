"""
AES-256-GCM payload encryption.

The ciphertext carries the 16-byte authentication tag appended at the end, the
layout produced by ``AESGCM.encrypt`` and expected by Go's ``cipher.AEAD.Open``
on the decrypting side. No associated data is bound.
"""

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from healthlock_crypto.crypto.key_material import AES_KEY_SIZE, GCM_NONCE_SIZE
from healthlock_crypto.crypto.secure_bytes import SecureBytes
from healthlock_crypto.exceptions import EncryptionFailedError

GCM_TAG_SIZE = 16


def seal_payload(key: SecureBytes, nonce: bytes, plaintext: bytes) -> bytes:
    """
    Encrypt and authenticate a plaintext.

    Args:
        key: 32-byte AES key.
        nonce: 12-byte nonce, never reused with the same key.
        plaintext: Payload to protect, may be empty.

    Returns:
        Ciphertext followed by the GCM tag (``len(plaintext) + 16`` bytes).

    Raises:
        EncryptionFailedError: If the key or nonce is malformed or the cipher rejects the input.
    """
    if len(key) != AES_KEY_SIZE:
        msg = f"AES key must be {AES_KEY_SIZE} bytes, got {len(key)}"
        raise EncryptionFailedError(msg, stage="aead")
    if len(nonce) != GCM_NONCE_SIZE:
        msg = f"GCM nonce must be {GCM_NONCE_SIZE} bytes, got {len(nonce)}"
        raise EncryptionFailedError(msg, stage="aead")

    try:
        with key.view() as buffer:
            return AESGCM(buffer).encrypt(nonce, plaintext, None)
    except (ValueError, OverflowError, TypeError, RuntimeError) as e:
        msg = f"AES-GCM encryption failed: {e}"
        raise EncryptionFailedError(msg, stage="aead") from e
