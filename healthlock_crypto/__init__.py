"""
HealthLock record encryption.

Hybrid encryption of health records for a TEE node: AES-256-GCM for the file,
RSA-OAEP-SHA256 for the AES key.

Example:
    ```python
    from healthlock_crypto import HybridEncryptor

    encryptor = HybridEncryptor()
    envelope = await encryptor.encrypt_file("/records/scan.jpg", tee_public_key_b64)

    payload = envelope.to_json()
    # {"encrypted_aes_key": "...", "ciphertext": "...", "nonce": "..."}
    ```
"""

from healthlock_crypto.config import EncryptorConfig
from healthlock_crypto.exceptions import (
    EncryptionFailedError,
    ErrorKind,
    HealthLockCryptoError,
    InvalidPublicKeyError,
    KeyTooSmallForPayloadError,
    RandomnessUnavailableError,
    SourceUnavailableError,
)
from healthlock_crypto.models.envelope import Envelope
from healthlock_crypto.services.encryption_service import HybridEncryptor
from healthlock_crypto.sources import ByteSource, BytesSource, FileSource

__version__ = "0.1.0"

__all__ = [
    # Main service
    "HybridEncryptor",
    "EncryptorConfig",
    # Models
    "Envelope",
    # Sources
    "ByteSource",
    "BytesSource",
    "FileSource",
    # Exceptions
    "ErrorKind",
    "HealthLockCryptoError",
    "SourceUnavailableError",
    "RandomnessUnavailableError",
    "InvalidPublicKeyError",
    "KeyTooSmallForPayloadError",
    "EncryptionFailedError",
]
