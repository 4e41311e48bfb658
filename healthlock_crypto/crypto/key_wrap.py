"""
RSA-OAEP wrapping of the per-file AES key.

Recipient keys arrive as base64 of a DER X.509 SubjectPublicKeyInfo, the
format the TEE node publishes when it registers. Wrapping always uses OAEP with
SHA-256 for both the label hash and MGF1.
"""

import base64
import binascii

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from healthlock_crypto.crypto.secure_bytes import SecureBytes
from healthlock_crypto.exceptions import (
    EncryptionFailedError,
    InvalidPublicKeyError,
    KeyTooSmallForPayloadError,
)

_OAEP_HASH_SIZE = hashes.SHA256.digest_size


def _oaep_padding() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def max_wrap_length(key_size_bits: int) -> int:
    """Largest message, in bytes, that RSA-OAEP-SHA256 can encrypt under a modulus of this size."""
    return max((key_size_bits + 7) // 8 - 2 * _OAEP_HASH_SIZE - 2, 0)


def load_recipient_key(encoded: str) -> rsa.RSAPublicKey:
    """
    Decode a base64 DER SubjectPublicKeyInfo into an RSA public key.

    Args:
        encoded: Standard base64 (padded) of the DER-encoded key.

    Returns:
        The recipient's RSA public key.

    Raises:
        InvalidPublicKeyError: If the string is not base64, not DER SPKI, or not RSA.
    """
    if not isinstance(encoded, str) or not encoded.strip():
        msg = "Public key must be a non-empty base64 string"
        raise InvalidPublicKeyError(msg)

    try:
        der = base64.b64decode(encoded.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        msg = f"Public key is not valid base64: {e}"
        raise InvalidPublicKeyError(msg) from e

    try:
        public_key = serialization.load_der_public_key(der)
    except (ValueError, TypeError) as e:
        msg = f"Public key is not a DER SubjectPublicKeyInfo: {e}"
        raise InvalidPublicKeyError(msg) from e
    except UnsupportedAlgorithm as e:
        msg = f"Public key uses an unsupported algorithm: {e}"
        raise InvalidPublicKeyError(msg) from e

    if not isinstance(public_key, rsa.RSAPublicKey):
        msg = f"Expected an RSA public key, got {type(public_key).__name__}"
        raise InvalidPublicKeyError(msg)

    # load_der_public_key also accepts bare PKCS#1 RSAPublicKey structures.
    spki = public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    if spki != der:
        msg = "Public key is not a DER SubjectPublicKeyInfo"
        raise InvalidPublicKeyError(msg)
    return public_key


def export_public_key(public_key: rsa.RSAPublicKey) -> str:
    """Encode an RSA public key in the format accepted by ``load_recipient_key``."""
    der = public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(der).decode("ascii")


def wrap_key(
    key: SecureBytes,
    public_key: rsa.RSAPublicKey,
    *,
    min_key_size: int | None = None,
) -> bytes:
    """
    Encrypt the symmetric key for the recipient with RSA-OAEP-SHA256.

    Args:
        key: Raw AES key to protect.
        public_key: Recipient RSA public key.
        min_key_size: Smallest modulus, in bits, accepted for the recipient, or
            None to accept any modulus with enough OAEP capacity.

    Returns:
        Wrapped key, exactly ``public_key.key_size // 8`` bytes long.

    Raises:
        KeyTooSmallForPayloadError: If the modulus is below ``min_key_size`` or
            cannot carry ``len(key)`` bytes under OAEP-SHA256.
        EncryptionFailedError: If the RSA primitive fails.
    """
    key_size = public_key.key_size
    capacity = max_wrap_length(key_size)

    if min_key_size is not None and key_size < min_key_size:
        msg = f"RSA key of {key_size} bits is below the required minimum of {min_key_size}"
        raise KeyTooSmallForPayloadError(msg, key_size=key_size, max_payload=capacity)
    if len(key) > capacity:
        msg = f"RSA-OAEP-SHA256 with a {key_size}-bit key wraps at most {capacity} bytes, got {len(key)}"
        raise KeyTooSmallForPayloadError(msg, key_size=key_size, max_payload=capacity)

    try:
        with key.view() as buffer:
            return public_key.encrypt(buffer, _oaep_padding())
    except (ValueError, TypeError, RuntimeError) as e:
        msg = f"RSA-OAEP key wrapping failed: {e}"
        raise EncryptionFailedError(msg, stage="key_wrap") from e
