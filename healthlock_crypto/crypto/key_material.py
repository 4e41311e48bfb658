"""
Per-invocation key material: a fresh AES-256 key and a fresh GCM nonce.
"""

import os
from dataclasses import dataclass
from typing import Self

from healthlock_crypto.crypto.secure_bytes import SecureBytes, wipe
from healthlock_crypto.exceptions import RandomnessUnavailableError

AES_KEY_SIZE = 32
GCM_NONCE_SIZE = 12


@dataclass(frozen=True, kw_only=True)
class KeyMaterial:
    """
    Symmetric key and nonce drawn together for a single encryption.

    Use as a context manager so the key is wiped once the envelope is built.
    """

    key: SecureBytes
    nonce: bytes

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.key.clear()


def _random_bytes(size: int) -> bytearray:
    try:
        data = os.urandom(size)
    except (OSError, NotImplementedError) as e:
        msg = f"Secure random source unavailable: {e}"
        raise RandomnessUnavailableError(msg) from e
    if len(data) != size:
        msg = f"Secure random source returned {len(data)} bytes, expected {size}"
        raise RandomnessUnavailableError(msg)
    return bytearray(data)


def generate_key_material() -> KeyMaterial:
    """
    Draw a 256-bit key and a 96-bit nonce from the operating system CSPRNG.

    Returns:
        KeyMaterial owning the key in a SecureBytes container.

    Raises:
        RandomnessUnavailableError: If the CSPRNG cannot produce output.
    """
    raw_key = _random_bytes(AES_KEY_SIZE)
    try:
        key = SecureBytes(raw_key, lock=True)
    finally:
        wipe(raw_key)
    try:
        nonce = bytes(_random_bytes(GCM_NONCE_SIZE))
    except RandomnessUnavailableError:
        key.clear()
        raise
    return KeyMaterial(key=key, nonce=nonce)
