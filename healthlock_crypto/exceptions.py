"""
HealthLock encryption exception hierarchy.

All exceptions inherit from HealthLockCryptoError for easy catching. Each
concrete error carries a machine-readable ``kind`` tag for callers that relay
failures across a process or language boundary.
"""

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Machine-readable failure tags exposed at the operation boundary."""

    SOURCE_UNAVAILABLE = "SourceUnavailable"
    RANDOMNESS_UNAVAILABLE = "RandomnessUnavailable"
    INVALID_PUBLIC_KEY = "InvalidPublicKey"
    KEY_TOO_SMALL_FOR_PAYLOAD = "KeyTooSmallForPayload"
    ENCRYPTION_FAILED = "EncryptionFailed"


class HealthLockCryptoError(Exception):
    """Base exception for all healthlock_crypto errors."""

    kind: ErrorKind | None = None

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message

    def to_dict(self) -> dict[str, str | None]:
        """Serialize as ``{"kind": ..., "message": ...}``."""
        return {
            "kind": self.kind.value if self.kind is not None else None,
            "message": str(self),
        }


class SourceUnavailableError(HealthLockCryptoError):
    """The plaintext byte source could not be opened or read."""

    kind = ErrorKind.SOURCE_UNAVAILABLE

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message, source=source)
        self.source = source


class RandomnessUnavailableError(HealthLockCryptoError):
    """The secure random source failed. Fatal, never retried implicitly."""

    kind = ErrorKind.RANDOMNESS_UNAVAILABLE


class InvalidPublicKeyError(HealthLockCryptoError):
    """Recipient key is malformed, undecodable, or not an RSA key."""

    kind = ErrorKind.INVALID_PUBLIC_KEY


class KeyTooSmallForPayloadError(HealthLockCryptoError):
    """Recipient key cannot wrap the symmetric key under OAEP-SHA256."""

    kind = ErrorKind.KEY_TOO_SMALL_FOR_PAYLOAD

    def __init__(
        self,
        message: str,
        *,
        key_size: int | None = None,
        max_payload: int | None = None,
    ) -> None:
        super().__init__(message, key_size=key_size, max_payload=max_payload)
        self.key_size = key_size
        self.max_payload = max_payload


class EncryptionFailedError(HealthLockCryptoError):
    """A cryptographic primitive rejected its inputs."""

    kind = ErrorKind.ENCRYPTION_FAILED

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message, stage=stage)
        self.stage = stage
