"""
HealthLock encryptor configuration.
"""

from dataclasses import dataclass

# Smallest RSA modulus accepted as a configured floor, regardless of caller input.
_MIN_ALLOWED_RSA_KEY_SIZE = 1024


@dataclass(frozen=True, kw_only=True)
class EncryptorConfig:
    """
    Attributes:
        padded_base64: Emit envelope fields with standard ``=`` padding.
        min_rsa_key_size: Smallest recipient RSA modulus, in bits, that is accepted,
            or None to accept any key that can carry the AES key under OAEP.
        max_plaintext_size: Upper bound on source size in bytes, or None for no limit.
        max_concurrent_operations: Maximum number of async encryptions in flight.
    """

    padded_base64: bool = True
    min_rsa_key_size: int | None = None
    max_plaintext_size: int | None = None
    max_concurrent_operations: int = 4

    def __post_init__(self) -> None:
        min_rsa_key_size = self.min_rsa_key_size
        if min_rsa_key_size is not None and min_rsa_key_size < _MIN_ALLOWED_RSA_KEY_SIZE:
            msg = f"min_rsa_key_size must be at least {_MIN_ALLOWED_RSA_KEY_SIZE}"
            raise ValueError(msg)
        if self.max_plaintext_size is not None and self.max_plaintext_size <= 0:
            msg = "max_plaintext_size must be positive"
            raise ValueError(msg)
        if self.max_concurrent_operations <= 0:
            msg = "max_concurrent_operations must be positive"
            raise ValueError(msg)
