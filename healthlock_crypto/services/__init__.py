"""
Business logic services for HealthLock encryption.
"""

from healthlock_crypto.services.encryption_service import HybridEncryptor

__all__ = [
    "HybridEncryptor",
]
