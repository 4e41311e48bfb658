"""
Domain models for HealthLock encryption.

These are immutable (frozen) dataclasses.
"""

from healthlock_crypto.models.envelope import Envelope

__all__ = [
    "Envelope",
]
