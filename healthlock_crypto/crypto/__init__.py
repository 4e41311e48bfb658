"""
Cryptographic building blocks for HealthLock record encryption.

This module provides:
- Per-invocation key and nonce generation
- AES-256-GCM payload encryption
- RSA-OAEP-SHA256 key wrapping
- Envelope encoding
- Secure memory handling
"""

from healthlock_crypto.crypto.aead import GCM_TAG_SIZE, seal_payload
from healthlock_crypto.crypto.envelope import assemble_envelope, encode_field
from healthlock_crypto.crypto.key_material import (
    AES_KEY_SIZE,
    GCM_NONCE_SIZE,
    KeyMaterial,
    generate_key_material,
)
from healthlock_crypto.crypto.key_wrap import (
    export_public_key,
    load_recipient_key,
    max_wrap_length,
    wrap_key,
)
from healthlock_crypto.crypto.secure_bytes import SecureBytes

__all__ = [
    "AES_KEY_SIZE",
    "GCM_NONCE_SIZE",
    "GCM_TAG_SIZE",
    "KeyMaterial",
    "SecureBytes",
    "assemble_envelope",
    "encode_field",
    "export_public_key",
    "generate_key_material",
    "load_recipient_key",
    "max_wrap_length",
    "seal_payload",
    "wrap_key",
]
