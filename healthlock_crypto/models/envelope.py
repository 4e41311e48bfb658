"""
Envelope domain model.
"""

import base64
import json
from dataclasses import asdict, dataclass


def _b64decode(value: str) -> bytes:
    return base64.b64decode(value + "=" * (-len(value) % 4), validate=True)


@dataclass(frozen=True, kw_only=True)
class Envelope:
    """
    Hybrid-encrypted record ready for upload.

    All three fields are standard-alphabet base64 without line breaks, and all
    three come from the same encryption call.

    Attributes:
        encrypted_aes_key: AES key wrapped with RSA-OAEP-SHA256 for the recipient.
        ciphertext: AES-256-GCM output with the 16-byte tag appended.
        nonce: 12-byte GCM nonce.
    """

    encrypted_aes_key: str
    ciphertext: str
    nonce: str

    @property
    def raw_encrypted_aes_key(self) -> bytes:
        return _b64decode(self.encrypted_aes_key)

    @property
    def raw_ciphertext(self) -> bytes:
        return _b64decode(self.ciphertext)

    @property
    def raw_nonce(self) -> bytes:
        return _b64decode(self.nonce)

    def to_dict(self) -> dict[str, str]:
        """Wire object consumed by the TEE decryptor."""
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
