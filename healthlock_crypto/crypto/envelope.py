"""
Envelope assembly: text-safe encoding of the three encryption outputs.
"""

import base64

from healthlock_crypto.models.envelope import Envelope


def encode_field(data: bytes, *, padded: bool = True) -> str:
    """Standard-alphabet base64 with no line wrapping, optionally without ``=`` padding."""
    encoded = base64.b64encode(data).decode("ascii")
    return encoded if padded else encoded.rstrip("=")


def assemble_envelope(
    wrapped_key: bytes,
    ciphertext: bytes,
    nonce: bytes,
    *,
    padded: bool = True,
) -> Envelope:
    """
    Encode the wrapped key, ciphertext and nonce of one invocation.

    Args:
        wrapped_key: RSA-OAEP output.
        ciphertext: AES-GCM output including the tag.
        nonce: GCM nonce used for ``ciphertext``.
        padded: Keep base64 ``=`` padding on each field.

    Returns:
        The immutable Envelope.
    """
    return Envelope(
        encrypted_aes_key=encode_field(wrapped_key, padded=padded),
        ciphertext=encode_field(ciphertext, padded=padded),
        nonce=encode_field(nonce, padded=padded),
    )
