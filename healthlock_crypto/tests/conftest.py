import base64
from collections.abc import Callable

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from healthlock_crypto.models.envelope import Envelope


def _spki_b64(public_key: object) -> str:
    der = public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(der).decode("ascii")


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_key_b64(rsa_private_key: rsa.RSAPrivateKey) -> str:
    return _spki_b64(rsa_private_key.public_key())


@pytest.fixture(scope="session")
def rsa_pkcs1_public_key_b64(rsa_private_key: rsa.RSAPrivateKey) -> str:
    """The same key as a bare PKCS#1 RSAPublicKey, without the SPKI wrapper."""
    der = rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.PKCS1,
    )
    return base64.b64encode(der).decode("ascii")


@pytest.fixture(scope="session")
def small_rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=1024)


@pytest.fixture(scope="session")
def small_rsa_public_key_b64(small_rsa_private_key: rsa.RSAPrivateKey) -> str:
    return _spki_b64(small_rsa_private_key.public_key())


@pytest.fixture(scope="session")
def ec_public_key_b64() -> str:
    return _spki_b64(ec.generate_private_key(ec.SECP256R1()).public_key())


@pytest.fixture
def open_envelope() -> Callable[[Envelope, rsa.RSAPrivateKey], bytes]:
    """Reference decryptor mirroring the TEE node: RSA-OAEP-SHA256 then AES-256-GCM."""

    def _open(envelope: Envelope, private_key: rsa.RSAPrivateKey) -> bytes:
        aes_key = private_key.decrypt(
            envelope.raw_encrypted_aes_key,
            padding.OAEP(
                mgf=padding.MGF1(algorithm=hashes.SHA256()),
                algorithm=hashes.SHA256(),
                label=None,
            ),
        )
        return AESGCM(aes_key).decrypt(envelope.raw_nonce, envelope.raw_ciphertext, None)

    return _open
