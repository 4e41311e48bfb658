"""
Hybrid encryption service for HealthLock records.

Encrypts a record for a TEE node: AES-256-GCM for the payload, RSA-OAEP-SHA256
for the AES key. This is the only boundary callers should use; every failure
leaving it is a HealthLockCryptoError with a ``kind`` tag.
"""

import asyncio
from collections.abc import Iterable
from pathlib import Path

import structlog

from healthlock_crypto.config import EncryptorConfig
from healthlock_crypto.crypto.aead import seal_payload
from healthlock_crypto.crypto.envelope import assemble_envelope
from healthlock_crypto.crypto.key_material import generate_key_material
from healthlock_crypto.crypto.key_wrap import load_recipient_key, wrap_key
from healthlock_crypto.exceptions import (
    EncryptionFailedError,
    HealthLockCryptoError,
    SourceUnavailableError,
)
from healthlock_crypto.models.envelope import Envelope
from healthlock_crypto.sources import ByteSource, Locator, resolve_source

logger = structlog.get_logger(__name__)


class HybridEncryptor:
    """
    Service producing Envelopes from plaintext and a recipient public key.

    Instances hold no key material between calls and can be shared across
    tasks. The async methods bound the number of concurrent encryptions.

    Example:
        ```python
        encryptor = HybridEncryptor()
        envelope = await encryptor.encrypt_file("scan.jpg", tee_public_key)
        upload(envelope.to_json())
        ```
    """

    def __init__(self, config: EncryptorConfig | None = None) -> None:
        """
        Args:
            config: Encryptor configuration. Uses defaults if not provided.
        """
        self._config = config or EncryptorConfig()
        self._semaphore = asyncio.Semaphore(self._config.max_concurrent_operations)

    @property
    def config(self) -> EncryptorConfig:
        return self._config

    def seal(self, plaintext: bytes, public_key: str) -> Envelope:
        """
        Encrypt plaintext bytes for the holder of ``public_key``.

        Args:
            plaintext: Payload to encrypt, may be empty.
            public_key: Base64 DER SubjectPublicKeyInfo of the recipient RSA key.

        Returns:
            A complete Envelope.

        Raises:
            InvalidPublicKeyError: If the recipient key cannot be decoded.
            RandomnessUnavailableError: If the CSPRNG fails.
            KeyTooSmallForPayloadError: If the recipient key cannot wrap the AES key.
            EncryptionFailedError: If a cryptographic primitive fails.
        """
        try:
            return self._seal(plaintext, public_key)
        except HealthLockCryptoError as e:
            logger.error("Encryption failed", kind=str(e.kind), error_type=type(e).__name__)
            raise
        except Exception as e:
            logger.error("Encryption failed", error_type=type(e).__name__)
            msg = f"Unexpected failure during encryption: {type(e).__name__}"
            raise EncryptionFailedError(msg) from e

    def _seal(self, plaintext: bytes, public_key: str) -> Envelope:
        recipient = load_recipient_key(public_key)
        logger.debug(
            "Encrypting record",
            plaintext_size=len(plaintext),
            key_size=recipient.key_size,
        )

        with generate_key_material() as material:
            ciphertext = seal_payload(material.key, material.nonce, plaintext)
            wrapped_key = wrap_key(
                material.key, recipient, min_key_size=self._config.min_rsa_key_size
            )
            envelope = assemble_envelope(
                wrapped_key,
                ciphertext,
                material.nonce,
                padded=self._config.padded_base64,
            )

        logger.info(
            "Envelope created",
            plaintext_size=len(plaintext),
            ciphertext_size=len(ciphertext),
            wrapped_key_size=len(wrapped_key),
        )
        return envelope

    async def encrypt_file(self, locator: Locator | ByteSource, public_key: str) -> Envelope:
        """
        Read a source and encrypt it without blocking the event loop.

        The source is read before any key material is generated, so an
        unreadable source fails fast. Once the worker thread starts, the
        encryption runs to completion even if the awaiting task is cancelled.

        Args:
            locator: File path, ``file://`` URI, raw bytes, or a ByteSource.
            public_key: Base64 DER SubjectPublicKeyInfo of the recipient RSA key.

        Returns:
            A complete Envelope.

        Raises:
            SourceUnavailableError: If the source cannot be read.
            HealthLockCryptoError: Any error raised by ``seal``.
        """
        async with self._semaphore:
            source = resolve_source(locator)
            logger.debug("Reading source", source=source.describe())
            try:
                plaintext = await asyncio.to_thread(source.read, self._config.max_plaintext_size)
            except HealthLockCryptoError:
                raise
            except Exception as e:
                logger.error("Source read failed", error_type=type(e).__name__)
                msg = f"Unable to read source: {type(e).__name__}"
                raise SourceUnavailableError(msg, source=source.describe()) from e
            return await asyncio.to_thread(self.seal, plaintext, public_key)

    async def encrypt_file_to(
        self,
        locator: Locator | ByteSource,
        public_key: str,
        destination: Path,
    ) -> Envelope:
        """
        Encrypt a source and write the envelope JSON to ``destination``.

        Nothing is written when encryption fails.

        Args:
            locator: File path, ``file://`` URI, raw bytes, or a ByteSource.
            public_key: Base64 DER SubjectPublicKeyInfo of the recipient RSA key.
            destination: Output path; parent directories are created.

        Returns:
            The Envelope that was written.

        Raises:
            EncryptionFailedError: If the envelope cannot be written, with
                ``stage="output"``.
            HealthLockCryptoError: Any error raised by ``encrypt_file``.
        """
        envelope = await self.encrypt_file(locator, public_key)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(destination.write_text, envelope.to_json(), "utf-8")
        except OSError as e:
            logger.error(
                "Envelope write failed",
                destination=str(destination),
                error_type=type(e).__name__,
            )
            msg = f"Unable to write envelope: {e.strerror or e}"
            raise EncryptionFailedError(msg, stage="output") from e
        logger.info("Envelope saved", destination=str(destination))
        return envelope

    async def encrypt_many(
        self, items: Iterable[tuple[Locator | ByteSource, str]]
    ) -> list[Envelope | HealthLockCryptoError]:
        """
        Encrypt several independent sources concurrently.

        Args:
            items: Pairs of (locator, public_key).

        Returns:
            One entry per item, in input order: the Envelope or the error it failed with.
        """
        results = await asyncio.gather(
            *(self.encrypt_file(locator, public_key) for locator, public_key in items),
            return_exceptions=True,
        )
        outcomes: list[Envelope | HealthLockCryptoError] = []
        for result in results:
            if isinstance(result, (Envelope, HealthLockCryptoError)):
                outcomes.append(result)
            elif isinstance(result, Exception):
                msg = f"Unexpected failure during encryption: {type(result).__name__}"
                error = EncryptionFailedError(msg)
                error.__cause__ = result
                outcomes.append(error)
            else:
                raise result
        return outcomes
