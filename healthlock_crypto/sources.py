"""
Plaintext byte sources.

A source turns a locator into the full plaintext. Files are opened in a
``with`` block so the handle is released on success, failure and early exit.
"""

import os
from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import unquote, urlparse

import structlog

from healthlock_crypto.exceptions import SourceUnavailableError

logger = structlog.get_logger(__name__)

Locator = str | os.PathLike[str] | bytes | bytearray | memoryview


@runtime_checkable
class ByteSource(Protocol):
    """Protocol for anything that can produce the plaintext to encrypt."""

    def read(self, max_size: int | None = None) -> bytes:
        """
        Read the whole source.

        Args:
            max_size: Refuse sources larger than this many bytes.

        Raises:
            SourceUnavailableError: If the source cannot be read or is too large.
        """
        ...

    def describe(self) -> str:
        """Human-readable identifier used in errors and logs."""
        ...


class BytesSource:
    """In-memory source for callers that already hold the plaintext."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)

    def read(self, max_size: int | None = None) -> bytes:
        if max_size is not None and len(self._data) > max_size:
            msg = f"Plaintext of {len(self._data)} bytes exceeds limit of {max_size}"
            raise SourceUnavailableError(msg, source=self.describe())
        return self._data

    def describe(self) -> str:
        return f"<memory:{len(self._data)} bytes>"


class FileSource:
    """Local file, given as a path or a ``file://`` URI."""

    def __init__(self, locator: str | os.PathLike[str]) -> None:
        self._path = _to_path(locator)

    @property
    def path(self) -> Path:
        return self._path

    def read(self, max_size: int | None = None) -> bytes:
        source = self.describe()
        try:
            with self._path.open("rb") as f:
                if max_size is None:
                    return f.read()
                size = os.fstat(f.fileno()).st_size
                if size > max_size:
                    msg = f"Plaintext of {size} bytes exceeds limit of {max_size}"
                    raise SourceUnavailableError(msg, source=source)
                data = f.read(max_size + 1)
        except SourceUnavailableError:
            raise
        except OSError as e:
            logger.warning("Source read failed", source=source, error_type=type(e).__name__)
            msg = f"Unable to read source: {e.strerror or e}"
            raise SourceUnavailableError(msg, source=source) from e

        # The file may have grown between fstat and read.
        if len(data) > max_size:
            msg = f"Plaintext exceeds limit of {max_size} bytes"
            raise SourceUnavailableError(msg, source=source)
        return data

    def describe(self) -> str:
        return str(self._path)


def _to_path(locator: str | os.PathLike[str]) -> Path:
    if isinstance(locator, str) and locator.startswith("file://"):
        parsed = urlparse(locator)
        if parsed.netloc not in ("", "localhost"):
            msg = f"Remote file URIs are not supported: {locator}"
            raise SourceUnavailableError(msg, source=locator)
        return Path(unquote(parsed.path))
    if isinstance(locator, str) and "://" in locator:
        msg = f"Unsupported source scheme: {locator.split('://', 1)[0]}"
        raise SourceUnavailableError(msg, source=locator)
    return Path(locator)


def resolve_source(locator: Locator | ByteSource) -> ByteSource:
    """
    Turn a locator into a ByteSource.

    ``ByteSource`` instances pass through unchanged, raw bytes are wrapped in a
    ``BytesSource`` and everything else is treated as a file path or URI.

    Raises:
        SourceUnavailableError: If the locator uses an unsupported scheme.
    """
    if isinstance(locator, ByteSource):
        return locator
    if isinstance(locator, (bytes, bytearray, memoryview)):
        return BytesSource(locator)
    return FileSource(locator)
