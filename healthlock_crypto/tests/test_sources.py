from pathlib import Path

import pytest

from healthlock_crypto.exceptions import SourceUnavailableError
from healthlock_crypto.sources import BytesSource, ByteSource, FileSource, resolve_source


def test_file_source_reads_whole_file(tmp_path: Path) -> None:
    path = tmp_path / "record.bin"
    path.write_bytes(b"hello")

    assert FileSource(path).read() == b"hello"


def test_file_source_accepts_file_uri(tmp_path: Path) -> None:
    path = tmp_path / "scan 1.jpg"
    path.write_bytes(b"\xff\xd8\xff")

    source = FileSource(path.as_uri())

    assert source.path == path
    assert source.read() == b"\xff\xd8\xff"


def test_file_source_reads_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty"
    path.write_bytes(b"")

    assert FileSource(path).read() == b""


def test_file_source_raises_on_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "missing.bin"

    with pytest.raises(SourceUnavailableError, match="Unable to read source") as exc_info:
        FileSource(missing).read()

    assert exc_info.value.source == str(missing)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_file_source_raises_on_directory(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailableError):
        FileSource(tmp_path).read()


def test_file_source_enforces_max_size(tmp_path: Path) -> None:
    path = tmp_path / "big.bin"
    path.write_bytes(b"x" * 11)

    with pytest.raises(SourceUnavailableError, match="exceeds limit of 10"):
        FileSource(path).read(max_size=10)


def test_file_source_allows_exact_max_size(tmp_path: Path) -> None:
    path = tmp_path / "fits.bin"
    path.write_bytes(b"x" * 10)

    assert FileSource(path).read(max_size=10) == b"x" * 10


def test_file_source_rejects_remote_file_uri() -> None:
    with pytest.raises(SourceUnavailableError, match="Remote file URIs"):
        FileSource("file://example.com/etc/passwd")


def test_file_source_rejects_other_schemes() -> None:
    with pytest.raises(SourceUnavailableError, match="Unsupported source scheme: content"):
        FileSource("content://media/external/images/1")


def test_bytes_source_enforces_max_size() -> None:
    source = BytesSource(b"abcdef")

    assert source.read() == b"abcdef"
    with pytest.raises(SourceUnavailableError, match="exceeds limit"):
        source.read(max_size=3)


def test_resolve_source_wraps_bytes() -> None:
    source = resolve_source(bytearray(b"abc"))

    assert isinstance(source, BytesSource)
    assert source.read() == b"abc"


def test_resolve_source_wraps_paths(tmp_path: Path) -> None:
    assert isinstance(resolve_source(tmp_path / "a"), FileSource)
    assert isinstance(resolve_source(str(tmp_path / "a")), FileSource)


def test_resolve_source_passes_through_byte_sources() -> None:
    source = BytesSource(b"abc")

    assert resolve_source(source) is source
    assert isinstance(source, ByteSource)
