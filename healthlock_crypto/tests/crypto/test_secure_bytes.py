import gc

import pytest

from healthlock_crypto.crypto.secure_bytes import SecureBytes, wipe


def test_holds_a_private_copy() -> None:
    original = bytearray(b"secret")
    secure_bytes = SecureBytes(original)
    secure_bytes.clear()

    assert original == bytearray(b"secret")


def test_bytes_conversion_returns_contents() -> None:
    secure_bytes = SecureBytes(b"\x01\x02\x03")

    assert bytes(secure_bytes) == b"\x01\x02\x03"
    assert len(secure_bytes) == 3
    secure_bytes.clear()


def test_clear_zeros_data_and_sets_flag() -> None:
    secure_bytes = SecureBytes(b"secret")
    secure_bytes.clear()

    assert secure_bytes.is_cleared
    assert secure_bytes._data == bytearray(6)


def test_clear_is_idempotent() -> None:
    secure_bytes = SecureBytes(b"secret", lock=True)
    secure_bytes.clear()
    secure_bytes.clear()

    assert secure_bytes.is_cleared
    assert not secure_bytes.is_locked


def test_context_manager_clears_on_exit() -> None:
    with SecureBytes(b"secret") as secure_bytes:
        assert not secure_bytes.is_cleared
    assert secure_bytes.is_cleared


def test_destructor_clears_data() -> None:
    secure_bytes = SecureBytes(b"secret")
    data_reference = secure_bytes._data

    del secure_bytes
    gc.collect()

    assert all(byte == 0 for byte in data_reference)


def test_bytes_conversion_after_clear_raises() -> None:
    secure_bytes = SecureBytes(b"hello")
    secure_bytes.clear()

    with pytest.raises(RuntimeError, match="SecureBytes has been cleared"):
        bytes(secure_bytes)


def test_view_exposes_contents_without_copy() -> None:
    secure_bytes = SecureBytes(b"\x01\x02\x03")

    with secure_bytes.view() as view:
        assert view.readonly
        assert view.obj is secure_bytes._data
        assert bytes(view) == b"\x01\x02\x03"
        with pytest.raises(TypeError):
            view[0] = 0  # type: ignore[index]
    secure_bytes.clear()


def test_view_sees_wipe() -> None:
    secure_bytes = SecureBytes(b"\xff" * 4)
    view = secure_bytes.view()

    wipe(secure_bytes._data)

    assert view.tobytes() == bytes(4)
    view.release()
    secure_bytes.clear()


def test_view_after_clear_raises() -> None:
    secure_bytes = SecureBytes(b"hello")
    secure_bytes.clear()

    with pytest.raises(RuntimeError, match="SecureBytes has been cleared"):
        secure_bytes.view()


def test_repr_never_shows_contents() -> None:
    secure_bytes = SecureBytes(b"topsecret")

    assert repr(secure_bytes) == "SecureBytes(<9 bytes>)"
    secure_bytes.clear()
    assert repr(secure_bytes) == "SecureBytes(<cleared>)"


def test_equality_is_false_once_cleared() -> None:
    first = SecureBytes(b"key")
    second = SecureBytes(b"key")

    assert first == second
    assert first == b"key"
    first.clear()
    assert first != second
    assert first != b"key"


def test_is_not_hashable() -> None:
    with pytest.raises(TypeError):
        hash(SecureBytes(b"key"))


def test_wipe_zeroes_in_place() -> None:
    buffer = bytearray(b"\xaa" * 32)

    wipe(buffer)

    assert buffer == bytearray(32)


def test_wipe_ignores_empty_buffer() -> None:
    buffer = bytearray()

    wipe(buffer)

    assert buffer == bytearray()
