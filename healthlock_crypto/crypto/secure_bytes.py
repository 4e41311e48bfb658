"""Zeroable container for symmetric key material."""

import ctypes
import ctypes.util
import hmac
import platform
import warnings
from collections.abc import Callable
from typing import Self

_mlock: Callable[[int, int], int] | None = None
_munlock: Callable[[int, int], int] | None = None

if platform.system() in ("Linux", "Darwin"):
    try:
        _libc = ctypes.CDLL(ctypes.util.find_library("c"), use_errno=True)
        _libc.mlock.argtypes = [ctypes.c_void_p, ctypes.c_size_t]
        _libc.mlock.restype = ctypes.c_int
        _libc.munlock.argtypes = [ctypes.c_void_p, ctypes.c_size_t]
        _libc.munlock.restype = ctypes.c_int
        _mlock = _libc.mlock
        _munlock = _libc.munlock
    except (OSError, AttributeError, TypeError):
        pass


def _address_of(buffer: bytearray) -> int:
    return ctypes.addressof((ctypes.c_char * len(buffer)).from_buffer(buffer))


def wipe(buffer: bytearray) -> None:
    """Overwrite a bytearray with zeros in place."""
    if not buffer:
        return
    try:
        ctypes.memset(_address_of(buffer), 0, len(buffer))
    except (TypeError, ValueError, BufferError) as exc:
        warnings.warn(f"ctypes.memset failed, zeroing byte by byte: {exc}", RuntimeWarning)
        buffer[:] = bytes(len(buffer))


def _pin(buffer: bytearray) -> bool:
    if _mlock is None or not buffer:
        return False
    try:
        return _mlock(_address_of(buffer), len(buffer)) == 0
    except (TypeError, ValueError, BufferError):
        return False


def _unpin(buffer: bytearray) -> None:
    if _munlock is None or not buffer:
        return
    try:
        _munlock(_address_of(buffer), len(buffer))
    except (TypeError, ValueError, BufferError):
        pass


class SecureBytes:
    """
    Owns a private copy of secret bytes and zeroes it on ``clear()``.

    Used for the per-invocation AES key. The contents are never included in
    ``repr`` so the container is safe to pass to structured loggers.
    """

    __slots__ = ("_data", "_cleared", "_locked")

    def __init__(self, data: bytes | bytearray, *, lock: bool = False) -> None:
        self._data = bytearray(data)
        self._cleared = False
        self._locked = lock and _pin(self._data)

    def __del__(self) -> None:
        self.clear()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.clear()

    def clear(self) -> None:
        """Zero memory and release the page lock. Idempotent."""
        if self._cleared:
            return
        wipe(self._data)
        if self._locked:
            _unpin(self._data)
            self._locked = False
        self._cleared = True

    def __bytes__(self) -> bytes:
        """Warning: the returned copy is not wiped."""
        if self._cleared:
            raise RuntimeError("SecureBytes has been cleared")
        return bytes(self._data)

    def view(self) -> memoryview:
        """
        Read-only view over the secret bytes, without copying them.

        Release the view (or use it as a context manager) before ``clear()``.
        """
        if self._cleared:
            raise RuntimeError("SecureBytes has been cleared")
        return memoryview(self._data).toreadonly()

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return not self._cleared and len(self._data) > 0

    def __repr__(self) -> str:
        if self._cleared:
            return "SecureBytes(<cleared>)"
        return f"SecureBytes(<{len(self._data)} bytes>)"

    def __eq__(self, other: object) -> bool:
        """Constant-time comparison."""
        if isinstance(other, SecureBytes):
            if self._cleared or other._cleared:
                return False
            return hmac.compare_digest(self._data, other._data)
        if isinstance(other, (bytes, bytearray)):
            return not self._cleared and hmac.compare_digest(self._data, other)
        return NotImplemented

    def __hash__(self) -> int:
        raise TypeError("SecureBytes is not hashable")

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    @property
    def is_locked(self) -> bool:
        return self._locked
