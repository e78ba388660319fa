"""
Addressing of fields inside a PLC memory buffer.

A field is addressed by a byte index and, for booleans, a bit index where
bit 0 is the least significant bit of the byte. Every getter and setter goes
through :func:`read_window` or :func:`write_window`, so an access outside the
buffer is always reported as :class:`~s7marshal.error.OutOfRangeError`.
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, Tuple, Union

from ..error import InvalidBitOffsetError, OutOfRangeError


def check_window(length: int, byte_index: int, size: int, bool_index: Optional[int] = None) -> None:
    """Validate an access of `size` bytes at `byte_index` in a buffer of `length` bytes.

    Args:
        length: length of the buffer.
        byte_index: first byte of the access.
        size: number of bytes accessed.
        bool_index: bit index, only for bit addressed types.

    Raises:
        :obj:`OutOfRangeError`: if the access does not fit in the buffer.
        :obj:`InvalidBitOffsetError`: if `bool_index` is not in 0..7.

    Examples:
        >>> check_window(4, 2, 2)
        >>> check_window(4, 3, 2)
        Traceback (most recent call last):
        ...
        s7marshal.error.OutOfRangeError: Access of 2 byte(s) at byte index 3 is out of range for a buffer of 4 byte(s)
    """
    if byte_index < 0 or size < 0 or byte_index + size > length:
        raise OutOfRangeError(byte_index, size, length)
    if bool_index is not None and not 0 <= bool_index <= 7:
        raise InvalidBitOffsetError(bool_index)


def read_window(
    bytearray_: Union[bytes, bytearray, memoryview, Sequence[int]],
    byte_index: int,
    size: int,
    bool_index: Optional[int] = None,
) -> bytes:
    """Get a copy of exactly `size` bytes starting at `byte_index`.

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index to start reading from.
        size: number of bytes to read.
        bool_index: bit index, validated when given.

    Returns:
        The requested bytes.

    Examples:
        >>> read_window(bytearray([1, 2, 3, 4]), 1, 2)
        b'\\x02\\x03'
    """
    check_window(len(bytearray_), byte_index, size, bool_index)
    return bytes(bytearray_[byte_index : byte_index + size])


@contextmanager
def write_window(
    bytearray_: Union[bytearray, memoryview],
    byte_index: int,
    size: int,
    bool_index: Optional[int] = None,
) -> Iterator[memoryview]:
    """Borrow a writable view of exactly `size` bytes starting at `byte_index`.

    The view is released when the ``with`` block exits.

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index to start writing from.
        size: number of bytes that may be written.
        bool_index: bit index, validated when given.

    Examples:
        >>> data = bytearray(4)
        >>> with write_window(data, 2, 2) as window:
        ...     window[:] = b"\\x12\\x34"
        >>> data
        bytearray(b'\\x00\\x00\\x124')
    """
    check_window(len(bytearray_), byte_index, size, bool_index)
    with memoryview(bytearray_) as view:
        if view.readonly:
            raise TypeError("Buffer is read-only, a writable buffer like bytearray is required")
        with view[byte_index : byte_index + size] as window:
            yield window


def parse_address(address: Union[str, int]) -> Tuple[int, Optional[int]]:
    """Split a PLC style address into byte index and bit index.

    Args:
        address: ``12``, ``"12"`` or ``"12.3"``.

    Raises:
        :obj:`ValueError`: if the address is malformed.
        :obj:`InvalidBitOffsetError`: if the bit index is not in 0..7.

    Examples:
        >>> parse_address("12.3")
        (12, 3)
        >>> parse_address(4)
        (4, None)
    """
    if isinstance(address, int):
        return address, None

    byte_part, dot, bit_part = str(address).strip().partition(".")
    if not byte_part.isdigit() or (dot and not bit_part.isdigit()):
        raise ValueError(f"Address {address!r} is not of the form <byte> or <byte>.<bit>")
    if not dot:
        return int(byte_part), None

    bool_index = int(bit_part)
    if bool_index > 7:
        raise InvalidBitOffsetError(bool_index)
    return int(byte_part), bool_index
