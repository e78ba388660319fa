"""Packed binary coded decimal helpers shared by the S5TIME and DT codecs."""

from types import MappingProxyType
from typing import Mapping, Optional

from ..error import InvalidBcdDigitError, ValueOutOfDomainError

# S5TIME time base nibble -> milliseconds per count
S5TIME_TIME_BASES: Mapping[int, int] = MappingProxyType({0: 1, 1: 10, 2: 100, 3: 1000})

S5TIME_MAX_COUNT = 999


def bcd_to_byte(byte: int, byte_index: Optional[int] = None) -> int:
    """Convert a packed BCD byte to its value 0..99.

    Raises:
        :obj:`InvalidBcdDigitError`: if one of the nibbles is larger than 9.

    Examples:
        >>> bcd_to_byte(0x59)
        59
    """
    high, low = byte >> 4, byte & 0x0F
    if high > 9 or low > 9:
        raise InvalidBcdDigitError(byte, byte_index)
    return high * 10 + low


def byte_to_bcd(value: int) -> int:
    """Convert a value 0..99 to a packed BCD byte.

    Examples:
        >>> hex(byte_to_bcd(59))
        '0x59'
    """
    if not 0 <= value <= 99:
        raise ValueOutOfDomainError(f"{value} can not be packed in a single BCD byte")
    return (value // 10) << 4 | value % 10
