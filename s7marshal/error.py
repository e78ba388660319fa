"""
S7 marshalling exception classes.

Every failure to decode or encode a value is raised as a subclass of
:class:`S7MarshalError`. The subclasses also derive from the builtin
exception that best describes them, so callers catching ``IndexError`` or
``ValueError`` keep working.
"""

from typing import Optional


class S7MarshalError(Exception):
    """Base exception for all S7 marshalling errors."""

    pass


class OutOfRangeError(S7MarshalError, IndexError):
    """Raised when an access of ``size`` bytes at ``byte_index`` leaves the buffer."""

    def __init__(self, byte_index: int, size: int, length: int):
        super().__init__(
            f"Access of {size} byte(s) at byte index {byte_index} is out of range for a buffer of {length} byte(s)"
        )
        self.byte_index = byte_index
        self.size = size
        self.length = length


class InvalidBitOffsetError(S7MarshalError, ValueError):
    """Raised when a bit index is not in the range 0..7."""

    def __init__(self, bool_index: int):
        super().__init__(f"Bit index {bool_index} is invalid, expected a value in the range 0..7")
        self.bool_index = bool_index


class InvalidBcdDigitError(S7MarshalError, ValueError):
    """Raised when a packed BCD field contains a nibble that is not a decimal digit."""

    def __init__(self, value: int, byte_index: Optional[int] = None, message: Optional[str] = None):
        if message is None:
            message = f"Byte 0x{value:02X} is not a valid BCD value"
            if byte_index is not None:
                message += f" (byte index {byte_index})"
        super().__init__(message)
        self.value = value
        self.byte_index = byte_index


class InvalidStringLengthError(S7MarshalError, ValueError):
    """Raised when a string header is inconsistent with its capacity or the buffer."""

    pass


class ValueOutOfDomainError(S7MarshalError, ValueError):
    """Raised when a value can not be represented by the target PLC data type."""

    pass
