"""
The s7marshal Python library.

Conversion between the raw bytes of Siemens S7 PLC memory areas and Python
values. Getting the bytes to and from the PLC is left to a communication
library, s7marshal only works on the buffers.
"""

from importlib.metadata import version, PackageNotFoundError

from .datatypes import S7Type, TypeDescriptor, CATALOG, get_value, set_value, size_of, parse_type
from .layout import parse_specification, read_layout, write_layout
from .error import (
    S7MarshalError,
    OutOfRangeError,
    InvalidBitOffsetError,
    InvalidBcdDigitError,
    InvalidStringLengthError,
    ValueOutOfDomainError,
)

__all__ = [
    "S7Type",
    "TypeDescriptor",
    "CATALOG",
    "get_value",
    "set_value",
    "size_of",
    "parse_type",
    "parse_specification",
    "read_layout",
    "write_layout",
    "S7MarshalError",
    "OutOfRangeError",
    "InvalidBitOffsetError",
    "InvalidBcdDigitError",
    "InvalidStringLengthError",
    "ValueOutOfDomainError",
]

try:
    __version__ = version("python-s7marshal")
except PackageNotFoundError:
    __version__ = "0.0rc0"
