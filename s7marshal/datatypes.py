"""
Catalog of the S7 data types supported by the marshalling layer.

Each :class:`S7Type` maps to a :class:`TypeDescriptor` holding its encoded
size and its getter and setter, so a value can be read or written by type
without a chain of string comparisons.

example::

    >>> data = bytearray(4)
    >>> set_value(data, 0, S7Type.DINT, -58)
    bytearray(b'\\xff\\xff\\xff\\xc6')
    >>> get_value(data, 2, "INT")
    -58
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple, Optional, Tuple, Union

from .util.getters import (
    get_bool,
    get_byte,
    get_char,
    get_counter,
    get_date,
    get_dint,
    get_dt,
    get_dword,
    get_fstring,
    get_int,
    get_lint,
    get_lreal,
    get_lword,
    get_real,
    get_s5time,
    get_sint,
    get_string,
    get_time,
    get_tod,
    get_udint,
    get_uint,
    get_ulint,
    get_usint,
    get_word,
)
from .util.setters import (
    set_bool,
    set_byte,
    set_char,
    set_counter,
    set_date,
    set_dint,
    set_dt,
    set_dword,
    set_fstring,
    set_int,
    set_lint,
    set_lreal,
    set_lword,
    set_real,
    set_s5time,
    set_sint,
    set_string,
    set_time,
    set_tod,
    set_udint,
    set_uint,
    set_ulint,
    set_usint,
    set_word,
)


class S7Type(Enum):
    """S7 data types."""

    BOOL = "BOOL"
    BYTE = "BYTE"
    USINT = "USINT"
    SINT = "SINT"
    WORD = "WORD"
    UINT = "UINT"
    INT = "INT"
    DWORD = "DWORD"
    UDINT = "UDINT"
    DINT = "DINT"
    REAL = "REAL"
    LREAL = "LREAL"
    LINT = "LINT"
    ULINT = "ULINT"
    LWORD = "LWORD"
    S5TIME = "S5TIME"
    TIME = "TIME"
    DATE = "DATE"
    TOD = "TOD"
    DT = "DT"
    CHAR = "CHAR"
    STRING = "STRING"
    FSTRING = "FSTRING"
    COUNTER = "COUNTER"


class TypeDescriptor(NamedTuple):
    """Encoding of one S7 data type.

    Getters and setters are called as:

    * plain types: ``getter(buffer, byte_index)``, ``setter(buffer, byte_index, value)``
    * bit addressed: ``getter(buffer, byte_index, bool_index)``,
      ``setter(buffer, byte_index, bool_index, value)``
    * sized: ``getter(buffer, byte_index, length)``,
      ``setter(buffer, byte_index, value, length)``

    For sized types `size` is the fixed overhead, the declared length is added to it.
    """

    size: int
    getter: Callable[..., Any]
    setter: Callable[..., Any]
    bit_addressed: bool = False
    sized: bool = False


def _get_string(bytearray_: bytearray, byte_index: int, length: Optional[int]) -> str:
    return get_string(bytearray_, byte_index)


def _set_string(bytearray_: bytearray, byte_index: int, value: str, length: Optional[int]) -> bytearray:
    return set_string(bytearray_, byte_index, value, length)


CATALOG: Mapping[S7Type, TypeDescriptor] = MappingProxyType(
    {
        S7Type.BOOL: TypeDescriptor(1, get_bool, set_bool, bit_addressed=True),
        S7Type.BYTE: TypeDescriptor(1, get_byte, set_byte),
        S7Type.USINT: TypeDescriptor(1, get_usint, set_usint),
        S7Type.SINT: TypeDescriptor(1, get_sint, set_sint),
        S7Type.WORD: TypeDescriptor(2, get_word, set_word),
        S7Type.UINT: TypeDescriptor(2, get_uint, set_uint),
        S7Type.INT: TypeDescriptor(2, get_int, set_int),
        S7Type.DWORD: TypeDescriptor(4, get_dword, set_dword),
        S7Type.UDINT: TypeDescriptor(4, get_udint, set_udint),
        S7Type.DINT: TypeDescriptor(4, get_dint, set_dint),
        S7Type.REAL: TypeDescriptor(4, get_real, set_real),
        S7Type.LREAL: TypeDescriptor(8, get_lreal, set_lreal),
        S7Type.LINT: TypeDescriptor(8, get_lint, set_lint),
        S7Type.ULINT: TypeDescriptor(8, get_ulint, set_ulint),
        S7Type.LWORD: TypeDescriptor(8, get_lword, set_lword),
        S7Type.S5TIME: TypeDescriptor(2, get_s5time, set_s5time),
        S7Type.TIME: TypeDescriptor(4, get_time, set_time),
        S7Type.DATE: TypeDescriptor(2, get_date, set_date),
        S7Type.TOD: TypeDescriptor(4, get_tod, set_tod),
        S7Type.DT: TypeDescriptor(8, get_dt, set_dt),
        S7Type.CHAR: TypeDescriptor(1, get_char, set_char),
        S7Type.STRING: TypeDescriptor(2, _get_string, _set_string, sized=True),
        S7Type.FSTRING: TypeDescriptor(0, get_fstring, set_fstring, sized=True),
        S7Type.COUNTER: TypeDescriptor(2, get_counter, set_counter),
    }
)

# names used by TIA portal and step 7 exports
_ALIASES: Mapping[str, S7Type] = MappingProxyType(
    {
        "DATE_AND_TIME": S7Type.DT,
        "TIME_OF_DAY": S7Type.TOD,
    }
)

_TYPE_PATTERN = re.compile(r"^\s*([A-Z0-9_]+)\s*(?:\[\s*(\d+)\s*\])?\s*$", re.IGNORECASE)

DEFAULT_STRING_LENGTH = 254

TypeLike = Union[S7Type, str]


def parse_type(type_: str) -> Tuple[S7Type, Optional[int]]:
    """Parse a type name as found in a DB layout.

    Args:
        type_: type name, case insensitive, with an optional length like ``STRING[6]``.

    Raises:
        :obj:`ValueError`: if the type is unknown.

    Returns:
        The type and the declared length, if any.

    Examples:
        >>> parse_type("String[6]")
        (<S7Type.STRING: 'STRING'>, 6)
        >>> parse_type("DATE_AND_TIME")
        (<S7Type.DT: 'DT'>, None)
    """
    match = _TYPE_PATTERN.match(type_)
    if match is None:
        raise ValueError(f"{type_!r} is not a valid type")
    name = match[1].upper()
    length = int(match[2]) if match[2] is not None else None

    if name in _ALIASES:
        return _ALIASES[name], length
    try:
        return S7Type(name), length
    except ValueError:
        raise ValueError(f"{type_!r} is not a supported type") from None


def _resolve(type_: TypeLike, length: Optional[int]) -> Tuple[S7Type, TypeDescriptor, Optional[int]]:
    if isinstance(type_, S7Type):
        s7type = type_
    else:
        s7type, parsed_length = parse_type(type_)
        if length is None:
            length = parsed_length
    return s7type, CATALOG[s7type], length


def size_of(type_: TypeLike, length: Optional[int] = None) -> int:
    """Number of bytes a value of `type_` occupies.

    Examples:
        >>> size_of("STRING[6]")
        8
        >>> size_of(S7Type.DT)
        8
    """
    s7type, descriptor, length = _resolve(type_, length)
    if not descriptor.sized:
        return descriptor.size
    if length is None:
        if s7type is not S7Type.STRING:
            raise ValueError(f"{s7type.value} needs a length")
        length = DEFAULT_STRING_LENGTH
    return descriptor.size + length


def get_value(
    bytearray_: bytearray,
    byte_index: int,
    type_: TypeLike,
    bool_index: Optional[int] = None,
    length: Optional[int] = None,
) -> Any:
    """Gets the value for a specific type.

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index from where start reading.
        type_: type of data to read, a :class:`S7Type` or a name like ``"STRING[6]"``.
        bool_index: bit index, required for BOOL.
        length: declared length of sized types, overrides the one in `type_`.

    Raises:
        :obj:`ValueError`: if the `type_` is not handled or a required bit index or length is missing.

    Returns:
        Value read according to the `type_`
    """
    s7type, descriptor, length = _resolve(type_, length)
    if descriptor.bit_addressed:
        if bool_index is None:
            raise ValueError(f"{s7type.value} needs a bit index")
        return descriptor.getter(bytearray_, byte_index, bool_index)
    if descriptor.sized:
        if length is None and s7type is S7Type.FSTRING:
            raise ValueError(f"{s7type.value} needs a length")
        return descriptor.getter(bytearray_, byte_index, length)
    return descriptor.getter(bytearray_, byte_index)


def set_value(
    bytearray_: bytearray,
    byte_index: int,
    type_: TypeLike,
    value: Any,
    bool_index: Optional[int] = None,
    length: Optional[int] = None,
) -> bytearray:
    """Sets the value for a specific type.

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index from where start writing.
        type_: type of data to write, a :class:`S7Type` or a name like ``"STRING[6]"``.
        value: value to write.
        bool_index: bit index, required for BOOL.
        length: declared length of sized types, overrides the one in `type_`.

    Returns:
        The buffer.
    """
    s7type, descriptor, length = _resolve(type_, length)
    if descriptor.bit_addressed:
        if bool_index is None:
            raise ValueError(f"{s7type.value} needs a bit index")
        descriptor.setter(bytearray_, byte_index, bool_index, value)
    elif descriptor.sized:
        if length is None and s7type is S7Type.FSTRING:
            raise ValueError(f"{s7type.value} needs a length")
        descriptor.setter(bytearray_, byte_index, value, length)
    else:
        descriptor.setter(bytearray_, byte_index, value)
    return bytearray_
