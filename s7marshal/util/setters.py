import struct
from datetime import date, datetime, time, timedelta
from logging import getLogger
from typing import Optional, Union

from .address import check_window, read_window, write_window
from .bcd import S5TIME_MAX_COUNT, S5TIME_TIME_BASES, byte_to_bcd
from .getters import DATE_EPOCH
from ..error import InvalidStringLengthError, ValueOutOfDomainError

logger = getLogger(__name__)

Number = Union[int, float]


def _to_integer(value: Number, lower: int, upper: int, type_name: str) -> int:
    """Check that `value` is an integral number that fits the PLC type."""
    try:
        _int = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueOutOfDomainError(f"Value {value!r} is not a valid {type_name}") from e
    if _int != value:
        raise ValueOutOfDomainError(f"Value {value!r} is not an integer, {type_name} can not hold it")
    if not lower <= _int <= upper:
        raise ValueOutOfDomainError(f"Value {_int} is out of the {type_name} range {lower}..{upper}")
    return _int


def _to_milliseconds(value: timedelta) -> int:
    """Whole milliseconds of `value`, truncated towards zero."""
    if not isinstance(value, timedelta):
        raise TypeError(f"Value {value!r} is not a timedelta")
    microseconds = (value.days * 86400 + value.seconds) * 1000000 + value.microseconds
    if microseconds < 0:
        return -(-microseconds // 1000)
    return microseconds // 1000


def _pack(bytearray_: bytearray, byte_index: int, fmt: str, value: Number) -> bytearray:
    _bytes = struct.pack(fmt, value)
    with write_window(bytearray_, byte_index, len(_bytes)) as window:
        window[:] = _bytes
    return bytearray_


def _pack_float(bytearray_: bytearray, byte_index: int, fmt: str, value: Number, type_name: str) -> bytearray:
    try:
        _bytes = struct.pack(fmt, float(value))
    except (TypeError, ValueError, OverflowError, struct.error) as e:
        raise ValueOutOfDomainError(f"Value {value!r} is not a valid {type_name}") from e
    with write_window(bytearray_, byte_index, len(_bytes)) as window:
        window[:] = _bytes
    return bytearray_


def set_bool(bytearray_: bytearray, byte_index: int, bool_index: int, value: bool) -> bytearray:
    """Set boolean value on location in bytearray.

    Notes:
        Only the addressed bit is changed, the other bits of the byte keep their value.

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index to write to.
        bool_index: bit index to write to.
        value: value to write.

    Examples:
        >>> buffer = bytearray([0b00000101])
        >>> set_bool(buffer, 0, 0, False)
        bytearray(b'\\x04')
    """
    if value not in (0, 1):
        raise ValueOutOfDomainError(f"Value value:{value} is not a boolean expression.")

    with write_window(bytearray_, byte_index, 1, bool_index) as window:
        index_value = 1 << bool_index
        if value:
            window[0] |= index_value
        else:
            window[0] &= ~index_value & 0xFF
    return bytearray_


def set_byte(bytearray_: bytearray, byte_index: int, _int: int) -> bytearray:
    """Set value in bytearray to byte

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index to write.
        _int: value to write.

    Returns:
        buffer with the written value.

    Examples:
        >>> buffer = bytearray([0b00000000])
        >>> set_byte(buffer, 0, 255)
        bytearray(b'\\xff')
    """
    return _pack(bytearray_, byte_index, "B", _to_integer(_int, 0, 0xFF, "BYTE"))


def set_word(bytearray_: bytearray, byte_index: int, _int: int) -> bytearray:
    """Set value in bytearray to word

    Notes:
        Word datatype is 2 bytes long.

    Args:
        bytearray_: buffer to be written.
        byte_index: byte index to start write from.
        _int: value to write.

    Return:
        buffer with the written value
    """
    return _pack(bytearray_, byte_index, ">H", _to_integer(_int, 0, 0xFFFF, "WORD"))


def set_int(bytearray_: bytearray, byte_index: int, _int: int) -> bytearray:
    """Set value in bytearray to int

    Notes:
        An datatype `int` in the PLC consists of two `bytes`.

    Args:
        bytearray_: buffer to write on.
        byte_index: byte index to start writing from.
        _int: int value to write.

    Returns:
        Buffer with the written value.

    Examples:
        >>> data = bytearray(2)
        >>> set_int(data, 0, 42)
        bytearray(b'\\x00*')
    """
    return _pack(bytearray_, byte_index, ">h", _to_integer(_int, -0x8000, 0x7FFF, "INT"))


def set_uint(bytearray_: bytearray, byte_index: int, _int: int) -> bytearray:
    """Set value in bytearray to unsigned int

    Notes:
        An datatype `uint` in the PLC consists of two `bytes`.

    Args:
        bytearray_: buffer to write on.
        byte_index: byte index to start writing from.
        _int: int value to write.

    Returns:
        Buffer with the written value.

    Examples:
        >>> data = bytearray(2)
        >>> set_uint(data, 0, 65535)
        bytearray(b'\\xff\\xff')
    """
    return _pack(bytearray_, byte_index, ">H", _to_integer(_int, 0, 0xFFFF, "UINT"))


def set_counter(bytearray_: bytearray, byte_index: int, _int: int) -> bytearray:
    """Set a counter value, stored with the same layout as a WORD."""
    return _pack(bytearray_, byte_index, ">H", _to_integer(_int, 0, 0xFFFF, "COUNTER"))


def set_real(bytearray_: bytearray, byte_index: int, real: Union[bool, str, float, int]) -> bytearray:
    """Set Real value

    Notes:
        Datatype `real` is represented in 4 bytes in the PLC.
        The packed representation uses the `IEEE 754 binary32`.

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index to start writing from.
        real: value to be written.

    Returns:
        Buffer with the value written.

    Examples:
        >>> data = bytearray(4)
        >>> set_real(data, 0, 3.14)
        bytearray(b'@H\\xf5\\xc3')
    """
    return _pack_float(bytearray_, byte_index, ">f", real, "REAL")


def set_fstring(bytearray_: bytearray, byte_index: int, value: str, max_length: int) -> bytearray:
    """Set space-padded fixed-length string value

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index to start writing from.
        value: string to write.
        max_length: maximum string length, i.e. the fixed size of the string.

    Raises:
        :obj:`TypeError`: if the `value` is not a :obj:`str`.
        :obj:`InvalidStringLengthError`: if the length of the `value` is larger than the `max_length`.
        :obj:`ValueOutOfDomainError`: if `value` contains non-ascii characters.

    Examples:
        >>> data = bytearray(20)
        >>> set_fstring(data, 0, "hello world", 15)
        bytearray(b'hello world    \\x00\\x00\\x00\\x00\\x00')
    """
    if not isinstance(value, str):
        raise TypeError(f"Value value:{value} is not from Type string")
    if not value.isascii():
        raise ValueOutOfDomainError("Value contains non-ascii values.")
    # FAIL HARD WHEN trying to write too much data into PLC
    size = len(value)
    if size > max_length:
        raise InvalidStringLengthError(f"size {size} > max_length {max_length} {value}")

    with write_window(bytearray_, byte_index, max_length) as window:
        window[:] = value.ljust(max_length).encode("ascii")
    return bytearray_


def set_string(bytearray_: bytearray, byte_index: int, value: str, max_size: Optional[int] = None) -> bytearray:
    """Set string value

    Notes:
        Only the header and the characters of `value` are written, the
        remaining capacity of the string is left untouched.

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index to start writing from.
        value: string to write.
        max_size: maximum possible string size, max. 254. When omitted the
            max size already present in the header is kept.

    Raises:
        :obj:`TypeError`: if the `value` is not a :obj:`str`.
        :obj:`InvalidStringLengthError`: if the length of the `value` is larger than the max size
            or than the space left in the buffer.
        :obj:`ValueOutOfDomainError`: if 'max_size' is greater than 254 or 'value' contains
            non-ascii characters.

    Examples:
        >>> data = bytearray([10, 3]) + b"HI!" + bytearray(2)
        >>> set_string(data, 0, "OK")
        bytearray(b'\\n\\x02OK!\\x00\\x00')
    """
    if not isinstance(value, str):
        raise TypeError(f"Value value:{value} is not from Type string")
    if not value.isascii():
        raise ValueOutOfDomainError(
            "Value contains non-ascii values, which is not compatible with PLC Type STRING."
            "Check encoding of value."
        )

    if max_size is None:
        max_size = read_window(bytearray_, byte_index, 2)[0]
    elif not 0 <= max_size <= 254:
        raise ValueOutOfDomainError(f"max_size: {max_size} > max. allowed 254 chars")
    else:
        check_window(len(bytearray_), byte_index, 2)

    size = len(value)
    # FAIL HARD WHEN trying to write too much data into PLC
    if size > max_size:
        raise InvalidStringLengthError(f"size {size} > max_size {max_size} {value}")
    available = len(bytearray_) - byte_index - 2
    if size > available:
        logger.error("The string does not fit in the remainder of the buffer")
        raise InvalidStringLengthError(f"size {size} > {available} bytes left in the buffer")

    with write_window(bytearray_, byte_index, 2 + size) as window:
        window[:] = bytes([max_size, size]) + value.encode("ascii")
    return bytearray_


def set_dword(bytearray_: bytearray, byte_index: int, dword: int) -> bytearray:
    """Set a DWORD to the buffer.

    Notes:
        Datatype `dword` consists in 4 bytes in the PLC.
        The maximum value possible is `4294967295`

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index from where to write.
        dword: value to write.

    Examples:
        >>> data = bytearray(4)
        >>> set_dword(data, 0, 4294967295)
        bytearray(b'\\xff\\xff\\xff\\xff')
    """
    return _pack(bytearray_, byte_index, ">I", _to_integer(dword, 0, 0xFFFFFFFF, "DWORD"))


def set_dint(bytearray_: bytearray, byte_index: int, dint: int) -> bytearray:
    """Set value in bytearray to dint

    Notes:
        Datatype `dint` consists in 4 bytes in the PLC.
        Maximum possible value is 2147483647.
        Lower possible value is -2147483648.

    Args:
        bytearray_: buffer to write.
        byte_index: byte index from where to start writing.
        dint: double integer value

    Examples:
        >>> data = bytearray(4)
        >>> set_dint(data, 0, 2147483647)
        bytearray(b'\\x7f\\xff\\xff\\xff')
    """
    return _pack(bytearray_, byte_index, ">i", _to_integer(dint, -0x80000000, 0x7FFFFFFF, "DINT"))


def set_udint(bytearray_: bytearray, byte_index: int, udint: int) -> bytearray:
    """Set value in bytearray to unsigned dint

    Notes:
        Datatype `udint` consists in 4 bytes in the PLC.
        Maximum possible value is 4294967295.
        Minimum possible value is 0.

    Args:
        bytearray_: buffer to write.
        byte_index: byte index from where to start writing.
        udint: unsigned double integer value
    """
    return _pack(bytearray_, byte_index, ">I", _to_integer(udint, 0, 0xFFFFFFFF, "UDINT"))


def set_time(bytearray_: bytearray, byte_index: int, value: timedelta) -> bytearray:
    """Set value in bytearray to time

    Notes:
        Datatype `time` consists in 4 bytes in the PLC, a signed number of milliseconds.
        Maximum possible value is T#24D_20H_31M_23S_647MS(2147483647).
        Lower possible value is T#-24D_20H_31M_23S_648MS(-2147483648).
        Fractions of a millisecond are dropped.

    Args:
        bytearray_: buffer to write.
        byte_index: byte index from where to start writing.
        value: duration to write.

    Examples:
        >>> data = bytearray(4)
        >>> set_time(data, 0, timedelta(seconds=1))
        bytearray(b'\\x00\\x00\\x03\\xe8')
    """
    milliseconds = _to_milliseconds(value)
    return _pack(bytearray_, byte_index, ">i", _to_integer(milliseconds, -0x80000000, 0x7FFFFFFF, "TIME"))


def set_usint(bytearray_: bytearray, byte_index: int, _int: int) -> bytearray:
    """Set unsigned small int

    Notes:
        Datatype `usint` (Unsigned small int) consists on 1 byte in the PLC.
        Maximum possible value is 255.
        Lower possible value is 0.

    Args:
        bytearray_: buffer to write.
        byte_index: byte index from where to start writing.
        _int: value to write.

    Returns:
        Buffer with the written value.
    """
    return _pack(bytearray_, byte_index, "B", _to_integer(_int, 0, 0xFF, "USINT"))


def set_sint(bytearray_: bytearray, byte_index: int, _int: int) -> bytearray:
    """Set small int to the buffer.

    Notes:
        Datatype `sint` (Small int) consists in 1 byte in the PLC.
        Maximum value possible is 127.
        Lowest value possible is -128.

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index from where to start writing.
        _int: value to write.

    Returns:
        Buffer with the written value.

    Examples:
        >>> data = bytearray(1)
        >>> set_sint(data, 0, -10)
        bytearray(b'\\xf6')
    """
    return _pack(bytearray_, byte_index, "b", _to_integer(_int, -0x80, 0x7F, "SINT"))


def set_lint(bytearray_: bytearray, byte_index: int, _int: int) -> bytearray:
    """Set the long int, 8 bytes signed."""
    return _pack(bytearray_, byte_index, ">q", _to_integer(_int, -(2**63), 2**63 - 1, "LINT"))


def set_ulint(bytearray_: bytearray, byte_index: int, _int: int) -> bytearray:
    """Set the unsigned long int, 8 bytes unsigned."""
    return _pack(bytearray_, byte_index, ">Q", _to_integer(_int, 0, 2**64 - 1, "ULINT"))


def set_lword(bytearray_: bytearray, byte_index: int, lword: int) -> bytearray:
    """Set the long word

    Notes:
        Datatype `lword` (long word) consists in 8 bytes in the PLC.
        Maximum value possible is 18446744073709551615.
        Lowest value possible is 0.

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index from where to start writing.
        lword: Value to write

    Returns:
        Buffer with the written value.
    """
    return _pack(bytearray_, byte_index, ">Q", _to_integer(lword, 0, 2**64 - 1, "LWORD"))


def set_lreal(bytearray_: bytearray, byte_index: int, lreal: float) -> bytearray:
    """Set the long real

    Notes:
        Datatype `lreal` (long real) consists in 8 bytes in the PLC.
        Negative Range: -1.7976931348623158e+308 to -2.2250738585072014e-308
        Positive Range: +2.2250738585072014e-308 to +1.7976931348623158e+308
        Zero: ±0

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index from where to start writing.
        lreal: float value to set

    Returns:
        Buffer with the written value.
    """
    return _pack_float(bytearray_, byte_index, ">d", lreal, "LREAL")


def set_char(bytearray_: bytearray, byte_index: int, chr_: str) -> bytearray:
    """Set char value in a bytearray.

    Notes:
        Datatype `char` in the PLC is represented in 1 byte. It has to be in ASCII-format

    Args:
        bytearray_: buffer to write to.
        byte_index: byte index to write to.
        chr_: Char to be set

    Returns:
        Buffer with the written value.

    Examples:
        >>> set_char(bytearray(1), 0, 'C')
        bytearray(b'C')
    """
    if not isinstance(chr_, str) or len(chr_) != 1:
        raise ValueOutOfDomainError(f"chr_ : {chr_!r} is not a single character.")
    if not chr_.isascii():
        raise ValueOutOfDomainError(f"chr_ : {chr_} contains a None-Ascii value, but ASCII-only is allowed.")
    return _pack(bytearray_, byte_index, "B", ord(chr_))


def set_s5time(bytearray_: bytearray, byte_index: int, value: timedelta) -> bytearray:
    """Set value in bytearray to S5TIME

    Notes:
        The smallest time base that can hold the duration is used, anything
        below the resolution of that time base is dropped. The longest
        duration is 999 seconds.

    Args:
        bytearray_: buffer to write.
        byte_index: byte index from where to start writing.
        value: duration to write.

    Examples:
        >>> data = bytearray(2)
        >>> set_s5time(data, 0, timedelta(milliseconds=1500))
        bytearray(b'\\x11P')
    """
    milliseconds = _to_milliseconds(value)
    if not 0 <= milliseconds <= S5TIME_MAX_COUNT * max(S5TIME_TIME_BASES.values()):
        raise ValueOutOfDomainError(f"S5TIME can not hold a duration of {value}")

    for time_base_nibble, time_base in S5TIME_TIME_BASES.items():
        count = milliseconds // time_base
        if count <= S5TIME_MAX_COUNT:
            break

    _bytes = bytes([time_base_nibble << 4 | count // 100, byte_to_bcd(count % 100)])
    with write_window(bytearray_, byte_index, 2) as window:
        window[:] = _bytes
    return bytearray_


def set_date(bytearray_: bytearray, byte_index: int, date_: date) -> bytearray:
    """Set value in bytearray to date

    Notes:
        Datatype `date` consists in the number of days elapsed from 1990-01-01.
        It is stored as an unsigned int (2 bytes) in the PLC.

    Args:
        bytearray_: buffer to write.
        byte_index: byte index from where to start writing.
        date_: date object

    Examples:
        >>> data = bytearray(2)
        >>> set_date(data, 0, date(2024, 3, 27))
        bytearray(b'0\\xd8')
    """
    if isinstance(date_, datetime):
        date_ = date_.date()
    _days = (date_ - DATE_EPOCH).days
    if _days < 0:
        raise ValueOutOfDomainError(f"date {date_} is before 1990-01-01.")
    elif _days > 0xFFFF:
        raise ValueOutOfDomainError(f"date {date_} is more than 65535 days after 1990-01-01.")
    return _pack(bytearray_, byte_index, ">H", _days)


def set_tod(bytearray_: bytearray, byte_index: int, value: Union[timedelta, time]) -> bytearray:
    """Set value in bytearray to time of day

    Notes:
        Datatype `time_of_day` is the number of milliseconds since midnight,
        stored as an unsigned 4 byte value. Fractions of a millisecond are dropped.

    Args:
        bytearray_: buffer to write.
        byte_index: byte index from where to start writing.
        value: time since midnight, as a timedelta or a time.

    Examples:
        >>> data = bytearray(4)
        >>> set_tod(data, 0, time(12, 34, 56))
        bytearray(b'\\x02\\xb3)\\x80')
    """
    if isinstance(value, time):
        value = timedelta(hours=value.hour, minutes=value.minute, seconds=value.second, microseconds=value.microsecond)
    milliseconds = _to_milliseconds(value)
    if not 0 <= milliseconds < 86400000:
        raise ValueOutOfDomainError(f"Time_Of_Day must be less than 24 hours and not negative, got {value}")
    return _pack(bytearray_, byte_index, ">I", milliseconds)


def set_dt(bytearray_: bytearray, byte_index: int, dt: datetime) -> bytearray:
    """Set value in bytearray to DATE_AND_TIME

    Notes:
        Datatype `DATE_AND_TIME` consists in 8 BCD coded bytes in the PLC, see
        :func:`~s7marshal.util.getters.get_dt` for the layout. Only years from
        1990 to 2089 can be stored, microseconds are truncated to milliseconds
        and the weekday is computed from the date.

    Args:
        bytearray_: buffer to write.
        byte_index: byte index from where to start writing.
        dt: datetime object

    Examples:
        >>> data = bytearray(8)
        >>> set_dt(data, 0, datetime(2020, 7, 12, 17, 32, 2, 854000))
        bytearray(b' \\x07\\x18#P\\x02\\x85A')
    """
    if not isinstance(dt, datetime):
        raise TypeError(f"Value {dt!r} is not a datetime")
    if not 1990 <= dt.year <= 2089:
        raise ValueOutOfDomainError(f"DATE_AND_TIME can only hold the years 1990 to 2089, got {dt.year}")

    millisecond = dt.microsecond // 1000
    # sunday is 1, saturday is 7
    weekday = dt.isoweekday() % 7 + 1
    fields = (dt.year % 100, dt.month, dt.day, dt.hour, dt.minute, dt.second, millisecond // 10)
    _bytes = bytes([byte_to_bcd(field) for field in fields] + [(millisecond % 10) << 4 | weekday])
    with write_window(bytearray_, byte_index, 8) as window:
        window[:] = _bytes
    return bytearray_
