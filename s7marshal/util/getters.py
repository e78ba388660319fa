import struct
from datetime import timedelta, datetime, date
from logging import getLogger
from typing import Sequence, Union

from .address import read_window
from .bcd import S5TIME_TIME_BASES, bcd_to_byte
from ..error import InvalidBcdDigitError, InvalidStringLengthError, ValueOutOfDomainError

logger = getLogger(__name__)

Buffer = Union[bytes, bytearray, memoryview, Sequence[int]]

DATE_EPOCH = date(1990, 1, 1)


def get_bool(bytearray_: Buffer, byte_index: int, bool_index: int) -> bool:
    """Get the boolean value from location in bytearray

    Args:
        bytearray_: buffer data.
        byte_index: byte index to read from.
        bool_index: bit index to read from, 0 is the least significant bit.

    Returns:
        True if the bit is 1, else False.

    Examples:
        >>> buffer = bytearray([0b00000101])
        >>> get_bool(buffer, 0, 2)  # The bit 0 starts at the right.
        True
    """
    byte_value = read_window(bytearray_, byte_index, 1, bool_index)[0]
    return bool((byte_value >> bool_index) & 1)


def get_byte(bytearray_: Buffer, byte_index: int) -> int:
    """Get byte value from bytearray.

    Notes:
        BYTE 8bit 1bytes Decimal number unsigned B#(0) to B#(255) => 0 to 255

    Args:
        bytearray_: buffer to be read from.
        byte_index: byte index to be read.

    Returns:
        value get from the byte index.
    """
    value: int = struct.unpack("B", read_window(bytearray_, byte_index, 1))[0]
    return value


def get_word(bytearray_: Buffer, byte_index: int) -> int:
    """Get word value from bytearray.

    Notes:
        WORD 16bit 2bytes Decimal number unsigned B#(0,0) to B#(255,255) => 0 to 65535

    Args:
        bytearray_: buffer to get the word from.
        byte_index: byte index from where start reading from.

    Returns:
        Word value.

    Examples:
        >>> get_word(bytearray([0, 100]), 0)
        100
    """
    value: int = struct.unpack(">H", read_window(bytearray_, byte_index, 2))[0]
    return value


def get_int(bytearray_: Buffer, byte_index: int) -> int:
    """Get int value from bytearray.

    Notes:
        Datatype `int` in the PLC is represented in two bytes

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index to start reading from.

    Returns:
        Value read.

    Examples:
        >>> get_int(bytearray([0, 42]), 0)
        42
    """
    value: int = struct.unpack(">h", read_window(bytearray_, byte_index, 2))[0]
    return value


def get_uint(bytearray_: Buffer, byte_index: int) -> int:
    """Get unsigned int value from bytearray.

    Notes:
        Datatype `uint` in the PLC is represented in two bytes
        Maximum possible value is 65535.
        Lower possible value is 0.

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index to start reading from.

    Returns:
        Value read.

    Examples:
        >>> data = bytearray([255, 255])
        >>> get_uint(data, 0)
        65535
    """
    return get_word(bytearray_, byte_index)


def get_counter(bytearray_: Buffer, byte_index: int) -> int:
    """Get a counter value, stored with the same layout as a WORD."""
    return get_word(bytearray_, byte_index)


def get_real(bytearray_: Buffer, byte_index: int) -> float:
    """Get real value.

    Notes:
        Datatype `real` is represented in 4 bytes in the PLC.
        The packed representation uses the `IEEE 754 binary32`.

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index to reading from.

    Returns:
        Real value.

    Examples:
        >>> data = bytearray(b'B\\xf6\\xa4Z')
        >>> get_real(data, 0)
        123.32099914550781
    """
    real: float = struct.unpack(">f", read_window(bytearray_, byte_index, 4))[0]
    return real


def get_fstring(bytearray_: Buffer, byte_index: int, max_length: int, remove_padding: bool = True) -> str:
    """Parse space-padded fixed-length string from bytearray

    Notes:
        This function supports fixed-length ASCII strings, right-padded with spaces.

    Args:
        bytearray_: buffer from where to get the string.
        byte_index: byte index from where to start reading.
        max_length: the maximum length of the string.
        remove_padding: whether to remove the right-padding.

    Returns:
        String value.

    Examples:
        >>> data = [ord(letter) for letter in "hello world    "]
        >>> get_fstring(data, 0, 15)
        'hello world'
        >>> get_fstring(data, 0, 15, remove_padding=False)
        'hello world    '
    """
    string = read_window(bytearray_, byte_index, max_length).decode("latin-1")

    if remove_padding:
        return string.rstrip(" ")
    else:
        return string


def get_string(bytearray_: Buffer, byte_index: int) -> str:
    """Parse string from bytearray

    Notes:
        The first byte of the buffer will contain the max size possible for a string.
        The second byte contains the length of the string that contains.
        Capacity after the current length is ignored.

    Args:
        bytearray_: buffer from where to get the string.
        byte_index: byte index from where to start reading.

    Raises:
        :obj:`InvalidStringLengthError`: if the current length exceeds the max size
        or the remainder of the buffer.

    Returns:
        String value.

    Examples:
        >>> data = bytearray([10, 3]) + b"HI!" + bytearray(2)
        >>> get_string(data, 0)
        'HI!'
    """
    max_string_size, str_length = read_window(bytearray_, byte_index, 2)

    if str_length > max_string_size:
        logger.error("The string is longer than its declared max size")
        logger.error("WRONG SIZED STRING ENCOUNTERED")
        raise InvalidStringLengthError(
            f"String contains {str_length} chars, but max. {max_string_size} chars are expected. "
            "Bytearray doesn't seem to be a valid string."
        )
    available = len(bytearray_) - byte_index - 2
    if str_length > available:
        logger.error("The string runs past the end of the buffer")
        raise InvalidStringLengthError(
            f"String contains {str_length} chars, but only {available} bytes are left in the buffer."
        )
    return read_window(bytearray_, byte_index + 2, str_length).decode("latin-1")


def get_dword(bytearray_: Buffer, byte_index: int) -> int:
    """Gets the dword from the buffer.

    Notes:
        Datatype `dword` consists in 4 bytes in the PLC.
        The maximum value possible is `4294967295`

    Args:
        bytearray_: buffer to read.
        byte_index: byte index from where to start reading.

    Returns:
        Value read.

    Examples:
        >>> data = bytearray(b"\\x12\\x34\\xAB\\xCD")
        >>> get_dword(data, 0)
        305441741
    """
    dword: int = struct.unpack(">I", read_window(bytearray_, byte_index, 4))[0]
    return dword


def get_dint(bytearray_: Buffer, byte_index: int) -> int:
    """Get dint value from bytearray.

    Notes:
        Datatype `dint` consists in 4 bytes in the PLC.
        Maximum possible value is 2147483647.
        Lower possible value is -2147483648.

    Args:
        bytearray_: buffer to read.
        byte_index: byte index from where to start reading.

    Returns:
        Value read.

    Examples:
        >>> import struct
        >>> data = bytearray(4)
        >>> data[:] = struct.pack(">i", 2147483647)
        >>> get_dint(data, 0)
        2147483647
    """
    dint: int = struct.unpack(">i", read_window(bytearray_, byte_index, 4))[0]
    return dint


def get_udint(bytearray_: Buffer, byte_index: int) -> int:
    """Get unsigned dint value from bytearray.

    Notes:
        Datatype `udint` consists in 4 bytes in the PLC.
        Maximum possible value is 4294967295.
        Minimum possible value is 0.

    Args:
        bytearray_: buffer to read.
        byte_index: byte index from where to start reading.

    Returns:
        Value read.
    """
    return get_dword(bytearray_, byte_index)


def get_s5time(bytearray_: Buffer, byte_index: int) -> timedelta:
    """Get S5TIME value from bytearray.

    Notes:
        The high nibble of the first byte selects the time base
        (0: 1ms, 1: 10ms, 2: 100ms, 3: 1s), the other three nibbles hold
        a BCD count from 0 to 999.

    Examples:
        >>> get_s5time(bytearray([0x20, 0x15]), 0)
        datetime.timedelta(seconds=1, microseconds=500000)
    """
    data = read_window(bytearray_, byte_index, 2)
    time_base_nibble = data[0] >> 4
    if time_base_nibble not in S5TIME_TIME_BASES:
        raise InvalidBcdDigitError(
            data[0], byte_index, f"S5TIME time base {time_base_nibble} is invalid, expected a value in the range 0..3"
        )

    hundreds = data[0] & 0x0F
    if hundreds > 9:
        raise InvalidBcdDigitError(data[0], byte_index)
    s5time_bcd = hundreds * 100 + bcd_to_byte(data[1], byte_index + 1)
    return timedelta(milliseconds=s5time_bcd * S5TIME_TIME_BASES[time_base_nibble])


def get_dt(bytearray_: Buffer, byte_index: int) -> datetime:
    """Get DATE_AND_TIME value from bytearray as python datetime object

    Notes:
        Datatype `DATE_AND_TIME` consists in 8 BCD coded bytes in the PLC:
        year, month, day, hour, minute, second, the hundreds and tens of
        the milliseconds, and a last byte with the milliseconds unit in the
        high nibble and the weekday (1 = sunday) in the low nibble.
        The weekday is not used for decoding.

    Args:
        bytearray_: buffer to read.
        byte_index: byte index from where to start reading.

    Raises:
        :obj:`InvalidBcdDigitError`: if a nibble is not a decimal digit.
        :obj:`ValueOutOfDomainError`: if the fields do not form a valid date and time.

    Examples:
        >>> data = bytearray([32, 7, 18, 23, 50, 2, 133, 65])
        >>> get_dt(data, 0)
        datetime.datetime(2020, 7, 12, 17, 32, 2, 854000)
    """
    data = read_window(bytearray_, byte_index, 8)
    year, month, day, hour, min_, sec, msec_high = (bcd_to_byte(b, byte_index + i) for i, b in enumerate(data[:7]))
    msec_low, weekday = data[7] >> 4, data[7] & 0x0F
    if msec_low > 9 or weekday > 9:
        raise InvalidBcdDigitError(data[7], byte_index + 7)

    # between 1990 and 2089, only last two digits are saved in DB 90 - 89
    year = 2000 + year if year < 90 else 1900 + year
    try:
        return datetime(year, month, day, hour, min_, sec, (msec_high * 10 + msec_low) * 1000)
    except ValueError as e:
        raise ValueOutOfDomainError(f"DATE_AND_TIME at byte index {byte_index} is not a valid date: {e}") from e


def get_time(bytearray_: Buffer, byte_index: int) -> timedelta:
    """Get time value from bytearray.

    Notes:
        Datatype `time` consists in 4 bytes in the PLC, a signed number of milliseconds.
        Maximum possible value is T#24D_20H_31M_23S_647MS(2147483647).
        Lower possible value is T#-24D_20H_31M_23S_648MS(-2147483648).

    Args:
        bytearray_: buffer to read.
        byte_index: byte index from where to start reading.

    Returns:
        Value read.

    Examples:
        >>> get_time(bytearray([0, 0, 3, 232]), 0)
        datetime.timedelta(seconds=1)
    """
    return timedelta(milliseconds=get_dint(bytearray_, byte_index))


def get_usint(bytearray_: Buffer, byte_index: int) -> int:
    """Get the unsigned small int from the bytearray

    Notes:
        Datatype `usint` (Unsigned small int) consists on 1 byte in the PLC.
        Maximum possible value is 255.
        Lower possible value is 0.

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index from where to start reading.

    Returns:
        Value read.

    Examples:
        >>> data = bytearray([255])
        >>> get_usint(data, 0)
        255
    """
    return get_byte(bytearray_, byte_index)


def get_sint(bytearray_: Buffer, byte_index: int) -> int:
    """Get the small int

    Notes:
        Datatype `sint` (Small int) consists in 1 byte in the PLC.
        Maximum value possible is 127.
        Lowest value possible is -128.

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index from where to start reading.

    Returns:
        Value read.

    Examples:
        >>> data = bytearray([0xF6])
        >>> get_sint(data, 0)
        -10
    """
    value: int = struct.unpack(">b", read_window(bytearray_, byte_index, 1))[0]
    return value


def get_lint(bytearray_: Buffer, byte_index: int) -> int:
    """Get the long int

    Notes:
        Datatype `lint` (long int) consists in 8 bytes in the PLC.
        Maximum value possible is +9223372036854775807
        Lowest value possible is -9223372036854775808

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index from where to start reading.

    Returns:
        Value read.
    """
    lint: int = struct.unpack(">q", read_window(bytearray_, byte_index, 8))[0]
    return lint


def get_lreal(bytearray_: Buffer, byte_index: int) -> float:
    """Get the long real

    Datatype `lreal` (long real) consists in 8 bytes in the PLC.
    Negative Range: -1.7976931348623158e+308 to -2.2250738585072014e-308
    Positive Range: +2.2250738585072014e-308 to +1.7976931348623158e+308
    Zero: ±0

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index from where to start reading.

    Returns:
        The real value.

    Examples:
        >>> get_lreal(bytearray(b"\\x40\\x24\\x00\\x00\\x00\\x00\\x00\\x00"), 0)
        10.0
    """
    lreal: float = struct.unpack(">d", read_window(bytearray_, byte_index, 8))[0]
    return lreal


def get_lword(bytearray_: Buffer, byte_index: int) -> int:
    """Get the long word

    Notes:
        Datatype `lword` (long word) consists in 8 bytes in the PLC.
        Maximum value possible is 18446744073709551615.
        Lowest value possible is 0.

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index from where to start reading.

    Returns:
        Value read.

    Examples:
        >>> hex(get_lword(bytearray(b"\\x12\\x34\\x56\\x78\\x90\\xAB\\xCD\\xEF"), 0))
        '0x1234567890abcdef'
    """
    lword: int = struct.unpack(">Q", read_window(bytearray_, byte_index, 8))[0]
    return lword


def get_ulint(bytearray_: Buffer, byte_index: int) -> int:
    """Get ulint value from bytearray.

    Notes:
        Datatype `ulint` in the PLC is represented in 8 bytes

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index to start reading from.

    Returns:
        Value read.
    """
    return get_lword(bytearray_, byte_index)


def get_tod(bytearray_: Buffer, byte_index: int) -> timedelta:
    milliseconds = get_udint(bytearray_, byte_index)
    time_val = timedelta(milliseconds=milliseconds)
    if time_val.days >= 1:
        raise ValueOutOfDomainError(
            f"Time_Of_Day can't be extracted from bytearray, {milliseconds} ms is not less than 24 hours."
        )
    return time_val


def get_date(bytearray_: Buffer, byte_index: int = 0) -> date:
    return DATE_EPOCH + timedelta(days=get_word(bytearray_, byte_index))


def get_char(bytearray_: Buffer, byte_index: int) -> str:
    """Get char value from bytearray.

    Notes:
        Datatype `char` in the PLC is represented in 1 byte. It has to be in ASCII-format.

    Args:
        bytearray_: buffer to read from.
        byte_index: byte index to start reading from.

    Returns:
        Value read.

    Examples:
        >>> get_char(bytearray(b"C"), 0)
        'C'
    """
    return chr(get_byte(bytearray_, byte_index))
