"""
Getters and setters for the raw bytearray data read from or written to a PLC.

Every function works on a buffer supplied by the caller, at a byte index
(and a bit index for booleans), and never keeps a reference to the buffer.

example::

    >>> from s7marshal.util import get_int, set_bool
    >>> data = bytearray([0x00, 0x2A, 0x05])
    >>> get_int(data, 0)
    42
    >>> set_bool(data, 2, 0, False)
    bytearray(b'\\x00*\\x04')
"""

from .address import (
    check_window,  # noqa: F401
    read_window,  # noqa: F401
    write_window,  # noqa: F401
    parse_address,  # noqa: F401
)

from .setters import (
    set_bool,  # noqa: F401
    set_fstring,  # noqa: F401
    set_string,  # noqa: F401
    set_real,  # noqa: F401
    set_dword,  # noqa: F401
    set_udint,  # noqa: F401
    set_dint,  # noqa: F401
    set_uint,  # noqa: F401
    set_int,  # noqa: F401
    set_word,  # noqa: F401
    set_byte,  # noqa: F401
    set_usint,  # noqa: F401
    set_sint,  # noqa: F401
    set_time,  # noqa: F401
    set_s5time,  # noqa: F401
    set_dt,  # noqa: F401
    set_date,  # noqa: F401
    set_tod,  # noqa: F401
    set_lreal,  # noqa: F401
    set_lint,  # noqa: F401
    set_ulint,  # noqa: F401
    set_lword,  # noqa: F401
    set_char,  # noqa: F401
    set_counter,  # noqa: F401
)

from .getters import (
    get_bool,  # noqa: F401
    get_fstring,  # noqa: F401
    get_string,  # noqa: F401
    get_real,  # noqa: F401
    get_dword,  # noqa: F401
    get_udint,  # noqa: F401
    get_dint,  # noqa: F401
    get_uint,  # noqa: F401
    get_int,  # noqa: F401
    get_word,  # noqa: F401
    get_byte,  # noqa: F401
    get_s5time,  # noqa: F401
    get_dt,  # noqa: F401
    get_usint,  # noqa: F401
    get_sint,  # noqa: F401
    get_time,  # noqa: F401
    get_date,  # noqa: F401
    get_tod,  # noqa: F401
    get_lreal,  # noqa: F401
    get_lint,  # noqa: F401
    get_ulint,  # noqa: F401
    get_lword,  # noqa: F401
    get_char,  # noqa: F401
    get_counter,  # noqa: F401
)
