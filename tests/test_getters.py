import datetime
import pytest
import struct
import unittest

from s7marshal.error import (
    InvalidBcdDigitError,
    InvalidBitOffsetError,
    InvalidStringLengthError,
    OutOfRangeError,
    ValueOutOfDomainError,
)
from s7marshal.util import (
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


@pytest.mark.util
class TestGetters(unittest.TestCase):
    def test_get_int(self) -> None:
        self.assertEqual(get_int(bytearray([0x00, 0x2A]), 0), 42)
        self.assertEqual(get_int(bytearray([0xFF, 0xD6]), 0), -42)
        self.assertEqual(get_int(bytearray([0x80, 0x00]), 0), -32768)

    def test_get_int_out_of_range(self) -> None:
        data = bytearray(4)
        self.assertEqual(get_int(data, 2), 0)
        with self.assertRaises(OutOfRangeError):
            get_int(data, 3)

    def test_get_bool(self) -> None:
        data = bytearray([0x05])
        self.assertTrue(get_bool(data, 0, 2))
        self.assertTrue(get_bool(data, 0, 0))
        self.assertFalse(get_bool(data, 0, 1))
        self.assertFalse(get_bool(data, 0, 7))

    def test_get_bool_invalid_address(self) -> None:
        data = bytearray([0xFF])
        with self.assertRaises(InvalidBitOffsetError):
            get_bool(data, 0, 8)
        with self.assertRaises(InvalidBitOffsetError):
            get_bool(data, 0, -1)
        with self.assertRaises(OutOfRangeError):
            get_bool(data, 1, 0)

    def test_get_byte(self) -> None:
        data = bytearray([128, 255])
        self.assertEqual(get_byte(data, 0), 128)
        self.assertEqual(get_usint(data, 1), 255)
        self.assertEqual(get_sint(data, 1), -1)
        self.assertEqual(get_sint(bytearray([127]), 0), 127)

    def test_get_word(self) -> None:
        data = bytearray([0x12, 0x34])
        self.assertEqual(get_word(data, 0), 0x1234)
        self.assertEqual(get_uint(bytearray([255, 255]), 0), 65535)
        self.assertEqual(get_counter(data, 0), 0x1234)

    def test_get_dword(self) -> None:
        data = bytearray([0x12, 0x34, 0xAB, 0xCD])
        self.assertEqual(get_dword(data, 0), 0x1234ABCD)
        self.assertEqual(get_udint(bytearray([7, 91, 205, 21]), 0), 123456789)
        self.assertEqual(get_dint(bytearray([0xFF, 0xFF, 0xFF, 0xC6]), 0), -58)
        self.assertEqual(get_dint(bytearray([128, 0, 0, 0]), 0), -2147483648)

    def test_get_real(self) -> None:
        self.assertAlmostEqual(get_real(bytearray([0x40, 0x48, 0xF5, 0xC3]), 0), 3.14, places=6)
        self.assertEqual(get_real(bytearray([0x41, 0x20, 0x00, 0x00]), 0), 10.0)
        self.assertTrue(0.01 > (get_real(bytearray([68, 78, 211, 51]), 0) - 827.3) > -0.1)

    def test_get_lreal(self) -> None:
        data = bytearray([65, 157, 111, 52, 84, 126, 107, 117])
        self.assertEqual(get_lreal(data, 0), 123456789.123456789)

    def test_get_64_bit_integers(self) -> None:
        data = bytearray([0x12, 0x34, 0x56, 0x78, 0x90, 0xAB, 0xCD, 0xEF])
        self.assertEqual(get_lword(data, 0), 0x1234567890ABCDEF)
        self.assertEqual(get_ulint(data, 0), 0x1234567890ABCDEF)
        self.assertEqual(get_lint(bytearray([0xFF] * 7 + [0xC6]), 0), -58)
        with self.assertRaises(OutOfRangeError):
            get_lint(data, 1)

    def test_get_s5time(self) -> None:
        self.assertEqual(get_s5time(bytearray([0x20, 0x15]), 0), datetime.timedelta(milliseconds=1500))
        self.assertEqual(get_s5time(bytearray([0x00, 0x10]), 0), datetime.timedelta(milliseconds=10))
        self.assertEqual(get_s5time(bytearray([0x11, 0x50]), 0), datetime.timedelta(milliseconds=1500))
        self.assertEqual(get_s5time(bytearray([0x39, 0x99]), 0), datetime.timedelta(seconds=999))
        self.assertEqual(get_s5time(bytearray([0x09, 0x99]), 0), datetime.timedelta(milliseconds=999))

    def test_get_s5time_invalid_bcd(self) -> None:
        for data in ([0x0A, 0x00], [0x00, 0x0A], [0x00, 0xF0], [0x40, 0x00], [0xF0, 0x00]):
            with self.assertRaises(InvalidBcdDigitError):
                get_s5time(bytearray(data), 0)

    def test_get_dt(self) -> None:
        data = bytearray([32, 7, 18, 23, 50, 2, 133, 65])
        self.assertEqual(get_dt(data, 0), datetime.datetime(2020, 7, 12, 17, 32, 2, 854000))

    def test_get_dt_century(self) -> None:
        data = bytearray([0x99, 0x12, 0x31, 0x23, 0x59, 0x59, 0x99, 0x96])
        self.assertEqual(get_dt(data, 0), datetime.datetime(1999, 12, 31, 23, 59, 59, 999000))
        data = bytearray([0x89, 0x01, 0x01, 0x00, 0x00, 0x00, 0x00, 0x01])
        self.assertEqual(get_dt(data, 0), datetime.datetime(2089, 1, 1))
        data = bytearray([0x90, 0x01, 0x01, 0x00, 0x00, 0x00, 0x00, 0x02])
        self.assertEqual(get_dt(data, 0), datetime.datetime(1990, 1, 1))

    def test_get_dt_milliseconds_and_weekday(self) -> None:
        # high nibble of the last byte is the millisecond unit, low nibble the weekday
        data = bytearray([0x24, 0x01, 0x01, 0x00, 0x00, 0x00, 0x12, 0x32])
        self.assertEqual(get_dt(data, 0).microsecond, 123000)
        data[7] = 0x37
        self.assertEqual(get_dt(data, 0).microsecond, 123000)

    def test_get_dt_invalid_bcd(self) -> None:
        valid = [0x20, 0x07, 0x12, 0x17, 0x32, 0x02, 0x85, 0x41]
        for index in range(8):
            for bad_byte in (0xA0, 0x0F):
                data = bytearray(valid)
                data[index] = bad_byte
                with self.assertRaises(InvalidBcdDigitError):
                    get_dt(data, 0)

    def test_get_dt_invalid_date(self) -> None:
        data = bytearray([0x20, 0x13, 0x12, 0x17, 0x32, 0x02, 0x85, 0x41])
        with self.assertRaises(ValueOutOfDomainError):
            get_dt(data, 0)
        data = bytearray([0x20, 0x02, 0x30, 0x17, 0x32, 0x02, 0x85, 0x41])
        with self.assertRaises(ValueOutOfDomainError):
            get_dt(data, 0)

    def test_get_date(self) -> None:
        self.assertEqual(get_date(bytearray([45, 235]), 0), datetime.date(2022, 3, 9))
        self.assertEqual(get_date(bytearray([0x30, 0xD8]), 0), datetime.date(2024, 3, 27))
        self.assertEqual(get_date(bytearray([0, 0]), 0), datetime.date(1990, 1, 1))
        self.assertEqual(
            get_date(bytearray([0xFF, 0xFF]), 0), datetime.date(1990, 1, 1) + datetime.timedelta(days=65535)
        )

    def test_get_tod(self) -> None:
        data = bytearray([2, 179, 41, 128])
        self.assertEqual(get_tod(data, 0), datetime.timedelta(hours=12, minutes=34, seconds=56))
        data[:] = struct.pack(">I", 86399999)
        self.assertEqual(get_tod(data, 0), datetime.timedelta(days=1, milliseconds=-1))

    def test_get_tod_invalid(self) -> None:
        data = bytearray(struct.pack(">I", 86400000))
        with self.assertRaises(ValueOutOfDomainError):
            get_tod(data, 0)

    def test_get_time(self) -> None:
        test_values = [
            0,
            1,  # T#1MS
            1000,  # T#1S
            60000,  # T#1M
            3600000,  # T#1H
            86400000,  # T#1D
            2147483647,  # max range
            -1,  # T#-1MS
            -86400000,  # T#-1D
            -2147483648,  # min range
        ]

        data = bytearray(4)
        for value_to_test in test_values:
            data[:] = struct.pack(">i", value_to_test)
            self.assertEqual(get_time(data, 0), datetime.timedelta(milliseconds=value_to_test))

    def test_get_string(self) -> None:
        data = bytearray([0x0A, 0x03, ord("H"), ord("I"), ord("!"), 0, 0])
        self.assertEqual(get_string(data, 0), "HI!")

    def test_get_string_ignores_capacity(self) -> None:
        data = bytearray([4, 2]) + b"abcd"
        self.assertEqual(get_string(data, 0), "ab")
        self.assertEqual(get_string(bytearray([0, 0]), 0), "")

    def test_get_string_invalid_length(self) -> None:
        with self.assertRaises(InvalidStringLengthError):
            get_string(bytearray([2, 3]) + b"abc", 0)
        with self.assertRaises(InvalidStringLengthError):
            get_string(bytearray([10, 3]) + b"ab", 0)
        with self.assertRaises(OutOfRangeError):
            get_string(bytearray([10]), 0)

    def test_get_fstring(self) -> None:
        data = bytearray(ord(letter) for letter in "hello world    ")
        self.assertEqual(get_fstring(data, 0, 15), "hello world")
        self.assertEqual(get_fstring(data, 0, 15, remove_padding=False), "hello world    ")
        with self.assertRaises(OutOfRangeError):
            get_fstring(data, 0, 16)
        with self.assertRaises(OutOfRangeError):
            get_fstring(data, 0, -2)

    def test_get_char(self) -> None:
        self.assertEqual(get_char(bytearray([65]), 0), "A")

    def test_getters_do_not_modify(self) -> None:
        data = bytearray([32, 7, 18, 23, 50, 2, 133, 65])
        original = bytes(data)
        get_dt(data, 0)
        get_lint(data, 0)
        get_bool(data, 3, 4)
        self.assertEqual(bytes(data), original)

    def test_read_only_buffer(self) -> None:
        self.assertEqual(get_int(bytes([0x00, 0x2A]), 0), 42)
        self.assertEqual(get_word(memoryview(b"\x12\x34"), 0), 0x1234)


if __name__ == "__main__":
    unittest.main()
