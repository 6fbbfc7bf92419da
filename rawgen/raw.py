"""
Raw primitive types

Runtime support imported by generated code. A raw record stores its
fields in a fixed little-endian layout followed by a variable-length
region holding string bytes.
"""

import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

__all__ = [
    "MAX_WINDOW", "EPOCH", "dataclass", "datetime", "timedelta",
    "RawError", "WindowOverflowError", "TruncatedBufferError",
    "int8", "int16", "int32", "int64", "uint8", "uint16", "uint32", "uint64",
    "float32", "float64", "Time", "Duration", "String", "View",
]

# Largest addressable span of an encoded record, fixed region included.
MAX_WINDOW = 0xFFFF

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_NANOS_PER_MICRO = 1000
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class RawError(ValueError):
    """Base class for encode/decode failures"""


class WindowOverflowError(RawError):
    """A string region lies outside the addressable window"""


class TruncatedBufferError(RawError):
    """A buffer is shorter than the fixed region of its record"""


class _Int(int):
    bits = 64
    signed = True

    def __new__(cls, value=0):
        mask = (1 << cls.bits) - 1
        v = int(value) & mask
        if cls.signed and v >> (cls.bits - 1):
            v -= 1 << cls.bits
        return super().__new__(cls, v)


class int8(_Int):
    bits = 8


class int16(_Int):
    bits = 16


class int32(_Int):
    bits = 32


class int64(_Int):
    bits = 64


class uint8(_Int):
    bits = 8
    signed = False


class uint16(_Int):
    bits = 16
    signed = False


class uint32(_Int):
    bits = 32
    signed = False


class uint64(_Int):
    bits = 64
    signed = False


class float32(float):
    def __new__(cls, value=0.0):
        return super().__new__(cls, struct.unpack("<f", struct.pack("<f", float(value)))[0])


class float64(float):
    pass


def _check_int64(ns: int, what: str) -> int:
    if not _INT64_MIN <= ns <= _INT64_MAX:
        raise OverflowError(f"{what} out of int64 nanosecond range: {ns}")
    return ns


class Time(int):
    """Nanoseconds since the Unix epoch."""

    def __new__(cls, ns=0):
        return super().__new__(cls, _check_int64(int(ns), "time"))

    @classmethod
    def from_datetime(cls, value: datetime) -> "Time":
        # Naive values are taken as UTC.
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return cls(_nanos(value - EPOCH))

    def datetime(self) -> datetime:
        return EPOCH + timedelta(microseconds=int(self) // _NANOS_PER_MICRO)


class Duration(int):
    """Signed nanosecond count."""

    def __new__(cls, ns=0):
        return super().__new__(cls, _check_int64(int(ns), "duration"))

    @classmethod
    def from_timedelta(cls, value: timedelta) -> "Duration":
        return cls(_nanos(value))

    def timedelta(self) -> timedelta:
        return timedelta(microseconds=int(self) // _NANOS_PER_MICRO)


def _nanos(delta: timedelta) -> int:
    return ((delta.days * 86400 + delta.seconds) * 1000000 + delta.microseconds) * _NANOS_PER_MICRO


class String:
    """Descriptor locating a string inside the trailing region of a record.

    The descriptor occupies four bytes of the fixed region: a uint16 offset
    from the start of the record and a uint16 byte length.
    """

    __slots__ = ("offset", "length")

    def __init__(self, offset: int = 0, length: int = 0):
        self.offset = offset
        self.length = length

    def __repr__(self):
        return f"String(offset={self.offset}, length={self.length})"

    def __eq__(self, other):
        if not isinstance(other, String):
            return NotImplemented
        return (self.offset, self.length) == (other.offset, other.length)

    def encode(self, value: str, buf: bytearray) -> None:
        """Append value to buf and point this descriptor at it."""
        data = value.encode("utf-8")
        offset = len(buf)
        if offset + len(data) > MAX_WINDOW:
            raise WindowOverflowError(
                f"string of {len(data)} bytes at offset {offset} exceeds {MAX_WINDOW} byte window")
        buf.extend(data)
        self.offset = offset
        self.length = len(data)

    def raw_bytes(self, window) -> bytes:
        end = self.offset + self.length
        if end > len(window):
            raise WindowOverflowError(
                f"string at [{self.offset}:{end}] lies outside {len(window)} byte window")
        return bytes(window[self.offset:end])

    def value(self, window) -> str:
        return self.raw_bytes(window).decode("utf-8")


class View:
    """Zero-copy view over the head of an encoded record.

    Subclasses set `layout` to a little-endian struct format describing the
    fixed region; `size` is derived from it.
    """

    __slots__ = ("_buf",)

    layout = "<"
    size = 0

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.size = struct.calcsize(cls.layout)

    def __init__(self, b):
        buf = memoryview(b)
        if len(buf) < self.size:
            raise TruncatedBufferError(
                f"{type(self).__name__} needs {self.size} bytes, got {len(buf)}")
        self._buf = buf

    @classmethod
    def pack(cls, buf: bytearray, *values) -> None:
        """Write the fixed region into the head of buf."""
        struct.pack_into(cls.layout, buf, 0, *values)

    def read(self, fmt: str, offset: int):
        return struct.unpack_from(fmt, self._buf, offset)[0]

    def descriptor(self, offset: int) -> String:
        return String(*struct.unpack_from("<HH", self._buf, offset))

    def window(self):
        return self._buf[:MAX_WINDOW]
