# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Message buffer adapter: growable writer and bounds-checked reader.

Every byte a param trait writes or reads goes through these two classes.
Scalars are packed little-endian with no alignment or padding, and
variable-length data is prefixed with a signed 32-bit length.
"""

import struct
from enum import Enum

from .constants import BYTE_ORDER, DEFAULT_INITIAL_CAPACITY
from .errors import MalformedError, TruncatedError

# ----------------------------------------------------------------------------
# Fixed-width scalars
# ----------------------------------------------------------------------------


class FixedWidth(Enum):
    """Fixed-width scalar kinds, valued by their struct format character."""

    UINT8 = "B"
    UINT16 = "H"
    INT32 = "i"
    UINT32 = "I"
    INT64 = "q"
    UINT64 = "Q"
    DOUBLE = "d"

    @property
    def size(self) -> int:
        return _STRUCTS[self].size


_STRUCTS: dict[FixedWidth, struct.Struct] = {kind: struct.Struct(BYTE_ORDER + kind.value) for kind in FixedWidth}


# ----------------------------------------------------------------------------
# Writer
# ----------------------------------------------------------------------------


class MessageWriter:
    """Append-only byte buffer that doubles its storage when full."""

    def __init__(self, capacity: int = DEFAULT_INITIAL_CAPACITY) -> None:
        self._buf = bytearray(max(capacity, 1))
        self._size = 0

    def __len__(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._buf)

    def _reserve(self, n: int) -> int:
        """Make room for n more bytes and return the write position."""
        start = self._size
        needed = start + n
        if needed > len(self._buf):
            new_capacity = len(self._buf)
            while new_capacity < needed:
                new_capacity *= 2
            self._buf.extend(bytes(new_capacity - len(self._buf)))
        self._size = needed
        return start

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Append raw bytes without a length prefix."""
        start = self._reserve(len(data))
        self._buf[start : self._size] = data

    def write_fixed(self, kind: FixedWidth, value: int | float) -> None:
        """Append a fixed-width scalar."""
        packer = _STRUCTS[kind]
        start = self._reserve(packer.size)
        packer.pack_into(self._buf, start, value)

    def write_bool(self, value: bool) -> None:
        self.write_fixed(FixedWidth.UINT8, 1 if value else 0)

    def write_uint16(self, value: int) -> None:
        self.write_fixed(FixedWidth.UINT16, value)

    def write_int32(self, value: int) -> None:
        self.write_fixed(FixedWidth.INT32, value)

    def write_uint32(self, value: int) -> None:
        self.write_fixed(FixedWidth.UINT32, value)

    def write_int64(self, value: int) -> None:
        self.write_fixed(FixedWidth.INT64, value)

    def write_uint64(self, value: int) -> None:
        self.write_fixed(FixedWidth.UINT64, value)

    def write_double(self, value: float) -> None:
        self.write_fixed(FixedWidth.DOUBLE, value)

    def write_length(self, n: int) -> None:
        """Append an element count or byte length."""
        self.write_int32(n)

    def write_data(self, data: bytes | bytearray | memoryview) -> None:
        """Append length-prefixed bytes."""
        self.write_length(len(data))
        self.write_bytes(data)

    def write_string(self, text: str) -> None:
        """Append a length-prefixed UTF-8 string."""
        self.write_data(text.encode("utf-8"))

    def getvalue(self) -> bytes:
        """Return a copy of the bytes written so far."""
        return bytes(self._buf[: self._size])


# ----------------------------------------------------------------------------
# Reader
# ----------------------------------------------------------------------------


class MessageReader:
    """Cursor over a received byte buffer.

    Reads never go past the end of the buffer: a short buffer raises
    TruncatedError. Returned bytes are copies, so callers never hold on
    to the transport's storage.
    """

    def __init__(self, data: bytes | bytearray | memoryview, offset: int = 0) -> None:
        self._view = memoryview(data).cast("B")
        if not 0 <= offset <= len(self._view):
            raise ValueError(f"Offset {offset} outside buffer of {len(self._view)} bytes")
        self._pos = offset

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._view) - self._pos

    def at_end(self) -> bool:
        return self._pos == len(self._view)

    def _advance(self, n: int) -> int:
        if n < 0:
            raise MalformedError(f"Negative read length {n}")
        if n > self.remaining:
            raise TruncatedError(f"Need {n} bytes at offset {self._pos}, {self.remaining} remain")
        start = self._pos
        self._pos += n
        return start

    def read_bytes(self, n: int) -> bytes:
        """Read exactly n raw bytes."""
        start = self._advance(n)
        return bytes(self._view[start : self._pos])

    def read_fixed(self, kind: FixedWidth) -> int | float:
        """Read a fixed-width scalar."""
        unpacker = _STRUCTS[kind]
        start = self._advance(unpacker.size)
        return unpacker.unpack_from(self._view, start)[0]

    def read_bool(self) -> bool:
        value = self.read_fixed(FixedWidth.UINT8)
        if value not in (0, 1):
            raise MalformedError(f"Invalid bool byte {value:#04x}")
        return value == 1

    def read_uint16(self) -> int:
        return int(self.read_fixed(FixedWidth.UINT16))

    def read_int32(self) -> int:
        return int(self.read_fixed(FixedWidth.INT32))

    def read_uint32(self) -> int:
        return int(self.read_fixed(FixedWidth.UINT32))

    def read_int64(self) -> int:
        return int(self.read_fixed(FixedWidth.INT64))

    def read_uint64(self) -> int:
        return int(self.read_fixed(FixedWidth.UINT64))

    def read_double(self) -> float:
        return float(self.read_fixed(FixedWidth.DOUBLE))

    def read_length(self) -> int:
        """Read an element count or byte length, rejecting negatives."""
        n = self.read_int32()
        if n < 0:
            raise MalformedError(f"Negative length field {n}")
        return n

    def read_data(self) -> bytes:
        """Read length-prefixed bytes."""
        return self.read_bytes(self.read_length())

    def read_string(self) -> str:
        """Read a length-prefixed UTF-8 string."""
        raw = self.read_data()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedError(f"Invalid UTF-8 string: {exc}") from exc
