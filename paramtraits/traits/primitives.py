# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Param traits for built-in scalar, string and time values.

The helpers at the bottom are shared by the record traits for fields
that are not registered types of their own (optional times, header
pair lists).
"""

from datetime import datetime, timedelta
from enum import IntEnum
from typing import TypeVar

from ..buffer import MessageReader, MessageWriter
from ..constants import MAX_DESCRIBE_CHARS
from ..errors import MalformedError
from ..types import EPOCH, Int64, normalize_time
from .base import ParamTraits, truncate

MAX_BYTES_TO_LOG = 100
_MICROSECOND = timedelta(microseconds=1)

E = TypeVar("E", bound=IntEnum)


class BoolTraits(ParamTraits):
    def encode(self, value: bool, writer: MessageWriter) -> None:
        writer.write_bool(value)

    def decode(self, reader: MessageReader) -> bool:
        return reader.read_bool()

    def describe(self, value: bool) -> str:
        return "true" if value else "false"


class IntTraits(ParamTraits):
    """Signed 32-bit integer."""

    def encode(self, value: int, writer: MessageWriter) -> None:
        writer.write_int32(value)

    def decode(self, reader: MessageReader) -> int:
        return reader.read_int32()

    def describe(self, value: int) -> str:
        return str(int(value))


class Int64Traits(ParamTraits):
    """Signed 64-bit integer."""

    def encode(self, value: int, writer: MessageWriter) -> None:
        writer.write_int64(value)

    def decode(self, reader: MessageReader) -> Int64:
        return Int64(reader.read_int64())

    def describe(self, value: int) -> str:
        return str(int(value))


class FloatTraits(ParamTraits):
    def encode(self, value: float, writer: MessageWriter) -> None:
        writer.write_double(value)

    def decode(self, reader: MessageReader) -> float:
        return reader.read_double()

    def describe(self, value: float) -> str:
        return f"{value:e}"


class StringTraits(ParamTraits):
    """UTF-8 string with a byte length prefix."""

    def encode(self, value: str, writer: MessageWriter) -> None:
        writer.write_string(value)

    def decode(self, reader: MessageReader) -> str:
        return reader.read_string()

    def describe(self, value: str) -> str:
        return describe_string(value)


class BytesTraits(ParamTraits):
    def encode(self, value: bytes, writer: MessageWriter) -> None:
        writer.write_data(value)

    def decode(self, reader: MessageReader) -> bytes:
        return reader.read_data()

    def describe(self, value: bytes) -> str:
        return describe_bytes(value)


class TimeTraits(ParamTraits):
    """UTC time as int64 microseconds since the Unix epoch."""

    def encode(self, value: datetime, writer: MessageWriter) -> None:
        write_time(writer, value)

    def decode(self, reader: MessageReader) -> datetime:
        return read_time(reader)

    def describe(self, value: datetime) -> str:
        return normalize_time(value).isoformat()


class EnumTraits(ParamTraits):
    """Int enum carried as its int32 discriminant.

    Subclasses set enum_type; discriminants outside it are rejected.
    """

    enum_type: type[IntEnum]

    def encode(self, value: IntEnum, writer: MessageWriter) -> None:
        writer.write_int32(int(value))

    def decode(self, reader: MessageReader) -> IntEnum:
        return read_enum(reader, self.enum_type)

    def describe(self, value: IntEnum) -> str:
        return value.name


# ----------------------------------------------------------------------------
# Shared field helpers
# ----------------------------------------------------------------------------


def time_to_micros(value: datetime) -> int:
    return (normalize_time(value) - EPOCH) // _MICROSECOND


def micros_to_time(micros: int) -> datetime:
    try:
        return EPOCH + timedelta(microseconds=micros)
    except OverflowError as exc:
        raise MalformedError(f"Time out of range: {micros} us") from exc


def write_time(writer: MessageWriter, value: datetime) -> None:
    writer.write_int64(time_to_micros(value))


def read_time(reader: MessageReader) -> datetime:
    return micros_to_time(reader.read_int64())


def write_optional_time(writer: MessageWriter, value: datetime | None) -> None:
    writer.write_bool(value is not None)
    if value is not None:
        write_time(writer, value)


def read_optional_time(reader: MessageReader) -> datetime | None:
    if not reader.read_bool():
        return None
    return read_time(reader)


def write_string_pairs(writer: MessageWriter, pairs: list[tuple[str, str]]) -> None:
    writer.write_length(len(pairs))
    for name, value in pairs:
        writer.write_string(name)
        writer.write_string(value)


def read_string_pairs(reader: MessageReader) -> list[tuple[str, str]]:
    count = reader.read_length()
    pairs = []
    for _ in range(count):
        name = reader.read_string()
        pairs.append((name, reader.read_string()))
    return pairs


def describe_string(value: str) -> str:
    return truncate(repr(value[: MAX_DESCRIBE_CHARS + 1]))


def describe_bytes(value: bytes) -> str:
    """Printable bytes as-is, others as [XX], capped at MAX_BYTES_TO_LOG."""
    out = []
    for byte in value[:MAX_BYTES_TO_LOG]:
        out.append(chr(byte) if 0x20 <= byte < 0x7F else f"[{byte:02X}]")
    if len(value) > MAX_BYTES_TO_LOG:
        out.append(f" and {len(value) - MAX_BYTES_TO_LOG} more bytes")
    return "".join(out)


def read_enum(reader: MessageReader, enum_type: type[E]) -> E:
    raw = reader.read_int32()
    try:
        return enum_type(raw)
    except ValueError as exc:
        raise MalformedError(f"Unknown {enum_type.__name__} discriminant {raw}") from exc
