# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Schema-versioned parameter messages.

Layout (little-endian):

    VERSION (1 byte) | BODY_LEN (4 bytes) | BODY | CRC32C(BODY) (4 bytes)

BODY is the concatenated wire form of each parameter, written by its
param traits. The version byte lets the parameter encodings change
without silently breaking older peers.
"""

import logging
from collections.abc import Sequence
from typing import Any

from google_crc32c import Checksum

from .buffer import FixedWidth, MessageReader, MessageWriter
from .constants import DEFAULT_INITIAL_CAPACITY, SCHEMA_VERSION, SUPPORTED_SCHEMA_VERSIONS
from .errors import DecodeError, MalformedError
from .traits import read_param, write_param

HEADER_SIZE = 5
CRC_SIZE = 4


def crc32c(data: bytes) -> int:
    """CRC32C of data as an unsigned int."""
    crc = Checksum()
    crc.update(data)
    return int.from_bytes(crc.digest(), "big")


class ParamMessage:
    """Builder for one parameter message."""

    def __init__(self, schema_version: int = SCHEMA_VERSION, capacity: int = DEFAULT_INITIAL_CAPACITY) -> None:
        self.schema_version = schema_version
        self._writer = MessageWriter(capacity)
        self._count = 0

    def write(self, value: Any, value_type: type | None = None) -> "ParamMessage":
        """Append one parameter and return self for chaining."""
        write_param(self._writer, value, value_type)
        self._count += 1
        return self

    @property
    def param_count(self) -> int:
        return self._count

    @property
    def params_size(self) -> int:
        return len(self._writer)

    def to_bytes(self) -> bytes:
        body = self._writer.getvalue()
        out = MessageWriter(HEADER_SIZE + len(body) + CRC_SIZE)
        out.write_fixed(FixedWidth.UINT8, self.schema_version)
        out.write_uint32(len(body))
        out.write_bytes(body)
        out.write_uint32(crc32c(body))
        logging.debug(
            "Packed param message v%d: %d params, %d body bytes", self.schema_version, self._count, len(body)
        )
        return out.getvalue()


def pack_params(*values: Any, types: Sequence[type | None] | None = None) -> bytes:
    """Pack values into a parameter message.

    Args:
        values: Parameters in wire order
        types: Optional value type per parameter; required for None values

    Returns:
        Packed message bytes
    """
    if types is not None and len(types) != len(values):
        raise ValueError(f"Got {len(types)} types for {len(values)} values")
    message = ParamMessage()
    for index, value in enumerate(values):
        message.write(value, types[index] if types is not None else None)
    return message.to_bytes()


def _read_message(reader: MessageReader, types: Sequence[type]) -> list[Any]:
    version = reader.read_fixed(FixedWidth.UINT8)
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        raise MalformedError(f"Unsupported schema version {version}")
    body = reader.read_bytes(reader.read_uint32())
    expected_crc = reader.read_uint32()
    if crc32c(body) != expected_crc:
        raise MalformedError("CRC32C mismatch")

    body_reader = MessageReader(body)
    values = [read_param(value_type, body_reader) for value_type in types]
    if not body_reader.at_end():
        raise MalformedError(f"{body_reader.remaining} bytes left after {len(types)} params")
    return values


def read_from(data: bytes | bytearray | memoryview, offset: int, types: Sequence[type]) -> tuple[list[Any], int]:
    """Read one parameter message starting at offset.

    Returns:
        The decoded values and the offset just past the message

    Raises:
        TruncatedError: If the message is incomplete
        MalformedError: If the version, checksum or any parameter is invalid
    """
    reader = MessageReader(data, offset)
    try:
        values = _read_message(reader, types)
    except DecodeError as exc:
        logging.warning("Rejected param message at offset %d: %s", offset, exc)
        raise
    logging.debug("Unpacked param message: %d params, %d bytes", len(values), reader.offset - offset)
    return values, reader.offset


def unpack_params(data: bytes | bytearray | memoryview, types: Sequence[type]) -> list[Any]:
    """Unpack a parameter message that spans all of data."""
    values, end = read_from(data, 0, types)
    if end != len(memoryview(data)):
        logging.warning("Rejected param message: %d trailing bytes", len(memoryview(data)) - end)
        raise MalformedError(f"{len(memoryview(data)) - end} bytes after message")
    return values


def write_into(
    buffer: bytearray | memoryview,
    offset: int,
    *values: Any,
    types: Sequence[type | None] | None = None,
) -> int:
    """Pack values into a caller-provided buffer at offset.

    Returns:
        Number of bytes written

    Raises:
        ValueError: If the message does not fit
    """
    data = pack_params(*values, types=types)
    view = memoryview(buffer).cast("B")
    end = offset + len(data)
    if offset < 0 or end > len(view):
        raise ValueError(f"Message of {len(data)} bytes does not fit at offset {offset} of {len(view)}")
    view[offset:end] = data
    return len(data)
