# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Param traits for resource loader records."""

from ..buffer import MessageReader, MessageWriter
from ..constants import TIMING_SENTINEL, ResourceType
from ..errors import MalformedError
from ..types import TIMING_OFFSET_FIELDS, DevToolsInfo, LoadTimingInfo
from .base import ParamTraits, truncate
from .primitives import (
    EnumTraits,
    describe_string,
    micros_to_time,
    read_string_pairs,
    time_to_micros,
    write_string_pairs,
)


class ResourceTypeTraits(EnumTraits):
    enum_type = ResourceType


class LoadTimingInfoTraits(ParamTraits):
    """Thirteen int64 values: base time in microseconds, then millisecond offsets.

    The null timing is thirteen sentinels.
    """

    def encode(self, value: LoadTimingInfo, writer: MessageWriter) -> None:
        if value.base_time is None:
            writer.write_int64(TIMING_SENTINEL)
        else:
            writer.write_int64(time_to_micros(value.base_time))
        for name in TIMING_OFFSET_FIELDS:
            writer.write_int64(getattr(value, name))

    def decode(self, reader: MessageReader) -> LoadTimingInfo:
        base = reader.read_int64()
        offsets = {name: reader.read_int64() for name in TIMING_OFFSET_FIELDS}
        for name, offset in offsets.items():
            if offset < TIMING_SENTINEL:
                raise MalformedError(f"Timing field {name} is {offset}")
        if base == TIMING_SENTINEL:
            if any(offset != TIMING_SENTINEL for offset in offsets.values()):
                raise MalformedError("Null timing carries offsets")
            return LoadTimingInfo()
        if base < 0:
            raise MalformedError(f"Timing base time is {base}")
        return LoadTimingInfo(base_time=micros_to_time(base), **offsets)

    def describe(self, value: LoadTimingInfo) -> str:
        if value.base_time is None:
            return "null"
        fields = ", ".join(f"{name}={getattr(value, name)}" for name in TIMING_OFFSET_FIELDS)
        return truncate(f"({value.base_time.isoformat()}, {fields})")


class DevToolsInfoTraits(ParamTraits):
    """Nullable dev-tools record; null is the single presence byte."""

    def encode(self, value: DevToolsInfo | None, writer: MessageWriter) -> None:
        writer.write_bool(value is not None)
        if value is None:
            return
        writer.write_int32(value.http_status_code)
        writer.write_string(value.http_status_text)
        write_string_pairs(writer, value.request_headers)
        write_string_pairs(writer, value.response_headers)
        writer.write_string(value.request_headers_text)
        writer.write_string(value.response_headers_text)

    def decode(self, reader: MessageReader) -> DevToolsInfo | None:
        if not reader.read_bool():
            return None
        code = reader.read_int32()
        text = reader.read_string()
        request_headers = read_string_pairs(reader)
        response_headers = read_string_pairs(reader)
        request_text = reader.read_string()
        return DevToolsInfo(
            http_status_code=code,
            http_status_text=text,
            request_headers=request_headers,
            response_headers=response_headers,
            request_headers_text=request_text,
            response_headers_text=reader.read_string(),
        )

    def describe(self, value: DevToolsInfo | None) -> str:
        if value is None:
            return "null"
        return (
            f"({value.http_status_code}, {describe_string(value.http_status_text)}, "
            f"{len(value.request_headers)} request headers, {len(value.response_headers)} response headers)"
        )

