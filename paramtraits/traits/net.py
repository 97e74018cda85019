# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Param traits for URLs and network request/response values."""

from ..buffer import MessageReader, MessageWriter
from ..constants import MAX_URL_CHARS, STATUS_CODES_WITH_DETAIL, RequestStatusCode, UploadElementType
from ..errors import MalformedError
from ..types import HostPortPair, HttpResponseHeaders, RequestStatus, UploadData, UploadElement, Url
from .base import ParamTraits, truncate
from .primitives import EnumTraits, describe_string, read_enum, read_optional_time, write_optional_time


class UrlTraits(ParamTraits):
    """URL as its canonical spec string.

    Invalid and overlong URLs are sent as the empty string.
    """

    def encode(self, value: Url, writer: MessageWriter) -> None:
        spec = value.spec
        writer.write_string(spec if len(spec) <= MAX_URL_CHARS else "")

    def decode(self, reader: MessageReader) -> Url:
        spec = reader.read_string()
        if len(spec) > MAX_URL_CHARS:
            raise MalformedError(f"URL of {len(spec)} chars exceeds {MAX_URL_CHARS}")
        return Url(spec)

    def describe(self, value: Url) -> str:
        return truncate(value.possibly_invalid_spec)


class RequestStatusCodeTraits(EnumTraits):
    enum_type = RequestStatusCode


class UploadElementTypeTraits(EnumTraits):
    enum_type = UploadElementType


class RequestStatusTraits(ParamTraits):
    """Status discriminant followed by the error for canceled and failed requests."""

    def encode(self, value: RequestStatus, writer: MessageWriter) -> None:
        writer.write_int32(int(value.status))
        if value.status in STATUS_CODES_WITH_DETAIL:
            writer.write_int32(value.error)

    def decode(self, reader: MessageReader) -> RequestStatus:
        status = read_enum(reader, RequestStatusCode)
        error = reader.read_int32() if status in STATUS_CODES_WITH_DETAIL else 0
        return RequestStatus(status=status, error=error)

    def describe(self, value: RequestStatus) -> str:
        return f"({value.status.name}, {value.error})"


class HostPortPairTraits(ParamTraits):
    def encode(self, value: HostPortPair, writer: MessageWriter) -> None:
        writer.write_string(value.host)
        writer.write_uint16(value.port)

    def decode(self, reader: MessageReader) -> HostPortPair:
        host = reader.read_string()
        return HostPortPair(host=host, port=reader.read_uint16())

    def describe(self, value: HostPortPair) -> str:
        return truncate(value.to_string())


class UploadDataTraits(ParamTraits):
    """Nullable upload data.

    Wire form: presence flag, element count, elements, then the int64
    identifier when present. A null value is the flag and a zero count.
    """

    def encode(self, value: UploadData | None, writer: MessageWriter) -> None:
        if value is None:
            writer.write_bool(False)
            writer.write_length(0)
            return
        writer.write_bool(True)
        writer.write_length(len(value.elements))
        for element in value.elements:
            self._encode_element(element, writer)
        writer.write_int64(value.identifier)

    def decode(self, reader: MessageReader) -> UploadData | None:
        present = reader.read_bool()
        count = reader.read_length()
        if not present:
            if count:
                raise MalformedError(f"Null upload data with {count} elements")
            return None
        elements = [self._decode_element(reader) for _ in range(count)]
        return UploadData(elements=elements, identifier=reader.read_int64())

    def describe(self, value: UploadData | None) -> str:
        if value is None:
            return "null"
        return f"UploadData({len(value.elements)} elements, identifier={value.identifier})"

    def _encode_element(self, element: UploadElement, writer: MessageWriter) -> None:
        writer.write_int32(int(element.type))
        if element.type == UploadElementType.BYTES:
            writer.write_data(element.data)
        elif element.type == UploadElementType.FILE:
            writer.write_string(element.file_path)
            writer.write_uint64(element.file_range_offset)
            writer.write_uint64(element.file_range_length)
            write_optional_time(writer, element.expected_file_modification_time)
        else:
            _URL_TRAITS.encode(element.blob_url, writer)

    def _decode_element(self, reader: MessageReader) -> UploadElement:
        kind = read_enum(reader, UploadElementType)
        if kind == UploadElementType.BYTES:
            return UploadElement(type=kind, data=reader.read_data())
        if kind == UploadElementType.FILE:
            path = reader.read_string()
            offset = reader.read_uint64()
            length = reader.read_uint64()
            return UploadElement(
                type=kind,
                file_path=path,
                file_range_offset=offset,
                file_range_length=length,
                expected_file_modification_time=read_optional_time(reader),
            )
        return UploadElement(type=kind, blob_url=_URL_TRAITS.decode(reader))


class HttpResponseHeadersTraits(ParamTraits):
    """Nullable response headers as a presence flag and the raw header block."""

    def encode(self, value: HttpResponseHeaders | None, writer: MessageWriter) -> None:
        writer.write_bool(value is not None)
        if value is not None:
            writer.write_string(value.raw_headers)

    def decode(self, reader: MessageReader) -> HttpResponseHeaders | None:
        if not reader.read_bool():
            return None
        raw = reader.read_string()
        try:
            return HttpResponseHeaders(raw)
        except ValueError as exc:
            raise MalformedError(f"Bad response headers: {exc}") from exc

    def describe(self, value: HttpResponseHeaders | None) -> str:
        if value is None:
            return "null"
        return f"HttpResponseHeaders({describe_string(value.status_line)}, {len(value.headers)} headers)"


_URL_TRAITS = UrlTraits()
