"""Shared helpers and sample values for paramtraits tests."""

from datetime import datetime, timezone
from typing import Any

from paramtraits import (
    DevToolsInfo,
    FileError,
    FileInfo,
    HostPortPair,
    HttpResponseHeaders,
    Int64,
    LoadTimingInfo,
    MessageReader,
    MessageWriter,
    RequestStatus,
    RequestStatusCode,
    ResourceType,
    UploadData,
    UploadElementType,
    Url,
    read_param,
    write_param,
)


def encode(value: Any, value_type: type | None = None) -> bytes:
    writer = MessageWriter()
    write_param(writer, value, value_type)
    return writer.getvalue()


def decode(data: bytes, value_type: type) -> Any:
    """Decode one value and check that it used every byte."""
    reader = MessageReader(data)
    value = read_param(value_type, reader)
    assert reader.at_end(), f"{reader.remaining} bytes left over"
    return value


def round_trip(value: Any, value_type: type | None = None) -> Any:
    return decode(encode(value, value_type), value_type or type(value))


def make_upload_data() -> UploadData:
    upload = UploadData(identifier=Int64(1 << 40))
    upload.append_bytes(b"field=value&other=\x00\xff")
    upload.append_file_range(
        "/tmp/upload.bin",
        offset=16,
        length=4096,
        expected_modification_time=datetime(2011, 3, 4, 5, 6, 7, 890, tzinfo=timezone.utc),
    )
    upload.append_file_range("/tmp/whole.bin")
    upload.append_blob(Url("blob:http://example.com/2f6c2f1e"))
    return upload


def make_timing() -> LoadTimingInfo:
    return LoadTimingInfo(
        base_time=datetime(2011, 6, 1, 12, 0, 0, 123456, tzinfo=timezone.utc),
        dns_start=0,
        dns_end=12,
        connect_start=12,
        connect_end=40,
        send_start=41,
        send_end=42,
        receive_headers_start=43,
        receive_headers_end=90,
    )


def make_devtools() -> DevToolsInfo:
    return DevToolsInfo(
        http_status_code=200,
        http_status_text="OK",
        request_headers=[("Accept", "*/*"), ("User-Agent", "test")],
        response_headers=[("Content-Type", "text/html")],
        request_headers_text="GET / HTTP/1.1\r\nAccept: */*\r\n\r\n",
        response_headers_text="HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n\r\n",
    )


def make_headers() -> HttpResponseHeaders:
    return HttpResponseHeaders.from_http_text(
        "HTTP/1.1 404 Not Found\r\nContent-Type: text/plain\r\nSet-Cookie: a=1\r\nSet-Cookie: b=2\r\n\r\nbody"
    )


def make_file_info() -> FileInfo:
    return FileInfo(
        size=1 << 33,
        last_modified=datetime(2011, 1, 2, 3, 4, 5, 6, tzinfo=timezone.utc),
        last_accessed=datetime(2011, 1, 3, tzinfo=timezone.utc),
        creation_time=datetime(2010, 12, 31, 23, 59, 59, tzinfo=timezone.utc),
        is_directory=False,
        is_symbolic_link=True,
    )


# (value, value_type) pairs covering every registered application type
SAMPLES: list[tuple[Any, type]] = [
    (Url("http://example.com/path?q=1#frag"), Url),
    (ResourceType.STYLESHEET, ResourceType),
    (RequestStatus(status=RequestStatusCode.FAILED, error=-7), RequestStatus),
    (RequestStatus(status=RequestStatusCode.SUCCESS), RequestStatus),
    (make_upload_data(), UploadData),
    (None, UploadData),
    (HostPortPair(host="example.com", port=443), HostPortPair),
    (make_headers(), HttpResponseHeaders),
    (None, HttpResponseHeaders),
    (make_timing(), LoadTimingInfo),
    (LoadTimingInfo(), LoadTimingInfo),
    (make_devtools(), DevToolsInfo),
    (None, DevToolsInfo),
    (make_file_info(), FileInfo),
    (FileError.NOT_FOUND, FileError),
    (RequestStatusCode.CANCELED, RequestStatusCode),
    (UploadElementType.BLOB, UploadElementType),
]
