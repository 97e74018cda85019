# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Serializable value types carried by param traits.

These are plain data definitions with no dependency on the transport or
on any of the subsystems that produce them. Records are pydantic models
so that invalid values are rejected when they are built, never on the
wire.
"""

import os
import stat
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from .constants import (
    STATUS_CODES_WITH_DETAIL,
    TIMING_SENTINEL,
    RequestStatusCode,
    UploadElementType,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1
UINT64_MAX = 2**64 - 1


def normalize_time(value: datetime) -> datetime:
    """Return value as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def time_from_timestamp(seconds: float) -> datetime:
    """Convert a platform timestamp in seconds to a UTC datetime."""
    return EPOCH + timedelta(microseconds=round(seconds * 1_000_000))


class Int64(int):
    """Integer that travels as a signed 64-bit value instead of int32."""


# ----------------------------------------------------------------------------
# URL
# ----------------------------------------------------------------------------

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


class Url:
    """Parsed URL holding its canonical serialization.

    An unparseable URL is kept as invalid: its spec is empty and the
    original text is only available through possibly_invalid_spec. Two
    URLs are equal when their canonical specs are equal.
    """

    __slots__ = ("_spec", "_raw")

    def __init__(self, text: str = "") -> None:
        self._raw = text
        self._spec = ""
        if text:
            try:
                self._spec = str(_URL_ADAPTER.validate_python(text))
            except ValidationError:
                pass

    @property
    def spec(self) -> str:
        return self._spec

    @property
    def possibly_invalid_spec(self) -> str:
        return self._spec or self._raw

    @property
    def is_valid(self) -> bool:
        return bool(self._spec)

    @property
    def is_empty(self) -> bool:
        return not self._raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Url):
            return NotImplemented
        return self._spec == other._spec

    def __hash__(self) -> int:
        return hash(self._spec)

    def __str__(self) -> str:
        return self.possibly_invalid_spec

    def __repr__(self) -> str:
        return f"Url({self.possibly_invalid_spec!r})"


# ----------------------------------------------------------------------------
# Network records
# ----------------------------------------------------------------------------


class RequestStatus(BaseModel):
    """Status of a request and, for canceled or failed requests, its error."""

    status: RequestStatusCode = RequestStatusCode.SUCCESS
    error: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX, description="Network error code")

    @model_validator(mode="after")
    def drop_unused_error(self) -> "RequestStatus":
        # Only canceled and failed statuses carry an error on the wire
        if self.status not in STATUS_CODES_WITH_DETAIL and self.error:
            self.error = 0
        return self

    @property
    def is_success(self) -> bool:
        return self.status in (RequestStatusCode.SUCCESS, RequestStatusCode.IO_PENDING)


class HostPortPair(BaseModel):
    """Host name and TCP port."""

    host: str
    port: int = Field(..., ge=0, le=0xFFFF)

    @classmethod
    def from_string(cls, text: str) -> "HostPortPair":
        """Parse "host:port", accepting bracketed IPv6 literals."""
        host, sep, port = text.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(f"Invalid host:port pair: {text!r}")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        return cls(host=host, port=int(port))

    def to_string(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"


class HttpResponseHeaders:
    """Response status line and header lines.

    The raw form is the status line followed by one "name: value" line per
    header, each terminated by a NUL, with an extra NUL at the end.
    """

    def __init__(self, raw_headers: str) -> None:
        lines = [line for line in raw_headers.split("\0") if line.strip()]
        if not lines:
            raise ValueError("Response headers lack a status line")
        self._status_line = lines[0].strip()
        self._headers: list[tuple[str, str]] = []
        for line in lines[1:]:
            name, sep, value = line.partition(":")
            if not sep or not name.strip():
                raise ValueError(f"Malformed header line: {line!r}")
            self._headers.append((name.strip(), value.strip()))

    @classmethod
    def from_http_text(cls, text: str) -> "HttpResponseHeaders":
        """Build from CRLF or LF separated header text, stopping at the blank line."""
        head = text.replace("\r\n", "\n").split("\n\n", 1)[0]
        return cls("\0".join(head.split("\n")))

    @property
    def raw_headers(self) -> str:
        lines = [self._status_line] + [f"{name}: {value}" for name, value in self._headers]
        return "\0".join(lines) + "\0\0"

    @property
    def status_line(self) -> str:
        return self._status_line

    @property
    def http_version(self) -> str:
        return self._status_line.split(" ", 1)[0]

    @property
    def response_code(self) -> int:
        parts = self._status_line.split(" ", 2)
        if len(parts) > 1 and parts[1].isdigit():
            return int(parts[1])
        return 200

    @property
    def status_text(self) -> str:
        parts = self._status_line.split(" ", 2)
        return parts[2] if len(parts) > 2 else ""

    @property
    def headers(self) -> list[tuple[str, str]]:
        return list(self._headers)

    def has_header(self, name: str) -> bool:
        return any(key.lower() == name.lower() for key, _ in self._headers)

    def get_header_values(self, name: str) -> list[str]:
        return [value for key, value in self._headers if key.lower() == name.lower()]

    def get_normalized_header(self, name: str) -> str | None:
        """Return all values of a header joined by ", ", or None if absent."""
        values = self.get_header_values(name)
        return ", ".join(values) if values else None

    def add_header(self, name: str, value: str) -> None:
        """Append a header line.

        Raises:
            ValueError: If the line could not be parsed back from the raw form
        """
        name, value = name.strip(), value.strip()
        if not name or any(char in name for char in ":\0\r\n"):
            raise ValueError(f"Invalid header name: {name!r}")
        if "\0" in value:
            raise ValueError(f"Invalid value for header {name}: {value!r}")
        self._headers.append((name, value))

    def remove_header(self, name: str) -> None:
        self._headers = [(key, value) for key, value in self._headers if key.lower() != name.lower()]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpResponseHeaders):
            return NotImplemented
        return self.raw_headers == other.raw_headers

    def __repr__(self) -> str:
        return f"HttpResponseHeaders({self._status_line!r}, {len(self._headers)} headers)"


# ----------------------------------------------------------------------------
# Upload data
# ----------------------------------------------------------------------------


class UploadElement(BaseModel):
    """One piece of a request body: inline bytes, a file range or a blob."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: UploadElementType = UploadElementType.BYTES
    data: bytes = b""
    file_path: str = ""
    file_range_offset: int = Field(default=0, ge=0, le=UINT64_MAX)
    file_range_length: int = Field(default=UINT64_MAX, ge=0, le=UINT64_MAX)
    expected_file_modification_time: datetime | None = None
    blob_url: Url = Field(default_factory=Url)

    @field_validator("expected_file_modification_time")
    @classmethod
    def normalize_modification_time(cls, value: datetime | None) -> datetime | None:
        return None if value is None else normalize_time(value)

    @model_validator(mode="after")
    def drop_unused_fields(self) -> "UploadElement":
        # Each kind carries only its own fields on the wire
        if self.type != UploadElementType.BYTES:
            self.data = b""
        if self.type != UploadElementType.FILE:
            self.file_path = ""
            self.file_range_offset = 0
            self.file_range_length = UINT64_MAX
            self.expected_file_modification_time = None
        if self.type != UploadElementType.BLOB:
            self.blob_url = Url()
        return self


class UploadData(BaseModel):
    """Request body made of upload elements."""

    elements: list[UploadElement] = Field(default_factory=list)
    identifier: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)

    def append_bytes(self, data: bytes) -> None:
        if data:
            self.elements.append(UploadElement(type=UploadElementType.BYTES, data=data))

    def append_file_range(
        self,
        file_path: str,
        offset: int = 0,
        length: int = UINT64_MAX,
        expected_modification_time: datetime | None = None,
    ) -> None:
        self.elements.append(
            UploadElement(
                type=UploadElementType.FILE,
                file_path=file_path,
                file_range_offset=offset,
                file_range_length=length,
                expected_file_modification_time=expected_modification_time,
            )
        )

    def append_blob(self, blob_url: Url) -> None:
        self.elements.append(UploadElement(type=UploadElementType.BLOB, blob_url=blob_url))

    def get_content_length(self) -> int:
        """Length of the inline byte elements; file and blob sizes are unknown here."""
        return sum(len(element.data) for element in self.elements if element.type == UploadElementType.BYTES)


# ----------------------------------------------------------------------------
# Loader records
# ----------------------------------------------------------------------------

TIMING_OFFSET_FIELDS = (
    "proxy_start",
    "proxy_end",
    "dns_start",
    "dns_end",
    "connect_start",
    "connect_end",
    "ssl_start",
    "ssl_end",
    "send_start",
    "send_end",
    "receive_headers_start",
    "receive_headers_end",
)


class LoadTimingInfo(BaseModel):
    """Request phase timings in milliseconds relative to base_time.

    A record without base_time is the null timing: every offset is unset.
    """

    base_time: datetime | None = None
    proxy_start: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    proxy_end: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    dns_start: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    dns_end: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    connect_start: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    connect_end: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    ssl_start: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    ssl_end: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    send_start: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    send_end: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    receive_headers_start: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)
    receive_headers_end: int = Field(default=TIMING_SENTINEL, ge=TIMING_SENTINEL, le=INT64_MAX)

    @field_validator("base_time")
    @classmethod
    def check_base_time(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        value = normalize_time(value)
        if value < EPOCH:
            raise ValueError("base_time precedes the Unix epoch")
        return value

    @model_validator(mode="after")
    def check_null_timing(self) -> "LoadTimingInfo":
        if self.base_time is None and any(value != TIMING_SENTINEL for value in self.offsets().values()):
            raise ValueError("Timing offsets require a base_time")
        return self

    @property
    def is_null(self) -> bool:
        return self.base_time is None

    def offsets(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in TIMING_OFFSET_FIELDS}


class DevToolsInfo(BaseModel):
    """Raw request and response details shown by developer tools."""

    http_status_code: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)
    http_status_text: str = ""
    request_headers: list[tuple[str, str]] = Field(default_factory=list)
    response_headers: list[tuple[str, str]] = Field(default_factory=list)
    request_headers_text: str = ""
    response_headers_text: str = ""


class FileInfo(BaseModel):
    """Metadata of a file as reported by the platform.

    Timestamps are stored as UTC datetimes regardless of how the platform
    reports them.
    """

    size: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)
    last_modified: datetime = EPOCH
    last_accessed: datetime = EPOCH
    creation_time: datetime = EPOCH
    is_directory: bool = False
    is_symbolic_link: bool = False

    @field_validator("last_modified", "last_accessed", "creation_time")
    @classmethod
    def normalize_times(cls, value: datetime) -> datetime:
        return normalize_time(value)

    @classmethod
    def from_stat(cls, result: os.stat_result, is_symbolic_link: bool = False) -> "FileInfo":
        """Build from os.stat()/os.lstat() output.

        Creation time is st_birthtime where the platform provides it and
        st_ctime otherwise.
        """
        created: Any = getattr(result, "st_birthtime", None)
        if created is None:
            created = result.st_ctime
        return cls(
            size=result.st_size,
            last_modified=time_from_timestamp(result.st_mtime),
            last_accessed=time_from_timestamp(result.st_atime),
            creation_time=time_from_timestamp(created),
            is_directory=stat.S_ISDIR(result.st_mode),
            is_symbolic_link=is_symbolic_link or stat.S_ISLNK(result.st_mode),
        )

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> "FileInfo":
        """Stat path without following a final symbolic link."""
        result = os.lstat(path)
        if stat.S_ISLNK(result.st_mode):
            return cls.from_stat(os.stat(path), is_symbolic_link=True)
        return cls.from_stat(result)
