"""Tests for the serializable value types."""

import os
from datetime import datetime, timezone

import pytest

from paramtraits import (
    FileInfo,
    HostPortPair,
    HttpResponseHeaders,
    LoadTimingInfo,
    RequestStatus,
    RequestStatusCode,
    UploadData,
    UploadElement,
    UploadElementType,
    Url,
)


def test_url_validity() -> None:
    """Test valid, invalid and empty URLs."""
    assert Url("https://example.com/x").is_valid
    assert Url("http://example.com").spec == "http://example.com/"

    invalid = Url("://broken")
    assert not invalid.is_valid
    assert invalid.spec == ""
    assert invalid.possibly_invalid_spec == "://broken"

    assert Url().is_empty
    assert not Url().is_valid


def test_url_equality_uses_canonical_spec() -> None:
    """Test that equivalent URL spellings compare equal."""
    assert Url("HTTP://EXAMPLE.com") == Url("http://example.com/")
    assert hash(Url("HTTP://EXAMPLE.com")) == hash(Url("http://example.com/"))
    assert Url("http://a.example/") != Url("http://b.example/")


def test_host_port_pair_from_string() -> None:
    """Test parsing host:port text."""
    assert HostPortPair.from_string("example.com:443") == HostPortPair(host="example.com", port=443)
    assert HostPortPair.from_string("[::1]:8080") == HostPortPair(host="::1", port=8080)
    assert HostPortPair(host="::1", port=8080).to_string() == "[::1]:8080"

    with pytest.raises(ValueError):
        HostPortPair.from_string("example.com")
    with pytest.raises(ValueError):
        HostPortPair.from_string("example.com:99999")


def test_request_status_error_only_for_failures() -> None:
    """Test that only canceled and failed statuses keep an error."""
    assert RequestStatus(status=RequestStatusCode.SUCCESS, error=-3).error == 0
    assert RequestStatus(status=RequestStatusCode.CANCELED, error=-3).error == -3
    assert RequestStatus(status=RequestStatusCode.IO_PENDING).is_success
    assert not RequestStatus(status=RequestStatusCode.FAILED, error=-2).is_success


def test_response_headers_parsing() -> None:
    """Test status line and header parsing."""
    headers = HttpResponseHeaders.from_http_text(
        "HTTP/1.0 503 Service Unavailable\nRetry-After: 10\nVary: Accept\nvary: Cookie\n"
    )

    assert headers.http_version == "HTTP/1.0"
    assert headers.response_code == 503
    assert headers.status_text == "Service Unavailable"
    assert headers.get_normalized_header("VARY") == "Accept, Cookie"
    assert headers.get_normalized_header("Missing") is None
    assert headers.raw_headers == (
        "HTTP/1.0 503 Service Unavailable\0Retry-After: 10\0Vary: Accept\0vary: Cookie\0\0"
    )


def test_response_headers_edit() -> None:
    """Test adding and removing headers."""
    headers = HttpResponseHeaders("HTTP/1.1 200 OK\0Set-Cookie: a=1\0Content-Type: text/html\0\0")
    headers.remove_header("set-cookie")
    headers.add_header("X-Frame-Options", "DENY")

    assert headers.headers == [("Content-Type", "text/html"), ("X-Frame-Options", "DENY")]


@pytest.mark.parametrize(
    "name,value",
    [
        ("X-A", "a\0b"),
        ("A:B", "c"),
        ("", "c"),
        ("   ", "c"),
        ("X\0Y", "c"),
        ("X\r\nY", "c"),
    ],
)
def test_response_headers_add_rejects_unparseable_lines(name: str, value: str) -> None:
    """Test that added headers must survive the raw header form."""
    headers = HttpResponseHeaders("HTTP/1.1 200 OK\0\0")
    with pytest.raises(ValueError):
        headers.add_header(name, value)
    assert headers.headers == []


def test_response_headers_added_line_round_trips() -> None:
    """Test that an accepted header line parses back unchanged."""
    headers = HttpResponseHeaders("HTTP/1.1 200 OK\0\0")
    headers.add_header(" X-Colon-Value ", " a:b ")
    assert HttpResponseHeaders(headers.raw_headers) == headers
    assert HttpResponseHeaders(headers.raw_headers).headers == [("X-Colon-Value", "a:b")]


def test_response_headers_default_code() -> None:
    """Test that a status line without a code reports 200."""
    assert HttpResponseHeaders("HTTP/0.9\0\0").response_code == 200


def test_response_headers_reject_bad_input() -> None:
    """Test that missing status lines and bad header lines are rejected."""
    with pytest.raises(ValueError):
        HttpResponseHeaders("")
    with pytest.raises(ValueError):
        HttpResponseHeaders("HTTP/1.1 200 OK\0no colon here\0\0")


def test_upload_data_builders() -> None:
    """Test the upload data append helpers."""
    upload = UploadData()
    upload.append_bytes(b"abc")
    upload.append_bytes(b"")
    upload.append_file_range("/tmp/f", offset=3, length=10)
    upload.append_blob(Url("blob:http://example.com/1"))

    assert len(upload.elements) == 3
    assert upload.get_content_length() == 3


def test_load_timing_requires_base_time_for_offsets() -> None:
    """Test that the null timing cannot carry offsets."""
    with pytest.raises(ValueError):
        LoadTimingInfo(dns_start=3)
    with pytest.raises(ValueError):
        LoadTimingInfo(base_time=datetime(2011, 1, 1, tzinfo=timezone.utc), dns_start=-5)

    timing = LoadTimingInfo(base_time=datetime(2011, 1, 1), dns_start=3)
    assert not timing.is_null
    assert timing.base_time.tzinfo == timezone.utc
    assert timing.offsets()["dns_start"] == 3


def test_file_info_naive_times_are_utc() -> None:
    """Test that naive file times are taken as UTC."""
    info = FileInfo(last_modified=datetime(2011, 1, 1, 12, 0))
    assert info.last_modified == datetime(2011, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_file_info_from_path(tmp_path) -> None:
    """Test building file info from the file system."""
    target = tmp_path / "data.bin"
    target.write_bytes(b"x" * 42)
    os.utime(target, (1_000_000_000, 1_300_000_000.5))

    info = FileInfo.from_path(target)
    assert info.size == 42
    assert not info.is_directory
    assert not info.is_symbolic_link
    assert info.last_modified == datetime(2011, 3, 13, 7, 6, 40, 500000, tzinfo=timezone.utc)
    assert info.last_accessed == datetime(2001, 9, 9, 1, 46, 40, tzinfo=timezone.utc)

    assert FileInfo.from_path(tmp_path).is_directory


def test_file_info_from_symlink(tmp_path) -> None:
    """Test that symbolic links are flagged and describe their target."""
    target = tmp_path / "target.txt"
    target.write_text("hello")
    link = tmp_path / "link.txt"
    try:
        link.symlink_to(target)
    except OSError:
        pytest.skip("symlinks not supported")

    info = FileInfo.from_path(link)
    assert info.is_symbolic_link
    assert info.size == 5


def test_upload_element_keeps_only_its_kind_fields() -> None:
    """Test that an element drops the fields of other kinds."""
    element = UploadElement(
        type=UploadElementType.FILE,
        file_path="/tmp/f",
        data=b"x",
        blob_url=Url("blob:http://example.com/1"),
    )
    assert element.file_path == "/tmp/f"
    assert element.data == b""
    assert element.blob_url == Url()
