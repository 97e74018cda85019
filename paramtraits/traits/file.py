# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Param traits for file metadata and file error codes."""

from ..buffer import MessageReader, MessageWriter
from ..constants import FileError
from ..types import FileInfo
from .base import ParamTraits
from .primitives import EnumTraits, read_time, write_time


class FileErrorTraits(EnumTraits):
    enum_type = FileError


class FileInfoTraits(ParamTraits):
    """Size, three UTC timestamps and two flags, in that order."""

    def encode(self, value: FileInfo, writer: MessageWriter) -> None:
        writer.write_int64(value.size)
        write_time(writer, value.last_modified)
        write_time(writer, value.last_accessed)
        write_time(writer, value.creation_time)
        writer.write_bool(value.is_directory)
        writer.write_bool(value.is_symbolic_link)

    def decode(self, reader: MessageReader) -> FileInfo:
        size = reader.read_int64()
        last_modified = read_time(reader)
        last_accessed = read_time(reader)
        creation_time = read_time(reader)
        is_directory = reader.read_bool()
        return FileInfo(
            size=size,
            last_modified=last_modified,
            last_accessed=last_accessed,
            creation_time=creation_time,
            is_directory=is_directory,
            is_symbolic_link=reader.read_bool(),
        )

    def describe(self, value: FileInfo) -> str:
        return (
            f"({value.size}, {value.is_directory}, {value.last_modified.isoformat()}, "
            f"{value.last_accessed.isoformat()}, {value.creation_time.isoformat()}, {value.is_symbolic_link})"
        )
