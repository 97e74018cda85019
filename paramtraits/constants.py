# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Wire constants and enum discriminants for paramtraits."""

from enum import IntEnum

# ----------------------------------------------------------------------------
# Message constants
# ----------------------------------------------------------------------------

SCHEMA_VERSION = 0x01  # Leading byte of every packed parameter message
SUPPORTED_SCHEMA_VERSIONS = frozenset({SCHEMA_VERSION})

BYTE_ORDER = "<"  # All multi-byte scalars are little-endian

# ----------------------------------------------------------------------------
# Limits
# ----------------------------------------------------------------------------

DEFAULT_INITIAL_CAPACITY = 64  # Bytes preallocated by a MessageWriter
MAX_URL_CHARS = 2 * 1024 * 1024  # 2 MiB
MAX_DESCRIBE_CHARS = 1024  # Longest string returned by describe()

TIMING_SENTINEL = -1  # Unset load-timing field


# ----------------------------------------------------------------------------
# Resource types
# ----------------------------------------------------------------------------


class ResourceType(IntEnum):
    """Kind of resource a request loads."""

    MAIN_FRAME = 0  # Top level page
    SUB_FRAME = 1  # Frame or iframe
    STYLESHEET = 2
    SCRIPT = 3
    IMAGE = 4
    FONT_RESOURCE = 5
    SUB_RESOURCE = 6  # "Other" resource
    OBJECT = 7  # <object> or <embed>
    MEDIA = 8
    WORKER = 9  # Dedicated worker script
    SHARED_WORKER = 10
    PREFETCH = 11
    FAVICON = 12


# ----------------------------------------------------------------------------
# Request status
# ----------------------------------------------------------------------------


class RequestStatusCode(IntEnum):
    """Outcome of a network request."""

    SUCCESS = 0
    IO_PENDING = 1
    HANDLED_EXTERNALLY = 2
    CANCELED = 3
    FAILED = 4


# Statuses whose wire form carries the error detail
STATUS_CODES_WITH_DETAIL = frozenset({RequestStatusCode.CANCELED, RequestStatusCode.FAILED})


# ----------------------------------------------------------------------------
# Upload data
# ----------------------------------------------------------------------------


class UploadElementType(IntEnum):
    """Kind of a single upload element."""

    BYTES = 0
    FILE = 1
    BLOB = 2


# ----------------------------------------------------------------------------
# File errors
# ----------------------------------------------------------------------------


class FileError(IntEnum):
    """Platform file operation error codes."""

    OK = 0
    FAILED = -1
    IN_USE = -2
    EXISTS = -3
    NOT_FOUND = -4
    ACCESS_DENIED = -5
    TOO_MANY_OPENED = -6
    NO_MEMORY = -7
    NO_SPACE = -8
    NOT_A_DIRECTORY = -9
    INVALID_OPERATION = -10
    SECURITY = -11
    ABORT = -12
    NOT_A_FILE = -13
    NOT_EMPTY = -14
