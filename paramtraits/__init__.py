# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
r"""paramtraits - Typed parameter serialization for inter-process messages.

Each serializable type has param traits that encode a value into a
message buffer, decode it back from a bounds-checked cursor, and
describe it for logs. The package provides:
- MessageWriter/MessageReader buffer adapter with little-endian scalars
- Param traits for URLs, resource types, request status, upload data,
  host:port pairs, response headers, load timing, dev-tools info,
  file info and file errors, plus built-in scalars and strings
- A registry mapping each type to its traits
- Schema-versioned, CRC32C-checked parameter messages
"""

# Import public API from modules
from .buffer import FixedWidth, MessageReader, MessageWriter
from .constants import (
    DEFAULT_INITIAL_CAPACITY,
    MAX_DESCRIBE_CHARS,
    MAX_URL_CHARS,
    SCHEMA_VERSION,
    TIMING_SENTINEL,
    FileError,
    RequestStatusCode,
    ResourceType,
    UploadElementType,
)
from .errors import DecodeError, MalformedError, TruncatedError
from .message import (
    ParamMessage,
    pack_params,
    read_from,
    unpack_params,
    write_into,
)
from .traits import (
    EnumTraits,
    ParamTraits,
    get_traits,
    list_traits,
    log_param,
    read_param,
    register_traits,
    write_param,
)
from .types import (
    DevToolsInfo,
    FileInfo,
    HostPortPair,
    HttpResponseHeaders,
    Int64,
    LoadTimingInfo,
    RequestStatus,
    UploadData,
    UploadElement,
    Url,
)

# Public API exports
__all__ = [
    # Buffer adapter
    "MessageWriter",
    "MessageReader",
    "FixedWidth",
    # Errors
    "DecodeError",
    "TruncatedError",
    "MalformedError",
    # Value types
    "Url",
    "Int64",
    "RequestStatus",
    "HostPortPair",
    "HttpResponseHeaders",
    "UploadData",
    "UploadElement",
    "LoadTimingInfo",
    "DevToolsInfo",
    "FileInfo",
    # Constants and enums
    "SCHEMA_VERSION",
    "DEFAULT_INITIAL_CAPACITY",
    "MAX_URL_CHARS",
    "MAX_DESCRIBE_CHARS",
    "TIMING_SENTINEL",
    "ResourceType",
    "RequestStatusCode",
    "UploadElementType",
    "FileError",
    # Traits registry
    "ParamTraits",
    "EnumTraits",
    "register_traits",
    "get_traits",
    "list_traits",
    "write_param",
    "read_param",
    "log_param",
    # Messages
    "ParamMessage",
    "pack_params",
    "unpack_params",
    "write_into",
    "read_from",
]
