# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Param traits registry.

Each registered Python type maps to exactly one shared traits instance.
Dispatch is a dictionary lookup on the value's exact type, falling back
to its registered base classes in MRO order.
"""

import logging
from datetime import datetime
from typing import Any

from ..buffer import MessageReader, MessageWriter
from ..constants import FileError, RequestStatusCode, ResourceType, UploadElementType
from ..types import (
    DevToolsInfo,
    FileInfo,
    HostPortPair,
    HttpResponseHeaders,
    Int64,
    LoadTimingInfo,
    RequestStatus,
    UploadData,
    Url,
)
from .base import ParamTraits, truncate
from .file import FileErrorTraits, FileInfoTraits
from .loader import DevToolsInfoTraits, LoadTimingInfoTraits, ResourceTypeTraits
from .net import (
    HostPortPairTraits,
    HttpResponseHeadersTraits,
    RequestStatusCodeTraits,
    RequestStatusTraits,
    UploadDataTraits,
    UploadElementTypeTraits,
    UrlTraits,
)
from .primitives import (
    BoolTraits,
    BytesTraits,
    EnumTraits,
    FloatTraits,
    Int64Traits,
    IntTraits,
    StringTraits,
    TimeTraits,
)

__all__ = [
    "ParamTraits",
    "EnumTraits",
    "register_traits",
    "get_traits",
    "list_traits",
    "write_param",
    "read_param",
    "log_param",
]


# Traits registry
_TRAITS: dict[type, ParamTraits] = {}


def register_traits(value_type: type, traits_class: type[ParamTraits]) -> None:
    """Register the traits implementation for a value type."""
    if value_type in _TRAITS:
        raise ValueError(f"Param traits already registered for {value_type.__name__}")
    _TRAITS[value_type] = traits_class()


def get_traits(value_type: type) -> ParamTraits:
    """Get the shared traits instance for a value type."""
    traits = _TRAITS.get(value_type)
    if traits is not None:
        return traits
    for base in value_type.__mro__[1:]:
        traits = _TRAITS.get(base)
        if traits is not None:
            return traits
    raise ValueError(f"Unsupported param type: {value_type.__name__}")


def list_traits() -> list[type]:
    """List all registered value types."""
    return list(_TRAITS.keys())


def _resolve(value: Any, value_type: type | None) -> ParamTraits:
    if value_type is None:
        if value is None:
            raise ValueError("A value_type is required to write or describe None")
        value_type = type(value)
    return get_traits(value_type)


def write_param(writer: MessageWriter, value: Any, value_type: type | None = None) -> None:
    """Append value using the traits of value_type, or of type(value) if not given."""
    _resolve(value, value_type).encode(value, writer)


def read_param(value_type: type, reader: MessageReader) -> Any:
    """Read one value of value_type from reader."""
    return get_traits(value_type).decode(reader)


def log_param(value: Any, out: list[str] | None = None, value_type: type | None = None) -> str:
    """Describe value for logging, appending the text to out when given.

    Never raises: values without a usable description render as
    "<unprintable TypeName>".
    """
    try:
        text = truncate(_resolve(value, value_type).describe(value))
    except Exception as exc:
        logging.debug("Describing %s failed: %s", type(value).__name__, exc)
        text = f"<unprintable {type(value).__name__}>"
    if out is not None:
        out.append(text)
    return text


# Register default traits
register_traits(bool, BoolTraits)
register_traits(int, IntTraits)
register_traits(Int64, Int64Traits)
register_traits(float, FloatTraits)
register_traits(str, StringTraits)
register_traits(bytes, BytesTraits)
register_traits(datetime, TimeTraits)
register_traits(Url, UrlTraits)
register_traits(ResourceType, ResourceTypeTraits)
register_traits(RequestStatusCode, RequestStatusCodeTraits)
register_traits(RequestStatus, RequestStatusTraits)
register_traits(UploadElementType, UploadElementTypeTraits)
register_traits(UploadData, UploadDataTraits)
register_traits(HostPortPair, HostPortPairTraits)
register_traits(HttpResponseHeaders, HttpResponseHeadersTraits)
register_traits(LoadTimingInfo, LoadTimingInfoTraits)
register_traits(DevToolsInfo, DevToolsInfoTraits)
register_traits(FileInfo, FileInfoTraits)
register_traits(FileError, FileErrorTraits)
