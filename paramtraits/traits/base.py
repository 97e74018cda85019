# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Base interface for param traits."""

from abc import ABC, abstractmethod
from typing import Any

from ..buffer import MessageReader, MessageWriter
from ..constants import MAX_DESCRIBE_CHARS


def truncate(text: str, limit: int = MAX_DESCRIBE_CHARS) -> str:
    """Clip text to limit characters, marking the cut with "..."."""
    if len(text) <= limit:
        return text
    return text[: max(limit - 3, 0)] + "..."


class ParamTraits(ABC):
    """Encode, decode and describe rules for one value type.

    Implementations keep no per-call state, so one instance serves every
    writer and reader in the process.
    """

    @abstractmethod
    def encode(self, value: Any, writer: MessageWriter) -> None:
        """Append the wire form of value to writer."""
        pass

    @abstractmethod
    def decode(self, reader: MessageReader) -> Any:
        """Consume one value from reader.

        Raises:
            TruncatedError: If the buffer ends before the value does
            MalformedError: If the bytes violate the type's invariants
        """
        pass

    def describe(self, value: Any) -> str:
        """Return a short human-readable rendering for logs."""
        return truncate(repr(value))
