# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Decode errors raised by readers and param traits."""


class DecodeError(ValueError):
    """Base class for failures while decoding a parameter message."""


class TruncatedError(DecodeError):
    """Fewer bytes remain than the value's encoding requires.

    The transport should treat the message as incomplete and discard it.
    """


class MalformedError(DecodeError):
    """Bytes are present but violate an invariant of the decoded type.

    The transport should treat the message as corrupt and discard it.
    """
