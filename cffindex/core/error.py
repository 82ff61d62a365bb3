# cffindex - CFF INDEX Decoder
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CFF decoding errors.

Every failure is raised to the caller of the decoder; nothing here is
recovered locally.  A malformed font table fails the same way every time,
so callers abort the enclosing font load with the message as-is.
"""

from __future__ import annotations


class CFFError(Exception):
    """Error during CFF parsing."""
    pass


class OutOfRange(CFFError, IndexError):
    """An INDEX element was requested that has not been materialized."""

    def __init__(self, index_name: str, index: int) -> None:
        self.index_name = index_name
        self.index = index
        super().__init__(f"CFF {index_name} INDEX: invalid index: {index}")


class MalformedIndex(CFFError):
    """INDEX header fields describe an impossible layout."""

    def __init__(self, index_name: str, offset: int, reason: str) -> None:
        self.index_name = index_name
        self.offset = offset
        self.reason = reason
        super().__init__(f"CFF {index_name} INDEX at offset {offset}: {reason}")


class MalformedDict(CFFError):
    """DICT data is not a valid operand/operator sequence."""
    pass


class TruncatedBuffer(CFFError):
    """A read ran past the end of the underlying buffer."""

    def __init__(self, offset: int, size: int, length: int, context: str | None = None) -> None:
        self.offset = offset
        self.size = size
        self.length = length
        self.context = context
        message = f"{size} bytes at offset {offset} exceed buffer length {length}"
        if context:
            message = f"{context}: {message}"
        super().__init__(message)
