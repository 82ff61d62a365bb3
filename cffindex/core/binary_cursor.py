# cffindex - CFF INDEX Decoder
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Binary Cursor

A position plus typed big-endian reads over a read-only byte buffer.
The cursor never copies or owns the buffer; read_bytes() returns a new
bytes object for the requested span only.

Positions are relative to base_offset, so a cursor built over a whole
OpenType file can address the embedded CFF table with CFF-relative
offsets (CFF offsets are always relative to the start of the CFF table).
"""

from __future__ import annotations

import struct

from .error import CFFError, TruncatedBuffer


class BinaryCursor:
    """Stateful reader with absolute seek and fixed-width unsigned reads."""

    __slots__ = ('_data', '_base', '_length', '_pos')

    def __init__(self, data: bytes | bytearray | memoryview, base_offset: int = 0) -> None:
        if base_offset < 0 or base_offset > len(data):
            raise TruncatedBuffer(base_offset, 0, len(data))
        self._data = data
        self._base = base_offset
        self._length = len(data) - base_offset
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def length(self) -> int:
        """Number of bytes addressable from position 0."""
        return self._length

    @property
    def remaining(self) -> int:
        return self._length - self._pos

    def tell(self) -> int:
        return self._pos

    def seek(self, offset: int) -> None:
        """Seek to an absolute position (relative to base_offset)."""
        if offset < 0 or offset > self._length:
            raise TruncatedBuffer(offset, 0, self._length)
        self._pos = offset

    def _take(self, size: int) -> int:
        """Reserve *size* bytes at the current position; return their absolute start."""
        if size < 0 or self._pos + size > self._length:
            raise TruncatedBuffer(self._pos, size, self._length)
        start = self._base + self._pos
        self._pos += size
        return start

    def read_uint8(self) -> int:
        """Read Card8 (unsigned byte)."""
        return self._data[self._take(1)]

    def read_uint16(self) -> int:
        """Read Card16 (unsigned 16-bit big-endian)."""
        return struct.unpack_from('>H', self._data, self._take(2))[0]

    def read_offset(self, width: int) -> int:
        """Read an offset of *width* bytes (1-4), big-endian unsigned."""
        if width == 1:
            return self.read_uint8()
        elif width == 2:
            return self.read_uint16()
        elif width == 3:
            start = self._take(3)
            return int.from_bytes(self._data[start:start + 3], 'big')
        elif width == 4:
            return struct.unpack_from('>I', self._data, self._take(4))[0]
        else:
            raise CFFError(f"Invalid offSize: {width}")

    def read_bytes(self, length: int) -> bytes:
        start = self._take(length)
        return bytes(self._data[start:start + length])

    def read_text(self, length: int) -> str:
        """Read *length* bytes as a string.

        CFF strings are ASCII in practice; Latin-1 maps every byte so
        non-conforming fonts still decode.
        """
        return self.read_bytes(length).decode('latin-1')
