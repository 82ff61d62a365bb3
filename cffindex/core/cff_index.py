# cffindex - CFF INDEX Decoder
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CFF INDEX Decoder

An INDEX is CFF's array container (Adobe TN#5176, section 5):

    Card16   count
    OffSize  offSize                  (absent when count == 0)
    Offset   offset[count + 1]        (each offSize bytes, 1-based)
    Card8    data[offset[count] - 1]

Element i occupies data bytes [offset[i] - 1, offset[i + 1] - 1).  An empty
INDEX is just the two count bytes.

Decoding is two-phase.  Constructing a CffIndex reads and validates the
header and offset array only, so the caller can step over the whole table
with get_length() without touching the data.  load_strings() or load_dict()
then materializes every element, after which get_element() serves them.
"""

import enum
import logging

from . import config
from .cff_dict import CffDict
from .error import MalformedIndex, OutOfRange, TruncatedBuffer

logger = logging.getLogger(__name__)


class IndexState(enum.Enum):
    HEADER_PARSED = 'header_parsed'
    LOADED = 'loaded'


class CffIndex:
    """A CFF INDEX: parsed header and offsets, lazily loaded elements."""

    # Element kinds
    TYPE_STRING = 1
    TYPE_DICT = 2

    __slots__ = (
        '_name', '_offset', '_kind', '_is_binary', '_count', '_off_size',
        '_offsets', '_elements', '_table_length', '_state', '_dict_operators',
    )

    def __init__(self, name: str, offset: int, kind: int, is_binary: bool, cursor) -> None:
        """Parse the INDEX header at *offset*.

        Args:
            name: Table name, used in diagnostics and error messages only.
            offset: Position of the INDEX in the cursor's buffer.
            kind: TYPE_STRING or TYPE_DICT.
            is_binary: Expose TYPE_STRING elements as bytes instead of str.
            cursor: BinaryCursor over the CFF data; left after the offset array.

        Raises:
            MalformedIndex: offSize outside 1-4, offsets not starting at 1
                or decreasing, or the table running past the buffer.
            TruncatedBuffer: the header itself runs past the buffer.
        """
        if kind not in (self.TYPE_STRING, self.TYPE_DICT):
            raise ValueError(f"unknown INDEX kind: {kind}")

        self._name = name
        self._offset = offset
        self._kind = kind
        self._is_binary = is_binary
        self._elements = []
        self._state = IndexState.HEADER_PARSED
        self._dict_operators = None

        try:
            cursor.seek(offset)
            self._count = cursor.read_uint16()

            # Handle an empty INDEX.
            if self._count == 0:
                self._off_size = 0
                self._offsets = ()
                self._table_length = 2
                return

            self._off_size = cursor.read_uint8()
            if not 1 <= self._off_size <= 4:
                raise MalformedIndex(name, offset, f"invalid offSize {self._off_size}")

            offsets = [cursor.read_offset(self._off_size) for _ in range(self._count + 1)]
        except TruncatedBuffer as exc:
            raise TruncatedBuffer(exc.offset, exc.size, exc.length,
                                  context=f"CFF {name} INDEX at offset {offset}") from exc

        if offsets[0] != 1:
            raise MalformedIndex(name, offset, f"first offset is {offsets[0]}, expected 1")
        for i in range(self._count):
            if offsets[i + 1] < offsets[i]:
                raise MalformedIndex(
                    name, offset,
                    f"offset[{i + 1}]={offsets[i + 1]} is less than offset[{i}]={offsets[i]}")
        self._offsets = tuple(offsets)

        self._table_length = (2 + 1 + (self._count + 1) * self._off_size
                              + self._offsets[self._count] - 1)
        if offset + self._table_length > cursor.length:
            raise MalformedIndex(
                name, offset,
                f"table length {self._table_length} exceeds the "
                f"{cursor.length - offset} bytes remaining in the buffer")

    # ------------------------------------------------------------------
    # Header queries
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def kind(self) -> int:
        return self._kind

    @property
    def is_binary(self) -> bool:
        return self._is_binary

    @property
    def count(self) -> int:
        return self._count

    @property
    def off_size(self) -> int:
        return self._off_size

    @property
    def offsets(self) -> tuple:
        return self._offsets

    @property
    def state(self) -> IndexState:
        return self._state

    @property
    def data_start(self) -> int:
        """Position of the first data byte."""
        if self._count == 0:
            return self._offset + 2
        return self._offset + 2 + 1 + (self._count + 1) * self._off_size

    def get_length(self) -> int:
        """Total byte length of the INDEX: header, offset array and data."""
        return self._table_length

    def element_length(self, index: int) -> int:
        """Byte length of element *index*, available before loading."""
        if not 0 <= index < self._count:
            raise OutOfRange(self._name, index)
        return self._offsets[index + 1] - self._offsets[index]

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def get_element(self, index: int):
        """Return a loaded element: bytes, str or CffDict.

        Raises:
            OutOfRange: *index* is not a loaded element, including any
                index before load_strings()/load_dict() has run.
        """
        if 0 <= index < len(self._elements):
            return self._elements[index]
        raise OutOfRange(self._name, index)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    def load_strings(self, cursor) -> None:
        """Load the INDEX strings (or binary spans if is_binary).

        Repositions *cursor* to the data region and leaves it at the end.
        Loading again re-reads and replaces the elements.
        """
        if self._count and self._kind != self.TYPE_STRING:
            raise MalformedIndex(self._name, self._offset, "load_strings() on a DICT INDEX")
        logger.info("loading %s INDEX (%d elements)", self._name, self._count)
        cursor.seek(self.data_start)
        elements = []
        for i in range(self._count):
            data_length = self._offsets[i + 1] - self._offsets[i]
            if self._is_binary:
                elements.append(cursor.read_bytes(data_length))
            else:
                elements.append(cursor.read_text(data_length))
        self._elements = elements
        self._state = IndexState.LOADED

    def load_dict(self, cursor) -> None:
        """Load the INDEX DICTs.

        Each element's bytes are decoded into a CffDict.  MalformedDict from
        the decoder propagates; the INDEX keeps no partial elements.
        """
        if self._count and self._kind != self.TYPE_DICT:
            raise MalformedIndex(self._name, self._offset, "load_dict() on a non-DICT INDEX")
        logger.info("loading %s INDEX (%d DICTs)", self._name, self._count)
        cursor.seek(self.data_start)
        elements = []
        for i in range(self._count):
            logger.debug("dict[%d]", i)
            length = self._offsets[i + 1] - self._offsets[i]
            cff_dict = CffDict(f"{self._name}{i}", cursor.read_bytes(length))
            if config.debug_enabled() and self._dict_operators is not None:
                cff_dict.set_operators(self._dict_operators)
            elements.append(cff_dict.init())
        self._elements = elements
        self._state = IndexState.LOADED

    # ------------------------------------------------------------------
    # Debug diagnostics
    # ------------------------------------------------------------------

    def set_dict_operators(self, dict_operators: dict) -> None:
        """Set the operator-name map used to display DICT entries."""
        _require_debug("set_dict_operators")
        self._dict_operators = dict_operators
        for element in self._elements:
            if isinstance(element, CffDict):
                element.set_operators(dict_operators)

    def display(self, show_data: bool = False, cff_table_offset: int = 0) -> None:
        """Log the INDEX structure.

        Args:
            show_data: Also log each element's contents.
            cff_table_offset: Offset of the CFF table in the font file,
                for the absolute position shown next to the INDEX offset.
        """
        _require_debug("display")
        logger.info("%s:", self._name)
        logger.info("  elements: %d", len(self._elements))
        logger.info("  offset: %d / 0x%x (0x%x)", self._offset, self._offset,
                    self._offset + cff_table_offset)

        if self._count != len(self._elements):
            logger.info("count(%d) != elements(%d)", self._count, len(self._elements))
            return
        for i in range(self._count):
            offset = self._offsets[i]
            line = f"  {i:3d}: {offset:3d} (0x{offset:x})"
            if not show_data:
                logger.info("%s", line)
                continue
            element = self._elements[i]
            if self._kind == self.TYPE_DICT:
                logger.info("%s", line)
                # display the dict operands/operators.
                for key in element.get_keys():
                    logger.info("    %s %s", element.get(key), element.operator_name(key))
            elif self._is_binary:
                logger.info("%s %s", line, element.hex(' '))
            else:
                logger.info('%s "%s"', line, element)

    def __repr__(self) -> str:
        return (f"CffIndex({self._name!r}, offset={self._offset}, count={self._count}, "
                f"off_size={self._off_size}, length={self._table_length}, "
                f"state={self._state.name})")


def _require_debug(method: str) -> None:
    if not config.debug_enabled():
        raise RuntimeError(
            f"CffIndex.{method}() is a debug diagnostic; enable it with "
            f"CFFINDEX_DEBUG=1 or config.enable_debug()")
