# cffindex - CFF INDEX Decoder
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CFF Table Reader

Walks the start of a CFF table:

    Header | Name INDEX | Top DICT INDEX | String INDEX | Global Subr INDEX

Each INDEX begins where the previous one ends, so only the header of each
is parsed up front and get_length() gives the next position.  Contents are
loaded on request with load().
"""

import logging

from .binary_cursor import BinaryCursor
from .cff_dict import CffDict, PRIVATE_DICT_OPERATORS, TOP_DICT_OPERATORS
from .cff_index import CffIndex, IndexState
from .error import CFFError
from . import config

logger = logging.getLogger(__name__)

# Top DICT operator holding the CharStrings INDEX offset
_CHARSTRINGS_OP = 17
_PRIVATE_OP = 18


class CffTable:
    """The header and top-level INDEXes of one CFF table."""

    def __init__(self, data):
        if len(data) < 4:
            raise CFFError("CFF data too short for header")

        self.cursor = BinaryCursor(data)
        self.major = self.cursor.read_uint8()
        self.minor = self.cursor.read_uint8()
        self.hdr_size = self.cursor.read_uint8()
        self.off_size = self.cursor.read_uint8()

        if self.major != 1:
            raise CFFError(f"Unsupported CFF major version: {self.major}")
        if self.hdr_size < 4:
            raise CFFError(f"Invalid CFF header size: {self.hdr_size}")

        offset = self.hdr_size
        self.name_index = CffIndex('Name', offset, CffIndex.TYPE_STRING, False, self.cursor)
        offset += self.name_index.get_length()
        self.top_dict_index = CffIndex('TopDICT', offset, CffIndex.TYPE_DICT, False, self.cursor)
        offset += self.top_dict_index.get_length()
        self.string_index = CffIndex('String', offset, CffIndex.TYPE_STRING, False, self.cursor)
        offset += self.string_index.get_length()
        self.global_subr_index = CffIndex('GlobalSubr', offset, CffIndex.TYPE_STRING, True,
                                          self.cursor)
        self.end_offset = offset + self.global_subr_index.get_length()
        logger.debug("CFF %d.%d: top-level INDEXes end at %d",
                     self.major, self.minor, self.end_offset)

    def indexes(self):
        return [self.name_index, self.top_dict_index, self.string_index,
                self.global_subr_index]

    def load(self):
        """Materialize the four top-level INDEXes."""
        if config.debug_enabled():
            self.top_dict_index.set_dict_operators(TOP_DICT_OPERATORS)
        self.name_index.load_strings(self.cursor)
        self.top_dict_index.load_dict(self.cursor)
        self.string_index.load_strings(self.cursor)
        self.global_subr_index.load_strings(self.cursor)
        return self

    def font_names(self):
        if self.name_index.state is not IndexState.LOADED:
            self.name_index.load_strings(self.cursor)
        return list(self.name_index)

    def char_strings_index(self, font_index=0):
        """Build the CharStrings INDEX of font *font_index* (header only).

        Returns None when the Top DICT has no CharStrings entry.
        """
        operands = self._top_dict(font_index).get(_CHARSTRINGS_OP)
        if not operands:
            return None
        return CffIndex(f'CharStrings{font_index}', int(operands[0]), CffIndex.TYPE_STRING,
                        True, self.cursor)

    def private_dict(self, font_index=0):
        """Decode the Private DICT referenced by the Top DICT, or return None."""
        operands = self._top_dict(font_index).get(_PRIVATE_OP)
        if not operands or len(operands) < 2:
            return None
        size, offset = int(operands[0]), int(operands[1])
        self.cursor.seek(offset)
        private = CffDict(f'Private{font_index}', self.cursor.read_bytes(size))
        if config.debug_enabled():
            private.set_operators(PRIVATE_DICT_OPERATORS)
        return private.init()

    def _top_dict(self, font_index):
        if self.top_dict_index.state is not IndexState.LOADED:
            self.top_dict_index.load_dict(self.cursor)
        return self.top_dict_index.get_element(font_index)
