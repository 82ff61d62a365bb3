# cffindex - CFF INDEX Decoder
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CFF DICT Decoder

A DICT is a sequence of operands followed by an operator (Adobe TN#5176,
section 4).  Operators are bytes 0-21; byte 12 escapes to a two-byte
operator.  Decoded DICTs map the operator to its operand list:

    one-byte operator  -> int key     (17 -> CharStrings)
    escaped operator   -> (12, b1)    ((12, 7) -> FontMatrix)

Delta-encoded arrays (BlueValues, StemSnapH, ...) are left as raw operands;
CffDict.get_delta() expands them to absolute values.
"""

import logging
import struct

from .error import MalformedDict

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DICT Operator Names  (op_byte or (12, sub_byte)) -> name
# ---------------------------------------------------------------------------
TOP_DICT_OPERATORS = {
    0: 'version', 1: 'Notice', 2: 'FullName', 3: 'FamilyName',
    4: 'Weight', 5: 'FontBBox', 13: 'UniqueID', 14: 'XUID',
    15: 'charset', 16: 'Encoding', 17: 'CharStrings', 18: 'Private',
    (12, 0): 'Copyright', (12, 1): 'isFixedPitch', (12, 2): 'ItalicAngle',
    (12, 3): 'UnderlinePosition', (12, 4): 'UnderlineThickness',
    (12, 5): 'PaintType', (12, 6): 'CharstringType', (12, 7): 'FontMatrix',
    (12, 8): 'StrokeWidth', (12, 20): 'SyntheticBase',
    (12, 21): 'PostScript', (12, 22): 'BaseFontName',
    (12, 23): 'BaseFontBlend',
    # CID-specific
    (12, 30): 'ROS', (12, 31): 'CIDFontVersion', (12, 32): 'CIDFontRevision',
    (12, 33): 'CIDFontType', (12, 34): 'CIDCount', (12, 35): 'UIDBase',
    (12, 36): 'FDArray', (12, 37): 'FDSelect', (12, 38): 'FontName',
}

PRIVATE_DICT_OPERATORS = {
    6: 'BlueValues', 7: 'OtherBlues', 8: 'FamilyBlues',
    9: 'FamilyOtherBlues', 10: 'StdHW', 11: 'StdVW',
    19: 'Subrs', 20: 'defaultWidthX', 21: 'nominalWidthX',
    (12, 9): 'BlueScale', (12, 10): 'BlueShift', (12, 11): 'BlueFuzz',
    (12, 12): 'StemSnapH', (12, 13): 'StemSnapV', (12, 14): 'ForceBold',
    (12, 17): 'LanguageGroup', (12, 18): 'ExpansionFactor',
    (12, 19): 'initialRandomSeed',
}

# Private DICT operators whose operands are delta-encoded arrays
DELTA_OPERATORS = frozenset({6, 7, 8, 9, (12, 12), (12, 13)})

# BCD nibble -> text; 0xD is reserved, 0xF terminates
_REAL_NIBBLES = {
    0x0A: '.', 0x0B: 'E', 0x0C: 'E-', 0x0E: '-',
}


def _read_real(data, i, length):
    """Decode a BCD real starting after the 30 prefix byte.

    Returns (value, offset_after_real).
    """
    chars = []
    while i < length:
        byte = data[i]
        i += 1
        for nibble in (byte >> 4, byte & 0x0F):
            if nibble == 0x0F:
                try:
                    return float(''.join(chars)), i
                except ValueError:
                    raise MalformedDict(f"invalid real number: {''.join(chars)!r}")
            if nibble <= 9:
                chars.append(str(nibble))
            elif nibble == 0x0D:
                raise MalformedDict(f"reserved nibble in real number at byte {i - 1}")
            else:
                chars.append(_REAL_NIBBLES[nibble])
    raise MalformedDict("real number not terminated")


def decode_dict(data) -> dict:
    """Parse a CFF DICT from raw bytes into {operator: operands} dict.

    Raises:
        MalformedDict: truncated operand, operator escape with no second
            byte, reserved byte, or operands left with no operator.
    """
    result = {}
    operands = []
    i = 0
    length = len(data)

    while i < length:
        b0 = data[i]

        if b0 <= 21:
            # Operator
            if b0 == 12:
                # Two-byte operator
                i += 1
                if i >= length:
                    raise MalformedDict("escape operator missing second byte")
                op = (12, data[i])
            else:
                op = b0
            result[op] = operands
            operands = []
            i += 1

        elif b0 == 28:
            # 3-byte integer
            if i + 2 >= length:
                raise MalformedDict(f"truncated int16 operand at byte {i}")
            operands.append(struct.unpack_from('>h', data, i + 1)[0])
            i += 3

        elif b0 == 29:
            # 5-byte integer
            if i + 4 >= length:
                raise MalformedDict(f"truncated int32 operand at byte {i}")
            operands.append(struct.unpack_from('>i', data, i + 1)[0])
            i += 5

        elif b0 == 30:
            value, i = _read_real(data, i + 1, length)
            operands.append(value)

        elif 32 <= b0 <= 246:
            operands.append(b0 - 139)
            i += 1

        elif 247 <= b0 <= 250:
            if i + 1 >= length:
                raise MalformedDict(f"truncated operand at byte {i}")
            operands.append((b0 - 247) * 256 + data[i + 1] + 108)
            i += 2

        elif 251 <= b0 <= 254:
            if i + 1 >= length:
                raise MalformedDict(f"truncated operand at byte {i}")
            operands.append(-(b0 - 251) * 256 - data[i + 1] - 108)
            i += 2

        else:
            # 22-27, 31 and 255 are reserved
            raise MalformedDict(f"reserved byte {b0} at byte {i}")

    if operands:
        raise MalformedDict(f"{len(operands)} operand(s) with no operator")

    return result


def decode_delta(values):
    """Decode a delta-encoded array: [a0, d1, d2, ...] -> [a0, a0+d1, a0+d1+d2, ...]"""
    result = []
    accum = 0
    for v in values:
        accum += v
        result.append(accum)
    return result


class CffDict:
    """One decoded DICT element of a DICT INDEX."""

    __slots__ = ('name', '_data', '_entries', '_operators')

    def __init__(self, name, data):
        self.name = name
        self._data = bytes(data)
        self._entries = {}
        self._operators = None

    def init(self):
        """Decode the DICT bytes.  Safe to call more than once."""
        logger.debug("decoding DICT %s (%d bytes)", self.name, len(self._data))
        try:
            self._entries = decode_dict(self._data)
        except MalformedDict as exc:
            raise MalformedDict(f"CFF DICT {self.name}: {exc}") from exc
        return self

    def get(self, key, default=None):
        return self._entries.get(key, default)

    def get_delta(self, key, default=None):
        """Operands of *key* with delta encoding undone, for DELTA_OPERATORS."""
        values = self._entries.get(key)
        if values is None:
            return default
        return decode_delta(values)

    def get_keys(self):
        return list(self._entries)

    def to_dict(self):
        return {key: list(values) for key, values in self._entries.items()}

    @property
    def data(self):
        return self._data

    def set_operators(self, operators):
        """Attach an operator-name table used when displaying the DICT."""
        self._operators = operators

    def operator_name(self, key):
        if self._operators and key in self._operators:
            return self._operators[key]
        return str(key)

    def __contains__(self, key):
        return key in self._entries

    def __getitem__(self, key):
        return self._entries[key]

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __repr__(self):
        return f"CffDict({self.name!r}, {self._entries!r})"
