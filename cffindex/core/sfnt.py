# cffindex - CFF INDEX Decoder
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
OpenType table directory helpers for pulling the CFF table out of an
OTTO (CFF-flavored OpenType) font file.
"""

from __future__ import annotations

import struct

from .error import CFFError

OTTO_TAG = b"OTTO"
CFF_TAG = b"CFF "


def find_table(data: bytes, tag: bytes) -> tuple[int | None, int | None]:
    """Find a table in the OTF/TTF table directory.

    Returns (offset, length) or (None, None) if not found.
    """
    if len(data) < 12:
        return None, None

    num_tables = struct.unpack_from(">H", data, 4)[0]
    for i in range(num_tables):
        rec_offset = 12 + i * 16
        if rec_offset + 16 > len(data):
            break
        tbl_tag = data[rec_offset : rec_offset + 4]
        if tbl_tag == tag:
            tbl_offset, tbl_length = struct.unpack_from(">II", data, rec_offset + 8)
            return tbl_offset, tbl_length

    return None, None


def extract_cff(data: bytes) -> bytes:
    """Return the raw CFF table from an OTTO font, or *data* if it is bare CFF.

    Raises:
        CFFError: no CFF table can be found.
    """
    if data[:4] == OTTO_TAG:
        offset, length = find_table(data, CFF_TAG)
        if offset is None:
            raise CFFError("OpenType font has no 'CFF ' table")
        if offset + length > len(data):
            raise CFFError(
                f"'CFF ' table ({length} bytes at offset {offset}) runs past end of file")
        return data[offset : offset + length]

    # A bare CFF blob starts with major version 1.
    if len(data) >= 4 and data[0] == 1:
        return data

    raise CFFError("not an OpenType CFF font or CFF table")
