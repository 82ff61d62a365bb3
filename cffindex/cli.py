#!/usr/bin/env python3
# cffindex - CFF INDEX Decoder
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
cffindex command-line tool

Reads each font given on the command line, finds its CFF table and prints
the top-level INDEXes (Name, Top DICT, String, Global Subr):

    cffindex MyFont.otf
    cffindex --show-data --charstrings MyFont.otf
    cffindex --debug MyFont.cff

Exit status is 0 when every font decodes, 1 otherwise.
"""

import logging
import sys

from .cli_args import build_argument_parser
from .core import config
from .core import sfnt
from .core.cff_dict import DELTA_OPERATORS, PRIVATE_DICT_OPERATORS, TOP_DICT_OPERATORS
from .core.cff_index import CffIndex
from .core.cff_table import CffTable
from .core.error import CFFError

# Longest binary element prefix shown by --show-data
_HEX_PREVIEW = 16


def _format_element(index: CffIndex, element) -> str:
    if index.kind == CffIndex.TYPE_DICT:
        return " ".join(
            f"{TOP_DICT_OPERATORS.get(key, key)}={element.get(key)}"
            for key in element.get_keys()
        )
    if index.is_binary:
        text = element[:_HEX_PREVIEW].hex(" ")
        if len(element) > _HEX_PREVIEW:
            text += " ..."
        return f"<{len(element)} bytes> {text}"
    return repr(element)


def _format_private(private) -> str:
    fields = []
    for key in private.get_keys():
        values = private.get_delta(key) if key in DELTA_OPERATORS else private.get(key)
        fields.append(f"{PRIVATE_DICT_OPERATORS.get(key, key)}={values}")
    return " ".join(fields)


def _print_index(index: CffIndex, show_data: bool) -> None:
    print(f"{index.name} INDEX: offset={index.offset} count={index.count} "
          f"offSize={index.off_size} length={index.get_length()}")
    if show_data:
        for i, element in enumerate(index):
            print(f"  {i:5d}: {_format_element(index, element)}")


def dump_font(path: str, show_data: bool = False, charstrings: bool = False) -> None:
    """Print the INDEX structures of one font file.

    Raises:
        CFFError: the font's CFF data is malformed.
        OSError: the file cannot be read.
    """
    with open(path, "rb") as f:
        data = f.read()

    cff_data = sfnt.extract_cff(data)
    cff_offset = 0
    if data[:4] == sfnt.OTTO_TAG:
        cff_offset = sfnt.find_table(data, sfnt.CFF_TAG)[0]

    table = CffTable(cff_data)
    print(f"{path}: CFF {table.major}.{table.minor} ({len(cff_data)} bytes)")
    table.load()

    indexes = table.indexes()
    if charstrings:
        for font_index in range(table.top_dict_index.count):
            char_strings = table.char_strings_index(font_index)
            if char_strings is not None:
                char_strings.load_strings(table.cursor)
                indexes.append(char_strings)

    for index in indexes:
        if config.debug_enabled():
            index.display(show_data, cff_offset)
        else:
            _print_index(index, show_data)

    if show_data and not config.debug_enabled():
        for font_index in range(table.top_dict_index.count):
            private = table.private_dict(font_index)
            if private is not None:
                print(f"{private.name} DICT: {_format_private(private)}")


def _log_level(verbose: bool) -> int:
    """Pick the root log level; debug diagnostics log at INFO and below."""
    if config.debug_enabled():
        return logging.DEBUG
    return logging.INFO if verbose else logging.WARNING


def main(argv=None) -> int:
    """
    Main entry point for the cffindex tool.

    Returns:
        Exit code: 0 for success, 1 for error
    """
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    if args.debug:
        config.enable_debug()
    logging.basicConfig(level=_log_level(args.verbose), format="%(levelname)s %(name)s: %(message)s")

    status = 0
    for path in args.fonts:
        try:
            dump_font(path, show_data=args.show_data, charstrings=args.charstrings)
        except (CFFError, OSError) as exc:
            print(f"cffindex: {path}: {exc}", file=sys.stderr)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
