# cffindex - CFF INDEX Decoder
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for cffindex.
"""

from __future__ import annotations

import argparse
from importlib import metadata


def _get_version() -> str:
    """Return the installed cffindex version."""
    try:
        return metadata.version("cffindex")
    except metadata.PackageNotFoundError:
        return "unknown"


def build_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the cffindex argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="cffindex",
        description="cffindex - dump the INDEX structures of a CFF font",
        epilog="Each FONT may be an OpenType (OTTO) font or a bare CFF table.",
    )

    parser.add_argument(
        "-V", "--version", action="version",
        version=f"cffindex {_get_version()}"
    )
    parser.add_argument("fonts", nargs="+", metavar="FONT", help="Font files to inspect")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--show-data", action="store_true",
        help="Print the elements of each INDEX, not just its header"
    )
    parser.add_argument(
        "--charstrings", action="store_true",
        help="Also locate the CharStrings INDEX of each font via its Top DICT"
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable debug diagnostics and log the full INDEX structure "
             "(same as CFFINDEX_DEBUG=1)"
    )

    return parser
