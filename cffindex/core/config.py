# cffindex - CFF INDEX Decoder
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Runtime settings.

Debug diagnostics (operator-name display, INDEX structure dumps) are off
unless CFFINDEX_DEBUG is set in the environment or enable_debug() is called,
typically by the command-line --debug flag.
"""

from __future__ import annotations

import os

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})

_debug = os.environ.get("CFFINDEX_DEBUG", "").strip().lower() in _TRUE_VALUES


def debug_enabled() -> bool:
    """Return True if debug diagnostics are available."""
    return _debug


def enable_debug() -> None:
    global _debug
    _debug = True


def disable_debug() -> None:
    global _debug
    _debug = False
