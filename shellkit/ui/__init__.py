#!/usr/bin/env python3
# shellkit/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import ANSI, colorize, enable_windows_vt, strip_ansi
from .console import PRINT_MUTEX, print_line
from .table import format_table, print_table
from .logging import ColorizingStreamHandler, PlainFormatter, init_logger

__all__ = [
    "ANSI",
    "colorize",
    "enable_windows_vt",
    "strip_ansi",
    "PRINT_MUTEX",
    "print_line",
    "format_table",
    "print_table",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
