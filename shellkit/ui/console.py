#!/usr/bin/env python3
# shellkit/ui/console.py
from __future__ import annotations

import sys
import threading
from typing import TextIO

from .ansi import strip_ansi

# Single shared print mutex for all UI output (tables/logging).
PRINT_MUTEX = threading.Lock()


def _is_tty(file: TextIO) -> bool:
    try:
        return file.isatty()
    except (AttributeError, ValueError):
        return False


def print_line(text: str = "", *, file: TextIO | None = None, flush: bool = False) -> None:
    """Thread-safe single-line print. ANSI is stripped when `file` is not a terminal."""
    target = sys.stdout if file is None else file
    if not _is_tty(target):
        text = strip_ansi(text)
    with PRINT_MUTEX:
        target.write(f"{text}\n")
        if flush:
            target.flush()
