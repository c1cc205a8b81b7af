#!/usr/bin/env python3
# shellkit/interface/history.py
from __future__ import annotations

"""
Plain-text command history.

One raw input line per record, oldest first. The file is read once when the
session starts and rewritten in full when it ends; nothing holds it open in
between. Only the newest `limit` entries are kept.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Union

from shellkit.errors import HistoryIOError

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 1000


class ShellHistory:
    """In-memory history list backed by a newline-delimited file."""

    def __init__(self, path: Union[str, Path], limit: int = HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"history limit must be positive, got {limit}")
        self.path = Path(path)
        self.limit = limit
        self._entries: List[str] = []

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def append(self, line: str) -> None:
        """Record one raw line; blank lines are ignored."""
        if line.strip():
            self._entries.append(line)
            self._trim()

    def _trim(self) -> None:
        if len(self._entries) > self.limit:
            del self._entries[:-self.limit]

    def load(self) -> int:
        """Read the backing file. A missing file is an empty history."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No history file at %s", self.path)
            return 0
        except OSError as exc:
            raise HistoryIOError(self.path, exc) from exc

        loaded = [line for line in text.splitlines() if line.strip()]
        self._entries = loaded + self._entries
        self._trim()
        logger.debug("Loaded %d history entries from %s", len(loaded), self.path)
        return len(loaded)

    def save(self) -> None:
        """Rewrite the backing file with the retained entries."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8", newline="\n") as f:
                for line in self._entries:
                    f.write(line + "\n")
        except OSError as exc:
            raise HistoryIOError(self.path, exc) from exc
        logger.debug("Saved %d history entries to %s", len(self._entries), self.path)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
