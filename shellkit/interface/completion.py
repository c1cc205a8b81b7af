#!/usr/bin/env python3
# shellkit/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

Completion is always case-insensitive, whatever the session's lookup mode:
every registered name whose lower-cased form starts with the lower-cased
input is offered.
"""

from typing import Callable, Iterable

from prompt_toolkit.completion import Completer, Completion

NameSource = Callable[[], Iterable[str]]


def suggest(names: Iterable[str], text_before_cursor: str) -> list[str]:
    """Return the sorted command names matching the in-progress line."""
    prefix = text_before_cursor.lstrip().lower()
    return sorted(name for name in names if name.lower().startswith(prefix))


class CommandCompleter(Completer):
    """prompt_toolkit completer over a live source of command names."""

    def __init__(self, names: NameSource) -> None:
        self._names = names

    def get_completions(self, document, complete_event):
        text_before_cursor = document.text_before_cursor
        # replace the whole typed prefix, not just the word under the cursor
        replace_len = len(text_before_cursor.lstrip())
        for word in suggest(self._names(), text_before_cursor):
            yield Completion(word, start_position=-replace_len)
