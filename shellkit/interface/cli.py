#!/usr/bin/env python3
# shellkit/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit when stdin is a terminal (completion + history recall)
    2) plain input() otherwise (pipes, scripted input)

Frontends only read lines. Persisting history is the session's job; an
editor is handed the loaded entries for recall and raises KeyboardInterrupt
on Ctrl-C and EOFError on end of input.
"""

import sys
from typing import Iterable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.input import Input
from prompt_toolkit.output import Output
from prompt_toolkit.shortcuts import CompleteStyle

from shellkit.interface.completion import CommandCompleter, NameSource


class BaseLineEditor:
    """
    Base interface for line editors, and the plain `input()` fallback.

    Subclasses may override:
        - setup()
        - get_line()
        - teardown()

    This base also provides context manager support to guarantee teardown.
    """

    def __init__(self) -> None:
        self.history: list[str] = []
        self.names: Optional[NameSource] = None

    def setup(self, history: Iterable[str] = (), names: Optional[NameSource] = None) -> None:
        self.history = list(history)
        self.names = names

    def get_line(self, prompt: str) -> str:
        return input(prompt)

    def teardown(self) -> None:
        pass

    # Context manager helpers
    def __enter__(self) -> "BaseLineEditor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


PlainLineEditor = BaseLineEditor


class PromptToolkitLineEditor(BaseLineEditor):
    """Line editor with history recall and tab completion."""

    def __init__(
        self,
        *,
        complete_while_typing: bool = False,
        input: Optional[Input] = None,
        output: Optional[Output] = None,
    ) -> None:
        super().__init__()
        self.complete_while_typing = complete_while_typing
        # None means the current terminal
        self.input = input
        self.output = output
        self._session: Optional[PromptSession] = None

    def setup(self, history: Iterable[str] = (), names: Optional[NameSource] = None) -> None:
        super().setup(history, names)
        self._session = PromptSession(
            history=InMemoryHistory(self.history),
            completer=CommandCompleter(names) if names is not None else None,
            # print all candidates below the prompt on tab, readline style
            complete_style=CompleteStyle.READLINE_LIKE,
            complete_while_typing=self.complete_while_typing,
            input=self.input,
            output=self.output,
        )

    def get_line(self, prompt: str) -> str:
        if self._session is None:
            raise RuntimeError("line editor used before setup()")
        return self._session.prompt(prompt)

    def teardown(self) -> None:
        self._session = None


def make_line_editor() -> BaseLineEditor:
    """
    Factory to select the line editor for the current terminal.
    """
    if not sys.stdin.isatty():
        return PlainLineEditor()
    return PromptToolkitLineEditor()
