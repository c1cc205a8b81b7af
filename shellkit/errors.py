#!/usr/bin/env python3
# shellkit/errors.py
from __future__ import annotations

"""
Error taxonomy for the shell.

Everything raised while executing a statement derives from ShellError so the
session can report it and keep the loop alive. ExtraArgument is a warning and
is never raised by the core.
"""

from pathlib import Path


class ShellError(Exception):
    """Base class for all per-statement shell failures."""


class InitializationError(ShellError):
    """Tokenizer construction failed; the session cannot parse anything."""


class TokenizeError(ShellError):
    """Malformed quoting in a line or argument token."""

    def __init__(self, text: str, reason: str = "unterminated quote") -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"error splitting {text!r}: {reason}")


class UnknownCommand(ShellError):
    """Command name not present in the registry."""

    def __init__(self, name: str, hint: str = "") -> None:
        self.name = name
        super().__init__(f"unknown command: {name}{hint}")


class InvalidArgument(ShellError):
    """Argument token that splits into something other than one or two pieces."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"invalid argument: {token}")


class HandlerError(ShellError):
    """Failure reported by a command handler."""

    def __init__(self, command: str, message: str, cause: BaseException | None = None) -> None:
        self.command = command
        self.cause = cause
        super().__init__(message)


class HistoryIOError(ShellError):
    """History file could not be read or written."""

    def __init__(self, path: Path | str, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"history file {self.path}: {cause}")


class ExtraArgument(UserWarning):
    """More positional tokens than declared parameters."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"extra argument: {token}")
