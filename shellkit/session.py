#!/usr/bin/env python3
# shellkit/session.py
from __future__ import annotations

"""
The shell session: command registry, opaque caller data and the REPL.

Lifecycle of loop():

    Initializing  build both splitters, load history, set up the line editor
    Prompting     prompter(session) -> line; Ctrl-C ends the session,
                  end of input ends it cleanly
    Executing     split on ';', run each statement, report failures and keep
                  going; `exit` / `quit` end the session
    Terminated    history written back, editor released

loop() reports how it ended with a SessionExit and never exits the process;
run() maps that onto a process exit for standalone shells.
"""

import enum
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Generic, Iterable, Optional, TextIO, TypeVar, Union

from shellkit.commands import (
    CommandDescriptor,
    CommandHandler,
    CommandRegistry,
    RESERVED_NAMES,
)
from shellkit.commands.command_types import ParameterSpec
from shellkit.config import ShellConfig, default_history_path
from shellkit.errors import HistoryIOError, InitializationError, ShellError
from shellkit.interface.cli import BaseLineEditor, make_line_editor
from shellkit.interface.completion import suggest
from shellkit.interface.handler import dispatch, help_command
from shellkit.interface.history import ShellHistory
from shellkit.interface.tokenizer import (
    DEFAULT_QUOTES,
    Splitter,
    new_argument_splitter,
    new_line_splitter,
    split_statements,
)
from shellkit.ui import colorize, print_line

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionExit(enum.Enum):
    """How an interactive session ended."""
    CANCELLED = "cancelled"        # exit / quit
    EOF = "eof"                    # end of input
    INTERRUPTED = "interrupted"    # Ctrl-C
    INIT_FAILED = "init_failed"    # tokenizers could not be built

    @property
    def exit_code(self) -> int:
        return {
            SessionExit.CANCELLED: 0,
            SessionExit.EOF: 0,
            SessionExit.INTERRUPTED: 130,
            SessionExit.INIT_FAILED: 1,
        }[self]


def default_prompter(session: "Session[Any]") -> str:
    return f"{session.name}> "


class Session(Generic[T]):
    """
    A live shell instance.

    `data` is handed to every handler through the session and is never
    touched by the shell itself.
    """

    def __init__(
        self,
        name: str = "shellkit",
        *,
        data: Optional[T] = None,
        case_insensitive: bool = False,
        prompter: Optional[Callable[["Session[T]"], str]] = None,
        history_path: Union[str, Path, None] = None,
        line_editor: Optional[BaseLineEditor] = None,
        stdout: Optional[TextIO] = None,
        enable_completion: bool = True,
        quotes: Iterable[str] = DEFAULT_QUOTES,
        register_help: bool = True,
    ) -> None:
        self.name = name
        self.data = data
        self.commands = CommandRegistry(case_insensitive)
        self.prompter = prompter or default_prompter
        self.history = ShellHistory(
            history_path if history_path is not None else default_history_path(name))
        self.line_editor = line_editor
        self.stdout: TextIO = stdout if stdout is not None else sys.stdout
        self.enable_completion = enable_completion
        self.quotes = tuple(quotes)

        self._line_splitter: Optional[Splitter] = None
        self._argument_splitter: Optional[Splitter] = None

        if register_help:
            self.register("help", help_command())

    @classmethod
    def from_config(cls, config: ShellConfig, **kwargs: Any) -> "Session[Any]":
        """Build a session from a loaded ShellConfig; kwargs win over config."""
        options: dict[str, Any] = {
            "case_insensitive": config.case_insensitive,
            "history_path": config.history_path,
            "enable_completion": config.enable_completion,
        }
        if config.prompt is not None:
            prompt_text = config.prompt
            options["prompter"] = lambda _session: prompt_text
        options.update(kwargs)
        return cls(config.project_name, **options)

    # ---------------- Properties ----------------

    @property
    def case_insensitive(self) -> bool:
        return self.commands.case_insensitive

    @case_insensitive.setter
    def case_insensitive(self, value: bool) -> None:
        self.commands.case_insensitive = value

    @property
    def history_path(self) -> Path:
        return self.history.path

    @property
    def line_splitter(self) -> Splitter:
        if self._line_splitter is None:
            self.initialize()
        assert self._line_splitter is not None
        return self._line_splitter

    @property
    def argument_splitter(self) -> Splitter:
        if self._argument_splitter is None:
            self.initialize()
        assert self._argument_splitter is not None
        return self._argument_splitter

    # ---------------- Registration ----------------

    def register(self, name: str, descriptor: CommandDescriptor) -> None:
        """Register a command. Re-registering a name replaces it."""
        self.commands.register(name, descriptor)

    def add_command(
        self,
        name: str,
        description: str,
        handler: CommandHandler,
        parameters: Iterable[ParameterSpec] = (),
    ) -> CommandDescriptor:
        descriptor = CommandDescriptor.build(description, handler, parameters)
        self.register(name, descriptor)
        return descriptor

    def command(
        self,
        name: Optional[str] = None,
        *,
        description: Optional[str] = None,
        parameters: Iterable[ParameterSpec] = (),
    ) -> Callable[[CommandHandler], CommandHandler]:
        """
        Decorator to register a function as a command.

        - Function name is transformed from snake_case to kebab-case for `name` if not provided.
        - The docstring is used when `description` is omitted.
        """

        def wrapper(func: CommandHandler) -> CommandHandler:
            command_name = name or getattr(func, "__name__", "").replace("_", "-")
            text = description if description is not None else (func.__doc__ or "")
            self.add_command(command_name, text.strip(), func, parameters)
            return func

        return wrapper

    # ---------------- Execution ----------------

    def initialize(self) -> None:
        """Build the line and argument splitters (idempotent)."""
        if self._line_splitter is not None and self._argument_splitter is not None:
            return
        try:
            line_splitter = new_line_splitter(self.quotes)
        except InitializationError as exc:
            raise InitializationError(f"error initializing tokenizer: {exc}") from exc
        try:
            argument_splitter = new_argument_splitter(self.quotes)
        except InitializationError as exc:
            raise InitializationError(f"error initializing arg tokenizer: {exc}") from exc
        self._line_splitter, self._argument_splitter = line_splitter, argument_splitter

    def dispatch(self, tokens: list[str]) -> Any:
        """Run one statement already split by the line splitter."""
        return dispatch(self, tokens)

    def report_error(self, exc: BaseException) -> None:
        logger.debug("Statement failed: %r", exc)
        print_line(colorize(f"Error: {exc}", "red"), file=self.stdout)

    def execute_line(self, line: str) -> bool:
        """
        Execute every ';'-separated statement of `line`.

        Returns True when an `exit` or `quit` statement was reached; later
        statements are not run. Failures are printed and do not stop the
        remaining statements.
        """
        # only splitter construction may escape; statement failures are reported
        splitter = self.line_splitter
        for statement in split_statements(line):
            try:
                tokens = splitter.split(statement)
                if not tokens:
                    continue
                if splitter.unquote(tokens[0]) in RESERVED_NAMES:
                    return True
                self.dispatch(tokens)
            except ShellError as exc:
                self.report_error(exc)
        return False

    def complete(self, text: str) -> list[str]:
        """Command names offered for the in-progress line."""
        return suggest(self.commands.names(), text)

    # ---------------- REPL ----------------

    def _load_history(self) -> None:
        try:
            self.history.load()
        except HistoryIOError as exc:
            logger.debug("%s", exc)
            print_line(colorize(f"Error reading history file: {exc.cause}", "yellow"),
                       file=self.stdout)

    def _save_history(self) -> None:
        try:
            self.history.save()
        except HistoryIOError as exc:
            logger.debug("%s", exc)
            print_line(colorize(f"Error writing history file: {exc.cause}", "yellow"),
                       file=self.stdout)

    def loop(self) -> SessionExit:
        """Run the interactive loop until exit, end of input or Ctrl-C."""
        try:
            self.initialize()
        except InitializationError as exc:
            logger.debug("%s", exc)
            print_line(colorize(f"Error initializing cli: {exc}", "red"), file=self.stdout)
            return SessionExit.INIT_FAILED

        self._load_history()
        editor = self.line_editor if self.line_editor is not None else make_line_editor()
        status = SessionExit.EOF
        with editor:
            try:
                editor.setup(
                    self.history.entries,
                    self.commands.names if self.enable_completion else None,
                )
                while True:
                    try:
                        line = editor.get_line(self.prompter(self))
                    except EOFError:
                        break

                    self.history.append(line)
                    if self.execute_line(line):
                        status = SessionExit.CANCELLED
                        break
            except KeyboardInterrupt:
                print_line(file=self.stdout)
                logger.debug("Interrupted")
                status = SessionExit.INTERRUPTED
            finally:
                self._save_history()

        logger.debug("Session ended: %s", status.value)
        return status

    def run(self) -> SessionExit:
        """
        Standalone-shell entry: loop(), then exit the process on Ctrl-C or a
        failed initialization.
        """
        status = self.loop()
        if status in (SessionExit.INTERRUPTED, SessionExit.INIT_FAILED):
            sys.exit(status.exit_code)
        return status
