#!/usr/bin/env python3
# shellkit/interface/handler.py
from __future__ import annotations

"""
Command dispatch and help formatting.

dispatch() takes the raw tokens of one statement (as produced by the line
splitter, quotes still attached), looks the command up, resolves arguments
and runs the handler. Handler failures surface as HandlerError; everything
else raised here is already a ShellError.
"""

import difflib
import logging
from typing import TYPE_CHECKING, Any, Sequence

from shellkit.commands import CommandDescriptor, CommandResult, Parameter, RESERVED_NAMES
from shellkit.errors import HandlerError, ShellError, UnknownCommand
from shellkit.interface.parser import build_usage, resolve_arguments
from shellkit.ui import colorize, print_line, print_table

if TYPE_CHECKING:
    from shellkit.session import Session

logger = logging.getLogger(__name__)

# Short hint shown after the command listing
HELP_TEXT = "Use 'help <command>' to get help for a specific command"


def _suggest_similar_names(session: "Session[Any]", name: str) -> str:
    """Return a short suggestion string for misspelled commands."""
    universe = session.commands.names() + sorted(RESERVED_NAMES)
    matches = difflib.get_close_matches(name, universe, n=3, cutoff=0.6)
    return f" (did you mean: {', '.join(matches)}?)" if matches else ""


def lookup(session: "Session[Any]", name: str) -> tuple[str, CommandDescriptor]:
    """Return (registered name, descriptor) or raise UnknownCommand."""
    registered = session.commands.resolve_name(name)
    if registered is None:
        raise UnknownCommand(name, _suggest_similar_names(session, name))
    descriptor = session.commands.get(registered)
    assert descriptor is not None
    return registered, descriptor


def _report_outcome(session: "Session[Any]", command_name: str, outcome: Any) -> Any:
    """Print textual outcomes; turn failed CommandResults into HandlerError."""
    if isinstance(outcome, CommandResult):
        if not outcome.ok:
            raise HandlerError(command_name, str(outcome))
        if outcome.message:
            print_line(outcome.message, file=session.stdout)
    elif isinstance(outcome, str) and outcome:
        print_line(outcome, file=session.stdout)
    return outcome


def dispatch(session: "Session[Any]", tokens: Sequence[str]) -> Any:
    """
    Execute one tokenized statement.

    Returns the handler's outcome (None for an empty statement).
    """
    if not tokens:
        return None

    command_name = session.line_splitter.unquote(tokens[0])
    registered, descriptor = lookup(session, command_name)

    arguments, warnings = resolve_arguments(
        tokens[1:], descriptor.parameters, session.argument_splitter)
    for warning in warnings:
        logger.debug("%s: %s", registered, warning)
        print_line(colorize(f"WARNING: {warning}", "yellow"), file=session.stdout)

    logger.debug("Dispatching %s with %r", registered, arguments)
    try:
        outcome = descriptor.invoke(session, arguments)
    except ShellError:
        raise
    except Exception as exc:
        raise HandlerError(
            registered, f"{registered}: {type(exc).__name__}: {exc}", exc) from exc

    return _report_outcome(session, registered, outcome)


# ---------------------------------------------------------------------------
# Built-in help
# ---------------------------------------------------------------------------


def format_command_help(session: "Session[Any]", name: str) -> None:
    """Print description and parameters for one command."""
    registered, descriptor = lookup(session, name)
    out = session.stdout

    print_line(f"Command:     {registered}", file=out)
    print_line(f"Description: {descriptor.description or '(none)'}", file=out)
    print_line(f"Usage:       {build_usage(registered, descriptor)}", file=out)
    if not descriptor.parameters:
        print_line("Arguments:   (none)", file=out)
        return

    print_line("Arguments:", file=out)
    rows = [[p.name, p.help, p.default or "-"] for p in descriptor.parameters]
    print_table(rows, headers=["Name", "Description", "Default"], file=out)


def list_commands(session: "Session[Any]") -> None:
    """Print every registered command with its description."""
    out = session.stdout
    rows = [[name, descriptor.description]
            for name, descriptor in session.commands.items()]
    if not rows:
        print_line("No commands registered.", file=out)
        return

    print_line("Commands:", file=out)
    print_table(rows, headers=["Command", "Description"], file=out)
    print_line(HELP_TEXT, file=out)


def _run_help(session: "Session[Any]", args: dict[str, str]) -> None:
    target = args.get("command", "")
    if target:
        format_command_help(session, target)
    else:
        list_commands(session)


def help_command() -> CommandDescriptor:
    """Return the built-in help command."""
    return CommandDescriptor(
        description="Get help for a command",
        handler=_run_help,
        parameters=(Parameter("command", "Command to get help for", ""),),
    )
