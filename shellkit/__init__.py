#!/usr/bin/env python3
# shellkit/__init__.py
from __future__ import annotations
"""
shellkit: an embeddable interactive command shell.

Typical use:

    session = Session("weed", data=state)
    session.add_command("set", "Set a value", handler,
                        [("key", "Key to set", ""), ("value", "Value", "")])
    session.run()
"""

from shellkit.commands import CommandDescriptor, CommandRegistry, CommandResult, Parameter
from shellkit.config import ShellConfig, load_config
from shellkit.errors import (
    ExtraArgument,
    HandlerError,
    HistoryIOError,
    InitializationError,
    InvalidArgument,
    ShellError,
    TokenizeError,
    UnknownCommand,
)
from shellkit.session import Session, SessionExit

__version__ = "0.1.0"

__all__ = [
    "CommandDescriptor",
    "CommandRegistry",
    "CommandResult",
    "Parameter",
    "ShellConfig",
    "load_config",
    "ExtraArgument",
    "HandlerError",
    "HistoryIOError",
    "InitializationError",
    "InvalidArgument",
    "ShellError",
    "TokenizeError",
    "UnknownCommand",
    "Session",
    "SessionExit",
]
