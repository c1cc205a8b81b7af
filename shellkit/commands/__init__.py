#!/usr/bin/env python3
# shellkit/commands/__init__.py
from __future__ import annotations

"""
Package for command declaration and registration.

Provides:
- Data structures and protocols (`CommandDescriptor`, `Parameter`,
  `CommandResult`, `CommandHandler`).
- The per-session registry (`CommandRegistry`, `RESERVED_NAMES`).

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


# Re-export from submodules
from .command_types import CommandDescriptor, CommandHandler, CommandResult, Parameter
from .commands import RESERVED_NAMES, CommandRegistry

__all__ = [
    "CommandDescriptor",
    "CommandHandler",
    "CommandResult",
    "Parameter",
    "CommandRegistry",
    "RESERVED_NAMES",
]
