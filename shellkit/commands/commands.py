#!/usr/bin/env python3
# shellkit/commands/commands.py
from __future__ import annotations

"""
Command registry.

Holds name -> CommandDescriptor for one session. Registration is last write
wins; lookup is exact or case-folded depending on the registry flag.
"""

from typing import Dict, Iterator, Optional

from shellkit.commands.command_types import CommandDescriptor

# First statement tokens that end the session instead of dispatching
RESERVED_NAMES: frozenset[str] = frozenset({"exit", "quit"})


class CommandRegistry:
    """Holds all command definitions and provides lookup utilities."""

    def __init__(self, case_insensitive: bool = False) -> None:
        self.case_insensitive = case_insensitive
        # Registered name -> descriptor (insertion ordered)
        self._commands_by_name: Dict[str, CommandDescriptor] = {}

    # ---------------- Registration ----------------

    def register(self, name: str, descriptor: CommandDescriptor) -> None:
        """Register `descriptor` under `name`, replacing any previous entry."""
        if not name or name != name.strip():
            raise ValueError(f"Invalid command name: {name!r}")
        if name in RESERVED_NAMES:
            raise ValueError(f"'{name}' is reserved and cannot be registered.")
        if not isinstance(descriptor, CommandDescriptor):
            raise TypeError(
                f"Expected CommandDescriptor for '{name}', got {type(descriptor).__name__}")

        if self.case_insensitive:
            # Drop differently-cased spellings so one folded name maps to one entry
            for existing in [n for n in self._commands_by_name if n.lower() == name.lower()]:
                del self._commands_by_name[existing]
        self._commands_by_name[name] = descriptor

    # ---------------- Lookup ----------------

    def resolve_name(self, name: str) -> Optional[str]:
        """Return the registered spelling of `name`, or None."""
        if name in self._commands_by_name:
            return name
        if self.case_insensitive:
            key = name.lower()
            for registered in self._commands_by_name:
                if registered.lower() == key:
                    return registered
        return None

    def get(self, name: str) -> Optional[CommandDescriptor]:
        """Return the descriptor for `name`, or None if not found."""
        registered = self.resolve_name(name)
        return None if registered is None else self._commands_by_name[registered]

    def names(self) -> list[str]:
        """Return registered names in registration order."""
        return list(self._commands_by_name)

    def items(self) -> list[tuple[str, CommandDescriptor]]:
        return list(self._commands_by_name.items())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve_name(name) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._commands_by_name)
