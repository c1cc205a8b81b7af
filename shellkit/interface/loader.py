#!/usr/bin/env python3
# shellkit/interface/loader.py
from __future__ import annotations

"""
Dynamic command loader.

Features:
- Imports all modules under a given package (default: 'plugins').
- Supports 'entrypoint.py' inside a subpackage.
- Registers the COMMANDS mapping (name -> CommandDescriptor) each module
  exports into the given session.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any, Mapping

from shellkit.commands import CommandDescriptor

if TYPE_CHECKING:
    from shellkit.session import Session

logger = logging.getLogger(__name__)


def _register_from_module(session: "Session[Any]", module: ModuleType) -> int:
    """Register COMMANDS exported by a module, if present."""
    registered_count = 0
    commands = getattr(module, "COMMANDS", None)
    if not isinstance(commands, Mapping):
        return 0
    for name, descriptor in commands.items():
        if not isinstance(descriptor, CommandDescriptor):
            logger.warning("%s: skipping %r (not a CommandDescriptor)",
                           module.__name__, name)
            continue
        session.register(name, descriptor)
        registered_count += 1
    return registered_count


def load_commands(session: "Session[Any]", commands_package: str = "plugins") -> int:
    """
    Import all modules under the given package and register their commands.

    Supported layouts:
      1) Plain modules: plugins/foo.py  -> import plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
         -> import plugins.bar.entrypoint

    Returns the number of commands registered.
    """
    package = importlib.import_module(commands_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(
            f"'{commands_package}' must be a package (folder) with modules.")

    registered_count = _register_from_module(session, package)

    for base_path in package_paths:
        for modinfo in pkgutil.iter_modules([base_path]):
            module_name = modinfo.name
            if module_name.startswith("_"):
                # Ignore private modules
                continue

            target = f"{commands_package}.{module_name}"
            if modinfo.ispkg and (Path(base_path) / module_name / "entrypoint.py").exists():
                target = f"{target}.entrypoint"

            module = importlib.import_module(target)
            registered_count += _register_from_module(session, module)

    logger.debug("Loaded %d commands from '%s'", registered_count, commands_package)
    return registered_count
