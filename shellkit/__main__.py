#!/usr/bin/env python3
# shellkit/__main__.py
from __future__ import annotations
"""
Standalone demo shell.

Loads configuration, starts logging, registers the bundled plugins against a
dict payload and enters the interactive loop with Linux-style
[  OK  ] / [FAILED] startup lines.
"""

import sys
from typing import Any, Callable

from shellkit.config import ShellConfig, load_config
from shellkit.interface import load_commands
from shellkit.session import Session
from shellkit.ui import colorize, init_logger, print_line


def _step(label: str, fn: Callable[[], Any], *, quiet: bool = False) -> Any:
    """Run a startup step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red"))
        raise
    if not quiet:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def build_session(config: ShellConfig) -> Session[dict[str, str]]:
    quiet = not config.show_banner
    session: Session[dict[str, str]] = Session.from_config(config, data={})
    if config.plugin_package:
        count = _step(f"Load commands from '{config.plugin_package}'",
                      lambda: load_commands(session, config.plugin_package), quiet=quiet)
        _step(f"{count} commands registered", lambda: None, quiet=quiet)
    _step(f"History file: {session.history_path}", lambda: None, quiet=quiet)
    return session


def main() -> int:
    try:
        config = load_config()
    except ValueError as exc:
        print_line(colorize(f"[FAILED] Load configuration ({exc})", "red"), file=sys.stderr)
        return 2

    init_logger("shellkit", level=config.log_level or "WARNING", logfile=config.log_file_path)
    session = build_session(config)
    if config.show_banner:
        print_line("Type 'help' for a list of commands, 'exit' to leave.")
    return session.run().exit_code


if __name__ == "__main__":
    sys.exit(main())
