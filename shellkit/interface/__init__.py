#!/usr/bin/env python3
# shellkit/interface/__init__.py
from __future__ import annotations

"""
Package for line parsing, command dispatch and interactive input.

Provides:
- Quote-aware splitters for statements and key=value arguments.
- Argument resolution against a command's declared parameters.
- Command dispatcher and the built-in help command.
- Case-insensitive command name completion.
- Line editor frontends (prompt_toolkit / plain) and the history store.
- Dynamic command loader for plugin packages.
"""


# Tokenizer FIRST (parser and handler depend on it)
from .tokenizer import (
    Splitter,
    tokenize,
    split_statements,
    new_line_splitter,
    new_argument_splitter,
)

# Parser utilities
from .parser import resolve_arguments, build_usage

# Command dispatcher / help
from .handler import dispatch, help_command, format_command_help, list_commands, HELP_TEXT

# Completion and frontends
from .completion import suggest, CommandCompleter
from .history import ShellHistory
from .cli import BaseLineEditor, PlainLineEditor, PromptToolkitLineEditor, make_line_editor

# Loader
from .loader import load_commands

__all__ = [
    # tokenizer
    "Splitter",
    "tokenize",
    "split_statements",
    "new_line_splitter",
    "new_argument_splitter",
    # parser
    "resolve_arguments",
    "build_usage",
    # handler
    "dispatch",
    "help_command",
    "format_command_help",
    "list_commands",
    "HELP_TEXT",
    # completion / cli
    "suggest",
    "CommandCompleter",
    "ShellHistory",
    "BaseLineEditor",
    "PlainLineEditor",
    "PromptToolkitLineEditor",
    "make_line_editor",
    # loader
    "load_commands",
]
