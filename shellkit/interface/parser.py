#!/usr/bin/env python3
# shellkit/interface/parser.py
from __future__ import annotations

"""
Argument resolution for commands.

Responsibilities:
- Map argument tokens onto a command's declared parameters.
- Render compact usage strings from a descriptor.

Tokens are either bare values, matched to parameters in declaration order,
or `key=value` pairs, matched by name. The positional index only advances on
bare values, so `cmd 1 b=6` binds `1` to the first parameter.
"""

import logging
from typing import Sequence

from shellkit.commands import CommandDescriptor, Parameter
from shellkit.errors import ExtraArgument, InvalidArgument
from shellkit.interface.tokenizer import Splitter, new_argument_splitter

logger = logging.getLogger(__name__)


def resolve_arguments(
    tokens: Sequence[str],
    parameters: Sequence[Parameter],
    splitter: Splitter | None = None,
) -> tuple[dict[str, str], list[ExtraArgument]]:
    """
    Bind argument tokens to `parameters`.

    Returns (arguments, warnings). Raises InvalidArgument for a token that
    splits into more than two pieces and TokenizeError for bad quoting.
    """
    splitter = splitter or new_argument_splitter()
    resolved: dict[str, str] = {}
    warnings: list[ExtraArgument] = []
    positional_index = 0

    for token in tokens:
        fields = splitter.split(token)

        if len(fields) == 1:
            if positional_index >= len(parameters):
                logger.debug("Discarding extra argument %r", fields[0])
                warnings.append(ExtraArgument(fields[0]))
            else:
                resolved[parameters[positional_index].name] = fields[0]
            positional_index += 1
            continue

        if len(fields) != 2:
            raise InvalidArgument(token)

        key, value = fields
        resolved[key] = value

    return resolved, warnings


def build_usage(command_name: str, descriptor: CommandDescriptor) -> str:
    """
    Render a compact usage string from the declared parameters.

    Examples:
        'set [key] [value]'
    """
    usage_parts = [f"[{p.name}]" for p in descriptor.parameters]
    return f"{command_name} " + " ".join(usage_parts) if usage_parts else command_name
