#!/usr/bin/env python3
# shellkit/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- CommandHandler: the callable protocol for any command implementation.
- CommandResult: a normalized result container for command outputs.
- Parameter: one declared argument (name, help text, default value).
- CommandDescriptor: the static shape of a command plus its handler.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Protocol, Sequence, Union

if TYPE_CHECKING:
    from shellkit.session import Session


class CommandHandler(Protocol):
    """Protocol for any command function."""

    def __call__(self, session: "Session[Any]", args: dict[str, str]) -> Any:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class CommandResult:
    """
    Normalized result container from command execution.

    Attributes:
        ok: True if the command completed successfully.
        message: Human-readable summary or primary output.
        data: Optional machine-readable payload (dict/list/primitive).
    """
    ok: bool = True
    message: str = ""
    data: Any = None

    def __str__(self) -> str:
        # Keep CLI printing predictable
        return self.message if self.message else ("ok" if self.ok else "error")


@dataclass(frozen=True, slots=True)
class Parameter:
    """A declared command argument. Every value is a string."""
    name: str
    help: str = ""
    default: str = ""


ParameterSpec = Union[Parameter, Sequence[str]]


def _as_parameter(spec: ParameterSpec) -> Parameter:
    if isinstance(spec, Parameter):
        return spec
    if isinstance(spec, str):
        return Parameter(spec)
    values = list(spec)
    if not 1 <= len(values) <= 3:
        raise ValueError(
            f"parameter spec must be (name[, help[, default]]), got {spec!r}")
    return Parameter(*(str(v) for v in values))


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """
    A command's shape and behaviour.

    Important fields:
        description: Short, user-facing description.
        parameters: Declared arguments, in the order bare tokens are matched.
        handler: Called as handler(session, args) once arguments are resolved.
    """

    description: str
    handler: CommandHandler
    parameters: tuple[Parameter, ...] = field(default=())

    def __post_init__(self) -> None:
        params = tuple(_as_parameter(p) for p in self.parameters)
        seen: set[str] = set()
        for param in params:
            if param.name in seen:
                raise ValueError(f"Duplicate parameter name: {param.name}")
            seen.add(param.name)
        object.__setattr__(self, "parameters", params)

    @classmethod
    def build(
        cls,
        description: str,
        handler: CommandHandler,
        parameters: Iterable[ParameterSpec] = (),
    ) -> "CommandDescriptor":
        """Build a descriptor from Parameter objects or (name, help, default) triples."""
        return cls(description=description, handler=handler, parameters=tuple(parameters))  # type: ignore[arg-type]

    def parameter_names(self) -> list[str]:
        return [p.name for p in self.parameters]

    def default_for(self, name: str) -> str:
        """Declared default of `name`, or an empty string."""
        for param in self.parameters:
            if param.name == name:
                return param.default
        return ""

    def with_defaults(self, args: Mapping[str, str]) -> dict[str, str]:
        """Return `args` with declared defaults filled in for absent keys."""
        merged = {p.name: p.default for p in self.parameters}
        merged.update(args)
        return merged

    def invoke(self, session: "Session[Any]", args: dict[str, str]) -> Any:
        """Execute the underlying handler with resolved arguments."""
        return self.handler(session, args)
