# shellkit/plugins/kv/entrypoint.py
from __future__ import annotations

from typing import Any

from shellkit.commands import CommandDescriptor, CommandResult, Parameter
from shellkit.session import Session
from shellkit.ui import format_table


def _store(session: Session[Any]) -> dict[str, str]:
    """The session payload is the dict the shell was started with."""
    if session.data is None:
        raise RuntimeError("this shell was started without a data store")
    return session.data


# ---------- set ----------
def kv_set(session: Session[Any], args: dict[str, str]) -> CommandResult:
    key = args.get("key", "")
    if not key:
        return CommandResult(ok=False, message="set: missing key")
    value = args.get("value", SET.default_for("value"))
    _store(session)[key] = value
    return CommandResult(message=f"{key} = {value}")


# ---------- get ----------
def kv_get(session: Session[Any], args: dict[str, str]) -> CommandResult:
    key = args.get("key", "")
    store = _store(session)
    if key not in store:
        return CommandResult(ok=False, message=f"get: no such key: {key}")
    return CommandResult(message=store[key], data=store[key])


# ---------- unset ----------
def kv_unset(session: Session[Any], args: dict[str, str]) -> CommandResult:
    key = args.get("key", "")
    if _store(session).pop(key, None) is None:
        return CommandResult(ok=False, message=f"unset: no such key: {key}")
    return CommandResult(message=f"removed {key}")


# ---------- list ----------
def kv_list(session: Session[Any], args: dict[str, str]) -> str:
    prefix = args.get("prefix", "")
    rows = [[k, v] for k, v in sorted(_store(session).items()) if k.startswith(prefix)]
    if not rows:
        return "(empty)"
    return format_table(rows, headers=["Key", "Value"])


SET = CommandDescriptor(
    description="Store a value under a key",
    handler=kv_set,
    parameters=(
        Parameter("key", "Key to set"),
        Parameter("value", "Value to store", ""),
    ),
)

COMMANDS = {
    "set": SET,
    "get": CommandDescriptor(
        description="Print the value stored under a key",
        handler=kv_get,
        parameters=(Parameter("key", "Key to read"),),
    ),
    "unset": CommandDescriptor(
        description="Remove a key",
        handler=kv_unset,
        parameters=(Parameter("key", "Key to remove"),),
    ),
    "list": CommandDescriptor(
        description="List stored keys and values",
        handler=kv_list,
        parameters=(Parameter("prefix", "Only keys starting with this prefix", ""),),
    ),
}
