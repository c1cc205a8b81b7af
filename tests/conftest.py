import io
from pathlib import Path
from typing import Any, Callable, Iterable

import pytest

from shellkit.interface.cli import BaseLineEditor
from shellkit.session import Session


class ScriptedLineEditor(BaseLineEditor):
    """Line editor fed from a list; ends with EOF or Ctrl-C."""

    def __init__(self, lines: Iterable[str], *, interrupt: bool = False) -> None:
        super().__init__()
        self.lines = list(lines)
        self.interrupt = interrupt
        self.prompts: list[str] = []
        self.torn_down = False

    def get_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            if self.interrupt:
                raise KeyboardInterrupt
            raise EOFError
        return self.lines.pop(0)

    def teardown(self) -> None:
        self.torn_down = True


class Recorder:
    """Handler that remembers every argument map it was called with."""

    def __init__(self) -> None:
        self.calls: list[dict[str, str]] = []
        self.sessions: list[Session[Any]] = []

    def __call__(self, session: Session[Any], args: dict[str, str]) -> None:
        self.sessions.append(session)
        self.calls.append(dict(args))


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    return tmp_path / "history"


@pytest.fixture
def make_session(history_path: Path) -> Callable[..., Session[Any]]:
    def _make(**kwargs: Any) -> Session[Any]:
        kwargs.setdefault("stdout", io.StringIO())
        kwargs.setdefault("history_path", history_path)
        return Session("test", **kwargs)

    return _make


def output(session: Session[Any]) -> str:
    return session.stdout.getvalue()  # type: ignore[attr-defined]
