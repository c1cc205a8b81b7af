from typing import Iterator

import pytest
from prompt_toolkit.input import PipeInput, create_pipe_input
from prompt_toolkit.output import DummyOutput

from shellkit.interface.cli import PromptToolkitLineEditor


@pytest.fixture
def pipe_input() -> Iterator[PipeInput]:
    with create_pipe_input() as inp:
        yield inp


@pytest.fixture
def editor(pipe_input: PipeInput) -> PromptToolkitLineEditor:
    editor = PromptToolkitLineEditor(input=pipe_input, output=DummyOutput())
    editor.setup(["set a 1", "get a"], lambda: ["get", "set"])
    return editor


def test_typed_line_is_returned(editor: PromptToolkitLineEditor, pipe_input: PipeInput) -> None:
    pipe_input.send_text("help set\r")
    with editor:
        assert editor.get_line("kv> ") == "help set"


def test_up_arrow_recalls_newest_seeded_entry(
        editor: PromptToolkitLineEditor, pipe_input: PipeInput) -> None:
    pipe_input.send_text("\x1b[A\r")
    with editor:
        assert editor.get_line("kv> ") == "get a"


def test_ctrl_c_raises_keyboard_interrupt(
        editor: PromptToolkitLineEditor, pipe_input: PipeInput) -> None:
    pipe_input.send_text("\x03")
    with editor, pytest.raises(KeyboardInterrupt):
        editor.get_line("kv> ")


def test_ctrl_d_on_empty_line_raises_eof(
        editor: PromptToolkitLineEditor, pipe_input: PipeInput) -> None:
    pipe_input.send_text("\x04")
    with editor, pytest.raises(EOFError):
        editor.get_line("kv> ")


def test_get_line_requires_setup(pipe_input: PipeInput) -> None:
    editor = PromptToolkitLineEditor(input=pipe_input, output=DummyOutput())
    with pytest.raises(RuntimeError):
        editor.get_line("kv> ")
    editor.setup()
    editor.teardown()
    with pytest.raises(RuntimeError):
        editor.get_line("kv> ")
