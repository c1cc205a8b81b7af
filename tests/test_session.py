import logging
from pathlib import Path

import pytest
from conftest import Recorder, ScriptedLineEditor, output

from shellkit.commands import CommandDescriptor, CommandResult, Parameter
from shellkit.errors import HandlerError, InitializationError, UnknownCommand
from shellkit.interface.history import ShellHistory
from shellkit.session import Session, SessionExit
from shellkit.ui import init_logger

AB = [("a", "first", ""), ("b", "second", "2")]


def test_execute_line_resolves_arguments(make_session) -> None:
    session = make_session()
    recorder = Recorder()
    session.add_command("cmd", "test", recorder, AB)

    assert session.execute_line("cmd 1 2") is False
    assert session.execute_line("cmd a=5 b=6") is False
    assert session.execute_line("cmd 1 b=6") is False
    assert recorder.calls == [
        {"a": "1", "b": "2"},
        {"a": "5", "b": "6"},
        {"a": "1", "b": "6"},
    ]


def test_quoted_values_reach_handler(make_session) -> None:
    session = make_session()
    recorder = Recorder()
    session.add_command("set", "test", recorder, [("name", "", ""), ("value", "", "")])

    session.execute_line('set name="foo bar" value=42')
    session.execute_line("set 'a b' \"x=y\"")
    assert recorder.calls == [
        {"name": "foo bar", "value": "42"},
        {"name": "a b", "value": "x=y"},
    ]


def test_extra_argument_warns_and_still_dispatches(make_session) -> None:
    session = make_session()
    recorder = Recorder()
    session.add_command("cmd", "test", recorder, AB)

    assert session.execute_line("cmd 1 2 3") is False
    assert recorder.calls == [{"a": "1", "b": "2"}]
    assert "WARNING: extra argument: 3" in output(session)
    assert "Error" not in output(session)


def test_invalid_argument_is_reported(make_session) -> None:
    session = make_session()
    recorder = Recorder()
    session.add_command("cmd", "test", recorder, AB)

    assert session.execute_line("cmd x=y=z") is False
    assert recorder.calls == []
    assert "Error: invalid argument: x=y=z" in output(session)


def test_statements_stop_at_exit(make_session) -> None:
    session = make_session()
    seen: list[str] = []
    for name in ("cmd1", "cmd2", "cmd3"):
        session.add_command(name, name, lambda s, a, n=name: seen.append(n))

    assert session.execute_line("cmd1; cmd2; exit; cmd3") is True
    assert seen == ["cmd1", "cmd2"]
    assert session.execute_line("quit") is True


def test_exit_is_case_sensitive(make_session) -> None:
    session = make_session()
    assert session.execute_line("EXIT") is False
    assert "unknown command: EXIT" in output(session)


def test_failures_do_not_stop_later_statements(make_session) -> None:
    session = make_session()
    recorder = Recorder()
    session.add_command("ok", "test", recorder)

    def boom(s, a):
        raise RuntimeError("kaboom")

    session.add_command("boom", "test", boom)
    assert session.execute_line('missing; boom; ok; bad "quote; ok') is False
    text = output(session)
    assert "Error: unknown command: missing" in text
    assert "RuntimeError: kaboom" in text
    assert "unterminated" in text
    assert len(recorder.calls) == 2


def test_handler_errors(make_session) -> None:
    session = make_session()

    def boom(s, a):
        raise ValueError("bad value")

    session.add_command("boom", "test", boom)
    session.add_command("fail", "test", lambda s, a: CommandResult(ok=False, message="nope"))

    with pytest.raises(HandlerError) as excinfo:
        session.dispatch(["boom"])
    assert isinstance(excinfo.value.cause, ValueError)
    assert excinfo.value.command == "boom"

    with pytest.raises(HandlerError, match="nope"):
        session.dispatch(["fail"])


def test_handler_output_is_printed(make_session) -> None:
    session = make_session()
    session.add_command("hello", "test", lambda s, a: "hello there")
    session.add_command("res", "test", lambda s, a: CommandResult(message="done"))
    session.execute_line("hello; res")
    assert output(session).splitlines() == ["hello there", "done"]


def test_empty_dispatch_is_noop(make_session) -> None:
    session = make_session()
    assert session.dispatch([]) is None
    assert session.execute_line("  ;  ; ") is False
    assert output(session) == ""


def test_handler_receives_session_and_data(make_session) -> None:
    payload = {"count": 0}
    session = make_session(data=payload)
    recorder = Recorder()
    session.add_command("cmd", "test", recorder)
    session.execute_line("cmd")
    assert recorder.sessions[0] is session
    assert recorder.sessions[0].data is payload


def test_case_insensitive_dispatch(make_session) -> None:
    recorder = Recorder()
    session = make_session(case_insensitive=True)
    session.add_command("Foo", "test", recorder, AB)
    session.dispatch(["foo", "args"])
    assert recorder.calls == [{"a": "args"}]

    strict = make_session()
    strict.add_command("Foo", "test", recorder, AB)
    with pytest.raises(UnknownCommand):
        strict.dispatch(["foo", "args"])


def test_reregistration_keeps_second_descriptor(make_session) -> None:
    session = make_session()
    first, second = Recorder(), Recorder()
    session.register("cmd", CommandDescriptor("first", first))
    session.register("cmd", CommandDescriptor("second", second))
    session.execute_line("cmd")
    assert first.calls == []
    assert second.calls == [{}]


def test_command_decorator(make_session) -> None:
    session = make_session()

    @session.command(parameters=[("who", "Name to greet", "world")])
    def say_hello(s, args):
        """Greet someone."""
        return f"hello {args.get('who', 'world')}"

    assert session.commands.get("say-hello").description == "Greet someone."
    session.execute_line("say-hello; say-hello bob")
    assert output(session).splitlines() == ["hello world", "hello bob"]


# ---------- help ----------

def test_help_lists_each_command_once(make_session) -> None:
    session = make_session()
    names = ["alpha", "beta", "gamma"]
    for name in names:
        session.add_command(name, f"{name} description", Recorder())
    session.execute_line("help")
    lines = output(session).splitlines()
    for name in names + ["help"]:
        assert sum(1 for line in lines if line.startswith(f"| {name} ")) == 1
    assert "Use 'help <command>' to get help for a specific command" in lines


def test_help_for_command_shows_parameters(make_session) -> None:
    session = make_session()
    session.register("cmd", CommandDescriptor(
        "Does things", Recorder(), (Parameter("a", "first one", "1"), Parameter("b", "second one"))))
    session.execute_line("help cmd")
    text = output(session)
    assert "Description: Does things" in text
    assert "first one" in text
    assert "| 1 " in text
    assert "cmd [a] [b]" in text


def test_help_missing_command(make_session) -> None:
    session = make_session()
    with pytest.raises(UnknownCommand):
        session.dispatch(["help", "missing"])
    session.execute_line("help command=missing")
    assert "Error: unknown command: missing" in output(session)


def test_unknown_command_suggests_close_names(make_session) -> None:
    session = make_session()
    session.add_command("status", "test", Recorder())
    session.execute_line("stauts")
    assert "did you mean: status" in output(session)


# ---------- interactive loop ----------

def test_loop_runs_until_exit_and_saves_history(make_session, history_path: Path) -> None:
    recorder = Recorder()
    editor = ScriptedLineEditor(["cmd 1", "", "cmd a=2; exit; cmd 3", "never"])
    session = make_session(line_editor=editor, prompter=lambda s: f"{s.name}$ ")
    session.add_command("cmd", "test", recorder, AB)

    assert session.loop() is SessionExit.CANCELLED
    assert recorder.calls == [{"a": "1"}, {"a": "2"}]
    assert editor.prompts == ["test$ "] * 3
    assert editor.torn_down
    assert editor.lines == ["never"]

    reopened = ShellHistory(history_path)
    reopened.load()
    assert reopened.entries == ["cmd 1", "cmd a=2; exit; cmd 3"]


def test_loop_appends_to_existing_history(make_session, history_path: Path) -> None:
    history_path.write_text("old one\nold two\n", encoding="utf-8")
    editor = ScriptedLineEditor(["help"])
    session = make_session(line_editor=editor)

    assert session.loop() is SessionExit.EOF
    assert editor.history == ["old one", "old two"]
    assert history_path.read_text(encoding="utf-8").splitlines() == ["old one", "old two", "help"]


def test_loop_interrupt(make_session, history_path: Path) -> None:
    editor = ScriptedLineEditor(["help"], interrupt=True)
    session = make_session(line_editor=editor)

    assert session.loop() is SessionExit.INTERRUPTED
    assert editor.torn_down
    assert history_path.read_text(encoding="utf-8").splitlines() == ["help"]


def test_run_exits_process_on_interrupt(make_session) -> None:
    session = make_session(line_editor=ScriptedLineEditor([], interrupt=True))
    with pytest.raises(SystemExit) as excinfo:
        session.run()
    assert excinfo.value.code == 130


def test_run_returns_on_eof(make_session) -> None:
    session = make_session(line_editor=ScriptedLineEditor([]))
    assert session.run() is SessionExit.EOF


def test_initialization_failure(make_session) -> None:
    session = make_session(quotes=(" ",), line_editor=ScriptedLineEditor(["help"]))
    assert session.loop() is SessionExit.INIT_FAILED
    assert "Error initializing cli" in output(session)
    with pytest.raises(SystemExit) as excinfo:
        session.run()
    assert excinfo.value.code == 1


def test_history_io_failure_is_not_fatal(make_session, tmp_path: Path) -> None:
    # a directory cannot be read or written as a history file
    session = make_session(history_path=tmp_path, line_editor=ScriptedLineEditor(["help"]))
    assert session.loop() is SessionExit.EOF
    text = output(session)
    assert "Error reading history file" in text
    assert "Error writing history file" in text


def test_completion_ignores_case_mode(make_session) -> None:
    session = make_session()
    for name in ("Status", "stop", "list"):
        session.add_command(name, "test", Recorder())
    assert session.complete("st") == ["Status", "stop"]
    assert session.complete("ST") == ["Status", "stop"]
    assert session.complete("") == ["Status", "help", "list", "stop"]


def test_session_is_generic() -> None:
    session: Session[list[int]] = Session("typed", data=[1, 2])
    assert session.data == [1, 2]
    assert session.history_path.name == "typed-shell"


def test_initialization_error_from_handler_is_reported(make_session) -> None:
    def not_ready(session, args):
        raise InitializationError("backend not ready")

    recorder = Recorder()
    session = make_session(line_editor=ScriptedLineEditor(["boot", "cmd 1"]))
    session.add_command("boot", "test", not_ready)
    session.add_command("cmd", "test", recorder, AB)

    assert session.execute_line("boot; cmd 1") is False
    assert "Error: backend not ready" in output(session)
    assert session.loop() is SessionExit.EOF
    assert recorder.calls == [{"a": "1"}, {"a": "1"}]


def test_editor_released_when_setup_fails(make_session, history_path: Path) -> None:
    class BrokenEditor(ScriptedLineEditor):
        def setup(self, history=(), names=None) -> None:
            raise RuntimeError("no terminal")

    editor = BrokenEditor(["help"])
    session = make_session(line_editor=editor)
    with pytest.raises(RuntimeError):
        session.loop()
    assert editor.torn_down
    assert editor.prompts == []


def test_warnings_are_shown_once_with_logging_enabled(make_session, tmp_path: Path, capsys) -> None:
    logger = init_logger("shellkit", level="WARNING")
    try:
        # a directory as history path makes both history reads and writes fail
        session = make_session(
            history_path=tmp_path, line_editor=ScriptedLineEditor(["cmd 1 2"]))
        session.add_command("cmd", "test", Recorder(), [("a", "first", "")])
        assert session.loop() is SessionExit.EOF
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    text = output(session)
    assert text.count("extra argument: 2") == 1
    assert "Error reading history file" in text
    assert "Error writing history file" in text
    assert capsys.readouterr().err == ""
