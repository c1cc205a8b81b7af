from prompt_toolkit.document import Document

from shellkit.interface.completion import CommandCompleter, suggest

NAMES = ["help", "Status", "stop", "list"]


def test_suggest_is_case_insensitive_and_sorted() -> None:
    assert suggest(NAMES, "st") == ["Status", "stop"]
    assert suggest(NAMES, "STA") == ["Status"]
    assert suggest(NAMES, "  li") == ["list"]
    assert suggest(NAMES, "x") == []


def test_completer_replaces_typed_prefix() -> None:
    completer = CommandCompleter(lambda: NAMES)
    completions = list(completer.get_completions(Document("sT"), None))
    assert [c.text for c in completions] == ["Status", "stop"]
    assert all(c.start_position == -2 for c in completions)


def test_completer_reads_names_lazily() -> None:
    names: list[str] = []
    completer = CommandCompleter(lambda: names)
    assert list(completer.get_completions(Document("h"), None)) == []
    names.append("help")
    assert [c.text for c in completer.get_completions(Document("h"), None)] == ["help"]
