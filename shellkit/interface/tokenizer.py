#!/usr/bin/env python3
# shellkit/interface/tokenizer.py
from __future__ import annotations

"""
Quote-aware splitting of input lines and argument tokens.

A Splitter cuts text on a single delimiter character, treating quoted spans
as literal. Two splitters are used per session:

    line splitter      ' '  -> [command, arg1, arg2, ...] (quotes kept)
    argument splitter  '='  -> [key, value] or [value]    (quotes removed)

Keeping quotes in the first pass lets `key="a=b"` reach the second pass
intact, where the '=' inside quotes is not a boundary.
"""

from typing import Iterable, List, Optional, Tuple

from shellkit.errors import InitializationError, TokenizeError

DEFAULT_QUOTES: Tuple[str, ...] = ('"', "'")
LINE_DELIMITER = " "
ARGUMENT_DELIMITER = "="
STATEMENT_SEPARATOR = ";"
ESCAPE = "\\"

# (char, came_from_quoted_span)
_Char = Tuple[str, bool]


class Splitter:
    """
    Split text on `delimiter` outside of quotes.

    Behaviour:
      - Leading/trailing empty pieces are dropped.
      - Unquoted whitespace around each piece is trimmed.
      - Backslash-escaped quote characters are unescaped.
      - With `ignore_empties` (default for whitespace delimiters) every empty
        piece is dropped, so runs of blanks count as one boundary.
      - With `keep_quotes` quote characters (and escapes) stay in the output.
    """

    def __init__(
        self,
        delimiter: str,
        quotes: Iterable[str] = DEFAULT_QUOTES,
        *,
        keep_quotes: bool = False,
        ignore_empties: Optional[bool] = None,
    ) -> None:
        quotes = tuple(quotes)
        if len(delimiter) != 1:
            raise InitializationError(
                f"delimiter must be a single character, got {delimiter!r}")
        if delimiter in quotes or delimiter == ESCAPE:
            raise InitializationError(
                f"delimiter {delimiter!r} collides with a quote or escape character")
        if any(len(q) != 1 for q in quotes):
            raise InitializationError(
                f"quote characters must be single characters, got {quotes!r}")

        self.delimiter = delimiter
        self.quotes = quotes
        self.keep_quotes = keep_quotes
        self.ignore_empties = delimiter.isspace() if ignore_empties is None else ignore_empties

    def _is_boundary(self, ch: str) -> bool:
        if self.delimiter.isspace():
            return ch.isspace()
        return ch == self.delimiter

    def _scan(
        self, text: str, split: bool = True, keep_quotes: Optional[bool] = None
    ) -> List[Tuple[List[_Char], bool]]:
        """Return raw pieces as (chars, contained_quotes)."""
        if keep_quotes is None:
            keep_quotes = self.keep_quotes
        pieces: List[Tuple[List[_Char], bool]] = []
        buf: List[_Char] = []
        had_quotes = False
        quote: Optional[str] = None
        i = 0
        n = len(text)

        while i < n:
            ch = text[i]
            if ch == ESCAPE and i + 1 < n and text[i + 1] in self.quotes:
                if keep_quotes:
                    buf.append((ch, True))
                buf.append((text[i + 1], True))
                i += 2
                continue

            if quote is not None:
                if ch == quote:
                    quote = None
                    if keep_quotes:
                        buf.append((ch, True))
                else:
                    buf.append((ch, True))
            elif ch in self.quotes:
                quote = ch
                had_quotes = True
                if keep_quotes:
                    buf.append((ch, True))
            elif split and self._is_boundary(ch):
                pieces.append((buf, had_quotes))
                buf, had_quotes = [], False
            else:
                buf.append((ch, False))
            i += 1

        if quote is not None:
            raise TokenizeError(text, f"unterminated {quote} quote")
        pieces.append((buf, had_quotes))
        return pieces

    @staticmethod
    def _trim(chars: List[_Char]) -> str:
        start, end = 0, len(chars)
        while start < end and not chars[start][1] and chars[start][0].isspace():
            start += 1
        while end > start and not chars[end - 1][1] and chars[end - 1][0].isspace():
            end -= 1
        return "".join(ch for ch, _ in chars[start:end])

    def split(self, text: str) -> List[str]:
        """Split `text` into trimmed, unescaped tokens."""
        pieces = [(self._trim(chars), quoted) for chars, quoted in self._scan(text)]

        def _empty(piece: Tuple[str, bool]) -> bool:
            return piece[0] == "" and not piece[1]

        if self.ignore_empties:
            pieces = [p for p in pieces if not _empty(p)]
        else:
            if pieces and _empty(pieces[0]):
                pieces = pieces[1:]
            if pieces and _empty(pieces[-1]):
                pieces = pieces[:-1]
        return [token for token, _ in pieces]

    def unquote(self, text: str) -> str:
        """Remove quoting from a single token without splitting it."""
        chars, _ = self._scan(text, split=False, keep_quotes=False)[0]
        return self._trim(chars)


def new_line_splitter(quotes: Iterable[str] = DEFAULT_QUOTES) -> Splitter:
    """Splitter for a whole statement: `[command, arg1, ...]`, quotes kept."""
    return Splitter(LINE_DELIMITER, quotes, keep_quotes=True)


def new_argument_splitter(quotes: Iterable[str] = DEFAULT_QUOTES) -> Splitter:
    """Splitter for one argument token: `[key, value]` or `[value]`."""
    return Splitter(ARGUMENT_DELIMITER, quotes, ignore_empties=False)


def tokenize(command_line: str) -> list[str]:
    """Split a raw command line into unquoted tokens."""
    return Splitter(LINE_DELIMITER).split(command_line)


def split_statements(line: str) -> list[str]:
    """Split an input line on the statement separator, dropping blank statements."""
    return [s.strip() for s in line.split(STATEMENT_SEPARATOR) if s.strip()]
