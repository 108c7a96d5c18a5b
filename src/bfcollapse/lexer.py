from __future__ import annotations

from typing import Iterator

ALLOWED_CHARS = frozenset('+-[]><.,')


def is_code_char(ch: str) -> bool:
    return ch in ALLOWED_CHARS


class Lexer:
    """
    Filters source text down to instruction symbols.

    A lexer walks its source once; build a new one to scan again.
    `offset` is the source index of the last symbol handed out (-1 before
    the first one), so the parser can point at a bad bracket.
    """

    def __init__(self, source: str):
        self.source = source
        self.offset = -1
        self._pos = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        source = self.source
        length = len(source)
        while self._pos < length:
            ch = source[self._pos]
            self._pos += 1
            if is_code_char(ch):
                self.offset = self._pos - 1
                return ch
        raise StopIteration


def lex(source: str) -> Lexer:
    return Lexer(source)
