"""Splitting of a command line into words."""

from __future__ import annotations

from .errors import ErrorKind, ShellSyntaxError

_QUOTES = ("'", '"')
_SPACE = " "


def tokenize(text: str) -> list[str]:
    """Split a line into words at spaces, removing quotes.

    Quoted text is taken literally and joins the word around it. Only the
    space character separates words; empty words are dropped. An unclosed
    quote raises ShellSyntaxError.
    """
    tokens: list[str] = []
    current: list[str] = []
    i = 0
    length = len(text)
    while i < length and text[i] == _SPACE:
        i += 1
    while i < length:
        ch = text[i]
        if ch in _QUOTES:
            end = text.find(ch, i + 1)
            if end < 0:
                raise ShellSyntaxError(ErrorKind.QUOTE)
            current.append(text[i + 1:end])
            i = end + 1
        elif ch == _SPACE:
            word = "".join(current)
            if word:
                tokens.append(word)
                current = []
            while i < length and text[i] == _SPACE:
                i += 1
        else:
            current.append(ch)
            i += 1
    word = "".join(current)
    if word:
        tokens.append(word)
    return tokens