"""Checks run on a raw command line before it is expanded and split."""

from __future__ import annotations

from collections.abc import Iterator

from .errors import ErrorKind, ShellSyntaxError

SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'
PIPE = "|"
SPACE = " "


def is_space(c: str) -> bool:
    """True for a space or a control character from backspace to carriage return."""
    return c == SPACE or (len(c) == 1 and "\x08" <= c <= "\r")


def is_metachar(c: str) -> bool:
    """True for one of the characters ``<``, ``>`` and ``|``."""
    return c != "" and c in "<>|"


def is_redir_metachar(c: str) -> bool:
    """True for ``<`` or ``>``."""
    return c != "" and c in "<>"


def is_blank(text: str) -> bool:
    """True if the text holds nothing but spaces."""
    return all(is_space(c) for c in text)


def _at(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


def quote_states(text: str) -> Iterator[tuple[bool, bool]]:
    """Yield (inside single quotes, inside double quotes) after each character."""
    single = double = False
    for ch in text:
        if ch == SINGLE_QUOTE and not double:
            single = not single
        elif ch == DOUBLE_QUOTE and not single:
            double = not double
        yield single, double


def has_open_quotes(text: str) -> bool:
    """True if a quote is left unclosed at the end of the text."""
    single = double = False
    for single, double in quote_states(text):
        pass
    return single or double


def check_extremes(text: str) -> None:
    """Reject a line starting with a pipe or ending with a metacharacter."""
    stripped = text.lstrip(" \x08\t\n\v\f\r")
    if stripped.startswith(PIPE):
        raise ShellSyntaxError(ErrorKind.EXTREM)
    stripped = text.rstrip(" \x08\t\n\v\f\r")
    if stripped and is_metachar(stripped[-1]):
        raise ShellSyntaxError(ErrorKind.EXTREM)


def _pipe_separated(text: str, i: int) -> bool:
    return _at(text, i - 1) == SPACE and _at(text, i + 1) == SPACE


def _redir_separated(text: str, i: int, c: str) -> bool:
    prev, nxt, after = _at(text, i - 1), _at(text, i + 1), _at(text, i + 2)
    if i == 0:
        return nxt == SPACE or (nxt == c and after == SPACE)
    if i == 1:
        return (
            (prev == SPACE and nxt == SPACE)
            or (prev == SPACE and nxt == c and after == SPACE)
            or (prev == c and nxt == SPACE)
        )
    return (
        (prev == SPACE and nxt == SPACE)
        or (prev == SPACE and nxt == c and after == SPACE)
        or (_at(text, i - 2) == SPACE and prev == c and nxt == SPACE)
    )


def _is_separated(text: str, i: int) -> bool:
    ch = text[i]
    if ch == PIPE:
        return _pipe_separated(text, i)
    return _redir_separated(text, i, ch)


def check_metachar_separated(text: str) -> None:
    """Require every unquoted metacharacter to stand apart between spaces."""
    for i, (ch, (single, double)) in enumerate(zip(text, quote_states(text))):
        if not single and not double and is_metachar(ch):
            if not _is_separated(text, i):
                raise ShellSyntaxError(ErrorKind.ALONE)


def check_metachar_consecutive(text: str) -> None:
    """Reject a redirection followed, past spaces, by another metacharacter."""
    for i, (ch, (single, double)) in enumerate(zip(text, quote_states(text))):
        if single or double or not is_redir_metachar(ch):
            continue
        if not is_space(_at(text, i + 1)):
            continue
        j = i + 1
        while _at(text, j) == SPACE:
            j += 1
        following = _at(text, j)
        if following == PIPE or is_redir_metachar(following):
            raise ShellSyntaxError(ErrorKind.CONSECUTIVE)


def check_syntax(text: str) -> bool:
    """Validate a command line.

    Returns False for a blank line, True for a valid one, and raises
    ShellSyntaxError for a malformed one.
    """
    if is_blank(text):
        return False
    if has_open_quotes(text):
        raise ShellSyntaxError(ErrorKind.QUOTE)
    check_extremes(text)
    check_metachar_separated(text)
    check_metachar_consecutive(text)
    return True