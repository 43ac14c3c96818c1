"""Expansion of ``$NAME`` and ``$?`` in a command line."""

from __future__ import annotations

from .environment import Environment
from .syntax import quote_states

_DOLLAR = "$"
_SPACE = " "


def is_expansible(text: str, index: int) -> bool:
    """True unless position ``index`` lies inside single quotes."""
    single = False
    for single, _double in quote_states(text[:index]):
        pass
    return not single


def var_length(text: str, index: int) -> int:
    """Length of the variable name starting at ``index``: up to a space or the end."""
    end = text.find(_SPACE, index)
    if end < 0:
        end = len(text)
    return max(end - index, 0)


def is_name_char(c: str) -> bool:
    """True for an ASCII letter, an ASCII digit or an underscore."""
    return len(c) == 1 and (c.isascii() and c.isalnum() or c == "_")


def _lookup(env: Environment, name: str) -> str:
    # The first entry beginning with the name is taken; what follows the
    # name and one more character is its value.
    for entry in env:
        if entry.startswith(name):
            return entry[len(name) + 1:]
    return ""


def expand(text: str, env: Environment, status: int) -> str:
    """Replace variables outside single quotes with their values.

    ``$?`` becomes the last exit status; a ``$`` followed by a space or the
    end of the line is kept. A variable's name runs to the next space, and
    an unknown variable expands to nothing.
    """
    i = 0
    while i < len(text):
        if text[i] == _DOLLAR and is_expansible(text, i):
            following = text[i + 1:i + 2]
            if following in (_SPACE, ""):
                i += 1
                continue
            if following == "?":
                text = text[:i] + str(status) + text[i + 2:]
                i = 0
                continue
            start = i + 1
            length = var_length(text, start)
            value = _lookup(env, text[start:start + length])
            text = text[:i] + value + text[start + length:]
            i = 0
        i += 1
    return text