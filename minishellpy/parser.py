"""From a raw command line to the commands to run."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from .commands import Command, build_commands, is_pipe, is_redirection
from .environment import Environment
from .errors import ErrorKind, ShellSyntaxError
from .expansion import expand
from .lexer import tokenize
from .syntax import check_syntax


def is_metachar_token(token: str | None) -> bool:
    """True for a redirection operator or a pipe."""
    return is_redirection(token) or is_pipe(token)


def check_tokens(tokens: Sequence[str]) -> Sequence[str]:
    """Check where operators stand among the words and return the words.

    Raises ShellSyntaxError for a lone operator, a leading pipe, a trailing
    operator or two operators in a row.
    """
    if len(tokens) == 1:
        if is_metachar_token(tokens[0]):
            raise ShellSyntaxError(ErrorKind.EXTREM)
        return tokens
    last_pair = len(tokens) - 2
    for index, (token, following) in enumerate(zip(tokens, tokens[1:])):
        if index == 0 and is_pipe(token):
            raise ShellSyntaxError(ErrorKind.EXTREM)
        if index == last_pair and is_metachar_token(following):
            raise ShellSyntaxError(ErrorKind.EXTREM)
        if is_metachar_token(token) and is_metachar_token(following):
            raise ShellSyntaxError(ErrorKind.CONSECUTIVE)
    return tokens


def parse(
    text: str,
    env: Environment,
    status: int,
    stdin: TextIO | None = None,
) -> list[Command]:
    """Check, expand and split a line into commands.

    A blank line gives no commands. Malformed input raises ShellSyntaxError.
    """
    if not check_syntax(text):
        return []
    expanded = expand(text, env, status)
    tokens = tokenize(expanded)
    if not tokens:
        return []
    check_tokens(tokens)
    return build_commands(tokens, env.search_paths(), stdin)