"""Turning the words of a command line into the commands of a pipeline."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from .errors import ErrorKind, ShellError, ShellSyntaxError, report

PIPE = "|"
REDIR_IN = "<"
HEREDOC = "<<"
REDIR_OUT = ">"
REDIR_APPEND = ">>"
REDIRECTIONS = (REDIR_IN, HEREDOC, REDIR_OUT, REDIR_APPEND)
HERE_DOC = "here_doc"
OPEN_MODE = 0o644
BUILTINS = frozenset({"env", "exit", "echo", "pwd", "cd", "export", "unset"})


@dataclass
class Command:
    """One stage of a pipeline: its words and where its input and output go."""

    argv: list[str] = field(default_factory=list)
    path: str | None = None
    filename_in: str | None = None
    filename_out: str | None = None
    out_append: bool = False
    hdoc_content: str | None = None


def is_pipe(token: str | None) -> bool:
    """True for the pipe word ``|``."""
    return token == PIPE


def is_redirection(token: str | None) -> bool:
    """True for one of ``<``, ``<<``, ``>`` and ``>>``."""
    return token in REDIRECTIONS


def is_builtin(argv: Sequence[str] | None) -> bool:
    """True if the command names one of the shell's own commands."""
    if not argv:
        return False
    return argv[0] in BUILTINS


def is_executable_path(argv: Sequence[str] | None) -> bool:
    """True if the command is given as ``./something``."""
    if not argv:
        return False
    name = argv[0]
    return len(name) >= 3 and name.startswith("./")


def resolve_path(search_paths: Iterable[str] | None, cmd: str) -> str | None:
    """Find the program to run for ``cmd``.

    Without search paths nothing is found. Otherwise ``cmd`` itself is used
    when it is executable, else the first executable ``dir/cmd``.
    """
    if search_paths is None:
        return None
    if os.access(cmd, os.X_OK):
        return cmd
    for directory in search_paths:
        candidate = f"{directory}/{cmd}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None


def read_heredoc(delimiter: str, stream: TextIO) -> str:
    """Read lines up to a line equal to ``delimiter`` and return them joined.

    At end of input a warning is printed and what was read is returned.
    """
    wanted = delimiter + "\n"
    lines: list[str] = []
    for line in iter(stream.readline, ""):
        if line == wanted:
            return "".join(lines)
        lines.append(line)
    report(ShellError(ErrorKind.EOF))
    return "".join(lines)


def _touch(path: str) -> None:
    try:
        fd = os.open(path, os.O_CREAT | os.O_RDONLY, OPEN_MODE)
    except OSError as exc:
        raise ShellError(ErrorKind.OPEN, exc) from exc
    os.close(fd)


def _apply_redirection(command: Command, operator: str, target: str, stream: TextIO) -> None:
    if operator == REDIR_IN:
        command.filename_in = target
    elif operator == HEREDOC:
        command.filename_in = HERE_DOC
        command.hdoc_content = read_heredoc(target, stream)
    elif operator == REDIR_OUT:
        command.filename_out = target
    else:
        command.filename_out = target
        command.out_append = True


def _finish(command: Command, search_paths: Iterable[str] | None) -> Command:
    if not is_builtin(command.argv):
        if is_executable_path(command.argv):
            command.path = command.argv[0]
        elif command.argv:
            command.path = resolve_path(search_paths, command.argv[0])
    return command


def build_commands(
    tokens: Iterable[str],
    search_paths: Sequence[str] | None,
    stdin: TextIO | None = None,
) -> list[Command]:
    """Group words into commands split at pipes, applying redirections.

    Output files are created as soon as they are named; here-documents are
    read from ``stdin`` (standard input by default).
    """
    stream = sys.stdin if stdin is None else stdin
    commands: list[Command] = []
    current: Command | None = None
    words = iter(tokens)
    for token in words:
        if current is None:
            current = Command()
        if is_redirection(token):
            target = next(words, None)
            if target is None:
                raise ShellSyntaxError(ErrorKind.EXTREM)
            _apply_redirection(current, token, target, stream)
            if token in (REDIR_OUT, REDIR_APPEND):
                _touch(target)
        elif is_pipe(token):
            commands.append(_finish(current, search_paths))
            current = None
        else:
            current.argv.append(token)
    if current is None:
        if not commands:
            return []
        raise ShellSyntaxError(ErrorKind.EXTREM)
    commands.append(_finish(current, search_paths))
    return commands