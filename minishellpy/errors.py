"""Error kinds, their messages, and how the shell reports them."""

from __future__ import annotations

import sys
from enum import Enum


class ErrorKind(Enum):
    """Every kind of failure the shell distinguishes."""

    QUOTE = 0
    EXTREM = 1
    ALONE = 2
    CONSECUTIVE = 3
    ENVP = 4
    MALLOC = 5
    ARG = 6
    ATTR = 7
    OPEN = 8
    ACCESS = 9
    FORK = 10
    EXECVE = 11
    WAIT = 12
    PIPE = 13
    BUILT = 14
    EXPORT = 15
    CHDIR = 16
    HERE = 17
    GETWD = 18
    OLDPWD = 19
    EOF = 20
    ENV = 21


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.QUOTE: "SYNTAX ERROR: open quotes",
    ErrorKind.EXTREM: "SYNTAX ERROR: nothing after or before metachar",
    ErrorKind.ALONE: "SYNTAX ERROR: need separate metacharacter",
    ErrorKind.CONSECUTIVE: "SYNTAX ERROR: consecutive metachar",
    ErrorKind.ENVP: "ENV ERROR: env. variable not found or undefined",
    ErrorKind.ENV: "ENV ERROR: initializing enviroment failed",
    ErrorKind.OLDPWD: "ENV ERROR: updating OLDPWD",
    ErrorKind.MALLOC: "SYS ERROR: malloc failed",
    ErrorKind.ATTR: "SYS ERROR: unable to access terminal attributes",
    ErrorKind.OPEN: "SYS ERROR: open failed",
    ErrorKind.CHDIR: "SYS ERROR: chdir failed",
    ErrorKind.FORK: "SYS ERROR: fork failed",
    ErrorKind.EXECVE: "SYS ERROR: execve failed",
    ErrorKind.PIPE: "SYS ERROR: pipe failed",
    ErrorKind.GETWD: "SYS ERROR: failed to get working directory",
    ErrorKind.ACCESS: "ERROR: command not found",
    ErrorKind.BUILT: "ERROR: built failed",
    ErrorKind.EXPORT: "ERROR: export failed",
    ErrorKind.HERE: "ERROR: deleting here_doc failed",
    ErrorKind.EOF: "WAR: here-doc delimited by EOF (wanted 'delimiter')",
}

# Kinds whose message goes to standard output as a plain line.
_PLAIN = frozenset(
    {
        ErrorKind.QUOTE,
        ErrorKind.EXTREM,
        ErrorKind.ALONE,
        ErrorKind.CONSECUTIVE,
        ErrorKind.ENVP,
        ErrorKind.ATTR,
        ErrorKind.BUILT,
        ErrorKind.EXPORT,
        ErrorKind.EOF,
    }
)

# Kinds reported on standard error together with the system's reason.
_SYSTEM = frozenset(
    {
        ErrorKind.MALLOC,
        ErrorKind.ACCESS,
        ErrorKind.OPEN,
        ErrorKind.EXECVE,
        ErrorKind.CHDIR,
        ErrorKind.HERE,
        ErrorKind.GETWD,
    }
)


def message_for(kind: ErrorKind) -> str | None:
    """Return the fixed message of an error kind, or None if it has none."""
    return _MESSAGES.get(kind)


class ShellError(Exception):
    """A failure of the shell, tagged with its kind and an optional cause."""

    def __init__(self, kind: ErrorKind, cause: BaseException | None = None) -> None:
        self.kind = kind
        self.cause = cause
        super().__init__(message_for(kind) or kind.name)


class ShellSyntaxError(ShellError):
    """The command line is not well formed."""


def _reason(cause: BaseException | None) -> str | None:
    if cause is None:
        return None
    strerror = getattr(cause, "strerror", None)
    if strerror:
        return str(strerror)
    text = str(cause)
    return text or None


def report(error: ShellError) -> str | None:
    """Print the error the way the shell does and return the printed line.

    Kinds the shell reports silently print nothing and give None.
    """
    kind = error.kind
    message = message_for(kind)
    if message is None:
        return None
    if kind in _PLAIN:
        sys.stdout.write(message + "\n")
        sys.stdout.flush()
        return message
    if kind in _SYSTEM:
        reason = _reason(error.cause)
        line = f"{message}: {reason}" if reason else message
        sys.stderr.write(line + "\n")
        sys.stderr.flush()
        return line
    return None