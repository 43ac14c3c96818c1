"""The shell's own commands: echo, env, pwd, exit, cd, export and unset."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from typing import TextIO

from .environment import Environment
from .errors import ErrorKind, ShellError, report

_ATOI_SPACES = " \t\n\v\f\r"
_INT32 = 1 << 32


class ShellExit(Exception):
    """Raised by ``exit``: the shell should stop with ``status``."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"exit {status}")


def has_alpha(text: str) -> bool:
    """True if the text holds at least one ASCII letter."""
    return any(c.isascii() and c.isalpha() for c in text)


def _atoi(text: str | None) -> int:
    if not text:
        return 0
    i = 0
    length = len(text)
    while i < length and text[i] in _ATOI_SPACES:
        i += 1
    sign = 1
    if i < length and text[i] in "+-":
        if text[i] == "-":
            sign = -1
        i += 1
    value = 0
    while i < length and "0" <= text[i] <= "9":
        value = value * 10 + ord(text[i]) - ord("0")
        i += 1
    value *= sign
    # The result is narrowed to a 32-bit signed integer.
    return (value + (1 << 31)) % _INT32 - (1 << 31)


def exit_code(text: str | None) -> int:
    """The status ``exit`` uses for a numeric argument.

    The number is read like ``atoi`` and reduced modulo 256, keeping the
    sign of the number.
    """
    number = _atoi(text)
    remainder = abs(number) % 256
    return -remainder if number < 0 else remainder


def is_valid_name(name: str) -> bool:
    """True if ``name`` (up to any ``=``) is a name ``export`` accepts.

    Leading spaces are skipped; the name must start with an ASCII letter
    and go on with ASCII letters and digits only.
    """
    i = 0
    length = len(name)
    while i < length and (name[i] == " " or "\x08" <= name[i] <= "\r"):
        i += 1
    if i >= length or not (name[i].isascii() and name[i].isalpha()):
        return False
    for ch in name[i + 1:]:
        if ch == "=":
            break
        if not (ch.isascii() and ch.isalnum()):
            return False
    return True


def format_export(entry: str) -> str:
    """An entry as ``export`` lists it: values quoted, names alone as they are."""
    if "=" not in entry:
        return entry
    return "".join(ch + '"' if ch == "=" else ch for ch in entry) + '"'


def previous_dir(path: str) -> str:
    """The path up to its last slash; ``/`` for a top-level path, empty without a slash."""
    index = path.rfind("/")
    if index == 0:
        return "/"
    if index < 0:
        return ""
    return path[:index]


def builtin_echo(argv: Sequence[str], out: TextIO) -> int:
    """Print the arguments, each followed by a space; ``-n`` drops the newline."""
    args = list(argv[1:])
    if not args:
        return 0
    newline = True
    if "-n".startswith(args[0]):
        newline = False
        args = args[1:]
    for arg in args:
        out.write(arg + " ")
    if newline:
        out.write("\n")
    return 0


def builtin_env(env: Environment, out: TextIO) -> int:
    """Print every entry that carries a value."""
    for entry in env:
        if "=" in entry:
            out.write(entry + "\n")
    return 0


def builtin_pwd(out: TextIO) -> int:
    """Print the working directory."""
    try:
        current = os.getcwd()
    except OSError as exc:
        report(ShellError(ErrorKind.ACCESS, exc))
        return 1
    out.write(current + "\n")
    return 0


def builtin_exit(argv: Sequence[str], out: TextIO) -> int:
    """Leave the shell by raising ShellExit with the chosen status."""
    args = argv[1:]
    if not args:
        status = 0
    elif has_alpha(args[0]):
        out.write(f"exit: {args[0]}: numeric argument required\n")
        status = 2
    elif len(args) > 1:
        out.write("exit: too many arguments\n")
        raise ShellExit(1)
    else:
        status = exit_code(args[0])
    out.write("exit\n")
    raise ShellExit(status)


def _getcwd() -> str:
    try:
        return os.getcwd()
    except OSError as exc:
        raise ShellError(ErrorKind.GETWD, exc) from exc


def _chdir(path: str) -> None:
    try:
        os.chdir(path)
    except OSError as exc:
        raise ShellError(ErrorKind.CHDIR, exc) from exc


def _update_existing(env: Environment, name: str, value: str) -> None:
    try:
        env.update(name, value)
    except KeyError as exc:
        raise ShellError(ErrorKind.OLDPWD) from exc


def _cd_home(env: Environment) -> None:
    home = env.get("HOME")
    if home is None:
        raise ShellError(ErrorKind.GETWD)
    _update_existing(env, "OLDPWD", _getcwd())
    _chdir(home)
    _update_existing(env, "PWD", _getcwd())


def _cd_oldpwd(env: Environment) -> None:
    current = _getcwd()
    target = env.get("OLDPWD")
    if target is None:
        raise ShellError(ErrorKind.OLDPWD)
    _chdir(target)
    env.set("OLDPWD", current)
    env.set("PWD", target)


def _cd_parent(env: Environment) -> None:
    current = _getcwd()
    target = previous_dir(current)
    _chdir(target)
    env.set("OLDPWD", current)
    env.set("PWD", target)


def _cd_relative(arg: str, env: Environment) -> None:
    current = _getcwd()
    target = previous_dir(current) + "/" + arg[3:]
    _chdir(target)
    env.set("OLDPWD", current)
    env.set("PWD", target)


def _cd_special(arg: str, env: Environment) -> None:
    if arg.startswith("-"):
        _cd_oldpwd(env)
    elif arg == "..":
        _cd_parent(env)
    elif arg.startswith("../"):
        _cd_relative(arg, env)


def builtin_cd(argv: Sequence[str], env: Environment) -> int:
    """Change directory: home without argument, ``-``, ``..`` and ``../dir`` specially.

    Home and the special forms always give status 0, reporting any failure;
    a plain directory gives 1 when it cannot be entered.
    """
    if len(argv) < 2:
        try:
            _cd_home(env)
        except ShellError as error:
            report(error)
        return 0
    arg = argv[1]
    if arg.startswith("..") or arg.startswith("-"):
        try:
            _cd_special(arg, env)
        except ShellError as error:
            report(error)
        return 0
    try:
        _chdir(arg)
    except ShellError as error:
        report(error)
        return 1
    return 0


def builtin_export(argv: Sequence[str], env: Environment, out: TextIO) -> int:
    """Set variables, or list them all as ``declare -x`` lines without arguments."""
    args = argv[1:]
    if not args:
        for entry in env:
            out.write("declare -x " + format_export(entry) + "\n")
    for arg in args:
        if not is_valid_name(arg):
            sys.stdout.write(f"export: {arg}: not a valid identifier\n")
            continue
        env.put(arg)
    return 0


def builtin_unset(argv: Sequence[str], env: Environment) -> int:
    """Remove the named variables."""
    env.unset(argv[1:])
    return 0