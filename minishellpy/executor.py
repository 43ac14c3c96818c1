"""Running a parsed pipeline: built-ins in the shell, programs as child processes."""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from collections.abc import Sequence
from typing import IO, TextIO

from .builtins import (
    ShellExit,
    builtin_cd,
    builtin_echo,
    builtin_env,
    builtin_exit,
    builtin_export,
    builtin_pwd,
    builtin_unset,
)
from .commands import HERE_DOC, OPEN_MODE, Command, is_builtin
from .environment import Environment
from .errors import ErrorKind, ShellError, report

_SIGNAL_BASE = 128


def status_from_returncode(code: int) -> int:
    """The shell status of a finished child: its exit code, or 128 plus the signal."""
    if code < 0:
        return _SIGNAL_BASE - code
    return code


def write_heredoc(content: str | None, path: str = HERE_DOC) -> str:
    """Write a here-document's text to ``path``, replacing it, and return the path."""
    try:
        fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, OPEN_MODE)
    except OSError as exc:
        raise ShellError(ErrorKind.OPEN, exc) from exc
    with os.fdopen(fd, "w") as handle:
        handle.write(content or "")
    return path


def run_builtin(command: Command, env: Environment, out: TextIO) -> int:
    """Run one of the shell's own commands, writing its output to ``out``.

    ``exit`` raises ShellExit; other commands return their status.
    """
    name = command.argv[0] if command.argv else ""
    argv = command.argv
    if name == "env":
        return builtin_env(env, out)
    if name == "exit":
        return builtin_exit(argv, out)
    if name == "echo":
        return builtin_echo(argv, out)
    if name == "pwd":
        return builtin_pwd(out)
    if name == "cd":
        return builtin_cd(argv, env)
    if name == "export":
        return builtin_export(argv, env, out)
    if name == "unset":
        return builtin_unset(argv, env)
    return 0


def _open_input(command: Command) -> IO[str] | None:
    if command.filename_in is None:
        return None
    path = command.filename_in
    if command.hdoc_content is not None and path.startswith(HERE_DOC):
        path = write_heredoc(command.hdoc_content, HERE_DOC)
    try:
        return open(path, "r")
    except OSError as exc:
        raise ShellError(ErrorKind.OPEN, exc) from exc


def _open_output(command: Command) -> IO[str] | None:
    if command.filename_out is None:
        return None
    flags = os.O_CREAT | os.O_WRONLY
    flags |= os.O_APPEND if command.out_append else os.O_TRUNC
    try:
        fd = os.open(command.filename_out, flags, OPEN_MODE)
    except OSError as exc:
        raise ShellError(ErrorKind.OPEN, exc) from exc
    return os.fdopen(fd, "a" if command.out_append else "w")


def _close_all(handles: Sequence[IO | None]) -> None:
    for handle in handles:
        if handle is not None:
            handle.close()


def _run_single_builtin(command: Command, env: Environment) -> int:
    infile = outfile = None
    try:
        try:
            infile = _open_input(command)
            outfile = _open_output(command)
        except ShellError as error:
            report(error)
            return 1
        if command.argv[0] == "exit":
            return run_builtin(command, env, sys.stdout)
        out = outfile if outfile is not None else sys.stdout
        status = run_builtin(command, env, out)
        out.flush()
        return status
    finally:
        _close_all([infile, outfile])


def _run_child_builtin(command: Command, env: Environment, out: TextIO) -> int:
    """Run a built-in as a pipeline stage: its changes do not reach the shell."""
    cwd = os.getcwd()
    try:
        status = run_builtin(command, Environment(list(env.entries)), out)
    except ShellExit as stop:
        status = stop.status
    finally:
        out.flush()
        os.chdir(cwd)
    return status & 0xFF


def _run_pipeline(commands: Sequence[Command], env: Environment) -> int:
    results: list[int | subprocess.Popen] = []
    previous: IO | None = None
    child_env = env.to_dict()
    last_index = len(commands) - 1
    for index, command in enumerate(commands):
        last = index == last_index
        upstream, previous = previous, None
        infile = outfile = None
        try:
            try:
                infile = _open_input(command)
                outfile = _open_output(command)
            except ShellError as error:
                report(error)
                results.append(1)
                continue
            if is_builtin(command.argv):
                if outfile is not None:
                    target: TextIO = outfile
                elif last:
                    target = sys.stdout
                else:
                    target = tempfile.TemporaryFile("w+")
                results.append(_run_child_builtin(command, env, target))
                if outfile is None and not last:
                    target.seek(0)
                    previous = target
                continue
            if not command.argv:
                results.append(1)
                continue
            if command.path is None:
                report(ShellError(ErrorKind.ACCESS))
                results.append(1)
                continue
            if infile is not None:
                stdin: IO | int | None = infile
            elif upstream is not None:
                stdin = upstream
            elif index > 0:
                stdin = subprocess.DEVNULL
            else:
                stdin = None
            if outfile is not None:
                stdout: IO | int | None = outfile
            elif last:
                stdout = None
            else:
                stdout = subprocess.PIPE
            sys.stdout.flush()
            try:
                process = subprocess.Popen(
                    command.argv,
                    executable=command.path,
                    stdin=stdin,
                    stdout=stdout,
                    env=child_env,
                )
            except OSError as exc:
                report(ShellError(ErrorKind.EXECVE, exc))
                results.append(1)
                continue
            if stdout == subprocess.PIPE:
                previous = process.stdout
            results.append(process)
        finally:
            _close_all([infile, outfile, upstream])
    if previous is not None:
        previous.close()
    status = 0
    for result in results:
        if isinstance(result, subprocess.Popen):
            status = status_from_returncode(result.wait())
        else:
            status = result
    return status


def _remove_heredoc() -> None:
    path = os.path.join(".", HERE_DOC)
    if os.path.exists(path):
        try:
            os.unlink(path)
        except OSError as exc:
            report(ShellError(ErrorKind.HERE, exc))


def execute(commands: Sequence[Command], env: Environment) -> int:
    """Run a pipeline and return the status of its last stage.

    A lone built-in runs in the shell itself and may change its state;
    ``exit`` there raises ShellExit. The here-document file is removed
    afterwards.
    """
    if not commands:
        return 0
    try:
        if len(commands) == 1 and is_builtin(commands[0].argv):
            return _run_single_builtin(commands[0], env)
        return _run_pipeline(commands, env)
    finally:
        _remove_heredoc()