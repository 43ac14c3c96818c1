"""The interactive loop: read a line, run it, remember its status."""

from __future__ import annotations

import os
import signal
import sys
import threading
from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TextIO

from .builtins import ShellExit
from .environment import Environment
from .errors import ErrorKind, ShellError, report
from .executor import execute
from .parser import parse

PROMPT = "minishell> "
EXIT = "exit"
INTERRUPTED_STATUS = 130

_Handler = Callable[[int, object], None]


def _ignore(signum: int, frame: object) -> None:
    """Swallow a signal in the shell; unlike SIG_IGN it is reset in children."""


def _child_running(signum: int, frame: object) -> None:
    if signum == signal.SIGINT:
        sys.stdout.write("\n")
    elif signum == getattr(signal, "SIGQUIT", None):
        sys.stdout.write("Quit: 3\n")
    sys.stdout.flush()


def _prompt_handlers() -> dict[int, _Handler]:
    handlers: dict[int, _Handler] = {}
    if hasattr(signal, "SIGQUIT"):
        handlers[signal.SIGQUIT] = _ignore
    return handlers


def _execution_handlers() -> dict[int, _Handler]:
    handlers: dict[int, _Handler] = {signal.SIGINT: _child_running}
    if hasattr(signal, "SIGQUIT"):
        handlers[signal.SIGQUIT] = _child_running
    return handlers


@contextmanager
def _signals(handlers: Mapping[int, _Handler]) -> Iterator[None]:
    """Install signal handlers for the duration of the block, main thread only."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = {signum: signal.signal(signum, handler) for signum, handler in handlers.items()}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def _enable_history() -> None:
    try:
        import readline  # noqa: F401  (enables line editing and history for input())
    except ImportError:
        pass


@dataclass
class Shell:
    """The shell's state: its environment and the status of the last command."""

    env: Environment = field(default_factory=lambda: Environment.from_environ(os.environ))
    status: int = 0
    _input: TextIO | None = field(default=None, init=False, repr=False)

    def run_line(self, line: str) -> int:
        """Parse and run one command line and return the new status.

        A blank or malformed line leaves the status as it was; ``exit``
        raises ShellExit. Here-documents read from the stream the loop
        is reading, or standard input outside the loop.
        """
        try:
            commands = parse(line, self.env, self.status, self._input)
        except ShellError as error:
            report(error)
            return self.status
        if not commands:
            return self.status
        with _signals(_execution_handlers()):
            self.status = execute(commands, self.env)
        return self.status

    def _read_line(self, stdin: TextIO, interactive: bool) -> str | None:
        if interactive:
            try:
                return input(PROMPT)
            except EOFError:
                return None
        sys.stdout.write(PROMPT)
        sys.stdout.flush()
        line = stdin.readline()
        if line == "":
            return None
        return line[:-1] if line.endswith("\n") else line

    def repl(self, stdin: TextIO | None = None) -> int:
        """Read and run lines until ``exit`` or end of input; return the exit status."""
        stream = sys.stdin if stdin is None else stdin
        interactive = stream is sys.stdin and stream.isatty()
        if interactive:
            _enable_history()
        self._input = stream
        try:
            with _signals(_prompt_handlers()):
                while True:
                    try:
                        line = self._read_line(stream, interactive)
                    except KeyboardInterrupt:
                        sys.stdout.write("\n")
                        sys.stdout.flush()
                        self.status = INTERRUPTED_STATUS
                        continue
                    if line is None:
                        sys.stdout.write(EXIT + "\n")
                        sys.stdout.flush()
                        return 0
                    try:
                        self.run_line(line)
                    except ShellExit as stop:
                        sys.stdout.flush()
                        return stop.status & 0xFF
        finally:
            self._input = None


def main(argv: Sequence[str] | None = None) -> int:
    """Start the shell; it takes no arguments."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args:
        report(ShellError(ErrorKind.ARG))
        return 1
    return Shell().repl(sys.stdin)