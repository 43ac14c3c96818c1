"""A small interactive Unix-style shell with pipes, redirections, here-documents and builtins."""

__version__ = "0.1.0"

__all__ = [
    "builtins",
    "commands",
    "environment",
    "errors",
    "executor",
    "expansion",
    "lexer",
    "parser",
    "shell",
    "syntax",
]