# minishellpy

A small interactive shell for POSIX systems. It reads command lines at a
`minishell> ` prompt, checks their syntax, expands variables, splits them into
words and runs the resulting pipeline. Programs run as child processes; the
shell's own commands run inside it.

## Features

- Pipelines: `ls -l | grep py | wc -l`
- Redirections: `<`, `>`, `>>`, and here-documents with `<<`
- Single and double quotes; `$NAME` and `$?` expansion, with no expansion
  inside single quotes
- Builtins: `echo` (with `-n`), `cd` (including `cd`, `cd -`, `cd ..` and
  `cd ../dir`), `pwd`, `export`, `unset`, `env`, `exit`
- Syntax errors for open quotes, unseparated or consecutive metacharacters, and
  metacharacters at the start or end of a line

Metacharacters must be separated by spaces: `cat < file` works, and `cat<file`
is reported as a syntax error. A variable name runs up to the next space, so
`$HOME/x` looks up a variable called `HOME/x`; unknown variables expand to
nothing.

`echo` prints each argument followed by a space. Output files named with `>`
or `>>` are created as soon as the line is parsed. A here-document is written
to a file named `here_doc` in the current directory while the pipeline runs
and removed afterwards.

A lone builtin runs in the shell and can change its directory and
environment. A builtin that is one stage of a pipeline works on a copy, so its
changes do not last.

## Installation

```
pip install .
```

## Usage

Start the interactive shell:

```
minishellpy
```

The command takes no arguments. End the session with `exit [code]` or with
end of input (Ctrl-D). `exit` reduces its number modulo 256, answers a
non-numeric argument with status 2, and refuses more than one argument with
status 1. Ctrl-C at the prompt gives a fresh prompt and sets `$?` to 130.

```
minishell> export GREETING=hello
minishell> echo $GREETING world
hello world
minishell> cat << END | wc -l
one
two
END
2
minishell> echo $?
0
```

## Library use

The parts of the shell can also be used on their own:

```python
from minishellpy.environment import Environment
from minishellpy.syntax import check_syntax
from minishellpy.lexer import tokenize
from minishellpy.expansion import expand
from minishellpy.parser import parse
from minishellpy.shell import Shell

env = Environment.from_environ({"HOME": "/tmp", "PATH": "/bin:/usr/bin"})
check_syntax("echo 'a b' | cat")           # True
print(tokenize("echo 'a b' | cat"))        # ['echo', 'a b', '|', 'cat']
print(expand("echo $HOME", env, 0))        # echo /tmp
commands = parse("echo hi | cat", env, 0)  # two Command objects

shell = Shell(env=env)
shell.run_line("echo hi")                  # returns the new status
```

- `minishellpy.syntax.check_syntax` returns `False` for a blank line, `True`
  for a valid one, and raises `minishellpy.errors.ShellSyntaxError` for a
  malformed one.
- `minishellpy.parser.parse` turns a line into a list of
  `minishellpy.commands.Command` objects (words, resolved program path,
  redirections and here-document text).
- `minishellpy.executor.execute` runs such a list against an `Environment`
  and returns the status of the last stage.
- `Shell.repl` reads lines from a stream until `exit` or end of input and
  returns the exit status; `exit` raises `minishellpy.builtins.ShellExit`.
- `minishellpy.errors.report` prints a `ShellError` the way the shell does.

## Limitations

The shell understands only what is listed above. There is no `;`, `&&` or
`||`, no background jobs or job control, no wildcard expansion, no `${NAME}`
braces, no subshells and no scripts: it reads one line at a time from its
input.

## Running the tests

```
pip install .[test]
pytest
```