import io
import os

import pytest

from minishellpy.builtins import (
    ShellExit,
    builtin_cd,
    builtin_echo,
    builtin_env,
    builtin_exit,
    builtin_export,
    builtin_pwd,
    builtin_unset,
    exit_code,
    format_export,
    has_alpha,
    is_valid_name,
    previous_dir,
)
from minishellpy.environment import Environment


def real(path):
    return os.path.realpath(str(path))


@pytest.mark.parametrize("text,expected", [("12a", True), ("123", False), ("-5", False), ("", False)])
def test_has_alpha(text, expected):
    assert has_alpha(text) is expected


@pytest.mark.parametrize("n", [0, 1, 42, 200, 255])
def test_exit_code_small_numbers_unchanged(n):
    assert exit_code(str(n)) == n


@pytest.mark.parametrize("n", [0, 3, 100, 255])
def test_exit_code_wraps_modulo_256(n):
    assert exit_code(str(n + 256)) == exit_code(str(n))
    assert exit_code(str(n + 512)) == exit_code(str(n))


def test_exit_code_keeps_sign_and_parses_like_atoi():
    assert exit_code("-5") == -5
    assert exit_code("  +7") == 7
    assert exit_code("12abc") == 12
    assert exit_code("") == 0


@pytest.mark.parametrize(
    "name,expected",
    [
        ("PATH", True),
        ("A1=x", True),
        ("  A", True),
        ("A=with spaces", True),
        ("_A", False),
        ("1A", False),
        ("A_B", False),
        ("", False),
        ("=x", False),
    ],
)
def test_is_valid_name(name, expected):
    assert is_valid_name(name) is expected


def test_format_export():
    assert format_export("A=b") == 'A="b"'
    assert format_export("NAME") == "NAME"
    assert format_export("X=").startswith('X="')


def test_previous_dir():
    assert previous_dir("/usr/bin") == "/usr"
    assert previous_dir("/usr") == "/"
    assert previous_dir("noslash") == ""


def test_echo_plain_and_n_flag():
    out = io.StringIO()
    assert builtin_echo(["echo", "a", "b"], out) == 0
    assert out.getvalue() == "a b \n"
    out = io.StringIO()
    builtin_echo(["echo", "-n", "a"], out)
    assert out.getvalue() == "a "
    out = io.StringIO()
    builtin_echo(["echo"], out)
    assert out.getvalue() == ""


def test_echo_longer_flag_is_printed():
    out = io.StringIO()
    builtin_echo(["echo", "-nn", "x"], out)
    assert out.getvalue().startswith("-nn ")
    assert out.getvalue().endswith("\n")


def test_env_prints_only_valued_entries():
    env = Environment(["A=1", "B", "C="])
    out = io.StringIO()
    assert builtin_env(env, out) == 0
    assert out.getvalue().splitlines() == ["A=1", "C="]


def test_pwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    assert builtin_pwd(out) == 0
    assert out.getvalue() == os.getcwd() + "\n"


def test_exit_without_arguments():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        builtin_exit(["exit"], out)
    assert info.value.status == 0
    assert out.getvalue() == "exit\n"


def test_exit_with_number():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        builtin_exit(["exit", "7"], out)
    assert info.value.status == 7


def test_exit_non_numeric():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        builtin_exit(["exit", "abc"], out)
    assert info.value.status == 2
    assert "numeric argument required" in out.getvalue()
    assert out.getvalue().endswith("exit\n")


def test_exit_too_many_arguments():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        builtin_exit(["exit", "1", "2"], out)
    assert info.value.status == 1
    assert out.getvalue() == "exit: too many arguments\n"


def test_cd_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    start = os.getcwd()
    env = Environment.from_environ({"HOME": str(home), "PWD": start})
    assert builtin_cd(["cd"], env) == 0
    assert real(os.getcwd()) == real(home)
    assert env.get("OLDPWD") == start
    assert env.get("PWD") == os.getcwd()


def test_cd_plain_directory(tmp_path, monkeypatch):
    target = tmp_path / "dir"
    target.mkdir()
    monkeypatch.chdir(tmp_path)
    env = Environment.from_environ({})
    assert builtin_cd(["cd", str(target)], env) == 0
    assert real(os.getcwd()) == real(target)


def test_cd_missing_directory(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    env = Environment.from_environ({})
    assert builtin_cd(["cd", str(tmp_path / "missing")], env) == 1
    assert "SYS ERROR: chdir failed" in capsys.readouterr().err
    assert real(os.getcwd()) == real(tmp_path)


def test_cd_dash_goes_to_oldpwd(tmp_path, monkeypatch):
    other = tmp_path / "other"
    other.mkdir()
    monkeypatch.chdir(tmp_path)
    start = os.getcwd()
    env = Environment.from_environ({"OLDPWD": str(other)})
    assert builtin_cd(["cd", "-"], env) == 0
    assert real(os.getcwd()) == real(other)
    assert env.get("OLDPWD") == start
    assert env.get("PWD") == str(other)


def test_cd_dash_with_empty_oldpwd(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    env = Environment.from_environ({})
    assert builtin_cd(["cd", "-"], env) == 0
    assert real(os.getcwd()) == real(tmp_path)
    assert "SYS ERROR: chdir failed" in capsys.readouterr().err


def test_cd_dotdot(tmp_path, monkeypatch):
    child = tmp_path / "a"
    child.mkdir()
    monkeypatch.chdir(child)
    start = os.getcwd()
    env = Environment.from_environ({})
    assert builtin_cd(["cd", ".."], env) == 0
    assert os.getcwd() == previous_dir(start)
    assert env.get("PWD") == previous_dir(start)
    assert env.get("OLDPWD") == start


def test_cd_relative_sibling(tmp_path, monkeypatch):
    (tmp_path / "a").mkdir()
    sibling = tmp_path / "b"
    sibling.mkdir()
    monkeypatch.chdir(tmp_path / "a")
    start = os.getcwd()
    env = Environment.from_environ({})
    assert builtin_cd(["cd", "../b"], env) == 0
    assert real(os.getcwd()) == real(sibling)
    assert env.get("PWD") == previous_dir(start) + "/b"


def test_export_lists_everything():
    env = Environment(["A=1", "B"])
    out = io.StringIO()
    assert builtin_export(["export"], env, out) == 0
    assert out.getvalue() == 'declare -x A="1"\ndeclare -x B\n'


def test_export_sets_and_replaces():
    env = Environment(["A=1", "C=3"])
    out = io.StringIO()
    assert builtin_export(["export", "A=2", "NEW=x"], env, out) == 0
    assert env.entries == ["A=2", "C=3", "NEW=x"]


def test_export_invalid_identifier(capsys):
    env = Environment(["A=1"])
    out = io.StringIO()
    assert builtin_export(["export", "1BAD=x", "OK=y"], env, out) == 0
    assert "export: 1BAD=x: not a valid identifier" in capsys.readouterr().out
    assert env.entries == ["A=1", "OK=y"]


def test_unset_removes_only_exact_names():
    env = Environment(["A=1", "AB=2", "A", "C=3"])
    assert builtin_unset(["unset", "A", "C"], env) == 0
    assert env.entries == ["AB=2"]


def test_unset_unknown_name_keeps_environment():
    env = Environment(["A=1", "B=2"])
    builtin_unset(["unset", "Z"], env)
    assert env.entries == ["A=1", "B=2"]