import pytest

from minishellpy.environment import Environment
from minishellpy.expansion import expand, is_expansible, is_name_char, var_length


@pytest.fixture
def env():
    return Environment(["HOME=/home/user", "USER=someone", "OLDPWD="])


def test_expands_known_variable(env):
    assert expand("echo $HOME", env, 0) == "echo /home/user"


def test_expands_several_variables(env):
    assert expand("$USER at $HOME", env, 0) == "someone at /home/user"


def test_unknown_variable_expands_to_nothing(env):
    assert expand("echo $NOPE x", env, 0) == "echo  x"


def test_single_quoted_text_is_kept(env):
    text = "echo '$HOME x'"
    assert expand(text, env, 0) == text


def test_double_quoted_text_is_expanded(env):
    assert expand('echo "$HOME x"', env, 0) == 'echo "/home/user x"'


@pytest.mark.parametrize("status", [0, 1, 127, 130])
def test_exit_status(env, status):
    assert expand("echo $?", env, status) == f"echo {status}"


def test_exit_status_inside_single_quotes_is_kept(env):
    assert expand("echo '$?'", env, 5) == "echo '$?'"


@pytest.mark.parametrize("text", ["echo $", "a $ b", "$"])
def test_lone_dollar_is_kept(env, text):
    assert expand(text, env, 0) == text


def test_text_without_dollar_is_unchanged(env):
    text = "ls -l | wc -l"
    assert expand(text, env, 3) == text


def test_is_expansible():
    assert is_expansible("'$X'", 1) is False
    assert is_expansible('"$X"', 1) is True
    assert is_expansible("'a' $X", 4) is True
    assert is_expansible("\"'\" $X", 4) is True


def test_var_length_stops_at_space_or_end():
    assert var_length("$HOME rest", 1) == len("HOME")
    assert var_length("$HOME", 1) == len("HOME")
    assert var_length("x", 1) == 0


@pytest.mark.parametrize("c", ["a", "Z", "0", "_"])
def test_name_chars(c):
    assert is_name_char(c) is True


@pytest.mark.parametrize("c", ["-", " ", "$", "", "é"])
def test_non_name_chars(c):
    assert is_name_char(c) is False