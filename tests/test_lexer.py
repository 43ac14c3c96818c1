import pytest

from minishellpy.errors import ErrorKind, ShellSyntaxError
from minishellpy.lexer import tokenize


def test_plain_words():
    text = "echo hello world"
    assert tokenize(text) == text.split(" ")


def test_extra_spaces_are_dropped():
    assert tokenize("   ls    -l   ") == ["ls", "-l"]


def test_empty_and_blank():
    assert tokenize("") == []
    assert tokenize("     ") == []


def test_single_quotes_keep_spaces():
    assert tokenize("echo 'a b'") == ["echo", "a b"]


def test_double_quotes_keep_single_quote():
    assert tokenize("echo \"x'y\"") == ["echo", "x'y"]


def test_quotes_join_surrounding_word():
    assert tokenize("a''b") == ["ab"]


def test_empty_quotes_produce_no_word():
    assert tokenize("''") == []
    assert tokenize("ls '' -a") == ["ls", "-a"]


def test_tab_is_not_a_separator():
    assert tokenize("ls\tx") == ["ls\tx"]


def test_metacharacters_are_words():
    assert tokenize("cat < in | wc") == ["cat", "<", "in", "|", "wc"]


def test_unclosed_quote_raises():
    with pytest.raises(ShellSyntaxError) as info:
        tokenize("echo 'abc")
    assert info.value.kind is ErrorKind.QUOTE


@pytest.mark.parametrize(
    "words",
    [["ls"], ["grep", "-v", "x"], ["cat", ">>", "out.txt"], ["a|b", "c"]],
)
def test_join_round_trip(words):
    line = " ".join(words)
    assert tokenize(line) == words
    assert " ".join(tokenize(line)) == line


def test_quoting_each_word_is_transparent():
    words = ["echo", "one", "two"]
    quoted = " ".join(f"'{w}'" for w in words)
    assert tokenize(quoted) == words