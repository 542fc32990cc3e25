# tests/test_tokenizer.py
import pytest

from huffdict.tokenizer import CorpusParser


@pytest.fixture
def parser():
    return CorpusParser()


@pytest.mark.parametrize("text,expected", [
    ("U.S.", ["u.s"]),
    ("U.S.A.", ["u.s.a"]),
    ("COVID-19", ["covid-19"]),
    ("foo-bar-baz", ["foo-bar-baz"]),
    ("3.1415926", ["3.1415926"]),
    ("foo, bar.", ["foo", "bar"]),
    ("foo_bar", ["foo", "bar"]),
    ("foo--bar", ["foo", "bar"]),
    ("foo...bar", ["foo", "bar"]),
    ("abc! def? ghi...", ["abc", "def", "ghi"]),
    ("---foo---bar---", ["foo", "bar"]),
    ("...", []),
    ("", []),
    ("e-mail", ["e-mail"]),
    ("2023-10-06", ["2023-10-06"]),
])
def test_tokenize(parser, text, expected):
    assert parser.tokenize(text) == expected


def test_html_entities_are_unescaped(parser):
    assert parser.tokenize("AT&amp;T &lt;b&gt;bold&lt;/b&gt;") == ["at", "t", "b", "bold", "b"]


def test_iter_entries_skips_empty_lines(parser):
    lines = ["Hello world\n", "   \n", "...\n", "Second line"]
    assert list(parser.iter_entries(lines)) == [["hello", "world"], ["second", "line"]]


def test_iter_entries_limit(parser):
    lines = ["one", "", "two", "three"]
    assert list(parser.iter_entries(lines, limit=2)) == [["one"], ["two"]]
