"""Tests for the command tokenizer."""

import pytest

from curlguard.probe.errors import FailureKind, LexError
from curlguard.probe.lexer import tokenize


class TestTokenize:
    """Quoting and escaping rules."""

    def test_single_quoted_header(self):
        assert tokenize("curl -H 'Accept: text' http://a") == [
            "curl",
            "-H",
            "Accept: text",
            "http://a",
        ]

    def test_double_quotes_with_escape(self):
        assert tokenize('curl -d "{\\"a\\": 1}" http://a') == ["curl", "-d", '{"a": 1}', "http://a"]

    def test_backslash_literal_in_single_quotes(self):
        assert tokenize(r"'a\nb'") == [r"a\nb"]

    def test_backslash_escape_outside_quotes(self):
        assert tokenize(r"a\ b c") == ["a b", "c"]

    def test_adjacent_quoted_segments_join(self):
        assert tokenize("ab'cd'\"ef\"gh") == ["abcdefgh"]

    def test_empty_quotes_produce_empty_token(self):
        assert tokenize("curl '' \"\" x") == ["curl", "", "", "x"]

    def test_whitespace_runs_produce_no_tokens(self):
        assert tokenize("  a \t\n  b  ") == ["a", "b"]

    def test_whitespace_only(self):
        assert tokenize("   \t ") == []
        assert tokenize("") == []

    def test_quoted_whitespace_kept(self):
        assert tokenize("'  '") == ["  "]

    def test_closing_quote_does_not_flush(self):
        assert tokenize("'a'b c") == ["ab", "c"]

    def test_trailing_backslash_kept(self):
        assert tokenize("abc\\") == ["abc\\"]


class TestUnclosedQuote:
    def test_unclosed_single(self):
        with pytest.raises(LexError, match="Unclosed quote"):
            tokenize("curl -H 'Accept: text http://a")

    def test_unclosed_double(self):
        with pytest.raises(LexError) as exc_info:
            tokenize('curl "abc')
        assert exc_info.value.kind is FailureKind.LEX

    def test_escaped_quote_does_not_close(self):
        with pytest.raises(LexError):
            tokenize('"abc\\"')


@pytest.mark.parametrize(
    "text",
    [
        "curl -s https://example.com",
        "curl   -X   POST   http://a/b?c=d",
        "a b c d e f",
        "curl\t-I\nhttp://x",
    ],
)
def test_unquoted_content_round_trips(text):
    """Joining tokens with single spaces keeps the non-whitespace content in order."""
    tokens = tokenize(text)
    assert " ".join(tokens) == " ".join(text.split())
