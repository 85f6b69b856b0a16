"""
Content Tokenizer Tests
"""
import pytest

from pdf_converter.models import Token, TokenKind
from pdf_converter.tokenizer import read_string_literal, tokenize


def kinds(content):
    return [token.kind for token in tokenize(content)]


class TestStringLiterals:
    """Test parenthesized string literals"""

    def test_simple_literal(self):
        assert list(tokenize("(Hello)")) == [Token(TokenKind.STRING, "Hello")]

    def test_nested_parentheses_are_kept(self):
        assert list(tokenize("(a (b) c)")) == [Token(TokenKind.STRING, "a (b) c")]

    def test_escaped_parentheses_do_not_change_depth(self):
        tokens = list(tokenize(r"(a\)b\(c) Tj"))
        assert tokens[0] == Token(TokenKind.STRING, "a)b(c")
        assert tokens[1] == Token(TokenKind.NAME, "Tj")

    @pytest.mark.parametrize(
        "escape,expected",
        [
            (r"\n", "\n"),
            (r"\r", "\r"),
            (r"\t", "\t"),
            (r"\b", "\b"),
            (r"\f", "\f"),
            (r"\\", "\\"),
        ],
    )
    def test_recognized_escapes(self, escape, expected):
        value, _ = read_string_literal("(" + escape + ")", 0)
        assert value == expected

    def test_unknown_escape_passes_character_through(self):
        value, _ = read_string_literal(r"(\q\5)", 0)
        assert value == "q5"

    def test_unterminated_literal_runs_to_end(self):
        assert list(tokenize("(open")) == [Token(TokenKind.STRING, "open")]

    def test_trailing_backslash_ends_literal(self):
        value, index = read_string_literal("(abc\\", 0)
        assert value == "abc"
        assert index == 5

    def test_returns_index_past_literal(self):
        value, index = read_string_literal("(ab) Tj", 0)
        assert value == "ab"
        assert index == 4


class TestTokenize:
    """Test token classification"""

    def test_operators_and_numbers(self):
        tokens = list(tokenize("BT /F1 12 Tf 72 -14.5 Td ET"))
        assert tokens == [
            Token(TokenKind.NAME, "BT"),
            Token(TokenKind.NAME, "/F1"),
            Token(TokenKind.NUMBER, 12.0),
            Token(TokenKind.NAME, "Tf"),
            Token(TokenKind.NUMBER, 72.0),
            Token(TokenKind.NUMBER, -14.5),
            Token(TokenKind.NAME, "Td"),
            Token(TokenKind.NAME, "ET"),
        ]

    @pytest.mark.parametrize("raw", ["0", "+4", "-3", ".5", "5.", "-.25", "123.456"])
    def test_numeric_literals(self, raw):
        assert list(tokenize(raw)) == [Token(TokenKind.NUMBER, float(raw))]

    @pytest.mark.parametrize("raw", ["1.2.3", "1e5", "--1", "inf", "nan", "1_000"])
    def test_non_numeric_runs_are_names(self, raw):
        assert list(tokenize(raw)) == [Token(TokenKind.NAME, raw)]

    def test_array_delimiters(self):
        assert kinds("[(a) -20 (b)] TJ") == [
            TokenKind.ARRAY_START,
            TokenKind.STRING,
            TokenKind.NUMBER,
            TokenKind.STRING,
            TokenKind.ARRAY_END,
            TokenKind.NAME,
        ]

    def test_runs_stop_at_delimiters(self):
        tokens = list(tokenize("12(x)Tj[1]"))
        assert tokens == [
            Token(TokenKind.NUMBER, 12.0),
            Token(TokenKind.STRING, "x"),
            Token(TokenKind.NAME, "Tj"),
            Token(TokenKind.ARRAY_START),
            Token(TokenKind.NUMBER, 1.0),
            Token(TokenKind.ARRAY_END),
        ]

    def test_whitespace_is_never_emitted(self):
        assert list(tokenize(" \t\r\n\x0c\x00 ")) == []

    def test_stray_closing_parenthesis_is_skipped(self):
        assert list(tokenize(") Tj")) == [Token(TokenKind.NAME, "Tj")]

    def test_tokenizer_is_restartable_per_call(self):
        content = "(a) Tj"
        assert list(tokenize(content)) == list(tokenize(content))

    def test_binary_noise_never_raises(self):
        noise = bytes(range(256)).decode("latin-1") * 3
        assert all(isinstance(t, Token) for t in tokenize(noise))
