"""Lexer for decoded content streams."""

import re
from typing import Iterator, Tuple

from pdf_converter.models import Token, TokenKind

# PDF whitespace characters (ISO 32000-1, 7.2.2)
WHITESPACE = frozenset("\x00\t\n\x0c\r ")
DELIMITERS = WHITESPACE | frozenset("[]()")

NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")

ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "(": "(",
    ")": ")",
    "\\": "\\",
}


def read_string_literal(content: str, index: int) -> Tuple[str, int]:
    """Read the parenthesized literal opening at ``content[index]``.

    Nested unescaped parentheses are kept in the value; the literal closes
    when depth returns to zero. Unknown escapes pass the escaped character
    through. An unterminated literal runs to the end of ``content``.

    Returns:
        Tuple of (value, index just past the literal)
    """
    i = index + 1
    depth = 1
    value = []
    length = len(content)

    while i < length:
        char = content[i]
        if char == "\\":
            if i + 1 >= length:
                i += 1
                break
            following = content[i + 1]
            value.append(ESCAPES.get(following, following))
            i += 2
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                i += 1
                break
        value.append(char)
        i += 1

    return "".join(value), i


def tokenize(content: str) -> Iterator[Token]:
    """Yield the tokens of a decoded content stream."""
    i = 0
    length = len(content)

    while i < length:
        char = content[i]

        if char == "(":
            value, i = read_string_literal(content, i)
            yield Token(TokenKind.STRING, value)
            continue
        if char == "[":
            yield Token(TokenKind.ARRAY_START)
            i += 1
            continue
        if char == "]":
            yield Token(TokenKind.ARRAY_END)
            i += 1
            continue
        if char in WHITESPACE or char == ")":
            # A stray ")" has no opening literal; skip it like whitespace
            i += 1
            continue

        j = i + 1
        while j < length and content[j] not in DELIMITERS:
            j += 1
        raw = content[i:j]
        if NUMBER_RE.fullmatch(raw):
            yield Token(TokenKind.NUMBER, float(raw))
        else:
            yield Token(TokenKind.NAME, raw)
        i = j
