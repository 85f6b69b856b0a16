"""Turn content stream tokens into readable text."""

import re
from enum import Enum
from typing import Iterable, List

from pdf_converter.models import Token, TokenKind

EXCESS_LINE_BREAKS_RE = re.compile(r"\n{3,}")


class TextAction(Enum):
    FLUSH_LAST = "flush_last"
    FLUSH_ALL = "flush_all"
    FLUSH_AND_BREAK = "flush_and_break"
    DISCARD = "discard"


# Positioning operators stand in for line/paragraph boundaries; there is
# no layout-aware reconstruction.
OPERATOR_ACTIONS = {
    "Tj": TextAction.FLUSH_LAST,
    "TJ": TextAction.FLUSH_ALL,
    "Td": TextAction.FLUSH_AND_BREAK,
    "TD": TextAction.FLUSH_AND_BREAK,
    "Tm": TextAction.FLUSH_AND_BREAK,
}


def collapse_line_breaks(text: str) -> str:
    """Reduce every run of three or more newlines to exactly two."""
    return EXCESS_LINE_BREAKS_RE.sub("\n\n", text)


def assemble_text(tokens: Iterable[Token]) -> str:
    """Interpret text-showing and positioning operators in ``tokens``.

    Strings are buffered until an operator decides their fate: ``Tj`` shows
    only the most recent string, ``TJ`` shows the whole buffer, ``Td``/``TD``/
    ``Tm`` show the buffer and break the line, anything else drops it.
    Strings still buffered at the end are shown.
    """
    chunks: List[str] = []
    pending: List[str] = []

    for token in tokens:
        if token.kind is TokenKind.STRING:
            pending.append(token.value)
            continue
        if token.kind is not TokenKind.NAME:
            continue

        action = OPERATOR_ACTIONS.get(token.value, TextAction.DISCARD)
        if action is TextAction.FLUSH_LAST:
            if pending:
                chunks.append(pending[-1])
        elif action is TextAction.FLUSH_ALL:
            if pending:
                chunks.append("".join(pending))
        elif action is TextAction.FLUSH_AND_BREAK:
            if pending:
                chunks.append("".join(pending))
            chunks.append("\n")
        pending = []

    if pending:
        chunks.append("".join(pending))

    return collapse_line_breaks("".join(chunks)).strip()
