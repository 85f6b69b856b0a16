"""Post-processing of extracted text: soft-wrap repair and output formats."""

import csv
import io
import re
from typing import Union

from pdf_converter.models import OutputFormat

PARAGRAPH_SPLIT_RE = re.compile(r"\n{2,}")
SENTENCE_END_CHARS = ".!?。！？;；:："
LIST_MARKERS = ("-", "•")
MARKDOWN_BULLET_RE = re.compile(r"^[-*•]\s*")
CSV_HEADER = "Paragraph"


def _paragraphs(text: str) -> list[str]:
    return [p.strip() for p in PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def _join_soft_wrapped_lines(paragraph: str) -> str:
    lines = paragraph.split("\n")
    output = lines[0].strip()

    for line in lines[1:]:
        current = line.strip()
        if not current:
            continue

        previous_char = output[-1:]
        should_merge = (
            previous_char
            and previous_char not in SENTENCE_END_CHARS
            and not previous_char.isspace()
            and not current.startswith(LIST_MARKERS)
            and not ("A" <= current[0] <= "Z")
        )

        if not should_merge:
            output += "\n" + current
        elif previous_char == "-":
            # Hyphenated word broken across lines
            output = output[:-1] + current
        else:
            output += " " + current

    return output


def normalize_line_breaks(text: str) -> str:
    """Rejoin lines that a PDF wrapped mid-sentence.

    Paragraph breaks (two or more newlines) are kept. Inside a paragraph a
    line is merged into the previous one unless the previous line ends a
    sentence, or the line starts a list item or an uppercase Latin word.
    """
    if not text:
        return ""
    return "\n\n".join(_join_soft_wrapped_lines(p) for p in _paragraphs(text))


def _to_markdown(text: str) -> str:
    converted = []
    for paragraph in _paragraphs(text):
        lines = paragraph.split("\n")
        if len(lines) == 1:
            converted.append(paragraph)
            continue
        rendered = []
        for line in lines:
            stripped = line.strip()
            if MARKDOWN_BULLET_RE.match(stripped):
                stripped = "- " + MARKDOWN_BULLET_RE.sub("", stripped, count=1)
            rendered.append(stripped)
        converted.append("\n".join(rendered))
    return "\n\n".join(converted)


def _to_csv(text: str) -> str:
    rows = [p.replace("\n", " ").strip() for p in _paragraphs(text)]
    rows = [row for row in rows if row]
    if not rows:
        return ""

    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([CSV_HEADER])
    writer.writerows([row] for row in rows)
    return out.getvalue().rstrip("\n")


def format_content(text: str, output_format: Union[OutputFormat, str]) -> str:
    """Render ``text`` in the requested output format (txt, md or csv)."""
    output_format = OutputFormat.parse(output_format, OutputFormat.TXT)
    if output_format is OutputFormat.MD:
        return _to_markdown(text)
    if output_format is OutputFormat.CSV:
        return _to_csv(text)
    return text
