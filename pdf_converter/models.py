"""Data models for the PDF converter."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class StreamRegion:
    """Half-open byte range ``[start, end)`` of one content stream."""

    start: int
    end: int

    def slice(self, buffer: bytes) -> bytes:
        return buffer[self.start : self.end]

    def __len__(self) -> int:
        return self.end - self.start


class TokenKind(Enum):
    STRING = "string"
    NUMBER = "number"
    NAME = "name"
    ARRAY_START = "array_start"
    ARRAY_END = "array_end"


@dataclass(frozen=True)
class Token:
    """One lexical unit of a content stream."""

    kind: TokenKind
    value: Union[str, float, None] = None


@dataclass
class Part:
    """One boundary-delimited section of a multipart body."""

    headers: dict[str, str]
    content: bytes


@dataclass
class FileAttachment:
    """The uploaded file. ``size`` always equals ``len(buffer)``."""

    field_name: str
    original_name: str
    mime_type: str
    buffer: bytes
    size: int = field(init=False)

    def __post_init__(self) -> None:
        self.size = len(self.buffer)


@dataclass
class ConversionRequest:
    """Parsed multipart form: text fields plus the single file."""

    fields: dict[str, str]
    file: FileAttachment


class OutputFormat(str, Enum):
    """Supported download formats."""

    TXT = "txt"
    MD = "md"
    CSV = "csv"

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]

    @property
    def extension(self) -> str:
        return "." + self.value

    @classmethod
    def parse(cls, value: Optional[str], default: "OutputFormat") -> "OutputFormat":
        """Map a form value to a format, falling back to ``default``."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return default


_MEDIA_TYPES = {
    OutputFormat.TXT: "text/plain; charset=utf-8",
    OutputFormat.MD: "text/markdown; charset=utf-8",
    OutputFormat.CSV: "text/csv; charset=utf-8",
}


@dataclass
class ConversionResult:
    """Result of converting one PDF."""

    content: str
    output_format: OutputFormat
    filename: str
    media_type: str
    character_count: int
    normalized: bool = False
