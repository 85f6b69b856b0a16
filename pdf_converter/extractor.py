"""Heuristic PDF text extractor working directly on raw bytes."""

from typing import Optional

from pdf_converter.assembler import assemble_text
from pdf_converter.config import ConverterConfig
from pdf_converter.exceptions import EmptyInputError
from pdf_converter.logger import Timer, get_logger
from pdf_converter.streams import decode_stream, locate_streams
from pdf_converter.tokenizer import tokenize

logger = get_logger(__name__)

STREAM_SEPARATOR = "\n\n"


class PdfTextExtractor:
    """Best-effort text extractor for PDF documents.

    Every content stream found in the document is inflated, tokenized and
    interpreted on its own; the texts are joined in document order. This
    is a scanner, not a conforming reader: fonts, encodings and the object
    graph are ignored and strings are read as Latin-1.
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()

    def extract(self, buffer: Optional[bytes]) -> str:
        """Extract text from a PDF document.

        Args:
            buffer: Raw document bytes

        Returns:
            Extracted text; empty if no stream shows any text

        Raises:
            EmptyInputError: If ``buffer`` is empty or None
        """
        if not buffer:
            raise EmptyInputError("Empty PDF buffer")
        buffer = bytes(buffer)

        texts = []
        stream_count = 0
        with Timer() as timer:
            for region in locate_streams(buffer):
                stream_count += 1
                decoded = decode_stream(
                    region.slice(buffer), self.config.max_decoded_stream_size
                )
                if not decoded:
                    continue
                text = assemble_text(tokenize(decoded))
                if text:
                    texts.append(text)

        result = STREAM_SEPARATOR.join(texts)

        logger.debug(
            "PDF text extraction completed",
            extra_data={
                "document_size_bytes": len(buffer),
                "streams_found": stream_count,
                "streams_with_text": len(texts),
                "characters_extracted": len(result),
                "extraction_time_ms": timer.elapsed_ms,
            },
        )
        return result


def extract_text(buffer: Optional[bytes], config: Optional[ConverterConfig] = None) -> str:
    """Extract text from raw PDF bytes. See :class:`PdfTextExtractor`."""
    return PdfTextExtractor(config).extract(buffer)
