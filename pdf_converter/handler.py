"""Conversion handler orchestration."""

import re
from typing import AsyncIterable, Optional

from pdf_converter.collector import collect_body
from pdf_converter.config import ConverterConfig
from pdf_converter.extractor import PdfTextExtractor
from pdf_converter.formatters import format_content, normalize_line_breaks
from pdf_converter.logger import Timer, get_logger
from pdf_converter.models import ConversionRequest, ConversionResult, OutputFormat
from pdf_converter.multipart import MultipartParser

logger = get_logger(__name__)

FORMAT_FIELD = "format"
NORMALIZE_FIELD = "normalizeLineBreaks"


class ConversionHandler:
    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        parser: Optional[MultipartParser] = None,
        extractor: Optional[PdfTextExtractor] = None,
    ) -> None:
        """Initialize conversion handler.

        Args:
            config: Upload and extraction settings. If None, uses defaults.
            parser: Multipart parser. If None, creates default with config.
            extractor: Text extractor. If None, creates default with config.
        """
        self.config = config or ConverterConfig()
        self.parser = parser or MultipartParser(self.config)
        self.extractor = extractor or PdfTextExtractor(self.config)
        self.default_format = OutputFormat.parse(self.config.default_format, OutputFormat.TXT)

    async def receive(
        self, content_type: Optional[str], stream: AsyncIterable[bytes]
    ) -> ConversionRequest:
        """Receive and parse an upload.

        Args:
            content_type: Request Content-Type header value
            stream: Request body chunks

        Returns:
            Parsed ConversionRequest

        Raises:
            BodyError: If the body cannot be received within the size cap
            MultipartError: If the body is not an acceptable PDF upload
        """
        body = await collect_body(stream, self.config.max_upload_size)
        return self.parser.parse(content_type, body)

    def convert(self, request: ConversionRequest) -> ConversionResult:
        """Extract, optionally normalize, and format the uploaded PDF.

        Raises:
            EmptyInputError: If the uploaded file is empty
        """
        output_format = OutputFormat.parse(
            request.fields.get(FORMAT_FIELD), self.default_format
        )
        normalize = request.fields.get(NORMALIZE_FIELD) == "true"
        file = request.file

        with Timer() as extract_timer:
            text = self.extractor.extract(file.buffer)

        if not text:
            logger.warning(
                "No text content extracted from document",
                extra_data={
                    "file_name": file.original_name,
                    "file_size_bytes": file.size,
                },
            )

        with Timer() as format_timer:
            if normalize:
                text = normalize_line_breaks(text)
            content = format_content(text, output_format)

        logger.info(
            "Document converted",
            extra_data={
                "file_name": file.original_name,
                "output_format": output_format.value,
                "normalized": normalize,
                "character_count": len(content),
                "extraction_time_ms": extract_timer.elapsed_ms,
                "formatting_time_ms": format_timer.elapsed_ms,
            },
        )

        return ConversionResult(
            content=content,
            output_format=output_format,
            filename=build_filename(file.original_name, output_format),
            media_type=output_format.media_type,
            character_count=len(content),
            normalized=normalize,
        )

    async def handle(
        self, content_type: Optional[str], stream: AsyncIterable[bytes]
    ) -> ConversionResult:
        request = await self.receive(content_type, stream)
        return self.convert(request)


def build_filename(original_name: str, output_format: OutputFormat) -> str:
    """Swap the ``.pdf`` suffix of ``original_name`` for the output extension."""
    base = re.sub(r"\.pdf$", "", original_name, flags=re.IGNORECASE)
    return base + output_format.extension
