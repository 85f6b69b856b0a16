"""High-level API for converting PDFs outside the HTTP service."""

from pathlib import Path
from typing import Optional, Union

from pdf_converter.config import ConverterConfig
from pdf_converter.handler import ConversionHandler
from pdf_converter.models import ConversionRequest, ConversionResult, FileAttachment, OutputFormat
from pdf_converter.validator import UploadValidator


def convert_pdf(
    file_path: Optional[str] = None,
    file_bytes: Optional[bytes] = None,
    output_format: Union[OutputFormat, str] = OutputFormat.TXT,
    normalize: bool = False,
    file_name: Optional[str] = None,
    config: Optional[ConverterConfig] = None,
) -> ConversionResult:
    """Convert a PDF to text, Markdown or CSV.

    Accepts either a file path or raw bytes and applies the same validation
    and pipeline as the HTTP endpoint.

    Args:
        file_path: Path to a PDF file (alternative to file_bytes)
        file_bytes: Raw PDF bytes (alternative to file_path)
        output_format: "txt", "md" or "csv"
        normalize: Rejoin soft-wrapped lines before formatting
        file_name: Name used for validation and the result filename
            (defaults to the path's name, or "document.pdf" for bytes)
        config: Converter configuration (optional, uses defaults)

    Returns:
        ConversionResult with the formatted content

    Raises:
        ValueError: If neither or both of file_path and file_bytes are given,
            or if file_path does not exist
        UploadValidationError: If the file is too large or not a PDF name
        EmptyInputError: If the file is empty

    Examples:
        >>> result = convert_pdf(file_path="report.pdf", output_format="md")
        >>> print(result.content)
    """
    if file_path and file_bytes is not None:
        raise ValueError("Provide either file_path or file_bytes, not both")

    if not file_path and file_bytes is None:
        raise ValueError("Must provide either file_path or file_bytes")

    if file_path:
        path = Path(file_path)
        if not path.exists():
            raise ValueError(f"File not found: {file_path}")
        file_bytes = path.read_bytes()
        file_name = file_name or path.name

    config = config or ConverterConfig()
    file = FileAttachment(
        field_name="file",
        original_name=file_name or "document.pdf",
        mime_type=config.fallback_mime_type,
        buffer=file_bytes,
    )
    UploadValidator(config).validate(file)

    fields = {"format": OutputFormat.parse(output_format, OutputFormat.TXT).value}
    if normalize:
        fields["normalizeLineBreaks"] = "true"

    handler = ConversionHandler(config=config)
    return handler.convert(ConversionRequest(fields=fields, file=file))
