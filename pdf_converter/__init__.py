"""PDF to text, Markdown and CSV converter."""

from pdf_converter.collector import collect_body
from pdf_converter.config import ConverterConfig, ServerConfig
from pdf_converter.convert import convert_pdf
from pdf_converter.exceptions import (
    BodyError,
    BodyTooLargeError,
    ConverterError,
    EmptyInputError,
    ExtractionError,
    FileNotProvidedError,
    FileTooLargeError,
    InvalidExtensionError,
    InvalidMimeTypeError,
    MalformedPayloadError,
    MissingBoundaryError,
    MultipartError,
    RequestAbortedError,
    TransportError,
    UnsupportedContentTypeError,
    UploadValidationError,
)
from pdf_converter.extractor import PdfTextExtractor, extract_text
from pdf_converter.formatters import format_content, normalize_line_breaks
from pdf_converter.handler import ConversionHandler
from pdf_converter.models import (
    ConversionRequest,
    ConversionResult,
    FileAttachment,
    OutputFormat,
)
from pdf_converter.multipart import MultipartParser, parse_multipart

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "convert_pdf",
    "collect_body",
    "parse_multipart",
    "extract_text",
    "normalize_line_breaks",
    "format_content",
    # Core classes
    "ConversionHandler",
    "MultipartParser",
    "PdfTextExtractor",
    # Data models
    "ConversionRequest",
    "ConversionResult",
    "FileAttachment",
    "OutputFormat",
    # Configuration
    "ConverterConfig",
    "ServerConfig",
    # Exceptions
    "ConverterError",
    "ExtractionError",
    "EmptyInputError",
    "MultipartError",
    "UnsupportedContentTypeError",
    "MissingBoundaryError",
    "MalformedPayloadError",
    "FileNotProvidedError",
    "UploadValidationError",
    "FileTooLargeError",
    "InvalidExtensionError",
    "InvalidMimeTypeError",
    "BodyError",
    "BodyTooLargeError",
    "RequestAbortedError",
    "TransportError",
]
