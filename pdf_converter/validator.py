"""Upload validation for file attachments."""

from typing import Optional

from pdf_converter.config import ConverterConfig
from pdf_converter.exceptions import (
    FileTooLargeError,
    InvalidExtensionError,
    InvalidMimeTypeError,
)
from pdf_converter.logger import get_logger
from pdf_converter.models import FileAttachment

logger = get_logger(__name__)


PDF_SIGNATURE = b"%PDF"


class UploadValidator:
    """Checks an uploaded file against the accepted size, name and type."""

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()

    def validate(self, file: FileAttachment) -> FileAttachment:
        """Validate ``file`` and return it unchanged.

        Raises:
            FileTooLargeError: If the file exceeds ``max_upload_size``
            InvalidExtensionError: If the name lacks the required extension
            InvalidMimeTypeError: If the declared type is neither a PDF type
                nor the generic binary fallback
        """
        if file.size > self.config.max_upload_size:
            logger.warning(
                "Uploaded file exceeds size limit",
                extra_data={
                    "file_name": file.original_name,
                    "file_size_bytes": file.size,
                    "max_size_bytes": self.config.max_upload_size,
                },
            )
            raise FileTooLargeError("File too large")

        if not file.original_name.lower().endswith(self.config.required_extension.lower()):
            logger.warning(
                "Uploaded file has unsupported extension",
                extra_data={"file_name": file.original_name},
            )
            raise InvalidExtensionError("Only PDF files are allowed")

        if file.mime_type and not self._is_accepted_mime(file.mime_type):
            logger.warning(
                "Uploaded file has unsupported MIME type",
                extra_data={
                    "file_name": file.original_name,
                    "mime_type": file.mime_type,
                },
            )
            raise InvalidMimeTypeError("Invalid file type")

        if not self.has_pdf_signature(file.buffer):
            logger.warning(
                "Uploaded file does not start with a PDF signature",
                extra_data={
                    "file_name": file.original_name,
                    "file_size_bytes": file.size,
                },
            )

        logger.debug(
            "Uploaded file accepted",
            extra_data={
                "file_name": file.original_name,
                "mime_type": file.mime_type,
                "file_size_bytes": file.size,
            },
        )
        return file

    def _is_accepted_mime(self, mime_type: str) -> bool:
        base_type = mime_type.split(";", 1)[0].strip().lower()
        if self.config.expected_mime_keyword.lower() in base_type:
            return True
        return base_type == self.config.fallback_mime_type.lower()

    @staticmethod
    def has_pdf_signature(buffer: bytes) -> bool:
        """Detect a PDF header in the first kilobyte, as lenient readers do."""
        return PDF_SIGNATURE in buffer[:1024]
