"""Configuration classes for the PDF converter."""

import os
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ConverterConfig:
    """Configuration for upload handling and text extraction.

    Instances are read-only and may be shared between concurrent requests.

    Examples:
        >>> # Default configuration (20 MB uploads, plain text output)
        >>> config = ConverterConfig()

        >>> # Small uploads, Markdown by default
        >>> config = ConverterConfig(max_upload_size=2 * 1024 * 1024, default_format="md")
    """

    max_upload_size: int = 20 * 1024 * 1024
    """Maximum request body and file size in bytes. Default: 20 MB.

    The cap is enforced while the body is being received, so peak memory
    per request never exceeds this value.
    """

    required_extension: str = ".pdf"
    """File name suffix every upload must carry (compared case-insensitively)."""

    expected_mime_keyword: str = "pdf"
    """Substring a declared MIME type must contain to be accepted."""

    fallback_mime_type: str = "application/octet-stream"
    """Generic binary MIME type accepted in place of a PDF type.

    Browsers and command line clients send this when they cannot guess
    the file type. It is also assumed when a part declares no type.
    """

    max_decoded_stream_size: int = 64 * 1024 * 1024
    """Upper bound on the decompressed size of a single content stream.

    Streams inflating past this size are truncated to the first
    ``max_decoded_stream_size`` bytes.
    """

    default_format: str = "txt"
    """Output format used when the request does not name a known one."""

    @classmethod
    def from_env(cls) -> "ConverterConfig":
        """Build a configuration from ``PDF_CONVERTER_*`` environment variables."""
        defaults = cls()
        return cls(
            max_upload_size=int(
                os.environ.get("PDF_CONVERTER_MAX_UPLOAD_SIZE", defaults.max_upload_size)
            ),
            default_format=os.environ.get(
                "PDF_CONVERTER_DEFAULT_FORMAT", defaults.default_format
            ),
        )


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the HTTP service."""

    host: str = "0.0.0.0"
    port: int = 5002
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> "ServerConfig":
        defaults = cls()
        origins = os.environ.get("CORS_ORIGINS")
        return cls(
            host=os.environ.get("HOST", defaults.host),
            port=int(os.environ.get("PORT", defaults.port)),
            log_level=os.environ.get("LOG_LEVEL", defaults.log_level),
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip())
                if origins
                else defaults.cors_origins
            ),
        )
