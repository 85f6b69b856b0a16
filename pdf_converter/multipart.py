"""multipart/form-data parsing for fully received request bodies."""

import re
from typing import Iterator, Optional, Tuple

from pdf_converter.config import ConverterConfig
from pdf_converter.exceptions import (
    FileNotProvidedError,
    MalformedPayloadError,
    MissingBoundaryError,
    UnsupportedContentTypeError,
)
from pdf_converter.logger import Timer, get_logger
from pdf_converter.models import ConversionRequest, FileAttachment, Part
from pdf_converter.validator import UploadValidator

logger = get_logger(__name__)

MULTIPART_FORM_DATA = "multipart/form-data"

BOUNDARY_RE = re.compile(r"boundary=([^;]+)", re.IGNORECASE)
NAME_RE = re.compile(r'(?:^|;)\s*name\s*=\s*(?:"([^"]*)"|([^;\s]+))', re.IGNORECASE)
FILENAME_RE = re.compile(
    r'(?:^|;)\s*filename\s*=\s*(?:"([^"]*)"|([^;\s]*))', re.IGNORECASE
)

CRLF = b"\r\n"
HEADER_TERMINATORS = (b"\r\n\r\n", b"\n\n")


def strip_trailing_line_break(data: bytes) -> bytes:
    """Remove one trailing CRLF, LF or CR."""
    if data.endswith(CRLF):
        return data[:-2]
    if data.endswith((b"\n", b"\r")):
        return data[:-1]
    return data


def parse_headers(raw_headers: str) -> dict[str, str]:
    """Parse part header lines into a lower-cased name to value mapping."""
    headers = {}
    for line in raw_headers.splitlines():
        key, sep, value = line.strip().partition(":")
        key = key.strip()
        if not key or not sep:
            continue
        headers[key.lower()] = value.strip()
    return headers


def split_header_block(section: bytes) -> Optional[Tuple[bytes, bytes]]:
    """Split a part at its first blank line, CRLF or LF framed.

    Returns:
        ``(raw_headers, content)``, or None if the part has no blank line
    """
    best = None
    for terminator in HEADER_TERMINATORS:
        index = section.find(terminator)
        if index != -1 and (best is None or index < best[0]):
            best = (index, terminator)

    if best is None:
        return None
    index, terminator = best
    return section[:index], section[index + len(terminator) :]


def _disposition_param(pattern: re.Pattern, disposition: str) -> Optional[str]:
    match = pattern.search(disposition)
    if not match:
        return None
    quoted, bare = match.groups()
    return quoted if quoted is not None else bare


class MultipartParser:
    """Splits a multipart/form-data body into fields and one PDF file."""

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        validator: Optional[UploadValidator] = None,
    ):
        self.config = config or ConverterConfig()
        self.validator = validator or UploadValidator(self.config)

    @staticmethod
    def boundary_from_content_type(content_type: Optional[str]) -> bytes:
        """Return the boundary declared in a Content-Type header value.

        Raises:
            UnsupportedContentTypeError: If the header is missing or not
                multipart/form-data
            MissingBoundaryError: If no boundary parameter is declared
        """
        if not content_type or not content_type.strip().lower().startswith(
            MULTIPART_FORM_DATA
        ):
            raise UnsupportedContentTypeError("Unsupported content type")

        match = BOUNDARY_RE.search(content_type)
        if not match:
            raise MissingBoundaryError("Missing multipart boundary")

        boundary = match.group(1).strip()
        if len(boundary) >= 2 and boundary.startswith('"') and boundary.endswith('"'):
            boundary = boundary[1:-1]
        if not boundary:
            raise MissingBoundaryError("Missing multipart boundary")
        return boundary.encode("latin-1", errors="replace")

    @staticmethod
    def iter_parts(body: bytes, boundary: bytes) -> Iterator[Part]:
        """Yield every section between boundary delimiters.

        Sections without a header block are skipped. Iteration ends at the
        closing ``--boundary--`` delimiter or when no further delimiter
        exists.

        Raises:
            MalformedPayloadError: If the first delimiter is not in ``body``
        """
        delimiter = b"--" + boundary
        cursor = body.find(delimiter)
        if cursor == -1:
            raise MalformedPayloadError("Malformed multipart payload")

        while cursor != -1:
            cursor += len(delimiter)
            if body[cursor : cursor + 2] == b"--":
                break

            if body[cursor : cursor + 2] == CRLF:
                cursor += 2
            elif body[cursor : cursor + 1] == b"\n":
                cursor += 1

            next_delimiter = body.find(delimiter, cursor)
            if next_delimiter == -1:
                break

            section = strip_trailing_line_break(body[cursor:next_delimiter])
            cursor = next_delimiter

            header_block = split_header_block(section)
            if header_block is None:
                logger.debug(
                    "Skipping multipart section without headers",
                    extra_data={"section_size_bytes": len(section)},
                )
                continue

            raw_headers, content = header_block
            yield Part(
                headers=parse_headers(raw_headers.decode("utf-8", errors="replace")),
                content=content,
            )

    def parse(self, content_type: Optional[str], body: bytes) -> ConversionRequest:
        """Parse a multipart/form-data body.

        Args:
            content_type: Value of the request's Content-Type header
            body: Complete request body

        Returns:
            ConversionRequest with the text fields and the validated file

        Raises:
            UnsupportedContentTypeError: If the body is not multipart/form-data
            MissingBoundaryError: If the content type lacks a boundary
            MalformedPayloadError: If the boundary never occurs in the body
            FileNotProvidedError: If no part carries a filename
            FileTooLargeError: If the file exceeds the configured cap
            InvalidExtensionError: If the file name does not end in .pdf
            InvalidMimeTypeError: If the declared MIME type is not acceptable
        """
        boundary = self.boundary_from_content_type(content_type)

        fields: dict[str, str] = {}
        file: Optional[FileAttachment] = None

        with Timer() as timer:
            for part in self.iter_parts(bytes(body), boundary):
                disposition = part.headers.get("content-disposition")
                if not disposition:
                    continue
                name = _disposition_param(NAME_RE, disposition)
                if not name:
                    continue

                filename = _disposition_param(FILENAME_RE, disposition)
                if filename is None:
                    fields[name] = part.content.decode("utf-8", errors="replace").strip()
                    continue

                if file is not None:
                    logger.warning(
                        "Multiple file parts in request, keeping the last one",
                        extra_data={
                            "discarded_file_name": file.original_name,
                            "file_name": filename,
                        },
                    )
                file = FileAttachment(
                    field_name=name,
                    original_name=filename,
                    mime_type=part.headers.get("content-type")
                    or self.config.fallback_mime_type,
                    buffer=part.content,
                )

        if file is None:
            logger.warning(
                "Multipart body contains no file part",
                extra_data={"field_names": ",".join(fields) or "-"},
            )
            raise FileNotProvidedError("File not provided")

        self.validator.validate(file)

        logger.info(
            "Multipart body parsed",
            extra_data={
                "field_count": len(fields),
                "file_name": file.original_name,
                "file_size_bytes": file.size,
                "parse_time_ms": timer.elapsed_ms,
            },
        )
        return ConversionRequest(fields=fields, file=file)


def parse_multipart(
    content_type: Optional[str],
    body: bytes,
    max_file_size: Optional[int] = None,
) -> ConversionRequest:
    """Parse a multipart/form-data body. See :meth:`MultipartParser.parse`."""
    config = ConverterConfig()
    if max_file_size is not None:
        config = ConverterConfig(max_upload_size=max_file_size)
    return MultipartParser(config).parse(content_type, body)
