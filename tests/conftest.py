"""
Test Configuration and Fixtures
"""
import zlib

import pytest

from pdf_converter.config import ConverterConfig

CRLF = b"\r\n"

HELLO_CONTENT = b"BT /F1 24 Tf 72 720 Td (Hello PDF World) Tj ET"


def build_pdf(*contents: bytes, compress: bool = True) -> bytes:
    """Build a one-page PDF whose page shows ``contents`` in order.

    Offsets in the cross-reference table are exact so conforming readers
    open the file without repair.
    """
    first_content = 5
    refs = b" ".join(b"%d 0 R" % (first_content + i) for i in range(len(contents)))
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 4 0 R >> >> /Contents [" + refs + b"] >>",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for content in contents:
        data = zlib.compress(content) if compress else content
        filters = b" /Filter /FlateDecode" if compress else b""
        objects.append(
            b"<< /Length %d%s >>\nstream\n" % (len(data), filters) + data + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


def build_multipart(boundary: str, fields=(), files=()) -> bytes:
    """Encode form ``fields`` (name, value) and ``files``
    (field, filename, content, mime type or None) as multipart/form-data."""
    delimiter = b"--" + boundary.encode("latin-1")
    body = bytearray()
    for name, value in fields:
        body += delimiter + CRLF
        body += f'Content-Disposition: form-data; name="{name}"'.encode() + CRLF + CRLF
        body += value.encode("utf-8") + CRLF
    for field, filename, content, mime_type in files:
        body += delimiter + CRLF
        body += (
            f'Content-Disposition: form-data; name="{field}"; filename="{filename}"'.encode()
            + CRLF
        )
        if mime_type:
            body += f"Content-Type: {mime_type}".encode() + CRLF
        body += CRLF + content + CRLF
    body += delimiter + b"--" + CRLF
    return bytes(body)


@pytest.fixture
def pdf_factory():
    return build_pdf


@pytest.fixture
def multipart_factory():
    return build_multipart


@pytest.fixture
def hello_pdf():
    """Compressed single-stream PDF showing 'Hello PDF World'."""
    return build_pdf(HELLO_CONTENT)


@pytest.fixture
def small_config():
    """Configuration with a 1 KB upload cap."""
    return ConverterConfig(max_upload_size=1024)
