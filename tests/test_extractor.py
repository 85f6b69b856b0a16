"""
Extraction Driver Tests
"""
import zlib

import fitz  # PyMuPDF
import pytest

from pdf_converter.exceptions import EmptyInputError
from pdf_converter.extractor import PdfTextExtractor, extract_text


class TestExtractText:
    """Test end-to-end extraction over whole documents"""

    def test_hello_world(self, hello_pdf):
        text = extract_text(hello_pdf)
        assert "Hello PDF World" in text

    def test_uncompressed_streams(self, pdf_factory):
        pdf = pdf_factory(b"BT (Plain text stream) Tj ET", compress=False)
        assert extract_text(pdf) == "Plain text stream"

    def test_streams_joined_with_blank_line_in_document_order(self, pdf_factory):
        pdf = pdf_factory(b"BT (First) Tj ET", b"BT (Second) Tj ET")
        assert extract_text(pdf) == "First\n\nSecond"

    def test_uncompressed_streams_are_not_duplicated(self, pdf_factory):
        pdf = pdf_factory(b"BT (One) Tj ET", b"BT (Two) Tj ET", compress=False)
        assert extract_text(pdf) == "One\n\nTwo"

    def test_streams_without_text_add_no_separator(self, pdf_factory):
        pdf = pdf_factory(
            b"BT (First) Tj ET",
            b"0 0 612 792 re f",
            b"",
            b"BT (Last) Tj ET",
        )
        assert extract_text(pdf) == "First\n\nLast"

    def test_multi_line_stream(self, pdf_factory):
        content = (
            b"BT /F1 12 Tf 72 720 Td (Line one) Tj "
            b"0 -14 Td (Line two) Tj "
            b"0 -28 Td 0 -14 Td 0 -14 Td [(Para) -250 (graph)] TJ ET"
        )
        assert extract_text(pdf_factory(content)) == "Line one\nLine two\n\nParagraph"

    def test_escaped_literal(self, pdf_factory):
        pdf = pdf_factory(rb"BT (f\(x\) = 1) Tj ET")
        assert extract_text(pdf) == "f(x) = 1"

    def test_unterminated_stream_is_ignored(self, hello_pdf):
        broken = hello_pdf + b"9 0 obj\n<< >>\nstream\n" + zlib.compress(b"(Lost) Tj")
        text = extract_text(broken)
        assert "Hello PDF World" in text
        assert "Lost" not in text

    def test_document_without_streams(self):
        assert extract_text(b"%PDF-1.4\n1 0 obj\n<< >>\nendobj\n%%EOF") == ""

    @pytest.mark.parametrize("empty", [b"", None, bytearray()])
    def test_empty_input_raises(self, empty):
        with pytest.raises(EmptyInputError):
            extract_text(empty)

    @pytest.mark.parametrize(
        "garbage",
        [
            bytes(range(256)) * 8,
            b"stream\n\xff\xfe(\\" * 50,
            b"stream" * 100,
            b"endstream",
            b"(((((",
        ],
    )
    def test_garbage_never_raises(self, garbage):
        assert isinstance(extract_text(garbage), str)

    def test_accepts_bytearray(self, hello_pdf):
        assert "Hello PDF World" in extract_text(bytearray(hello_pdf))

    def test_extractor_instance_is_reusable(self, hello_pdf, pdf_factory):
        extractor = PdfTextExtractor()
        assert extractor.extract(hello_pdf) == "Hello PDF World"
        assert extractor.extract(pdf_factory(b"(Other) Tj")) == "Other"


class TestFixturesAgainstConformingReader:
    """Cross-check generated fixtures with PyMuPDF"""

    def test_fixture_is_a_valid_pdf(self, hello_pdf):
        with fitz.open(stream=hello_pdf, filetype="pdf") as document:
            assert document.page_count == 1
            assert "Hello PDF World" in document[0].get_text()

    def test_agrees_with_conforming_reader(self, pdf_factory):
        pdf = pdf_factory(b"BT /F1 12 Tf 72 720 Td (Quarterly report) Tj ET")
        with fitz.open(stream=pdf, filetype="pdf") as document:
            reference = document[0].get_text().strip()
        assert extract_text(pdf) == reference
