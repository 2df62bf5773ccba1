"""Unit tests for the Word document parser."""

from collections.abc import Callable

import pytest
import pytest_check as check

from src.parsing.docx_parser import DocxParseError, parse_docx


class TestParseDocx:
    """Tests for converting .docx files to text."""

    def test_extracts_paragraphs_in_order(self, make_docx: Callable[..., bytes]) -> None:
        """Paragraphs are returned one per line, in document order."""
        text = parse_docx(make_docx(["Study Abroad Agreement", "Program: Spring semester"]))

        check.equal(text, "Study Abroad Agreement\nProgram: Spring semester")

    def test_extracts_table_rows(self, make_docx: Callable[..., bytes]) -> None:
        """Table cells are tab separated, one row per line."""
        table = [["Tuition", "$12,000"], ["Housing", "$3,000"]]
        text = parse_docx(make_docx(["Costs"], table=table))

        check.is_in("Costs", text)
        check.is_in("Tuition\t$12,000", text)
        check.is_in("Housing\t$3,000", text)

    def test_empty_document_returns_empty_text(self, make_docx: Callable[..., bytes]) -> None:
        """A document without text yields an empty string."""
        check.equal(parse_docx(make_docx([])), "")


class TestParseDocxRejection:
    """Tests for unreadable Word documents."""

    def test_rejects_empty_bytes(self) -> None:
        with pytest.raises(DocxParseError, match="Empty file"):
            parse_docx(b"")

    def test_rejects_non_zip_content(self) -> None:
        """Bytes that are not an OOXML package are rejected."""
        with pytest.raises(DocxParseError, match="Failed to read Word document"):
            parse_docx(b"plain text, not a word document")

    def test_rejects_legacy_doc_format(self) -> None:
        """Legacy binary .doc files (OLE compound documents) cannot be read."""
        ole_header = bytes([0xD0, 0xCF, 0x11, 0xE0, 0xA1, 0xB1, 0x1A, 0xE1]) + b"\x00" * 504

        with pytest.raises(DocxParseError):
            parse_docx(ole_header)
