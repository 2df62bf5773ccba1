"""Unit tests for document classification and extraction dispatch."""

from collections.abc import Callable

import pytest
import pytest_check as check

from src.models.schemas import UploadedDocument
from src.parsing.extractor import (
    DocumentKind,
    ExtractionError,
    ExtractionFailure,
    UnsupportedDocumentError,
    classify_document,
    extract_text,
)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class TestClassifyDocument:
    """Tests for MIME-first, extension-fallback classification."""

    @pytest.mark.parametrize(
        ("filename", "content_type", "expected"),
        [
            ("notes.txt", "text/plain", DocumentKind.PLAIN_TEXT),
            ("page.html", "text/html; charset=utf-8", DocumentKind.PLAIN_TEXT),
            ("award.pdf", "application/pdf", DocumentKind.PDF),
            ("lease.docx", DOCX_MIME, DocumentKind.WORD),
            ("lease.doc", "application/msword", DocumentKind.WORD),
        ],
    )
    def test_classifies_by_mime_type(
        self, filename: str, content_type: str, expected: DocumentKind
    ) -> None:
        check.equal(classify_document(filename, content_type), expected)

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("README.md", DocumentKind.PLAIN_TEXT),
            ("data.JSON", DocumentKind.PLAIN_TEXT),
            ("notes.txt", DocumentKind.PLAIN_TEXT),
            ("scan.pdf", DocumentKind.PDF),
            ("Lease.DOCX", DocumentKind.WORD),
            ("old.doc", DocumentKind.WORD),
        ],
    )
    def test_falls_back_to_extension(self, filename: str, expected: DocumentKind) -> None:
        """Unknown or generic MIME types defer to the file extension."""
        check.equal(classify_document(filename, "application/octet-stream"), expected)
        check.equal(classify_document(filename, None), expected)

    def test_mime_type_wins_over_extension(self) -> None:
        """A declared PDF named .txt is treated as a PDF."""
        check.equal(classify_document("report.txt", "application/pdf"), DocumentKind.PDF)

    @pytest.mark.parametrize(
        ("filename", "content_type"),
        [
            ("photo.png", "image/png"),
            ("archive.zip", "application/zip"),
            ("no_extension", None),
            ("", None),
        ],
    )
    def test_unsupported_types(self, filename: str, content_type: str | None) -> None:
        check.equal(classify_document(filename, content_type), DocumentKind.UNSUPPORTED)


class TestExtractText:
    """Tests for extraction routed by document kind."""

    def test_plain_text_is_identity(self) -> None:
        """Plain text extraction returns the decoded bytes exactly."""
        raw = "Lease term: 12 months\n  Rent: $850 ✓\n"
        document = UploadedDocument(
            filename="lease.txt", content_type="text/plain", content=raw.encode("utf-8")
        )

        check.equal(extract_text(document), raw)

    def test_plain_text_decode_failure(self) -> None:
        document = UploadedDocument(
            filename="bad.txt", content_type="text/plain", content=b"\xff\xfe\xfa"
        )

        with pytest.raises(ExtractionError) as exc_info:
            extract_text(document)

        check.equal(exc_info.value.kind, ExtractionFailure.TEXT_DECODE_FAILURE)

    def test_pdf_extraction(self, make_pdf: Callable[..., bytes]) -> None:
        document = UploadedDocument(
            filename="aid.pdf", content_type="application/pdf", content=make_pdf("FAFSA deadline")
        )

        check.is_in("FAFSA deadline", extract_text(document))

    def test_pdf_failure_carries_parser_message(self) -> None:
        document = UploadedDocument(
            filename="aid.pdf", content_type="application/pdf", content=b"not a pdf"
        )

        with pytest.raises(ExtractionError) as exc_info:
            extract_text(document)

        check.equal(exc_info.value.kind, ExtractionFailure.PDF_PARSE_FAILURE)
        check.is_in("Invalid PDF", exc_info.value.message)

    def test_word_extraction(self, make_docx: Callable[..., bytes]) -> None:
        document = UploadedDocument(
            filename="lease.docx", content_type=DOCX_MIME, content=make_docx(["Security deposit"])
        )

        check.equal(extract_text(document), "Security deposit")

    def test_word_failure(self) -> None:
        document = UploadedDocument(filename="lease.doc", content_type=None, content=b"garbage")

        with pytest.raises(ExtractionError) as exc_info:
            extract_text(document)

        check.equal(exc_info.value.kind, ExtractionFailure.DOCX_PARSE_FAILURE)

    def test_unsupported_document_raises(self) -> None:
        document = UploadedDocument(
            filename="photo.png", content_type="image/png", content=b"\x89PNG"
        )

        with pytest.raises(UnsupportedDocumentError) as exc_info:
            extract_text(document)

        check.equal(exc_info.value.filename, "photo.png")
        check.equal(exc_info.value.content_type, "image/png")
