"""Document classification and text extraction dispatch.

Every upload is classified into one of a closed set of document kinds,
by declared MIME type first and filename extension second, and then routed
to the matching extractor.
"""

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import PurePath

from src.models.schemas import UploadedDocument
from src.parsing.docx_parser import DocxParseError, parse_docx
from src.parsing.pdf_parser import PDFParseError, parse_pdf

logger = logging.getLogger(__name__)


class DocumentKind(str, Enum):
    """Supported document classes."""

    PLAIN_TEXT = "plain_text"
    PDF = "pdf"
    WORD = "word"
    UNSUPPORTED = "unsupported"


class ExtractionFailure(str, Enum):
    """Why extraction of a supported document failed."""

    TEXT_DECODE_FAILURE = "text_decode_failure"
    PDF_PARSE_FAILURE = "pdf_parse_failure"
    DOCX_PARSE_FAILURE = "docx_parse_failure"


class ExtractionError(Exception):
    """Raised when a supported document cannot be turned into text."""

    def __init__(self, kind: ExtractionFailure, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class UnsupportedDocumentError(Exception):
    """Raised for files outside the supported document classes."""

    def __init__(self, filename: str, content_type: str | None = None) -> None:
        super().__init__(f"Unsupported file type: {filename}")
        self.filename = filename
        self.content_type = content_type


WORD_MIME_TYPES = {
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

_EXTENSION_KINDS = {
    ".txt": DocumentKind.PLAIN_TEXT,
    ".md": DocumentKind.PLAIN_TEXT,
    ".json": DocumentKind.PLAIN_TEXT,
    ".pdf": DocumentKind.PDF,
    ".doc": DocumentKind.WORD,
    ".docx": DocumentKind.WORD,
}


def _kind_from_mime(content_type: str | None) -> DocumentKind | None:
    if not content_type:
        return None

    mime = content_type.split(";", 1)[0].strip().lower()
    if mime.startswith("text/"):
        return DocumentKind.PLAIN_TEXT
    if mime == "application/pdf":
        return DocumentKind.PDF
    if mime in WORD_MIME_TYPES:
        return DocumentKind.WORD
    return None


def classify_document(filename: str | None, content_type: str | None = None) -> DocumentKind:
    """Classify a file by declared MIME type, falling back to its extension.

    Args:
        filename: Original filename, used for the extension fallback.
        content_type: MIME type declared by the client.

    Returns:
        The document kind; UNSUPPORTED when neither signal matches.
    """
    kind = _kind_from_mime(content_type)
    if kind is not None:
        return kind

    suffix = PurePath(filename or "").suffix.lower()
    return _EXTENSION_KINDS.get(suffix, DocumentKind.UNSUPPORTED)


def _extract_plain_text(content: bytes) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ExtractionError(
            ExtractionFailure.TEXT_DECODE_FAILURE,
            f"File is not valid UTF-8 text: {e}",
        ) from e


def _extract_pdf(content: bytes) -> str:
    try:
        return parse_pdf(content).text
    except PDFParseError as e:
        raise ExtractionError(ExtractionFailure.PDF_PARSE_FAILURE, str(e)) from e


def _extract_word(content: bytes) -> str:
    try:
        return parse_docx(content)
    except DocxParseError as e:
        raise ExtractionError(ExtractionFailure.DOCX_PARSE_FAILURE, str(e)) from e


_EXTRACTORS: dict[DocumentKind, Callable[[bytes], str]] = {
    DocumentKind.PLAIN_TEXT: _extract_plain_text,
    DocumentKind.PDF: _extract_pdf,
    DocumentKind.WORD: _extract_word,
}


def extract_text(document: UploadedDocument) -> str:
    """Extract plain text from an uploaded document.

    Args:
        document: The uploaded file.

    Returns:
        The document's text.

    Raises:
        UnsupportedDocumentError: If the file type is not supported.
        ExtractionError: If a supported file could not be parsed.
    """
    kind = classify_document(document.filename, document.content_type)
    extractor = _EXTRACTORS.get(kind)
    if extractor is None:
        raise UnsupportedDocumentError(document.filename, document.content_type)

    logger.debug(f"Extracting {kind.value} text from {document.filename}")
    return extractor(document.content)
