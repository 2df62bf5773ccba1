"""Document parsing utilities.

Turns uploaded files into plain text for the conversation.

Responsibilities:
    - File classification by MIME type with extension fallback
    - Plain text decoding
    - PDF text extraction with pypdf
    - Word document conversion with python-docx
"""

from src.parsing.docx_parser import DocxParseError, parse_docx
from src.parsing.extractor import (
    DocumentKind,
    ExtractionError,
    ExtractionFailure,
    UnsupportedDocumentError,
    classify_document,
    extract_text,
)
from src.parsing.pdf_parser import PDFContent, PDFParseError, parse_pdf

__all__ = [
    "DocumentKind",
    "DocxParseError",
    "ExtractionError",
    "ExtractionFailure",
    "PDFContent",
    "PDFParseError",
    "UnsupportedDocumentError",
    "classify_document",
    "extract_text",
    "parse_docx",
    "parse_pdf",
]
