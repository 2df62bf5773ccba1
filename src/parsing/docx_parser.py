"""Word document text extraction using python-docx."""

import io
import logging

from docx import Document

logger = logging.getLogger(__name__)


class DocxParseError(Exception):
    """Raised when a Word document cannot be converted to text."""

    pass


def parse_docx(file_content: bytes) -> str:
    """Convert a Word document to plain text.

    Paragraphs come first in document order, followed by table rows with
    cells separated by tabs. Legacy binary ``.doc`` files are not OOXML
    packages and fail here.

    Args:
        file_content: Raw bytes of the document.

    Returns:
        The document text, one paragraph or table row per line.

    Raises:
        DocxParseError: If the bytes are not a readable Word document.
    """
    if not file_content:
        raise DocxParseError("Empty file provided")

    try:
        document = Document(io.BytesIO(file_content))
    except Exception as e:
        raise DocxParseError(f"Failed to read Word document: {e}") from e

    lines = [paragraph.text for paragraph in document.paragraphs]

    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            if any(cells):
                lines.append("\t".join(cells))

    text = "\n".join(lines).strip()
    if not text:
        logger.warning("Word document contains no text")

    return text
