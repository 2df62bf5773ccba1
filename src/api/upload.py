"""Document upload endpoint.

Accepts one file as multipart form data, extracts its text and returns it.
The form is parsed inside the handler rather than declared as a body
parameter, so a request without a file is answered with a 400 envelope
instead of FastAPI's validation error.
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from src.api.errors import error_response
from src.models.schemas import UploadedDocument, UploadResponse
from src.parsing.extractor import ExtractionError, UnsupportedDocumentError, extract_text
from src.parsing.pdf_parser import MAX_FILE_SIZE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])

# 10MB limit matches pdf_parser constant
MAX_UPLOAD_SIZE = MAX_FILE_SIZE


async def _read_upload(file: UploadFile) -> UploadedDocument:
    """Read the uploaded file into memory, bounded by the size limit."""
    content = await file.read(MAX_UPLOAD_SIZE + 1)
    return UploadedDocument(
        filename=file.filename or "",
        content_type=file.content_type,
        content=content,
    )


@router.post("/upload", response_model=UploadResponse)
async def upload_document(request: Request) -> UploadResponse | JSONResponse:
    """Extract text from an uploaded document.

    Returns:
        UploadResponse with the extracted text.

    Raises:
        400: No file, more than one file, or unsupported file type.
        413: File exceeds 10MB limit.
        500: Text extraction failed.
    """
    form = await request.form()
    try:
        files = [value for _, value in form.multi_items() if isinstance(value, UploadFile)]

        if not files:
            return error_response(status.HTTP_400_BAD_REQUEST, "No file uploaded")
        if len(files) > 1:
            return error_response(
                status.HTTP_400_BAD_REQUEST, "Only one file can be uploaded at a time"
            )

        document = await _read_upload(files[0])
    finally:
        await form.close()

    if len(document.content) > MAX_UPLOAD_SIZE:
        return error_response(
            status.HTTP_413_CONTENT_TOO_LARGE,
            "File size exceeds maximum allowed (10MB)",
        )

    try:
        text = extract_text(document)
    except UnsupportedDocumentError as e:
        logger.warning(f"Rejected unsupported upload {document.filename} ({e.content_type})")
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except ExtractionError as e:
        logger.warning(f"Extraction failed for {document.filename}: {e.kind.value}: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to extract text from document",
            details=e.message,
        )
    except Exception as e:
        logger.exception(f"Unexpected error extracting {document.filename}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to extract text from document",
            details=str(e),
        )

    logger.info(f"Extracted {len(text)} characters from {document.filename}")
    return UploadResponse(content=text)
