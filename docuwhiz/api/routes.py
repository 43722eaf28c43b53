"""Document endpoints: PDF upload and questions about it.

Upload extracts the text and stores it under the file's base name, which
becomes the document id. Chat answers a question from that text.
"""

import logging
from pathlib import PurePosixPath
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from docuwhiz.agent.answer_agent import AnswerError, AnswerService, get_answer_service
from docuwhiz.api.store import DocumentStore, get_document_store
from docuwhiz.models.schemas import ChatRequest, ChatResponse, UploadResponse
from docuwhiz.parsing.pdf_parser import MAX_FILE_SIZE, PDFParseError, parse_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["documents"])

UPLOAD_MESSAGE = "PDF uploaded and text extracted"


def _document_id(filename: str | None) -> str:
    """Validate the uploaded filename and derive the document id from it.

    Raises:
        HTTPException: 400 if the name is missing or not a .pdf.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="PDF file required",
        )

    name = PurePosixPath(filename.replace("\\", "/")).name
    if not name.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are accepted",
        )
    return name


async def _read_limited(file: UploadFile) -> bytes:
    content = await file.read()
    if len(content) > MAX_FILE_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )
    return content


@router.post("/upload", response_model=UploadResponse)
async def upload_pdf(
    file: UploadFile,
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> UploadResponse:
    """Upload a PDF and extract its text.

    Raises:
        400: Missing file, not a PDF, empty or corrupt.
        413: File exceeds 10MB limit.
    """
    document_id = _document_id(file.filename)
    content = await _read_limited(file)

    try:
        pdf = await run_in_threadpool(parse_pdf, content)
    except PDFParseError as e:
        logger.warning(f"PDF parse error for {document_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    store.put(document_id, pdf.text)
    logger.info(f"Stored {document_id} ({pdf.pages} pages, {len(pdf.text)} chars)")

    return UploadResponse(message=UPLOAD_MESSAGE, file_id=document_id, pages=pdf.pages)


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    store: Annotated[DocumentStore, Depends(get_document_store)],
    answers: Annotated[AnswerService, Depends(get_answer_service)],
) -> ChatResponse:
    """Answer a question about an uploaded document.

    Raises:
        400: Unknown document or document without text.
        500: The model failed to answer.
    """
    text = store.get(request.file_id)
    if not text or not text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="PDF text not found for session",
        )

    try:
        answer = await answers.answer(text, request.message)
    except AnswerError as e:
        logger.error(f"Answer generation failed for {request.file_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Answer generation failed",
        ) from e

    return ChatResponse(response=answer)
