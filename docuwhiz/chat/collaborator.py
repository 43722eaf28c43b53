"""Contract of the document service the chat session talks to."""

from enum import Enum
from typing import Protocol


class UploadFailure(str, Enum):
    """Why a document could not be uploaded."""

    INVALID_FILE = "invalid-file"
    UPLOAD_FAILED = "upload-failed"


class UploadError(Exception):
    """Raised when a document upload fails."""

    def __init__(self, reason: UploadFailure, detail: str = "") -> None:
        super().__init__(detail or reason.value)
        self.reason = reason
        self.detail = detail


class QuestionError(Exception):
    """Raised when a question could not be answered."""

    reason = "request-failed"


class DocumentService(Protocol):
    """Upload documents and ask questions about them."""

    async def upload_document(
        self, file_bytes: bytes, filename: str, mime_type: str
    ) -> str: ...

    async def ask_question(self, document_id: str, question: str) -> str: ...
