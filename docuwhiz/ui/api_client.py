"""HTTP client for the document API.

Implements the DocumentService contract used by the chat session.
Any transport or server failure is reported as UploadError or
QuestionError; callers never see httpx exceptions.
"""

import logging

import httpx

from docuwhiz.chat.collaborator import QuestionError, UploadError, UploadFailure
from docuwhiz.chat.config import ChatConfig, get_chat_config

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


def _error_detail(response: httpx.Response) -> str:
    """Pull the error text out of a FastAPI error body."""
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None
    if isinstance(detail, str) and detail:
        return detail
    return f"HTTP {response.status_code}"


class DocumentClient:
    """Async client for ``/api/upload`` and ``/api/chat``.

    A fresh ``httpx.AsyncClient`` is opened per call unless one is passed in.
    """

    def __init__(
        self,
        config: ChatConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional chat configuration.
                    Loads from environment if not provided.
            client: Optional shared httpx client (used by tests).
        """
        self._config = config or get_chat_config()
        self._client = client

    def _open(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return httpx.AsyncClient(
            base_url=self._config.api_base_url,
            timeout=self._config.request_timeout,
        )

    async def _post(self, path: str, **kwargs) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(path, **kwargs)
        async with self._open() as client:
            return await client.post(path, **kwargs)

    async def upload_document(self, file_bytes: bytes, filename: str, mime_type: str) -> str:
        """Upload a PDF and return its document id.

        Raises:
            UploadError: INVALID_FILE for non-PDF input (no request is made),
                UPLOAD_FAILED for any transport or server error.
        """
        if mime_type != PDF_MIME_TYPE or not file_bytes:
            raise UploadError(UploadFailure.INVALID_FILE)

        try:
            response = await self._post(
                "/api/upload",
                files={"file": (filename, file_bytes, mime_type)},
            )
        except httpx.RequestError as e:
            raise UploadError(UploadFailure.UPLOAD_FAILED, f"Connection failed: {e}") from e

        if response.is_error:
            raise UploadError(UploadFailure.UPLOAD_FAILED, _error_detail(response))

        document_id = response.json().get("fileId")
        if not document_id:
            raise UploadError(UploadFailure.UPLOAD_FAILED, "No document id in response")

        logger.info(f"Uploaded {filename} as {document_id}")
        return document_id

    async def ask_question(self, document_id: str, question: str) -> str:
        """Ask a question and return the complete answer text.

        Raises:
            QuestionError: For any transport or server error.
        """
        try:
            response = await self._post(
                "/api/chat",
                json={"fileId": document_id, "message": question},
            )
            response.raise_for_status()
            return response.json()["response"]
        except httpx.HTTPStatusError as e:
            raise QuestionError(_error_detail(e.response)) from e
        except httpx.RequestError as e:
            raise QuestionError(f"Connection failed: {e}") from e
        except (ValueError, KeyError) as e:
            raise QuestionError(f"Malformed answer: {e}") from e
