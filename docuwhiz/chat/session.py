"""Session controller: active document and upload status.

Parent of the chat engine. Holds the document questions are asked about
and forwards upload completion into the engine as an UploadStatus.
"""

import logging
from collections.abc import Callable

from docuwhiz.chat.collaborator import DocumentService, UploadError, UploadFailure
from docuwhiz.chat.config import ChatConfig, get_chat_config
from docuwhiz.chat.engine import ChatEngine
from docuwhiz.chat.messages import STATUS_TEXT, ActiveDocumentRef, UploadStatus

logger = logging.getLogger(__name__)

UPLOAD_OK_TEXT = "✅ Upload successful!"
INVALID_FILE_TEXT = "❌ Please select a valid PDF file."
UPLOAD_FAILED_TEXT = "❌ Upload failed: {detail}"


class SessionController:
    """Owns the active document and drives the chat engine's status channel.

    The welcome signal is emitted once, at construction.
    """

    def __init__(
        self,
        service: DocumentService,
        config: ChatConfig | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            service: Document service used for uploads and questions.
            config: Optional chat configuration.
                    Loads from environment if not provided.
            on_change: Called whenever the chat log or indicator changes.
        """
        self._config = config or get_chat_config()
        self._service = service
        self.document = ActiveDocumentRef()
        self.upload_feedback = ""
        self.engine = ChatEngine(
            service.ask_question,
            self.document,
            reveal_interval=self._config.reveal_interval,
            on_change=on_change,
        )
        self.status = UploadStatus.NOT_UPLOADED
        self._emit(UploadStatus.NOT_UPLOADED)

    @property
    def status_message(self) -> str:
        """Human-readable text of the current upload status."""
        return STATUS_TEXT[self.status]

    def on_upload_complete(self, document_id: str) -> None:
        """Make ``document_id`` the active document and announce it."""
        logger.info(f"Active document is now {document_id}")
        self.document.document_id = document_id
        self._emit(UploadStatus.JUST_UPLOADED)

    async def upload(self, file_bytes: bytes, filename: str, mime_type: str) -> str | None:
        """Upload a file and activate it on success.

        Args:
            file_bytes: Raw file content.
            filename: Name of the file as chosen by the user.
            mime_type: Declared content type.

        Returns:
            The new document id, or None when the upload failed.
            ``upload_feedback`` holds the text to show either way.
        """
        try:
            document_id = await self._service.upload_document(file_bytes, filename, mime_type)
        except UploadError as e:
            logger.warning(f"Upload of {filename} failed: {e.reason.value} {e.detail}")
            if e.reason is UploadFailure.INVALID_FILE:
                self.upload_feedback = INVALID_FILE_TEXT
            else:
                self.upload_feedback = UPLOAD_FAILED_TEXT.format(detail=e.detail or e.reason.value)
            return None

        self.upload_feedback = UPLOAD_OK_TEXT
        self.on_upload_complete(document_id)
        return document_id

    def _emit(self, status: UploadStatus) -> None:
        self.status = self.engine.receive_status(status)
