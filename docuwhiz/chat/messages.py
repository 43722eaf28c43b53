"""Conversation data model for the chat engine.

Pydantic models for the message log and the state the engine owns.

Models:
    - Role: Who wrote a message
    - Message: A single entry in the log
    - ConversationState: Log, input buffer and typing indicator
    - ActiveDocumentRef: The document questions are asked about
    - UploadStatus: Signal from the session controller to the engine
"""

from enum import Enum

from pydantic import BaseModel, Field

WELCOME_TEXT = "👋 Welcome to DocuWhiZ! Please upload a PDF to get started."
UPLOADED_TEXT = "✅ PDF uploaded. You can start chatting now."
NO_DOCUMENT_TEXT = "⚠️ Please upload a PDF first."
FETCH_ERROR_TEXT = "⚠️ Error fetching response. Try again later."


class Role(str, Enum):
    """Sender of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatPhase(str, Enum):
    """Lifecycle of a single question inside the engine."""

    IDLE = "idle"
    AWAITING_ANSWER = "awaiting_answer"
    REVEALING = "revealing"


class ChatIssue(str, Enum):
    """Reasons a send did not produce an answer."""

    EMPTY_INPUT = "empty_input"
    NO_ACTIVE_DOCUMENT = "no_active_document"
    BUSY = "busy"
    ANSWER_FETCH_FAILED = "answer_fetch_failed"


class UploadStatus(str, Enum):
    """Upload state passed from the session controller to the chat engine.

    NOT_UPLOADED doubles as the welcome signal. JUST_UPLOADED is answered by
    the engine with ACKNOWLEDGED. The confirmation reaches the log only for
    the first upload of a session.
    """

    NOT_UPLOADED = "not_uploaded"
    JUST_UPLOADED = "just_uploaded"
    ACKNOWLEDGED = "acknowledged"


STATUS_TEXT: dict[UploadStatus, str] = {
    UploadStatus.NOT_UPLOADED: WELCOME_TEXT,
    UploadStatus.JUST_UPLOADED: UPLOADED_TEXT,
    UploadStatus.ACKNOWLEDGED: UPLOADED_TEXT,
}


class Message(BaseModel):
    """A single chat message.

    Attributes:
        sender: Who wrote the message.
        text: Message body. Only the in-flight assistant placeholder
            is rewritten after it is appended.
    """

    sender: Role
    text: str = ""

    @property
    def is_visible(self) -> bool:
        """Whether the message has anything to render."""
        return bool(self.text.strip())


class ConversationState(BaseModel):
    """Everything the chat engine owns for one session.

    Attributes:
        messages: The log, in rendering order.
        pending_input: Text typed but not yet sent.
        is_streaming: Whether the typing indicator is shown.
        welcome_shown: Latch set once the welcome message is seeded.
        upload_confirmed: Latch set once the upload confirmation is shown.
    """

    messages: list[Message] = Field(default_factory=list)
    pending_input: str = ""
    is_streaming: bool = False
    welcome_shown: bool = False
    upload_confirmed: bool = False


class ActiveDocumentRef(BaseModel):
    """Identifier of the document the user is chatting about."""

    document_id: str | None = None
