"""Chat session core.

Owns the conversation shown in the chat panel.

Responsibilities:
    - Message log, input buffer and typing indicator
    - Word-by-word reveal of answers that arrive in one piece
    - Active document tracking and upload status signalling

Has no knowledge of HTTP or of the UI toolkit. Talks to the document
service through the DocumentService contract.
"""

from docuwhiz.chat.collaborator import DocumentService, QuestionError, UploadError, UploadFailure
from docuwhiz.chat.config import ChatConfig, get_chat_config
from docuwhiz.chat.engine import ChatEngine
from docuwhiz.chat.messages import (
    ActiveDocumentRef,
    ChatIssue,
    ChatPhase,
    ConversationState,
    Message,
    Role,
    UploadStatus,
)
from docuwhiz.chat.reveal import RevealScheduler, iter_prefixes
from docuwhiz.chat.session import SessionController

__all__ = [
    "ActiveDocumentRef",
    "ChatConfig",
    "ChatEngine",
    "ChatIssue",
    "ChatPhase",
    "ConversationState",
    "DocumentService",
    "Message",
    "QuestionError",
    "RevealScheduler",
    "Role",
    "SessionController",
    "UploadError",
    "UploadFailure",
    "UploadStatus",
    "get_chat_config",
    "iter_prefixes",
]
