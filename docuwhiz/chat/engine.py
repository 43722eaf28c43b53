"""Chat engine: message log, typing indicator and answer reveal.

Core module of the chat panel. Owns the ConversationState and turns a
question into a log entry that is filled word by word once the answer
arrives.

State machine:

    IDLE --send--> AWAITING_ANSWER --answer--> REVEALING --last word--> IDLE
                         |
                         +--failure--> IDLE

Behaviour worth knowing:

1. **Typing indicator vs. reveal** - ``is_streaming`` is cleared as soon as
   the first word is visible, while the reveal keeps rewriting the
   placeholder until the full answer is shown.

2. **Placeholder on failure** - the empty assistant entry created at send
   time receives the error text, so a failed request leaves no blank entry
   behind.

3. **One request at a time** - sends are rejected while a question is
   awaiting its answer or being revealed. The typed text stays in
   ``pending_input``.

4. **No exceptions escape** - collaborator failures are logged and turned
   into a log entry. The user resends to retry. Errors raised by the
   ``on_change`` callback are logged and never change the phase.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from docuwhiz.chat.messages import (
    FETCH_ERROR_TEXT,
    NO_DOCUMENT_TEXT,
    STATUS_TEXT,
    ActiveDocumentRef,
    ChatIssue,
    ChatPhase,
    ConversationState,
    Message,
    Role,
    UploadStatus,
)
from docuwhiz.chat.reveal import REVEAL_INTERVAL, RevealScheduler

logger = logging.getLogger(__name__)

AskQuestion = Callable[[str, str], Awaitable[str]]


class ChatEngine:
    """Conversation state machine for a single chat session.

    The engine never blocks: ``send_message`` records the question and
    schedules the network call on the running event loop.
    """

    def __init__(
        self,
        ask_question: AskQuestion,
        document: ActiveDocumentRef,
        reveal_interval: float = REVEAL_INTERVAL,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the chat engine.

        Args:
            ask_question: Coroutine function taking (document_id, question)
                and returning the full answer text.
            document: Active document reference, owned by the caller.
            reveal_interval: Seconds between two revealed words.
            on_change: Called after every change to the log or indicator.
        """
        self._ask_question = ask_question
        self._document = document
        self._reveal_interval = reveal_interval
        self._on_change = on_change
        self._state = ConversationState()
        self._phase = ChatPhase.IDLE
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> ConversationState:
        return self._state

    @property
    def messages(self) -> list[Message]:
        return self._state.messages

    @property
    def phase(self) -> ChatPhase:
        return self._phase

    @property
    def is_streaming(self) -> bool:
        return self._state.is_streaming

    @property
    def pending_input(self) -> str:
        return self._state.pending_input

    @pending_input.setter
    def pending_input(self, value: str) -> None:
        self._state.pending_input = value

    def visible_messages(self) -> list[Message]:
        """Messages to render, with blank entries suppressed."""
        return [msg for msg in self._state.messages if msg.is_visible]

    def receive_status(self, status: UploadStatus) -> UploadStatus:
        """Apply an upload status signal to the log.

        Args:
            status: Current status from the session controller.

        Returns:
            The status the controller should hold afterwards.
        """
        if status is UploadStatus.NOT_UPLOADED:
            if not self._state.welcome_shown:
                self._state.welcome_shown = True
                self._append(Role.ASSISTANT, STATUS_TEXT[status])
                self._notify()
            return status

        if status is UploadStatus.JUST_UPLOADED:
            if not self._state.upload_confirmed:
                self._state.upload_confirmed = True
                self._append(Role.ASSISTANT, STATUS_TEXT[status])
                self._notify()
            return UploadStatus.ACKNOWLEDGED

        return status

    def send_message(self, text: str | None = None) -> None:
        """Send a question about the active document.

        Empty input is ignored. Without an active document a warning is
        added to the log and no request is made.

        Args:
            text: Question to send. Defaults to ``pending_input``.
        """
        question = (self._state.pending_input if text is None else text).strip()
        if not question:
            self._report(ChatIssue.EMPTY_INPUT)
            return

        document_id = self._document.document_id
        if document_id is None:
            self._report(ChatIssue.NO_ACTIVE_DOCUMENT)
            self._append(Role.ASSISTANT, NO_DOCUMENT_TEXT)
            self._notify()
            return

        if self._phase is not ChatPhase.IDLE:
            self._report(ChatIssue.BUSY)
            return

        self._append(Role.USER, question)
        self._state.pending_input = ""
        placeholder = self._append(Role.ASSISTANT, "")
        self._state.is_streaming = True
        self._phase = ChatPhase.AWAITING_ANSWER
        self._notify()

        self._track(asyncio.create_task(self._answer(document_id, question, placeholder)))
        logger.info(f"Asked question about document {document_id}")

    async def wait_idle(self) -> None:
        """Wait until every in-flight request and reveal has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def _answer(self, document_id: str, question: str, placeholder: int) -> None:
        try:
            answer = await self._ask_question(document_id, question)
        except Exception as e:
            logger.warning(
                f"Message not answered: {ChatIssue.ANSWER_FETCH_FAILED.value} "
                f"(document={document_id}): {e}"
            )
            self._fail(placeholder)
            return

        logger.info(f"Received answer for document {document_id} ({len(answer)} chars)")
        self._phase = ChatPhase.REVEALING
        scheduler = RevealScheduler(
            answer,
            on_update=lambda partial: self._fill(placeholder, partial),
            on_first_chunk=self._stop_typing,
            on_done=self._finish,
            interval=self._reveal_interval,
        )
        self._track(scheduler.start())

    def _fill(self, index: int, text: str) -> None:
        self._state.messages[index].text = text
        self._notify()

    def _stop_typing(self) -> None:
        self._state.is_streaming = False
        self._notify()

    def _finish(self) -> None:
        # An empty answer never produces a first chunk
        self._state.is_streaming = False
        self._phase = ChatPhase.IDLE
        self._notify()

    def _fail(self, index: int) -> None:
        self._state.is_streaming = False
        self._state.messages[index].text = FETCH_ERROR_TEXT
        self._phase = ChatPhase.IDLE
        self._notify()

    def _append(self, sender: Role, text: str) -> int:
        self._state.messages.append(Message(sender=sender, text=text))
        return len(self._state.messages) - 1

    def _track(self, task: asyncio.Task[None]) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _report(self, issue: ChatIssue) -> None:
        level = logging.DEBUG if issue is ChatIssue.EMPTY_INPUT else logging.INFO
        logger.log(level, f"Message not answered: {issue.value} (phase={self._phase.value})")

    def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change()
        except Exception:
            logger.exception("Change callback failed")
