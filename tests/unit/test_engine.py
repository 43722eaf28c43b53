"""Unit tests for the chat engine state machine."""

import asyncio

import pytest
import pytest_check as check

from docuwhiz.chat.engine import ChatEngine
from docuwhiz.chat.messages import (
    FETCH_ERROR_TEXT,
    NO_DOCUMENT_TEXT,
    UPLOADED_TEXT,
    WELCOME_TEXT,
    ActiveDocumentRef,
    ChatPhase,
    Message,
    Role,
    UploadStatus,
)
from docuwhiz.chat.reveal import iter_prefixes
from tests.conftest import FakeDocumentService


def make_engine(
    service: FakeDocumentService,
    document_id: str | None = "doc1",
    on_change=None,
) -> ChatEngine:
    return ChatEngine(
        service.ask_question,
        ActiveDocumentRef(document_id=document_id),
        reveal_interval=0,
        on_change=on_change,
    )


class TestEmptyInput:
    """Empty and whitespace input is ignored."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_no_mutation_and_no_call(self, service: FakeDocumentService, text: str) -> None:
        """Sending blank text changes nothing, however often."""
        engine = make_engine(service)

        for _ in range(5):
            engine.send_message(text)

        check.equal(engine.messages, [])
        check.equal(service.questions, [])
        check.is_false(engine.is_streaming)
        check.equal(engine.phase, ChatPhase.IDLE)

    def test_blank_input_ignored_without_document(self, service: FakeDocumentService) -> None:
        """Blank text does not produce the no-document warning either."""
        engine = make_engine(service, document_id=None)

        engine.send_message("  ")

        assert engine.messages == []


class TestNoActiveDocument:
    """Sending before any upload warns instead of asking."""

    def test_hello_without_document(self, service: FakeDocumentService) -> None:
        """documentId unset, input 'hello' gives one warning and no call."""
        engine = make_engine(service, document_id=None)

        engine.send_message("hello")

        check.equal(engine.messages, [Message(sender=Role.ASSISTANT, text=NO_DOCUMENT_TEXT)])
        check.equal(service.questions, [])
        check.equal(engine.phase, ChatPhase.IDLE)

    def test_one_warning_per_send(self, service: FakeDocumentService) -> None:
        """Each send adds exactly one warning."""
        engine = make_engine(service, document_id=None)

        for i in range(4):
            engine.send_message(f"question {i}")

        check.equal(len(engine.messages), 4)
        check.is_true(all(m.text == NO_DOCUMENT_TEXT for m in engine.messages))
        check.equal(service.questions, [])


class TestSendMessage:
    """Successful question flow."""

    async def test_appends_user_and_placeholder_synchronously(
        self, service: FakeDocumentService
    ) -> None:
        """Two messages are in the log before any answer arrives."""
        service.gate = asyncio.Event()
        engine = make_engine(service)

        engine.send_message("  What is this?  ")

        check.equal(
            engine.messages,
            [Message(sender=Role.USER, text="What is this?"), Message(sender=Role.ASSISTANT)],
        )
        check.is_true(engine.is_streaming)
        check.equal(engine.phase, ChatPhase.AWAITING_ANSWER)

        service.gate.set()
        await engine.wait_idle()

    async def test_answer_is_revealed_into_placeholder(self, service: FakeDocumentService) -> None:
        """Final log tail holds the question and the full answer."""
        engine = make_engine(service)

        engine.send_message("What is this?")
        await engine.wait_idle()

        check.equal(
            engine.messages[-2:],
            [
                Message(sender=Role.USER, text="What is this?"),
                Message(sender=Role.ASSISTANT, text="This is a test document."),
            ],
        )
        check.is_false(engine.is_streaming)
        check.equal(engine.phase, ChatPhase.IDLE)
        check.equal(service.questions, [("doc1", "What is this?")])

    async def test_uses_pending_input_when_no_text_given(
        self, service: FakeDocumentService
    ) -> None:
        """send_message() without argument sends and clears the input buffer."""
        engine = make_engine(service)
        engine.pending_input = "Summarize it "

        engine.send_message()

        check.equal(engine.pending_input, "")
        check.equal(engine.messages[0].text, "Summarize it")
        await engine.wait_idle()

    async def test_placeholder_hidden_until_first_word(
        self, service: FakeDocumentService
    ) -> None:
        """The empty placeholder is not rendered while awaiting."""
        service.gate = asyncio.Event()
        engine = make_engine(service)

        engine.send_message("What is this?")

        check.equal(engine.visible_messages(), [Message(sender=Role.USER, text="What is this?")])

        service.gate.set()
        await engine.wait_idle()
        check.equal(len(engine.visible_messages()), 2)

    async def test_reveal_passes_through_every_prefix(
        self, service: FakeDocumentService
    ) -> None:
        """The placeholder shows each word prefix in order, no skips."""
        seen: list[str] = []

        def record() -> None:
            if len(engine.messages) == 2 and engine.messages[1].text:
                if not seen or seen[-1] != engine.messages[1].text:
                    seen.append(engine.messages[1].text)

        engine = make_engine(service, on_change=record)
        engine.send_message("What is this?")
        await engine.wait_idle()

        assert seen == list(iter_prefixes(service.answer))

    async def test_typing_indicator_clears_at_first_word(
        self, service: FakeDocumentService
    ) -> None:
        """Indicator is on until the first word shows, then stays off."""
        snapshots: list[tuple[str, bool]] = []

        def record() -> None:
            if len(engine.messages) == 2:
                snapshots.append((engine.messages[1].text, engine.is_streaming))

        engine = make_engine(service, on_change=record)
        engine.send_message("What is this?")
        await engine.wait_idle()

        before = [streaming for text, streaming in snapshots if not text]
        first_word = next(i for i, (text, _) in enumerate(snapshots) if text)
        after_first = [streaming for _, streaming in snapshots[first_word + 1 :]]

        check.is_true(all(before))
        check.is_false(any(after_first))
        check.is_false(engine.is_streaming)

    async def test_empty_answer_clears_indicator(self, service: FakeDocumentService) -> None:
        """An empty answer ends with the indicator off and nothing rendered."""
        service.answer = ""
        engine = make_engine(service)

        engine.send_message("Anything?")
        await engine.wait_idle()

        check.is_false(engine.is_streaming)
        check.equal(engine.phase, ChatPhase.IDLE)
        check.equal(len(engine.visible_messages()), 1)


class TestAnswerFetchFailed:
    """Failures end in an error message, never an exception."""

    async def test_error_text_fills_placeholder(
        self, failing_service: FakeDocumentService
    ) -> None:
        """Log tail is the question followed by the fetch error."""
        engine = make_engine(failing_service)

        engine.send_message("What is this?")
        await engine.wait_idle()

        check.equal(
            engine.messages,
            [
                Message(sender=Role.USER, text="What is this?"),
                Message(sender=Role.ASSISTANT, text=FETCH_ERROR_TEXT),
            ],
        )
        check.is_false(engine.is_streaming)
        check.equal(engine.phase, ChatPhase.IDLE)

    async def test_any_exception_is_contained(self, service: FakeDocumentService) -> None:
        """Unexpected collaborator errors are treated the same way."""
        service.error = RuntimeError("socket closed")
        engine = make_engine(service)

        engine.send_message("What is this?")
        await engine.wait_idle()

        assert engine.messages[-1].text == FETCH_ERROR_TEXT

    async def test_can_resend_after_failure(self, failing_service: FakeDocumentService) -> None:
        """The engine is idle again and accepts the next question."""
        engine = make_engine(failing_service)
        engine.send_message("first")
        await engine.wait_idle()

        failing_service.error = None
        engine.send_message("second")
        await engine.wait_idle()

        check.equal(engine.messages[-1].text, "This is a test document.")
        check.equal(len(failing_service.questions), 2)


class TestConcurrentSends:
    """A second send while a question is in flight is rejected."""

    async def test_send_while_awaiting_is_rejected(self, service: FakeDocumentService) -> None:
        """Log and input buffer are left untouched."""
        service.gate = asyncio.Event()
        engine = make_engine(service)
        engine.send_message("first")

        engine.pending_input = "second"
        engine.send_message()

        check.equal(len(engine.messages), 2)
        check.equal(engine.pending_input, "second")
        check.equal(len(service.questions), 1)

        service.gate.set()
        await engine.wait_idle()

    async def test_send_while_revealing_is_rejected(self, service: FakeDocumentService) -> None:
        """Clearing the indicator does not make the engine idle."""
        service.answer = "one two three four five"
        engine = ChatEngine(
            service.ask_question, ActiveDocumentRef(document_id="doc1"), reveal_interval=0.01
        )
        engine.send_message("first")

        while engine.is_streaming:
            await asyncio.sleep(0.005)
        check.equal(engine.phase, ChatPhase.REVEALING)

        engine.send_message("second")
        check.equal(len(engine.messages), 2)

        await engine.wait_idle()
        check.equal(engine.messages[-1].text, service.answer)


class TestReceiveStatus:
    """Status signals from the session controller."""

    def test_welcome_seeded_once(self, service: FakeDocumentService) -> None:
        """Repeated welcome signals add a single message."""
        engine = make_engine(service)

        for _ in range(3):
            result = engine.receive_status(UploadStatus.NOT_UPLOADED)

        check.equal(result, UploadStatus.NOT_UPLOADED)
        check.equal(engine.messages, [Message(sender=Role.ASSISTANT, text=WELCOME_TEXT)])
        check.is_true(engine.state.welcome_shown)

    def test_just_uploaded_is_acknowledged(self, service: FakeDocumentService) -> None:
        """Confirmation is appended and the signal becomes ACKNOWLEDGED."""
        engine = make_engine(service)

        result = engine.receive_status(UploadStatus.JUST_UPLOADED)
        engine.receive_status(result)

        check.equal(result, UploadStatus.ACKNOWLEDGED)
        check.equal(len(engine.messages), 1)

    def test_upload_confirmation_shown_once(self, service: FakeDocumentService) -> None:
        """A second upload is acknowledged without another confirmation."""
        engine = make_engine(service)

        first = engine.receive_status(UploadStatus.JUST_UPLOADED)
        second = engine.receive_status(UploadStatus.JUST_UPLOADED)

        check.equal(first, UploadStatus.ACKNOWLEDGED)
        check.equal(second, UploadStatus.ACKNOWLEDGED)
        check.equal([m.text for m in engine.messages], [UPLOADED_TEXT])
        check.is_true(engine.state.upload_confirmed)


class TestChangeCallbackErrors:
    """A failing on_change callback never wedges the engine."""

    async def test_raising_callback_during_reveal(self, service: FakeDocumentService) -> None:
        calls: list[int] = []

        def on_change() -> None:
            calls.append(1)
            if len(calls) == 2:
                raise RuntimeError("render failed")

        engine = make_engine(service, on_change=on_change)

        engine.send_message("What is this?")
        await engine.wait_idle()

        check.equal(engine.phase, ChatPhase.IDLE)
        check.is_false(engine.is_streaming)
        check.equal(engine.messages[-1].text, "This is a test document.")

        engine.send_message("again")
        await engine.wait_idle()

        check.equal(service.questions[-1], ("doc1", "again"))
        check.equal(engine.messages[-1].text, "This is a test document.")

    async def test_raising_callback_on_send(self, service: FakeDocumentService) -> None:
        def on_change() -> None:
            raise RuntimeError("render failed")

        engine = make_engine(service, on_change=on_change)

        engine.send_message("What is this?")
        await engine.wait_idle()

        check.equal(len(service.questions), 1)
        check.equal(engine.phase, ChatPhase.IDLE)
        check.equal(engine.messages[-1].text, "This is a test document.")


def test_welcome_text_matches_product_name() -> None:
    assert WELCOME_TEXT == "👋 Welcome to DocuWhiZ! Please upload a PDF to get started."
