"""Pytest fixtures and shared test configuration.

Fixtures:
    - chat_config: ChatConfig with a near-instant reveal
    - service: Scriptable in-memory DocumentService
    - sample_pdf / blank_pdf: PDF bytes built on the fly
    - async_client: HTTPX client for API testing
"""

import asyncio
import io
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from docuwhiz.api import app
from docuwhiz.chat.collaborator import QuestionError, UploadError, UploadFailure
from docuwhiz.chat.config import ChatConfig


class FakeDocumentService:
    """DocumentService double that records calls.

    Set ``answer`` to the reply text, ``error`` to make questions fail,
    or ``gate`` to hold answers until the event is set.
    """

    def __init__(self) -> None:
        self.answer = "This is a test document."
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.upload_error: UploadError | None = None
        self.questions: list[tuple[str, str]] = []
        self.uploads: list[str] = []

    async def upload_document(self, file_bytes: bytes, filename: str, mime_type: str) -> str:
        if self.upload_error is not None:
            raise self.upload_error
        if mime_type != "application/pdf":
            raise UploadError(UploadFailure.INVALID_FILE)
        self.uploads.append(filename)
        return filename

    async def ask_question(self, document_id: str, question: str) -> str:
        self.questions.append((document_id, question))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.answer


def _build_pdf(text: str) -> bytes:
    """Assemble a one-page PDF showing ``text`` in Helvetica."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref
    return bytes(out)


@pytest.fixture
def sample_pdf() -> bytes:
    return _build_pdf("DocuWhiz sample document")


@pytest.fixture
def blank_pdf() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def chat_config() -> ChatConfig:
    return ChatConfig(api_base_url="http://test", reveal_interval_ms=1, request_timeout=5)


@pytest.fixture
def service() -> FakeDocumentService:
    return FakeDocumentService()


@pytest.fixture
def failing_service(service: FakeDocumentService) -> FakeDocumentService:
    service.error = QuestionError("HTTP 500")
    return service


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
