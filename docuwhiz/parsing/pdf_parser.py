"""PDF text extraction using pypdf.

Turns uploaded bytes into the plain text the answer agent reads.
Pages are separated by a form feed, so page boundaries survive in the
prompt.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"


class PDFContent(BaseModel):
    """Text extracted from a PDF.

    Attributes:
        text: Page texts joined by a form feed.
        pages: Number of pages in the document.
        metadata: Title/author fields that were present.
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str] = Field(default_factory=dict)

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())


class PDFParseError(Exception):
    """Raised when a file cannot be read as a PDF."""


def _check_bytes(file_content: bytes) -> None:
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _read_metadata(reader: PdfReader) -> dict[str, str]:
    fields = {"/Title": "title", "/Author": "author", "/Subject": "subject"}
    try:
        info = reader.metadata
    except Exception as e:
        logger.warning(f"Could not read PDF metadata: {e}")
        return {}

    if not info:
        return {}
    return {name: str(info[key]) for key, name in fields.items() if info.get(key)}


def _page_text(reader: PdfReader, index: int) -> str:
    try:
        return reader.pages[index].extract_text() or ""
    except Exception as e:
        logger.warning(f"Failed to extract text from page {index + 1}: {e}")
        return ""


def parse_pdf(file_content: bytes) -> PDFContent:
    """Extract the text of every page of a PDF.

    Args:
        file_content: Raw bytes of the uploaded file.

    Returns:
        PDFContent with the joined page texts.

    Raises:
        PDFParseError: If the file is empty, too large, not a PDF or corrupt.
    """
    _check_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    texts = [_page_text(reader, i) for i in range(pages)]
    content = PDFContent(
        text="\f".join(t for t in texts if t.strip()),
        pages=pages,
        metadata=_read_metadata(reader),
    )

    if not content.has_text:
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return content
