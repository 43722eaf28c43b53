"""In-memory store of extracted document text.

Documents live for the lifetime of the process. Uploading a file with the
same name replaces the earlier text.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class DocumentStore:
    """Thread-safe mapping of document id to extracted text."""

    def __init__(self) -> None:
        self._texts: dict[str, str] = {}
        self._lock = threading.Lock()

    def put(self, document_id: str, text: str) -> None:
        with self._lock:
            replaced = document_id in self._texts
            self._texts[document_id] = text
        if replaced:
            logger.info(f"Replaced stored text for {document_id}")

    def get(self, document_id: str) -> str | None:
        """Return the stored text, or None for unknown ids."""
        with self._lock:
            return self._texts.get(document_id)

    def __contains__(self, document_id: object) -> bool:
        with self._lock:
            return document_id in self._texts

    def __len__(self) -> int:
        with self._lock:
            return len(self._texts)


# Module-level singleton instance
_document_store: DocumentStore | None = None


def get_document_store() -> DocumentStore:
    """Get or create the global document store."""
    global _document_store
    if _document_store is None:
        _document_store = DocumentStore()
    return _document_store
