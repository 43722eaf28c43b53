"""FastAPI endpoints for DocuWhiz.

Endpoints:
    - GET /health: Service health status
    - POST /api/upload: PDF upload and text extraction
    - POST /api/chat: Question about an uploaded document
"""

from docuwhiz.api.app import app, create_app

__all__ = ["app", "create_app"]
