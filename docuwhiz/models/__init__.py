"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.
Field names are camelCase on the wire.

Models:
    - UploadResponse: Result of a PDF upload
    - ChatRequest: Question about an uploaded document
    - ChatResponse: Complete answer text
"""

from docuwhiz.models.schemas import ChatRequest, ChatResponse, UploadResponse

__all__ = ["ChatRequest", "ChatResponse", "UploadResponse"]
