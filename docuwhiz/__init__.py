"""DocuWhiz - chat with an uploaded PDF.

Combines FastAPI for the document API, Agno for answering, NiceGUI for the
chat panel, and Pydantic for data validation.

Components:
    - chat: Conversation state, answer reveal and session control
    - api: HTTP endpoints for upload and questions
    - agent: LLM answering over the document text
    - parsing: PDF text extraction
    - ui: Chat page and API client
    - models: Request/response schemas
"""

__version__ = "0.1.0"
