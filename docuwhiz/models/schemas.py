from pydantic import BaseModel, ConfigDict, Field, field_validator


class UploadResponse(BaseModel):
    """Response after a PDF was uploaded and its text extracted.

    Attributes:
        message: Human-readable outcome.
        file_id: Document identifier to use in chat requests.
        pages: Number of pages in the document.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str
    file_id: str = Field(..., alias="fileId")
    pages: int = Field(..., ge=0)


class ChatRequest(BaseModel):
    """Question about an uploaded document.

    Attributes:
        file_id: Identifier returned by the upload endpoint.
        message: User's question.
    """

    model_config = ConfigDict(populate_by_name=True)

    file_id: str = Field(..., alias="fileId", min_length=1)
    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Complete answer to a question.

    Attributes:
        response: The assistant's answer, as markdown.
    """

    response: str
