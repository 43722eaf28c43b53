"""Chat panel configuration with environment variable loading.

Pydantic-based configuration for the chat engine and its HTTP client.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ChatConfig(BaseModel):
    """Configuration for the chat panel.

    Attributes:
        api_base_url: Base URL of the document API.
        reveal_interval_ms: Milliseconds between two revealed words.
        request_timeout: Seconds before an API request is abandoned.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
        description="Base URL of the document API",
    )
    reveal_interval_ms: int = Field(
        default_factory=lambda: int(os.getenv("REVEAL_INTERVAL_MS", "80")),
        gt=0,
        description="Milliseconds between two revealed words",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "120")),
        gt=0.0,
        description="Seconds before an API request is abandoned",
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended directly."""
        if not v or not v.strip():
            raise ValueError("API_BASE_URL must not be empty")
        return v.strip().rstrip("/")

    @property
    def reveal_interval(self) -> float:
        """Reveal period in seconds."""
        return self.reveal_interval_ms / 1000


def get_chat_config() -> ChatConfig:
    """Create chat configuration from environment.

    Returns:
        Configured ChatConfig instance.
    """
    return ChatConfig()
