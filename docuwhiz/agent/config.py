"""Settings for the model that answers questions about uploaded PDFs.

Every field can be set from the environment (or a .env file). LLM_BASE_URL
points the agent at any OpenAI-compatible endpoint.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


def _env_float(name: str, default: str) -> float:
    return float(os.getenv(name, default))


def _env_int(name: str, default: str) -> int:
    return int(os.getenv(name, default))


class AgentConfig(BaseModel):
    """Model connection and answering limits.

    Attributes:
        api_key: Key for the model provider (LLM_API_KEY, then OPENAI_API_KEY).
        base_url: OpenAI-compatible endpoint, None for the OpenAI default.
        model_name: Model id (LLM_MODEL).
        temperature: Sampling temperature, 0.0 to 2.0 (LLM_TEMPERATURE).
        max_tokens: Answer length cap (LLM_MAX_TOKENS).
        timeout: Seconds before a model call is abandoned (LLM_TIMEOUT).
        max_document_chars: Document text beyond this length is cut off
            before it goes into the prompt (MAX_DOCUMENT_CHARS).
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY", ""),
    )
    base_url: str | None = Field(default_factory=lambda: os.getenv("LLM_BASE_URL") or None)
    model_name: str = Field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"))
    temperature: float = Field(
        default_factory=lambda: _env_float("LLM_TEMPERATURE", "0.7"), ge=0.0, le=2.0
    )
    max_tokens: int = Field(
        default_factory=lambda: _env_int("LLM_MAX_TOKENS", "1024"), ge=1, le=128000
    )
    timeout: float = Field(default_factory=lambda: _env_float("LLM_TIMEOUT", "60"), gt=0.0)
    max_document_chars: int = Field(
        default_factory=lambda: _env_int("MAX_DOCUMENT_CHARS", "400000"), ge=1000
    )

    @field_validator("api_key")
    @classmethod
    def require_api_key(cls, v: str) -> str:
        """Reject a missing or blank key up front instead of at the first question."""
        if not v or not v.strip():
            raise ValueError("API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env")
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip().rstrip("/")


def get_agent_config() -> AgentConfig:
    """Build the agent configuration from the environment.

    Raises:
        ValueError: If no API key is set.
    """
    return AgentConfig()
