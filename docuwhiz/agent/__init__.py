"""Agno agent that answers questions about uploaded PDFs.

Responsibilities:
    - Agent initialization with an OpenAI-compatible model
    - Prompt assembly from document text and question
    - Translating model failures into AnswerError

Kept separate from the HTTP layer so routes only deal with text in, text out.
"""

from docuwhiz.agent.answer_agent import AnswerError, AnswerService, get_answer_service
from docuwhiz.agent.config import AgentConfig, get_agent_config

__all__ = ["AgentConfig", "AnswerError", "AnswerService", "get_agent_config", "get_answer_service"]
