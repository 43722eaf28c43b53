"""Agno agent that answers questions about a single PDF.

The whole extracted text of the document goes into the prompt together
with the question. There is no retrieval step and no conversation memory:
every question is answered from the document alone.
"""

import logging

from agno.agent import Agent
from agno.models.openai import OpenAIChat

from docuwhiz.agent.config import AgentConfig, get_agent_config

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = "Answer based on this PDF:\n\n{document}\n\nQuestion: {question}"


class AnswerError(Exception):
    """Raised when the model could not produce an answer."""


def build_prompt(document_text: str, question: str, max_chars: int | None = None) -> str:
    """Combine document text and question into a single prompt.

    Args:
        document_text: Full extracted text of the PDF.
        question: The user's question.
        max_chars: Optional cut-off for the document text.

    Returns:
        The prompt sent to the model.
    """
    if max_chars is not None and len(document_text) > max_chars:
        logger.info(f"Truncating document text from {len(document_text)} to {max_chars} chars")
        document_text = document_text[:max_chars]
    return PROMPT_TEMPLATE.format(document=document_text, question=question.strip())


class AnswerService:
    """Service wrapping the Agno answer agent.

    One agent instance is shared by all requests. The agent holds no
    session state, so concurrent questions do not interfere.
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the answer service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Agent with an OpenAI-compatible chat model.
        """
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
            timeout=self._config.timeout,
        )

        return Agent(
            model=model,
            description="An assistant that answers questions about an uploaded PDF document.",
            instructions=[
                "Answer only from the document text provided in the prompt.",
                "If the document does not contain the answer, say so.",
                "Be concise yet thorough.",
            ],
            # Answers are rendered as markdown in the chat panel
            markdown=True,
        )

    async def answer(self, document_text: str, question: str) -> str:
        """Answer a question about a document.

        Args:
            document_text: Full extracted text of the PDF.
            question: The user's question.

        Returns:
            The model's answer text.

        Raises:
            AnswerError: If the model call fails or returns nothing.
        """
        prompt = build_prompt(document_text, question, self._config.max_document_chars)
        try:
            response = await self._agent.arun(prompt)
        except Exception as e:
            raise AnswerError(f"Model call failed: {e}") from e

        content = getattr(response, "content", None)
        if not content:
            raise AnswerError("No valid response from model")
        return str(content)


# Module-level singleton instance
_answer_service: AnswerService | None = None


def get_answer_service() -> AnswerService:
    """Get or create the global answer service.

    Returns:
        The AnswerService instance.
    """
    global _answer_service
    if _answer_service is None:
        _answer_service = AnswerService()
    return _answer_service
