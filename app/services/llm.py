"""LLM service wrapper for the OpenAI Responses API with hosted web search."""

import logging
from dataclasses import dataclass, field
from typing import Any

import openai
from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


class LLMRequestError(Exception):
    """Raised for any failure of the outbound generation call.

    ``kind`` records what went wrong for logs and metrics; callers must not
    show it to end users.
    """

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(message)


@dataclass
class Generation:
    """Markdown answer text plus the raw citation annotations attached to it."""

    text: str
    citations: list[Any] = field(default_factory=list)


class LLMService:
    """Async OpenAI client wrapper for grounded answer generation."""

    def __init__(
        self,
        api_key: str,
        model: str,
        instructions: str,
        web_search_tool: str = "web_search",
        timeout: float = 60.0,
    ):
        self.api_key = api_key
        self.model = model
        self.instructions = instructions
        self.web_search_tool = web_search_tool
        self.timeout = timeout
        self.client: AsyncOpenAI | None = None

    def initialize(self) -> None:
        """Initialize the OpenAI client."""
        if self.api_key:
            self.client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
        else:
            logger.warning("No OpenAI API key configured")

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        if self.client is not None:
            await self.client.close()
            self.client = None

    async def generate(self, query: str) -> Generation:
        """
        Generate a grounded answer for a query.

        Args:
            query: User query text, sent as-is

        Returns:
            Generation with the markdown text and citation annotations

        Raises:
            LLMRequestError: If the client is not initialized, the API call
                fails, or the response carries no answer text
        """
        if self.client is None:
            raise LLMRequestError(
                "not_configured", "LLM client not initialized. Check OPENAI_API_KEY."
            )

        try:
            response = await self.client.responses.create(
                model=self.model,
                instructions=self.instructions,
                input=query,
                tools=[{"type": self.web_search_tool}],
            )
        except openai.RateLimitError as e:
            logger.error(f"OpenAI rate limit error: {e}")
            raise LLMRequestError("rate_limit", f"Rate limit exceeded: {e}") from e
        except openai.APIConnectionError as e:
            logger.error(f"OpenAI connection error: {e}")
            raise LLMRequestError("connection", f"Could not reach LLM service: {e}") from e
        except openai.APIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise LLMRequestError("api_error", f"LLM service unavailable: {e}") from e

        generation = parse_response(response)
        if not generation.text.strip():
            raise LLMRequestError("malformed_response", "LLM response contained no text")
        return generation


def parse_response(response: Any) -> Generation:
    """Collect output text and annotations from every message item of a response."""
    texts: list[str] = []
    citations: list[Any] = []
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            if getattr(part, "type", None) != "output_text":
                continue
            texts.append(getattr(part, "text", None) or "")
            citations.extend(getattr(part, "annotations", None) or [])
    return Generation(text="".join(texts), citations=citations)
