"""Integration tests that hit the real OpenAI API.

Run with: pytest tests/test_integration.py -v

Prerequisites:
- OPENAI_API_KEY set in environment or .env file
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.services.llm import LLMService
from app.services.rendering import extract_sources, render_markdown


pytestmark = pytest.mark.integration


def has_openai_key() -> bool:
    """Check if OpenAI API key is available."""
    return bool(settings.openai_api_key)


skip_no_openai = pytest.mark.skipif(
    not has_openai_key(),
    reason="OPENAI_API_KEY not set"
)


def make_service() -> LLMService:
    service = LLMService(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        instructions=settings.system_instruction,
        web_search_tool=settings.web_search_tool,
        timeout=settings.openai_timeout,
    )
    service.initialize()
    return service


@skip_no_openai
class TestLLMIntegration:
    """Tests against the live Responses API."""

    @pytest.mark.asyncio
    async def test_grounded_answer(self):
        """Test that a TMEP question returns text with at least one web source."""
        service = make_service()
        try:
            generation = await service.generate(
                "What does TMEP section 1202.01 say about trade dress?"
            )
        finally:
            await service.close()

        assert generation.text.strip()
        html = render_markdown(generation.text)
        assert html.strip()
        # Grounding is at the model's discretion; every kept source must be a URL
        for source in extract_sources(generation.citations):
            assert source.uri.startswith("http")

    @pytest.mark.asyncio
    async def test_bad_key_is_request_error(self):
        from app.services.llm import LLMRequestError

        service = LLMService(
            api_key="sk-invalid",
            model=settings.openai_model,
            instructions=settings.system_instruction,
        )
        service.initialize()
        try:
            with pytest.raises(LLMRequestError) as exc:
                await service.generate("What is a specimen?")
        finally:
            await service.close()

        assert exc.value.kind == "api_error"


@skip_no_openai
@pytest.mark.asyncio
async def test_end_to_end_query():
    """Test the full HTTP flow with the real LLM."""
    from app.main import create_app

    service = make_service()
    app = create_app(llm_service=service)
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test", timeout=120) as client:
            response = await client.post(
                "/api/query",
                json={"query": "What constitutes a merely descriptive mark?"},
            )
    finally:
        await service.close()

    assert response.status_code == 200
    data = response.json()
    assert data["response_html"]
