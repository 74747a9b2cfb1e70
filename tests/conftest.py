"""Pytest fixtures for TMEP assistant tests."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.services.llm import Generation
from app.services.metrics import metrics


@pytest.fixture(autouse=True)
def reset_metrics():
    """Global metrics are shared between apps; start every test from zero."""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def test_settings():
    """Settings that never read a real key."""
    return Settings(openai_api_key="", _env_file=None)


@pytest.fixture
def markdown_answer():
    """Markdown answer text as the LLM would return it."""
    return "See [TMEP §1202.01](https://tmep.uspto.gov/x) for details."


@pytest.fixture
def web_citations():
    """Citation annotations: two web references and one non-web entry."""
    return [
        SimpleNamespace(type="url_citation", url="https://a", title="A"),
        SimpleNamespace(type="file_citation", file_id="file-1"),
        SimpleNamespace(type="url_citation", url="https://b", title=""),
    ]


@pytest.fixture
def mock_llm_service(markdown_answer, web_citations):
    """Mock LLM service to avoid real API calls."""
    mock = MagicMock()
    mock.client = MagicMock()
    mock.initialize = MagicMock()
    mock.close = AsyncMock()
    mock.generate = AsyncMock(
        return_value=Generation(text=markdown_answer, citations=web_citations)
    )
    return mock


@pytest.fixture
def test_app(test_settings, mock_llm_service):
    """Application wired to the mock LLM service."""
    from app.main import create_app

    return create_app(settings=test_settings, llm_service=mock_llm_service)


@pytest.fixture
async def client(test_app):
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def make_response():
    """Factory for objects shaped like an OpenAI Responses API result."""

    def _make(text: str, annotations: list | None = None):
        web_search_call = SimpleNamespace(type="web_search_call", id="ws_1", status="completed")
        message = SimpleNamespace(
            type="message",
            content=[
                SimpleNamespace(type="output_text", text=text, annotations=annotations or []),
            ],
        )
        return SimpleNamespace(output=[web_search_call, message])

    return _make
