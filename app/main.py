"""FastAPI application entry point with lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.pages import router as pages_router
from app.api.routes import router
from app.config import Settings, settings as default_settings
from app.core.session import QuerySession
from app.core.session_store import SessionStore
from app.services.llm import LLMService
from app.services.metrics import metrics

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
for _name in ("httpx", "openai"):
    logging.getLogger(_name).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    llm_service: LLMService | None = None,
) -> FastAPI:
    """Build the application; the LLM service is created from settings unless given."""
    settings = settings or default_settings
    llm_service = llm_service or LLMService(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        instructions=settings.system_instruction,
        web_search_tool=settings.web_search_tool,
        timeout=settings.openai_timeout,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application startup and shutdown."""
        logger.info("Starting TMEP assistant...")
        llm_service.initialize()
        logger.info(f"LLM service initialized (model: {settings.openai_model})")

        yield

        logger.info("Shutting down TMEP assistant...")
        await llm_service.close()
        logger.info("TMEP assistant stopped")

    app = FastAPI(
        title=settings.app_title,
        description="Grounded question answering over the Trademark Manual of Examining Procedure",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.llm_service = llm_service
    app.state.metrics = metrics
    app.state.session_store = SessionStore(
        factory=lambda: QuerySession(
            llm_service,
            sanitize_html=settings.sanitize_html,
            metrics=metrics,
        ),
        max_sessions=settings.max_sessions,
    )

    app.include_router(router)
    app.include_router(pages_router)
    return app


app = create_app()
