"""Query session controller - one question, one grounded answer, at a time."""

import logging
import time
from dataclasses import dataclass, field

from app.services.llm import LLMRequestError, LLMService
from app.services.metrics import Metrics, metrics as default_metrics
from app.services.rendering import Source, extract_sources, render_markdown

logger = logging.getLogger(__name__)

REQUEST_FAILED_MESSAGE = "An error occurred while fetching the response. Please try again."


@dataclass(frozen=True)
class Idle:
    """Nothing asked yet."""

    name = "idle"


@dataclass(frozen=True)
class Loading:
    """A request for ``query`` is in flight."""

    query: str
    name = "loading"


@dataclass(frozen=True)
class Success:
    """The last request produced an answer."""

    query: str
    response_html: str
    sources: tuple[Source, ...] = field(default_factory=tuple)
    name = "success"


@dataclass(frozen=True)
class Failed:
    """The last request failed; ``error`` is the user-facing message."""

    query: str
    error: str = REQUEST_FAILED_MESSAGE
    name = "failed"


SessionState = Idle | Loading | Success | Failed


class SessionBusyError(Exception):
    """Raised when a query is submitted while another is still in flight."""


class QuerySession:
    """
    Controller for a single browser session.

    Flow:
    1. Ignore blank queries
    2. Enter Loading, dropping the previous answer, sources and error
    3. Call the LLM once
    4. On success: render markdown, keep web sources, enter Success
    5. On any failure: log it, enter Failed with a fixed message
    """

    def __init__(
        self,
        llm: LLMService,
        sanitize_html: bool = True,
        metrics: Metrics | None = None,
    ):
        self._llm = llm
        self._sanitize_html = sanitize_html
        self._metrics = metrics or default_metrics
        self.state: SessionState = Idle()

    @property
    def query(self) -> str:
        return getattr(self.state, "query", "")

    @property
    def loading(self) -> bool:
        return isinstance(self.state, Loading)

    @property
    def response_html(self) -> str:
        return self.state.response_html if isinstance(self.state, Success) else ""

    @property
    def sources(self) -> list[Source]:
        return list(self.state.sources) if isinstance(self.state, Success) else []

    @property
    def error(self) -> str:
        return self.state.error if isinstance(self.state, Failed) else ""

    async def submit(self, query: str) -> SessionState:
        """
        Submit a query and wait for its outcome.

        Args:
            query: Raw user query text

        Returns:
            The session state after the request completed, or the unchanged
            state if the query was blank

        Raises:
            SessionBusyError: If a request is already in flight
        """
        if not query or not query.strip():
            logger.debug("Ignoring blank query")
            return self.state

        if self.loading:
            self._metrics.record_busy()
            raise SessionBusyError("A request is already in progress")

        self.state = Loading(query=query)
        start_time = time.time()
        logger.info(f"Submitting query: {query[:50]}...")

        try:
            generation = await self._llm.generate(query)
            response_html = render_markdown(generation.text, sanitize=self._sanitize_html)
            sources = extract_sources(generation.citations)
        except LLMRequestError as e:
            latency_ms = (time.time() - start_time) * 1000
            self._metrics.record_failure(e.kind, latency_ms)
            logger.error(f"Query failed ({e.kind}): {e}")
            self.state = Failed(query=query)
        except Exception as e:
            latency_ms = (time.time() - start_time) * 1000
            self._metrics.record_failure("internal", latency_ms)
            logger.exception(f"Unexpected error processing query: {e}")
            self.state = Failed(query=query)
        else:
            latency_ms = (time.time() - start_time) * 1000
            self._metrics.record_success(latency_ms, len(sources))
            logger.info(f"Query answered in {latency_ms:.0f}ms with {len(sources)} sources")
            self.state = Success(
                query=query,
                response_html=response_html,
                sources=tuple(sources),
            )

        return self.state
