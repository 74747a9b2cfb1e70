"""JSON API routes for the query service."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api.dependencies import attach_session_cookie, get_session
from app.api.schemas import (
    ErrorResponse,
    HealthResponse,
    QueryRequest,
    QueryResponse,
    SessionResponse,
    SourceModel,
    StatsResponse,
)
from app.core.session import QuerySession, SessionBusyError, Success

logger = logging.getLogger(__name__)

router = APIRouter()


def _sources(session: QuerySession) -> list[SourceModel]:
    return [SourceModel(uri=s.uri, title=s.title) for s in session.sources]


@router.post(
    "/api/query",
    response_model=QueryResponse,
    responses={
        409: {"model": ErrorResponse, "description": "A request is already in progress"},
        422: {"description": "Empty or whitespace-only query"},
        502: {"model": ErrorResponse, "description": "LLM request failed"},
    },
)
async def query(
    body: QueryRequest,
    request: Request,
    session: QuerySession = Depends(get_session),
) -> JSONResponse:
    """
    Submit a question.

    Calls the LLM with web search enabled and returns the answer rendered as
    HTML together with the web sources it was grounded on.
    """
    try:
        state = await session.submit(body.query)
    except SessionBusyError as e:
        logger.warning(f"Rejected query while busy: {e}")
        response = JSONResponse(status_code=409, content=ErrorResponse(error=str(e)).model_dump())
        return attach_session_cookie(request, response)

    if isinstance(state, Success):
        payload = QueryResponse(
            query=state.query,
            response_html=state.response_html,
            sources=_sources(session),
        )
        response = JSONResponse(content=payload.model_dump())
    else:
        response = JSONResponse(
            status_code=502,
            content=ErrorResponse(error=session.error).model_dump(),
        )
    return attach_session_cookie(request, response)


@router.get("/api/session", response_model=SessionResponse)
async def session_state(
    request: Request,
    session: QuerySession = Depends(get_session),
) -> JSONResponse:
    """Return the caller's current session state."""
    payload = SessionResponse(
        state=session.state.name,
        query=session.query,
        loading=session.loading,
        response_html=session.response_html,
        sources=_sources(session),
        error=session.error,
    )
    return attach_session_cookie(request, JSONResponse(content=payload.model_dump()))


@router.get("/api/stats", response_model=StatsResponse)
async def stats(request: Request) -> StatsResponse:
    """Query statistics."""
    return StatsResponse(**request.app.state.metrics.get_stats())


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok")
