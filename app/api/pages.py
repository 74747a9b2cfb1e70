"""Browser UI routes rendering the question page from the session state."""

from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api.dependencies import attach_session_cookie, get_session
from app.core.session import QuerySession, SessionBusyError

# Browser UI, kept separate from the JSON API routes.
router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def render_page(request: Request, session: QuerySession, status_code: int = 200) -> HTMLResponse:
    """Render the page for the session's current state."""
    settings = request.app.state.settings
    response = templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": settings.app_title,
            "tagline": settings.app_tagline,
            "state": session.state.name,
            "query": session.query,
            "loading": session.loading,
            "response_html": session.response_html,
            "sources": session.sources,
            "error": session.error,
        },
        status_code=status_code,
    )
    return attach_session_cookie(request, response)


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, session: QuerySession = Depends(get_session)) -> HTMLResponse:
    return render_page(request, session)


@router.post("/", response_class=HTMLResponse)
async def ask(
    request: Request,
    query: str = Form(""),
    session: QuerySession = Depends(get_session),
) -> HTMLResponse:
    """Handle the question form. Blank submissions re-render the page untouched."""
    try:
        await session.submit(query)
    except SessionBusyError:
        return render_page(request, session, status_code=409)
    return render_page(request, session)
