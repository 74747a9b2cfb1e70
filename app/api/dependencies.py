"""FastAPI dependencies resolving the caller's query session from its cookie."""

from fastapi import Request, Response

from app.core.session import QuerySession
from app.core.session_store import SessionStore


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


async def get_session(request: Request) -> QuerySession:
    """Resolve the caller's session from its cookie, creating one if unknown."""
    cookie_name = request.app.state.settings.session_cookie_name
    current_id = request.cookies.get(cookie_name)
    session_id, session = get_session_store(request).get_or_create(current_id)
    if session_id != current_id:
        request.state.new_session_id = session_id
    return session


def attach_session_cookie(request: Request, response: Response) -> Response:
    """Set the session cookie on ``response`` if this request started a new session."""
    session_id = getattr(request.state, "new_session_id", None)
    if session_id:
        response.set_cookie(
            request.app.state.settings.session_cookie_name,
            session_id,
            httponly=True,
            samesite="lax",
        )
    return response
