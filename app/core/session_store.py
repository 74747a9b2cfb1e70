"""
In-memory session store. Keyed by the session id cookie; nothing is persisted.
"""

import logging
import secrets
from collections import OrderedDict
from typing import Callable

from app.core.session import QuerySession

logger = logging.getLogger(__name__)


class SessionStore:
    """Bounded LRU mapping of session id -> QuerySession."""

    def __init__(self, factory: Callable[[], QuerySession], max_sessions: int = 1000):
        self._factory = factory
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, QuerySession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get_or_create(self, session_id: str | None) -> tuple[str, QuerySession]:
        """Return the session for ``session_id``, creating a fresh one if unknown."""
        if session_id and session_id in self._sessions:
            self._sessions.move_to_end(session_id)
            return session_id, self._sessions[session_id]

        new_id = secrets.token_urlsafe(16)
        session = self._factory()
        self._sessions[new_id] = session
        logger.info(f"Created session {new_id[:8]} ({len(self._sessions)} active)")
        self._evict(keep=new_id)
        return new_id, session

    def _evict(self, keep: str) -> None:
        while len(self._sessions) > self.max_sessions:
            for session_id, session in self._sessions.items():
                # Sessions with a request in flight are never evicted
                if session_id != keep and not session.loading:
                    del self._sessions[session_id]
                    logger.debug(f"Evicted session {session_id[:8]}")
                    break
            else:
                return
