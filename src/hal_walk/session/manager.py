"""Session lifecycle management.

Provides ``SessionManager``, the facade that loads and saves session
graphs through a pluggable storage backend.  Each invocation of the tool
loads a session, performs one action on it, and saves it again.

Classes
-------
- SessionManager        — save/load/list/delete over a StorageBackend
- SessionNotFoundError  — raised for unknown session keys
"""
from __future__ import annotations

import logging

from hal_walk.errors import NotFoundError
from hal_walk.session.serializer import SessionSerializer
from hal_walk.session.state import SessionGraph
from hal_walk.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class SessionNotFoundError(NotFoundError):
    """Raised when a requested session does not exist in the backend."""

    def __init__(self, session_key: str) -> None:
        self.session_key = session_key
        super().__init__(f"Session {session_key!r} not found.", session=session_key)


class SessionManager:
    """Save, load, list, and delete session graphs.

    Parameters
    ----------
    backend:
        The storage backend to use for persistence.
    serializer:
        Optional custom serializer.
    """

    def __init__(
        self,
        backend: StorageBackend,
        serializer: SessionSerializer | None = None,
    ) -> None:
        self._backend = backend
        self._serializer = serializer or SessionSerializer()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save_session(self, key: str, session: SessionGraph) -> str:
        """Persist ``session`` under ``key`` and return the key."""
        raw = self._serializer.to_json(session)
        self._backend.save(key, raw)
        logger.debug(
            "SessionManager: saved session %r (%d positions, %d transitions)",
            key,
            len(session.positions),
            len(session.transitions),
        )
        return key

    def load_session(self, key: str) -> SessionGraph:
        """Load and return the session stored under ``key``.

        Raises
        ------
        SessionNotFoundError
            If nothing is stored under ``key``.
        SessionFormatError
            If the stored document is not a valid session graph.
        """
        if not self._backend.exists(key):
            raise SessionNotFoundError(key)
        raw = self._backend.load(key)
        session = self._serializer.from_json(raw)
        logger.debug("SessionManager: loaded session %r at %s", key, session.current_position)
        return session

    def delete_session(self, key: str) -> None:
        """Remove the session stored under ``key``.

        Raises
        ------
        SessionNotFoundError
            If nothing is stored under ``key``.
        """
        if not self._backend.exists(key):
            raise SessionNotFoundError(key)
        self._backend.delete(key)

    def session_exists(self, key: str) -> bool:
        """Return True if a session is stored under ``key``."""
        return self._backend.exists(key)

    def list_sessions(self) -> list[str]:
        """Return the sorted keys of all stored sessions."""
        return sorted(self._backend.list())
