"""Convenience API for hal-walk — quickstart in three lines.

Example
-------
::

    from hal_walk import Walk
    walk = Walk("https://api.example.com/")
    walk.follow("next")
    print(walk.export())

"""
from __future__ import annotations

from typing import Any

from hal_walk.client.http import ClientConfig, HalClient, HttpCapability
from hal_walk.navigation.navigator import Navigator
from hal_walk.session.manager import SessionManager
from hal_walk.session.state import Position, SessionGraph
from hal_walk.storage.base import StorageBackend
from hal_walk.storage.memory import InMemoryBackend


class Walk:
    """Zero-config navigator for interactive use.

    Fetches the entry point immediately.  Sessions are kept in memory
    unless a backend is passed to ``save``.

    Parameters
    ----------
    url:
        Entry point of the API.
    http:
        Optional HTTP capability; defaults to a ``HalClient``.
    config:
        Settings for the default ``HalClient``.
    """

    def __init__(
        self,
        url: str,
        *,
        http: HttpCapability | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        self._own_client: HalClient | None = None if http is not None else HalClient(config)
        self._http: HttpCapability = http or self._own_client
        self._navigator = Navigator.start(url, self._http)
        self._backend: StorageBackend = InMemoryBackend()

    @classmethod
    def resume(
        cls,
        key: str,
        backend: StorageBackend,
        *,
        http: HttpCapability | None = None,
    ) -> "Walk":
        """Load the session saved under ``key`` and continue walking it."""
        walk = cls.__new__(cls)
        walk._own_client = None if http is not None else HalClient()
        walk._http = http or walk._own_client
        walk._navigator = Navigator(SessionManager(backend).load_session(key), walk._http)
        walk._backend = backend
        return walk

    @property
    def session(self) -> SessionGraph:
        return self._navigator.session

    @property
    def session_id(self) -> str:
        return self._navigator.session.id

    @property
    def position(self) -> Position:
        return self._navigator.position()

    def relations(self) -> list[str]:
        """Names of the relations available at the current position."""
        return [entry["relation"] for entry in self._navigator.relations()]

    def follow(self, relation: str, **options: Any) -> Position:
        """Follow ``relation`` and return the new position.

        Keyword options are those of ``Navigator.follow``.
        """
        return self._navigator.follow(relation, **options).position

    def goto(self, position_id: str) -> Position:
        return self._navigator.goto(position_id)

    def export(self, from_id: str | None = None, to_id: str | None = None) -> dict[str, Any]:
        """Return the path-spec document for the walk so far."""
        return self._navigator.export_path(from_id, to_id).to_document()

    def save(self, key: str | None = None, backend: StorageBackend | None = None) -> str:
        """Persist the session and return the key it was saved under.

        Defaults to the session id as key and the walk's own backend.
        """
        if backend is not None:
            self._backend = backend
        return SessionManager(self._backend).save_session(key or self.session_id, self.session)

    def close(self) -> None:
        """Release the HTTP client if this walk created it."""
        if self._own_client is not None:
            self._own_client.close()

    def __enter__(self) -> "Walk":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Walk(entry_point={self.session.entry_point!r}, "
            f"position={self.session.current_position!r}, "
            f"positions={len(self.session.positions)})"
        )
