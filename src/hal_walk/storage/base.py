"""Storage backend interface.

A backend stores the serialized session document as an opaque string
under a key.  ``SessionManager`` does all (de)serialization; backends
never look inside the payload.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Key/payload store used by ``SessionManager``.

    One tool invocation loads a session, acts on it and saves it again.
    Backends do not lock; two invocations on the same key race.
    """

    @abstractmethod
    def save(self, key: str, payload: str) -> None:
        """Store ``payload`` under ``key``, replacing any previous payload."""

    @abstractmethod
    def load(self, key: str) -> str:
        """Return the payload stored under ``key``; ``KeyError`` if there is none."""

    @abstractmethod
    def list(self) -> list[str]:
        """Return every stored key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; ``KeyError`` if there is none."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if ``key`` has a stored payload."""
