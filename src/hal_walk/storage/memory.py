"""In-memory storage backend.

Keeps session documents in a dict for the lifetime of the process.  The
``Walk`` quickstart uses it until a persistent backend is passed to
``save``.
"""
from __future__ import annotations

from hal_walk.storage.base import StorageBackend


class InMemoryBackend(StorageBackend):
    """Ephemeral backend mapping keys to raw session payloads."""

    def __init__(self) -> None:
        self._payloads: dict[str, str] = {}

    def save(self, key: str, payload: str) -> None:
        self._payloads[key] = payload

    def load(self, key: str) -> str:
        if key not in self._payloads:
            raise KeyError(f"No session stored under {key!r}.")
        return self._payloads[key]

    def list(self) -> list[str]:
        """Return stored keys in insertion order."""
        return list(self._payloads)

    def delete(self, key: str) -> None:
        if self._payloads.pop(key, None) is None:
            raise KeyError(f"No session stored under {key!r}.")

    def exists(self, key: str) -> bool:
        return key in self._payloads
