"""Filesystem storage backend.

Persists each session as an individual JSON file under a directory.  The
key ``walk`` maps to ``<storage_dir>/walk.json``; a key that already ends
in ``.json`` is used as the file name unchanged.

Classes
-------
- FilesystemBackend  — JSON-file-per-session storage
"""
from __future__ import annotations

import os
from pathlib import Path

from hal_walk.storage.base import StorageBackend

_FILE_EXTENSION = ".json"


class FilesystemBackend(StorageBackend):
    """Stores sessions as individual JSON files.

    Parameters
    ----------
    storage_dir:
        Directory holding session files.  Defaults to the current working
        directory.  Created on first save if absent.
    """

    def __init__(self, storage_dir: str | Path | None = None) -> None:
        self._storage_dir: Path = Path(storage_dir) if storage_dir is not None else Path.cwd()

    @property
    def storage_dir(self) -> Path:
        return self._storage_dir

    def path_for(self, key: str) -> Path:
        """Return the file path used for ``key``."""
        # Guard against path traversal.
        safe_name = os.path.basename(key)
        if not safe_name.endswith(_FILE_EXTENSION):
            safe_name = f"{safe_name}{_FILE_EXTENSION}"
        return self._storage_dir / safe_name

    # ------------------------------------------------------------------
    # StorageBackend interface
    # ------------------------------------------------------------------

    def save(self, key: str, payload: str) -> None:
        """Write ``payload`` to the file for ``key``, creating the directory if needed."""
        self._storage_dir.mkdir(parents=True, exist_ok=True)
        self.path_for(key).write_text(payload, encoding="utf-8")

    def load(self, key: str) -> str:
        """Read and return the payload for ``key``.

        Raises
        ------
        KeyError
            If the file does not exist.
        """
        path = self.path_for(key)
        if not path.exists():
            raise KeyError(f"Session {key!r} not found at {path}")
        return path.read_text(encoding="utf-8")

    def list(self) -> list[str]:
        """Return keys derived from the ``*.json`` file stems in the directory."""
        if not self._storage_dir.exists():
            return []
        return [
            path.stem
            for path in self._storage_dir.glob(f"*{_FILE_EXTENSION}")
            if path.is_file()
        ]

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        if not path.exists():
            raise KeyError(f"Session {key!r} not found at {path}")
        path.unlink()

    def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

    def __repr__(self) -> str:
        return f"FilesystemBackend(storage_dir={str(self._storage_dir)!r})"
