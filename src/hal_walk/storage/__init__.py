"""Storage backends for persisted session documents.

Public surface
--------------
- StorageBackend     — abstract base
- InMemoryBackend    — dict-backed, ephemeral
- FilesystemBackend  — one JSON file per session
"""
from __future__ import annotations

from hal_walk.storage.base import StorageBackend
from hal_walk.storage.filesystem import FilesystemBackend
from hal_walk.storage.memory import InMemoryBackend

__all__ = ["FilesystemBackend", "InMemoryBackend", "StorageBackend"]
