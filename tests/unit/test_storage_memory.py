"""Unit tests for hal_walk.storage.memory."""
from __future__ import annotations

import pytest

from hal_walk.storage.memory import InMemoryBackend


@pytest.fixture()
def backend() -> InMemoryBackend:
    return InMemoryBackend()


class TestInMemoryBackend:
    def test_save_and_load(self, backend: InMemoryBackend) -> None:
        backend.save("k", "payload")
        assert backend.load("k") == "payload"

    def test_save_overwrites(self, backend: InMemoryBackend) -> None:
        backend.save("k", "one")
        backend.save("k", "two")
        assert backend.load("k") == "two"
        assert backend.list() == ["k"]

    def test_load_missing_raises_key_error(self, backend: InMemoryBackend) -> None:
        with pytest.raises(KeyError):
            backend.load("missing")

    def test_list_keeps_insertion_order(self, backend: InMemoryBackend) -> None:
        backend.save("b", "2")
        backend.save("a", "1")
        assert backend.list() == ["b", "a"]

    def test_delete(self, backend: InMemoryBackend) -> None:
        backend.save("a", "1")
        backend.delete("a")
        assert not backend.exists("a")

    def test_delete_missing_raises_key_error(self, backend: InMemoryBackend) -> None:
        with pytest.raises(KeyError):
            backend.delete("a")
