"""Session serialization.

Supports JSON and YAML round-trips of the persisted session document:
``{id, startedAt, entryPoint, curies, currentPosition, positions,
transitions}``.  Optional fields that are absent stay absent, so loading
and dumping a document does not change its shape.

Classes
-------
- SessionSerializer  — serialize/deserialize SessionGraph to JSON or YAML
"""
from __future__ import annotations

import json
from typing import Any, Literal

import pydantic
import yaml

from hal_walk.session.state import SessionGraph


class SessionFormatError(ValueError):
    """Raised when a stored document is not a valid session graph."""


class SessionSerializer:
    """Serialize and deserialize ``SessionGraph`` objects."""

    # ------------------------------------------------------------------
    # Document form
    # ------------------------------------------------------------------

    def to_document(self, session: SessionGraph) -> dict[str, Any]:
        """Return the camelCase, JSON-compatible document for ``session``.

        Absent optional fields are left out.  ``response`` is always
        written, since a ``null`` response body is recorded data.
        """
        document = session.model_dump(mode="json", by_alias=True, exclude_none=True)
        for position_id, position in session.positions.items():
            document["positions"][position_id]["response"] = position.response
        return document

    def from_document(self, data: dict[str, Any]) -> SessionGraph:
        """Validate ``data`` and return the reconstructed session.

        Raises
        ------
        SessionFormatError
            If ``data`` does not describe a valid session graph.
        """
        try:
            return SessionGraph.model_validate(data)
        except pydantic.ValidationError as exc:
            raise SessionFormatError(f"Invalid session document: {exc}") from exc

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def to_json(self, session: SessionGraph, *, indent: int = 2) -> str:
        """Serialise a ``SessionGraph`` to a JSON string."""
        return json.dumps(self.to_document(session), indent=indent)

    def from_json(self, raw: str) -> SessionGraph:
        """Deserialize a ``SessionGraph`` from a JSON string.

        Raises
        ------
        SessionFormatError
            If ``raw`` is not valid JSON or not a valid session document.
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SessionFormatError(f"Session file is not valid JSON: {exc}") from exc
        return self.from_document(data)

    # ------------------------------------------------------------------
    # YAML
    # ------------------------------------------------------------------

    def to_yaml(self, session: SessionGraph) -> str:
        """Serialise a ``SessionGraph`` to a YAML string."""
        return yaml.safe_dump(
            self.to_document(session), default_flow_style=False, allow_unicode=True, sort_keys=False
        )

    def from_yaml(self, raw: str) -> SessionGraph:
        """Deserialize a ``SessionGraph`` from a YAML string."""
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise SessionFormatError(f"Session file is not valid YAML: {exc}") from exc
        return self.from_document(data)

    # ------------------------------------------------------------------
    # Format dispatch
    # ------------------------------------------------------------------

    def serialize(
        self, session: SessionGraph, format: Literal["json", "yaml"] = "json"
    ) -> str:
        """Serialize using the named format."""
        if format == "yaml":
            return self.to_yaml(session)
        return self.to_json(session)

    def deserialize(
        self, raw: str, format: Literal["json", "yaml"] = "json"
    ) -> SessionGraph:
        """Deserialize using the named format."""
        if format == "yaml":
            return self.from_yaml(raw)
        return self.from_json(raw)
