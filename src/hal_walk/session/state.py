"""Session graph domain models.

All types are Pydantic BaseModel subclasses so the persisted session
document can be validated on load and dumped back losslessly.  Python
attributes are snake_case; the wire format uses camelCase aliases.

Classes
-------
- CurieDefinition — a registered compact-URI prefix
- Link            — a single HAL link object
- Position        — one fetched resource (a node in the graph)
- Transition      — one navigation action (a directed edge)
- SessionGraph    — positions, transitions, and the current-position pointer
"""
from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

from hal_walk.errors import NotFoundError

_POSITION_ID = re.compile(r"^p(\d+)$")
_TRANSITION_ID = re.compile(r"^t(\d+)$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CurieDefinition(BaseModel):
    """A compact-URI prefix registered by the API root.

    Parameters
    ----------
    name:
        The prefix, e.g. ``"wiki"`` for relations like ``"wiki:pages"``.
    href:
        URL template containing the literal placeholder ``{rel}``.
    templated:
        HAL marker; always true for well-formed CURIE definitions.
    """

    name: str
    href: str
    templated: bool = True

    model_config = {"frozen": True}


class Link(BaseModel):
    """A HAL link object.

    Unknown attributes are preserved so that a document can be echoed
    back unchanged.
    """

    href: str
    templated: bool | None = None
    title: str | None = None
    name: str | None = None
    type: str | None = None
    deprecated: bool | None = None
    deprecation: str | None = None

    model_config = {"frozen": True, "extra": "allow"}


class Position(BaseModel):
    """A recorded point in the exploration graph.

    Parameters
    ----------
    id:
        Position identifier, conventionally ``p<n>``.
    url:
        Absolute URL that was fetched.
    method:
        HTTP method used to reach this position.
    status_code:
        HTTP status of the response.
    response:
        The decoded hypermedia document, or raw text for non-JSON bodies.
    timestamp:
        When the response arrived (UTC).
    """

    id: str
    url: str
    method: str = "GET"
    status_code: int
    response: Any
    timestamp: datetime = Field(default_factory=_utcnow)

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @property
    def document(self) -> dict[str, Any]:
        """The response as a hypermedia document; empty for text responses."""
        return self.response if isinstance(self.response, dict) else {}


class Transition(BaseModel):
    """A directed edge recording one navigation action.

    Parameters
    ----------
    id:
        Transition identifier, conventionally ``t<n>``.
    from_:
        Source position id (``from`` on the wire).
    to:
        Target position id.
    relation:
        The link relation that was followed, exactly as requested.
    method:
        HTTP method used.
    note:
        Optional free-text reason for taking this step.
    uri_template_values:
        Variables used to expand a templated link.
    body:
        Request body, any JSON value.
    body_schema:
        JSON Schema the body was validated against.
    headers:
        Custom request headers.
    header_schema:
        JSON Schema the headers were validated against.
    timestamp:
        When the action completed (UTC).
    """

    id: str
    from_: str = Field(alias="from")
    to: str
    relation: str
    method: str
    note: str | None = None
    uri_template_values: dict[str, str] | None = None
    body: Any = None
    body_schema: dict[str, Any] | None = None
    headers: dict[str, str] | None = None
    header_schema: dict[str, Any] | None = None
    timestamp: datetime = Field(default_factory=_utcnow)

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}


class SessionGraph(BaseModel):
    """The full exploration state of one session.

    Positions are states, transitions are directed edges between them, and
    ``current_position`` names the active state.  The graph may contain
    cycles; nothing is ever removed from it.

    Parameters
    ----------
    id:
        Globally unique session identifier.
    started_at:
        When the entry point was first fetched (UTC).
    entry_point:
        Base URL against which relative hrefs are resolved.
    curies:
        CURIE definitions captured from the entry document, in order.
    current_position:
        Id of the active position.
    positions:
        Mapping of position id to ``Position``, in insertion order.
    transitions:
        Append-only log of transitions.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    started_at: datetime = Field(default_factory=_utcnow)
    entry_point: str
    curies: list[CurieDefinition] = Field(default_factory=list)
    current_position: str
    positions: dict[str, Position] = Field(default_factory=dict)
    transitions: list[Transition] = Field(default_factory=list)

    model_config = {"frozen": False, "alias_generator": to_camel, "populate_by_name": True}

    # ------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------

    def get_current_position(self) -> Position:
        """Return the active position.

        Raises
        ------
        NotFoundError
            If the pointer names a position that is not in the graph.
        """
        try:
            return self.positions[self.current_position]
        except KeyError:
            raise NotFoundError(
                f'Position "{self.current_position}" not found',
                availablePositions=self.position_ids(),
            ) from None

    def get_position(self, position_id: str) -> Position:
        """Return the position with ``position_id``.

        Raises
        ------
        NotFoundError
            If no such position exists.
        """
        try:
            return self.positions[position_id]
        except KeyError:
            raise NotFoundError(
                f'Position "{position_id}" not found',
                availablePositions=self.position_ids(),
            ) from None

    def move_to(self, position_id: str) -> Position:
        """Point the session at an existing position without recording a transition."""
        position = self.get_position(position_id)
        self.current_position = position_id
        return position

    def position_ids(self) -> list[str]:
        """Return position ids in insertion order."""
        return list(self.positions)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_position(self, position: Position) -> None:
        """Insert or replace ``position`` by id and make it current."""
        self.positions[position.id] = position
        self.current_position = position.id

    def add_transition(self, transition: Transition) -> None:
        """Append ``transition`` to the log.

        Endpoint existence is not checked; callers add the target position
        first.
        """
        self.transitions.append(transition)

    # ------------------------------------------------------------------
    # Id allocation
    # ------------------------------------------------------------------

    def allocate_next_position_id(self) -> str:
        """Return ``p<n>`` where n is one more than the highest ``p<n>`` id in use.

        Ids that do not follow the ``p<n>`` convention count as 0.
        """
        return _next_id("p", _POSITION_ID, self.positions)

    def allocate_next_transition_id(self) -> str:
        """Return ``t<n>`` where n is one more than the highest ``t<n>`` id in use."""
        return _next_id("t", _TRANSITION_ID, [t.id for t in self.transitions])

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def find_path(self, from_id: str, to_id: str) -> list[str] | None:
        """Breadth-first search for the shortest directed path of position ids.

        Edges are followed only in their recorded direction.  When several
        shortest paths exist, the one discovered first in transition
        insertion order wins; ties are not broken lexicographically.

        Returns
        -------
        list[str] | None
            ``[from_id, ..., to_id]``, ``[from_id]`` when both ids are the
            same, or None when ``to_id`` is unreachable.
        """
        if from_id == to_id:
            return [from_id]

        adjacency: dict[str, list[str]] = {}
        for transition in self.transitions:
            adjacency.setdefault(transition.from_, []).append(transition.to)

        visited = {from_id}
        queue: deque[list[str]] = deque([[from_id]])
        while queue:
            path = queue.popleft()
            for neighbour in adjacency.get(path[-1], []):
                if neighbour in visited:
                    continue
                next_path = [*path, neighbour]
                if neighbour == to_id:
                    return next_path
                visited.add(neighbour)
                queue.append(next_path)
        return None

    def get_transition_between(self, from_id: str, to_id: str) -> Transition | None:
        """Return the first recorded transition from ``from_id`` to ``to_id``."""
        for transition in self.transitions:
            if transition.from_ == from_id and transition.to == to_id:
                return transition
        return None

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def _ensure_pointer_is_valid(self) -> "SessionGraph":
        if self.current_position not in self.positions:
            raise ValueError(
                f"currentPosition {self.current_position!r} does not name a recorded position"
            )
        return self


def _next_id(prefix: str, pattern: re.Pattern[str], existing: Iterable[str]) -> str:
    highest = 0
    for identifier in existing:
        match = pattern.match(identifier)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{prefix}{highest + 1}"
