"""Hypermedia navigation over a session graph.

``Navigator`` executes the user-facing actions against one
``SessionGraph``: starting a session, following a relation, jumping back
to an earlier position, fetching relation documentation and exporting the
recorded walk.  It owns no persistence; callers load the graph before an
action and save it afterwards.

A ``follow`` either completes and appends exactly one position and one
transition, or fails and leaves the graph untouched.

Classes
-------
- FollowResult  — the position and transition recorded by ``follow``
- Navigator     — action facade over a SessionGraph and an HttpCapability
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from hal_walk.client.http import HttpCapability, HttpResult
from hal_walk.errors import NotFoundError, UpstreamError, ValidationError
from hal_walk.export.mermaid import render_mermaid
from hal_walk.export.path_spec import PathExporter, PathSpec
from hal_walk.navigation.curie import expand_curie, extract_curies, find_link, list_relations
from hal_walk.navigation.template import expand_template, resolve_url
from hal_walk.schema.inference import infer_schema
from hal_walk.schema.validation import SchemaEvaluator, validate
from hal_walk.session.state import Position, SessionGraph, Transition

logger = logging.getLogger(__name__)

FIRST_POSITION_ID = "p1"


def _require_strings(values: dict[str, Any], label: str) -> None:
    """Raise ``ValidationError`` unless every value of ``values`` is a string."""
    violations = [
        (f"/{name}", f"{value!r} is not of type 'string'")
        for name, value in values.items()
        if not isinstance(value, str)
    ]
    if violations:
        raise ValidationError(label, violations)


@dataclass(frozen=True)
class FollowResult:
    """Outcome of a successful ``Navigator.follow``.

    Parameters
    ----------
    position:
        The newly recorded (and now current) position.
    transition:
        The transition that leads to it.
    warnings:
        Non-fatal notices, e.g. that the followed link is deprecated.
    """

    position: Position
    transition: Transition
    warnings: list[str] = field(default_factory=list)


class Navigator:
    """Follow hyperlinks and record the walk in a ``SessionGraph``.

    Parameters
    ----------
    session:
        The graph to read from and append to.
    http:
        Capability used to perform requests.
    evaluator:
        Optional JSON Schema engine; defaults to ``jsonschema``.
    exporter:
        Optional path exporter.
    """

    def __init__(
        self,
        session: SessionGraph,
        http: HttpCapability,
        *,
        evaluator: SchemaEvaluator | None = None,
        exporter: PathExporter | None = None,
    ) -> None:
        self._session = session
        self._http = http
        self._evaluator = evaluator
        self._exporter = exporter or PathExporter()

    @classmethod
    def start(
        cls,
        url: str,
        http: HttpCapability,
        *,
        evaluator: SchemaEvaluator | None = None,
    ) -> "Navigator":
        """Fetch the entry point and return a navigator over a new session.

        Raises
        ------
        UpstreamError
            If the request fails or returns a status >= 400.  No session is
            created in that case.
        """
        result = http.request(url, "GET")
        if result.is_error:
            raise UpstreamError(
                f"HTTP {result.status_code}", url=url, status_code=result.status_code
            )

        first = Position(
            id=FIRST_POSITION_ID,
            url=url,
            method="GET",
            status_code=result.status_code,
            response=result.body,
        )
        session = SessionGraph(
            entry_point=url.rstrip("/"),
            curies=extract_curies(result.body),
            current_position=first.id,
            positions={first.id: first},
        )
        logger.debug("Navigator: started session %s at %s", session.id, url)
        return cls(session, http, evaluator=evaluator)

    @property
    def session(self) -> SessionGraph:
        return self._session

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def position(self) -> Position:
        """Return the current position."""
        return self._session.get_current_position()

    def relations(self) -> list[dict[str, Any]]:
        """Return the relations that can be followed from the current position."""
        return list_relations(self.position().response)

    def render(self) -> str:
        """Return a Mermaid diagram of the session graph."""
        return render_mermaid(self._session)

    def export_path(self, from_id: str | None = None, to_id: str | None = None) -> PathSpec:
        """Export the shortest recorded path between two positions.

        Defaults to the first recorded position and the current position.
        """
        return self._exporter.export_between(self._session, from_id, to_id)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def goto(self, position_id: str) -> Position:
        """Make an earlier position current without recording a transition.

        Raises
        ------
        NotFoundError
            If ``position_id`` is unknown; lists the available ids.
        """
        position = self._session.move_to(position_id)
        logger.debug("Navigator: moved to %s", position_id)
        return position

    def describe(self, relation: str) -> HttpResult:
        """Fetch the documentation of ``relation``.

        CURIE relations are expanded to their documentation URL; anything
        else is treated as a URL, relative to the entry point.

        Raises
        ------
        UpstreamError
            If the documentation cannot be fetched.
        """
        doc_url = resolve_url(
            self._session.entry_point, expand_curie(relation, self._session.curies) or relation
        )
        result = self._http.request(doc_url, "GET")
        if result.is_error:
            raise UpstreamError(
                f"HTTP {result.status_code} fetching {doc_url}",
                url=doc_url,
                status_code=result.status_code,
            )
        return result

    def follow(
        self,
        relation: str,
        *,
        body: Any = None,
        body_schema: dict[str, Any] | None = None,
        uri_template_values: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        header_schema: dict[str, Any] | None = None,
        method: str | None = None,
        note: str | None = None,
    ) -> FollowResult:
        """Follow ``relation`` from the current position and record the step.

        Parameters
        ----------
        relation:
            Relation name, either a literal ``_links`` key or a CURIE that
            expands to the same URL as one.
        body:
            JSON request body.  Implies POST unless ``method`` is given.
        body_schema:
            Schema for ``body``; inferred from ``body`` when omitted.
        uri_template_values:
            Variables for templated links.
        headers:
            Custom request headers.
        header_schema:
            Schema for ``headers``; inferred from ``headers`` when omitted.
        method:
            Explicit HTTP method.
        note:
            Free-text reason recorded on the transition.

        Returns
        -------
        FollowResult

        Raises
        ------
        NotFoundError
            If the relation is not available; lists the available relations.
        ValidationError
            If the body or headers fail their schema, or a template value
            or header value is not a string.  Nothing is sent.
        UpstreamError
            If the transport fails.  Nothing is recorded.
        """
        current = self._session.get_current_position()

        link = find_link(current.response, relation, self._session.curies)
        if link is None:
            raise NotFoundError(
                f'Relation "{relation}" not found at current position',
                availableRelations=[r["relation"] for r in list_relations(current.response)],
            )

        warnings: list[str] = []
        if link.deprecated:
            message = f'Relation "{relation}" is deprecated'
            if link.deprecation:
                message = f"{message}: {link.deprecation}"
            logger.warning(message)
            warnings.append(message)

        if uri_template_values is not None:
            _require_strings(uri_template_values, "uriTemplateValues")

        href = link.href
        if link.templated and uri_template_values:
            href = expand_template(href, uri_template_values)
        url = resolve_url(self._session.entry_point, href)

        if method:
            http_method = method.upper()
        elif body is not None:
            http_method = "POST"
        else:
            http_method = "GET"

        if body is not None:
            body_schema = body_schema if body_schema is not None else infer_schema(body)
            validate(body, body_schema, "body", self._evaluator)
        if headers is not None:
            _require_strings(headers, "headers")
            header_schema =header_schema if header_schema is not None else infer_schema(headers)
            validate(headers, header_schema, "headers", self._evaluator)

        result = self._http.request(url, http_method, body=body, headers=headers)

        position = Position(
            id=self._session.allocate_next_position_id(),
            url=url,
            method=http_method,
            status_code=result.status_code,
            response=result.body,
        )
        transition = Transition(
            id=self._session.allocate_next_transition_id(),
            from_=current.id,
            to=position.id,
            relation=relation,
            method=http_method,
            note=note,
            uri_template_values=uri_template_values,
            body=body,
            body_schema=body_schema if body is not None else None,
            headers=headers,
            header_schema=header_schema if headers is not None else None,
        )
        self._session.add_position(position)
        self._session.add_transition(transition)
        logger.debug(
            "Navigator: %s --%s/%s--> %s (HTTP %d)",
            current.id,
            relation,
            http_method,
            position.id,
            result.status_code,
        )
        return FollowResult(position=position, transition=transition, warnings=warnings)
