"""Relation resolution for HAL documents.

A HAL document keeps its links under ``_links``.  Each entry is a single
link object, an array of link objects, or (only under ``curies``) an array
of CURIE definitions.  Array-valued entries are never resolved
automatically.

Functions
---------
- extract_curies  — read the CURIE definitions of a document
- expand_curie    — expand ``prefix:reference`` to a full URL
- find_link       — resolve a relation to a ``Link``
- list_relations  — describe every followable relation
"""
from __future__ import annotations

from typing import Any

import pydantic

from hal_walk.session.state import CurieDefinition, Link

LINKS_KEY = "_links"
_RESERVED_RELATIONS = frozenset({"curies", "self"})


def _links_of(document: Any) -> dict[str, Any]:
    if not isinstance(document, dict):
        return {}
    links = document.get(LINKS_KEY)
    return links if isinstance(links, dict) else {}


def _as_link(value: Any) -> Link | None:
    """Return ``value`` as a ``Link`` if it is a single well-formed link object."""
    if not isinstance(value, dict):
        return None
    try:
        return Link.model_validate(value)
    except pydantic.ValidationError:
        return None


def extract_curies(document: Any) -> list[CurieDefinition]:
    """Return the CURIE definitions under ``_links.curies``.

    Missing or malformed collections yield an empty list; malformed
    entries inside a well-formed collection are skipped.
    """
    raw = _links_of(document).get("curies")
    if not isinstance(raw, list):
        return []
    curies: list[CurieDefinition] = []
    for entry in raw:
        try:
            curies.append(CurieDefinition.model_validate(entry))
        except pydantic.ValidationError:
            continue
    return curies


def expand_curie(candidate: str, curies: list[CurieDefinition]) -> str | None:
    """Expand a compact relation such as ``"wiki:pages"`` to its full URL.

    The candidate is split at its first colon and the reference is
    substituted for the literal ``{rel}`` placeholder of the matching
    definition.

    Returns
    -------
    str | None
        The expanded URL, or None when ``candidate`` has no colon or its
        prefix is not a registered CURIE.
    """
    prefix, colon, reference = candidate.partition(":")
    if not colon:
        return None
    for curie in curies:
        if curie.name == prefix:
            return curie.href.replace("{rel}", reference, 1)
    return None


def find_link(document: Any, relation: str, curies: list[CurieDefinition]) -> Link | None:
    """Resolve ``relation`` to a single link object of ``document``.

    A direct key match wins.  Otherwise ``relation`` is expanded as a
    CURIE and compared with the expansion of every other key, so that
    ``"a:widgets"`` finds a link stored as ``"b:widgets"`` when both
    prefixes expand to the same URL.

    Returns
    -------
    Link | None
        The matching link, or None when nothing matches.
    """
    links = _links_of(document)

    direct = _as_link(links.get(relation))
    if direct is not None:
        return direct

    canonical = expand_curie(relation, curies)
    if canonical is None:
        return None

    for key, value in links.items():
        if key in _RESERVED_RELATIONS:
            continue
        if expand_curie(key, curies) != canonical:
            continue
        link = _as_link(value)
        if link is not None:
            return link
    return None


def list_relations(document: Any) -> list[dict[str, Any]]:
    """Describe each followable relation of ``document``.

    ``self``, ``curies`` and array-valued entries are left out.  Each
    entry has ``relation`` and ``href`` plus ``title``, ``templated`` and
    ``deprecated`` when the link sets them.
    """
    relations: list[dict[str, Any]] = []
    for key, value in _links_of(document).items():
        if key in _RESERVED_RELATIONS:
            continue
        link = _as_link(value)
        if link is None:
            continue
        entry: dict[str, Any] = {"relation": key, "href": link.href}
        if link.title is not None:
            entry["title"] = link.title
        if link.templated is not None:
            entry["templated"] = link.templated
        if link.deprecated:
            entry["deprecated"] = True
        relations.append(entry)
    return relations
