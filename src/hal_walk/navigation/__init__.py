"""Hypermedia navigation: relation resolution, URI templates, and the navigator."""
from __future__ import annotations

from hal_walk.navigation.curie import expand_curie, extract_curies, find_link, list_relations
from hal_walk.navigation.navigator import FollowResult, Navigator
from hal_walk.navigation.template import expand_template, resolve_url

__all__ = [
    "FollowResult",
    "Navigator",
    "expand_curie",
    "expand_template",
    "extract_curies",
    "find_link",
    "list_relations",
    "resolve_url",
]
