"""Session graph subpackage.

Public surface
--------------
- SessionGraph       — positions, transitions, current-position pointer
- Position           — one fetched resource
- Transition         — one navigation action
- CurieDefinition    — registered compact-URI prefix
- Link               — HAL link object
- SessionManager     — save / load / list / delete sessions
- SessionSerializer  — JSON/YAML round-trip of the session document
"""
from __future__ import annotations

from hal_walk.session.state import CurieDefinition, Link, Position, SessionGraph, Transition
from hal_walk.session.manager import SessionManager, SessionNotFoundError
from hal_walk.session.serializer import SessionFormatError, SessionSerializer

__all__ = [
    "CurieDefinition",
    "Link",
    "Position",
    "SessionFormatError",
    "SessionGraph",
    "SessionManager",
    "SessionNotFoundError",
    "SessionSerializer",
    "Transition",
]
