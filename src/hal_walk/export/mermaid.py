"""Mermaid flowchart rendering of a session graph.

Positions become nodes labelled with their URL path and id; transitions
become edges labelled with relation and method.  The current position is
styled with the ``current`` class.
"""
from __future__ import annotations

from urllib.parse import urlsplit

from hal_walk.session.state import SessionGraph

CURRENT_STYLE = "classDef current fill:#f9f,stroke:#333,stroke-width:3px"


def _escape(text: str) -> str:
    return text.replace('"', "#quot;")


def render_mermaid(session: SessionGraph) -> str:
    """Return a ``graph LR`` Mermaid diagram of ``session``."""
    lines = ["graph LR"]

    for position_id, position in session.positions.items():
        label = _escape(f"{urlsplit(position.url).path or '/'}\\n({position_id})")
        suffix = ":::current" if position_id == session.current_position else ""
        lines.append(f'  {position_id}["{label}"]{suffix}')

    for transition in session.transitions:
        label = _escape(f"{transition.relation}\\n{transition.method}")
        lines.append(f'  {transition.from_} -->|"{label}"| {transition.to}')

    lines.append("")
    lines.append(f"  {CURRENT_STYLE}")
    return "\n".join(lines)
