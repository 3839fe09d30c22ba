"""Exports of a session graph: replayable path specs and Mermaid diagrams.

Public surface
--------------
- PathExporter   — position path -> PathSpec
- PathSpec       — exported document {name, description, entryPoint, steps}
- PathStep       — one start/follow step
- StepInput      — recorded inputs of a follow step
- render_mermaid — ``graph LR`` diagram text
"""
from __future__ import annotations

from hal_walk.export.mermaid import render_mermaid
from hal_walk.export.path_spec import PathExporter, PathSpec, PathStep, StepInput

__all__ = ["PathExporter", "PathSpec", "PathStep", "StepInput", "render_mermaid"]
