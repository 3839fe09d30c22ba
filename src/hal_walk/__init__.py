"""hal-walk — explore HAL APIs by following links, and record the walk.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import hal_walk
>>> hal_walk.__version__
'0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

# Errors
from hal_walk.errors import HalWalkError, NotFoundError, UpstreamError, ValidationError

# Session core
from hal_walk.session.state import CurieDefinition, Link, Position, SessionGraph, Transition
from hal_walk.session.manager import SessionManager, SessionNotFoundError
from hal_walk.session.serializer import SessionFormatError, SessionSerializer

# Storage backends
from hal_walk.storage.base import StorageBackend
from hal_walk.storage.memory import InMemoryBackend
from hal_walk.storage.filesystem import FilesystemBackend

# Navigation
from hal_walk.navigation.curie import expand_curie, extract_curies, find_link, list_relations
from hal_walk.navigation.template import expand_template, resolve_url
from hal_walk.navigation.navigator import FollowResult, Navigator

# Schemas
from hal_walk.schema.inference import infer_schema
from hal_walk.schema.validation import JsonSchemaEvaluator, SchemaEvaluator, validate

# HTTP
from hal_walk.client.http import ClientConfig, HalClient, HttpCapability, HttpResult

# Export
from hal_walk.export.path_spec import PathExporter, PathSpec, PathStep, StepInput
from hal_walk.export.mermaid import render_mermaid

# Convenience
from hal_walk.convenience import Walk

__all__ = [
    "__version__",
    # Errors
    "HalWalkError",
    "NotFoundError",
    "UpstreamError",
    "ValidationError",
    # Session core
    "CurieDefinition",
    "Link",
    "Position",
    "SessionFormatError",
    "SessionGraph",
    "SessionManager",
    "SessionNotFoundError",
    "SessionSerializer",
    "Transition",
    # Storage
    "FilesystemBackend",
    "InMemoryBackend",
    "StorageBackend",
    # Navigation
    "FollowResult",
    "Navigator",
    "expand_curie",
    "expand_template",
    "extract_curies",
    "find_link",
    "list_relations",
    "resolve_url",
    # Schemas
    "JsonSchemaEvaluator",
    "SchemaEvaluator",
    "infer_schema",
    "validate",
    # HTTP
    "ClientConfig",
    "HalClient",
    "HttpCapability",
    "HttpResult",
    # Export
    "PathExporter",
    "PathSpec",
    "PathStep",
    "StepInput",
    "render_mermaid",
    # Convenience
    "Walk",
]
