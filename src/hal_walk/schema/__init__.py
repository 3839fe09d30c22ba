"""JSON Schema inference and validation of request data."""
from __future__ import annotations

from hal_walk.schema.inference import infer_schema
from hal_walk.schema.validation import JsonSchemaEvaluator, SchemaEvaluator, validate

__all__ = ["JsonSchemaEvaluator", "SchemaEvaluator", "infer_schema", "validate"]
