"""Validation of request data against JSON Schema.

Structural evaluation is delegated to a ``SchemaEvaluator``; this module
only turns the evaluator's findings into a single ``ValidationError``
report.  The default evaluator uses the ``jsonschema`` package, but any
engine that yields ``(path, message)`` pairs can be substituted.

Classes
-------
- SchemaEvaluator     — protocol for pluggable JSON Schema engines
- JsonSchemaEvaluator — evaluator backed by ``jsonschema``
"""
from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol

import jsonschema

from hal_walk.errors import ValidationError


class SchemaEvaluator(Protocol):
    """Anything that can list the violations of ``data`` against ``schema``."""

    def iter_violations(self, data: Any, schema: dict[str, Any]) -> Iterator[tuple[str, str]]:
        """Yield ``(instance_path, message)`` for every violation."""
        ...


class JsonSchemaEvaluator:
    """``SchemaEvaluator`` backed by the ``jsonschema`` package.

    The validator class is chosen from the schema's ``$schema`` keyword,
    falling back to Draft 7.  All errors are reported, not only the first.
    """

    def __init__(self, default_validator: type[Any] = jsonschema.Draft7Validator) -> None:
        self._default_validator = default_validator

    def iter_violations(self, data: Any, schema: dict[str, Any]) -> Iterator[tuple[str, str]]:
        validator_cls = jsonschema.validators.validator_for(schema, default=self._default_validator)
        validator_cls.check_schema(schema)
        validator = validator_cls(schema)
        for error in validator.iter_errors(data):
            yield _instance_path(error.absolute_path), error.message


def _instance_path(path: Any) -> str:
    parts = [str(part) for part in path]
    return "/" + "/".join(parts) if parts else "/"


_default_evaluator = JsonSchemaEvaluator()


def validate(
    data: Any,
    schema: dict[str, Any],
    label: str = "body",
    evaluator: SchemaEvaluator | None = None,
) -> None:
    """Check ``data`` against ``schema``.

    Parameters
    ----------
    data:
        The value to check.
    schema:
        A JSON Schema document.
    label:
        ``"body"`` or ``"headers"``; prefixes the error report.
    evaluator:
        Engine to use.  Defaults to ``JsonSchemaEvaluator``.

    Raises
    ------
    ValidationError
        Listing every violation as ``<path> <message>``, joined by ``; ``.
        An invalid ``schema`` is reported the same way.
    """
    engine = evaluator or _default_evaluator
    try:
        violations = list(engine.iter_violations(data, schema))
    except jsonschema.SchemaError as exc:
        raise ValidationError(label, [("/", f"schema is invalid: {exc.message}")]) from exc
    if violations:
        raise ValidationError(label, violations)
