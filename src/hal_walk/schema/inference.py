"""JSON Schema inference from a single example value.

A single example cannot reveal which object keys are optional, so every
observed key is marked required.  Arrays take their item schema from the
first element only.
"""
from __future__ import annotations

from typing import Any


def infer_schema(value: Any) -> dict[str, Any]:
    """Return a JSON Schema that ``value`` satisfies.

    Examples
    --------
    >>> infer_schema({"a": 1})
    {'type': 'object', 'properties': {'a': {'type': 'number'}}, 'required': ['a']}
    >>> infer_schema([])
    {'type': 'array'}
    """
    if value is None:
        return {"type": "null"}
    # bool is a subclass of int, so it must be tested first.
    if isinstance(value, bool):
        return {"type": "boolean"}
    if isinstance(value, (int, float)):
        return {"type": "number"}
    if isinstance(value, str):
        return {"type": "string"}
    if isinstance(value, (list, tuple)):
        schema: dict[str, Any] = {"type": "array"}
        if value:
            schema["items"] = infer_schema(value[0])
        return schema
    if isinstance(value, dict):
        return {
            "type": "object",
            "properties": {key: infer_schema(item) for key, item in value.items()},
            "required": list(value),
        }
    return {}
