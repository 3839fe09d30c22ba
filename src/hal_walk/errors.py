"""Error taxonomy for hal-walk.

Every user-facing failure is a ``HalWalkError`` carrying a message and a
context mapping, so the CLI can report it as a single structured object.

Classes
-------
- HalWalkError    — base class with ``to_dict``
- NotFoundError   — unknown position, relation, session or unreachable path
- ValidationError — request body or headers fail their JSON Schema
- UpstreamError   — HTTP status >= 400 or transport failure
"""
from __future__ import annotations

from typing import Any


class HalWalkError(Exception):
    """Base class for all hal-walk failures.

    Parameters
    ----------
    message:
        Human-readable description of the failure.
    **context:
        Additional structured data reported alongside the message, such as
        ``availableRelations`` or ``availablePositions``.
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context: dict[str, Any] = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Return the structured error object ``{"error": message, **context}``."""
        return {"error": self.message, **self.context}

    def __str__(self) -> str:
        return self.message


class NotFoundError(HalWalkError, LookupError):
    """Raised when a position, relation, session, or path cannot be found."""


class ValidationError(HalWalkError, ValueError):
    """Raised when request data does not satisfy its JSON Schema.

    Parameters
    ----------
    label:
        Which part of the request failed: ``"body"`` or ``"headers"``.
    violations:
        ``(path, message)`` pairs, one per schema violation.
    """

    def __init__(self, label: str, violations: list[tuple[str, str]]) -> None:
        self.label = label
        self.violations = list(violations)
        report = "; ".join(f"{path} {message}" for path, message in self.violations)
        super().__init__(f"{label} validation failed: {report}", label=label)


class UpstreamError(HalWalkError):
    """Raised when the remote API fails or cannot be reached.

    Parameters
    ----------
    message:
        Description of the failure.
    url:
        The URL that was requested.
    status_code:
        HTTP status returned by the server, or None for transport failures.
    """

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        context: dict[str, Any] = {"url": url}
        if status_code is not None:
            context["statusCode"] = status_code
        super().__init__(message, **context)
