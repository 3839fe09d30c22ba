"""Unit tests for hal_walk.errors."""
from __future__ import annotations

import pytest

from hal_walk.errors import HalWalkError, NotFoundError, UpstreamError, ValidationError


class TestHalWalkError:
    def test_to_dict_merges_context(self) -> None:
        err = NotFoundError("Relation 'x' not found", availableRelations=["a", "b"])
        assert err.to_dict() == {
            "error": "Relation 'x' not found",
            "availableRelations": ["a", "b"],
        }

    def test_str_is_message(self) -> None:
        assert str(HalWalkError("boom", extra=1)) == "boom"

    def test_not_found_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            raise NotFoundError("missing")


class TestValidationError:
    def test_message_joins_violations(self) -> None:
        err = ValidationError("body", [("/a", "is bad"), ("/", "'b' is a required property")])
        assert str(err) == "body validation failed: /a is bad; / 'b' is a required property"

    def test_is_value_error(self) -> None:
        assert isinstance(ValidationError("headers", []), ValueError)

    def test_context_carries_label(self) -> None:
        err = ValidationError("headers", [("/X", "nope")])
        assert err.to_dict()["label"] == "headers"
        assert err.violations == [("/X", "nope")]


class TestUpstreamError:
    def test_context_with_status(self) -> None:
        err = UpstreamError("HTTP 503", url="https://api.test/", status_code=503)
        assert err.to_dict() == {"error": "HTTP 503", "url": "https://api.test/", "statusCode": 503}

    def test_transport_failure_has_no_status(self) -> None:
        err = UpstreamError("connection refused", url="https://api.test/")
        assert err.status_code is None
        assert "statusCode" not in err.to_dict()
