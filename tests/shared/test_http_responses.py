"""Tests for envelope-to-HTTP response mapping."""

from __future__ import annotations

import json

from packages.automator_shared.envelope import EnvelopeKind, failure, new_meta, success
from packages.automator_shared.errors import (
    ErrorCategory,
    dependency_error,
    internal_error,
    not_found_error,
    validation_error,
)
from packages.automator_shared.http import envelope_response, error_response, error_status


def _meta():
    return new_meta(kind=EnvelopeKind.QUERY, source="test", principal="user-1")


def _body(response) -> object:
    return json.loads(response.body)


def test_error_status_maps_every_category() -> None:
    assert error_status(ErrorCategory.VALIDATION) == 400
    assert error_status(ErrorCategory.NOT_FOUND) == 404
    assert error_status(ErrorCategory.DEPENDENCY) == 500
    assert error_status(ErrorCategory.INTERNAL) == 500


def test_validation_errors_render_details() -> None:
    """Every validation error becomes one details entry."""
    response = error_response(
        [
            validation_error("required", code="MISSING", metadata={"field": "title"}),
            validation_error("bad", code="INVALID", metadata={"field": "priority"}),
        ]
    )

    assert response.status_code == 400
    assert _body(response) == {
        "error": "Validation error",
        "details": [
            {"field": "title", "message": "required", "code": "MISSING"},
            {"field": "priority", "message": "bad", "code": "INVALID"},
        ],
    }


def test_dependency_errors_are_opaque() -> None:
    """Storage failures never leak their messages."""
    response = error_response(
        [not_found_error("Task not found"), dependency_error("connection refused")]
    )

    assert response.status_code == 500
    assert _body(response) == {"error": "Internal server error"}


def test_domain_errors_render_their_message() -> None:
    assert _body(error_response([not_found_error("Task not found")])) == {
        "error": "Task not found"
    }
    assert error_response([internal_error("constraint violated")]).status_code == 500
    assert error_response([]).status_code == 500


def test_envelope_response_renders_success_payload() -> None:
    response = envelope_response(
        success(meta=_meta(), payload=3),
        render=lambda count: {"updated": count},
        status_code=201,
    )

    assert response.status_code == 201
    assert _body(response) == {"updated": 3}


def test_envelope_response_maps_failures() -> None:
    response = envelope_response(
        failure(meta=_meta(), errors=[not_found_error("Event not found")]),
        render=lambda value: value,
    )

    assert response.status_code == 404
