"""Envelope-to-HTTP response mapping shared by every service registrar."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Callable, TypeVar

from fastapi.responses import JSONResponse

from packages.automator_shared.envelope import Envelope
from packages.automator_shared.errors import ErrorCategory, ErrorDetail

T = TypeVar("T")

UNAUTHORIZED_MESSAGE = "Unauthorized"
VALIDATION_ERROR_MESSAGE = "Validation error"
INTERNAL_ERROR_MESSAGE = "Internal server error"

_OPAQUE_CATEGORIES = frozenset({ErrorCategory.DEPENDENCY, ErrorCategory.INTERNAL})


def error_status(category: ErrorCategory) -> HTTPStatus:
    """Map structured envelope error category to HTTP status code."""
    if category == ErrorCategory.VALIDATION:
        return HTTPStatus.BAD_REQUEST
    if category == ErrorCategory.NOT_FOUND:
        return HTTPStatus.NOT_FOUND
    return HTTPStatus.INTERNAL_SERVER_ERROR


def error_response(errors: list[ErrorDetail]) -> JSONResponse:
    """Render one failed envelope error list as ``{error, details?}`` JSON."""
    if not errors:
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )

    # Any opaque failure wins so partial detail never leaks alongside it.
    opaque = [error for error in errors if error.category in _OPAQUE_CATEGORIES]
    if opaque:
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )

    primary = errors[0]
    status = error_status(primary.category)
    if primary.category == ErrorCategory.VALIDATION:
        return JSONResponse(
            status_code=status,
            content={
                "error": VALIDATION_ERROR_MESSAGE,
                "details": [
                    {
                        "field": error.metadata.get("field", ""),
                        "message": error.message,
                        "code": error.code,
                    }
                    for error in errors
                    if error.category == ErrorCategory.VALIDATION
                ],
            },
        )
    return JSONResponse(status_code=status, content={"error": primary.message})


def envelope_response(
    result: Envelope[T],
    *,
    render: Callable[[T], Any],
    status_code: int = HTTPStatus.OK,
) -> JSONResponse:
    """Render a successful envelope payload or its mapped error response."""
    if not result.ok or result.payload is None:
        return error_response(list(result.errors))
    return JSONResponse(status_code=status_code, content=render(result.payload.value))
