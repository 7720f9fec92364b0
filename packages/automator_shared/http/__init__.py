"""Public shared HTTP API for Task Automator packages."""

from .errors import (
    HttpError,
    HttpServerError,
    InvalidBodyError,
    InvalidJsonBodyError,
    UnauthenticatedError,
)
from .responses import (
    INTERNAL_ERROR_MESSAGE,
    UNAUTHORIZED_MESSAGE,
    VALIDATION_ERROR_MESSAGE,
    envelope_response,
    error_response,
    error_status,
)
from .server import create_app, read_json_body, read_raw_body, run_app

__all__ = [
    "HttpError",
    "HttpServerError",
    "INTERNAL_ERROR_MESSAGE",
    "InvalidBodyError",
    "InvalidJsonBodyError",
    "UNAUTHORIZED_MESSAGE",
    "UnauthenticatedError",
    "VALIDATION_ERROR_MESSAGE",
    "create_app",
    "envelope_response",
    "error_response",
    "error_status",
    "read_json_body",
    "read_raw_body",
    "run_app",
]
