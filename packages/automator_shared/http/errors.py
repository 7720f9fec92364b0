"""Typed errors for shared HTTP server helpers."""

from __future__ import annotations


class HttpError(Exception):
    """Base error type for shared HTTP helper failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class HttpServerError(HttpError):
    """Base error type for inbound HTTP parsing/validation helpers."""


class InvalidBodyError(HttpServerError):
    """Inbound HTTP body is invalid for the expected shape."""


class InvalidJsonBodyError(InvalidBodyError):
    """Inbound HTTP body is not valid JSON."""


class UnauthenticatedError(HttpServerError):
    """Inbound request carries no valid session identity."""
