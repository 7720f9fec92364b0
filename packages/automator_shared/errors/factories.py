"""Factory helpers for the error categories services return."""

from __future__ import annotations

from typing import Mapping

from . import codes
from .types import ErrorCategory, ErrorDetail


def validation_error(
    message: str,
    *,
    code: str = codes.INVALID_ARGUMENT,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create a caller-fixable error; ``metadata["field"]`` names the input."""
    return _error(ErrorCategory.VALIDATION, message, code=code, metadata=metadata)


def not_found_error(
    message: str,
    *,
    code: str = codes.RESOURCE_NOT_FOUND,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create an error for ids that do not resolve under the caller's scope."""
    return _error(ErrorCategory.NOT_FOUND, message, code=code, metadata=metadata)


def dependency_error(
    message: str,
    *,
    code: str = codes.DEPENDENCY_FAILURE,
    retryable: bool = False,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create an error for a failing store or collaborator service."""
    return _error(
        ErrorCategory.DEPENDENCY,
        message,
        code=code,
        metadata=metadata,
        retryable=retryable,
    )


def internal_error(
    message: str,
    *,
    code: str = codes.INTERNAL_ERROR,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    return _error(ErrorCategory.INTERNAL, message, code=code, metadata=metadata)


def _error(
    category: ErrorCategory,
    message: str,
    *,
    code: str,
    metadata: Mapping[str, str] | None,
    retryable: bool = False,
) -> ErrorDetail:
    return ErrorDetail(
        code=code,
        message=message,
        category=category,
        retryable=retryable,
        metadata={} if metadata is None else dict(metadata),
    )
