"""SQLAlchemy exception normalization helpers."""

from __future__ import annotations

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

from packages.automator_shared.errors import (
    ErrorDetail,
    codes,
    dependency_error,
    internal_error,
)


def is_sql_error(exc: Exception) -> bool:
    """Return ``True`` for exceptions raised by SQLAlchemy or its DBAPI driver."""
    return isinstance(exc, SQLAlchemyError)


def violates_constraint(exc: Exception, name: str) -> bool:
    """Return ``True`` when ``exc`` is an integrity failure of constraint ``name``.

    Postgres exposes the constraint through psycopg diagnostics; SQLite only
    names it in the driver message.
    """
    if not isinstance(exc, IntegrityError):
        return False
    diag = getattr(exc.orig, "diag", None)
    if getattr(diag, "constraint_name", None) == name:
        return True
    return name in str(exc.orig)


def normalize_sql_error(exc: Exception) -> ErrorDetail:
    """Map low-level DB exceptions into shared structured error semantics."""
    metadata = {"exception_type": type(exc).__name__}

    if isinstance(exc, IntegrityError):
        return internal_error(
            "database constraint violated",
            code=codes.CONSTRAINT_VIOLATION,
            metadata=metadata,
        )

    if isinstance(exc, (OperationalError, InterfaceError)):
        return dependency_error(
            "database unavailable",
            code=codes.DEPENDENCY_UNAVAILABLE,
            retryable=True,
            metadata=metadata,
        )

    if isinstance(exc, DBAPIError):
        return dependency_error(
            "database request failed",
            code=codes.DEPENDENCY_FAILURE,
            metadata=metadata,
        )

    return internal_error(
        "unexpected database failure",
        code=codes.UNEXPECTED_EXCEPTION,
        metadata=metadata,
    )
