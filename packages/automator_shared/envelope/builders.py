"""Convenience constructors for typed envelope responses."""

from __future__ import annotations

from typing import Iterable, TypeVar

from packages.automator_shared.errors import ErrorDetail

from .envelope import Envelope, Payload
from .meta import EnvelopeMeta


T = TypeVar("T")


def success(*, meta: EnvelopeMeta, payload: T) -> Envelope[T]:
    """Build a successful envelope with payload and no errors."""
    return Envelope[T](
        metadata=meta,
        payload=Payload[T](value=payload),
        errors=[],
    )


def failure(
    *,
    meta: EnvelopeMeta,
    errors: Iterable[ErrorDetail],
) -> Envelope[T]:
    """Build a failed envelope with one or more errors."""
    return Envelope[T](metadata=meta, payload=None, errors=list(errors))
