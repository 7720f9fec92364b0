"""Envelope metadata primitives shared across Task Automator services.

``principal`` always carries the authenticated user id; services use it as the
ownership scope for every repository call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import uuid4

from packages.automator_shared.timestamps import ensure_utc, utc_now


class EnvelopeKind(str, Enum):
    """Envelope kinds used for intent classification."""

    UNSPECIFIED = "unspecified"
    COMMAND = "command"
    QUERY = "query"


@dataclass(frozen=True)
class EnvelopeMeta:
    """Canonical metadata attached to every envelope result."""

    envelope_id: str
    trace_id: str
    timestamp: datetime
    kind: EnvelopeKind
    source: str
    principal: str


def new_meta(
    *,
    kind: EnvelopeKind,
    source: str,
    principal: str,
    trace_id: str | None = None,
    envelope_id: str | None = None,
    timestamp: datetime | None = None,
) -> EnvelopeMeta:
    """Build ``EnvelopeMeta`` with safe defaults for IDs and timestamp."""
    return EnvelopeMeta(
        envelope_id=envelope_id or _new_id(),
        trace_id=trace_id or _new_id(),
        timestamp=utc_now() if timestamp is None else ensure_utc(timestamp),
        kind=kind,
        source=source,
        principal=principal,
    )


def _new_id() -> str:
    """Return a compact random identifier."""
    return uuid4().hex
