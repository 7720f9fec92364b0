"""Domain contracts for Calendar Authority Service payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CalendarEventRecord(BaseModel):
    """Authoritative calendar event; ``end_time`` is always after ``start_time``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    user_id: str
    title: str
    description: str | None
    start_time: datetime
    end_time: datetime
    all_day: bool
    color: str | None
    created_at: datetime
    updated_at: datetime


class HealthStatus(BaseModel):
    """Calendar Authority and owned dependency readiness status payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_ready: bool
    substrate_ready: bool
    detail: str
