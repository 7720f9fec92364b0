"""Authoritative in-process Python API for Calendar Authority Service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping

from packages.automator_shared.config import AutomatorSettings
from packages.automator_shared.envelope import Envelope, EnvelopeMeta
from resources.substrates.sql.substrate import SqlSubstrate
from services.state.calendar_authority.domain import CalendarEventRecord, HealthStatus


class CalendarAuthorityService(ABC):
    """Public API for owner-scoped calendar event operations."""

    @abstractmethod
    def create_event(
        self, *, meta: EnvelopeMeta, payload: Mapping[str, Any]
    ) -> Envelope[CalendarEventRecord]:
        """Validate and persist one event owned by the caller."""

    @abstractmethod
    def get_event(
        self, *, meta: EnvelopeMeta, event_id: str
    ) -> Envelope[CalendarEventRecord]:
        """Read one caller-owned event by id."""

    @abstractmethod
    def list_events(
        self, *, meta: EnvelopeMeta, query: Mapping[str, Any]
    ) -> Envelope[list[CalendarEventRecord]]:
        """List caller events overlapping an optional window, earliest first."""

    @abstractmethod
    def update_event(
        self, *, meta: EnvelopeMeta, event_id: str, payload: Mapping[str, Any]
    ) -> Envelope[CalendarEventRecord]:
        """Apply a partial update to one caller-owned event."""

    @abstractmethod
    def delete_event(self, *, meta: EnvelopeMeta, event_id: str) -> Envelope[bool]:
        """Delete one caller-owned event."""

    @abstractmethod
    def count_events(
        self,
        *,
        meta: EnvelopeMeta,
        start: datetime | None,
        end: datetime | None,
    ) -> Envelope[int]:
        """Count caller events created within an optional window."""

    @abstractmethod
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Return service and owned dependency readiness status."""


def build_calendar_authority_service(
    *,
    settings: AutomatorSettings,
    substrate: SqlSubstrate,
) -> CalendarAuthorityService:
    """Build default Calendar Authority implementation from typed settings."""
    from services.state.calendar_authority.config import (
        resolve_calendar_authority_settings,
    )
    from services.state.calendar_authority.data import (
        CalendarSqlRuntime,
        SqlCalendarEventRepository,
    )
    from services.state.calendar_authority.implementation import (
        DefaultCalendarAuthorityService,
    )

    runtime = CalendarSqlRuntime.from_substrate(substrate)
    return DefaultCalendarAuthorityService(
        settings=resolve_calendar_authority_settings(settings),
        repository=SqlCalendarEventRepository(runtime.sessions),
        runtime=runtime,
    )
