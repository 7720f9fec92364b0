"""Transport-neutral protocol interfaces used by Calendar Authority Service."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Protocol

from services.state.calendar_authority.domain import CalendarEventRecord


class CalendarEventRepository(Protocol):
    """Protocol for owner-scoped calendar event persistence operations."""

    def create_event(
        self,
        *,
        user_id: str,
        title: str,
        description: str | None,
        start_time: datetime,
        end_time: datetime,
        all_day: bool,
        color: str | None,
    ) -> CalendarEventRecord:
        """Insert one event and return the stored record."""

    def get_event(self, *, user_id: str, event_id: str) -> CalendarEventRecord | None:
        """Read one event by id within the owner's scope."""

    def list_events(
        self,
        *,
        user_id: str,
        window_start: datetime | None,
        window_end: datetime | None,
    ) -> list[CalendarEventRecord]:
        """List owner events overlapping an optional window, earliest first."""

    def update_event(
        self, *, user_id: str, event_id: str, changes: Mapping[str, Any]
    ) -> CalendarEventRecord | None:
        """Apply column changes to one owned event and return the new record."""

    def delete_event(self, *, user_id: str, event_id: str) -> bool:
        """Delete one owned event and return whether it existed."""

    def count_events(
        self,
        *,
        user_id: str,
        created_from: datetime | None,
        created_to: datetime | None,
    ) -> int:
        """Count owner events created within an optional inclusive window."""
