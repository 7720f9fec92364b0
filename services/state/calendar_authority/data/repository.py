"""Authoritative SQL repository for Calendar Authority Service state."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from sqlalchemy import delete, func, insert, select, update

from packages.automator_shared.ids import generate_ulid_str
from packages.automator_shared.timestamps import ensure_utc, utc_now
from resources.substrates.sql import SqlSessionProvider
from services.state.calendar_authority.domain import CalendarEventRecord
from services.state.calendar_authority.interfaces import CalendarEventRepository

from .schema import calendar_events

_UPDATABLE_COLUMNS = frozenset(
    {"title", "description", "start_time", "end_time", "all_day", "color"}
)


class SqlCalendarEventRepository(CalendarEventRepository):
    """SQL repository over Calendar Authority-owned tables."""

    def __init__(self, sessions: SqlSessionProvider) -> None:
        self._sessions = sessions

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
        """Insert one event row and return the stored record."""
        now = utc_now()
        event_id = generate_ulid_str()
        with self._sessions.session() as session:
            session.execute(
                insert(calendar_events).values(
                    id=event_id,
                    user_id=user_id,
                    title=title,
                    description=description,
                    start_time=start_time,
                    end_time=end_time,
                    all_day=all_day,
                    color=color,
                    created_at=now,
                    updated_at=now,
                )
            )
            row = (
                session.execute(
                    select(calendar_events).where(calendar_events.c.id == event_id)
                )
                .mappings()
                .one()
            )
            return _to_event(row)

    def get_event(self, *, user_id: str, event_id: str) -> CalendarEventRecord | None:
        """Read one event row by id within the owner's scope."""
        with self._sessions.session() as session:
            row = (
                session.execute(
                    select(calendar_events).where(
                        calendar_events.c.id == event_id,
                        calendar_events.c.user_id == user_id,
                    )
                )
                .mappings()
                .one_or_none()
            )
            return None if row is None else _to_event(row)

    def list_events(
        self,
        *,
        user_id: str,
        window_start: datetime | None,
        window_end: datetime | None,
    ) -> list[CalendarEventRecord]:
        """List owner events whose interval overlaps the window, earliest first."""
        stmt = select(calendar_events).where(calendar_events.c.user_id == user_id)
        if window_start is not None:
            stmt = stmt.where(calendar_events.c.end_time >= window_start)
        if window_end is not None:
            stmt = stmt.where(calendar_events.c.start_time <= window_end)
        stmt = stmt.order_by(
            calendar_events.c.start_time.asc(), calendar_events.c.id.asc()
        )
        with self._sessions.session() as session:
            return [_to_event(row) for row in session.execute(stmt).mappings().all()]

    def update_event(
        self, *, user_id: str, event_id: str, changes: Mapping[str, Any]
    ) -> CalendarEventRecord | None:
        """Apply column changes to one owned event and return the new record."""
        unknown = set(changes) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(
                f"unsupported calendar event columns: {', '.join(sorted(unknown))}"
            )
        owned = (
            calendar_events.c.id == event_id,
            calendar_events.c.user_id == user_id,
        )
        with self._sessions.session() as session:
            result = session.execute(
                update(calendar_events)
                .where(*owned)
                .values(**dict(changes), updated_at=utc_now())
            )
            if int(result.rowcount or 0) == 0:
                return None
            row = session.execute(select(calendar_events).where(*owned)).mappings().one()
            return _to_event(row)

    def delete_event(self, *, user_id: str, event_id: str) -> bool:
        """Delete one owned event row and return whether it existed."""
        with self._sessions.session() as session:
            result = session.execute(
                delete(calendar_events).where(
                    calendar_events.c.id == event_id,
                    calendar_events.c.user_id == user_id,
                )
            )
            return int(result.rowcount or 0) > 0

    def count_events(
        self,
        *,
        user_id: str,
        created_from: datetime | None,
        created_to: datetime | None,
    ) -> int:
        """Count owner events created within an optional inclusive window."""
        stmt = (
            select(func.count())
            .select_from(calendar_events)
            .where(calendar_events.c.user_id == user_id)
        )
        if created_from is not None:
            stmt = stmt.where(calendar_events.c.created_at >= created_from)
        if created_to is not None:
            stmt = stmt.where(calendar_events.c.created_at <= created_to)
        with self._sessions.session() as session:
            return int(session.execute(stmt).scalar_one())


def _to_event(row: Mapping[str, Any]) -> CalendarEventRecord:
    """Map one SQL row to strict domain event record."""
    return CalendarEventRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=str(row["title"]),
        description=row["description"],
        start_time=_row_dt(row, "start_time"),
        end_time=_row_dt(row, "end_time"),
        all_day=bool(row["all_day"]),
        color=row["color"],
        created_at=_row_dt(row, "created_at"),
        updated_at=_row_dt(row, "updated_at"),
    )


def _row_dt(row: Mapping[str, Any], column: str) -> datetime:
    """Read and normalize one timezone-aware datetime field from SQL row."""
    value = row.get(column)
    if not isinstance(value, datetime):
        raise ValueError(f"expected datetime column for {column}")
    return ensure_utc(value)
