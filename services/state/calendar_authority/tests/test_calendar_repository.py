"""SQL repository tests for Calendar Authority over in-memory SQLite."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from resources.substrates.sql import violates_constraint
from services.state.calendar_authority.data import (
    CalendarSqlRuntime,
    SqlCalendarEventRepository,
)
from services.state.calendar_authority.data.schema import TIME_ORDER_CONSTRAINT

_BASE = datetime(2026, 3, 2, 9, tzinfo=UTC)


@pytest.fixture
def repository(sql_substrate) -> SqlCalendarEventRepository:
    """Repository over a freshly provisioned calendar schema."""
    runtime = CalendarSqlRuntime.from_substrate(sql_substrate)
    return SqlCalendarEventRepository(runtime.sessions)


def _create(repository, *, title: str, start_hours: int, duration_hours: int = 1):
    start = _BASE + timedelta(hours=start_hours)
    return repository.create_event(
        user_id="user-1",
        title=title,
        description=None,
        start_time=start,
        end_time=start + timedelta(hours=duration_hours),
        all_day=False,
        color=None,
    )


def test_list_selects_overlapping_events_in_start_order(repository) -> None:
    """Events that straddle window edges overlap and must be included."""
    _create(repository, title="late", start_hours=5)
    _create(repository, title="straddles-start", start_hours=-1, duration_hours=2)
    _create(repository, title="inside", start_hours=1)
    _create(repository, title="before", start_hours=-5)

    rows = repository.list_events(
        user_id="user-1",
        window_start=_BASE,
        window_end=_BASE + timedelta(hours=3),
    )

    assert [row.title for row in rows] == ["straddles-start", "inside"]


def test_list_without_window_returns_all_owned_events(repository) -> None:
    """No bounds means every owned event, earliest first."""
    _create(repository, title="second", start_hours=2)
    _create(repository, title="first", start_hours=0)

    rows = repository.list_events(user_id="user-1", window_start=None, window_end=None)

    assert [row.title for row in rows] == ["first", "second"]
    assert repository.list_events(
        user_id="other", window_start=None, window_end=None
    ) == []


def test_update_and_delete_are_owner_scoped(repository) -> None:
    """Only the owner can change or delete an event."""
    created = _create(repository, title="mine", start_hours=0)

    assert (
        repository.update_event(
            user_id="other", event_id=created.id, changes={"title": "x"}
        )
        is None
    )
    updated = repository.update_event(
        user_id="user-1", event_id=created.id, changes={"all_day": True}
    )
    assert updated.all_day is True
    assert repository.delete_event(user_id="other", event_id=created.id) is False
    assert repository.delete_event(user_id="user-1", event_id=created.id) is True


def test_count_events_windows_on_creation_time(repository) -> None:
    """Counts use creation time, not event time."""
    _create(repository, title="a", start_hours=-1000)
    now = datetime.now(UTC)

    assert repository.count_events(
        user_id="user-1", created_from=now - timedelta(minutes=5), created_to=None
    ) == 1
    assert repository.count_events(
        user_id="user-1", created_from=None, created_to=now - timedelta(days=1)
    ) == 0


def test_store_rejects_zero_length_events_by_named_constraint(repository) -> None:
    """The table itself refuses an end that does not follow the start."""
    with pytest.raises(IntegrityError) as caught:
        _create(repository, title="instant", start_hours=0, duration_hours=0)

    assert violates_constraint(caught.value, TIME_ORDER_CONSTRAINT) is True
    assert repository.list_events(
        user_id="user-1", window_start=None, window_end=None
    ) == []
