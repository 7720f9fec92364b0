"""SQL repository tests for Task Authority over in-memory SQLite."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from services.state.task_authority.data import SqlTaskRepository, TaskSqlRuntime
from services.state.task_authority.data.repository import _row_dt
from services.state.task_authority.domain import TaskPriority, TaskStatus


@pytest.fixture
def repository(sql_substrate) -> SqlTaskRepository:
    """Repository over a freshly provisioned task schema."""
    runtime = TaskSqlRuntime.from_substrate(sql_substrate)
    return SqlTaskRepository(runtime.sessions)


def _create(
    repository: SqlTaskRepository,
    *,
    user_id: str = "user-1",
    title: str = "task",
    status: TaskStatus = TaskStatus.TODO,
    priority: TaskPriority = TaskPriority.MEDIUM,
    completed_at: datetime | None = None,
):
    return repository.create_task(
        user_id=user_id,
        title=title,
        description=None,
        status=status,
        priority=priority,
        due_date=None,
        completed_at=completed_at,
    )


def test_create_and_get_roundtrip_normalizes_timestamps(repository) -> None:
    """Stored tasks should read back with UTC-aware timestamps."""
    created = _create(repository, title="Write report")

    loaded = repository.get_task(user_id="user-1", task_id=created.id)

    assert loaded == created
    assert loaded.created_at.tzinfo == UTC
    assert len(loaded.id) == 26


def test_get_is_scoped_to_owner(repository) -> None:
    """Another owner's id must not resolve."""
    created = _create(repository, user_id="owner")

    assert repository.get_task(user_id="intruder", task_id=created.id) is None


def test_list_orders_newest_first_and_filters(repository) -> None:
    """List should return newest tasks first with equality filters applied."""
    first = _create(repository, title="first", priority=TaskPriority.HIGH)
    second = _create(repository, title="second", priority=TaskPriority.HIGH)
    _create(repository, title="low", priority=TaskPriority.LOW)
    _create(repository, user_id="other", priority=TaskPriority.HIGH)

    rows = repository.list_tasks(
        user_id="user-1", status=None, priority=TaskPriority.HIGH
    )

    assert [row.id for row in rows] == [second.id, first.id]


def test_update_applies_changes_only_for_owner(repository) -> None:
    """Updates touch only the owner's row and bump ``updated_at``."""
    created = _create(repository)

    assert (
        repository.update_task(
            user_id="intruder", task_id=created.id, changes={"title": "stolen"}
        )
        is None
    )
    updated = repository.update_task(
        user_id="user-1",
        task_id=created.id,
        changes={"title": "renamed", "status": TaskStatus.IN_PROGRESS},
    )

    assert updated.title == "renamed"
    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.updated_at >= created.updated_at


def test_update_rejects_unknown_columns(repository) -> None:
    """Ownership and identity columns are never writable."""
    created = _create(repository)

    with pytest.raises(ValueError, match="unsupported task columns: user_id"):
        repository.update_task(
            user_id="user-1", task_id=created.id, changes={"user_id": "other"}
        )


def test_delete_reports_existence(repository) -> None:
    """Delete should report whether an owned row existed."""
    created = _create(repository)

    assert repository.delete_task(user_id="other", task_id=created.id) is False
    assert repository.delete_task(user_id="user-1", task_id=created.id) is True
    assert repository.delete_task(user_id="user-1", task_id=created.id) is False


def test_statistics_queries_respect_windows(repository) -> None:
    """Counting helpers should honor status filters and inclusive windows."""
    now = datetime.now(UTC)
    _create(repository, priority=TaskPriority.HIGH)
    _create(repository, status=TaskStatus.IN_PROGRESS)
    _create(
        repository,
        status=TaskStatus.COMPLETED,
        priority=TaskPriority.HIGH,
        completed_at=now - timedelta(days=10),
    )
    _create(
        repository,
        status=TaskStatus.COMPLETED,
        completed_at=now - timedelta(days=1),
    )

    assert repository.count_tasks(user_id="user-1") == 4
    assert repository.count_tasks(user_id="user-1", status=TaskStatus.TODO) == 1
    assert (
        repository.count_tasks(
            user_id="user-1",
            status=TaskStatus.COMPLETED,
            completed_from=now - timedelta(days=7),
        )
        == 1
    )
    assert repository.count_tasks(
        user_id="user-1", created_to=now - timedelta(days=1)
    ) == 0
    assert repository.count_by_priority(
        user_id="user-1", created_from=None, created_to=None
    ) == {TaskPriority.HIGH: 2, TaskPriority.MEDIUM: 2}
    recent = repository.list_completion_times(
        user_id="user-1", completed_since=now - timedelta(days=7)
    )
    assert len(recent) == 1
    assert recent[0].tzinfo == UTC


def test_row_dt_rejects_missing_values() -> None:
    """Datetime extraction must fail fast on malformed row values."""
    with pytest.raises(ValueError, match="expected datetime column for created_at"):
        _row_dt({}, "created_at")
