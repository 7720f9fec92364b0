"""Behavior tests for Task Authority Service semantics."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Mapping

from packages.automator_shared.envelope import EnvelopeKind, new_meta
from packages.automator_shared.errors import ErrorCategory, codes
from packages.automator_shared.ids import generate_ulid_str
from services.state.task_authority.config import TaskAuthoritySettings
from services.state.task_authority.domain import (
    TaskPriority,
    TaskRecord,
    TaskStatus,
)
from services.state.task_authority.implementation import DefaultTaskAuthorityService


class _FakeRepository:
    """In-memory owner-scoped task repository fake."""

    def __init__(self) -> None:
        self.rows: dict[str, TaskRecord] = {}
        self.update_calls: list[dict[str, Any]] = []
        self.raise_on_read: Exception | None = None

    def create_task(
        self,
        *,
        user_id: str,
        title: str,
        description: str | None,
        status: TaskStatus,
        priority: TaskPriority,
        due_date: datetime | None,
        completed_at: datetime | None,
    ) -> TaskRecord:
        now = datetime.now(UTC)
        record = TaskRecord(
            id=generate_ulid_str(),
            user_id=user_id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=due_date,
            completed_at=completed_at,
            created_at=now,
            updated_at=now,
        )
        self.rows[record.id] = record
        return record

    def get_task(self, *, user_id: str, task_id: str) -> TaskRecord | None:
        if self.raise_on_read is not None:
            raise self.raise_on_read
        row = self.rows.get(task_id)
        if row is None or row.user_id != user_id:
            return None
        return row

    def list_tasks(
        self,
        *,
        user_id: str,
        status: TaskStatus | None,
        priority: TaskPriority | None,
    ) -> list[TaskRecord]:
        rows = [
            row
            for row in self.rows.values()
            if row.user_id == user_id
            and (status is None or row.status == status)
            and (priority is None or row.priority == priority)
        ]
        return sorted(rows, key=lambda row: row.id, reverse=True)

    def update_task(
        self, *, user_id: str, task_id: str, changes: Mapping[str, Any]
    ) -> TaskRecord | None:
        self.update_calls.append(dict(changes))
        row = self.get_task(user_id=user_id, task_id=task_id)
        if row is None:
            return None
        updated = row.model_copy(update={**changes, "updated_at": datetime.now(UTC)})
        self.rows[task_id] = updated
        return updated

    def delete_task(self, *, user_id: str, task_id: str) -> bool:
        if self.get_task(user_id=user_id, task_id=task_id) is None:
            return False
        del self.rows[task_id]
        return True

    def count_tasks(self, **kwargs: Any) -> int:
        del kwargs
        return 0

    def count_by_priority(self, **kwargs: Any) -> dict[TaskPriority, int]:
        del kwargs
        return {}

    def list_completion_times(self, **kwargs: Any) -> list[datetime]:
        del kwargs
        return []


def _meta(principal: str = "user-1"):
    """Return valid envelope metadata for one caller."""
    return new_meta(kind=EnvelopeKind.COMMAND, source="test", principal=principal)


def _service() -> tuple[DefaultTaskAuthorityService, _FakeRepository]:
    """Build deterministic service with in-memory dependencies."""
    repo = _FakeRepository()
    service = DefaultTaskAuthorityService(
        settings=TaskAuthoritySettings(), repository=repo
    )
    return service, repo


def test_create_task_applies_defaults() -> None:
    """A title-only create should default status, priority and completion."""
    service, _ = _service()

    result = service.create_task(meta=_meta(), payload={"title": "Write report"})

    assert result.ok is True
    record = result.payload.value
    assert record.status == TaskStatus.TODO
    assert record.priority == TaskPriority.MEDIUM
    assert record.completed_at is None
    assert record.user_id == "user-1"


def test_create_task_in_completed_status_stamps_completion() -> None:
    """Creating directly in COMPLETED should record a completion timestamp."""
    service, _ = _service()

    result = service.create_task(
        meta=_meta(), payload={"title": "Done already", "status": "COMPLETED"}
    )

    assert result.ok is True
    assert result.payload.value.completed_at is not None


def test_create_task_reports_every_invalid_field() -> None:
    """Validation should return one structured error per violated field."""
    service, repo = _service()

    result = service.create_task(
        meta=_meta(),
        payload={"title": "  ", "priority": "URGENT", "dueDate": "tomorrow"},
    )

    assert result.ok is False
    fields = {error.metadata["field"] for error in result.errors}
    assert fields == {"title", "priority", "dueDate"}
    assert all(error.category == ErrorCategory.VALIDATION for error in result.errors)
    assert repo.rows == {}


def test_create_task_rejects_missing_title_and_unknown_fields() -> None:
    """Missing required fields and unexpected keys are validation failures."""
    service, _ = _service()

    result = service.create_task(meta=_meta(), payload={"owner": "someone"})

    codes_by_field = {error.metadata["field"]: error.code for error in result.errors}
    assert codes_by_field["title"] == codes.MISSING_REQUIRED_FIELD
    assert codes_by_field["owner"] == codes.INVALID_ARGUMENT


def test_status_completion_roundtrip_sets_and_clears_completed_at() -> None:
    """Completing then reopening a task should set then clear completion."""
    service, _ = _service()
    created = service.create_task(meta=_meta(), payload={"title": "Ship"})
    task_id = created.payload.value.id

    completed = service.update_task(
        meta=_meta(), task_id=task_id, payload={"status": "COMPLETED"}
    )
    assert completed.payload.value.completed_at is not None

    reopened = service.update_task(
        meta=_meta(), task_id=task_id, payload={"status": "IN_PROGRESS"}
    )
    assert reopened.payload.value.status == TaskStatus.IN_PROGRESS
    assert reopened.payload.value.completed_at is None


def test_update_without_status_leaves_completion_untouched() -> None:
    """Updates that omit status must not clear completion on completed tasks."""
    service, repo = _service()
    created = service.create_task(
        meta=_meta(), payload={"title": "Ship", "status": "COMPLETED"}
    )
    task_id = created.payload.value.id
    completed_at = created.payload.value.completed_at

    result = service.update_task(
        meta=_meta(), task_id=task_id, payload={"title": "Shipped"}
    )

    assert result.payload.value.title == "Shipped"
    assert result.payload.value.completed_at == completed_at
    assert "completed_at" not in repo.update_calls[-1]


def test_update_clears_due_date_only_when_explicit_null() -> None:
    """An explicit null clears the due date; omission leaves it in place."""
    service, _ = _service()
    created = service.create_task(
        meta=_meta(),
        payload={"title": "Taxes", "dueDate": "2026-04-15T17:00:00Z"},
    )
    task_id = created.payload.value.id

    untouched = service.update_task(
        meta=_meta(), task_id=task_id, payload={"priority": "HIGH"}
    )
    assert untouched.payload.value.due_date == datetime(2026, 4, 15, 17, tzinfo=UTC)

    cleared = service.update_task(
        meta=_meta(), task_id=task_id, payload={"dueDate": None}
    )
    assert cleared.payload.value.due_date is None


def test_update_rejects_null_title() -> None:
    """Title cannot be cleared through a partial update."""
    service, _ = _service()
    created = service.create_task(meta=_meta(), payload={"title": "Keep"})

    result = service.update_task(
        meta=_meta(), task_id=created.payload.value.id, payload={"title": None}
    )

    assert result.ok is False
    assert result.errors[0].metadata["field"] == "title"


def test_other_users_task_is_not_found() -> None:
    """Cross-owner reads, updates and deletes all report not found."""
    service, repo = _service()
    created = service.create_task(meta=_meta("owner"), payload={"title": "Private"})
    task_id = created.payload.value.id

    for result in (
        service.get_task(meta=_meta("intruder"), task_id=task_id),
        service.update_task(
            meta=_meta("intruder"), task_id=task_id, payload={"title": "Mine"}
        ),
        service.delete_task(meta=_meta("intruder"), task_id=task_id),
    ):
        assert result.ok is False
        assert result.errors[0].category == ErrorCategory.NOT_FOUND
        assert result.errors[0].message == "Task not found"
    assert repo.rows[task_id].title == "Private"


def test_malformed_task_id_is_not_found_without_repository_access() -> None:
    """Non-ULID ids short-circuit to not found."""
    service, repo = _service()
    repo.raise_on_read = RuntimeError("should not be called")

    result = service.get_task(meta=_meta(), task_id="not-a-ulid")

    assert result.errors[0].category == ErrorCategory.NOT_FOUND


def test_list_tasks_rejects_unknown_filter_values() -> None:
    """Unknown enum filter values are validation failures."""
    service, _ = _service()

    result = service.list_tasks(meta=_meta(), query={"status": "DONE"})

    assert result.ok is False
    assert result.errors[0].metadata["field"] == "status"


def test_list_tasks_filters_by_status_and_priority() -> None:
    """Equality filters should narrow the caller's task list."""
    service, _ = _service()
    service.create_task(meta=_meta(), payload={"title": "a", "priority": "HIGH"})
    service.create_task(meta=_meta(), payload={"title": "b", "priority": "LOW"})
    service.create_task(meta=_meta("other"), payload={"title": "c", "priority": "HIGH"})

    result = service.list_tasks(meta=_meta(), query={"priority": "HIGH"})

    assert [item.title for item in result.payload.value] == ["a"]


def test_repository_failure_maps_to_dependency_error() -> None:
    """Unexpected repository exceptions become dependency-category failures."""
    service, repo = _service()
    repo.raise_on_read = RuntimeError("db down")

    result = service.get_task(meta=_meta(), task_id=generate_ulid_str())

    assert result.ok is False
    assert result.errors[0].category == ErrorCategory.DEPENDENCY
    assert result.errors[0].code == codes.DEPENDENCY_FAILURE
