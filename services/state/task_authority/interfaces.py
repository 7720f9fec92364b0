"""Transport-neutral protocol interfaces used by Task Authority Service."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Protocol

from services.state.task_authority.domain import (
    TaskPriority,
    TaskRecord,
    TaskStatus,
)


class TaskRepository(Protocol):
    """Protocol for owner-scoped task persistence operations."""

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
        """Insert one task and return the stored record."""

    def get_task(self, *, user_id: str, task_id: str) -> TaskRecord | None:
        """Read one task by id within the owner's scope."""

    def list_tasks(
        self,
        *,
        user_id: str,
        status: TaskStatus | None,
        priority: TaskPriority | None,
    ) -> list[TaskRecord]:
        """List owner tasks newest first with optional equality filters."""

    def update_task(
        self, *, user_id: str, task_id: str, changes: Mapping[str, Any]
    ) -> TaskRecord | None:
        """Apply column changes to one owned task and return the new record."""

    def delete_task(self, *, user_id: str, task_id: str) -> bool:
        """Delete one owned task and return whether it existed."""

    def count_tasks(
        self,
        *,
        user_id: str,
        status: TaskStatus | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
        completed_from: datetime | None = None,
        completed_to: datetime | None = None,
    ) -> int:
        """Count owner tasks matching optional status and time windows."""

    def count_by_priority(
        self,
        *,
        user_id: str,
        created_from: datetime | None,
        created_to: datetime | None,
    ) -> dict[TaskPriority, int]:
        """Count owner tasks grouped by priority within an optional window."""

    def list_completion_times(
        self, *, user_id: str, completed_since: datetime
    ) -> list[datetime]:
        """Return completion timestamps of completed tasks since one instant."""
