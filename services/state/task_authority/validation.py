"""Pydantic request-validation models for Task Authority Service API."""

from __future__ import annotations

from pydantic import Field, ValidationInfo, field_validator

from packages.automator_shared.validation import (
    QueryModel,
    RequestModel,
    Timestamp,
)
from services.state.task_authority.domain import TaskPriority, TaskStatus


class CreateTaskRequest(RequestModel):
    """Validated create-task request shape."""

    title: str = Field(min_length=1)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Timestamp | None = None


class UpdateTaskRequest(RequestModel):
    """Validated partial update; only fields present in the body are applied.

    ``description`` and ``dueDate`` accept ``null`` to clear the stored value.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: Timestamp | None = None

    @field_validator("title", "status", "priority", mode="before")
    @classmethod
    def _reject_explicit_null(cls, value: object, info: ValidationInfo) -> object:
        """Reject ``null`` for fields that cannot be cleared."""
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class ListTasksRequest(QueryModel):
    """Validated list-tasks query parameters."""

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
