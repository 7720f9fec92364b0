"""Domain contracts for Task Authority Service payloads."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class TaskStatus(str, Enum):
    """Lifecycle status of one task."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class TaskPriority(str, Enum):
    """Relative priority of one task."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TaskRecord(BaseModel):
    """Authoritative task record owned by one user.

    ``completed_at`` is set iff ``status`` was ``COMPLETED`` at the last write
    that touched status.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    user_id: str
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class PriorityCount(BaseModel):
    """Number of tasks at one priority."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    priority: TaskPriority
    count: int


class TaskStatistics(BaseModel):
    """Aggregate task counts for one owner, consumed by reporting."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total: int
    completed: int
    in_progress: int
    todo: int
    by_priority: list[PriorityCount]
    recent_completions: list[datetime]


class HealthStatus(BaseModel):
    """Task Authority and owned dependency readiness status payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_ready: bool
    substrate_ready: bool
    detail: str
