"""Domain contracts for Reporting Service payloads."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from services.state.task_authority.domain import TaskPriority


class ReportSummary(BaseModel):
    """Headline counts for one report window."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    todo_tasks: int
    total_events: int
    total_agent_jobs: int
    completed_agent_jobs: int
    unread_notifications: int
    completion_rate: Decimal


class PriorityBucket(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    priority: TaskPriority
    count: int


class DailyCount(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    day: date
    count: int


class Report(BaseModel):
    """Aggregated productivity report for one caller."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    summary: ReportSummary
    tasks_by_priority: list[PriorityBucket]
    tasks_completed_over_time: list[DailyCount]


class HealthStatus(BaseModel):
    """Reporting readiness derived from upstream service health."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_ready: bool
    detail: str
