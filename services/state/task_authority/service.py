"""Authoritative in-process Python API for Task Authority Service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping

from packages.automator_shared.config import AutomatorSettings
from packages.automator_shared.envelope import Envelope, EnvelopeMeta
from resources.substrates.sql.substrate import SqlSubstrate
from services.state.task_authority.domain import (
    HealthStatus,
    TaskRecord,
    TaskStatistics,
)


class TaskAuthorityService(ABC):
    """Public API for owner-scoped task operations."""

    @abstractmethod
    def create_task(
        self, *, meta: EnvelopeMeta, payload: Mapping[str, Any]
    ) -> Envelope[TaskRecord]:
        """Validate and persist one task owned by the caller."""

    @abstractmethod
    def get_task(self, *, meta: EnvelopeMeta, task_id: str) -> Envelope[TaskRecord]:
        """Read one caller-owned task by id."""

    @abstractmethod
    def list_tasks(
        self, *, meta: EnvelopeMeta, query: Mapping[str, Any]
    ) -> Envelope[list[TaskRecord]]:
        """List caller tasks newest first, filtered by status and priority."""

    @abstractmethod
    def update_task(
        self, *, meta: EnvelopeMeta, task_id: str, payload: Mapping[str, Any]
    ) -> Envelope[TaskRecord]:
        """Apply a partial update to one caller-owned task."""

    @abstractmethod
    def delete_task(self, *, meta: EnvelopeMeta, task_id: str) -> Envelope[bool]:
        """Delete one caller-owned task."""

    @abstractmethod
    def task_statistics(
        self,
        *,
        meta: EnvelopeMeta,
        start: datetime | None,
        end: datetime | None,
        series_since: datetime,
    ) -> Envelope[TaskStatistics]:
        """Return aggregate task counts for the caller within one window."""

    @abstractmethod
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Return service and owned dependency readiness status."""


def build_task_authority_service(
    *,
    settings: AutomatorSettings,
    substrate: SqlSubstrate,
) -> TaskAuthorityService:
    """Build default Task Authority implementation from typed settings."""
    from services.state.task_authority.config import resolve_task_authority_settings
    from services.state.task_authority.data import SqlTaskRepository, TaskSqlRuntime
    from services.state.task_authority.implementation import (
        DefaultTaskAuthorityService,
    )

    runtime = TaskSqlRuntime.from_substrate(substrate)
    return DefaultTaskAuthorityService(
        settings=resolve_task_authority_settings(settings),
        repository=SqlTaskRepository(runtime.sessions),
        runtime=runtime,
    )
