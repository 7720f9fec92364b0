"""Transport-neutral protocol interfaces used by Automation Trigger Service."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from services.action.automation_trigger.domain import (
    AgentJobRecord,
    AgentJobStatus,
    AgentType,
)


class AgentJobRepository(Protocol):
    """Protocol for owner-scoped agent job persistence operations."""

    def create_job(
        self, *, user_id: str, task_input: str, agent_type: AgentType
    ) -> AgentJobRecord:
        """Insert one PENDING job and return the stored record."""

    def get_job(self, *, user_id: str, job_id: str) -> AgentJobRecord | None:
        """Read one job by id within the owner's scope."""

    def list_jobs(
        self, *, user_id: str, status: AgentJobStatus | None
    ) -> list[AgentJobRecord]:
        """List owner jobs newest first with an optional status filter."""

    def transition_job(
        self,
        *,
        user_id: str,
        job_id: str,
        target: AgentJobStatus,
        result: str | None = None,
        error: str | None = None,
    ) -> AgentJobRecord | None:
        """Move one owned job to ``target`` when the transition is allowed.

        Returns ``None`` when the job does not exist or its current status
        does not permit the move.
        """

    def count_jobs(
        self,
        *,
        user_id: str,
        status: AgentJobStatus | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
        completed_from: datetime | None = None,
        completed_to: datetime | None = None,
    ) -> int:
        """Count owner jobs matching optional status and inclusive windows."""


class AgentDispatcher(Protocol):
    """Hand-off point that executes RUNNING jobs outside the request path.

    Implementations own the RUNNING to COMPLETED or FAILED transitions.
    """

    def dispatch(self, job: AgentJobRecord) -> None:
        """Accept one RUNNING job for asynchronous execution."""
