"""Domain contracts for Automation Trigger Service payloads."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class AgentType(str, Enum):
    """Kinds of automation agent a job can be addressed to."""

    PLANNER = "PLANNER"
    CALENDAR = "CALENDAR"
    SUMMARIZER = "SUMMARIZER"
    NOTIFICATIONS = "NOTIFICATIONS"


class AgentJobStatus(str, Enum):
    """Lifecycle states of one agent job."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


ALLOWED_TRANSITIONS: frozenset[tuple[AgentJobStatus, AgentJobStatus]] = frozenset(
    {
        (AgentJobStatus.PENDING, AgentJobStatus.RUNNING),
        (AgentJobStatus.PENDING, AgentJobStatus.FAILED),
        (AgentJobStatus.RUNNING, AgentJobStatus.COMPLETED),
        (AgentJobStatus.RUNNING, AgentJobStatus.FAILED),
    }
)

TERMINAL_STATUSES = frozenset({AgentJobStatus.COMPLETED, AgentJobStatus.FAILED})


def can_transition(current: AgentJobStatus, target: AgentJobStatus) -> bool:
    """Return whether one job may move from ``current`` to ``target``."""
    return (current, target) in ALLOWED_TRANSITIONS


class AgentJobRecord(BaseModel):
    """Persisted automation request; ``completed_at`` is set on terminal states."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    user_id: str
    task_input: str
    agent_type: AgentType
    status: AgentJobStatus
    result: str | None
    error: str | None
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None


class JobStatistics(BaseModel):
    """Caller job counts for reporting."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total: int
    completed: int


class HealthStatus(BaseModel):
    """Automation Trigger and owned dependency readiness status payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_ready: bool
    substrate_ready: bool
    detail: str
