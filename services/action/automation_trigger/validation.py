"""Pydantic request-validation models for Automation Trigger Service API."""

from __future__ import annotations

from pydantic import Field

from packages.automator_shared.validation import QueryModel, RequestModel
from services.action.automation_trigger.domain import AgentJobStatus, AgentType


class TriggerRequest(RequestModel):
    """Validated automation trigger request shape."""

    task_input: str = Field(min_length=1)
    agent_type: AgentType = AgentType.PLANNER


class ListJobsRequest(QueryModel):
    """Validated list-jobs query parameters."""

    status: AgentJobStatus | None = None
