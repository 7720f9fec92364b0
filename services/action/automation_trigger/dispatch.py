"""Built-in agent dispatchers for Automation Trigger Service."""

from __future__ import annotations

from packages.automator_shared.logging import get_logger
from services.action.automation_trigger.domain import AgentJobRecord
from services.action.automation_trigger.interfaces import AgentDispatcher

_LOGGER = get_logger(__name__)


class UnimplementedAgentDispatcher(AgentDispatcher):
    """Dispatcher used when no agent runtime is configured; jobs stay RUNNING."""

    def dispatch(self, job: AgentJobRecord) -> None:
        _LOGGER.info(
            "agent execution not available; job left running: job_id=%s agent_type=%s",
            job.id,
            job.agent_type.value,
        )
