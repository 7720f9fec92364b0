"""Authoritative in-process Python API for Automation Trigger Service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping

from packages.automator_shared.config import AutomatorSettings
from packages.automator_shared.envelope import Envelope, EnvelopeMeta
from resources.substrates.sql.substrate import SqlSubstrate
from services.action.automation_trigger.domain import (
    AgentJobRecord,
    HealthStatus,
    JobStatistics,
)
from services.action.automation_trigger.interfaces import AgentDispatcher


class AutomationTriggerService(ABC):
    """Public API for requesting and inspecting automation agent jobs."""

    @abstractmethod
    def trigger(
        self, *, meta: EnvelopeMeta, payload: Mapping[str, Any]
    ) -> Envelope[AgentJobRecord]:
        """Persist one job, start it and hand it to the dispatcher."""

    @abstractmethod
    def get_job(self, *, meta: EnvelopeMeta, job_id: str) -> Envelope[AgentJobRecord]:
        """Read one caller-owned job by id."""

    @abstractmethod
    def list_jobs(
        self, *, meta: EnvelopeMeta, query: Mapping[str, Any]
    ) -> Envelope[list[AgentJobRecord]]:
        """List caller jobs newest first."""

    @abstractmethod
    def job_statistics(
        self,
        *,
        meta: EnvelopeMeta,
        start: datetime | None,
        end: datetime | None,
    ) -> Envelope[JobStatistics]:
        """Count caller jobs created and completed within an optional window."""

    @abstractmethod
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Return service and owned dependency readiness status."""


def build_automation_trigger_service(
    *,
    settings: AutomatorSettings,
    substrate: SqlSubstrate,
    dispatcher: AgentDispatcher | None = None,
) -> AutomationTriggerService:
    """Build default Automation Trigger implementation from typed settings."""
    from services.action.automation_trigger.config import (
        resolve_automation_trigger_settings,
    )
    from services.action.automation_trigger.data import (
        AgentJobSqlRuntime,
        SqlAgentJobRepository,
    )
    from services.action.automation_trigger.dispatch import (
        UnimplementedAgentDispatcher,
    )
    from services.action.automation_trigger.implementation import (
        DefaultAutomationTriggerService,
    )

    runtime = AgentJobSqlRuntime.from_substrate(substrate)
    return DefaultAutomationTriggerService(
        settings=resolve_automation_trigger_settings(settings),
        repository=SqlAgentJobRepository(runtime.sessions),
        dispatcher=dispatcher or UnimplementedAgentDispatcher(),
        runtime=runtime,
    )
