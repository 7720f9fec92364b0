"""Authoritative in-process Python API for Reporting Service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from packages.automator_shared.config import AutomatorSettings
from packages.automator_shared.envelope import Envelope, EnvelopeMeta
from services.action.automation_trigger.service import AutomationTriggerService
from services.action.reporting.domain import HealthStatus, Report
from services.state.calendar_authority.service import CalendarAuthorityService
from services.state.notification_authority.service import (
    NotificationAuthorityService,
)
from services.state.task_authority.service import TaskAuthorityService


class ReportingService(ABC):
    """Public API for read-only cross-resource productivity reports."""

    @abstractmethod
    def generate_report(
        self, *, meta: EnvelopeMeta, query: Mapping[str, Any]
    ) -> Envelope[Report]:
        """Aggregate caller statistics over an optional inclusive window."""

    @abstractmethod
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Return readiness of the services this report reads from."""


def build_reporting_service(
    *,
    settings: AutomatorSettings,
    task_service: TaskAuthorityService,
    calendar_service: CalendarAuthorityService,
    notification_service: NotificationAuthorityService,
    automation_service: AutomationTriggerService,
) -> ReportingService:
    """Build default Reporting implementation from typed settings."""
    from services.action.reporting.config import resolve_reporting_settings
    from services.action.reporting.implementation import DefaultReportingService

    return DefaultReportingService(
        settings=resolve_reporting_settings(settings),
        task_service=task_service,
        calendar_service=calendar_service,
        notification_service=notification_service,
        automation_service=automation_service,
    )
