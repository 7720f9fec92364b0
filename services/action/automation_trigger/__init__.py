"""Automation Trigger Service native package exports."""

from services.action.automation_trigger.component import MANIFEST
from services.action.automation_trigger.config import AutomationTriggerSettings
from services.action.automation_trigger.dispatch import UnimplementedAgentDispatcher
from services.action.automation_trigger.domain import (
    AgentJobRecord,
    AgentJobStatus,
    AgentType,
    JobStatistics,
)
from services.action.automation_trigger.implementation import (
    DefaultAutomationTriggerService,
)
from services.action.automation_trigger.interfaces import AgentDispatcher
from services.action.automation_trigger.service import AutomationTriggerService

__all__ = [
    "MANIFEST",
    "AgentDispatcher",
    "AgentJobRecord",
    "AgentJobStatus",
    "AgentType",
    "AutomationTriggerService",
    "AutomationTriggerSettings",
    "DefaultAutomationTriggerService",
    "JobStatistics",
    "UnimplementedAgentDispatcher",
]
