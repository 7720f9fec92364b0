"""Pydantic settings for Automation Trigger Service behavior."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from packages.automator_shared.config import (
    AutomatorSettings,
    resolve_component_settings,
)
from services.action.automation_trigger.component import SERVICE_COMPONENT_ID


class AutomationTriggerSettings(BaseModel):
    """Automation Trigger Service runtime behavior settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_task_input_length: int = Field(default=10000, gt=0)


def resolve_automation_trigger_settings(
    settings: AutomatorSettings,
) -> AutomationTriggerSettings:
    """Resolve settings from ``components.service.automation_trigger``."""
    return resolve_component_settings(
        settings=settings,
        component_id=str(SERVICE_COMPONENT_ID),
        model=AutomationTriggerSettings,
    )
