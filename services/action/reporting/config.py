"""Pydantic settings for Reporting Service behavior."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from packages.automator_shared.config import (
    AutomatorSettings,
    resolve_component_settings,
)
from services.action.reporting.component import SERVICE_COMPONENT_ID


class ReportingSettings(BaseModel):
    """Reporting Service runtime behavior settings.

    ``series_days`` is the look-back length of the completed-task series.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    series_days: int = Field(default=7, gt=0, le=366)


def resolve_reporting_settings(settings: AutomatorSettings) -> ReportingSettings:
    """Resolve settings from ``components.service.reporting``."""
    return resolve_component_settings(
        settings=settings,
        component_id=str(SERVICE_COMPONENT_ID),
        model=ReportingSettings,
    )
