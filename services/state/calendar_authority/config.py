"""Pydantic settings for Calendar Authority Service behavior."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from packages.automator_shared.config import (
    AutomatorSettings,
    resolve_component_settings,
)
from services.state.calendar_authority.component import SERVICE_COMPONENT_ID


class CalendarAuthoritySettings(BaseModel):
    """Calendar Authority Service runtime behavior settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_title_length: int = Field(default=500, gt=0)


def resolve_calendar_authority_settings(
    settings: AutomatorSettings,
) -> CalendarAuthoritySettings:
    """Resolve settings from ``components.service.calendar_authority``."""
    return resolve_component_settings(
        settings=settings,
        component_id=str(SERVICE_COMPONENT_ID),
        model=CalendarAuthoritySettings,
    )
