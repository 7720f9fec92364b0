"""Pydantic settings for Task Authority Service behavior."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from packages.automator_shared.config import (
    AutomatorSettings,
    resolve_component_settings,
)
from services.state.task_authority.component import SERVICE_COMPONENT_ID


class TaskAuthoritySettings(BaseModel):
    """Task Authority Service runtime behavior settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_title_length: int = Field(default=500, gt=0)
    max_description_length: int = Field(default=10_000, gt=0)


def resolve_task_authority_settings(
    settings: AutomatorSettings,
) -> TaskAuthoritySettings:
    """Resolve settings from ``components.service.task_authority``."""
    return resolve_component_settings(
        settings=settings,
        component_id=str(SERVICE_COMPONENT_ID),
        model=TaskAuthoritySettings,
    )
