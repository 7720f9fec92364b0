"""Pydantic settings for Notification Authority Service behavior."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from packages.automator_shared.config import (
    AutomatorSettings,
    resolve_component_settings,
)
from services.state.notification_authority.component import SERVICE_COMPONENT_ID


class NotificationAuthoritySettings(BaseModel):
    """Notification Authority Service runtime behavior settings.

    ``max_list_limit`` caps the ``limit`` query parameter; larger requests are
    clamped rather than rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_list_limit: int = Field(default=100, gt=0)
    max_message_length: int = Field(default=2000, gt=0)


def resolve_notification_authority_settings(
    settings: AutomatorSettings,
) -> NotificationAuthoritySettings:
    """Resolve settings from ``components.service.notification_authority``."""
    return resolve_component_settings(
        settings=settings,
        component_id=str(SERVICE_COMPONENT_ID),
        model=NotificationAuthoritySettings,
    )
