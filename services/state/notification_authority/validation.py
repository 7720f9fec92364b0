"""Pydantic request-validation models for Notification Authority Service API."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import Field, StrictBool, field_validator

from packages.automator_shared.validation import QueryModel, RequestModel
from services.state.notification_authority.domain import NotificationType


class CreateNotificationRequest(RequestModel):
    """Validated create-notification request shape."""

    message: str = Field(min_length=1)
    type: NotificationType = NotificationType.INFO
    action_url: str | None = None

    @field_validator("action_url")
    @classmethod
    def _validate_action_url(cls, value: str | None) -> str | None:
        """Require an absolute URL with scheme and host."""
        if value is None:
            return None
        parts = urlsplit(value)
        if not parts.scheme or not parts.netloc or " " in value:
            raise ValueError("actionUrl must be an absolute URL")
        return value


class MarkReadRequest(RequestModel):
    """Validated read-flag update; omitting ``read`` marks the notification read."""

    read: StrictBool = True


class ListNotificationsRequest(QueryModel):
    """Validated list-notifications query parameters."""

    read: bool | None = None
    limit: int | None = Field(default=None, gt=0)
