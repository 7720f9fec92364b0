"""Domain contracts for Notification Authority Service payloads."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class NotificationType(str, Enum):
    """Category of one notification."""

    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    TASK_REMINDER = "TASK_REMINDER"
    AGENT_UPDATE = "AGENT_UPDATE"


class NotificationRecord(BaseModel):
    """Authoritative notification owned by one user."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    user_id: str
    message: str
    type: NotificationType
    action_url: str | None
    read: bool
    created_at: datetime
    updated_at: datetime


class HealthStatus(BaseModel):
    """Notification Authority and owned dependency readiness status payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_ready: bool
    substrate_ready: bool
    detail: str
