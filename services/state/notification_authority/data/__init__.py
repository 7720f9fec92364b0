"""Data-layer exports for Notification Authority Service."""

from services.state.notification_authority.data.repository import (
    SqlNotificationRepository,
)
from services.state.notification_authority.data.runtime import NotificationSqlRuntime

__all__ = ["NotificationSqlRuntime", "SqlNotificationRepository"]
