"""Notification Authority Service native package exports."""

from services.state.notification_authority.component import MANIFEST
from services.state.notification_authority.config import (
    NotificationAuthoritySettings,
)
from services.state.notification_authority.domain import (
    NotificationRecord,
    NotificationType,
)
from services.state.notification_authority.implementation import (
    DefaultNotificationAuthorityService,
)
from services.state.notification_authority.service import (
    NotificationAuthorityService,
)

__all__ = [
    "MANIFEST",
    "DefaultNotificationAuthorityService",
    "NotificationAuthorityService",
    "NotificationAuthoritySettings",
    "NotificationRecord",
    "NotificationType",
]
