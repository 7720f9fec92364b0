"""Transport-neutral protocol interfaces used by Notification Authority Service."""

from __future__ import annotations

from typing import Protocol

from services.state.notification_authority.domain import (
    NotificationRecord,
    NotificationType,
)


class NotificationRepository(Protocol):
    """Protocol for owner-scoped notification persistence operations."""

    def create_notification(
        self,
        *,
        user_id: str,
        message: str,
        type: NotificationType,
        action_url: str | None,
    ) -> NotificationRecord:
        """Insert one unread notification and return the stored record."""

    def get_notification(
        self, *, user_id: str, notification_id: str
    ) -> NotificationRecord | None:
        """Read one notification by id within the owner's scope."""

    def list_notifications(
        self, *, user_id: str, read: bool | None, limit: int
    ) -> list[NotificationRecord]:
        """List owner notifications newest first, bounded by ``limit``."""

    def set_read(
        self, *, user_id: str, notification_id: str, read: bool
    ) -> NotificationRecord | None:
        """Set the read flag of one owned notification."""

    def mark_all_read(self, *, user_id: str) -> int:
        """Mark every unread owner notification read and return the count."""

    def delete_notification(self, *, user_id: str, notification_id: str) -> bool:
        """Delete one owned notification and return whether it existed."""

    def count_unread(self, *, user_id: str) -> int:
        """Count the owner's unread notifications."""
