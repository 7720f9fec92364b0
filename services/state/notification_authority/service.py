"""Authoritative in-process Python API for Notification Authority Service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from packages.automator_shared.config import AutomatorSettings
from packages.automator_shared.envelope import Envelope, EnvelopeMeta
from resources.substrates.sql.substrate import SqlSubstrate
from services.state.notification_authority.domain import (
    HealthStatus,
    NotificationRecord,
)


class NotificationAuthorityService(ABC):
    """Public API for owner-scoped notification operations."""

    @abstractmethod
    def create_notification(
        self, *, meta: EnvelopeMeta, payload: Mapping[str, Any]
    ) -> Envelope[NotificationRecord]:
        """Validate and persist one unread notification for the caller."""

    @abstractmethod
    def get_notification(
        self, *, meta: EnvelopeMeta, notification_id: str
    ) -> Envelope[NotificationRecord]:
        """Read one caller-owned notification by id."""

    @abstractmethod
    def list_notifications(
        self, *, meta: EnvelopeMeta, query: Mapping[str, Any]
    ) -> Envelope[list[NotificationRecord]]:
        """List caller notifications newest first, filtered by read state."""

    @abstractmethod
    def mark_read(
        self,
        *,
        meta: EnvelopeMeta,
        notification_id: str,
        payload: Mapping[str, Any],
    ) -> Envelope[NotificationRecord]:
        """Set the read flag of one caller-owned notification."""

    @abstractmethod
    def mark_all_read(self, *, meta: EnvelopeMeta) -> Envelope[int]:
        """Mark every unread caller notification read."""

    @abstractmethod
    def delete_notification(
        self, *, meta: EnvelopeMeta, notification_id: str
    ) -> Envelope[bool]:
        """Delete one caller-owned notification."""

    @abstractmethod
    def count_unread(self, *, meta: EnvelopeMeta) -> Envelope[int]:
        """Count the caller's unread notifications."""

    @abstractmethod
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Return service and owned dependency readiness status."""


def build_notification_authority_service(
    *,
    settings: AutomatorSettings,
    substrate: SqlSubstrate,
) -> NotificationAuthorityService:
    """Build default Notification Authority implementation from typed settings."""
    from services.state.notification_authority.config import (
        resolve_notification_authority_settings,
    )
    from services.state.notification_authority.data import (
        NotificationSqlRuntime,
        SqlNotificationRepository,
    )
    from services.state.notification_authority.implementation import (
        DefaultNotificationAuthorityService,
    )

    runtime = NotificationSqlRuntime.from_substrate(substrate)
    return DefaultNotificationAuthorityService(
        settings=resolve_notification_authority_settings(settings),
        repository=SqlNotificationRepository(runtime.sessions),
        runtime=runtime,
    )
