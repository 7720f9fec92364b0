"""Authoritative SQL repository for Notification Authority Service state."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from sqlalchemy import delete, false, func, insert, select, update

from packages.automator_shared.ids import generate_ulid_str
from packages.automator_shared.timestamps import ensure_utc, utc_now
from resources.substrates.sql import SqlSessionProvider
from services.state.notification_authority.domain import (
    NotificationRecord,
    NotificationType,
)
from services.state.notification_authority.interfaces import NotificationRepository

from .schema import notifications


class SqlNotificationRepository(NotificationRepository):
    """SQL repository over Notification Authority-owned tables."""

    def __init__(self, sessions: SqlSessionProvider) -> None:
        self._sessions = sessions

    def create_notification(
        self,
        *,
        user_id: str,
        message: str,
        type: NotificationType,
        action_url: str | None,
    ) -> NotificationRecord:
        """Insert one unread notification row and return the stored record."""
        now = utc_now()
        notification_id = generate_ulid_str()
        with self._sessions.session() as session:
            session.execute(
                insert(notifications).values(
                    id=notification_id,
                    user_id=user_id,
                    message=message,
                    type=type.value,
                    action_url=action_url,
                    read=False,
                    created_at=now,
                    updated_at=now,
                )
            )
            row = (
                session.execute(
                    select(notifications).where(notifications.c.id == notification_id)
                )
                .mappings()
                .one()
            )
            return _to_notification(row)

    def get_notification(
        self, *, user_id: str, notification_id: str
    ) -> NotificationRecord | None:
        """Read one notification row by id within the owner's scope."""
        with self._sessions.session() as session:
            row = (
                session.execute(
                    select(notifications).where(
                        notifications.c.id == notification_id,
                        notifications.c.user_id == user_id,
                    )
                )
                .mappings()
                .one_or_none()
            )
            return None if row is None else _to_notification(row)

    def list_notifications(
        self, *, user_id: str, read: bool | None, limit: int
    ) -> list[NotificationRecord]:
        """List owner notifications newest first, bounded by ``limit``."""
        stmt = select(notifications).where(notifications.c.user_id == user_id)
        if read is not None:
            stmt = stmt.where(notifications.c.read == read)
        stmt = stmt.order_by(
            notifications.c.created_at.desc(), notifications.c.id.desc()
        ).limit(limit)
        with self._sessions.session() as session:
            return [
                _to_notification(row) for row in session.execute(stmt).mappings().all()
            ]

    def set_read(
        self, *, user_id: str, notification_id: str, read: bool
    ) -> NotificationRecord | None:
        """Set the read flag of one owned notification row."""
        owned = (
            notifications.c.id == notification_id,
            notifications.c.user_id == user_id,
        )
        with self._sessions.session() as session:
            result = session.execute(
                update(notifications)
                .where(*owned)
                .values(read=read, updated_at=utc_now())
            )
            if int(result.rowcount or 0) == 0:
                return None
            row = session.execute(select(notifications).where(*owned)).mappings().one()
            return _to_notification(row)

    def mark_all_read(self, *, user_id: str) -> int:
        """Mark every unread owner notification read and return the count."""
        with self._sessions.session() as session:
            result = session.execute(
                update(notifications)
                .where(
                    notifications.c.user_id == user_id,
                    notifications.c.read == false(),
                )
                .values(read=True, updated_at=utc_now())
            )
            return int(result.rowcount or 0)

    def delete_notification(self, *, user_id: str, notification_id: str) -> bool:
        """Delete one owned notification row and return whether it existed."""
        with self._sessions.session() as session:
            result = session.execute(
                delete(notifications).where(
                    notifications.c.id == notification_id,
                    notifications.c.user_id == user_id,
                )
            )
            return int(result.rowcount or 0) > 0

    def count_unread(self, *, user_id: str) -> int:
        """Count the owner's unread notification rows."""
        stmt = (
            select(func.count())
            .select_from(notifications)
            .where(
                notifications.c.user_id == user_id,
                notifications.c.read == false(),
            )
        )
        with self._sessions.session() as session:
            return int(session.execute(stmt).scalar_one())


def _to_notification(row: Mapping[str, Any]) -> NotificationRecord:
    """Map one SQL row to strict domain notification record."""
    return NotificationRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        message=str(row["message"]),
        type=NotificationType(str(row["type"])),
        action_url=row["action_url"],
        read=bool(row["read"]),
        created_at=_row_dt(row, "created_at"),
        updated_at=_row_dt(row, "updated_at"),
    )


def _row_dt(row: Mapping[str, Any], column: str) -> datetime:
    """Read and normalize one timezone-aware datetime field from SQL row."""
    value = row.get(column)
    if not isinstance(value, datetime):
        raise ValueError(f"expected datetime column for {column}")
    return ensure_utc(value)
