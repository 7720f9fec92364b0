"""SQL repository tests for Notification Authority over in-memory SQLite."""

from __future__ import annotations

import pytest

from services.state.notification_authority.data import (
    NotificationSqlRuntime,
    SqlNotificationRepository,
)
from services.state.notification_authority.domain import NotificationType


@pytest.fixture
def repository(sql_substrate) -> SqlNotificationRepository:
    """Repository over a freshly provisioned notifications schema."""
    runtime = NotificationSqlRuntime.from_substrate(sql_substrate)
    return SqlNotificationRepository(runtime.sessions)


def _create(repository, message: str, *, user_id: str = "user-1"):
    return repository.create_notification(
        user_id=user_id,
        message=message,
        type=NotificationType.TASK_REMINDER,
        action_url="https://example.com/tasks",
    )


def test_create_roundtrip(repository) -> None:
    """Stored rows map back to typed unread records."""
    created = _create(repository, "Due soon")

    fetched = repository.get_notification(
        user_id="user-1", notification_id=created.id
    )

    assert fetched == created
    assert fetched.type == NotificationType.TASK_REMINDER
    assert fetched.read is False
    assert repository.get_notification(
        user_id="other", notification_id=created.id
    ) is None


def test_list_filters_by_read_and_honors_limit(repository) -> None:
    """Read filter and limit both narrow the listing, newest first."""
    first = _create(repository, "one")
    second = _create(repository, "two")
    third = _create(repository, "three")
    repository.set_read(user_id="user-1", notification_id=first.id, read=True)

    unread = repository.list_notifications(user_id="user-1", read=False, limit=10)
    limited = repository.list_notifications(user_id="user-1", read=None, limit=2)

    assert {row.id for row in unread} == {second.id, third.id}
    assert len(limited) == 2


def test_mark_all_read_counts_only_unread_owned_rows(repository) -> None:
    """Bulk read returns the number of rows it flipped."""
    first = _create(repository, "one")
    _create(repository, "two")
    _create(repository, "theirs", user_id="other")
    repository.set_read(user_id="user-1", notification_id=first.id, read=True)

    assert repository.count_unread(user_id="user-1") == 1
    assert repository.mark_all_read(user_id="user-1") == 1
    assert repository.count_unread(user_id="user-1") == 0
    assert repository.count_unread(user_id="other") == 1


def test_set_read_and_delete_are_owner_scoped(repository) -> None:
    """Other owners cannot flip or delete a notification."""
    created = _create(repository, "mine")

    assert repository.set_read(
        user_id="other", notification_id=created.id, read=True
    ) is None
    assert repository.delete_notification(
        user_id="other", notification_id=created.id
    ) is False
    assert repository.delete_notification(
        user_id="user-1", notification_id=created.id
    ) is True
