"""Authoritative SQL repository for Task Authority Service state."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from sqlalchemy import delete, func, insert, select, update

from packages.automator_shared.ids import generate_ulid_str
from packages.automator_shared.timestamps import ensure_utc, utc_now
from resources.substrates.sql import SqlSessionProvider
from services.state.task_authority.domain import (
    TaskPriority,
    TaskRecord,
    TaskStatus,
)
from services.state.task_authority.interfaces import TaskRepository

from .schema import tasks

_UPDATABLE_COLUMNS = frozenset(
    {"title", "description", "status", "priority", "due_date", "completed_at"}
)


class SqlTaskRepository(TaskRepository):
    """SQL repository over Task Authority-owned tables."""

    def __init__(self, sessions: SqlSessionProvider) -> None:
        self._sessions = sessions

    def create_task(
        self,
        *,
        user_id: str,
        title: str,
        description: str | None,
        status: TaskStatus,
        priority: TaskPriority,
        due_date: datetime | None,
        completed_at: datetime | None,
    ) -> TaskRecord:
        """Insert one task row and return the stored record."""
        now = utc_now()
        task_id = generate_ulid_str()
        with self._sessions.session() as session:
            session.execute(
                insert(tasks).values(
                    id=task_id,
                    user_id=user_id,
                    title=title,
                    description=description,
                    status=status.value,
                    priority=priority.value,
                    due_date=due_date,
                    completed_at=completed_at,
                    created_at=now,
                    updated_at=now,
                )
            )
            row = (
                session.execute(select(tasks).where(tasks.c.id == task_id))
                .mappings()
                .one()
            )
            return _to_task(row)

    def get_task(self, *, user_id: str, task_id: str) -> TaskRecord | None:
        """Read one task row by id within the owner's scope."""
        with self._sessions.session() as session:
            row = (
                session.execute(
                    select(tasks).where(
                        tasks.c.id == task_id, tasks.c.user_id == user_id
                    )
                )
                .mappings()
                .one_or_none()
            )
            return None if row is None else _to_task(row)

    def list_tasks(
        self,
        *,
        user_id: str,
        status: TaskStatus | None,
        priority: TaskPriority | None,
    ) -> list[TaskRecord]:
        """List owner tasks newest first with optional equality filters."""
        stmt = select(tasks).where(tasks.c.user_id == user_id)
        if status is not None:
            stmt = stmt.where(tasks.c.status == status.value)
        if priority is not None:
            stmt = stmt.where(tasks.c.priority == priority.value)
        stmt = stmt.order_by(tasks.c.created_at.desc(), tasks.c.id.desc())
        with self._sessions.session() as session:
            return [_to_task(row) for row in session.execute(stmt).mappings().all()]

    def update_task(
        self, *, user_id: str, task_id: str, changes: Mapping[str, Any]
    ) -> TaskRecord | None:
        """Apply column changes to one owned task and return the new record."""
        unknown = set(changes) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"unsupported task columns: {', '.join(sorted(unknown))}")
        values = {
            key: value.value if isinstance(value, (TaskStatus, TaskPriority)) else value
            for key, value in changes.items()
        }
        values["updated_at"] = utc_now()
        owned = (tasks.c.id == task_id, tasks.c.user_id == user_id)
        with self._sessions.session() as session:
            result = session.execute(update(tasks).where(*owned).values(**values))
            if int(result.rowcount or 0) == 0:
                return None
            row = session.execute(select(tasks).where(*owned)).mappings().one()
            return _to_task(row)

    def delete_task(self, *, user_id: str, task_id: str) -> bool:
        """Delete one owned task row and return whether it existed."""
        with self._sessions.session() as session:
            result = session.execute(
                delete(tasks).where(tasks.c.id == task_id, tasks.c.user_id == user_id)
            )
            return int(result.rowcount or 0) > 0

    def count_tasks(
        self,
        *,
        user_id: str,
        status: TaskStatus | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
        completed_from: datetime | None = None,
        completed_to: datetime | None = None,
    ) -> int:
        """Count owner tasks matching optional status and inclusive windows."""
        stmt = select(func.count()).select_from(tasks).where(tasks.c.user_id == user_id)
        if status is not None:
            stmt = stmt.where(tasks.c.status == status.value)
        if created_from is not None:
            stmt = stmt.where(tasks.c.created_at >= created_from)
        if created_to is not None:
            stmt = stmt.where(tasks.c.created_at <= created_to)
        if completed_from is not None:
            stmt = stmt.where(tasks.c.completed_at >= completed_from)
        if completed_to is not None:
            stmt = stmt.where(tasks.c.completed_at <= completed_to)
        with self._sessions.session() as session:
            return int(session.execute(stmt).scalar_one())

    def count_by_priority(
        self,
        *,
        user_id: str,
        created_from: datetime | None,
        created_to: datetime | None,
    ) -> dict[TaskPriority, int]:
        """Count owner tasks grouped by priority within an optional window."""
        stmt = (
            select(tasks.c.priority, func.count())
            .where(tasks.c.user_id == user_id)
            .group_by(tasks.c.priority)
        )
        if created_from is not None:
            stmt = stmt.where(tasks.c.created_at >= created_from)
        if created_to is not None:
            stmt = stmt.where(tasks.c.created_at <= created_to)
        with self._sessions.session() as session:
            return {
                TaskPriority(str(priority)): int(count)
                for priority, count in session.execute(stmt).all()
            }

    def list_completion_times(
        self, *, user_id: str, completed_since: datetime
    ) -> list[datetime]:
        """Return ascending completion timestamps of completed tasks since one instant."""
        stmt = (
            select(tasks.c.completed_at)
            .where(
                tasks.c.user_id == user_id,
                tasks.c.status == TaskStatus.COMPLETED.value,
                tasks.c.completed_at >= completed_since,
            )
            .order_by(tasks.c.completed_at.asc())
        )
        with self._sessions.session() as session:
            return [
                ensure_utc(value)
                for value in session.execute(stmt).scalars().all()
                if isinstance(value, datetime)
            ]


def _to_task(row: Mapping[str, Any]) -> TaskRecord:
    """Map one SQL row to strict domain task record."""
    return TaskRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=str(row["title"]),
        description=row["description"],
        status=TaskStatus(str(row["status"])),
        priority=TaskPriority(str(row["priority"])),
        due_date=_row_optional_dt(row, "due_date"),
        completed_at=_row_optional_dt(row, "completed_at"),
        created_at=_row_dt(row, "created_at"),
        updated_at=_row_dt(row, "updated_at"),
    )


def _row_dt(row: Mapping[str, Any], column: str) -> datetime:
    """Read and normalize one required timezone-aware datetime field."""
    value = row.get(column)
    if not isinstance(value, datetime):
        raise ValueError(f"expected datetime column for {column}")
    return ensure_utc(value)


def _row_optional_dt(row: Mapping[str, Any], column: str) -> datetime | None:
    """Read one nullable datetime field, normalizing present values to UTC."""
    if row.get(column) is None:
        return None
    return _row_dt(row, column)
