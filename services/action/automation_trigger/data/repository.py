"""Authoritative SQL repository for Automation Trigger Service state."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from sqlalchemy import func, insert, select, update

from packages.automator_shared.ids import generate_ulid_str
from packages.automator_shared.timestamps import ensure_utc, utc_now
from resources.substrates.sql import SqlSessionProvider
from services.action.automation_trigger.domain import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    AgentJobRecord,
    AgentJobStatus,
    AgentType,
)
from services.action.automation_trigger.interfaces import AgentJobRepository

from .schema import agent_jobs


class SqlAgentJobRepository(AgentJobRepository):
    """SQL repository over Automation Trigger-owned tables."""

    def __init__(self, sessions: SqlSessionProvider) -> None:
        self._sessions = sessions

    def create_job(
        self, *, user_id: str, task_input: str, agent_type: AgentType
    ) -> AgentJobRecord:
        """Insert one PENDING job row and return the stored record."""
        now = utc_now()
        job_id = generate_ulid_str()
        with self._sessions.session() as session:
            session.execute(
                insert(agent_jobs).values(
                    id=job_id,
                    user_id=user_id,
                    task_input=task_input,
                    agent_type=agent_type.value,
                    status=AgentJobStatus.PENDING.value,
                    result=None,
                    error=None,
                    created_at=now,
                    updated_at=now,
                    completed_at=None,
                )
            )
            row = (
                session.execute(select(agent_jobs).where(agent_jobs.c.id == job_id))
                .mappings()
                .one()
            )
            return _to_job(row)

    def get_job(self, *, user_id: str, job_id: str) -> AgentJobRecord | None:
        """Read one job row by id within the owner's scope."""
        with self._sessions.session() as session:
            row = (
                session.execute(
                    select(agent_jobs).where(
                        agent_jobs.c.id == job_id, agent_jobs.c.user_id == user_id
                    )
                )
                .mappings()
                .one_or_none()
            )
            return None if row is None else _to_job(row)

    def list_jobs(
        self, *, user_id: str, status: AgentJobStatus | None
    ) -> list[AgentJobRecord]:
        """List owner jobs newest first with an optional status filter."""
        stmt = select(agent_jobs).where(agent_jobs.c.user_id == user_id)
        if status is not None:
            stmt = stmt.where(agent_jobs.c.status == status.value)
        stmt = stmt.order_by(agent_jobs.c.created_at.desc(), agent_jobs.c.id.desc())
        with self._sessions.session() as session:
            return [_to_job(row) for row in session.execute(stmt).mappings().all()]

    def transition_job(
        self,
        *,
        user_id: str,
        job_id: str,
        target: AgentJobStatus,
        result: str | None = None,
        error: str | None = None,
    ) -> AgentJobRecord | None:
        """Compare-and-set one owned job from any allowed source status."""
        sources = [
            current.value
            for current, allowed_target in ALLOWED_TRANSITIONS
            if allowed_target == target
        ]
        if not sources:
            return None
        now = utc_now()
        values: dict[str, Any] = {"status": target.value, "updated_at": now}
        if target in TERMINAL_STATUSES:
            values.update(result=result, error=error, completed_at=now)
        owned = (agent_jobs.c.id == job_id, agent_jobs.c.user_id == user_id)
        with self._sessions.session() as session:
            updated = session.execute(
                update(agent_jobs)
                .where(*owned, agent_jobs.c.status.in_(sources))
                .values(**values)
            )
            if int(updated.rowcount or 0) == 0:
                return None
            row = session.execute(select(agent_jobs).where(*owned)).mappings().one()
            return _to_job(row)

    def count_jobs(
        self,
        *,
        user_id: str,
        status: AgentJobStatus | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
        completed_from: datetime | None = None,
        completed_to: datetime | None = None,
    ) -> int:
        """Count owner jobs matching optional status and inclusive windows."""
        stmt = (
            select(func.count())
            .select_from(agent_jobs)
            .where(agent_jobs.c.user_id == user_id)
        )
        if status is not None:
            stmt = stmt.where(agent_jobs.c.status == status.value)
        if created_from is not None:
            stmt = stmt.where(agent_jobs.c.created_at >= created_from)
        if created_to is not None:
            stmt = stmt.where(agent_jobs.c.created_at <= created_to)
        if completed_from is not None:
            stmt = stmt.where(agent_jobs.c.completed_at >= completed_from)
        if completed_to is not None:
            stmt = stmt.where(agent_jobs.c.completed_at <= completed_to)
        with self._sessions.session() as session:
            return int(session.execute(stmt).scalar_one())


def _to_job(row: Mapping[str, Any]) -> AgentJobRecord:
    return AgentJobRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        task_input=str(row["task_input"]),
        agent_type=AgentType(str(row["agent_type"])),
        status=AgentJobStatus(str(row["status"])),
        result=row["result"],
        error=row["error"],
        created_at=_row_dt(row, "created_at"),
        updated_at=_row_dt(row, "updated_at"),
        completed_at=_row_optional_dt(row, "completed_at"),
    )


def _row_dt(row: Mapping[str, Any], column: str) -> datetime:
    value = row.get(column)
    if not isinstance(value, datetime):
        raise ValueError(f"expected datetime column for {column}")
    return ensure_utc(value)


def _row_optional_dt(row: Mapping[str, Any], column: str) -> datetime | None:
    if row.get(column) is None:
        return None
    return _row_dt(row, column)
