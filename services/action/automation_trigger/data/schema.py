"""SQLAlchemy table definitions owned by Automation Trigger Service."""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Index,
    MetaData,
    String,
    Table,
    Text,
)

from packages.automator_shared.ids import ULID_STR_LENGTH

metadata = MetaData()

agent_jobs = Table(
    "agent_jobs",
    metadata,
    Column("id", String(ULID_STR_LENGTH), primary_key=True),
    Column("user_id", String(128), nullable=False),
    Column("task_input", Text, nullable=False),
    Column("agent_type", String(16), nullable=False),
    Column("status", String(16), nullable=False),
    Column("result", Text, nullable=True),
    Column("error", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Column("completed_at", DateTime(timezone=True), nullable=True),
    CheckConstraint(
        "status IN ('PENDING', 'RUNNING', 'COMPLETED', 'FAILED')",
        name="ck_agent_jobs_status",
    ),
    CheckConstraint(
        "agent_type IN ('PLANNER', 'CALENDAR', 'SUMMARIZER', 'NOTIFICATIONS')",
        name="ck_agent_jobs_agent_type",
    ),
    Index("ix_agent_jobs_user_created", "user_id", "created_at"),
)
