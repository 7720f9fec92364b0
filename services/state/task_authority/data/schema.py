"""SQLAlchemy table definitions owned by Task Authority Service."""

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

tasks = Table(
    "tasks",
    metadata,
    Column("id", String(ULID_STR_LENGTH), primary_key=True),
    Column("user_id", String(128), nullable=False),
    Column("title", String(500), nullable=False),
    Column("description", Text, nullable=True),
    Column("status", String(16), nullable=False),
    Column("priority", String(16), nullable=False),
    Column("due_date", DateTime(timezone=True), nullable=True),
    Column("completed_at", DateTime(timezone=True), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint(
        "status IN ('TODO', 'IN_PROGRESS', 'COMPLETED')", name="ck_tasks_status"
    ),
    CheckConstraint("priority IN ('LOW', 'MEDIUM', 'HIGH')", name="ck_tasks_priority"),
    Index("ix_tasks_user_created", "user_id", "created_at"),
    Index("ix_tasks_user_completed", "user_id", "completed_at"),
)
