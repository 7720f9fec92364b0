"""SQLAlchemy table definitions owned by Notification Authority Service."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Index, MetaData, String, Table, Text

from packages.automator_shared.ids import ULID_STR_LENGTH

metadata = MetaData()

notifications = Table(
    "notifications",
    metadata,
    Column("id", String(ULID_STR_LENGTH), primary_key=True),
    Column("user_id", String(128), nullable=False),
    Column("message", Text, nullable=False),
    Column("type", String(32), nullable=False),
    Column("action_url", String(2048), nullable=True),
    Column("read", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Index("ix_notifications_user_read_created", "user_id", "read", "created_at"),
)
