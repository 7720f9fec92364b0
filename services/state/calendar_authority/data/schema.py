"""SQLAlchemy table definitions owned by Calendar Authority Service."""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
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

TIME_ORDER_CONSTRAINT = "ck_calendar_events_time_order"

calendar_events = Table(
    "calendar_events",
    metadata,
    Column("id", String(ULID_STR_LENGTH), primary_key=True),
    Column("user_id", String(128), nullable=False),
    Column("title", String(500), nullable=False),
    Column("description", Text, nullable=True),
    Column("start_time", DateTime(timezone=True), nullable=False),
    Column("end_time", DateTime(timezone=True), nullable=False),
    Column("all_day", Boolean, nullable=False, default=False),
    Column("color", String(64), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("end_time > start_time", name=TIME_ORDER_CONSTRAINT),
    Index("ix_calendar_events_user_start", "user_id", "start_time"),
)
