"""Tests for the shared SQL substrate over SQLite."""

from __future__ import annotations

import pytest
from sqlalchemy import (
    CheckConstraint,
    Column,
    Integer,
    MetaData,
    String,
    Table,
    insert,
    select,
)
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.pool import StaticPool

from packages.automator_shared.config import DatabaseSettings
from packages.automator_shared.errors import ErrorCategory, codes
from resources.substrates.sql import (
    SharedSqlSubstrate,
    create_sql_engine,
    is_sql_error,
    normalize_sql_error,
    violates_constraint,
)
from resources.substrates.sql.config import is_sqlite_memory_url, is_sqlite_url

_metadata = MetaData()
_widgets = Table(
    "widgets",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(32), nullable=False, unique=True),
    Column("size", Integer, nullable=False, server_default="1"),
    CheckConstraint("size > 0", name="ck_widgets_size_positive"),
)


@pytest.mark.parametrize(
    ("url", "sqlite", "memory"),
    [
        ("sqlite+pysqlite:///:memory:", True, True),
        ("sqlite://", True, True),
        ("sqlite:///file:db?mode=memory&cache=shared", True, True),
        ("sqlite:////var/lib/automator.db", True, False),
        ("postgresql+psycopg://u:p@localhost/db", False, False),
    ],
)
def test_sqlite_url_detection(url: str, sqlite: bool, memory: bool) -> None:
    assert is_sqlite_url(url) is sqlite
    assert is_sqlite_memory_url(url) is memory


def test_memory_engine_uses_single_static_connection() -> None:
    engine = create_sql_engine(DatabaseSettings(url="sqlite+pysqlite:///:memory:"))

    assert isinstance(engine.pool, StaticPool)
    engine.dispose()


def test_ensure_schema_and_health(sql_substrate: SharedSqlSubstrate) -> None:
    """Provisioned tables are visible to every session from the provider."""
    sql_substrate.ensure_schema(_metadata)
    sql_substrate.ensure_schema(_metadata)

    with sql_substrate.sessions.session() as session:
        session.execute(insert(_widgets).values(name="sprocket"))
    with sql_substrate.sessions.session() as session:
        names = session.execute(select(_widgets.c.name)).scalars().all()

    assert names == ["sprocket"]
    assert sql_substrate.health().ready is True


def test_failed_session_rolls_back(sql_substrate: SharedSqlSubstrate) -> None:
    sql_substrate.ensure_schema(_metadata)

    with pytest.raises(IntegrityError):
        with sql_substrate.sessions.session() as session:
            session.execute(insert(_widgets).values(name="dup"))
            session.execute(insert(_widgets).values(name="dup"))

    with sql_substrate.sessions.session() as session:
        assert session.execute(select(_widgets)).all() == []


def test_schema_provisioning_can_be_disabled() -> None:
    substrate = SharedSqlSubstrate(
        settings=DatabaseSettings(
            url="sqlite+pysqlite:///:memory:", create_schema_on_startup=False
        )
    )
    substrate.ensure_schema(_metadata)

    with pytest.raises(OperationalError):
        with substrate.sessions.session() as session:
            session.execute(select(_widgets))
    substrate.dispose()


def test_normalize_sql_error_categories() -> None:
    integrity = IntegrityError("INSERT", {}, Exception("unique"))
    operational = OperationalError("SELECT", {}, Exception("gone"))

    assert is_sql_error(integrity) is True
    assert is_sql_error(RuntimeError("x")) is False
    constraint = normalize_sql_error(integrity)
    assert constraint.category == ErrorCategory.INTERNAL
    assert constraint.code == codes.CONSTRAINT_VIOLATION
    unavailable = normalize_sql_error(operational)
    assert unavailable.code == codes.DEPENDENCY_UNAVAILABLE
    assert unavailable.retryable is True
    assert normalize_sql_error(RuntimeError("x")).category == ErrorCategory.INTERNAL


def test_check_violation_is_detected_by_constraint_name(
    sql_substrate: SharedSqlSubstrate,
) -> None:
    """A named CHECK failure is identifiable and never maps to a client error."""
    sql_substrate.ensure_schema(_metadata)

    with pytest.raises(IntegrityError) as caught:
        with sql_substrate.sessions.session() as session:
            session.execute(insert(_widgets).values(name="flat", size=0))

    assert violates_constraint(caught.value, "ck_widgets_size_positive") is True
    assert violates_constraint(caught.value, "ck_other") is False
    assert violates_constraint(RuntimeError("ck_widgets_size_positive"), "x") is False
    assert normalize_sql_error(caught.value).category == ErrorCategory.INTERNAL
