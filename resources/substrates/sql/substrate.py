"""Shared SQL substrate contract and implementation."""

from __future__ import annotations

from threading import Lock
from typing import Protocol

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Engine, MetaData

from packages.automator_shared.config import DatabaseSettings
from packages.automator_shared.logging import get_logger
from resources.substrates.sql.engine import create_sql_engine
from resources.substrates.sql.health import ping
from resources.substrates.sql.session import SqlSessionProvider, create_session_factory

_LOGGER = get_logger(__name__)


class SqlHealthStatus(BaseModel):
    """SQL substrate readiness payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ready: bool
    detail: str


class SqlSubstrate(Protocol):
    """Protocol for shared SQL substrate operations."""

    @property
    def engine(self) -> Engine:
        """Return underlying SQLAlchemy engine."""

    @property
    def sessions(self) -> SqlSessionProvider:
        """Return the transactional session provider."""

    def ensure_schema(self, metadata: MetaData) -> None:
        """Create tables declared on one service metadata object."""

    def health(self) -> SqlHealthStatus:
        """Probe SQL substrate readiness."""

    def dispose(self) -> None:
        """Release pooled connections."""


class SharedSqlSubstrate(SqlSubstrate):
    """Concrete shared SQL substrate with schema provisioning and readiness probe."""

    def __init__(self, *, settings: DatabaseSettings) -> None:
        self._settings = settings
        self._engine = create_sql_engine(settings)
        self._sessions = SqlSessionProvider(
            session_factory=create_session_factory(self._engine)
        )
        self._schema_lock = Lock()

    @property
    def engine(self) -> Engine:
        """Return underlying SQLAlchemy engine."""
        return self._engine

    @property
    def sessions(self) -> SqlSessionProvider:
        """Return the transactional session provider."""
        return self._sessions

    def ensure_schema(self, metadata: MetaData) -> None:
        """Create missing tables for one service when startup provisioning is on."""
        if not self._settings.create_schema_on_startup:
            return
        with self._schema_lock:
            metadata.create_all(self._engine, checkfirst=True)
        _LOGGER.debug(
            "SQL schema ensured: tables=%s", ",".join(sorted(metadata.tables))
        )

    def health(self) -> SqlHealthStatus:
        """Return readiness from a bounded database ping."""
        try:
            ready = ping(
                self._engine,
                timeout_seconds=self._settings.health_timeout_seconds,
            )
        except Exception as exc:  # noqa: BLE001
            return SqlHealthStatus(
                ready=False,
                detail=f"database health probe failed: {type(exc).__name__}",
            )
        return SqlHealthStatus(
            ready=ready,
            detail="ok" if ready else "database ping failed",
        )

    def dispose(self) -> None:
        """Release pooled connections held by the engine."""
        self._engine.dispose()
