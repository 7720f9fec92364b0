"""SQLAlchemy engine construction for the shared SQL substrate."""

from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool

from packages.automator_shared.config import DatabaseSettings
from resources.substrates.sql.config import is_sqlite_memory_url, is_sqlite_url


def create_sql_engine(config: DatabaseSettings) -> Engine:
    """Construct a configured SQLAlchemy engine for the configured URL.

    Server databases get a bounded connection pool. SQLite gets thread-shared
    connections, and in-memory SQLite a single static connection so every
    session sees the same database.
    """
    if is_sqlite_url(config.url):
        if is_sqlite_memory_url(config.url):
            return create_engine(
                config.url,
                echo=config.echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(
            config.url,
            echo=config.echo,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        config.url,
        echo=config.echo,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout_seconds,
        pool_pre_ping=config.pool_pre_ping,
    )
