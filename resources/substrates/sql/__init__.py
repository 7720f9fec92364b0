"""Shared relational (SQLAlchemy) substrate primitives for Task Automator services."""

from resources.substrates.sql.component import MANIFEST, RESOURCE_COMPONENT_ID
from resources.substrates.sql.config import resolve_database_settings
from resources.substrates.sql.engine import create_sql_engine
from resources.substrates.sql.errors import (
    is_sql_error,
    normalize_sql_error,
    violates_constraint,
)
from resources.substrates.sql.health import ping
from resources.substrates.sql.session import (
    SqlSessionProvider,
    create_session_factory,
    transactional_session,
)
from resources.substrates.sql.substrate import (
    SharedSqlSubstrate,
    SqlHealthStatus,
    SqlSubstrate,
)

__all__ = [
    "MANIFEST",
    "RESOURCE_COMPONENT_ID",
    "SharedSqlSubstrate",
    "SqlHealthStatus",
    "SqlSessionProvider",
    "SqlSubstrate",
    "create_session_factory",
    "create_sql_engine",
    "is_sql_error",
    "normalize_sql_error",
    "ping",
    "resolve_database_settings",
    "transactional_session",
    "violates_constraint",
]
