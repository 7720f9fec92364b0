"""Settings resolution for the shared SQL substrate."""

from __future__ import annotations

from packages.automator_shared.config import AutomatorSettings, DatabaseSettings


def resolve_database_settings(settings: AutomatorSettings) -> DatabaseSettings:
    """Return the typed ``database`` settings subtree."""
    return settings.database


def is_sqlite_url(url: str) -> bool:
    """Return ``True`` when the URL targets a SQLite database."""
    return url.strip().lower().startswith("sqlite")


def is_sqlite_memory_url(url: str) -> bool:
    """Return ``True`` for in-memory SQLite URLs, which need one shared connection."""
    normalized = url.strip().lower()
    if not is_sqlite_url(normalized):
        return False
    _, _, database = normalized.partition("://")
    database = database.lstrip("/")
    return database in {"", ":memory:"} or "mode=memory" in database
