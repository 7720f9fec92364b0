"""Shared pytest fixtures for Task Automator tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from packages.automator_shared.config import (
    AutomatorSettings,
    DatabaseSettings,
    load_settings,
)
from resources.substrates.sql.substrate import SharedSqlSubstrate

TEST_SQLITE_URL = "sqlite+pysqlite:///:memory:"


@pytest.fixture(autouse=True)
def _isolated_config_file(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Point the YAML config source at a missing file and clear env overrides."""
    monkeypatch.setenv("AUTOMATOR_CONFIG_FILE", str(tmp_path / "missing.yaml"))
    for name in ("AUTOMATOR_DATABASE__URL", "AUTOMATOR_HTTP__API_PREFIX"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sqlite_settings() -> AutomatorSettings:
    """Runtime settings backed by a private in-memory SQLite database."""
    return load_settings(
        database={"url": TEST_SQLITE_URL},
        session={"secret_key": "test-secret"},
        logging={"json_output": False, "level": "DEBUG"},
    )


@pytest.fixture
def sql_substrate() -> Iterator[SharedSqlSubstrate]:
    """Shared SQL substrate over a fresh in-memory SQLite database."""
    substrate = SharedSqlSubstrate(settings=DatabaseSettings(url=TEST_SQLITE_URL))
    try:
        yield substrate
    finally:
        substrate.dispose()
