"""Tests for layered runtime settings and component settings resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from packages.automator_shared.config import load_settings, resolve_component_settings
from services.state.notification_authority.config import (
    NotificationAuthoritySettings,
    resolve_notification_authority_settings,
)


def test_yaml_file_is_lowest_precedence_source(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Init kwargs override env, env overrides YAML, YAML overrides defaults."""
    config_file = tmp_path / "automator.yaml"
    config_file.write_text(
        "\n".join(
            [
                "logging:",
                "  level: WARNING",
                "http:",
                "  port: 9000",
                "components:",
                "  service:",
                "    notification_authority:",
                "      max_list_limit: 25",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("AUTOMATOR_CONFIG_FILE", str(config_file))
    monkeypatch.setenv("AUTOMATOR_HTTP__PORT", "9100")

    settings = load_settings(logging={"level": "DEBUG"})

    assert settings.logging.level == "DEBUG"
    assert settings.http.port == 9100
    assert resolve_notification_authority_settings(settings).max_list_limit == 25


def test_defaults_apply_when_sources_are_missing() -> None:
    settings = load_settings()

    assert settings.http.api_prefix == "/api"
    assert settings.session.login_path == "/login"
    assert settings.database.url.startswith("postgresql+psycopg://")
    assert resolve_notification_authority_settings(settings) == (
        NotificationAuthoritySettings()
    )


def test_api_prefix_is_normalized() -> None:
    assert load_settings(http={"api_prefix": "v1/"}).http.api_prefix == "/v1"


def test_flat_component_keys_are_rejected() -> None:
    with pytest.raises(ValidationError, match="components.service.reporting"):
        load_settings(components={"service_reporting": {"series_days": 3}})


def test_component_ids_without_namespace_are_rejected() -> None:
    with pytest.raises(ValueError, match="no settings namespace"):
        resolve_component_settings(
            settings=load_settings(),
            component_id="reporting",
            model=NotificationAuthoritySettings,
        )
