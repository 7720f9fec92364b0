"""Public API for shared Task Automator configuration utilities."""

from .models import (
    DEFAULT_CONFIG_PATH,
    AutomatorSettings,
    ComponentsSettings,
    DatabaseSettings,
    HttpSettings,
    LoggingSettings,
    SessionSettings,
    load_settings,
    resolve_component_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AutomatorSettings",
    "ComponentsSettings",
    "DatabaseSettings",
    "HttpSettings",
    "LoggingSettings",
    "SessionSettings",
    "load_settings",
    "resolve_component_settings",
]
