"""Component-module import and dependency-ordered instantiation."""

from __future__ import annotations

import importlib
import importlib.util
from collections.abc import Callable, Mapping

from packages.automator_shared.config import AutomatorSettings
from packages.automator_shared.logging import get_logger
from packages.automator_shared.manifest import ComponentManifest, get_registry

_LOGGER = get_logger(__name__)

COMPONENT_MODULES: tuple[str, ...] = (
    "resources.substrates.sql.component",
    "services.state.task_authority.component",
    "services.state.calendar_authority.component",
    "services.state.notification_authority.component",
    "services.action.automation_trigger.component",
    "services.action.reporting.component",
)

ComponentBuilder = Callable[..., object]
HttpRegistrar = Callable[..., None]


def import_component_modules(
    modules: tuple[str, ...] = COMPONENT_MODULES,
) -> tuple[str, ...]:
    """Import component declaration modules so their manifests register."""
    imported: list[str] = []
    for module in modules:
        importlib.import_module(module)
        imported.append(module)
    return tuple(imported)


def resolve_component_builder(manifest: ComponentManifest) -> ComponentBuilder:
    """Return the ``build_component`` callable declared beside one manifest."""
    for module_root in sorted(manifest.module_roots):
        module = importlib.import_module(f"{module_root}.component")
        builder = getattr(module, "build_component", None)
        if callable(builder):
            return builder
    raise RuntimeError(
        f"component '{manifest.id}' does not expose build_component(...)"
    )


def resolve_http_registrar(manifest: ComponentManifest) -> HttpRegistrar | None:
    """Return the optional ``register_routes`` callable from a service ``api`` module."""
    for module_root in sorted(manifest.module_roots):
        module_name = f"{module_root}.api"
        if importlib.util.find_spec(module_name) is None:
            continue
        registrar = getattr(importlib.import_module(module_name), "register_routes", None)
        if callable(registrar):
            return registrar
    return None


def build_components(
    settings: AutomatorSettings,
    *,
    prebuilt: Mapping[str, object] | None = None,
) -> dict[str, object]:
    """Instantiate every registered resource and service in dependency rounds.

    A builder that raises ``KeyError`` for a missing dependency is retried in
    the next round; a round without progress is a wiring error.
    """
    registry = get_registry()
    built: dict[str, object] = dict(prebuilt or {})
    pending = [
        manifest
        for manifest in (*registry.list_resources(), *registry.list_services())
        if str(manifest.id) not in built
    ]

    while pending:
        progressed = False
        next_round: list[ComponentManifest] = []
        for manifest in pending:
            builder = resolve_component_builder(manifest)
            try:
                built[str(manifest.id)] = builder(settings=settings, components=built)
            except KeyError:
                next_round.append(manifest)
                continue
            progressed = True
            _LOGGER.info(
                "component instantiated: component_id=%s layer=%s",
                manifest.id,
                manifest.layer,
            )

        if not progressed:
            unresolved = ", ".join(str(item.id) for item in next_round)
            raise RuntimeError(
                "unable to resolve component dependency graph; unresolved components: "
                f"{unresolved}"
            )
        pending = next_round
    return built
