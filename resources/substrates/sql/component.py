"""Component declaration for the shared SQL substrate."""

from __future__ import annotations

from collections.abc import Mapping

from packages.automator_shared.config import AutomatorSettings
from packages.automator_shared.manifest import (
    ComponentId,
    ModuleRoot,
    ResourceManifest,
    register_component,
)

RESOURCE_COMPONENT_ID = ComponentId("substrate_sql")

MANIFEST = register_component(
    ResourceManifest(
        id=RESOURCE_COMPONENT_ID,
        layer=0,
        system="state",
        kind="substrate",
        module_roots=frozenset({ModuleRoot("resources.substrates.sql")}),
    )
)


def build_component(
    *, settings: AutomatorSettings, components: Mapping[str, object]
) -> object:
    """Build concrete runtime instance for this registered resource component."""
    del components
    from resources.substrates.sql.config import resolve_database_settings
    from resources.substrates.sql.substrate import SharedSqlSubstrate

    return SharedSqlSubstrate(settings=resolve_database_settings(settings))
