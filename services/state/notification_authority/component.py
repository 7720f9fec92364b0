"""Component declaration for Notification Authority Service."""

from __future__ import annotations

from collections.abc import Mapping

from packages.automator_shared.config import AutomatorSettings
from packages.automator_shared.manifest import (
    ComponentId,
    ModuleRoot,
    ServiceManifest,
    register_component,
)

SERVICE_COMPONENT_ID = ComponentId("service_notification_authority")

MANIFEST = register_component(
    ServiceManifest(
        id=SERVICE_COMPONENT_ID,
        layer=1,
        system="state",
        module_roots=frozenset({ModuleRoot("services.state.notification_authority")}),
        public_api_roots=frozenset(
            {ModuleRoot("services.state.notification_authority.service")}
        ),
        depends_on=frozenset({ComponentId("substrate_sql")}),
    )
)


def build_component(
    *, settings: AutomatorSettings, components: Mapping[str, object]
) -> object:
    """Build concrete runtime instance for this registered service component."""
    from services.state.notification_authority.service import (
        build_notification_authority_service,
    )

    return build_notification_authority_service(
        settings=settings,
        substrate=components["substrate_sql"],
    )
