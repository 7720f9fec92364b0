"""Component declaration for Automation Trigger Service."""

from __future__ import annotations

from collections.abc import Mapping

from packages.automator_shared.config import AutomatorSettings
from packages.automator_shared.manifest import (
    ComponentId,
    ModuleRoot,
    ServiceManifest,
    register_component,
)

SERVICE_COMPONENT_ID = ComponentId("service_automation_trigger")

MANIFEST = register_component(
    ServiceManifest(
        id=SERVICE_COMPONENT_ID,
        layer=1,
        system="action",
        module_roots=frozenset({ModuleRoot("services.action.automation_trigger")}),
        public_api_roots=frozenset(
            {
                ModuleRoot("services.action.automation_trigger.service"),
                ModuleRoot("services.action.automation_trigger.domain"),
            }
        ),
        depends_on=frozenset({ComponentId("substrate_sql")}),
    )
)


def build_component(
    *, settings: AutomatorSettings, components: Mapping[str, object]
) -> object:
    """Build concrete runtime instance for this registered service component."""
    from services.action.automation_trigger.service import (
        build_automation_trigger_service,
    )

    return build_automation_trigger_service(
        settings=settings,
        substrate=components["substrate_sql"],
    )
