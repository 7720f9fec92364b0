"""Component declaration for Reporting Service."""

from __future__ import annotations

from collections.abc import Mapping

from packages.automator_shared.config import AutomatorSettings
from packages.automator_shared.manifest import (
    ComponentId,
    ModuleRoot,
    ServiceManifest,
    register_component,
)

SERVICE_COMPONENT_ID = ComponentId("service_reporting")

MANIFEST = register_component(
    ServiceManifest(
        id=SERVICE_COMPONENT_ID,
        layer=1,
        system="action",
        module_roots=frozenset({ModuleRoot("services.action.reporting")}),
        public_api_roots=frozenset({ModuleRoot("services.action.reporting.service")}),
        depends_on=frozenset(
            {
                ComponentId("service_task_authority"),
                ComponentId("service_calendar_authority"),
                ComponentId("service_notification_authority"),
                ComponentId("service_automation_trigger"),
            }
        ),
    )
)


def build_component(
    *, settings: AutomatorSettings, components: Mapping[str, object]
) -> object:
    """Build concrete runtime instance for this registered service component."""
    from services.action.automation_trigger.service import AutomationTriggerService
    from services.action.reporting.service import build_reporting_service
    from services.state.calendar_authority.service import CalendarAuthorityService
    from services.state.notification_authority.service import (
        NotificationAuthorityService,
    )
    from services.state.task_authority.service import TaskAuthorityService

    task_service = components.get("service_task_authority")
    if not isinstance(task_service, TaskAuthorityService):
        raise KeyError("service_task_authority")

    calendar_service = components.get("service_calendar_authority")
    if not isinstance(calendar_service, CalendarAuthorityService):
        raise KeyError("service_calendar_authority")

    notification_service = components.get("service_notification_authority")
    if not isinstance(notification_service, NotificationAuthorityService):
        raise KeyError("service_notification_authority")

    automation_service = components.get("service_automation_trigger")
    if not isinstance(automation_service, AutomationTriggerService):
        raise KeyError("service_automation_trigger")

    return build_reporting_service(
        settings=settings,
        task_service=task_service,
        calendar_service=calendar_service,
        notification_service=notification_service,
        automation_service=automation_service,
    )
