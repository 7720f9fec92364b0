"""Aggregate readiness across instantiated components."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from packages.automator_shared.envelope import EnvelopeKind, new_meta
from packages.automator_shared.logging import get_logger
from packages.automator_shared.manifest import get_registry

_LOGGER = get_logger(__name__)


class ComponentHealthResult(BaseModel):
    """One component-level readiness result."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ready: bool
    detail: str = ""


class AppHealthResult(BaseModel):
    """Aggregate readiness across services and shared resources."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ready: bool
    services: dict[str, ComponentHealthResult] = Field(default_factory=dict)
    resources: dict[str, ComponentHealthResult] = Field(default_factory=dict)


def evaluate_health(components: Mapping[str, object]) -> AppHealthResult:
    """Evaluate aggregate readiness of every registered component."""
    registry = get_registry()
    services = {
        str(manifest.id): _service_health(components.get(str(manifest.id)))
        for manifest in registry.list_services()
    }
    resources = {
        str(manifest.id): _resource_health(components.get(str(manifest.id)))
        for manifest in registry.list_resources()
    }
    ready = all(item.ready for item in services.values()) and all(
        item.ready for item in resources.values()
    )
    return AppHealthResult(ready=ready, services=services, resources=resources)


def _service_health(service: object | None) -> ComponentHealthResult:
    if service is None:
        return ComponentHealthResult(ready=False, detail="component not instantiated")
    health = getattr(service, "health", None)
    if not callable(health):
        return ComponentHealthResult(ready=True, detail="no health probe")
    try:
        result = health(
            meta=new_meta(
                kind=EnvelopeKind.QUERY, source="app_health", principal="system"
            )
        )
    except Exception as exc:  # noqa: BLE001
        _LOGGER.warning("service health probe raised", exc_info=exc)
        return ComponentHealthResult(ready=False, detail=type(exc).__name__)
    if not result.ok or result.payload is None:
        detail = result.errors[0].message if result.errors else "health failed"
        return ComponentHealthResult(ready=False, detail=detail)
    payload = result.payload.value
    ready = bool(getattr(payload, "service_ready", True)) and bool(
        getattr(payload, "substrate_ready", True)
    )
    return ComponentHealthResult(ready=ready, detail=str(getattr(payload, "detail", "")))


def _resource_health(resource: object | None) -> ComponentHealthResult:
    if resource is None:
        return ComponentHealthResult(ready=False, detail="component not instantiated")
    health = getattr(resource, "health", None)
    if not callable(health):
        return ComponentHealthResult(ready=True, detail="no health probe")
    status = health()
    return ComponentHealthResult(
        ready=bool(getattr(status, "ready", False)),
        detail=str(getattr(status, "detail", "")),
    )
