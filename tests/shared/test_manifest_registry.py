"""Tests for component manifest validation and registry ordering."""

from __future__ import annotations

import pytest

from packages.automator_shared.manifest import (
    ComponentId,
    ManifestError,
    ManifestRegistry,
    ModuleRoot,
    ResourceManifest,
    ServiceManifest,
)


def _service(
    component_id: str, *, system: str = "state", depends_on: frozenset = frozenset()
) -> ServiceManifest:
    return ServiceManifest(
        id=ComponentId(component_id),
        layer=1,
        system=system,
        module_roots=frozenset({ModuleRoot(f"services.{system}.{component_id}")}),
        public_api_roots=frozenset(
            {ModuleRoot(f"services.{system}.{component_id}.service")}
        ),
        depends_on=depends_on,
    )


def _resource(component_id: str) -> ResourceManifest:
    return ResourceManifest(
        id=ComponentId(component_id),
        layer=0,
        system="state",
        module_roots=frozenset({ModuleRoot(f"resources.substrates.{component_id}")}),
        kind="substrate",
    )


def test_manifest_rejects_invalid_ids_and_self_dependency() -> None:
    with pytest.raises(ManifestError):
        _service("Bad-Id")
    with pytest.raises(ManifestError, match="depends on itself"):
        _service("service_a", depends_on=frozenset({ComponentId("service_a")}))


def test_registry_lists_services_by_system_then_id() -> None:
    """State services come before action services regardless of id."""
    registry = ManifestRegistry()
    registry.register_component(_service("service_b", system="action"))
    registry.register_component(_service("service_z"))
    registry.register_component(_service("service_a", system="action"))
    registry.register_component(_resource("substrate_sql"))

    assert [str(item.id) for item in registry.list_services()] == [
        "service_z",
        "service_a",
        "service_b",
    ]
    assert [str(item.id) for item in registry.list_resources()] == ["substrate_sql"]


def test_registry_rejects_mismatched_duplicates() -> None:
    """Re-registering an identical manifest is allowed; a different one is not."""
    registry = ManifestRegistry()
    registry.register_component(_service("service_a"))
    registry.register_component(_service("service_a"))

    with pytest.raises(ManifestError, match="duplicate"):
        registry.register_component(_service("service_a", system="action"))


def test_assert_valid_reports_unknown_dependencies() -> None:
    registry = ManifestRegistry()
    registry.register_component(
        _service("service_a", depends_on=frozenset({ComponentId("substrate_sql")}))
    )

    with pytest.raises(ManifestError, match="substrate_sql"):
        registry.assert_valid()

    registry.register_component(_resource("substrate_sql"))
    registry.assert_valid()
