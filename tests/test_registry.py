from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pynibe.host import Entity, MemoryCapabilities
from pynibe.state.registry import EntityRegistry


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def test_add_get_remove() -> None:
    registry = EntityRegistry(clock=_dt)
    handle = Entity(identity="id-1", display_name="climate")

    entry = registry.add(handle, unit_id="0", category_id="CLIMATE")

    assert registry.get("id-1") is entry
    assert "id-1" in registry
    assert len(registry) == 1
    assert entry.created_at == _dt()
    assert entry.name == "climate"
    assert registry.remove("id-1") is entry
    assert registry.remove("id-1") is None
    assert len(registry) == 0


def test_add_duplicate_identity_rejected() -> None:
    registry = EntityRegistry()
    registry.add(Entity(identity="id-1", display_name="a"))

    with pytest.raises(ValueError):
        registry.add(Entity(identity="id-1", display_name="b"))


def test_touch_records_refresh() -> None:
    registry = EntityRegistry(clock=_dt)
    entry = registry.add(Entity(identity="id-1", display_name="a"))

    registry.touch(entry, unit_id="3", category_id="STATUS")

    assert entry.updated_at == _dt()
    assert (entry.unit_id, entry.category_id) == ("3", "STATUS")


def test_iteration_tolerates_removal() -> None:
    registry = EntityRegistry()
    for index in range(3):
        registry.add(Entity(identity=f"id-{index}", display_name=str(index)))

    for entry in registry:
        registry.remove(entry.identity)

    assert registry.identities() == frozenset()


def test_memory_capabilities_shape_entities() -> None:
    capabilities = MemoryCapabilities()
    entity = Entity(identity="id-1", display_name="system info")

    capabilities.set_information(entity, manufacturer="NIBE", model=None, serial_number="12345")
    capabilities.set_value(entity, "COUNTRY", "Country", "SE")

    assert entity.info == {"manufacturer": "NIBE", "serial_number": "12345"}
    assert entity.values == {"COUNTRY": "SE"}
    assert entity.context["labels"] == {"COUNTRY": "Country"}
