"""Host runtime boundary.

The host owns the physical entity objects (accessories and their
characteristic trees). pynibe only needs to create, register and
unregister them; everything else happens inside category handlers.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

_logger = logging.getLogger(__name__)


@runtime_checkable
class EntityHandle(Protocol):
    """What pynibe needs to know about a host entity."""

    @property
    def identity(self) -> str: ...

    @property
    def display_name(self) -> str: ...


class Capabilities(Protocol):
    """Service/characteristic factories handlers use to shape an entity.

    Injected into every handler through its context instead of being
    reached through module globals.
    """

    def set_information(
        self,
        handle: EntityHandle,
        *,
        manufacturer: str | None,
        model: str | None,
        serial_number: str | None,
    ) -> None: ...

    def set_value(self, handle: EntityHandle, key: str, label: str, value: Any) -> None: ...


class EntityHost(Protocol):
    """Entity owner exposed by the host runtime."""

    @property
    def capabilities(self) -> Capabilities: ...

    def create_entity(self, name: str, identity: str) -> EntityHandle: ...

    def register_entities(self, handles: Sequence[EntityHandle]) -> None: ...

    def unregister_entities(self, handles: Sequence[EntityHandle]) -> None: ...


@dataclass(eq=False)
class Entity:
    """In-process entity used by :class:`MemoryHost`.

    ``info`` holds accessory information (manufacturer, model, serial) and
    ``values`` the characteristic values handlers publish.
    """

    identity: str
    display_name: str
    info: dict[str, str] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)
    context: dict[str, Any] = field(default_factory=dict)


class MemoryCapabilities:
    """Writes information and values straight onto :class:`Entity` objects."""

    def set_information(
        self,
        handle: EntityHandle,
        *,
        manufacturer: str | None,
        model: str | None,
        serial_number: str | None,
    ) -> None:
        entity = _as_entity(handle)
        for key, value in (("manufacturer", manufacturer), ("model", model), ("serial_number", serial_number)):
            if value is not None:
                entity.info[key] = value

    def set_value(self, handle: EntityHandle, key: str, label: str, value: Any) -> None:
        entity = _as_entity(handle)
        entity.values[key] = value
        entity.context.setdefault("labels", {})[key] = label


def _as_entity(handle: EntityHandle) -> Entity:
    if not isinstance(handle, Entity):
        raise TypeError(f"MemoryCapabilities cannot shape {type(handle).__name__}")
    return handle


@dataclass
class MemoryHost:
    """Host that keeps entities in memory.

    Used by the replay script and tests; records every register and
    unregister call.
    """

    capabilities: Capabilities = field(default_factory=MemoryCapabilities)
    entities: dict[str, Entity] = field(default_factory=dict)
    registered: list[list[str]] = field(default_factory=list)
    unregistered: list[list[str]] = field(default_factory=list)

    def create_entity(self, name: str, identity: str) -> Entity:
        return Entity(identity=identity, display_name=name)

    def register_entities(self, handles: Sequence[EntityHandle]) -> None:
        for handle in handles:
            self.entities[handle.identity] = handle  # type: ignore[assignment]
        self.registered.append([handle.identity for handle in handles])
        _logger.debug("Registered %d entities", len(handles))

    def unregister_entities(self, handles: Sequence[EntityHandle]) -> None:
        for handle in handles:
            self.entities.pop(handle.identity, None)
        self.unregistered.append([handle.identity for handle in handles])
        _logger.debug("Unregistered %d entities", len(handles))
