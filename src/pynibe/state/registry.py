"""In-memory registry of live entities.

Only the reconciler mutates the registry during a pass; handlers see the
single entity handle they were given.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime

from pynibe.host import EntityHandle

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class RegistryEntry:
    """Local representation of one (unit, category) pair.

    ``unit_id`` and ``category_id`` are ``None`` for entries restored from
    the host cache until the first pass that sees them.
    """

    identity: str
    handle: EntityHandle
    name: str
    unit_id: str | None = None
    category_id: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None


class EntityRegistry:
    """Identity-keyed collection of :class:`RegistryEntry`."""

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._entries: dict[str, RegistryEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(list(self._entries.values()))

    def get(self, identity: str) -> RegistryEntry | None:
        return self._entries.get(identity)

    def identities(self) -> frozenset[str]:
        return frozenset(self._entries)

    def add(
        self,
        handle: EntityHandle,
        *,
        identity: str | None = None,
        unit_id: str | None = None,
        category_id: str | None = None,
    ) -> RegistryEntry:
        """Insert a new entry for *handle*; the identity must be unused.

        *identity* defaults to ``handle.identity``.
        """
        identity = identity or handle.identity
        if identity in self._entries:
            raise ValueError(f"identity already registered: {identity}")
        entry = RegistryEntry(
            identity=identity,
            handle=handle,
            name=handle.display_name,
            unit_id=unit_id,
            category_id=category_id,
            created_at=self._clock(),
        )
        self._entries[identity] = entry
        return entry

    def touch(self, entry: RegistryEntry, *, unit_id: str, category_id: str) -> None:
        """Record a successful refresh of *entry*."""
        entry.unit_id = unit_id
        entry.category_id = category_id
        entry.updated_at = self._clock()

    def remove(self, identity: str) -> RegistryEntry | None:
        return self._entries.pop(identity, None)

    def restore(self, handle: EntityHandle) -> bool:
        """Adopt an entity the host restored from its cache at startup.

        Returns ``False`` when the identity is already known.
        """
        if handle.identity in self._entries:
            return False
        self.add(handle)
        _logger.debug("Restored cached entity %s (%s)", handle.display_name, handle.identity)
        return True
