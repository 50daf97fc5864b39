"""Snapshot -> entity registry reconciliation.

One pass walks every unit and category of a snapshot in order, builds or
updates the entity for each category that has a handler, then retires every
registry entry the snapshot no longer mentions. A failing handler only
costs its own category; the pass always runs to completion.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from pynibe._constants import PLUGIN_NAME
from pynibe.handlers.base import HandlerContext, HandlerFactory, maybe_await
from pynibe.handlers.registry import HandlerRegistry
from pynibe.host import EntityHost
from pynibe.ingestion.descriptor import extract_descriptor
from pynibe.models.snapshot import Category, Descriptor, Snapshot, Unit
from pynibe.state.identity import IdentityGenerator, entity_identity, uuid5_generate
from pynibe.state.registry import EntityRegistry, RegistryEntry

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of one pass.

    ``created``, ``updated``, ``retired`` and ``failed`` hold identities;
    an identity created in a pass is not listed again in ``updated`` when a
    later category of the same pass maps to it. ``skipped`` holds the
    category tags (or ``"<unit>:?"`` for untagged categories) that produced
    no entity.
    """

    created: tuple[str, ...] = ()
    updated: tuple[str, ...] = ()
    retired: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
    descriptor: Descriptor = field(default_factory=Descriptor)

    @property
    def changed(self) -> bool:
        """Whether the set of live entities changed."""
        return bool(self.created or self.retired)


@dataclass
class _Pass:
    descriptor: Descriptor
    seen: set[str] = field(default_factory=set)
    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class Reconciler:
    """Keeps an :class:`EntityRegistry` in step with incoming snapshots.

    Passes are serialized: a second :meth:`reconcile` call waits for the
    running one to finish.
    """

    def __init__(
        self,
        host: EntityHost,
        handlers: HandlerRegistry,
        context: HandlerContext,
        *,
        namespace: str = PLUGIN_NAME,
        generate: IdentityGenerator = uuid5_generate,
    ) -> None:
        self._host = host
        self._handlers = handlers
        self._context = context
        self._namespace = namespace
        self._generate = generate
        self._lock = asyncio.Lock()

    def identity(self, unit_id: str, category_id: str) -> str:
        return entity_identity(unit_id, category_id, namespace=self._namespace, generate=self._generate)

    async def reconcile(self, snapshot: Snapshot, registry: EntityRegistry) -> ReconcileResult:
        """Apply *snapshot* to *registry* and the host."""
        async with self._lock:
            state = _Pass(descriptor=extract_descriptor(snapshot))

            for unit, category in snapshot.iter_categories():
                await self._visit(state, registry, unit, category)

            retired = self._retire(registry, state.seen)

        result = ReconcileResult(
            created=tuple(state.created),
            updated=tuple(state.updated),
            retired=tuple(retired),
            skipped=tuple(state.skipped),
            failed=tuple(state.failed),
            descriptor=state.descriptor,
        )
        _logger.debug(
            "Reconciled snapshot: %d created, %d updated, %d retired, %d skipped, %d failed",
            len(result.created),
            len(result.updated),
            len(result.retired),
            len(result.skipped),
            len(result.failed),
        )
        return result

    async def _visit(self, state: _Pass, registry: EntityRegistry, unit: Unit, category: Category) -> None:
        category_id = category.category_id
        if not category_id or category.parameters is None:
            _logger.debug("Skipping category %r of unit %s: no tag or parameters", category.name, unit.system_unit_id)
            state.skipped.append(category_id or f"{unit.system_unit_id}:?")
            return

        factory = await self._handlers.resolve(category_id)
        if factory is None:
            state.skipped.append(category_id)
            return

        identity = self.identity(unit.system_unit_id, category_id)
        if identity in state.seen:
            # Two categories in one snapshot mapped to the same entity; the later one wins.
            _logger.warning("Duplicate identity %s for unit %s category %s", identity, unit.system_unit_id, category_id)

        entry = registry.get(identity)
        if entry is None:
            if await self._build(state, registry, factory, identity, unit, category):
                state.seen.add(identity)
            return

        await self._update(state, registry, factory, entry, unit, category)
        state.seen.add(identity)

    async def _build(
        self,
        state: _Pass,
        registry: EntityRegistry,
        factory: HandlerFactory,
        identity: str,
        unit: Unit,
        category: Category,
    ) -> bool:
        category_id = category.category_id or ""
        try:
            handle = self._host.create_entity(category.name, identity)
            handler = factory(self._context, state.descriptor, handle)
            await maybe_await(handler.build(category))
            self._host.register_entities([handle])
        except Exception:
            _logger.exception("Building entity for %s (unit %s) failed", category_id, unit.system_unit_id)
            state.failed.append(identity)
            return False

        registry.add(handle, identity=identity, unit_id=unit.system_unit_id, category_id=category_id)
        state.created.append(identity)
        return True

    async def _update(
        self,
        state: _Pass,
        registry: EntityRegistry,
        factory: HandlerFactory,
        entry: RegistryEntry,
        unit: Unit,
        category: Category,
    ) -> None:
        category_id = category.category_id or ""
        try:
            handler = factory(self._context, state.descriptor, entry.handle)
            await maybe_await(handler.update(category))
        except Exception:
            # Keep the entry as it was after its last successful refresh.
            _logger.exception("Updating entity %s for %s failed", entry.identity, category_id)
            state.failed.append(entry.identity)
            return

        registry.touch(entry, unit_id=unit.system_unit_id, category_id=category_id)
        if entry.identity not in state.created and entry.identity not in state.updated:
            state.updated.append(entry.identity)

    def _retire(self, registry: EntityRegistry, seen: set[str]) -> list[str]:
        stale = [entry for entry in registry if entry.identity not in seen]
        if not stale:
            return []

        try:
            self._host.unregister_entities([entry.handle for entry in stale])
        except Exception:
            # Entries stay registered so the next pass retries, or updates them if they reappear.
            _logger.exception("Unregistering %d retired entities failed", len(stale))
            return []

        for entry in stale:
            registry.remove(entry.identity)
        return [entry.identity for entry in stale]
