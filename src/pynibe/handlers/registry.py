"""Category tag -> handler factory resolution."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from pynibe._constants import DEFAULT_RESOLVE_TIMEOUT, SYSTEM_INFO_CATEGORY
from pynibe.exceptions import NibeHandlerError
from pynibe.handlers.base import HandlerFactory
from pynibe.handlers.system_info import SystemInfoHandler
from pynibe.state.identity import normalize_category_id

_logger = logging.getLogger(__name__)

HandlerLoader = Callable[[], Awaitable[HandlerFactory | None]]


class HandlerRegistry:
    """Maps category tags to handler factories.

    Tags are matched case-insensitively. Factories are registered up front;
    loaders resolve a factory lazily on first use and are bounded by
    ``resolve_timeout``. Both hits and misses are cached for the lifetime of
    the registry, except timeouts, which count as a miss for the current
    pass only.
    """

    def __init__(self, *, resolve_timeout: float = DEFAULT_RESOLVE_TIMEOUT) -> None:
        self._resolve_timeout = resolve_timeout
        self._factories: dict[str, HandlerFactory] = {}
        self._loaders: dict[str, HandlerLoader] = {}
        self._missing: set[str] = set()

    def _check_unregistered(self, key: str) -> None:
        if key in self._factories or key in self._loaders:
            raise NibeHandlerError(f"Handler already registered for {key}", category_id=key)

    def register(self, category_id: str, factory: HandlerFactory) -> None:
        key = normalize_category_id(category_id)
        self._check_unregistered(key)
        self._factories[key] = factory
        self._missing.discard(key)

    def register_loader(self, category_id: str, loader: HandlerLoader) -> None:
        key = normalize_category_id(category_id)
        self._check_unregistered(key)
        self._loaders[key] = loader
        self._missing.discard(key)

    @property
    def missing(self) -> frozenset[str]:
        """Tags cached as having no handler."""
        return frozenset(self._missing)

    @property
    def resolve_timeout(self) -> float:
        return self._resolve_timeout

    def forget(self, category_id: str) -> None:
        """Drop a cached miss so the tag is resolved again."""
        self._missing.discard(normalize_category_id(category_id))

    def _mark_missing(self, key: str, reason: str) -> None:
        self._missing.add(key)
        _logger.debug("No handler for: %s (%s)", key, reason)

    async def resolve(self, category_id: str) -> HandlerFactory | None:
        """Return the factory for *category_id*, or ``None`` when there is none."""
        key = normalize_category_id(category_id)
        factory = self._factories.get(key)
        if factory is not None:
            return factory
        if key in self._missing:
            return None

        loader = self._loaders.get(key)
        if loader is None:
            self._mark_missing(key, "not registered")
            return None

        try:
            loaded = await asyncio.wait_for(loader(), timeout=self._resolve_timeout)
        except TimeoutError:
            _logger.warning("Resolving handler for %s timed out after %.1fs", key, self._resolve_timeout)
            return None
        except Exception:
            _logger.warning("Loading handler for %s failed", key, exc_info=True)
            self._loaders.pop(key, None)
            self._mark_missing(key, "loader failed")
            return None

        self._loaders.pop(key, None)
        if loaded is None:
            self._mark_missing(key, "loader returned nothing")
            return None
        self._factories[key] = loaded
        return loaded


def default_registry(*, resolve_timeout: float = DEFAULT_RESOLVE_TIMEOUT) -> HandlerRegistry:
    """Registry with the handlers bundled with pynibe."""
    registry = HandlerRegistry(resolve_timeout=resolve_timeout)
    registry.register(SYSTEM_INFO_CATEGORY, SystemInfoHandler)
    return registry
