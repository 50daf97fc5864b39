"""Platform wiring: source -> feed -> reconciler -> host."""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any

from pynibe._redact import redact_for_log
from pynibe.config import NibeConfig
from pynibe.exceptions import NibeError
from pynibe.handlers.base import HandlerContext
from pynibe.handlers.registry import HandlerRegistry, default_registry
from pynibe.host import EntityHandle, EntityHost
from pynibe.i18n import Translator
from pynibe.ingestion.feed import SnapshotFeed
from pynibe.ingestion.poller import SnapshotSource, poll_snapshots
from pynibe.models.snapshot import Snapshot
from pynibe.state.reconcile import ReconcileResult, Reconciler
from pynibe.state.registry import EntityRegistry

_logger = logging.getLogger(__name__)


class NibePlatform:
    """Keeps host entities in step with the NIBE Uplink service info.

    Usage::

        async with NibePlatform(config, host, source) as platform:
            ...

    Entering the context loads the locale table once, then starts one task
    polling *source* and one task reconciling snapshots serially. Without
    a *source*, snapshots are delivered through :meth:`handle_snapshot`.
    """

    def __init__(
        self,
        config: NibeConfig,
        host: EntityHost,
        source: SnapshotSource | None = None,
        *,
        handlers: HandlerRegistry | None = None,
        translator: Translator | None = None,
        registry: EntityRegistry | None = None,
    ) -> None:
        self._config = config
        self._host = host
        self._source = source
        self._handlers = handlers or default_registry(resolve_timeout=config.resolve_timeout)
        self._translator = translator
        self.registry = registry or EntityRegistry()
        self._feed = SnapshotFeed()
        self._reconciler = Reconciler(
            host,
            self._handlers,
            HandlerContext(translate=self.translate, capabilities=host.capabilities, config=config),
        )
        self._tasks: list[asyncio.Task[Any]] = []
        self._stop_event: asyncio.Event | None = None
        self.last_result: ReconcileResult | None = None
        _logger.debug("Finished initializing platform: %s", redact_for_log(config))

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> NibePlatform:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    async def start(self) -> None:
        if self._tasks:
            raise NibeError("Platform already started")
        if self._translator is None:
            loop = asyncio.get_running_loop()
            self._translator = await loop.run_in_executor(
                None,
                functools.partial(Translator.load, self._config.language, directory=self._config.lang_dir),
            )
        self._stop_event = asyncio.Event()
        self._tasks.append(asyncio.create_task(self._feed.run(self._run_pass), name="pynibe-reconcile"))
        if self._source is not None:
            self._tasks.append(
                asyncio.create_task(
                    poll_snapshots(self._source, self._feed, interval=self._config.interval, stop_event=self._stop_event),
                    name="pynibe-poll",
                )
            )

    async def stop(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        self._feed.stop()
        tasks, self._tasks = self._tasks, []
        if tasks and not self._feed.is_running:
            # The consumer task has not started yet; it would miss the stop request.
            tasks[0].cancel()
        for result in await asyncio.gather(*tasks, return_exceptions=True):
            if isinstance(result, BaseException) and not isinstance(result, asyncio.CancelledError):
                _logger.error("Platform task ended with an error", exc_info=result)
        self._stop_event = None

    # ------------------------------------------------------------------
    # Host hooks
    # ------------------------------------------------------------------

    def configure_entity(self, handle: EntityHandle) -> None:
        """Adopt an entity the host restored from its cache."""
        self.registry.restore(handle)

    def translate(self, label: str) -> str | None:
        """Translate a dotted label; ``None`` until the locale is loaded."""
        if self._translator is None:
            return None
        return self._translator.translate(label)

    def handle_snapshot(self, snapshot: Snapshot) -> None:
        """Queue *snapshot* for reconciliation."""
        self._feed.push(snapshot)

    def handle_error(self, cause: BaseException | str) -> None:
        """Report a snapshot source failure."""
        self._feed.report_error(cause)

    async def wait_idle(self) -> None:
        """Wait until every queued snapshot has been reconciled."""
        await self._feed.join()

    @property
    def feed(self) -> SnapshotFeed:
        return self._feed

    async def _run_pass(self, snapshot: Snapshot) -> ReconcileResult:
        result = await self._reconciler.reconcile(snapshot, self.registry)
        self.last_result = result
        return result
