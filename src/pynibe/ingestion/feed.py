"""Latest-snapshot channel between the snapshot source and the reconciler.

The source pushes snapshots whenever it has one; a single consumer task
drains them one pass at a time. Only the newest pending snapshot is kept,
since every snapshot is a full replacement of the previous one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pynibe.models.snapshot import Snapshot

_logger = logging.getLogger(__name__)

PassRunner = Callable[[Snapshot], Awaitable[Any]]


class SnapshotFeed:
    """Single-slot queue with a serial consumer."""

    def __init__(self) -> None:
        self._pending: Snapshot | None = None
        self._wakeup = asyncio.Event()
        self._idle = asyncio.Event()
        self._idle.set()
        self._stopping = False
        self._running = False
        self.superseded = 0
        self.passes = 0
        self.errors = 0

    @property
    def pending(self) -> Snapshot | None:
        return self._pending

    @property
    def is_running(self) -> bool:
        return self._running

    def push(self, snapshot: Snapshot) -> None:
        """Offer a snapshot; replaces any snapshot still waiting."""
        if self._pending is not None:
            self.superseded += 1
            _logger.debug("Superseding pending snapshot from %s", self._pending.received_at.isoformat())
        self._pending = snapshot
        self._idle.clear()
        self._wakeup.set()

    def report_error(self, cause: BaseException | str) -> None:
        """Log a source failure right away, whether or not a pass is running."""
        self.errors += 1
        if isinstance(cause, BaseException):
            _logger.error("Error: %s", cause, exc_info=(type(cause), cause, cause.__traceback__))
        else:
            _logger.error("Error: %s", cause)

    def stop(self) -> None:
        """End :meth:`run` after the pass in flight; a pending snapshot is dropped.

        Does nothing while no consumer is running, so a later :meth:`run`
        starts normally.
        """
        if not self._running:
            return
        self._stopping = True
        self._wakeup.set()

    async def join(self) -> None:
        """Wait until no snapshot is pending or being reconciled."""
        await self._idle.wait()

    async def run(self, runner: PassRunner) -> None:
        """Drain snapshots through *runner* until :meth:`stop` is called."""
        self._running = True
        try:
            while not self._stopping:
                await self._wakeup.wait()
                self._wakeup.clear()
                if self._stopping:
                    break
                snapshot, self._pending = self._pending, None
                if snapshot is None:
                    continue
                try:
                    await runner(snapshot)
                except Exception:
                    _logger.exception("Reconciliation pass failed")
                finally:
                    self.passes += 1
                    if self._pending is None:
                        self._idle.set()
        finally:
            self._running = False
            self._stopping = False
            self._pending = None
            self._idle.set()
