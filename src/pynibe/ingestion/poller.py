"""Interval polling of the snapshot source.

The source itself (HTTP session, OAuth tokens, persistence) lives outside
pynibe; it only has to hand back the raw ``unitData`` payload.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Mapping
from typing import Any, Protocol

from pynibe.exceptions import NibeSourceError
from pynibe.ingestion.feed import SnapshotFeed
from pynibe.models.snapshot import Snapshot

_logger = logging.getLogger(__name__)


class SnapshotSource(Protocol):
    """Produces one raw service-info payload per call."""

    async def fetch(self) -> Mapping[str, Any]: ...


async def fetch_snapshot(source: SnapshotSource) -> Snapshot:
    """Fetch and parse one snapshot.

    Source failures are wrapped in :class:`NibeSourceError`; a structurally
    invalid payload raises :class:`NibeSnapshotError`.
    """
    try:
        payload = await source.fetch()
    except Exception as exc:
        raise NibeSourceError(f"Snapshot source failed: {exc}") from exc
    return Snapshot.from_api(payload)


async def poll_snapshots(
    source: SnapshotSource,
    feed: SnapshotFeed,
    *,
    interval: float,
    stop_event: asyncio.Event | None = None,
) -> None:
    """Fetch a snapshot every *interval* seconds and push it to *feed*.

    Errors are reported through the feed and never end the loop; the next
    attempt happens on schedule.
    """
    stop = stop_event or asyncio.Event()
    while not stop.is_set():
        try:
            feed.push(await fetch_snapshot(source))
        except Exception as exc:
            feed.report_error(exc)

        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(stop.wait(), timeout=interval)
    _logger.debug("Snapshot polling stopped")
