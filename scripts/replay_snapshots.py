#!/usr/bin/env python3
"""Replay recorded service-info payloads through the reconciler.

Each file is one raw ``{"unitData": [...]}`` payload. They are reconciled
in order against an in-memory host, and every pass prints which entities
were created, updated and retired.

Usage
-----
    python scripts/replay_snapshots.py first.json second.json
    python scripts/replay_snapshots.py --language sv --verbose dumps/*.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pynibe import (  # noqa: E402
    EntityRegistry,
    HandlerContext,
    MemoryHost,
    NibeError,
    Reconciler,
    Snapshot,
    Translator,
    default_registry,
)


def _print_pass(index: int, path: Path, host: MemoryHost, created, updated, retired, skipped, failed) -> None:
    print(f"── pass {index}: {path.name}")
    for label, identities in (("created", created), ("updated", updated), ("retired", retired), ("failed", failed)):
        for identity in identities:
            entity = host.entities.get(identity)
            name = entity.display_name if entity is not None else "?"
            print(f"  {label:<8} {identity}  {name}")
    if skipped:
        print(f"  skipped  {', '.join(sorted(set(skipped)))}")


async def _replay(paths: list[Path], language: str) -> int:
    host = MemoryHost()
    translator = Translator.load(language)
    context = HandlerContext(translate=translator.translate, capabilities=host.capabilities)
    reconciler = Reconciler(host, default_registry(), context)
    registry = EntityRegistry()

    status = 0
    for index, path in enumerate(paths, start=1):
        try:
            snapshot = Snapshot.from_api(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError, NibeError) as exc:
            print(f"── pass {index}: {path.name}: {exc}", file=sys.stderr)
            status = 1
            continue
        result = await reconciler.reconcile(snapshot, registry)
        _print_pass(index, path, host, result.created, result.updated, result.retired, result.skipped, result.failed)

    print(f"\n{len(registry)} live entities.")
    return status


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay service-info payloads through the reconciler.")
    parser.add_argument("files", nargs="+", type=Path, help="Raw payload JSON files, oldest first")
    parser.add_argument("--language", default="en", help="Locale for labels (default: en)")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    sys.exit(asyncio.run(_replay(args.files, args.language)))


if __name__ == "__main__":
    main()
