"""Ingestion layer.

This package turns what the snapshot source delivers into parsed
snapshots, hands them to the reconciler one at a time, and derives the
device descriptor handlers get as context.
"""

__all__: list[str] = []
