"""State layer.

This package is the single source of truth for which host entities exist:
identities, the entity registry and the reconciler that keeps the
registry in step with the latest snapshot.
"""
