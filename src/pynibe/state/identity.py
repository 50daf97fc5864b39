"""Deterministic entity identities.

An entity identity is derived from ``(namespace, unit id, category tag)``
through the host's ``uuid.generate(seed)`` primitive, so the same system
unit and category map to the same entity on every poll and across process
restarts.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

from pynibe._constants import IDENTITY_NAMESPACE, PLUGIN_NAME

IdentityGenerator = Callable[[str], str]


def normalize_category_id(category_id: str) -> str:
    """Canonical form of a category tag.

    Used for identities, handler lookup and SYSTEM_INFO detection alike,
    so ``"system_info"`` and ``"SYSTEM_INFO"`` are the same category.
    """
    return category_id.strip().upper()


def _escape(component: str) -> str:
    return component.replace("\\", "\\\\").replace("-", "\\-")


def identity_seed(unit_id: str, category_id: str, *, namespace: str = PLUGIN_NAME) -> str:
    """Build the ``namespace-unit-category`` seed string.

    Hyphens inside a component are backslash-escaped, otherwise unit
    ``"1-A"`` + category ``"B"`` and unit ``"1"`` + category ``"A-B"``
    would share a seed. Ids without hyphens produce the plain
    ``namespace-unit-category`` form.
    """
    return "-".join((namespace, _escape(str(unit_id)), _escape(normalize_category_id(category_id))))


def uuid5_generate(seed: str) -> str:
    """Default ``uuid.generate``: UUIDv5 of *seed* under a fixed namespace."""
    return str(uuid.uuid5(IDENTITY_NAMESPACE, seed))


def entity_identity(
    unit_id: str,
    category_id: str,
    *,
    namespace: str = PLUGIN_NAME,
    generate: IdentityGenerator = uuid5_generate,
) -> str:
    """Return the stable identity for a unit/category pair."""
    return generate(identity_seed(unit_id, category_id, namespace=namespace))
