"""Locale tables and label translation.

A locale table is a JSON document of nested objects with string leaves::

    {"category": {"system_info": {"country": "Country"}}}

Labels are dotted paths into that tree (``"category.system_info.country"``).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from importlib import resources
from pathlib import Path
from typing import Any, TypeAlias

from pynibe._constants import DEFAULT_LOCALE
from pynibe.exceptions import NibeLocaleError

_logger = logging.getLogger(__name__)

LocaleTree: TypeAlias = "str | Mapping[str, LocaleTree]"


def _coerce_tree(node: Any, path: str) -> LocaleTree | None:
    """Keep string leaves and mappings; drop anything else."""
    if isinstance(node, str):
        return node
    if isinstance(node, Mapping):
        tree: dict[str, LocaleTree] = {}
        for key, child in node.items():
            child_path = f"{path}.{key}" if path else str(key)
            coerced = _coerce_tree(child, child_path)
            if coerced is None:
                _logger.debug("Ignoring non-text locale entry %s", child_path)
                continue
            tree[str(key)] = coerced
        return tree
    return None


def _read_locale_text(locale: str, directory: Path | None) -> str:
    filename = f"{locale}.json"
    if directory is not None:
        return (directory / filename).read_text(encoding="utf-8")
    return resources.files("pynibe").joinpath("lang").joinpath(filename).read_text(encoding="utf-8")


def load_locale(locale: str, *, directory: Path | None = None) -> Mapping[str, LocaleTree]:
    """Load the ``<locale>.json`` table.

    Raises :class:`NibeLocaleError` if the file is missing, not JSON, or
    not an object at the top level.
    """
    if not locale or "/" in locale or "\\" in locale or locale.startswith("."):
        raise NibeLocaleError(f"Invalid locale code: {locale!r}", locale=locale)
    try:
        document = json.loads(_read_locale_text(locale, directory))
    except (OSError, ValueError) as exc:
        raise NibeLocaleError(f"Cannot load locale {locale!r}: {exc}", locale=locale) from exc

    tree = _coerce_tree(document, "")
    if not isinstance(tree, Mapping):
        raise NibeLocaleError(f"Locale {locale!r} is not an object", locale=locale)
    return tree


class Translator:
    """Resolves dotted labels against one loaded locale table."""

    def __init__(self, table: Mapping[str, LocaleTree], *, locale: str = DEFAULT_LOCALE) -> None:
        self._table = table
        self.locale = locale

    @classmethod
    def load(
        cls,
        locale: str,
        *,
        directory: Path | None = None,
        default_locale: str = DEFAULT_LOCALE,
    ) -> Translator:
        """Load *locale*, falling back to *default_locale* if unavailable."""
        try:
            return cls(load_locale(locale, directory=directory), locale=locale)
        except NibeLocaleError:
            if locale == default_locale:
                raise
            _logger.debug("Locale %r unavailable, falling back to %r", locale, default_locale, exc_info=True)
        return cls(load_locale(default_locale, directory=directory), locale=default_locale)

    def translate(self, label: str) -> str | None:
        """Return the translation for *label*, or ``None``.

        The walk stops at the first string it reaches, so a shorter path
        ending on a leaf answers for every longer path below it.
        """
        node: LocaleTree = self._table
        for key in label.split("."):
            if not isinstance(node, Mapping) or key not in node:
                return None
            node = node[key]
            if isinstance(node, str):
                return node
        return None
