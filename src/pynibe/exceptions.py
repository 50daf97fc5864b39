"""Custom exception hierarchy for pynibe."""

from __future__ import annotations


class NibeError(Exception):
    """Base exception for all pynibe errors."""


class NibeConfigError(NibeError):
    """Invalid or missing configuration."""


class NibeSnapshotError(NibeError):
    """Snapshot payload is structurally invalid (no unit container)."""


class NibeHandlerError(NibeError):
    """Category handler registration or invocation failure."""

    def __init__(self, message: str, *, category_id: str = "") -> None:
        self.category_id = category_id
        super().__init__(message)


class NibeLocaleError(NibeError):
    """A locale table could not be loaded.

    Only fatal when the default locale is unavailable too; a missing
    configured locale falls back silently.
    """

    def __init__(self, message: str, *, locale: str = "") -> None:
        self.locale = locale
        super().__init__(message)


class NibeSourceError(NibeError):
    """The snapshot source reported a failure (network, auth, ...).

    Contained within the polling cycle that produced it.
    """
