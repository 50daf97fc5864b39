"""Data models for NIBE Uplink payloads."""

from pynibe.models._base import NibeBaseModel
from pynibe.models.snapshot import Category, Descriptor, Parameter, Snapshot, Unit

__all__ = [
    "Category",
    "Descriptor",
    "NibeBaseModel",
    "Parameter",
    "Snapshot",
    "Unit",
]
