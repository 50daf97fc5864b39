"""pynibe - Async reconciliation of NIBE Uplink service info into host entities."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pynibe")
except PackageNotFoundError:
    __version__ = "0+local"
from pynibe.config import NibeConfig
from pynibe.exceptions import (
    NibeConfigError,
    NibeError,
    NibeHandlerError,
    NibeLocaleError,
    NibeSnapshotError,
    NibeSourceError,
)
from pynibe.handlers import Handler, HandlerContext, HandlerFactory, HandlerRegistry, default_registry
from pynibe.host import Entity, EntityHandle, EntityHost, MemoryHost
from pynibe.i18n import Translator, load_locale
from pynibe.ingestion.descriptor import extract_descriptor
from pynibe.ingestion.feed import SnapshotFeed
from pynibe.models import Category, Descriptor, Parameter, Snapshot, Unit
from pynibe.platform import NibePlatform
from pynibe.state.identity import entity_identity
from pynibe.state.reconcile import ReconcileResult, Reconciler
from pynibe.state.registry import EntityRegistry, RegistryEntry

__all__ = [
    "__version__",
    "Category",
    "Descriptor",
    "Entity",
    "EntityHandle",
    "EntityHost",
    "EntityRegistry",
    "Handler",
    "HandlerContext",
    "HandlerFactory",
    "HandlerRegistry",
    "MemoryHost",
    "NibeConfig",
    "NibeConfigError",
    "NibeError",
    "NibeHandlerError",
    "NibeLocaleError",
    "NibePlatform",
    "NibeSnapshotError",
    "NibeSourceError",
    "Parameter",
    "ReconcileResult",
    "Reconciler",
    "RegistryEntry",
    "Snapshot",
    "SnapshotFeed",
    "Translator",
    "Unit",
    "default_registry",
    "entity_identity",
    "extract_descriptor",
    "load_locale",
]
