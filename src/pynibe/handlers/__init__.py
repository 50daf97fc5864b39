"""Category handlers and their registry."""

from pynibe.handlers.base import Handler, HandlerContext, HandlerFactory
from pynibe.handlers.registry import HandlerLoader, HandlerRegistry, default_registry
from pynibe.handlers.system_info import SystemInfoHandler

__all__ = [
    "Handler",
    "HandlerContext",
    "HandlerFactory",
    "HandlerLoader",
    "HandlerRegistry",
    "SystemInfoHandler",
    "default_registry",
]
