"""Category handler contract."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from pynibe.host import Capabilities, EntityHandle
from pynibe.models.snapshot import Category, Descriptor

if TYPE_CHECKING:
    from pynibe.config import NibeConfig

Translate = Callable[[str], "str | None"]


class Handler(Protocol):
    """Builds and refreshes one entity from one category.

    Either method may return an awaitable; the reconciler awaits it before
    moving on to the next category.
    """

    def build(self, category: Category) -> Awaitable[None] | None: ...

    def update(self, category: Category) -> Awaitable[None] | None: ...


@dataclass(frozen=True)
class HandlerContext:
    """Platform services handed to every handler."""

    translate: Translate
    capabilities: Capabilities
    config: NibeConfig | None = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("pynibe.handlers"))


HandlerFactory = Callable[[HandlerContext, Descriptor, EntityHandle], Handler]
"""Constructs a handler bound to one entity for one pass."""


async def maybe_await(result: Awaitable[None] | None) -> None:
    """Await *result* if a handler method returned an awaitable."""
    if inspect.isawaitable(result):
        await result
