"""SYSTEM_INFO category handler."""

from __future__ import annotations

from pynibe._constants import MANUFACTURER
from pynibe.handlers.base import HandlerContext
from pynibe.host import EntityHandle
from pynibe.models.snapshot import Category, Descriptor


class SystemInfoHandler:
    """Publishes accessory information and the system-info parameters.

    Accessory information is rewritten on every pass, so a replaced unit
    (new product or serial number) shows up without re-creating the entity.
    """

    def __init__(self, context: HandlerContext, descriptor: Descriptor, handle: EntityHandle) -> None:
        self._context = context
        self._descriptor = descriptor
        self._handle = handle

    def build(self, category: Category) -> None:
        self.update(category)

    def update(self, category: Category) -> None:
        self._context.capabilities.set_information(
            self._handle,
            manufacturer=MANUFACTURER,
            model=self._descriptor.product,
            serial_number=self._descriptor.serial_number,
        )
        for parameter in category.parameters or ():
            if not parameter.key:
                continue
            label = (
                self._context.translate(f"category.system_info.{parameter.key.lower()}")
                or parameter.title
                or parameter.key
            )
            self._context.capabilities.set_value(self._handle, parameter.key, label, parameter.display_value)
        self._context.logger.debug(
            "Refreshed system info %s with %d parameters", self._handle.identity, len(category.parameters or ())
        )
