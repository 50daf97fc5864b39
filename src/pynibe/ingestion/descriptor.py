"""Device descriptor extraction."""

from __future__ import annotations

from pynibe._constants import PARAM_COUNTRY, PARAM_PRODUCT, PARAM_SERIAL_NUMBER, SYSTEM_INFO_CATEGORY
from pynibe.models.snapshot import Descriptor, Snapshot
from pynibe.state.identity import normalize_category_id

_DESCRIPTOR_FIELDS: dict[str, str] = {
    PARAM_COUNTRY: "country",
    PARAM_PRODUCT: "product",
    PARAM_SERIAL_NUMBER: "serial_number",
}


def extract_descriptor(snapshot: Snapshot) -> Descriptor:
    """Build the device descriptor from every SYSTEM_INFO category.

    When several units carry SYSTEM_INFO the last one in snapshot order
    wins, field by field. Missing keys stay ``None``.
    """
    info: dict[str, str | None] = {}
    for _unit, category in snapshot.iter_categories():
        if category.category_id is None or category.parameters is None:
            continue
        if normalize_category_id(category.category_id) != SYSTEM_INFO_CATEGORY:
            continue
        for parameter in category.parameters:
            field_name = _DESCRIPTOR_FIELDS.get(parameter.key or "")
            if field_name is not None:
                info[field_name] = parameter.display_value
    return Descriptor(**info)
