"""Service-info snapshot models.

One snapshot is the full ``unitData`` payload for a polling cycle::

    {"unitData": [
        {"systemUnitId": 0, "categories": [
            {"categoryId": "SYSTEM_INFO", "name": "system info", "parameters": [
                {"parameterId": 0, "key": "COUNTRY", "displayValue": "SE", ...},
            ]},
        ]},
    ]}

Parsing is lenient below the top level: a malformed unit, category or
parameter is dropped and the rest of the snapshot survives.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pynibe.exceptions import NibeSnapshotError
from pynibe.models._base import NibeBaseModel, validate_items


class Parameter(NibeBaseModel):
    """A single key/display-value pair inside a category."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    parameter_id: int | None = None
    key: str | None = None
    name: str | None = None
    title: str | None = None
    designation: str | None = None
    unit: str | None = None
    display_value: str | None = None
    raw_value: int | float | str | None = None


class Category(NibeBaseModel):
    """A typed group of parameters under a system unit."""

    category_id: str | None = None
    name: str = ""
    parameters: list[Parameter] | None = None

    @field_validator("parameters", mode="before")
    @classmethod
    def _lenient_parameters(cls, value: Any) -> Any:
        if value is None or not isinstance(value, list):
            return None
        return validate_items(Parameter, value, what="parameter")

    def parameter(self, key: str) -> Parameter | None:
        """Return the first parameter with *key*, if any."""
        for parameter in self.parameters or ():
            if parameter.key == key:
                return parameter
        return None


class Unit(NibeBaseModel):
    """A sub-component (system unit) of the heat pump."""

    system_unit_id: str
    name: str | None = None
    categories: list[Category] | None = None

    @field_validator("system_unit_id", mode="before")
    @classmethod
    def _coerce_unit_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("categories", mode="before")
    @classmethod
    def _lenient_categories(cls, value: Any) -> Any:
        if value is None or not isinstance(value, list):
            return None
        return validate_items(Category, value, what="category")


class Snapshot(NibeBaseModel):
    """The full data batch for one polling cycle."""

    units: list[Unit] = Field(default_factory=list, alias="unitData")
    received_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("units", mode="before")
    @classmethod
    def _lenient_units(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return validate_items(Unit, value, what="unit")

    @classmethod
    def from_api(cls, payload: Any) -> Snapshot:
        """Parse a raw payload, rejecting only structurally invalid snapshots."""
        if not isinstance(payload, Mapping):
            raise NibeSnapshotError(f"Snapshot payload must be an object, got {type(payload).__name__}")
        unit_data = payload.get("unitData")
        if not isinstance(unit_data, list):
            raise NibeSnapshotError("Snapshot payload has no unitData list")
        return cls.model_validate(dict(payload))

    def iter_categories(self) -> Iterator[tuple[Unit, Category]]:
        """Yield ``(unit, category)`` pairs in snapshot order."""
        for unit in self.units:
            for category in unit.categories or ():
                yield unit, category


class Descriptor(BaseModel):
    """Device identity summary derived from the SYSTEM_INFO category.

    Fields stay ``None`` when the snapshot does not carry them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    country: str | None = None
    product: str | None = None
    serial_number: str | None = None
