"""Base model for NIBE Uplink payloads.

Every payload model inherits from :class:`NibeBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator
from pydantic.alias_generators import to_camel

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)


class NibeBaseModel(BaseModel):
    """Base for NIBE Uplink payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, repr=False)
    """Original API payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Drop ``None`` values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Only auto-stash raw when not explicitly provided (model_validate
        # from an API dict). Keyword construction keeps the caller's value.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned


def validate_items(model: type[TModel], items: Iterable[Any], *, what: str) -> list[TModel]:
    """Validate *items* one by one, dropping the ones that do not parse.

    A single malformed element must not take its siblings down with it.
    """
    adapter = TypeAdapter(model)
    valid: list[TModel] = []
    for index, item in enumerate(items):
        try:
            valid.append(adapter.validate_python(item))
        except ValidationError as exc:
            _logger.debug("Skipping malformed %s at index %d: %s", what, index, exc.errors(include_url=False))
    return valid
