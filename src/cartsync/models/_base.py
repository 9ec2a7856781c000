"""Base model for shop API payloads.

Every shop model inherits from :class:`ShopBaseModel` which provides:

* frozen instances, so state entities behave as value types and every
  change goes through ``model_copy(update=...)``.
* ``extra="ignore"`` so unknown server fields never break parsing.
* A ``model_validator(mode="before")`` that drops ``null`` values so the
  field default is used instead (``{"amount": null}`` becomes ``0``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

ItemId = int | str
"""Identifier of an inventory item or cart line. Compared with ``==``, never coerced."""


class ShopBaseModel(BaseModel):
    """Base for shop API models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}
