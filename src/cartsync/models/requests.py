"""Request body models sent to the shop API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from cartsync.models._base import ItemId


class _RequestModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class AddToCartRequest(_RequestModel):
    """Body of ``POST {cart_path}``."""

    id: ItemId
    amount: int


class UpdateCartRequest(_RequestModel):
    """Body of ``PATCH {cart_path}/{id}``."""

    amount: int
