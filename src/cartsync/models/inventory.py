"""Inventory item model."""

from __future__ import annotations

from pydantic import Field

from cartsync.models._base import ItemId, ShopBaseModel


class InventoryItem(ShopBaseModel):
    """A product offered by the shop.

    ``amount`` is the client-side staged quantity. The server does not
    track it; it only changes through explicit increment/decrement.
    """

    id: ItemId
    """Unique identifier."""
    content: str = ""
    """Display text."""
    amount: int = Field(default=0, ge=0)
    """Staged quantity (never negative)."""
