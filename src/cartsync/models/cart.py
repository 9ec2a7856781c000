"""Cart line model."""

from __future__ import annotations

from pydantic import Field

from cartsync.models._base import ItemId, ShopBaseModel
from cartsync.models.inventory import InventoryItem


class CartItem(ShopBaseModel):
    """A line in the cart.

    Created from an :class:`InventoryItem` at add time, after which its
    ``amount`` evolves independently of the item's staged amount.
    """

    id: ItemId
    """Line identifier (server-assigned)."""
    content: str = ""
    """Display text copied from the inventory item."""
    amount: int = Field(default=0, ge=0)
    """Quantity in the cart."""

    @classmethod
    def from_inventory(cls, item: InventoryItem, amount: int) -> CartItem:
        return cls(id=item.id, content=item.content, amount=amount)

    def with_added(self, amount: int) -> CartItem:
        """Return a copy with ``amount`` added to the quantity."""
        return self.model_copy(update={"amount": self.amount + amount})
