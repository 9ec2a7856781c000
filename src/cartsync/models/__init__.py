"""Data models for shop API payloads."""

from cartsync.models._base import ItemId, ShopBaseModel
from cartsync.models.cart import CartItem
from cartsync.models.inventory import InventoryItem
from cartsync.models.requests import AddToCartRequest, UpdateCartRequest

__all__ = [
    "AddToCartRequest",
    "CartItem",
    "InventoryItem",
    "ItemId",
    "ShopBaseModel",
    "UpdateCartRequest",
]
