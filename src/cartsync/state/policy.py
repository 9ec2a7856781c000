"""Deterministic mutation policy.

Pure functions over immutable tuples. Each returns a brand new tuple when
the mutation applies and ``None`` when it is a logical no-op (unknown id,
nothing to add), so callers never notify for a change that did not happen.
"""

from __future__ import annotations

from cartsync.models._base import ItemId
from cartsync.models.cart import CartItem
from cartsync.models.inventory import InventoryItem


def clamp_amount(current: int, delta: int) -> int:
    """Staged amounts never drop below zero; there is no upper bound."""
    return max(0, current + delta)


def stage_amount(
    inventory: tuple[InventoryItem, ...],
    item_id: ItemId,
    delta: int,
) -> tuple[InventoryItem, ...] | None:
    """Adjust the staged amount of one inventory item."""
    for index, item in enumerate(inventory):
        if item.id == item_id:
            updated = item.model_copy(update={"amount": clamp_amount(item.amount, delta)})
            return (*inventory[:index], updated, *inventory[index + 1 :])
    return None


def merge_into_cart(
    cart: tuple[CartItem, ...],
    inventory: tuple[InventoryItem, ...],
    item_id: ItemId,
    amount: int,
) -> tuple[CartItem, ...] | None:
    """Add ``amount`` of an item to the cart.

    An existing line is replaced by a copy with the increased quantity.
    Otherwise a new line is synthesized from the inventory item.
    """
    if amount <= 0:
        return None

    for index, line in enumerate(cart):
        if line.id == item_id:
            return (*cart[:index], line.with_added(amount), *cart[index + 1 :])

    product = next((item for item in inventory if item.id == item_id), None)
    if product is None:
        return None
    return (*cart, CartItem.from_inventory(product, amount))


def remove_from_cart(cart: tuple[CartItem, ...], item_id: ItemId) -> tuple[CartItem, ...] | None:
    remaining = tuple(line for line in cart if line.id != item_id)
    if len(remaining) == len(cart):
        return None
    return remaining


def should_roll_back(current: tuple[CartItem, ...], tentative: tuple[CartItem, ...]) -> bool:
    """Revert only while the optimistic value is still the one in place.

    Anything else (a reconciliation or another edit landed in between) is
    newer than the pre-mutation snapshot and must not be clobbered.
    """
    return current is tentative
