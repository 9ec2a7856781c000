"""State change events and snapshots.

Every notification delivered by :class:`cartsync.state.store.AppState`
is described by these models.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from cartsync.models.cart import CartItem
from cartsync.models.inventory import InventoryItem


class StateSection(StrEnum):
    INVENTORY = "inventory"
    CART = "cart"


class ChangeSource(StrEnum):
    LOCAL = "local"
    OPTIMISTIC = "optimistic"
    SERVER = "server"
    ROLLBACK = "rollback"


class StateChange(BaseModel):
    """A single replacement of one state section."""

    model_config = ConfigDict(frozen=True)

    section: StateSection
    source: ChangeSource
    revision: int
    size: int = Field(..., description="Length of the new sequence")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class StateSnapshot(BaseModel):
    """Full state handed to the observer on every notification."""

    model_config = ConfigDict(frozen=True)

    inventory: tuple[InventoryItem, ...] = ()
    cart: tuple[CartItem, ...] = ()
    revision: int = 0
    changed: frozenset[StateSection] = frozenset()
    source: ChangeSource | None = None
