"""cartsync - Async shopping-cart client with optimistic state synchronization."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cartsync")
except PackageNotFoundError:
    __version__ = "0+local"
from cartsync.app import ShopApp
from cartsync.client import ShopBackend, ShopClient
from cartsync.config import ShopConfig
from cartsync.controller import CartController
from cartsync.exceptions import (
    ShopCheckoutError,
    ShopConfigError,
    ShopError,
    ShopResponseError,
    ShopTransportError,
)
from cartsync.models import AddToCartRequest, CartItem, InventoryItem, ItemId, UpdateCartRequest
from cartsync.state.events import ChangeSource, StateChange, StateSection, StateSnapshot
from cartsync.state.store import AppState
from cartsync.view import ConsoleView, View

__all__ = [
    "__version__",
    "AddToCartRequest",
    "AppState",
    "CartController",
    "CartItem",
    "ChangeSource",
    "ConsoleView",
    "InventoryItem",
    "ItemId",
    "ShopApp",
    "ShopBackend",
    "ShopCheckoutError",
    "ShopClient",
    "ShopConfig",
    "ShopConfigError",
    "ShopError",
    "ShopResponseError",
    "ShopTransportError",
    "StateChange",
    "StateSection",
    "StateSnapshot",
    "UpdateCartRequest",
    "View",
]
