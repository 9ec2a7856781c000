"""High-level async client for the shop API."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import aiohttp

from cartsync._api import cart as _cart_api
from cartsync._api import checkout as _checkout_api
from cartsync._api import inventory as _inventory_api
from cartsync._transport import HttpTransport, Transport
from cartsync.config import ShopConfig
from cartsync.exceptions import ShopCheckoutError, ShopError
from cartsync.models._base import ItemId
from cartsync.models.cart import CartItem
from cartsync.models.inventory import InventoryItem

_logger = logging.getLogger(__name__)


class ShopBackend(Protocol):
    """Remote operations the cart controller depends on.

    :class:`ShopClient` is the production implementation; tests pass
    in-memory fakes.
    """

    async def get_inventory(self) -> list[InventoryItem]: ...

    async def get_cart(self) -> list[CartItem]: ...

    async def add_to_cart(self, item_id: ItemId, amount: int) -> CartItem | None: ...

    async def delete_from_cart(self, item_id: ItemId) -> None: ...

    async def checkout(self) -> None: ...


class ShopClient:
    """Async client for the shop API.

    Usage::

        async with ShopClient(config) as client:
            inventory = await client.get_inventory()
    """

    def __init__(
        self,
        config: ShopConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ShopClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        _logger.debug("Shop client ready base_url=%s", self._config.base_url)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    @property
    def config(self) -> ShopConfig:
        return self._config

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise ShopError("Client not initialized. Use 'async with ShopClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_inventory(self) -> list[InventoryItem]:
        """Fetch every inventory item."""
        return await _inventory_api.fetch_inventory(self._config, self._require_transport())

    async def get_cart(self) -> list[CartItem]:
        """Fetch the authoritative cart."""
        return await _cart_api.fetch_cart(self._config, self._require_transport())

    # ------------------------------------------------------------------
    # Write endpoints
    # ------------------------------------------------------------------

    async def add_to_cart(self, item_id: ItemId, amount: int) -> CartItem | None:
        """Add ``amount`` of an item to the cart (sends ``{id, amount}``)."""
        return await _cart_api.add_to_cart(self._config, self._require_transport(), item_id, amount)

    async def update_cart(self, item_id: ItemId, amount: int) -> CartItem | None:
        """Set the quantity of a cart line (sends ``{amount}``)."""
        return await _cart_api.update_cart(self._config, self._require_transport(), item_id, amount)

    async def delete_from_cart(self, item_id: ItemId) -> None:
        """Delete a cart line. Any response body is discarded."""
        await _cart_api.delete_from_cart(self._config, self._require_transport(), item_id)

    async def checkout(self) -> None:
        """Check out the cart, raising :class:`ShopCheckoutError` on failure."""
        try:
            transport = self._require_transport()
        except ShopError as exc:
            _logger.warning("Checkout failed: %s", exc)
            raise ShopCheckoutError("Checkout process failed") from exc
        await _checkout_api.checkout(self._config, transport)
