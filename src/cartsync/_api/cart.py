"""Cart endpoints.

Endpoints:
  - GET    {cart_path}
  - POST   {cart_path}        (add line)
  - PATCH  {cart_path}/{id}   (change quantity)
  - DELETE {cart_path}/{id}
"""

from __future__ import annotations

import logging

from cartsync._api._common import parse_item_list, parse_optional_item
from cartsync._transport import Transport
from cartsync.config import ShopConfig
from cartsync.models._base import ItemId
from cartsync.models.cart import CartItem
from cartsync.models.requests import AddToCartRequest, UpdateCartRequest

_logger = logging.getLogger(__name__)


async def fetch_cart(config: ShopConfig, transport: Transport) -> list[CartItem]:
    endpoint = config.cart_path
    decoded = await transport.request_json("GET", endpoint)
    items = parse_item_list(CartItem, decoded, endpoint=endpoint)
    _logger.debug("Cart response decoded count=%d", len(items))
    return items


async def add_to_cart(
    config: ShopConfig,
    transport: Transport,
    item_id: ItemId,
    amount: int,
) -> CartItem | None:
    """Post a new cart line.

    Returns
    -------
    CartItem or None
        The created line as echoed by the server, or ``None`` when the
        server answers with something other than an object.
    """
    endpoint = config.cart_path
    request = AddToCartRequest(id=item_id, amount=amount)
    decoded = await transport.request_json("POST", endpoint, request.to_payload())
    _logger.debug("Added to cart id=%s amount=%d", item_id, amount)
    return parse_optional_item(CartItem, decoded, endpoint=endpoint)


async def update_cart(
    config: ShopConfig,
    transport: Transport,
    item_id: ItemId,
    amount: int,
) -> CartItem | None:
    """Set the quantity of an existing cart line."""
    endpoint = config.cart_item_path(item_id)
    request = UpdateCartRequest(amount=amount)
    decoded = await transport.request_json("PATCH", endpoint, request.to_payload())
    _logger.debug("Updated cart id=%s amount=%d", item_id, amount)
    return parse_optional_item(CartItem, decoded, endpoint=endpoint)


async def delete_from_cart(config: ShopConfig, transport: Transport, item_id: ItemId) -> None:
    endpoint = config.cart_item_path(item_id)
    await transport.request_json("DELETE", endpoint)
    _logger.debug("Deleted from cart id=%s", item_id)
