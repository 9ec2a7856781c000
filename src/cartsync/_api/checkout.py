"""Checkout endpoint.

Endpoint:
  - POST {checkout_path}
"""

from __future__ import annotations

import logging

from cartsync._transport import Transport
from cartsync.config import ShopConfig
from cartsync.exceptions import ShopCheckoutError, ShopError

_logger = logging.getLogger(__name__)


async def checkout(config: ShopConfig, transport: Transport) -> None:
    """Check out the current cart.

    Any failure is re-raised as :class:`ShopCheckoutError` chained to the
    underlying error.
    """
    try:
        await transport.request_json("POST", config.checkout_path)
    except ShopError as exc:
        _logger.warning("Checkout failed: %s", exc)
        raise ShopCheckoutError("Checkout process failed") from exc
    _logger.info("Checkout successful")
