"""Inventory endpoint.

Endpoint:
  - GET {inventory_path}
"""

from __future__ import annotations

import logging

from cartsync._api._common import parse_item_list
from cartsync._transport import Transport
from cartsync.config import ShopConfig
from cartsync.models.inventory import InventoryItem

_logger = logging.getLogger(__name__)


async def fetch_inventory(config: ShopConfig, transport: Transport) -> list[InventoryItem]:
    """Fetch every inventory item."""
    endpoint = config.inventory_path
    decoded = await transport.request_json("GET", endpoint)
    items = parse_item_list(InventoryItem, decoded, endpoint=endpoint)
    _logger.debug("Inventory response decoded count=%d", len(items))
    return items
