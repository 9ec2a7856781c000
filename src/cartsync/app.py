"""Application wiring: client, state, controller and view."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from cartsync.client import ShopClient
from cartsync.config import ShopConfig
from cartsync.controller import CartController
from cartsync.view import View

_logger = logging.getLogger(__name__)


class ShopApp:
    """Construct and start the cart application.

    Usage::

        async with ShopApp(config, ConsoleView()) as app:
            app.controller.update_amount(1, 1)

    Entering opens the HTTP client and runs the initial load (failures are
    shown through the view, not raised). Leaving waits for in-flight
    remote steps, then closes the client.
    """

    def __init__(
        self,
        config: ShopConfig,
        view: View,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.config = config
        self.view = view
        self.client = ShopClient(config, session=session)
        self.controller = CartController(
            self.client,
            view,
            rollback_on_failure=config.rollback_on_failure,
        )
        self.initialized = False

    async def __aenter__(self) -> ShopApp:
        await self.client.__aenter__()
        try:
            self.initialized = await self.controller.init()
        except BaseException:
            await self.client.__aexit__(None, None, None)
            raise
        _logger.debug("Shop app started initialized=%s", self.initialized)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        try:
            await self.controller.wait_idle()
        finally:
            await self.client.__aexit__(*exc)
