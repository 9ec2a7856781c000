"""In-process fake shop server used by the HTTP-level tests."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from aiohttp import web
from aiohttp.test_utils import TestServer

from cartsync.config import ShopConfig


@dataclass
class FakeShopServer:
    """json-server style backend served in-process by aiohttp.

    ``fail`` maps an ``"METHOD /path"`` route key to the status code it should
    answer with; ``raw_bodies`` maps a route key to a literal body (text or
    bytes) to return, with the status taken from ``raw_status`` (default 200).
    """

    inventory: list[dict[str, Any]] = field(default_factory=list)
    cart: list[dict[str, Any]] = field(default_factory=list)
    fail: dict[str, int] = field(default_factory=dict)
    raw_bodies: dict[str, str | bytes] = field(default_factory=dict)
    raw_status: dict[str, int] = field(default_factory=dict)
    delay: float = 0.0
    requests: list[tuple[str, str, Any]] = field(default_factory=list)
    checkouts: int = 0

    async def _record(self, request: web.Request, key: str) -> web.Response | None:
        body = await request.json() if request.can_read_body else None
        self.requests.append((request.method, request.path, body))
        if self.delay:
            await asyncio.sleep(self.delay)
        if key in self.fail:
            return web.json_response({"error": "boom"}, status=self.fail[key])
        if key in self.raw_bodies:
            raw = self.raw_bodies[key]
            status = self.raw_status.get(key, 200)
            if isinstance(raw, bytes):
                return web.Response(body=raw, status=status, content_type="application/json")
            return web.Response(text=raw, status=status, content_type="application/json")
        return None

    async def get_inventory(self, request: web.Request) -> web.Response:
        return await self._record(request, "GET /inventory") or web.json_response(self.inventory)

    async def get_cart(self, request: web.Request) -> web.Response:
        return await self._record(request, "GET /cart") or web.json_response(self.cart)

    async def post_cart(self, request: web.Request) -> web.Response:
        failed = await self._record(request, "POST /cart")
        if failed is not None:
            return failed
        body = self.requests[-1][2]
        product = next((item for item in self.inventory if item["id"] == body["id"]), {})
        line = {"id": body["id"], "content": product.get("content", ""), "amount": body["amount"]}
        self.cart.append(line)
        return web.json_response(line, status=201)

    async def patch_cart(self, request: web.Request) -> web.Response:
        failed = await self._record(request, "PATCH /cart")
        if failed is not None:
            return failed
        line_id = int(request.match_info["id"])
        for line in self.cart:
            if line["id"] == line_id:
                line["amount"] = self.requests[-1][2]["amount"]
                return web.json_response(line)
        return web.json_response({}, status=404)

    async def delete_cart(self, request: web.Request) -> web.Response:
        failed = await self._record(request, "DELETE /cart")
        if failed is not None:
            return failed
        line_id = int(request.match_info["id"])
        self.cart = [line for line in self.cart if line["id"] != line_id]
        return web.json_response({})

    async def post_checkout(self, request: web.Request) -> web.Response:
        failed = await self._record(request, "POST /checkout")
        if failed is not None:
            return failed
        self.cart = []
        self.checkouts += 1
        return web.Response(status=204)

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/inventory", self.get_inventory)
        app.router.add_get("/cart", self.get_cart)
        app.router.add_post("/cart", self.post_cart)
        app.router.add_patch("/cart/{id}", self.patch_cart)
        app.router.add_delete("/cart/{id}", self.delete_cart)
        app.router.add_post("/checkout", self.post_checkout)
        return app

    @contextlib.asynccontextmanager
    async def serve(self, **config_overrides: Any) -> AsyncIterator[ShopConfig]:
        server = TestServer(self.make_app())
        await server.start_server()
        try:
            yield ShopConfig(base_url=f"http://{server.host}:{server.port}", **config_overrides)
        finally:
            await server.close()

