from __future__ import annotations

import asyncio
import io

import pytest
from shop_server import FakeShopServer

from cartsync import ConsoleView, ShopApp, ShopCheckoutError
from cartsync.models import CartItem, InventoryItem


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_app_happy_path_through_console_controls(shop_server: FakeShopServer) -> None:
    stream = io.StringIO()
    view = ConsoleView(stream)

    async with shop_server.serve() as config, ShopApp(config, view) as app:
        assert app.initialized is True
        assert app.controller.state.inventory == (
            InventoryItem(id=1, content="Apple"),
            InventoryItem(id=2, content="Pear"),
        )

        view.click("increase-1")
        view.click("increase-1")
        view.click("decrease-2")
        assert app.controller.state.inventory[0].amount == 2
        assert app.controller.state.inventory[1].amount == 0

        task = view.click("add-1")
        assert isinstance(task, asyncio.Task)
        await app.controller.wait_idle()
        assert app.controller.state.cart == (CartItem(id=1, content="Apple", amount=2),)
        assert shop_server.cart == [{"id": 1, "content": "Apple", "amount": 2}]

        await view.click("checkout")
        assert app.controller.state.cart == ()

    assert shop_server.checkouts == 1
    assert "Apple x 2  [delete-1]" in stream.getvalue()
    assert ("POST", "/cart", {"id": 1, "amount": 2}) in shop_server.requests


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_app_initialization_failure_shows_error(shop_server: FakeShopServer) -> None:
    shop_server.fail["GET /cart"] = 500
    stream = io.StringIO()

    async with shop_server.serve() as config, ShopApp(config, ConsoleView(stream)) as app:
        assert app.initialized is False
        assert app.controller.state.inventory == ()
        assert app.controller.state.cart == ()

    assert stream.getvalue().startswith("error: Failed to initialize data: HTTP 500 from /cart")


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_app_checkout_failure_keeps_cart(shop_server: FakeShopServer) -> None:
    shop_server.cart = [{"id": 2, "content": "Pear", "amount": 1}]
    shop_server.fail["POST /checkout"] = 500
    stream = io.StringIO()
    view = ConsoleView(stream)

    async with shop_server.serve() as config, ShopApp(config, view) as app:
        with pytest.raises(ShopCheckoutError):
            await view.click("checkout")
        assert app.controller.state.cart == (CartItem(id=2, content="Pear", amount=1),)

    assert "error: Checkout process failed" in stream.getvalue()


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_app_delete_rejected_by_server_is_rolled_back(shop_server: FakeShopServer) -> None:
    shop_server.cart = [{"id": 2, "content": "Pear", "amount": 1}]
    shop_server.fail["DELETE /cart"] = 404
    stream = io.StringIO()
    view = ConsoleView(stream)

    async with shop_server.serve() as config, ShopApp(config, view) as app:
        view.click("delete-2")
        assert app.controller.state.cart == ()
        await app.controller.wait_idle()
        assert app.controller.state.cart == (CartItem(id=2, content="Pear", amount=1),)

    assert "error: Delete from cart failed: HTTP 404 from /cart/2" in stream.getvalue()


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_app_checkout_with_undecodable_error_body_shows_error(shop_server: FakeShopServer) -> None:
    shop_server.cart = [{"id": 2, "content": "Pear", "amount": 1}]
    shop_server.raw_bodies["POST /checkout"] = b"\xff\xfe boom"
    shop_server.raw_status["POST /checkout"] = 500
    stream = io.StringIO()
    view = ConsoleView(stream)

    async with shop_server.serve() as config, ShopApp(config, view) as app:
        with pytest.raises(ShopCheckoutError):
            await view.click("checkout")
        assert app.controller.state.cart == (CartItem(id=2, content="Pear", amount=1),)

    assert "error: Checkout process failed" in stream.getvalue()


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_app_checkout_after_close_shows_error(shop_server: FakeShopServer) -> None:
    stream = io.StringIO()
    view = ConsoleView(stream)

    async with shop_server.serve() as config:
        async with ShopApp(config, view):
            pass
        with pytest.raises(ShopCheckoutError):
            await view.click("checkout")

    assert shop_server.checkouts == 0
    assert stream.getvalue().endswith("error: Checkout process failed\n")
