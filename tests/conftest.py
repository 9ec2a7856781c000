from __future__ import annotations

import pytest
from shop_server import FakeShopServer


@pytest.fixture
def shop_server() -> FakeShopServer:
    return FakeShopServer(
        inventory=[
            {"id": 1, "content": "Apple"},
            {"id": 2, "content": "Pear", "amount": None},
        ],
    )
