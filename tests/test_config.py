from __future__ import annotations

import pytest

from cartsync.config import ShopConfig
from cartsync.exceptions import ShopConfigError


def test_defaults() -> None:
    config = ShopConfig()
    assert config.base_url == "http://localhost:3000"
    assert config.cart_item_path(3) == "/cart/3"
    assert config.rollback_on_failure is True


def test_from_env_reads_shop_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHOP_BASE_URL", "http://shop.test")
    monkeypatch.setenv("SHOP_CART_PATH", "/api/cart")
    monkeypatch.setenv("SHOP_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("SHOP_ROLLBACK_ON_FAILURE", "off")

    config = ShopConfig.from_env()

    assert config.base_url == "http://shop.test"
    assert config.cart_item_path("a") == "/api/cart/a"
    assert config.request_timeout == 2.5
    assert config.rollback_on_failure is False


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHOP_BASE_URL", "http://shop.test")
    monkeypatch.setenv("SHOP_REQUEST_TIMEOUT", "not-a-number")
    monkeypatch.setenv("SHOP_ROLLBACK_ON_FAILURE", "0")

    config = ShopConfig.from_env(base_url="http://override.test", request_timeout=1.0, rollback_on_failure=True)

    assert config.base_url == "http://override.test"
    assert config.request_timeout == 1.0
    assert config.rollback_on_failure is True


def test_unrecognized_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHOP_ROLLBACK_ON_FAILURE", "maybe")
    assert ShopConfig.from_env().rollback_on_failure is True


def test_invalid_values_raise_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHOP_REQUEST_TIMEOUT", "soon")
    with pytest.raises(ShopConfigError, match="SHOP_REQUEST_TIMEOUT"):
        ShopConfig.from_env()

    with pytest.raises(ShopConfigError):
        ShopConfig(request_timeout=0)
    with pytest.raises(ShopConfigError):
        ShopConfig(base_url="")
