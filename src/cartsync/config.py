"""Client configuration for cartsync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from cartsync._constants import (
    BASE_URL,
    CART_PATH,
    CHECKOUT_PATH,
    DEFAULT_REQUEST_TIMEOUT,
    INVENTORY_PATH,
)
from cartsync.exceptions import ShopConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ShopConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ShopConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the shop API. Defaults to a local development server.
    inventory_path : str
        Path of the inventory collection.
    cart_path : str
        Path of the cart collection. Single lines live at ``{cart_path}/{id}``.
    checkout_path : str
        Path that accepts the checkout ``POST``.
    request_timeout : float
        Total timeout in seconds applied to every HTTP request.
    rollback_on_failure : bool
        Revert an optimistic cart edit when the matching write is rejected
        by the server. When disabled the optimistic value stays in place
        until the next successful reconciliation.
    """

    base_url: str = BASE_URL
    inventory_path: str = INVENTORY_PATH
    cart_path: str = CART_PATH
    checkout_path: str = CHECKOUT_PATH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    rollback_on_failure: bool = True

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ShopConfigError("base_url must be non-empty")
        if self.request_timeout <= 0:
            raise ShopConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    def cart_item_path(self, item_id: int | str) -> str:
        return f"{self.cart_path}/{item_id}"

    @classmethod
    def from_env(cls, **overrides: Any) -> ShopConfig:
        """Create configuration from environment variables.

        Reads the optional ``SHOP_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ShopConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "SHOP_BASE_URL": "base_url",
            "SHOP_INVENTORY_PATH": "inventory_path",
            "SHOP_CART_PATH": "cart_path",
            "SHOP_CHECKOUT_PATH": "checkout_path",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("SHOP_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float("SHOP_REQUEST_TIMEOUT", timeout_env)

        if "rollback_on_failure" not in overrides:
            config_kwargs["rollback_on_failure"] = _env_bool(env.get("SHOP_ROLLBACK_ON_FAILURE"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
