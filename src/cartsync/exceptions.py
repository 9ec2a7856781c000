"""Custom exception hierarchy for cartsync."""

from __future__ import annotations


class ShopError(Exception):
    """Base exception for all cartsync errors."""


class ShopConfigError(ShopError):
    """Invalid or missing configuration."""


class ShopTransportError(ShopError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ShopResponseError(ShopTransportError):
    """Server answered with a payload of the wrong shape."""


class ShopCheckoutError(ShopError):
    """Checkout failed.

    Always raised in place of the underlying error (available as
    ``__cause__``) so callers can tell a failed checkout apart from any
    other failed request.
    """
