"""HTTP transport with JSON encoding and error mapping."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from cartsync._constants import USER_AGENT
from cartsync.config import ShopConfig
from cartsync.exceptions import ShopTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


class HttpTransport:
    """JSON-over-HTTP transport backed by an aiohttp session."""

    def __init__(self, config: ShopConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Returns ``None`` for an empty body. Raises :class:`ShopTransportError`
        on network failure or timeout, on a non-2xx status, and on a 2xx body
        that is not UTF-8 encoded JSON.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        body: str | None = None
        if payload is not None:
            headers["content-type"] = "application/json"
            body = json.dumps(payload, separators=(",", ":"))

        url = f"{self._config.base_url.rstrip('/')}{endpoint}"
        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(method, url, data=body, headers=headers, timeout=self._timeout) as resp:
                raw = await resp.read()
                status = resp.status
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise ShopTransportError(
                f"Request to {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        if not 200 <= status < 300:
            # Error bodies are only echoed into the message, so undecodable bytes are replaced.
            snippet = raw[:200].decode("utf-8", errors="replace")
            raise ShopTransportError(
                f"HTTP {status} from {endpoint}: {snippet}",
                status_code=status,
                endpoint=endpoint,
            )

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ShopTransportError(
                f"Invalid response encoding from {endpoint}: {raw[:200]!r}",
                endpoint=endpoint,
            ) from exc

        if not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ShopTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc
