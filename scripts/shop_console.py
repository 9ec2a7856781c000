#!/usr/bin/env python3
"""Interactive text front end for a cartsync shop.

Renders the inventory and cart after every state change and reads control
names from stdin, e.g.::

    increase-1
    add-1
    delete-1
    checkout

Type ``quit`` (or send EOF) to exit. In-flight requests are awaited before
the process ends.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from cartsync import ConsoleView, ShopApp, ShopCheckoutError, ShopConfig  # noqa: E402

_QUIT = {"quit", "exit", "q"}


async def _read_line(prompt: str) -> str | None:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, input, prompt)
    except EOFError:
        return None


async def main() -> None:
    parser = argparse.ArgumentParser(description="Browse the inventory and manage the cart.")
    parser.add_argument("--base-url", help="Shop API root (default: SHOP_BASE_URL or http://localhost:3000)")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--no-rollback", action="store_true", help="Keep optimistic edits when a write fails")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, object] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    if args.no_rollback:
        overrides["rollback_on_failure"] = False
    config = ShopConfig.from_env(**overrides)

    view = ConsoleView()
    async with ShopApp(config, view) as app:
        while True:
            line = await _read_line("> ")
            if line is None:
                break
            command = line.strip()
            if not command:
                continue
            if command in _QUIT:
                break
            try:
                result = view.click(command)
            except KeyError:
                print(f"unknown control {command!r}; available: {', '.join(view.controls)}")
                continue
            if command == ConsoleView.CHECKOUT and isinstance(result, asyncio.Task):
                try:
                    await result
                except ShopCheckoutError:
                    pass  # already shown by the view
            else:
                # Let the optimistic render and any quick reconciliation print before the prompt.
                await asyncio.sleep(0)
        print(f"waiting for {app.controller.pending_operations} pending request(s)...")


if __name__ == "__main__":
    asyncio.run(main())
