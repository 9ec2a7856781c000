"""Presentation layer.

The controller only talks to the :class:`View` protocol. ``ConsoleView``
is a text implementation used by the interactive script and tests: each
render rebuilds a table of named controls bound to the handler callables
it was given, the same way a DOM view re-attaches listeners after
replacing its markup.

Control names embed the item id as text, so ids that only differ in type
(``1`` and ``"1"``) map to the same name. The first item rendered keeps the
name and the collision is logged.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from typing import Any, Protocol, TextIO

from cartsync.models._base import ItemId
from cartsync.models.cart import CartItem
from cartsync.models.inventory import InventoryItem

_logger = logging.getLogger(__name__)

AddToCartHandler = Callable[[ItemId, int], Any]
UpdateAmountHandler = Callable[[ItemId, int], Any]
DeleteFromCartHandler = Callable[[ItemId], Any]
CheckoutHandler = Callable[[], Any]


class View(Protocol):
    def render_inventory(
        self,
        items: Sequence[InventoryItem],
        on_add_to_cart: AddToCartHandler,
        on_update_amount: UpdateAmountHandler,
    ) -> None: ...

    def render_cart(
        self,
        items: Sequence[CartItem],
        on_delete_from_cart: DeleteFromCartHandler,
        on_checkout: CheckoutHandler,
    ) -> None: ...

    def display_error(self, message: str) -> None: ...


class ConsoleView:
    """Render state as plain text and expose clickable controls."""

    CHECKOUT = "checkout"

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._inventory_controls: dict[str, Callable[[], Any]] = {}
        self._cart_controls: dict[str, Callable[[], Any]] = {}

    @property
    def controls(self) -> list[str]:
        """Names of the controls bound by the latest render."""
        return [*self._inventory_controls, *self._cart_controls]

    def render_inventory(
        self,
        items: Sequence[InventoryItem],
        on_add_to_cart: AddToCartHandler,
        on_update_amount: UpdateAmountHandler,
    ) -> None:
        controls: dict[str, Callable[[], Any]] = {}
        lines = ["Inventory:"]
        for item in items:
            lines.append(
                f"  {item.content}  [decrease-{item.id}] {item.amount} [increase-{item.id}]  [add-{item.id}]"
            )
            # Default arguments pin each item; the amount is read at render time.
            _bind(controls, f"decrease-{item.id}", lambda i=item.id: on_update_amount(i, -1))
            _bind(controls, f"increase-{item.id}", lambda i=item.id: on_update_amount(i, 1))
            _bind(controls, f"add-{item.id}", lambda i=item.id, a=item.amount: on_add_to_cart(i, a))
        self._inventory_controls = controls
        self._write(lines)

    def render_cart(
        self,
        items: Sequence[CartItem],
        on_delete_from_cart: DeleteFromCartHandler,
        on_checkout: CheckoutHandler,
    ) -> None:
        controls: dict[str, Callable[[], Any]] = {}
        lines = ["Cart:"]
        for item in items:
            lines.append(f"  {item.content} x {item.amount}  [delete-{item.id}]")
            _bind(controls, f"delete-{item.id}", lambda i=item.id: on_delete_from_cart(i))
        lines.append(f"  [{self.CHECKOUT}]")
        controls[self.CHECKOUT] = on_checkout
        self._cart_controls = controls
        self._write(lines)

    def display_error(self, message: str) -> None:
        _logger.error(message)
        self._write([f"error: {message}"])

    def click(self, control: str) -> Any:
        """Invoke the handler bound to ``control`` and return its result.

        Raises
        ------
        KeyError
            If the latest render bound no control with that name.
        """
        handler = self._inventory_controls.get(control) or self._cart_controls.get(control)
        if handler is None:
            raise KeyError(control)
        return handler()

    def _write(self, lines: list[str]) -> None:
        self._stream.write("\n".join(lines) + "\n")
        self._stream.flush()


def _bind(controls: dict[str, Callable[[], Any]], name: str, handler: Callable[[], Any]) -> None:
    if name in controls:
        _logger.warning("Duplicate control %s; keeping the first binding", name)
        return
    controls[name] = handler
