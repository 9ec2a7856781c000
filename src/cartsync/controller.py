"""Cart controller: optimistic mutation and server reconciliation.

Every user intent is handled in two phases:

1. A synchronous optimistic step that replaces the affected sequence in
   :class:`AppState` (and so re-renders immediately).
2. A remote step, run as a tracked task, that writes to the server,
   re-fetches the authoritative cart and replaces the local one with it.

Overlapping remote steps are not ordered against each other: whichever
re-fetch resolves last overwrites the cart, even if that discards an
optimistic edit made in the meantime.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, TypeVar

from cartsync.client import ShopBackend
from cartsync.exceptions import ShopCheckoutError, ShopError
from cartsync.models._base import ItemId
from cartsync.models.cart import CartItem
from cartsync.state.events import ChangeSource, StateSnapshot
from cartsync.state.policy import merge_into_cart, remove_from_cart, should_roll_back, stage_amount
from cartsync.state.store import AppState
from cartsync.view import View

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class CartController:
    """Link the state, the view and the backend.

    Handlers must be called from code running on the event loop; the
    remote half of each handler is scheduled on the running loop and the
    task is returned so callers may await it.
    """

    def __init__(
        self,
        backend: ShopBackend,
        view: View,
        *,
        state: AppState | None = None,
        rollback_on_failure: bool = True,
    ) -> None:
        self._backend = backend
        self._view = view
        self.state = state if state is not None else AppState()
        self._rollback_on_failure = rollback_on_failure
        self._pending: set[asyncio.Task[Any]] = set()
        self.state.subscribe(self._render)

    def _render(self, snapshot: StateSnapshot) -> None:
        self._view.render_inventory(snapshot.inventory, self.add_to_cart, self.update_amount)
        self._view.render_cart(snapshot.cart, self.delete_from_cart, self.checkout)

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    async def init(self) -> bool:
        """Load inventory and cart concurrently.

        All-or-nothing: if either fetch fails nothing is applied, the error
        is shown and ``False`` is returned. On success both sequences are
        applied with a single notification.
        """
        results = await asyncio.gather(
            self._backend.get_inventory(),
            self._backend.get_cart(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, ShopError):
                _logger.warning("Initialization failed: %s", result)
                self._view.display_error(f"Failed to initialize data: {result}")
                return False
            if isinstance(result, BaseException):
                raise result

        inventory, cart = results
        with self.state.batch():
            self.state.set_inventory(inventory, source=ChangeSource.SERVER)
            self.state.set_cart(cart, source=ChangeSource.SERVER)
        _logger.debug("Initialized inventory=%d cart=%d", len(self.state.inventory), len(self.state.cart))
        return True

    def bootstrap(self) -> asyncio.Task[bool]:
        return self._spawn(self.init(), name="init")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def update_amount(self, item_id: ItemId, delta: int) -> None:
        """Change the staged amount of an inventory item (local only)."""
        inventory = stage_amount(self.state.inventory, item_id, delta)
        if inventory is None:
            return
        self.state.set_inventory(inventory, source=ChangeSource.LOCAL)

    def add_to_cart(self, item_id: ItemId, amount: int) -> asyncio.Task[None] | None:
        """Add ``amount`` of an item to the cart.

        Returns the reconciliation task, or ``None`` when there is nothing
        to add (unknown item, or ``amount <= 0``).
        """
        tentative = merge_into_cart(self.state.cart, self.state.inventory, item_id, amount)
        if tentative is None:
            _logger.debug("Nothing to add for id=%s amount=%d", item_id, amount)
            return None
        return self._apply_and_reconcile(
            tentative,
            lambda: self._backend.add_to_cart(item_id, amount),
            label="Add to cart",
        )

    def delete_from_cart(self, item_id: ItemId) -> asyncio.Task[None] | None:
        """Remove a cart line. Returns ``None`` when no line has that id."""
        tentative = remove_from_cart(self.state.cart, item_id)
        if tentative is None:
            return None
        return self._apply_and_reconcile(
            tentative,
            lambda: self._backend.delete_from_cart(item_id),
            label="Delete from cart",
        )

    def checkout(self) -> asyncio.Task[None]:
        """Check out. The cart is cleared only once the server confirms."""
        return self._spawn(self._checkout(), name="checkout")

    # ------------------------------------------------------------------
    # Task tracking
    # ------------------------------------------------------------------

    @property
    def pending_operations(self) -> int:
        return len(self._pending)

    async def wait_idle(self) -> None:
        """Wait until every remote step, including ones spawned meanwhile, settled."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _apply_and_reconcile(
        self,
        tentative: tuple[CartItem, ...],
        write: Callable[[], Awaitable[Any]],
        *,
        label: str,
    ) -> asyncio.Task[None]:
        before = self.state.cart
        self.state.set_cart(tentative, source=ChangeSource.OPTIMISTIC)
        return self._spawn(self._reconcile(before, self.state.cart, write, label), name=label)

    async def _reconcile(
        self,
        before: tuple[CartItem, ...],
        tentative: tuple[CartItem, ...],
        write: Callable[[], Awaitable[Any]],
        label: str,
    ) -> None:
        try:
            await write()
        except ShopError as exc:
            _logger.warning("%s failed: %s", label, exc)
            if self._rollback_on_failure and should_roll_back(self.state.cart, tentative):
                self.state.set_cart(before, source=ChangeSource.ROLLBACK)
            self._view.display_error(f"{label} failed: {exc}")
            return

        # The write went through; a failed re-fetch leaves the optimistic cart in place.
        try:
            cart = await self._backend.get_cart()
        except ShopError as exc:
            _logger.warning("%s: cart refresh failed: %s", label, exc)
            self._view.display_error(f"{label} failed: {exc}")
            return
        self.state.set_cart(cart, source=ChangeSource.SERVER)

    async def _checkout(self) -> None:
        try:
            await self._backend.checkout()
        except ShopCheckoutError as exc:
            self._view.display_error(str(exc))
            raise
        self.state.set_cart((), source=ChangeSource.SERVER)

    def _spawn(self, coro: Coroutine[Any, Any, T], *, name: str) -> asyncio.Task[T]:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._pending.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None and not isinstance(exc, ShopError):
            _logger.error("Background task %s crashed", task.get_name(), exc_info=exc)
