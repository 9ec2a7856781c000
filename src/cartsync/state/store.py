"""In-memory application state with single-observer notification.

This is the only component allowed to hold the inventory and cart. Every
mutation replaces a whole sequence and synchronously notifies the observer.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterable, Iterator

from cartsync._constants import MAX_NOTIFY_PASSES
from cartsync.models.cart import CartItem
from cartsync.models.inventory import InventoryItem
from cartsync.state.events import ChangeSource, StateChange, StateSection, StateSnapshot

_logger = logging.getLogger(__name__)

Observer = Callable[[StateSnapshot], None]


def _noop(_snapshot: StateSnapshot) -> None:
    return None


class AppState:
    """Owner of the client-side inventory and cart.

    Notification rules:

    * ``set_inventory``/``set_cart`` notify synchronously unless a
      :meth:`batch` is open, in which case one notification is sent when
      the outermost batch exits.
    * Mutations made from inside the observer are not delivered
      recursively. They are collected and delivered as another pass once
      the running callback returns, up to ``max_notify_passes`` passes.
    """

    def __init__(self, *, max_notify_passes: int = MAX_NOTIFY_PASSES) -> None:
        self._inventory: tuple[InventoryItem, ...] = ()
        self._cart: tuple[CartItem, ...] = ()
        self._on_change: Observer = _noop
        self._max_notify_passes = max_notify_passes
        self._revision = 0
        self._changed: set[StateSection] = set()
        self._last_source: ChangeSource | None = None
        self._batch_depth = 0
        self._notifying = False

    @property
    def inventory(self) -> tuple[InventoryItem, ...]:
        return self._inventory

    @property
    def cart(self) -> tuple[CartItem, ...]:
        return self._cart

    @property
    def revision(self) -> int:
        return self._revision

    def subscribe(self, callback: Observer) -> None:
        """Register the observer, replacing any previous one."""
        self._on_change = callback

    def set_inventory(self, items: Iterable[InventoryItem], *, source: ChangeSource) -> None:
        self._inventory = tuple(items)
        self._mark_changed(StateSection.INVENTORY, source, len(self._inventory))

    def set_cart(self, items: Iterable[CartItem], *, source: ChangeSource) -> None:
        self._cart = tuple(items)
        self._mark_changed(StateSection.CART, source, len(self._cart))

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            inventory=self._inventory,
            cart=self._cart,
            revision=self._revision,
            changed=frozenset(self._changed),
            source=self._last_source,
        )

    @contextlib.contextmanager
    def batch(self) -> Iterator[None]:
        """Coalesce all mutations in the block into one notification."""
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and not self._notifying:
                self._flush()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _mark_changed(self, section: StateSection, source: ChangeSource, size: int) -> None:
        self._revision += 1
        self._changed.add(section)
        self._last_source = source
        change = StateChange(section=section, source=source, revision=self._revision, size=size)
        _logger.debug("State change %s", change)
        if self._batch_depth or self._notifying:
            return
        self._flush()

    def _flush(self) -> None:
        self._notifying = True
        try:
            passes = 0
            while self._changed:
                passes += 1
                if passes > self._max_notify_passes:
                    _logger.warning(
                        "Observer kept mutating state; dropping notification after %d passes",
                        self._max_notify_passes,
                    )
                    self._changed.clear()
                    break
                snapshot = self.snapshot()
                self._changed.clear()
                self._on_change(snapshot)
        finally:
            self._notifying = False
