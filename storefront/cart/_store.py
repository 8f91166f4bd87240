"""
Cart store: the observable single source of truth for the active cart.

Every mutation runs read → modify → persist → notify inside one
synchronous call, so no lock is needed on the event loop.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import replace
from decimal import Decimal

from kungfu import Ok, Error

from storefront._types import Listener, Unsubscribe
from storefront.cart._codec import encode_lines, decode_lines
from storefront.cart._storage import Storage
from storefront.cart._types import (
    VariantKey,
    variant_key,
    CartItem,
    CartLine,
    CartTotals,
)
from storefront.config import settings

logger = logging.getLogger(__name__)


class CartStore:
    """
    Ordered cart lines plus a subscriber registry.

    Create one per storage key and pass it by reference.

    Example:
        store = CartStore.load(FileStorage("cart.json"))
        unsubscribe = store.subscribe(lambda s: render(s.totals()))

        store.add_item(item, quantity=2)
        store.update_quantity(item.variant_key, 5)
        store.remove_item(item.variant_key)
    """

    def __init__(
        self,
        storage: Storage,
        key: str | None = None,
        lines: list[CartLine] | None = None,
    ) -> None:
        self._storage = storage
        self._key = key or settings.cart_storage_key
        self._lines: list[CartLine] = []
        self._listeners: list[Listener[CartStore]] = []
        for line in lines or ():
            self._merge(line)

    @classmethod
    def load(cls, storage: Storage, key: str | None = None) -> CartStore:
        """
        Restore the cart persisted under `key`.

        Storage errors and malformed payloads start an empty cart.
        """
        key = key or settings.cart_storage_key
        try:
            result = storage.get(key)
        except Exception:
            logger.exception("Cart storage raised on read, starting empty")
            return cls(storage, key)
        match result:
            case Ok(raw):
                lines = decode_lines(raw)
            case Error(e):
                logger.warning("Cart storage read failed, starting empty: %s", e.message)
                lines = []
        return cls(storage, key, lines)

    # ─────────────────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def key(self) -> str:
        return self._key

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(tuple(self._lines))

    def __contains__(self, key: object) -> bool:
        return self._index(key) is not None

    def get(self, key: VariantKey) -> CartLine | None:
        index = self._index(key)
        return self._lines[index] if index is not None else None

    def totals(self) -> CartTotals:
        """Recomputed on every call."""
        return CartTotals(
            subtotal=sum((line.line_total for line in self._lines), Decimal(0)),
            item_count=sum(line.quantity for line in self._lines),
        )

    def quantity_of(
        self,
        product_id: int | str,
        size: str,
        color: str,
        gender: str | None = None,
    ) -> int:
        line = self.get(variant_key(product_id, size, color, gender))
        return line.quantity if line else 0

    # ─────────────────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────────────────

    def add_item(self, item: CartItem, quantity: int = 1) -> CartLine | None:
        """
        Add `quantity` units of a variant.

        An existing line is incremented, never replaced. Non-positive
        quantities are ignored; fractional ones raise ValueError.
        """
        quantity = _whole(quantity)
        if quantity < 1:
            logger.debug("Ignoring add of %d x %s", quantity, item.variant_key)
            return None

        line = self._merge(CartLine.from_item(item, quantity))
        self._commit()
        return line

    def remove_item(self, key: VariantKey) -> bool:
        """Delete a line. Unknown keys are a no-op."""
        index = self._index(key)
        if index is None:
            return False
        del self._lines[index]
        self._commit()
        return True

    def update_quantity(self, key: VariantKey, quantity: int) -> CartLine | None:
        """Set an absolute quantity; `quantity <= 0` removes the line."""
        quantity = _whole(quantity)
        if quantity <= 0:
            self.remove_item(key)
            return None

        index = self._index(key)
        if index is None:
            return None
        line = _with_quantity(self._lines[index], quantity)
        self._lines[index] = line
        self._commit()
        return line

    def clear(self) -> None:
        self._lines = []
        self._commit()

    # ─────────────────────────────────────────────────────────────────────────
    # Observers
    # ─────────────────────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener[CartStore]) -> Unsubscribe:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener[CartStore]) -> None:
        self._listeners = [fn for fn in self._listeners if fn is not listener]

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _index(self, key: object) -> int | None:
        for i, line in enumerate(self._lines):
            if line.variant_key == key:
                return i
        return None

    def _merge(self, incoming: CartLine) -> CartLine:
        index = self._index(incoming.variant_key)
        if index is None:
            self._lines.append(incoming)
            return incoming
        current = self._lines[index]
        merged = _with_quantity(current, current.quantity + incoming.quantity)
        self._lines[index] = merged
        return merged

    def _commit(self) -> None:
        self._persist()
        self._notify()

    def _persist(self) -> None:
        try:
            result = self._storage.set(self._key, encode_lines(self._lines))
        except Exception:
            logger.exception("Cart storage raised, keeping in-memory state")
            return
        match result:
            case Ok(_):
                pass
            case Error(e):
                logger.warning("Cart not persisted, keeping in-memory state: %s", e.message)

    def _notify(self) -> None:
        for listener in tuple(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Cart listener %r failed", listener)


def _with_quantity(line: CartLine, quantity: int) -> CartLine:
    return replace(line, quantity=quantity)


def _whole(quantity: int) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int | float | Decimal):
        raise TypeError(f"quantity must be a number, got {type(quantity).__name__}")
    whole = int(quantity)
    if whole != quantity:
        raise ValueError(f"quantity must be a whole number, got {quantity!r}")
    return whole


__all__ = ("CartStore",)
