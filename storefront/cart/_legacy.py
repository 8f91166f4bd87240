"""
Legacy cart: the older cart API, kept as an adapter over CartStore.

The old cart persisted `{id, name, price, quantity, image?, size?, color?}`
records under its own key, with `id = "{product}-{size}-{color}"`.
`migrate_legacy_cart()` folds those records into the current store once;
`LegacyCart` keeps old call sites working without a second source of truth.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from decimal import InvalidOperation
from typing import Any

from kungfu import Ok, Error

from storefront._types import Money, to_money
from storefront.cart._storage import Storage
from storefront.cart._store import CartStore
from storefront.cart._types import CartItem, VariantKey
from storefront.config import settings

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Migration
# ═══════════════════════════════════════════════════════════════════════════════


def migrate_legacy_cart(
    storage: Storage,
    store: CartStore,
    key: str | None = None,
) -> int:
    """
    Delete the legacy key, then merge its records into `store`.

    Returns the number of units merged. Unreadable payloads are dropped.
    If the legacy key cannot be read or deleted nothing is merged, so a
    later session never folds the same records in twice.
    """
    key = key or settings.legacy_cart_storage_key
    match storage.get(key):
        case Ok(None):
            return 0
        case Ok(raw):
            items = _decode_legacy(raw)
        case Error(e):
            logger.warning("Legacy cart unreadable, leaving it in place: %s", e.message)
            return 0

    match storage.delete(key):
        case Ok(_):
            pass
        case Error(e):
            logger.warning("Legacy cart key %s not deleted, skipping migration: %s", key, e.message)
            return 0

    merged = 0
    for item, quantity in items:
        if store.add_item(item, quantity) is not None:
            merged += quantity

    logger.info("Migrated %d legacy cart units", merged)
    return merged


def _decode_legacy(raw: str) -> list[tuple[CartItem, int]]:
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        logger.warning("Discarding unparseable legacy cart payload")
        return []
    if not isinstance(data, list):
        return []

    items: list[tuple[CartItem, int]] = []
    for record in data:
        decoded = _decode_legacy_record(record)
        if decoded is not None:
            items.append(decoded)
    return items


def _decode_legacy_record(record: Any) -> tuple[CartItem, int] | None:
    if not isinstance(record, dict):
        return None
    try:
        size = str(record.get("size") or "")
        color = str(record.get("color") or "")
        quantity = int(record.get("quantity", 1))
        item = CartItem(
            product_id=legacy_product_id(str(record["id"]), size, color),
            product_name=str(record.get("name") or ""),
            unit_price=to_money(record["price"]),
            size=size,
            color=color,
            image=record.get("image") or None,
        )
    except (KeyError, TypeError, ValueError, InvalidOperation):
        return None
    if quantity < 1 or item.unit_price < 0:
        return None
    return item, quantity


def legacy_product_id(legacy_id: str, size: str, color: str) -> str:
    """
    Strip the `-{size}-{color}` suffix the old cart appended to ids.

        legacy_product_id("42-M-Azul", "M", "Azul")  # "42"
    """
    suffix = f"-{size}-{color}"
    if legacy_id.endswith(suffix) and len(legacy_id) > len(suffix):
        return legacy_id[: -len(suffix)]
    return legacy_id


# ═══════════════════════════════════════════════════════════════════════════════
# Adapter
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class LegacyCartItem:
    """Old-style cart row; `id` is the variant key of the backing line."""

    id: VariantKey
    name: str
    price: Money
    quantity: int
    image: str | None
    size: str
    color: str


@dataclass(frozen=True, slots=True)
class LegacyCartTotals:
    subtotal: Money
    item_count: int
    items: tuple[LegacyCartItem, ...]


class LegacyCart:
    """
    Old cart API on top of a CartStore.

    Example:
        legacy = LegacyCart(store)
        legacy.add_to_cart({"id": "42", "name": "Polo", "price": 199, "size": "M"})
        legacy.get_cart_totals().item_count
    """

    def __init__(self, store: CartStore) -> None:
        self._store = store

    @property
    def store(self) -> CartStore:
        return self._store

    def add_to_cart(self, item: dict[str, Any]) -> None:
        quantity = int(item.get("quantity") or 1)
        self._store.add_item(
            CartItem(
                product_id=item["id"],
                product_name=str(item.get("name") or ""),
                unit_price=item["price"],
                size=str(item.get("size") or ""),
                color=str(item.get("color") or ""),
                image=item.get("image"),
            ),
            quantity,
        )

    def remove_from_cart(self, id: VariantKey) -> None:
        self._store.remove_item(id)

    def update_cart_item_quantity(self, id: VariantKey, quantity: int) -> None:
        self._store.update_quantity(id, quantity)

    def clear_cart(self) -> None:
        self._store.clear()

    def get_cart_totals(self) -> LegacyCartTotals:
        totals = self._store.totals()
        return LegacyCartTotals(
            subtotal=totals.subtotal,
            item_count=totals.item_count,
            items=tuple(
                LegacyCartItem(
                    id=line.variant_key,
                    name=line.product_name,
                    price=line.unit_price,
                    quantity=line.quantity,
                    image=line.image,
                    size=line.size,
                    color=line.color,
                )
                for line in self._store.lines
            ),
        )


__all__ = (
    "migrate_legacy_cart",
    "legacy_product_id",
    "LegacyCartItem",
    "LegacyCartTotals",
    "LegacyCart",
)
