"""
Cart types: items, lines, totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from storefront._types import Money, to_money

# ═══════════════════════════════════════════════════════════════════════════════
# Variant Key: Line Identity
# ═══════════════════════════════════════════════════════════════════════════════

type VariantKey = str


def variant_key(
    product_id: int | str,
    size: str,
    color: str,
    gender: str | None = None,
) -> VariantKey:
    """
    Identity of a purchasable variant.

    Each component is percent-quoted, so "a:b" / "c" and "a" / "b:c" differ.

        variant_key(12, "M", "Azul", "femenino")  # "12:M:Azul:femenino"
    """
    parts = (str(product_id), size, color, gender or "")
    return ":".join(quote(p, safe="") for p in parts)


# ═══════════════════════════════════════════════════════════════════════════════
# Cart Item: What the UI Adds
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CartItem:
    """A product variant as selected on the product page."""

    product_id: int | str
    product_name: str
    unit_price: Money
    size: str
    color: str
    gender: str | None = None
    image: str | None = None
    sku: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit_price", to_money(self.unit_price))

    @property
    def variant_key(self) -> VariantKey:
        return variant_key(self.product_id, self.size, self.color, self.gender)


# ═══════════════════════════════════════════════════════════════════════════════
# Cart Line: What the Cart Holds
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CartLine:
    """
    One distinct variant in the cart.

    Lines are immutable; the store swaps in a new line on quantity change.
    """

    variant_key: VariantKey
    product_id: int | str
    product_name: str
    unit_price: Money
    quantity: int
    size: str
    color: str
    gender: str | None = None
    image: str | None = None
    sku: str | None = None

    @classmethod
    def from_item(cls, item: CartItem, quantity: int) -> CartLine:
        return cls(
            variant_key=item.variant_key,
            product_id=item.product_id,
            product_name=item.product_name,
            unit_price=item.unit_price,
            quantity=quantity,
            size=item.size,
            color=item.color,
            gender=item.gender,
            image=item.image,
            sku=item.sku,
        )

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True, slots=True)
class CartTotals:
    subtotal: Money
    item_count: int


__all__ = (
    "VariantKey",
    "variant_key",
    "CartItem",
    "CartLine",
    "CartTotals",
)
