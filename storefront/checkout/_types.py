"""
Checkout types: priced lines and the order summary.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from storefront._types import Money
from storefront.cart import CartLine
from storefront.pricing import Role, PriceBreakdown
from storefront.session import UserSource


@dataclass(frozen=True, slots=True)
class CheckoutInput:
    """Graph input: the cart lines and who is buying them."""

    lines: Sequence[CartLine]
    users: UserSource


@dataclass(frozen=True, slots=True)
class PricedLine:
    """A cart line with the buyer's role discount applied to its unit price."""

    line: CartLine
    price: PriceBreakdown

    @property
    def original_total(self) -> Money:
        return self.price.original_price * self.line.quantity

    @property
    def line_total(self) -> Money:
        return self.price.discounted_price * self.line.quantity

    @property
    def savings(self) -> Money:
        return self.original_total - self.line_total


@dataclass(frozen=True, slots=True)
class CheckoutSummary:
    """
    Order totals handed to checkout.

    `subtotal` is before discount, `total` after. Nothing is rounded.
    """

    role: Role
    discount_percent: int
    lines: tuple[PricedLine, ...]
    subtotal: Money
    discount_total: Money
    total: Money
    item_count: int


__all__ = ("CheckoutInput", "PricedLine", "CheckoutSummary")
