"""
Price presentation: the only place amounts get rounded.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from storefront._types import Money, to_money
from storefront.config import settings
from storefront.pricing._engine import price_for, tier_for
from storefront.pricing._types import Role, PriceDisplay, DiscountBadge


def round_money(amount: Money, places: int | None = None) -> Decimal:
    """Round half-up to the configured number of decimals."""
    places = settings.decimals if places is None else places
    quantum = Decimal(1).scaleb(-places)
    return to_money(amount).quantize(quantum, rounding=ROUND_HALF_UP)


def format_price(amount: object, symbol: str | None = None, places: int | None = None) -> str:
    """
    Currency string, grouped thousands.

        format_price(Decimal("1234.5"))  # "$1,234.50"
    """
    places = settings.decimals if places is None else places
    symbol = settings.currency_symbol if symbol is None else symbol
    value = round_money(to_money(amount), places)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{places}f}"


def display_price(
    base_price: object,
    role: Role | str | None,
    show_discount: bool = True,
) -> PriceDisplay:
    """Strings for a price tag. Basic and 0% roles see only the plain price."""
    breakdown = price_for(base_price, role)

    if not show_discount or not breakdown.shows_discount:
        return PriceDisplay(price=format_price(breakdown.original_price))

    return PriceDisplay(
        price=format_price(breakdown.discounted_price),
        original=format_price(breakdown.original_price),
        savings=f"Ahorras {format_price(breakdown.savings)}",
        badge=f"-{breakdown.discount_percent}%",
    )


def discount_badge(role: Role | str | None, show_label: bool = True) -> DiscountBadge | None:
    """Admins show their role label, everyone else their discount label."""
    tier = tier_for(role)
    if not show_label:
        if tier.role is Role.BASIC:
            return None
        return DiscountBadge(tier.role, None)

    label = tier.role_label if tier.role is Role.ADMIN else tier.discount_label
    return DiscountBadge(tier.role, label)


__all__ = ("round_money", "format_price", "display_price", "discount_badge")
