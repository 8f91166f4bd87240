"""
Discount engine: role → tier → price.

Pure functions; no shared state.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType

from storefront._types import to_money
from storefront.pricing._types import Role, DiscountTier, PriceBreakdown

_HUNDRED = Decimal(100)

# ═══════════════════════════════════════════════════════════════════════════════
# Tier Table
# ═══════════════════════════════════════════════════════════════════════════════

TIERS: Mapping[Role, DiscountTier] = MappingProxyType({
    Role.ADMIN: DiscountTier(Role.ADMIN, 0, "Administrador", "Acceso completo"),
    Role.PREMIUM: DiscountTier(Role.PREMIUM, 15, "Cliente Premium", "15% de descuento"),
    Role.REGULAR: DiscountTier(Role.REGULAR, 8, "Cliente Regular", "8% de descuento"),
    Role.BASIC: DiscountTier(Role.BASIC, 0, "Cliente Básico", "Sin descuentos"),
})


def tier_for(role: Role | str | None) -> DiscountTier:
    """Discount tier for a role; unknown roles get the basic tier."""
    return TIERS[Role.parse(role)]


# ═══════════════════════════════════════════════════════════════════════════════
# price_for()
# ═══════════════════════════════════════════════════════════════════════════════


def price_for(base_price: object, role: Role | str | None) -> PriceBreakdown:
    """
    Apply the role discount to a base price.

    Example:
        b = price_for(200, "premium")
        b.discounted_price  # Decimal("170")
        b.savings           # Decimal("30")

    Raises:
        ValueError: base_price is negative.
    """
    original = to_money(base_price)
    if original < 0:
        raise ValueError(f"base_price must be >= 0, got {original}")

    tier = tier_for(role)
    discounted = original * (1 - Decimal(tier.discount_percent) / _HUNDRED)

    return PriceBreakdown(
        original_price=original,
        discounted_price=discounted,
        savings=original - discounted,
        discount_percent=tier.discount_percent,
        role=tier.role,
    )


__all__ = ("TIERS", "tier_for", "price_for")
