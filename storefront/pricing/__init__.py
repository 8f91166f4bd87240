"""
Pricing: role-tiered discounts.

    from storefront import pricing as P

    breakdown = P.price_for(200, "premium")
    breakdown.discounted_price   # Decimal("170")
    P.display_price(200, P.Role.PREMIUM).badge  # "-15%"
"""

from storefront.pricing._types import (
    Role,
    DiscountTier,
    PriceBreakdown,
    PriceDisplay,
    DiscountBadge,
)
from storefront.pricing._engine import TIERS, tier_for, price_for
from storefront.pricing._format import (
    round_money,
    format_price,
    display_price,
    discount_badge,
)

__all__ = (
    # Types
    "Role",
    "DiscountTier",
    "PriceBreakdown",
    "PriceDisplay",
    "DiscountBadge",
    # Engine
    "TIERS",
    "tier_for",
    "price_for",
    # Presentation
    "round_money",
    "format_price",
    "display_price",
    "discount_badge",
)
