"""
Pricing types: roles, discount tiers, price breakdowns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront._types import Money

# ═══════════════════════════════════════════════════════════════════════════════
# Role: Tagged Variant
# ═══════════════════════════════════════════════════════════════════════════════


class Role(Enum):
    """
    Customer role as reported by the session.

    The only place roles are compared is the tier table in `_engine`.
    """

    ADMIN = "admin"
    PREMIUM = "premium"
    REGULAR = "regular"
    BASIC = "basic"

    @classmethod
    def parse(cls, value: object) -> Role:
        """
        Normalize a role attribute. Unknown or missing → BASIC.

            Role.parse("Premium")  # Role.PREMIUM
            Role.parse(None)       # Role.BASIC
        """
        if isinstance(value, Role):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.BASIC
        return cls.BASIC


# ═══════════════════════════════════════════════════════════════════════════════
# Discount Tier
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class DiscountTier:
    """Fixed discount class of a role, with its display labels."""

    role: Role
    discount_percent: int
    role_label: str
    discount_label: str


# ═══════════════════════════════════════════════════════════════════════════════
# Price Breakdown
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PriceBreakdown:
    """
    Result of `price_for()`.

    Amounts are exact; round only when formatting.
    """

    original_price: Money
    discounted_price: Money
    savings: Money
    discount_percent: int
    role: Role

    @property
    def shows_discount(self) -> bool:
        """Whether strikethrough/savings UI applies."""
        return self.discount_percent > 0 and self.role is not Role.BASIC


@dataclass(frozen=True, slots=True)
class PriceDisplay:
    """Presentation strings for a price. Discount fields are None when hidden."""

    price: str
    original: str | None = None
    savings: str | None = None
    badge: str | None = None


@dataclass(frozen=True, slots=True)
class DiscountBadge:
    """Role badge shown next to the customer name."""

    role: Role
    label: str | None


__all__ = (
    "Role",
    "DiscountTier",
    "PriceBreakdown",
    "PriceDisplay",
    "DiscountBadge",
)
