"""
storefront: client-side commerce state for a uniform shop.

    from storefront import cart as K      # Observable, persisted cart
    from storefront import pricing as P   # Role-tiered discounts
    from storefront import sizing as S    # Gender eligibility + combined sizes
    from storefront import checkout as CO # Priced lines and order totals
"""

from storefront import query
from storefront import pricing
from storefront import cart
from storefront import sizing
from storefront import session
from storefront import checkout
from storefront import api
from storefront.config import settings, configure_logging
from storefront._types import Money, Listener, Unsubscribe, to_money

__version__ = "0.1.0"

__all__ = (
    "query",
    "pricing",
    "cart",
    "sizing",
    "session",
    "checkout",
    "api",
    "settings",
    "configure_logging",
    "Money",
    "Listener",
    "Unsubscribe",
    "to_money",
)
