"""
Checkout: cart lines × buyer role → priced lines and order totals.

    from storefront import checkout as CO

    summary = await CO.checkout_summary(store.lines, client)
    summary.total          # Decimal, unrounded
    summary.discount_total

Graph:

    CheckoutInput ──► InputNode ──► RoleNode ──► PricedLinesNode ──► SummaryNode
                          └──────────────────────────┘
"""

from collections.abc import Sequence

from storefront.cart import CartLine
from storefront.checkout._types import CheckoutInput, PricedLine, CheckoutSummary
from storefront.checkout._graph import TypedScope, compose
from storefront.checkout._nodes import InputNode, RoleNode, PricedLinesNode, SummaryNode
from storefront.session import UserSource


async def checkout_summary(lines: Sequence[CartLine], users: UserSource) -> CheckoutSummary:
    """Price `lines` for whoever `users` reports as signed in."""
    result = await compose(SummaryNode, CheckoutInput(tuple(lines), users))
    return result.data


__all__ = (
    # Types
    "CheckoutInput",
    "PricedLine",
    "CheckoutSummary",
    # Graph
    "TypedScope",
    "compose",
    "InputNode",
    "RoleNode",
    "PricedLinesNode",
    "SummaryNode",
    # Entry point
    "checkout_summary",
)
