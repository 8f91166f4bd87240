"""
Checkout nodes: input → role → priced lines → summary.

Role lookup is the only async step; everything downstream is pure pricing.
"""

from decimal import Decimal

from nodnod import scalar_node as node

from storefront.checkout._types import CheckoutInput, PricedLine, CheckoutSummary
from storefront.pricing import Role, price_for, tier_for
from storefront.session import current_role


@node
class InputNode:
    """Entry point: wraps the CheckoutInput."""

    def __init__(self, data: CheckoutInput) -> None:
        self.data = data

    @classmethod
    def __compose__(cls, data: CheckoutInput) -> "InputNode":
        return cls(data)


@node
class RoleNode:
    """Buyer's role; anonymous or failed lookups price as basic."""

    def __init__(self, role: Role) -> None:
        self.role = role

    @classmethod
    async def __compose__(cls, inp: InputNode) -> "RoleNode":
        return cls(await current_role(inp.data.users))


@node
class PricedLinesNode:
    def __init__(self, lines: tuple[PricedLine, ...]) -> None:
        self.lines = lines

    @classmethod
    def __compose__(cls, inp: InputNode, role: RoleNode) -> "PricedLinesNode":
        return cls(tuple(
            PricedLine(line, price_for(line.unit_price, role.role))
            for line in inp.data.lines
        ))


@node
class SummaryNode:
    def __init__(self, data: CheckoutSummary) -> None:
        self.data = data

    @classmethod
    def __compose__(cls, role: RoleNode, priced: PricedLinesNode) -> "SummaryNode":
        subtotal = sum((p.original_total for p in priced.lines), Decimal(0))
        total = sum((p.line_total for p in priced.lines), Decimal(0))
        return cls(CheckoutSummary(
            role=role.role,
            discount_percent=tier_for(role.role).discount_percent,
            lines=priced.lines,
            subtotal=subtotal,
            discount_total=subtotal - total,
            total=total,
            item_count=sum(p.line.quantity for p in priced.lines),
        ))


__all__ = ("InputNode", "RoleNode", "PricedLinesNode", "SummaryNode")
