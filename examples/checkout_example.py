"""
Checkout: cart lines × buyer role → priced lines and totals.

Key concepts:
- The role comes from the session; failures price as basic
- Amounts stay exact; rounding happens only in format_price
"""

from storefront import cart as K
from storefront import checkout as CO
from storefront import pricing as P
from examples._infra import banner, run, POLO_M, TROUSERS_32, PREMIUM, ANONYMOUS


async def main() -> None:
    store = K.CartStore(K.MemoryStorage())
    store.add_item(POLO_M, 2)
    store.add_item(TROUSERS_32, 1)

    for title, users in (("Premium customer", PREMIUM), ("Anonymous visitor", ANONYMOUS)):
        banner(title)
        summary = await CO.checkout_summary(store.lines, users)
        badge = P.discount_badge(summary.role)
        print(f"   role={summary.role.value} badge={badge.label if badge else None}")
        for priced in summary.lines:
            tag = P.display_price(priced.line.unit_price, summary.role)
            was = f" (antes {tag.original})" if tag.original else ""
            print(f"   {priced.line.quantity} × {priced.line.product_name}: {tag.price}{was}")
        print(f"   subtotal {P.format_price(summary.subtotal)}")
        print(f"   discount {P.format_price(summary.discount_total)}")
        print(f"   total    {P.format_price(summary.total)}  (exact: {summary.total})")

    print("\nDone!")


if __name__ == "__main__":
    run(main)
