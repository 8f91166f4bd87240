"""
Cart: observable store, durable storage, legacy migration.

Key concepts:
- One CartStore per storage key; every mutation persists, then notifies
- Same (product, size, color, gender) = same line, quantities add up
- The old cart key is folded in once and removed
"""

import json
import tempfile
from pathlib import Path

from storefront import cart as K
from storefront.pricing import format_price
from examples._infra import banner, run, POLO_M, POLO_F, TROUSERS_32


def show(store: K.CartStore) -> None:
    totals = store.totals()
    print(f"   [listener] {totals.item_count} items, subtotal {format_price(totals.subtotal)}")


async def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "storage.json"

        # The legacy cart left something behind
        K.FileStorage(path).set("uniformes-laguna-cart", json.dumps([
            {"id": "12-M-Azul", "name": "Polo Escolar", "price": 249.9, "quantity": 1, "size": "M", "color": "Azul"},
        ]))

        banner("1. Load + migrate legacy cart")
        storage = K.FileStorage(path)
        store = K.CartStore.load(storage)
        merged = K.migrate_legacy_cart(storage, store)
        print(f"   merged {merged} unit(s) from the legacy cart")

        banner("2. Mutations notify subscribers")
        unsubscribe = store.subscribe(show)
        store.add_item(POLO_M, 2)
        store.add_item(POLO_M)          # same variant → merged
        store.add_item(POLO_F)          # other gender → new line
        store.add_item(TROUSERS_32, 1)
        store.update_quantity(POLO_F.variant_key, 0)  # removes
        unsubscribe()

        banner("3. Reload from disk")
        reloaded = K.CartStore.load(K.FileStorage(path))
        for line in reloaded:
            print(f"   {line.quantity} × {line.product_name} {line.size}/{line.color} "
                  f"@ {format_price(line.unit_price)}")
        print(f"   same lines: {reloaded.lines == store.lines}")

        banner("4. Legacy adapter over the same store")
        legacy = K.LegacyCart(reloaded)
        totals = legacy.get_cart_totals()
        print(f"   legacy view: {totals.item_count} items, ids={[i.id for i in totals.items]}")

    print("\nDone!")


if __name__ == "__main__":
    run(main)
