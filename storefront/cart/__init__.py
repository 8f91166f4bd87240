"""
Cart: observable, persisted shopping cart.

    from storefront import cart as K

    store = K.CartStore.load(K.FileStorage("cart.json"))
    store.add_item(K.CartItem(12, "Polo", Decimal("249.90"), "M", "Azul"), quantity=2)
    store.totals()   # CartTotals(subtotal=Decimal("499.80"), item_count=2)

Architecture:

    UI events ──► CartStore ──► Storage.set(key, json) ──► listeners(store)
                      ▲
    LegacyCart ───────┘   (adapter, no storage of its own)
"""

from storefront.cart._types import (
    VariantKey,
    variant_key,
    CartItem,
    CartLine,
    CartTotals,
)
from storefront.cart._storage import (
    Storage,
    StorageError,
    FunctionalStorage,
    storage_from,
    MemoryStorage,
    FileStorage,
)
from storefront.cart._codec import encode_lines, decode_lines
from storefront.cart._store import CartStore
from storefront.cart._legacy import (
    migrate_legacy_cart,
    legacy_product_id,
    LegacyCart,
    LegacyCartItem,
    LegacyCartTotals,
)
from storefront.cart._quantity import parse_quantity
from storefront.cart._sqlalchemy import SQLAlchemyStorage, StoredValue

__all__ = (
    # Types
    "VariantKey",
    "variant_key",
    "CartItem",
    "CartLine",
    "CartTotals",
    # Storage
    "Storage",
    "StorageError",
    "FunctionalStorage",
    "storage_from",
    "MemoryStorage",
    "FileStorage",
    "SQLAlchemyStorage",
    "StoredValue",
    # Codec
    "encode_lines",
    "decode_lines",
    # Store
    "CartStore",
    # Legacy
    "migrate_legacy_cart",
    "legacy_product_id",
    "LegacyCart",
    "LegacyCartItem",
    "LegacyCartTotals",
    # Input
    "parse_quantity",
)
