"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from decimal import Decimal

from storefront.cart import CartItem
from storefront.config import configure_logging
from storefront.pricing import Role
from storefront.session import CurrentUser, StaticUserSource
from storefront.sizing import Gender, GarmentType, MemorySizeCatalog, SizeRange, SizeType


# Garment types
POLO = GarmentType(1, "polo", "Polo")
TROUSERS = GarmentType(4, "pantalon", "Pantalón")
SKIRT = GarmentType(10, "falda", "Falda")
CAP = GarmentType(7, "gorra", "Gorra", requires_sizes=False)


# Products
POLO_M = CartItem(12, "Polo Escolar", Decimal("249.90"), "M", "Azul", gender="masculino")
POLO_F = CartItem(12, "Polo Escolar", Decimal("249.90"), "M", "Azul", gender="femenino")
TROUSERS_32 = CartItem(30, "Pantalón de Vestir", Decimal("399.00"), "32", "Negro", gender="masculino")


# Users
PREMIUM = StaticUserSource(CurrentUser("u1", "ana@example.com", Role.PREMIUM, "Ana López"))
ANONYMOUS = StaticUserSource()


# Fake size catalog
def fake_catalog(delay: dict[Gender, float] | None = None) -> MemorySizeCatalog:
    return MemorySizeCatalog(
        [
            SizeRange(POLO.id, Gender.MASCULINO, SizeType.STANDARD, size_list=("S", "M", "L")),
            SizeRange(POLO.id, Gender.FEMENINO, SizeType.STANDARD, size_list=("M", "L", "XL")),
            SizeRange(POLO.id, Gender.UNISEX, SizeType.STANDARD),
            SizeRange(TROUSERS.id, Gender.MASCULINO, SizeType.WAIST, min_size=30, max_size=34),
            SizeRange(TROUSERS.id, Gender.FEMENINO, SizeType.WAIST, size_list=("28", "30", "32")),
            SizeRange(SKIRT.id, Gender.FEMENINO, SizeType.CLOTHING),
        ],
        delay=delay,
    )


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    configure_logging()
    asyncio.run(main())
