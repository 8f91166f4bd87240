"""Shared fixtures for storefront tests."""

import asyncio
from decimal import Decimal

import pytest

from storefront.cart import CartItem, CartStore, MemoryStorage
from storefront.sizing import (
    Gender,
    GarmentType,
    GenderRules,
    MemorySizeCatalog,
    SizeCatalogEntry,
    SizeRange,
    SizeType,
)

POLO = GarmentType(1, "polo", "Polo")
TROUSERS = GarmentType(4, "pantalon", "Pantalón")
SKIRT = GarmentType(10, "falda", "Falda")
DRESS = GarmentType(11, "vestido", "Vestido")
CAP = GarmentType(7, "gorra", "Gorra", requires_sizes=False)


class GatedCatalog:
    """
    MemorySizeCatalog whose answers can be held back per (garment type, gender).

    `hold()` returns the gate; the lookup finishes once the gate is set.
    `fail()` makes a lookup raise.
    """

    def __init__(self, inner: MemorySizeCatalog) -> None:
        self.inner = inner
        self.gates: dict[tuple[int, Gender], asyncio.Event] = {}
        self.failing: set[tuple[int, Gender]] = set()

    @property
    def calls(self) -> list[tuple[int, Gender]]:
        return self.inner.calls

    def hold(self, garment_type_id: int, gender: Gender) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[(garment_type_id, gender)] = gate
        return gate

    def fail(self, garment_type_id: int, gender: Gender) -> None:
        self.failing.add((garment_type_id, gender))

    async def available_sizes(self, garment_type_id: int, gender: Gender) -> SizeCatalogEntry:
        entry = await self.inner.available_sizes(garment_type_id, gender)
        gate = self.gates.get((garment_type_id, gender))
        if gate is not None:
            await gate.wait()
        if (garment_type_id, gender) in self.failing:
            raise ConnectionError(f"catalog down for {garment_type_id}/{gender.value}")
        return entry


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> CartStore:
    return CartStore(storage, key="cart")


@pytest.fixture
def polo_m() -> CartItem:
    return CartItem(12, "Polo Escolar", Decimal("249.90"), "M", "Azul")


@pytest.fixture
def polo_l() -> CartItem:
    return CartItem(12, "Polo Escolar", Decimal("249.90"), "L", "Azul")


@pytest.fixture
def rules() -> GenderRules:
    return GenderRules(trouser_ids=frozenset({4}), skirt_dress_ids=frozenset({10, 11}))


@pytest.fixture
def catalog() -> GatedCatalog:
    ranges = [
        SizeRange(POLO.id, Gender.MASCULINO, SizeType.STANDARD, size_list=("S", "M", "L")),
        SizeRange(POLO.id, Gender.FEMENINO, SizeType.STANDARD, size_list=("M", "L", "XL")),
        SizeRange(POLO.id, Gender.UNISEX, SizeType.STANDARD, size_list=("XS", "S")),
        SizeRange(TROUSERS.id, Gender.MASCULINO, SizeType.WAIST, min_size=30, max_size=34),
        SizeRange(TROUSERS.id, Gender.FEMENINO, SizeType.WAIST, size_list=("28", "30")),
        SizeRange(SKIRT.id, Gender.FEMENINO, SizeType.CLOTHING),
    ]
    return GatedCatalog(MemorySizeCatalog(ranges))
