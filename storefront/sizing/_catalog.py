"""
Size catalog: where per-(garment type, gender) sizes come from.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Protocol

from storefront.sizing._types import Gender, SizeType, SizeRange, SizeCatalogEntry

DEFAULT_SIZES: dict[SizeType, tuple[str, ...]] = {
    SizeType.STANDARD: ("XS", "S", "M", "L", "XL", "2XL", "3XL"),
    SizeType.WAIST: tuple(str(n) for n in range(28, 45, 2)),
    SizeType.CLOTHING: tuple(str(n) for n in range(5, 22, 2)),
}

FALLBACK_SIZES: tuple[str, ...] = ("S", "M", "L", "XL")


def expand_size_range(size_range: SizeRange | None, gender: Gender) -> SizeCatalogEntry:
    """
    Turn an administrative range into the list of offered sizes.

    A missing or inactive range offers nothing (standard type).
    """
    if size_range is None or not size_range.is_active:
        return SizeCatalogEntry(gender=gender, size_type=SizeType.STANDARD, sizes=())

    if size_range.size_list:
        sizes = tuple(size_range.size_list)
    elif size_range.min_size is not None and size_range.max_size is not None:
        sizes = tuple(str(n) for n in range(size_range.min_size, size_range.max_size + 1))
    else:
        sizes = DEFAULT_SIZES.get(size_range.size_type, FALLBACK_SIZES)

    return SizeCatalogEntry(gender=gender, size_type=size_range.size_type, sizes=sizes)


# ═══════════════════════════════════════════════════════════════════════════════
# Lookup Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class SizeLookup(Protocol):
    """
    Async source of catalog entries.

    Implementations raise on transport failure; the resolver turns that
    into a per-gender FAILED state.
    """

    async def available_sizes(self, garment_type_id: int, gender: Gender) -> SizeCatalogEntry:
        ...


class MemorySizeCatalog:
    """
    SizeLookup over in-memory SizeRange records.

    `delay` simulates network latency (seconds, per gender) in examples
    and tests.
    """

    def __init__(
        self,
        ranges: Iterable[SizeRange] = (),
        delay: dict[Gender, float] | None = None,
    ) -> None:
        self._ranges: dict[tuple[int, Gender], SizeRange] = {}
        self._delay = delay or {}
        self.calls: list[tuple[int, Gender]] = []
        for r in ranges:
            self.add(r)

    def add(self, size_range: SizeRange) -> None:
        self._ranges[(size_range.garment_type_id, size_range.gender)] = size_range

    async def available_sizes(self, garment_type_id: int, gender: Gender) -> SizeCatalogEntry:
        self.calls.append((garment_type_id, gender))
        if (pause := self._delay.get(gender)) is not None:
            await asyncio.sleep(pause)
        return expand_size_range(self._ranges.get((garment_type_id, gender)), gender)


__all__ = (
    "DEFAULT_SIZES",
    "FALLBACK_SIZES",
    "expand_size_range",
    "SizeLookup",
    "MemorySizeCatalog",
)
