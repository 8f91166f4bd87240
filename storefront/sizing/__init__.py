"""
Sizing: which genders and sizes a product can be bought in.

    from storefront import sizing as S

    resolver = S.SizeResolver(catalog)
    resolver.select(S.GarmentType(4, "Pantalón"), ["masculino", "femenino"])
    snapshot = await resolver.settle()

    for option in snapshot.sizes:
        print(option.label, option.tier.value, option.tooltip)

Architecture:

    select(garment, genders)
        │  generation += 1
        ├──► GenderRules.select()          legal ∩ requested
        └──► one task per gender ──► Query[(type id, gender)] ──► SizeLookup
                                          │
                     result.generation == current ? apply : drop
                                          │
                                   combine_sizes() ──► listeners(snapshot)
"""

from storefront.sizing._types import (
    Gender,
    GENDER_ORDER,
    SizeType,
    GarmentType,
    GenderRule,
    SizeRange,
    SizeCatalogEntry,
    AvailabilityTier,
    LookupState,
    SizeOption,
    SizeSnapshot,
)
from storefront.sizing._eligibility import GenderRules
from storefront.sizing._ordering import (
    CLOTHING_PROGRESSION,
    size_sort_key,
    sort_sizes,
    namespaced_size,
    split_namespaced_size,
)
from storefront.sizing._catalog import (
    DEFAULT_SIZES,
    FALLBACK_SIZES,
    expand_size_range,
    SizeLookup,
    MemorySizeCatalog,
)
from storefront.sizing._resolver import combine_sizes, SizeResolver

__all__ = (
    # Types
    "Gender",
    "GENDER_ORDER",
    "SizeType",
    "GarmentType",
    "GenderRule",
    "SizeRange",
    "SizeCatalogEntry",
    "AvailabilityTier",
    "LookupState",
    "SizeOption",
    "SizeSnapshot",
    # Eligibility
    "GenderRules",
    # Ordering
    "CLOTHING_PROGRESSION",
    "size_sort_key",
    "sort_sizes",
    "namespaced_size",
    "split_namespaced_size",
    # Catalog
    "DEFAULT_SIZES",
    "FALLBACK_SIZES",
    "expand_size_range",
    "SizeLookup",
    "MemorySizeCatalog",
    # Resolver
    "combine_sizes",
    "SizeResolver",
)
