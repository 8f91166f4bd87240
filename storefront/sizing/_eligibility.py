"""
Gender eligibility: which genders a garment type can be offered in.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from storefront.config import settings
from storefront.sizing._types import Gender, GENDER_ORDER, GarmentType, GenderRule

_LEGAL: dict[GenderRule, tuple[Gender, ...]] = {
    GenderRule.UNISEX_ONLY: (Gender.UNISEX,),
    GenderRule.MALE_FEMALE: (Gender.MASCULINO, Gender.FEMENINO),
    GenderRule.FEMALE_UNISEX: (Gender.FEMENINO, Gender.UNISEX),
    GenderRule.ALL: GENDER_ORDER,
}


@dataclass(frozen=True, slots=True)
class GenderRules:
    """
    Garment-type identities with restricted genders.

    Defaults come from settings (trousers: 4; skirts and dresses: 10, 11).
    """

    trouser_ids: frozenset[int]
    skirt_dress_ids: frozenset[int]

    @classmethod
    def from_settings(cls) -> GenderRules:
        return cls(
            trouser_ids=settings.trouser_garment_ids,
            skirt_dress_ids=settings.skirt_dress_garment_ids,
        )

    def rule_for(self, garment: GarmentType) -> GenderRule:
        if not garment.requires_sizes:
            return GenderRule.UNISEX_ONLY
        if garment.id in self.trouser_ids:
            return GenderRule.MALE_FEMALE
        if garment.id in self.skirt_dress_ids:
            return GenderRule.FEMALE_UNISEX
        return GenderRule.ALL

    def legal_genders(self, garment: GarmentType | None) -> tuple[Gender, ...]:
        """Legal genders in canonical order; no garment type → all three."""
        if garment is None:
            return GENDER_ORDER
        return _LEGAL[self.rule_for(garment)]

    def select(
        self,
        garment: GarmentType | None,
        requested: Iterable[Gender | str],
    ) -> tuple[Gender, ...]:
        """
        Requested genders that are legal for `garment`, de-duplicated.

        For a type that needs no sizes, unisex is selected when nothing
        legal was requested.
        """
        legal = self.legal_genders(garment)
        wanted = {_parse_gender(g) for g in requested} - {None}
        chosen = tuple(g for g in legal if g in wanted)

        if not chosen and garment is not None and self.rule_for(garment) is GenderRule.UNISEX_ONLY:
            return (Gender.UNISEX,)
        return chosen


def _parse_gender(value: Gender | str) -> Gender | None:
    if isinstance(value, Gender):
        return value
    try:
        return Gender(str(value).strip().lower())
    except ValueError:
        return None


__all__ = ("GenderRules",)
