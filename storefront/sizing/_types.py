"""
Sizing types: genders, garment types, catalog entries, snapshots.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto

# ═══════════════════════════════════════════════════════════════════════════════
# Gender
# ═══════════════════════════════════════════════════════════════════════════════


class Gender(Enum):
    """Catalog gender. Values are the API's wire strings."""

    MASCULINO = "masculino"
    FEMENINO = "femenino"
    UNISEX = "unisex"

    @property
    def label(self) -> str:
        return _GENDER_LABELS[self]

    @property
    def icon(self) -> str:
        return _GENDER_ICONS[self]


GENDER_ORDER: tuple[Gender, ...] = (Gender.MASCULINO, Gender.FEMENINO, Gender.UNISEX)

_GENDER_LABELS = {
    Gender.MASCULINO: "Hombre",
    Gender.FEMENINO: "Mujer",
    Gender.UNISEX: "Unisex",
}

_GENDER_ICONS = {
    Gender.MASCULINO: "♂",
    Gender.FEMENINO: "♀",
    Gender.UNISEX: "⚥",
}


class SizeType(Enum):
    WAIST = "waist"
    CLOTHING = "clothing"
    STANDARD = "standard"

    @classmethod
    def parse(cls, value: object) -> SizeType:
        try:
            return cls(str(value))
        except ValueError:
            return cls.STANDARD

    @property
    def label(self) -> str:
        return _SIZE_TYPE_LABELS[self]


_SIZE_TYPE_LABELS = {
    SizeType.WAIST: "Tallas de Cintura",
    SizeType.CLOTHING: "Tallas de Ropa",
    SizeType.STANDARD: "Tallas Estándar",
}


# ═══════════════════════════════════════════════════════════════════════════════
# Garment Type & Eligibility Rule
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class GarmentType:
    id: int
    name: str
    display_name: str = ""
    requires_sizes: bool = True
    is_active: bool = True


class GenderRule(Enum):
    """Which genders a garment type may be offered in. Exactly one applies."""

    UNISEX_ONLY = auto()      # does not require sizes
    MALE_FEMALE = auto()      # trouser-like
    FEMALE_UNISEX = auto()    # skirt/dress-like
    ALL = auto()


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SizeRange:
    """
    Administrative size configuration for one (garment type, gender).

    `size_list` wins over `min_size..max_size`; with neither, the size
    type's default list applies.
    """

    garment_type_id: int
    gender: Gender
    size_type: SizeType
    min_size: int | None = None
    max_size: int | None = None
    size_list: tuple[str, ...] = ()
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class SizeCatalogEntry:
    """Sizes offered for a (garment type, gender), in catalog order."""

    gender: Gender
    size_type: SizeType
    sizes: tuple[str, ...]


# ═══════════════════════════════════════════════════════════════════════════════
# Resolver Output
# ═══════════════════════════════════════════════════════════════════════════════


class AvailabilityTier(Enum):
    FULL = "full"        # every selected gender offers it
    PARTIAL = "partial"  # more than one, not all
    SINGLE = "single"    # exactly one


class LookupState(Enum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SizeOption:
    label: str
    tier: AvailabilityTier
    genders: tuple[Gender, ...]

    @property
    def tooltip(self) -> str:
        return "Disponible en: " + ", ".join(g.value for g in self.genders)


@dataclass(frozen=True, slots=True)
class SizeSnapshot:
    """
    Everything the size UI needs for one resolver generation.

    Built fresh on every read; never mutated.
    """

    generation: int
    garment: GarmentType | None
    legal_genders: tuple[Gender, ...]
    genders: tuple[Gender, ...]
    states: Mapping[Gender, LookupState] = field(default_factory=dict)
    entries: Mapping[Gender, SizeCatalogEntry] = field(default_factory=dict)
    sizes: tuple[SizeOption, ...] = ()

    @property
    def is_loading(self) -> bool:
        return any(s is LookupState.PENDING for s in self.states.values())

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(o.label for o in self.sizes)

    def option(self, label: str) -> SizeOption | None:
        for o in self.sizes:
            if o.label == label:
                return o
        return None

    def sizes_for(self, gender: Gender) -> tuple[str, ...]:
        """One gender's sizes, in combined order."""
        entry = self.entries.get(gender)
        if entry is None:
            return ()
        offered = set(entry.sizes)
        return tuple(label for label in self.labels if label in offered)

    def unavailable(self, selected: tuple[str, ...] | list[str]) -> tuple[str, ...]:
        """
        Selected sizes no longer offered by any selected gender.

        Only settled data counts: while a gender is pending its sizes are
        not reported as unavailable.
        """
        if self.is_loading:
            return ()
        offered = set(self.labels)
        return tuple(s for s in selected if s not in offered)


__all__ = (
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
)
