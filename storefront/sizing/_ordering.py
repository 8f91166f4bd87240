"""
Size ordering.

Three buckets, in this order:
    1. clothing progression  XS < S < M < L < XL < XXL (2XL) < 3XL < 4XL
    2. purely numeric labels, by value (waist sizes, "7.5")
    3. everything else, alphabetically
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from decimal import Decimal

CLOTHING_PROGRESSION: tuple[str, ...] = ("XS", "S", "M", "L", "XL", "XXL", "3XL", "4XL")

_PROGRESSION_INDEX = {label: i for i, label in enumerate(CLOTHING_PROGRESSION)}
_PROGRESSION_INDEX["2XL"] = _PROGRESSION_INDEX["XXL"]  # catalog default spelling
_NUMERIC = re.compile(r"^\d+(\.\d+)?$")


def size_sort_key(label: str) -> tuple[int, Decimal, str, str]:
    stripped = label.strip()
    position = _PROGRESSION_INDEX.get(stripped.upper())
    if position is not None:
        return (0, Decimal(position), "", label)
    if _NUMERIC.match(stripped):
        return (1, Decimal(stripped), "", label)
    return (2, Decimal(0), stripped.casefold(), label)


def sort_sizes(labels: Iterable[str]) -> list[str]:
    """De-duplicate and order size labels."""
    return sorted(set(labels), key=size_sort_key)


def namespaced_size(gender: str, size: str) -> str:
    """Per-gender selection value, e.g. "femenino:M"."""
    return f"{gender}:{size}"


def split_namespaced_size(value: str) -> tuple[str | None, str]:
    """
    Inverse of `namespaced_size`. Plain labels have no gender.

        split_namespaced_size("femenino:M")  # ("femenino", "M")
        split_namespaced_size("M")           # (None, "M")
    """
    gender, sep, size = value.partition(":")
    if not sep:
        return None, value
    return gender, size


__all__ = (
    "CLOTHING_PROGRESSION",
    "size_sort_key",
    "sort_sizes",
    "namespaced_size",
    "split_namespaced_size",
)
