"""
Quantity input normalization for the product-page selector.
"""

from __future__ import annotations

from storefront.config import settings


def parse_quantity(value: object, minimum: int = 1, maximum: int | None = None) -> int:
    """
    Clamp free-form input into [minimum, maximum].

        parse_quantity("12")    # 12
        parse_quantity("abc")   # 1
        parse_quantity("5000")  # 999
    """
    maximum = settings.max_quantity if maximum is None else maximum
    try:
        number = int(str(value).strip())
    except ValueError:
        return minimum
    return max(minimum, min(number, maximum))


__all__ = ("parse_quantity",)
