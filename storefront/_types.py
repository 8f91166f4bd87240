"""
Core types for storefront.

Re-exports from kungfu + shared aliases.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Money = Decimal
"""Currency amount. Never rounded before presentation."""

type Listener[S] = Callable[[S], None]
"""Subscriber callback, called synchronously with the new state."""

type Unsubscribe = Callable[[], None]
"""Handle returned by `subscribe()`; calling it removes the listener."""


def to_money(value: object) -> Money:
    """Coerce int/float/str/Decimal into Money without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a money amount")
    if isinstance(value, int | float | str):
        return Decimal(str(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to money")


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Aliases
    "Money",
    "Listener",
    "Unsubscribe",
    "to_money",
)
