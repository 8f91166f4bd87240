"""
Query types: tiers, results, errors.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

# ═══════════════════════════════════════════════════════════════════════════════
# Tier Protocol
# ═══════════════════════════════════════════════════════════════════════════════

class Tier[T](Protocol):
    """
    Storage tier for query results.

    Keys are the hashable query parameters themselves, e.g.
    `(garment_type_id, gender)`.
    """

    @property
    def name(self) -> str:
        """Tier name for debugging."""
        ...

    async def get(self, key: Hashable) -> T | None:
        """Get value. Returns None on miss."""
        ...

    async def set(self, key: Hashable, value: T) -> None:
        ...

    async def delete(self, key: Hashable) -> bool:
        """Delete key. Returns True if existed."""
        ...

    async def delete_where(self, predicate: Callable[[Hashable], bool]) -> int:
        """Delete keys matching predicate. Returns count."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Local Tier: In-Memory LRU
# ═══════════════════════════════════════════════════════════════════════════════

class LocalTier[T]:
    """
    In-memory LRU tier. Lives as long as its owner (no persistence).

    Example:
        tier = LocalTier[SizeCatalogEntry](max_size=64)
    """

    def __init__(self, max_size: int = 256) -> None:
        self._max_size = max_size
        self._entries: OrderedDict[Hashable, T] = OrderedDict()

    @property
    def name(self) -> str:
        return "local"

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: Hashable) -> T | None:
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    async def set(self, key: Hashable, value: T) -> None:
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self._max_size:
            self._entries.popitem(last=False)
        self._entries[key] = value

    async def delete(self, key: Hashable) -> bool:
        return self._entries.pop(key, None) is not None

    async def delete_where(self, predicate: Callable[[Hashable], bool]) -> int:
        doomed = [k for k in self._entries if predicate(k)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)


# ═══════════════════════════════════════════════════════════════════════════════
# Query Result / Error
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class QueryResult[T]:
    """Query value with where it came from."""
    value: T
    hit: bool
    tier: str | None


class QueryErrorKind(Enum):
    UPSTREAM = auto()
    DECODE = auto()
    TIMEOUT = auto()


@dataclass(frozen=True, slots=True)
class QueryError:
    """Fetch failed for one key."""
    kind: QueryErrorKind
    message: str


__all__ = (
    "Tier",
    "LocalTier",
    "QueryResult",
    "QueryError",
    "QueryErrorKind",
)
