"""
Query builder: keyed async reads with tiered caching.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass

import httpx
from combinators import lift as L
from kungfu import LazyCoroResult, Result, Ok, Error

from storefront.query._types import (
    Tier,
    QueryResult,
    QueryError,
    QueryErrorKind,
)

logger = logging.getLogger(__name__)

type KeyFn[P] = Callable[[P], Hashable]
type FetchFn[P, T] = Callable[[P], Awaitable[T]]


def error_from_exception(exc: Exception) -> QueryError:
    """Map an upstream exception to a QueryError."""
    if isinstance(exc, asyncio.TimeoutError | httpx.TimeoutException):
        return QueryError(QueryErrorKind.TIMEOUT, str(exc) or "timed out")
    if isinstance(exc, ValueError | KeyError | TypeError):
        return QueryError(QueryErrorKind.DECODE, str(exc))
    return QueryError(QueryErrorKind.UPSTREAM, str(exc))


# ═══════════════════════════════════════════════════════════════════════════════
# Query Builder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class Query[P, T]:
    """
    Fluent query builder.

    Type parameters:
        P: Query parameters
        T: Value type

    Example:
        sizes = (
            Q.query(lambda p: p, lookup_sizes)
            .tier(Q.LocalTier())
            .build()
        )
    """

    _key_fn: KeyFn[P]
    _fetch: FetchFn[P, T]
    _tiers: tuple[Tier[T], ...]

    def tier(self, t: Tier[T]) -> Query[P, T]:
        """Add a tier. Tiers are read in the order they were added."""
        return Query(
            _key_fn=self._key_fn,
            _fetch=self._fetch,
            _tiers=(*self._tiers, t),
        )

    def build(self) -> QueryExecutor[P, T]:
        return QueryExecutor(
            key_fn=self._key_fn,
            tiers=self._tiers,
            fetch=self._fetch,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Query Executor
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class QueryExecutor[P, T]:
    """Compiled query."""

    key_fn: KeyFn[P]
    tiers: tuple[Tier[T], ...]
    fetch: FetchFn[P, T]

    def get(self, params: P) -> LazyCoroResult[QueryResult[T], QueryError]:
        """
        Read through the tiers, fetching on a full miss.

        Fetch exceptions become `Error(QueryError)`; failures are never cached.
        """
        key = self.key_fn(params)
        tiers = self.tiers
        fetch_fn = self.fetch

        async def execute() -> Result[QueryResult[T], QueryError]:
            for t in tiers:
                try:
                    value = await t.get(key)
                except Exception:
                    logger.debug("Tier %s failed reading %r", t.name, key, exc_info=True)
                    continue
                if value is not None:
                    return Ok(QueryResult(value=value, hit=True, tier=t.name))

            fetched = await L.catching_async(
                lambda: fetch_fn(params),
                on_error=error_from_exception,
            )
            match fetched:
                case Ok(value):
                    for t in tiers:
                        try:
                            await t.set(key, value)
                        except Exception:
                            logger.debug("Tier %s failed writing %r", t.name, key, exc_info=True)
                    return Ok(QueryResult(value=value, hit=False, tier=None))
                case Error(e):
                    logger.info("Query %r failed: %s", key, e.message)
                    return Error(e)

        return LazyCoroResult(execute)

    async def invalidate(self, params: P) -> bool:
        """Drop one key from every tier."""
        key = self.key_fn(params)
        deleted = False
        for t in self.tiers:
            if await t.delete(key):
                deleted = True
        return deleted

    async def invalidate_where(self, predicate: Callable[[Hashable], bool]) -> int:
        """Drop every key matching predicate from every tier."""
        total = 0
        for t in self.tiers:
            total += await t.delete_where(predicate)
        return total


# ═══════════════════════════════════════════════════════════════════════════════
# query(): Entry Point
# ═══════════════════════════════════════════════════════════════════════════════


def query[P, T](key: KeyFn[P], fetch: FetchFn[P, T]) -> Query[P, T]:
    """
    Create a query builder from a key function and an async fetch.

    Example:
        from storefront import query as Q

        garment_types = (
            Q.query(lambda _: "garment-types", lambda _: client.garment_types())
            .tier(Q.LocalTier())
            .build()
        )
        result = await garment_types.get(None)
    """
    return Query(
        _key_fn=key,
        _fetch=fetch,
        _tiers=(),
    )


__all__ = ("Query", "QueryExecutor", "query", "error_from_exception")
