"""
Query: keyed async reads with tiered caching.

    from storefront import query as Q

    sizes = Q.query(lambda p: p, fetch_sizes).tier(Q.LocalTier()).build()
    result = await sizes.get((garment_type_id, gender))
"""

from __future__ import annotations

from storefront.query._types import (
    Tier,
    LocalTier,
    QueryResult,
    QueryError,
    QueryErrorKind,
)
from storefront.query._builder import (
    query,
    Query,
    QueryExecutor,
    error_from_exception,
)

__all__ = (
    "Tier",
    "LocalTier",
    "QueryResult",
    "QueryError",
    "QueryErrorKind",
    "query",
    "Query",
    "QueryExecutor",
    "error_from_exception",
)
