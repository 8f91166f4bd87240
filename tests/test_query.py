"""Tests for the tiered query layer."""

import asyncio

import httpx
import pytest
from kungfu import Ok, Error

from storefront import query as Q


class Source:
    def __init__(self, fail_with=None):
        self.calls = []
        self.fail_with = fail_with

    async def fetch(self, params):
        self.calls.append(params)
        if self.fail_with is not None:
            raise self.fail_with
        return f"value:{params}"


class TestLocalTier:
    async def test_get_set_delete(self):
        tier = Q.LocalTier[str]()
        assert await tier.get("a") is None
        await tier.set("a", "1")
        assert await tier.get("a") == "1"
        assert await tier.delete("a") is True
        assert await tier.delete("a") is False

    async def test_lru_eviction(self):
        tier = Q.LocalTier[int](max_size=2)
        await tier.set("a", 1)
        await tier.set("b", 2)
        await tier.get("a")
        await tier.set("c", 3)
        assert await tier.get("b") is None
        assert await tier.get("a") == 1
        assert len(tier) == 2

    async def test_delete_where(self):
        tier = Q.LocalTier[int]()
        for key in [(1, "m"), (1, "f"), (2, "m")]:
            await tier.set(key, 0)
        assert await tier.delete_where(lambda k: k[0] == 1) == 2
        assert len(tier) == 1


class TestQueryExecutor:
    async def test_miss_then_hit(self):
        source = Source()
        q = Q.query(lambda p: p, source.fetch).tier(Q.LocalTier()).build()

        match await q.get((1, "m")):
            case Ok(first):
                assert first.value == "value:(1, 'm')"
                assert first.hit is False
            case Error(e):
                pytest.fail(e.message)

        match await q.get((1, "m")):
            case Ok(second):
                assert second.hit is True
                assert second.tier == "local"
            case Error(e):
                pytest.fail(e.message)

        assert source.calls == [(1, "m")]

    async def test_without_tiers_always_fetches(self):
        source = Source()
        q = Q.query(lambda p: p, source.fetch).build()
        await q.get("a")
        await q.get("a")
        assert source.calls == ["a", "a"]

    @pytest.mark.parametrize("exc,kind", [
        (ConnectionError("down"), Q.QueryErrorKind.UPSTREAM),
        (asyncio.TimeoutError(), Q.QueryErrorKind.TIMEOUT),
        (httpx.ReadTimeout("slow"), Q.QueryErrorKind.TIMEOUT),
        (ValueError("bad json"), Q.QueryErrorKind.DECODE),
        (KeyError("sizes"), Q.QueryErrorKind.DECODE),
    ])
    async def test_exceptions_become_errors(self, exc, kind):
        q = Q.query(lambda p: p, Source(fail_with=exc).fetch).tier(Q.LocalTier()).build()
        match await q.get("a"):
            case Error(e):
                assert e.kind is kind
            case Ok(v):
                pytest.fail(f"expected error, got {v!r}")

    async def test_errors_are_not_cached(self):
        source = Source(fail_with=ConnectionError("down"))
        q = Q.query(lambda p: p, source.fetch).tier(Q.LocalTier()).build()
        await q.get("a")
        source.fail_with = None
        match await q.get("a"):
            case Ok(result):
                assert result.hit is False
            case Error(e):
                pytest.fail(e.message)
        assert len(source.calls) == 2

    async def test_invalidate(self):
        source = Source()
        q = Q.query(lambda p: p, source.fetch).tier(Q.LocalTier()).build()
        await q.get("a")
        assert await q.invalidate("a") is True
        await q.get("a")
        assert source.calls == ["a", "a"]

    async def test_invalidate_where(self):
        source = Source()
        q = Q.query(lambda p: p, source.fetch).tier(Q.LocalTier()).build()
        for params in [(1, "m"), (1, "f"), (2, "m")]:
            await q.get(params)
        assert await q.invalidate_where(lambda k: k[0] == 1) == 2

    async def test_broken_tier_is_skipped(self):
        class BrokenTier:
            name = "broken"

            async def get(self, key):
                raise RuntimeError("tier down")

            async def set(self, key, value):
                raise RuntimeError("tier down")

            async def delete(self, key):
                return False

            async def delete_where(self, predicate):
                return 0

        source = Source()
        q = Q.query(lambda p: p, source.fetch).tier(BrokenTier()).build()
        match await q.get("a"):
            case Ok(result):
                assert result.value == "value:a"
            case Error(e):
                pytest.fail(e.message)
