"""
Size resolver: merge per-gender catalog lookups into one size list.

    resolver = SizeResolver(catalog)
    resolver.subscribe(render)

    resolver.select(polo, ["masculino", "femenino"])   # returns at once
    ...                                                 # render() per arriving gender
    snapshot = await resolver.settle()

Each selected gender is looked up in its own task. Results are applied as
they arrive, but only if they belong to the current input generation;
anything older is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Hashable, Iterable, Mapping

from kungfu import Ok, Error

from storefront import query as Q
from storefront._types import Listener, Unsubscribe
from storefront.sizing._catalog import SizeLookup
from storefront.sizing._eligibility import GenderRules
from storefront.sizing._ordering import sort_sizes
from storefront.sizing._types import (
    Gender,
    GarmentType,
    SizeCatalogEntry,
    AvailabilityTier,
    LookupState,
    SizeOption,
    SizeSnapshot,
)

logger = logging.getLogger(__name__)

type CatalogKey = tuple[int, Gender]


# ═══════════════════════════════════════════════════════════════════════════════
# combine_sizes(): Pure Merge
# ═══════════════════════════════════════════════════════════════════════════════


def combine_sizes(
    genders: tuple[Gender, ...],
    entries: Mapping[Gender, SizeCatalogEntry],
) -> tuple[SizeOption, ...]:
    """
    Union of the entries' sizes, ordered, each with its availability tier.

    A gender without an entry (pending or failed) offers nothing, so a
    size can only be FULL once every selected gender has answered.
    """
    offered_by: dict[str, list[Gender]] = {}
    for gender in genders:
        entry = entries.get(gender)
        if entry is None:
            continue
        for label in entry.sizes:
            holders = offered_by.setdefault(label, [])
            if gender not in holders:
                holders.append(gender)

    options: list[SizeOption] = []
    for label in sort_sizes(offered_by):
        holders = tuple(offered_by[label])
        options.append(SizeOption(label, _tier(len(holders), len(genders)), holders))
    return tuple(options)


def _tier(count: int, total: int) -> AvailabilityTier:
    if count == total:
        return AvailabilityTier.FULL
    if count > 1:
        return AvailabilityTier.PARTIAL
    return AvailabilityTier.SINGLE


# ═══════════════════════════════════════════════════════════════════════════════
# SizeResolver
# ═══════════════════════════════════════════════════════════════════════════════


class SizeResolver:
    """
    Legal genders and combined sizes for the current product configuration.

    The resolver never edits the caller's selected sizes; use
    `SizeSnapshot.unavailable()` to find the ones to prune.

    `select()` schedules work on the running event loop, so it must be
    called from inside it.
    """

    def __init__(self, lookup: SizeLookup, rules: GenderRules | None = None) -> None:
        self._lookup = lookup
        self._rules = rules or GenderRules.from_settings()
        self._catalog: Q.QueryExecutor[CatalogKey, SizeCatalogEntry] = (
            Q.query(_catalog_key, self._fetch)
            .tier(Q.LocalTier[SizeCatalogEntry](max_size=64))
            .build()
        )

        self._generation = 0
        self._garment: GarmentType | None = None
        self._genders: tuple[Gender, ...] = ()
        self._states: dict[Gender, LookupState] = {}
        self._entries: dict[Gender, SizeCatalogEntry] = {}

        self._current: list[asyncio.Task[None]] = []
        self._outstanding: set[asyncio.Task[None]] = set()
        self._listeners: list[Listener[SizeSnapshot]] = []

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def rules(self) -> GenderRules:
        return self._rules

    # ─────────────────────────────────────────────────────────────────────────
    # Input
    # ─────────────────────────────────────────────────────────────────────────

    def select(
        self,
        garment: GarmentType | None,
        genders: Iterable[Gender | str] = (),
    ) -> SizeSnapshot:
        """
        Replace the current input and start lookups for it.

        Entries already resolved for the same garment type and a gender
        that stays selected are kept; every other gender goes PENDING.
        """
        loop = asyncio.get_running_loop()
        previous = self._garment
        same_garment = previous is not None and garment is not None and previous.id == garment.id

        self._generation += 1
        generation = self._generation
        self._garment = garment
        self._genders = self._rules.select(garment, genders)

        kept = {
            g: e for g, e in self._entries.items()
            if same_garment and g in self._genders
        }
        self._entries = kept
        self._states = {g: LookupState.READY for g in kept}
        self._current = []

        if previous is not None and not same_garment:
            stale_id = previous.id
            self._track(loop.create_task(
                self._drop_cached(lambda key: _garment_of(key) == stale_id)
            ))

        if garment is not None and garment.requires_sizes:
            for gender in self._genders:
                if gender in kept:
                    continue
                self._states[gender] = LookupState.PENDING
                task = loop.create_task(self._resolve(generation, garment.id, gender))
                self._current.append(task)
                self._track(task)

        logger.debug(
            "Generation %d: garment=%s genders=%s",
            generation,
            garment.id if garment else None,
            [g.value for g in self._genders],
        )
        return self.snapshot()

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────

    def legal_genders(self, garment: GarmentType | None) -> tuple[Gender, ...]:
        return self._rules.legal_genders(garment)

    def snapshot(self) -> SizeSnapshot:
        genders = self._genders
        entries = {g: self._entries[g] for g in genders if g in self._entries}
        return SizeSnapshot(
            generation=self._generation,
            garment=self._garment,
            legal_genders=self._rules.legal_genders(self._garment),
            genders=genders,
            states=dict(self._states),
            entries=entries,
            sizes=combine_sizes(genders, entries),
        )

    async def settle(self) -> SizeSnapshot:
        """Wait for the current generation's lookups, then snapshot."""
        if self._current:
            await asyncio.gather(*self._current)
        return self.snapshot()

    def subscribe(self, listener: Listener[SizeSnapshot]) -> Unsubscribe:
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener[SizeSnapshot]) -> None:
        self._listeners = [fn for fn in self._listeners if fn is not listener]

    async def close(self) -> None:
        """Cancel outstanding lookups; anything still in flight is dropped."""
        self._generation += 1
        tasks = list(self._outstanding)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._outstanding.clear()
        self._current = []

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    async def _fetch(self, key: CatalogKey) -> SizeCatalogEntry:
        garment_type_id, gender = key
        return await self._lookup.available_sizes(garment_type_id, gender)

    async def _resolve(self, generation: int, garment_type_id: int, gender: Gender) -> None:
        result = await self._catalog.get((garment_type_id, gender))

        if generation != self._generation:
            logger.debug(
                "Dropping stale sizes for %s/%s (generation %d, current %d)",
                garment_type_id, gender.value, generation, self._generation,
            )
            return

        match result:
            case Ok(found):
                self._entries[gender] = found.value
                self._states[gender] = LookupState.READY
            case Error(e):
                logger.info("Sizes for %s/%s unavailable: %s", garment_type_id, gender.value, e.message)
                self._entries.pop(gender, None)
                self._states[gender] = LookupState.FAILED

        self._notify()

    async def _drop_cached(self, predicate: Callable[[Hashable], bool]) -> None:
        dropped = await self._catalog.invalidate_where(predicate)
        logger.debug("Dropped %d cached catalog entries", dropped)

    def _track(self, task: asyncio.Task[None]) -> None:
        self._outstanding.add(task)
        task.add_done_callback(self._outstanding.discard)

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in tuple(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Size listener %r failed", listener)


def _catalog_key(key: CatalogKey) -> Hashable:
    return key


def _garment_of(key: Hashable) -> int | None:
    if isinstance(key, tuple) and key:
        return key[0]
    return None


__all__ = ("combine_sizes", "SizeResolver")
