"""
Sizing: legal genders, combined sizes, stale responses.

Key concepts:
- Gender rules depend only on the garment type
- Each gender is looked up on its own; partial results render at once
- A response for an older input is dropped, never shown
"""

import asyncio

from storefront import sizing as S
from examples._infra import banner, run, fake_catalog, POLO, TROUSERS, SKIRT, CAP

M, F, U = S.Gender.MASCULINO, S.Gender.FEMENINO, S.Gender.UNISEX


def render(snapshot: S.SizeSnapshot) -> None:
    states = {g.value: s.value for g, s in snapshot.states.items()}
    sizes = [f"{o.label}({o.tier.value})" for o in snapshot.sizes]
    print(f"   [gen {snapshot.generation}] {states} → {sizes}")


async def main() -> None:
    resolver = S.SizeResolver(fake_catalog(delay={M: 0.01, F: 0.05, U: 0.02}))

    banner("1. Legal genders per garment type")
    for garment in (POLO, TROUSERS, SKIRT, CAP):
        legal = ", ".join(g.label for g in resolver.legal_genders(garment))
        print(f"   {garment.display_name:<10} {legal}")

    banner("2. Masculino + femenino polo (partial results first)")
    resolver.subscribe(render)
    resolver.select(POLO, [M, F])
    snapshot = await resolver.settle()
    for option in snapshot.sizes:
        print(f"   {option.label:<3} {option.tier.value:<8} {option.tooltip}")

    banner("3. Switch garment while lookups are in flight")
    resolver.select(POLO, [F, U])
    resolver.select(TROUSERS, [M, F, U])   # unisex is not legal for trousers
    snapshot = await resolver.settle()
    await asyncio.sleep(0.1)               # let the polo answers arrive (and be dropped)
    print(f"   final: {resolver.snapshot().labels} (garment {snapshot.garment.display_name})")

    banner("4. Selected sizes that are no longer offered")
    selected = ["28", "34"]
    resolver.select(TROUSERS, [F])
    snapshot = await resolver.settle()
    print(f"   selected={selected} unavailable={snapshot.unavailable(selected)}")

    await resolver.close()
    print("\nDone!")


if __name__ == "__main__":
    run(main)
