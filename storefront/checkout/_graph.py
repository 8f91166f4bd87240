"""
Graph runner: sugar over nodnod.

Auto-discovers nodes from the target, injects inputs by runtime type.
"""

from __future__ import annotations

from typing import Any, cast
from collections.abc import Callable, Coroutine

from nodnod import Scope, Value, EventLoopAgent, Node


# ═══════════════════════════════════════════════════════════════════════════════
# TypedScope
# ═══════════════════════════════════════════════════════════════════════════════

class TypedScope:
    """Type-safe wrapper around nodnod.Scope."""

    __slots__ = ("_scope",)

    def __init__(self, scope: Scope | None = None, detail: str = "scope") -> None:
        self._scope = scope if scope is not None else Scope(detail=detail)

    @property
    def inner(self) -> Scope:
        return self._scope

    def inject[T](self, typ: type[T], value: T) -> TypedScope:
        self._scope.push(Value(typ, value))
        return self

    def get[T](self, typ: type[T]) -> T:
        result = self._scope.get(typ)
        if result is None:
            raise KeyError(f"{typ.__name__} not found in scope")
        return cast(T, result.value)

    async def __aenter__(self) -> TypedScope:
        await self._scope.__aenter__()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self._scope.__aexit__(*args)


# ═══════════════════════════════════════════════════════════════════════════════
# compose: One-shot
# ═══════════════════════════════════════════════════════════════════════════════

async def compose[T](target: type[T], *inputs: object) -> T:
    """
    Build the graph behind `target`, run it over `inputs`, return the target node.

    Example:
        summary = await compose(SummaryNode, CheckoutInput(lines, users))
    """
    agent = EventLoopAgent.build({cast(type[Node[Any, Any]], target)})

    async with TypedScope(detail="checkout") as scope:
        for value in inputs:
            scope.inject(cast(type[Any], type(value)), value)

        run_method = cast(
            Callable[[Scope, dict[type[Any], Scope]], Coroutine[Any, Any, None]],
            getattr(agent, "run"),
        )
        await run_method(scope.inner, {})

        return scope.get(target)


__all__ = ("TypedScope", "compose")
