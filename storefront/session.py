"""
Session: the "current user" read.

The session itself lives elsewhere; storefront only asks who is signed in
and what role they have.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from combinators import lift as L
from kungfu import Ok, Error

from storefront.pricing import Role
from storefront.query import error_from_exception

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CurrentUser:
    id: str
    email: str
    role: Role = Role.BASIC
    name: str | None = None


class UserSource(Protocol):
    """Anything that can tell who is signed in."""

    async def current_user(self) -> CurrentUser | None:
        """Signed-in user, or None for anonymous visitors."""
        ...


@dataclass(slots=True)
class StaticUserSource:
    """Fixed answer; handy for scripts and tests."""

    user: CurrentUser | None = None

    async def current_user(self) -> CurrentUser | None:
        return self.user


async def current_role(source: UserSource) -> Role:
    """
    Role of the signed-in user.

    Anonymous visitors and failed lookups both get Role.BASIC.
    """
    result = await L.catching_async(source.current_user, on_error=error_from_exception)
    match result:
        case Ok(None):
            return Role.BASIC
        case Ok(user):
            return Role.parse(user.role)
        case Error(e):
            logger.info("User lookup failed, pricing as basic: %s", e.message)
            return Role.BASIC


__all__ = ("CurrentUser", "UserSource", "StaticUserSource", "current_role")
