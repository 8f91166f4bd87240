"""
HTTP client for the storefront's read endpoints.

    async with StorefrontClient() as client:
        user = await client.current_user()
        types = await client.garment_types()
        entry = await client.available_sizes(4, Gender.MASCULINO)

`StorefrontClient` is both a `UserSource` and a `SizeLookup`, so it plugs
straight into `current_role()` and `SizeResolver`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from storefront.config import settings
from storefront.pricing import Role
from storefront.session import CurrentUser
from storefront.sizing import Gender, GarmentType, SizeType, SizeCatalogEntry

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-success response or transport failure from the storefront API."""

    def __init__(self, message: str, status_code: int | None = None, path: str | None = None):
        self.message = message
        self.status_code = status_code
        self.path = path
        super().__init__(message)


class StorefrontClient:
    """
    Async client over `httpx.AsyncClient`.

    Pass `client` to share a connection pool, or `transport` to stub the
    network in tests.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.http_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> StorefrontClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ─────────────────────────────────────────────────────────────────────────
    # Endpoints
    # ─────────────────────────────────────────────────────────────────────────

    async def current_user(self) -> CurrentUser | None:
        """Signed-in user; None when the session is anonymous (401)."""
        response = await self._get("/api/auth/user")
        if response.status_code == 401:
            return None
        data = _handle_response(response)
        if not data:
            return None
        return _decode_user(data)

    async def garment_types(self) -> list[GarmentType]:
        data = _handle_response(await self._get("/api/garment-types"))
        if not isinstance(data, list):
            raise ApiError("Expected a list of garment types", path="/api/garment-types")
        return [_decode_garment_type(record) for record in data]

    async def available_sizes(self, garment_type_id: int, gender: Gender) -> SizeCatalogEntry:
        response = await self._get(
            "/api/size-ranges/available-sizes",
            params={"garmentTypeId": garment_type_id, "gender": gender.value},
        )
        data = _handle_response(response)
        return SizeCatalogEntry(
            gender=gender,
            size_type=SizeType.parse(data.get("sizeType")),
            sizes=tuple(str(s) for s in data.get("sizes") or ()),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Transport
    # ─────────────────────────────────────────────────────────────────────────

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        try:
            return await self._client.get(path, params=params)
        except httpx.TimeoutException:
            raise  # query layer reports these as TIMEOUT
        except httpx.RequestError as e:
            logger.warning("Storefront API request to %s failed: %s", path, e)
            raise ApiError(f"Request failed: {e}", path=path) from e


def _handle_response(response: httpx.Response) -> Any:
    if response.is_success:
        return response.json()

    message = response.reason_phrase or "Unknown error"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        message = str(body["message"])
    raise ApiError(message, status_code=response.status_code, path=response.request.url.path)


def _decode_user(data: dict[str, Any]) -> CurrentUser:
    first = data.get("firstName") or ""
    last = data.get("lastName") or ""
    name = f"{first} {last}".strip() or None
    return CurrentUser(
        id=str(data["id"]),
        email=data.get("email") or "",
        role=Role.parse(data.get("role")),
        name=name,
    )


def _decode_garment_type(record: dict[str, Any]) -> GarmentType:
    return GarmentType(
        id=int(record["id"]),
        name=str(record["name"]),
        display_name=str(record.get("displayName") or record["name"]),
        requires_sizes=bool(record.get("requiresSizes", True)),
        is_active=bool(record.get("isActive", True)),
    )


__all__ = ("ApiError", "StorefrontClient")
