"""Tests for the storefront API client."""

import httpx
import pytest

from storefront.api import ApiError, StorefrontClient
from storefront.pricing import Role
from storefront.session import current_role
from storefront.sizing import Gender, SizeResolver, SizeType
from tests.conftest import TROUSERS

M, F = Gender.MASCULINO, Gender.FEMENINO


def make_client(handler):
    return StorefrontClient("http://shop.test", transport=httpx.MockTransport(handler))


class TestCurrentUser:
    async def test_signed_in(self):
        def handler(request):
            assert request.url.path == "/api/auth/user"
            return httpx.Response(200, json={
                "id": "u1",
                "email": "ana@example.com",
                "firstName": "Ana",
                "lastName": "López",
                "role": "premium",
            })

        async with make_client(handler) as client:
            user = await client.current_user()

        assert user is not None
        assert user.id == "u1"
        assert user.name == "Ana López"
        assert user.role is Role.PREMIUM

    async def test_unauthorized_is_anonymous(self):
        async with make_client(lambda r: httpx.Response(401, json={"message": "Unauthorized"})) as client:
            assert await client.current_user() is None

    async def test_unknown_role_is_basic(self):
        body = {"id": "u2", "email": "x@example.com", "role": "customer"}
        async with make_client(lambda r: httpx.Response(200, json=body)) as client:
            user = await client.current_user()
        assert user.role is Role.BASIC
        assert user.name is None

    async def test_server_error_raises(self):
        async with make_client(lambda r: httpx.Response(500, json={"message": "boom"})) as client:
            with pytest.raises(ApiError) as info:
                await client.current_user()
        assert info.value.status_code == 500
        assert info.value.message == "boom"

    async def test_role_via_session(self):
        body = {"id": "u1", "email": "a@example.com", "role": "regular"}
        async with make_client(lambda r: httpx.Response(200, json=body)) as client:
            assert await current_role(client) is Role.REGULAR

    async def test_role_degrades_to_basic_on_error(self):
        async with make_client(lambda r: httpx.Response(503)) as client:
            assert await current_role(client) is Role.BASIC


class TestGarmentTypes:
    async def test_decode(self):
        body = [
            {"id": 4, "name": "pantalon", "displayName": "Pantalón", "isActive": True},
            {"id": 7, "name": "gorra", "displayName": "Gorra", "requiresSizes": False},
        ]
        async with make_client(lambda r: httpx.Response(200, json=body)) as client:
            types = await client.garment_types()

        assert [t.id for t in types] == [4, 7]
        assert types[0].display_name == "Pantalón"
        assert types[0].requires_sizes is True
        assert types[1].requires_sizes is False

    async def test_non_list_raises(self):
        async with make_client(lambda r: httpx.Response(200, json={"oops": 1})) as client:
            with pytest.raises(ApiError):
                await client.garment_types()


class TestAvailableSizes:
    async def test_query_parameters_and_decode(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json={"sizes": ["30", "32"], "sizeType": "waist"})

        async with make_client(handler) as client:
            entry = await client.available_sizes(4, M)

        assert seen == {"garmentTypeId": "4", "gender": "masculino"}
        assert entry.sizes == ("30", "32")
        assert entry.size_type is SizeType.WAIST
        assert entry.gender is M

    async def test_missing_fields_default(self):
        async with make_client(lambda r: httpx.Response(200, json={})) as client:
            entry = await client.available_sizes(4, F)
        assert entry.sizes == ()
        assert entry.size_type is SizeType.STANDARD

    async def test_transport_error_raises_api_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(ApiError):
                await client.available_sizes(4, M)

    async def test_drives_resolver(self, rules):
        sizes = {"masculino": ["30", "32"], "femenino": ["28", "30"]}

        def handler(request):
            return httpx.Response(200, json={
                "sizes": sizes[request.url.params["gender"]],
                "sizeType": "waist",
            })

        async with make_client(handler) as client:
            resolver = SizeResolver(client, rules)
            resolver.select(TROUSERS, ["masculino", "femenino", "unisex"])
            snap = await resolver.settle()

        assert snap.genders == (M, F)
        assert snap.labels == ("28", "30", "32")


class TestClientLifecycle:
    async def test_shared_client_is_not_closed(self):
        shared = httpx.AsyncClient(
            base_url="http://shop.test",
            transport=httpx.MockTransport(lambda r: httpx.Response(401)),
        )
        async with StorefrontClient(client=shared) as client:
            await client.current_user()
        assert not shared.is_closed
        await shared.aclose()
