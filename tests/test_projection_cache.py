"""Client-side projection cache and the API client that feeds it."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from codemart.client import MarketplaceClient, ProjectionCache, Resource, SessionContext
from codemart.modules.users import Role
from codemart.schemas import AssetResponse, CatalogPageResponse


def asset_payload(asset_id: str, title: str = "Kit") -> dict:
    return {
        "id": asset_id,
        "title": title,
        "description": "Reusable code",
        "category": "ui-kits",
        "price": 10.0,
        "isFree": False,
        "sellerId": "seller-1",
        "fileUrl": f"/uploads/{asset_id}.zip",
        "isApproved": True,
    }


def page_payload(page: int, *titles: str) -> dict:
    return {
        "items": [asset_payload(str(index), title) for index, title in enumerate(titles, start=1)],
        "currentPage": page,
        "totalPages": 3,
        "totalCount": 30,
    }


def make_client(handler, token: str | None = "token") -> MarketplaceClient:
    session = SessionContext.open("http://testserver", token=token, transport=httpx.MockTransport(handler))
    return MarketplaceClient(session, ProjectionCache())


def test_newest_request_wins_over_a_late_older_response() -> None:
    cache = ProjectionCache()
    older = cache.begin(Resource.CATALOG)
    newer = cache.begin(Resource.CATALOG)

    applied = []
    assert cache.fulfill(Resource.CATALOG, newer, lambda: applied.append("newer")) is True
    assert cache.fulfill(Resource.CATALOG, older, lambda: applied.append("older")) is False
    assert applied == ["newer"]
    assert cache.is_loading(Resource.CATALOG) is False


def test_rejection_keeps_previous_data_and_sets_error() -> None:
    cache = ProjectionCache()
    asset = AssetResponse.model_validate(asset_payload("1"))
    token = cache.begin(Resource.FEATURED)
    cache.fulfill(Resource.FEATURED, token, lambda: cache.set_featured([asset]))

    token = cache.begin(Resource.FEATURED)
    assert cache.loading is True
    cache.reject(Resource.FEATURED, token, "Failed to fetch featured assets")

    assert cache.featured == [asset]
    assert cache.error == "Failed to fetch featured assets"
    assert cache.loading is False


def test_pending_phase_clears_previous_error() -> None:
    cache = ProjectionCache()
    cache.fail("boom")

    cache.begin(Resource.ASSET)

    assert cache.error is None
    assert cache.is_loading(Resource.ASSET)


def test_stale_failure_does_not_overwrite_error_state() -> None:
    cache = ProjectionCache()
    older = cache.begin(Resource.WISHLIST)
    newer = cache.begin(Resource.WISHLIST)
    cache.fulfill(Resource.WISHLIST, newer, lambda: cache.set_wishlist([]))

    assert cache.reject(Resource.WISHLIST, older, "late failure") is False
    assert cache.error is None


def test_confirmed_add_makes_inflight_wishlist_fetch_stale() -> None:
    cache = ProjectionCache()
    asset = AssetResponse.model_validate(asset_payload("7"))
    token = cache.begin(Resource.WISHLIST)

    cache.confirm_wishlist_add(asset)
    cache.confirm_wishlist_add(asset)

    assert cache.fulfill(Resource.WISHLIST, token, lambda: cache.set_wishlist([])) is False
    assert [item.id for item in cache.wishlist] == ["7"]


def test_confirmed_remove_and_logout() -> None:
    cache = ProjectionCache()
    cache.set_wishlist([AssetResponse.model_validate(asset_payload(str(i))) for i in range(1, 4)])

    cache.confirm_wishlist_remove("2")
    assert [item.id for item in cache.wishlist] == ["1", "3"]

    cache.clear_user_data()
    assert cache.wishlist == []


async def test_fetch_assets_populates_catalog_view() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=page_payload(2, "A", "B"))

    client = make_client(handler)
    result = await client.fetch_assets(page=2, category="ui-kits", free=False, sort="popular")

    assert isinstance(result, CatalogPageResponse)
    assert seen == {"page": "2", "limit": "12", "category": "ui-kits", "free": "false", "sort": "popular"}
    assert [item.title for item in client.cache.catalog.items] == ["A", "B"]
    assert client.cache.catalog.total_pages == 3
    assert client.cache.loading is False


async def test_late_response_for_an_older_page_is_dropped() -> None:
    release = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["page"])
        if page == 1:
            await release.wait()
        return httpx.Response(200, json=page_payload(page, f"page {page}"))

    client = make_client(handler)
    first = asyncio.create_task(client.fetch_assets(page=1))
    while not client.cache.is_loading(Resource.CATALOG):
        await asyncio.sleep(0)

    await client.fetch_assets(page=2)
    release.set()
    await first

    assert client.cache.catalog.current_page == 2
    assert [item.title for item in client.cache.catalog.items] == ["page 2"]
    assert client.cache.loading is False


async def test_server_message_becomes_the_error() -> None:
    responses = iter(
        [
            httpx.Response(200, json=page_payload(1, "Kept")),
            httpx.Response(500, json={"message": "Server Error", "code": "server_fault"}),
        ]
    )
    client = make_client(lambda request: next(responses))

    await client.fetch_assets()
    assert await client.fetch_assets(page=2) is None

    assert client.cache.error == "Server Error"
    assert [item.title for item in client.cache.catalog.items] == ["Kept"]


async def test_fallback_message_without_a_body() -> None:
    client = make_client(lambda request: httpx.Response(502, text="bad gateway"))

    await client.fetch_featured()

    assert client.cache.error == "Failed to fetch featured assets"


async def test_network_failure_uses_fallback_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = make_client(handler)
    await client.fetch_asset("5")

    assert client.cache.error == "Failed to fetch asset"
    assert client.cache.asset is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"unexpected": True}),
        httpx.Response(200, text="not json"),
    ],
    ids=["wrong-shape", "non-json"],
)
async def test_unusable_success_body_is_rejected(response) -> None:
    responses = iter([httpx.Response(200, json=page_payload(1, "Kept")), response])
    client = make_client(lambda request: next(responses))

    await client.fetch_assets()
    assert await client.fetch_assets(page=2) is None

    assert client.cache.loading is False
    assert client.cache.error == "Failed to fetch assets"
    assert [item.title for item in client.cache.catalog.items] == ["Kept"]


async def test_download_with_malformed_body_sets_error() -> None:
    client = make_client(lambda request: httpx.Response(200, json=["not", "a", "dict"]))

    assert await client.download("7") is None
    assert client.cache.error == "Failed to download asset"


async def test_fetch_after_logout_settles_with_fallback_message() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=[])

    client = make_client(handler)
    await client.logout()

    assert await client.fetch_featured() is None

    assert calls == []
    assert client.cache.loading is False
    assert client.cache.error == "Failed to fetch featured assets"


async def test_wishlist_fetch_without_token_never_hits_the_network() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=[])

    client = make_client(handler, token=None)
    await client.fetch_wishlist()

    assert calls == []
    assert client.cache.error == "No token found"


async def test_wishlist_mutations_follow_the_server() -> None:
    state: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        asset_id = request.url.path.rsplit("/", 1)[1]
        assert request.headers["Authorization"] == "Bearer token"
        if request.method == "POST":
            if asset_id in state:
                return httpx.Response(409, json={"message": "Asset already in wishlist", "code": "conflict"})
            state.append(asset_id)
            return httpx.Response(200, json=asset_payload(asset_id))
        if asset_id not in state:
            return httpx.Response(409, json={"message": "Asset not in wishlist", "code": "conflict"})
        state.remove(asset_id)
        return httpx.Response(200, json={"message": "Asset removed from wishlist", "data": {"id": asset_id}})

    client = make_client(handler)

    assert (await client.add_to_wishlist("3")).id == "3"
    assert await client.add_to_wishlist("3") is None
    assert client.cache.error == "Asset already in wishlist"
    assert [item.id for item in client.cache.wishlist] == ["3"]

    assert await client.remove_from_wishlist("3") is True
    assert await client.remove_from_wishlist("3") is False
    assert client.cache.wishlist == []
    assert client.cache.error == "Asset not in wishlist"


async def test_login_stores_token_and_logout_closes_session() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content) == {"email": "ada@example.com", "password": "hunter22"}
        user = {"id": "u1", "name": "Ada", "email": "ada@example.com", "role": "buyer"}
        return httpx.Response(200, json={"token": "fresh", "tokenType": "bearer", "user": user})

    client = make_client(handler, token=None)
    client.cache.set_wishlist([AssetResponse.model_validate(asset_payload("1"))])

    auth = await client.login("ada@example.com", "hunter22")
    assert auth is not None
    assert client.session.token == "fresh"
    assert client.session.is_authenticated

    await client.logout()

    assert client.cache.wishlist == []
    assert client.session.token is None
    assert client.session.closed is True


async def test_client_against_the_real_app(app, make_user, make_asset) -> None:
    seller = await make_user("Seller", role=Role.SELLER)
    await make_asset(seller, "Live kit")
    session = SessionContext.open("http://testserver", transport=httpx.ASGITransport(app=app))

    async with session:
        client = MarketplaceClient(session)
        page = await client.fetch_assets()
        detail = await client.fetch_asset(page.items[0].id)

    assert [item.title for item in client.cache.catalog.items] == ["Live kit"]
    assert detail is not None
    assert client.cache.asset.seller.name == "Seller"


@pytest.mark.parametrize("resource", list(Resource))
def test_invalidate_drops_inflight_requests(resource) -> None:
    cache = ProjectionCache()
    token = cache.begin(resource)

    cache.invalidate(resource)

    assert cache.is_current(resource, token) is False
    assert cache.is_loading(resource) is False
