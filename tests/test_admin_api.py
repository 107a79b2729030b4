"""Admin endpoints: moderation flow over HTTP, user management and stats."""

from __future__ import annotations

import pytest

from codemart.modules.users import Role


@pytest.fixture
async def admin(make_user):
    return await make_user("Admin", role=Role.ADMIN)


@pytest.fixture
async def seller(make_user):
    return await make_user("Seller", role=Role.SELLER)


async def test_non_admin_is_forbidden(client, seller, headers_for) -> None:
    response = await client.get("/api/admin/users", headers=headers_for(seller))

    assert response.status_code == 403
    assert response.json() == {"message": "Not authorized as an admin", "code": "forbidden"}


async def test_approved_asset_enters_the_catalog(client, admin, seller, make_asset, headers_for) -> None:
    asset = await make_asset(seller, "Waiting", approved=False)

    pending = await client.get("/api/admin/assets", headers=headers_for(admin))
    approved = await client.put(f"/api/admin/assets/{asset.id}/approve", headers=headers_for(admin))
    listing = await client.get("/api/assets")

    assert [item["isApproved"] for item in pending.json()] == [False]
    assert pending.json()[0]["seller"]["email"] == seller.email
    assert approved.json()["message"] == "Asset approved"
    assert approved.json()["asset"]["isApproved"] is True
    assert [item["id"] for item in listing.json()["items"]] == [asset.id]


async def test_featuring_a_pending_asset_conflicts(client, admin, seller, make_asset, headers_for) -> None:
    asset = await make_asset(seller, "Waiting", approved=False)

    response = await client.put(f"/api/admin/assets/{asset.id}/feature", headers=headers_for(admin))

    assert response.status_code == 409
    assert response.json()["code"] == "conflict"


async def test_reject_removes_from_featured_shelf(client, admin, seller, make_asset, headers_for) -> None:
    asset = await make_asset(seller, "Star", featured=True)

    before = await client.get("/api/assets/featured")
    rejected = await client.put(f"/api/admin/assets/{asset.id}/reject", headers=headers_for(admin))
    after = await client.get("/api/assets/featured")

    assert [item["id"] for item in before.json()] == [asset.id]
    assert rejected.json()["asset"]["isFeatured"] is False
    assert after.json() == []


async def test_role_change(client, admin, seller, headers_for) -> None:
    promoted = await client.put(
        f"/api/admin/users/{seller.id}/role",
        json={"role": "admin"},
        headers=headers_for(admin),
    )
    invalid = await client.put(
        f"/api/admin/users/{seller.id}/role",
        json={"role": "owner"},
        headers=headers_for(admin),
    )
    missing = await client.put(
        "/api/admin/users/no-such-user/role",
        json={"role": "buyer"},
        headers=headers_for(admin),
    )

    assert promoted.json()["role"] == "admin"
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Valid role is required"
    assert missing.status_code == 404


async def test_delete_user_cascades_to_listings(client, admin, seller, make_asset, headers_for) -> None:
    await make_asset(seller, "Gone soon")

    deleted = await client.delete(f"/api/admin/users/{seller.id}", headers=headers_for(admin))
    users = await client.get("/api/admin/users", headers=headers_for(admin))
    listing = await client.get("/api/assets")

    assert deleted.json()["message"] == "User removed"
    assert [user["id"] for user in users.json()] == [admin.id]
    assert listing.json()["totalCount"] == 0


async def test_deleted_user_token_stops_working(client, admin, seller, headers_for) -> None:
    await client.delete(f"/api/admin/users/{seller.id}", headers=headers_for(admin))

    response = await client.get("/api/auth/me", headers=headers_for(seller))

    assert response.status_code == 401
    assert response.json()["message"] == "Not authorized, user not found"


async def test_stats(client, admin, seller, make_asset, headers_for) -> None:
    await make_asset(seller, "Featured", featured=True)
    await make_asset(seller, "Pending", approved=False)

    body = (await client.get("/api/admin/stats", headers=headers_for(admin))).json()

    assert body["userCount"] == 2
    assert body["assetCount"] == 2
    assert body["approvedAssetCount"] == 1
    assert body["featuredAssetCount"] == 1
    assert body["usersByRole"] == {"admin": 1, "seller": 1, "buyer": 0}
    assert body["assetsByCategory"]["ui-kits"] == 2
    assert body["assetsByCategory"]["snippets"] == 0
