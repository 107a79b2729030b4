"""Wishlist set semantics and consistency with asset deletion."""

from __future__ import annotations

import pytest

from codemart.modules.assets import AssetService
from codemart.modules.common.errors import ConflictError, NotFoundError
from codemart.modules.users import Role
from codemart.modules.wishlist import WishlistService


@pytest.fixture
def wishlist(session) -> WishlistService:
    return WishlistService.with_session(session)


@pytest.fixture
async def seller(make_user):
    return await make_user("Seller", role=Role.SELLER)


@pytest.fixture
async def buyer(make_user):
    return await make_user("Buyer")


async def test_second_add_is_a_conflict_and_leaves_the_list_unchanged(wishlist, buyer, seller, make_asset) -> None:
    asset = await make_asset(seller, "Kit")

    await wishlist.add(buyer, asset.id)
    with pytest.raises(ConflictError):
        await wishlist.add(buyer, asset.id)

    assert [item.id for item in await wishlist.get_wishlist(buyer)] == [asset.id]


async def test_removing_an_absent_asset_is_a_conflict(wishlist, buyer, seller, make_asset) -> None:
    asset = await make_asset(seller, "Kit")

    with pytest.raises(ConflictError):
        await wishlist.remove(buyer, asset.id)


async def test_add_then_remove(wishlist, buyer, seller, make_asset) -> None:
    asset = await make_asset(seller, "Kit")

    await wishlist.add(buyer, asset.id)
    await wishlist.remove(buyer, asset.id)

    assert await wishlist.get_wishlist(buyer) == []


@pytest.mark.parametrize("asset_id", ["777", "nope"])
async def test_adding_an_unknown_asset_is_not_found(wishlist, buyer, asset_id) -> None:
    with pytest.raises(NotFoundError):
        await wishlist.add(buyer, asset_id)


async def test_wishlist_keeps_insertion_order(wishlist, buyer, seller, make_asset) -> None:
    first = await make_asset(seller, "First")
    second = await make_asset(seller, "Second")
    third = await make_asset(seller, "Third")

    for asset in (third, first, second):
        await wishlist.add(buyer, asset.id)

    assert [item.title for item in await wishlist.get_wishlist(buyer)] == ["Third", "First", "Second"]


async def test_wishlists_are_per_user(wishlist, buyer, make_user, seller, make_asset) -> None:
    asset = await make_asset(seller, "Kit")
    other = await make_user("Other")

    await wishlist.add(buyer, asset.id)

    assert await wishlist.get_wishlist(other) == []


async def test_deleted_asset_leaves_every_wishlist(wishlist, session, storage, buyer, seller, make_asset) -> None:
    doomed = await make_asset(seller, "Doomed")
    kept = await make_asset(seller, "Kept")
    await wishlist.add(buyer, doomed.id)
    await wishlist.add(buyer, kept.id)

    await AssetService.with_session(session, storage).delete(seller, doomed.id)

    assert [item.id for item in await wishlist.get_wishlist(buyer)] == [kept.id]


async def test_wishlist_entries_carry_seller_and_rating(wishlist, buyer, seller, make_asset, make_review) -> None:
    asset = await make_asset(seller, "Kit")
    await make_review(asset, buyer, 4)
    await wishlist.add(buyer, asset.id)

    [entry] = await wishlist.get_wishlist(buyer)

    assert entry.seller is not None
    assert entry.seller.name == "Seller"
    assert entry.rating == 4.0
