"""Moderation state machine and admin-only operations."""

from __future__ import annotations

import pytest

from codemart.modules.assets import ModerationState
from codemart.modules.catalog import CatalogService
from codemart.modules.common.errors import ConflictError, ForbiddenError, NotFoundError
from codemart.modules.moderation import ModerationService
from codemart.modules.users import Role, UserService


@pytest.fixture
def moderation(session) -> ModerationService:
    return ModerationService.with_session(session)


@pytest.fixture
async def admin(make_user):
    return await make_user("Admin", role=Role.ADMIN)


@pytest.fixture
async def seller(make_user):
    return await make_user("Seller", role=Role.SELLER)


async def test_approve_moves_pending_to_approved(moderation, admin, seller, make_asset) -> None:
    asset = await make_asset(seller, "Pending", approved=False)
    assert asset.moderation_state is ModerationState.PENDING

    result = await moderation.approve(admin, asset.id)

    assert result.message == "Asset approved"
    assert result.asset.moderation_state is ModerationState.APPROVED


async def test_approve_is_idempotent(moderation, admin, seller, make_asset) -> None:
    asset = await make_asset(seller, "Featured", featured=True)

    result = await moderation.approve(admin, asset.id)

    assert result.asset.is_approved is True
    assert result.asset.is_featured is True


async def test_reject_clears_featured_so_reapproval_is_not_featured(
    moderation, admin, seller, make_asset, session
) -> None:
    asset = await make_asset(seller, "Star", featured=True)

    rejected = await moderation.reject(admin, asset.id)
    assert rejected.message == "Asset rejected"
    assert rejected.asset.is_approved is False
    assert rejected.asset.is_featured is False

    approved = await moderation.approve(admin, asset.id)
    assert approved.asset.moderation_state is ModerationState.APPROVED
    assert await CatalogService.with_session(session).featured() == []


async def test_feature_requires_approval(moderation, admin, seller, make_asset) -> None:
    asset = await make_asset(seller, "Pending", approved=False)

    with pytest.raises(ConflictError):
        await moderation.toggle_feature(admin, asset.id)


async def test_feature_toggles_on_and_off(moderation, admin, seller, make_asset) -> None:
    asset = await make_asset(seller, "Approved")

    on = await moderation.toggle_feature(admin, asset.id)
    off = await moderation.toggle_feature(admin, asset.id)

    assert on.message == "Asset featured"
    assert on.asset.moderation_state is ModerationState.FEATURED
    assert off.message == "Asset unfeatured"
    assert off.asset.moderation_state is ModerationState.APPROVED


async def test_non_admin_cannot_moderate(moderation, seller, make_asset) -> None:
    asset = await make_asset(seller, "Mine", approved=False)

    with pytest.raises(ForbiddenError):
        await moderation.approve(seller, asset.id)
    with pytest.raises(ForbiddenError):
        await moderation.stats(seller)


@pytest.mark.parametrize("asset_id", ["4040", "abc"])
async def test_moderating_missing_asset_is_not_found(moderation, admin, asset_id) -> None:
    with pytest.raises(NotFoundError):
        await moderation.reject(admin, asset_id)


async def test_admin_may_demote_themselves(moderation, admin) -> None:
    user = await moderation.set_role(admin, admin.id, Role.BUYER)

    assert user.role is Role.BUYER


async def test_delete_user_removes_their_assets(moderation, admin, seller, make_asset, session) -> None:
    await make_asset(seller, "Doomed")
    await make_asset(seller, "Also doomed", approved=False)

    await moderation.delete_user(admin, seller.id)

    assert await moderation.list_assets(admin) == []
    assert await UserService.with_session(session).get_by_id(seller.id) is None
    with pytest.raises(NotFoundError):
        await moderation.delete_user(admin, seller.id)


async def test_stats_count_users_and_assets(moderation, admin, seller, make_user, make_asset) -> None:
    await make_user("Buyer")
    await make_asset(seller, "Featured", featured=True)
    await make_asset(seller, "Approved")
    await make_asset(seller, "Pending", approved=False)

    stats = await moderation.stats(admin)

    assert stats.user_count == 3
    assert stats.users_by_role == {Role.ADMIN: 1, Role.SELLER: 1, Role.BUYER: 1}
    assert stats.asset_count == 3
    assert stats.approved_asset_count == 2
    assert stats.featured_asset_count == 1
