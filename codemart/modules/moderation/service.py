"""Admin moderation of listings and users.

Asset states are derived from two flags:

* ``pending``  - not approved
* ``approved`` - approved, not featured
* ``featured`` - approved and featured

Rejecting clears both flags so a rejected asset never carries a stale
featured mark back into the featured shelf when it is approved again.
Featuring requires approval; unfeaturing is always allowed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from codemart.modules.assets.models import Asset, Category
from codemart.modules.assets.repository import AssetRepository
from codemart.modules.common.errors import ConflictError, ForbiddenError, NotFoundError
from codemart.modules.users.models import Role, User
from codemart.modules.users.repository import UserRepository

from .models import ModerationResult, PlatformStats

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ModerationService:
    assets: AssetRepository
    users: UserRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ModerationService":
        # imported late to avoid a cycle with the repository package
        from codemart.infrastructure.database.repositories import SqlAssetRepository, SqlUserRepository

        return cls(SqlAssetRepository(session), SqlUserRepository(session))

    async def approve(self, actor: User, asset_id: str) -> ModerationResult:
        _require_admin(actor)
        asset = await self._require_asset(asset_id)
        if not asset.is_approved:
            asset = await self._set_flags(asset.id, is_approved=True)
            logger.info("Admin %s approved asset %s", actor.id, asset.id)
        return ModerationResult(message="Asset approved", asset=asset)

    async def reject(self, actor: User, asset_id: str) -> ModerationResult:
        _require_admin(actor)
        asset = await self._require_asset(asset_id)
        if asset.is_approved or asset.is_featured:
            asset = await self._set_flags(asset.id, is_approved=False, is_featured=False)
            logger.info("Admin %s rejected asset %s", actor.id, asset.id)
        return ModerationResult(message="Asset rejected", asset=asset)

    async def toggle_feature(self, actor: User, asset_id: str) -> ModerationResult:
        _require_admin(actor)
        asset = await self._require_asset(asset_id)
        featured = not asset.is_featured
        if featured and not asset.is_approved:
            raise ConflictError("Asset must be approved before it can be featured")
        asset = await self._set_flags(asset.id, is_featured=featured)
        logger.info("Admin %s set featured=%s on asset %s", actor.id, featured, asset.id)
        return ModerationResult(
            message="Asset featured" if asset.is_featured else "Asset unfeatured",
            asset=asset,
        )

    async def list_assets(self, actor: User) -> list[Asset]:
        _require_admin(actor)
        return await self.assets.list_all()

    async def list_users(self, actor: User) -> Sequence[User]:
        _require_admin(actor)
        return await self.users.list_users()

    async def set_role(self, actor: User, user_id: str, role: Role) -> User:
        """Any role may be assigned, including to the acting admin."""
        _require_admin(actor)
        user = await self.users.set_role(user_id, role)
        if user is None:
            raise NotFoundError("User not found")
        logger.info("Admin %s set role of user %s to %s", actor.id, user.id, role.value)
        return user

    async def delete_user(self, actor: User, user_id: str) -> None:
        _require_admin(actor)
        if not await self.users.delete_user(user_id):
            raise NotFoundError("User not found")
        logger.info("Admin %s deleted user %s", actor.id, user_id)

    async def stats(self, actor: User) -> PlatformStats:
        _require_admin(actor)
        by_role = await self.users.count_by_role()
        by_category = await self.assets.count_by_category()
        summary = await self.assets.count_summary()
        return PlatformStats(
            user_count=sum(by_role.values()),
            asset_count=summary["total"],
            approved_asset_count=summary["approved"],
            featured_asset_count=summary["featured"],
            users_by_role={role: by_role.get(role, 0) for role in Role},
            assets_by_category={category: by_category.get(category, 0) for category in Category},
        )

    async def _require_asset(self, asset_id: str) -> Asset:
        asset = await self.assets.get_by_id(asset_id)
        if asset is None:
            raise NotFoundError("Asset not found")
        return asset

    async def _set_flags(self, asset_id: str, **flags: bool) -> Asset:
        asset = await self.assets.set_flags(asset_id, **flags)
        if asset is None:
            raise NotFoundError("Asset not found")
        return asset


def _require_admin(actor: User) -> None:
    if not actor.is_admin():
        raise ForbiddenError("Not authorized as an admin")
