"""Wishlist membership with set semantics."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from codemart.modules.assets.models import Asset
from codemart.modules.assets.repository import AssetRepository, ReviewRepository
from codemart.modules.assets.service import attach_ratings
from codemart.modules.common.errors import ConflictError, NotFoundError
from codemart.modules.users.models import User

from .repository import WishlistRepository


@dataclass(slots=True)
class WishlistService:
    repository: WishlistRepository
    assets: AssetRepository
    reviews: ReviewRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "WishlistService":
        # imported late to avoid a cycle with the repository package
        from codemart.infrastructure.database.repositories import (
            SqlAssetRepository,
            SqlReviewRepository,
            SqlWishlistRepository,
        )

        return cls(SqlWishlistRepository(session), SqlAssetRepository(session), SqlReviewRepository(session))

    async def get_wishlist(self, user: User) -> list[Asset]:
        items = await self.repository.list_assets(user.id)
        return await attach_ratings(self.reviews, items)

    async def add(self, user: User, asset_id: str) -> Asset:
        """Append ``asset_id``; a second add of the same asset is a conflict."""
        asset = await self.assets.get_by_id(asset_id)
        if asset is None:
            raise NotFoundError("Asset not found")
        if await self.repository.contains(user.id, asset.id):
            raise ConflictError("Asset already in wishlist")
        try:
            await self.repository.add(user.id, asset.id)
        except IntegrityError as exc:
            raise ConflictError("Asset already in wishlist") from exc
        return asset

    async def remove(self, user: User, asset_id: str) -> None:
        if not await self.repository.remove(user.id, asset_id):
            raise ConflictError("Asset not in wishlist")
