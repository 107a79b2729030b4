"""Public catalog: filtered listings, the featured shelf and asset detail."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from codemart.core.config import CatalogSettings, get_settings
from codemart.modules.assets.models import AssetDetail, Asset, Category, SellerProfile
from codemart.modules.assets.repository import AssetRepository, ReviewRepository
from codemart.modules.assets.service import attach_ratings
from codemart.modules.common.errors import NotFoundError
from codemart.modules.users.repository import UserRepository

from .models import CatalogFilter, CatalogPage, CatalogQuery


@dataclass(slots=True)
class CatalogService:
    assets: AssetRepository
    reviews: ReviewRepository
    users: UserRepository
    settings: CatalogSettings

    @classmethod
    def with_session(cls, session: AsyncSession) -> "CatalogService":
        # imported late to avoid a cycle with the repository package
        from codemart.infrastructure.database.repositories import (
            SqlAssetRepository,
            SqlReviewRepository,
            SqlUserRepository,
        )

        return cls(
            SqlAssetRepository(session),
            SqlReviewRepository(session),
            SqlUserRepository(session),
            get_settings().catalog,
        )

    async def list_assets(self, query: CatalogQuery) -> CatalogPage:
        """Approved assets matching ``query``, one page at a time.

        An unrecognized category matches nothing rather than failing, and a
        page past the end comes back empty with the real totals.
        """
        query = query.normalized(
            default_limit=self.settings.default_limit,
            max_limit=self.settings.max_limit,
        )
        category = None
        if query.category is not None:
            category = Category.lookup(query.category)
            if category is None:
                return CatalogPage.build([], page=query.page, limit=query.limit, total_count=0)

        criteria = CatalogFilter(category=category, search=query.search, is_free=query.is_free)
        items, total = await self.assets.search(
            criteria,
            sort=query.sort,
            offset=query.offset,
            limit=query.limit,
        )
        await attach_ratings(self.reviews, items)
        return CatalogPage.build(items, page=query.page, limit=query.limit, total_count=total)

    async def featured(self) -> list[Asset]:
        items = await self.assets.list_featured(self.settings.featured_limit)
        return await attach_ratings(self.reviews, items)

    async def get_detail(self, asset_id: str) -> AssetDetail:
        """Full detail for any asset, approved or not."""
        asset = await self.assets.get_by_id(asset_id)
        if asset is None:
            raise NotFoundError("Asset not found")
        seller = await self.users.get_by_id(asset.seller_id)
        if seller is None:
            raise NotFoundError("Asset not found")

        await attach_ratings(self.reviews, [asset])
        reviews = await self.reviews.list_for_asset(asset.id)
        return AssetDetail(
            asset=asset,
            seller=SellerProfile(
                id=seller.id,
                name=seller.name,
                email=seller.email,
                avatar=seller.avatar,
                bio=seller.bio,
                website=seller.website,
                social=seller.social,
                is_verified=seller.is_verified,
            ),
            reviews=reviews,
        )
