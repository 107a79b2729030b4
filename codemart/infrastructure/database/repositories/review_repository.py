"""SQLAlchemy repository for asset reviews and rating aggregates."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from codemart.db.models import Review as ReviewModel
from codemart.modules.assets.models import AssetReview, SellerSummary
from codemart.modules.catalog.rating import average_rating
from codemart.infrastructure.database.repositories.asset_repository import parse_asset_id


class SqlReviewRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, asset_id: str, user_id: str, rating: int, comment: str) -> AssetReview:
        model = ReviewModel(
            asset_id=parse_asset_id(asset_id),
            user_id=user_id,
            rating=rating,
            comment=comment,
        )
        self._session.add(model)
        await self._session.flush()
        stmt = (
            select(ReviewModel)
            .where(ReviewModel.id == model.id)
            .execution_options(populate_existing=True)
        )
        created = (await self._session.execute(stmt)).scalar_one()
        return self._to_domain(created)

    async def exists(self, *, asset_id: str, user_id: str) -> bool:
        stmt = select(ReviewModel.id).where(
            ReviewModel.asset_id == parse_asset_id(asset_id),
            ReviewModel.user_id == user_id,
        )
        return (await self._session.execute(stmt)).first() is not None

    async def list_for_asset(self, asset_id: str) -> list[AssetReview]:
        key = parse_asset_id(asset_id)
        if key is None:
            return []
        stmt = (
            select(ReviewModel)
            .where(ReviewModel.asset_id == key)
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def ratings_for(self, asset_ids: Iterable[str]) -> dict[str, float]:
        """Average rating per asset, computed fresh on every call."""
        keys = {key for key in (parse_asset_id(asset_id) for asset_id in asset_ids) if key is not None}
        if not keys:
            return {}
        stmt = (
            select(ReviewModel.asset_id, func.sum(ReviewModel.rating), func.count(ReviewModel.id))
            .where(ReviewModel.asset_id.in_(keys))
            .group_by(ReviewModel.asset_id)
        )
        result = await self._session.execute(stmt)
        return {str(asset_id): average_rating(total, count) for asset_id, total, count in result.all()}

    @staticmethod
    def _to_domain(model: ReviewModel) -> AssetReview:
        return AssetReview(
            id=str(model.id),
            asset_id=str(model.asset_id),
            user=SellerSummary(
                id=str(model.user.id),
                name=model.user.name,
                avatar=model.user.avatar or "",
            ),
            rating=int(model.rating),
            comment=model.comment or "",
            created_at=model.created_at,
        )
