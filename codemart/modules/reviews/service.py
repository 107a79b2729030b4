"""Buyer reviews feeding the catalog rating."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from codemart.modules.assets.models import AssetReview
from codemart.modules.assets.repository import AssetRepository, ReviewRepository
from codemart.modules.common.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
)
from codemart.modules.users.models import User

MIN_RATING = 1
MAX_RATING = 5


@dataclass(slots=True)
class ReviewService:
    repository: ReviewRepository
    assets: AssetRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ReviewService":
        # imported late to avoid a cycle with the repository package
        from codemart.infrastructure.database.repositories import SqlAssetRepository, SqlReviewRepository

        return cls(SqlReviewRepository(session), SqlAssetRepository(session))

    async def add_review(self, user: User, asset_id: str, rating: int, comment: str = "") -> AssetReview:
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationFailedError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
        asset = await self.assets.get_by_id(asset_id)
        if asset is None:
            raise NotFoundError("Asset not found")
        if asset.seller_id == user.id:
            raise ForbiddenError("Sellers cannot review their own assets")
        if await self.repository.exists(asset_id=asset.id, user_id=user.id):
            raise ConflictError("Asset already reviewed")
        try:
            return await self.repository.create(
                asset_id=asset.id,
                user_id=user.id,
                rating=rating,
                comment=comment.strip(),
            )
        except IntegrityError as exc:
            raise ConflictError("Asset already reviewed") from exc
