"""Asset lifecycle: seller uploads, edits, deletion and downloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from codemart.core.config import get_settings
from codemart.modules.common.errors import ForbiddenError, NotFoundError, ValidationFailedError
from codemart.modules.users.models import User

from .models import Asset, AssetCreateInput, AssetUpdateInput
from .repository import AssetRepository, ReviewRepository
from .storage import AssetFileStorage, Upload

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100
MAX_PREVIEW_IMAGES = 5


async def attach_ratings(reviews: ReviewRepository, assets: list[Asset]) -> list[Asset]:
    ratings = await reviews.ratings_for(asset.id for asset in assets)
    for asset in assets:
        asset.rating = ratings.get(asset.id, 0.0)
    return assets


@dataclass(slots=True)
class AssetService:
    repository: AssetRepository
    reviews: ReviewRepository
    storage: AssetFileStorage
    max_preview_images: int = MAX_PREVIEW_IMAGES

    @classmethod
    def with_session(cls, session: AsyncSession, storage: AssetFileStorage | None = None) -> "AssetService":
        # imported late to avoid a cycle with the repository package
        from codemart.infrastructure.database.repositories import SqlAssetRepository, SqlReviewRepository

        settings = get_settings()
        return cls(
            SqlAssetRepository(session),
            SqlReviewRepository(session),
            storage or AssetFileStorage.from_settings(settings),
            max_preview_images=settings.storage.max_preview_images,
        )

    async def require(self, asset_id: str) -> Asset:
        asset = await self.repository.get_by_id(asset_id)
        if asset is None:
            raise NotFoundError("Asset not found")
        return asset

    async def create(
        self,
        seller: User,
        payload: AssetCreateInput,
        file: Upload | None,
        previews: Sequence[Upload] = (),
    ) -> Asset:
        if not seller.can_sell():
            raise ForbiddenError("Not authorized as a seller")
        title = _clean_title(payload.title)
        description = (payload.description or "").strip()
        if not description:
            raise ValidationFailedError("Description is required")
        if file is None:
            raise ValidationFailedError("Please upload a file")
        self._check_preview_count(previews)
        price = _resolve_price(payload.is_free, payload.price)

        stored: list[str] = []
        try:
            file_url = await self._store(file, stored)
            preview_urls = [await self._store(image, stored) for image in previews]
            asset = await self.repository.create(
                seller_id=seller.id,
                tags=payload.tags,
                title=title,
                description=description,
                category=payload.category.value,
                price=price,
                is_free=payload.is_free,
                file_url=file_url,
                preview_images=preview_urls,
                demo_url=payload.demo_url or "",
                features=payload.features,
                technologies=payload.technologies,
                requirements=payload.requirements or "",
            )
        except Exception:
            self._discard_all(stored)
            raise
        logger.info("Seller %s created asset %s (%s)", seller.id, asset.id, asset.category.value)
        return asset

    async def update(
        self,
        actor: User,
        asset_id: str,
        payload: AssetUpdateInput,
        file: Upload | None = None,
        previews: Sequence[Upload] = (),
    ) -> Asset:
        current = await self.require(asset_id)
        self._ensure_can_modify(actor, current, "update")
        self._check_preview_count(previews)

        changes: dict[str, Any] = {}
        if payload.title and payload.title.strip():
            changes["title"] = _clean_title(payload.title)
        if payload.description and payload.description.strip():
            changes["description"] = payload.description.strip()
        if payload.category is not None:
            changes["category"] = payload.category.value
        if payload.demo_url:
            changes["demo_url"] = payload.demo_url
        if payload.requirements:
            changes["requirements"] = payload.requirements
        if payload.features:
            changes["features"] = payload.features
        if payload.technologies:
            changes["technologies"] = payload.technologies

        is_free = current.is_free if payload.is_free is None else payload.is_free
        changes["is_free"] = is_free
        if is_free:
            changes["price"] = 0.0
        elif payload.price is not None:
            changes["price"] = _resolve_price(False, payload.price)

        replaced: list[str] = []
        stored: list[str] = []
        try:
            if file is not None:
                changes["file_url"] = await self._store(file, stored)
                replaced.append(current.file_url)
            if previews:
                changes["preview_images"] = [await self._store(image, stored) for image in previews]
                replaced.extend(current.preview_images)

            updated = await self.repository.update(current.id, changes, tags=payload.tags or None)
            if updated is None:
                raise NotFoundError("Asset not found")
        except Exception:
            self._discard_all(stored)
            raise
        self._discard_all(replaced)
        return updated

    async def delete(self, actor: User, asset_id: str) -> None:
        current = await self.require(asset_id)
        self._ensure_can_modify(actor, current, "delete")
        if not await self.repository.delete(current.id):
            raise NotFoundError("Asset not found")
        self._discard_all([current.file_url, *current.preview_images])
        logger.info("User %s deleted asset %s", actor.id, current.id)

    async def download(self, asset_id: str) -> Asset:
        """Count one download and return the asset with its current file URL."""
        asset = await self.repository.increment_downloads(asset_id)
        if asset is None:
            raise NotFoundError("Asset not found")
        return asset

    async def list_for_seller(self, user: User) -> list[Asset]:
        assets = await self.repository.list_by_seller(user.id)
        return await attach_ratings(self.reviews, assets)

    async def _store(self, upload: Upload, stored: list[str]) -> str:
        url = await self.storage.store(upload)
        stored.append(url)
        return url

    def _discard_all(self, urls: Sequence[str]) -> None:
        for url in urls:
            self.storage.discard(url)

    def _check_preview_count(self, previews: Sequence[Upload]) -> None:
        if len(previews) > self.max_preview_images:
            raise ValidationFailedError(f"At most {self.max_preview_images} preview images are allowed")

    @staticmethod
    def _ensure_can_modify(actor: User, asset: Asset, action: str) -> None:
        if not actor.can_sell():
            raise ForbiddenError("Not authorized as a seller")
        if asset.seller_id != actor.id and not actor.is_admin():
            raise ForbiddenError(f"Not authorized to {action} this asset")


def _clean_title(title: str | None) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationFailedError("Title is required")
    if len(cleaned) > MAX_TITLE_LENGTH:
        raise ValidationFailedError(f"Title cannot be more than {MAX_TITLE_LENGTH} characters")
    return cleaned


def _resolve_price(is_free: bool, price: float | None) -> float:
    if is_free:
        return 0.0
    if price is None:
        return 0.0
    if price < 0:
        raise ValidationFailedError("Price cannot be negative")
    return float(price)
