"""Repository protocols consumed by the asset, catalog and wishlist services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Protocol, Sequence

from .models import Asset, AssetReview, Category

if TYPE_CHECKING:
    from codemart.modules.catalog.models import CatalogFilter, SortKey


class AssetRepository(Protocol):
    async def create(self, *, seller_id: str, tags: Sequence[str], **fields: Any) -> Asset:
        ...

    async def get_by_id(self, asset_id: str) -> Asset | None:
        ...

    async def update(self, asset_id: str, changes: dict[str, Any], tags: Sequence[str] | None = None) -> Asset | None:
        ...

    async def set_flags(
        self,
        asset_id: str,
        *,
        is_approved: bool | None = None,
        is_featured: bool | None = None,
    ) -> Asset | None:
        ...

    async def increment_downloads(self, asset_id: str) -> Asset | None:
        ...

    async def delete(self, asset_id: str) -> bool:
        ...

    async def search(
        self,
        criteria: CatalogFilter,
        *,
        sort: SortKey,
        offset: int,
        limit: int,
    ) -> tuple[list[Asset], int]:
        ...

    async def list_featured(self, limit: int) -> list[Asset]:
        ...

    async def list_all(self) -> list[Asset]:
        ...

    async def list_by_seller(self, seller_id: str) -> list[Asset]:
        ...

    async def count_summary(self) -> dict[str, int]:
        ...

    async def count_by_category(self) -> dict[Category, int]:
        ...


class ReviewRepository(Protocol):
    async def create(self, *, asset_id: str, user_id: str, rating: int, comment: str) -> AssetReview:
        ...

    async def exists(self, *, asset_id: str, user_id: str) -> bool:
        ...

    async def list_for_asset(self, asset_id: str) -> list[AssetReview]:
        ...

    async def ratings_for(self, asset_ids: Iterable[str]) -> dict[str, float]:
        ...
