"""SQLAlchemy powered repository for assets and catalog queries."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from codemart.db.models import Asset as AssetModel
from codemart.db.models import AssetTag as AssetTagModel
from codemart.db.models import Review as ReviewModel
from codemart.db.models import WishlistItem as WishlistItemModel
from codemart.modules.assets.models import Asset, Category, SellerSummary
from codemart.modules.catalog.models import CatalogFilter, SortKey

_LIKE_ESCAPE = "\\"

# secondary keys on the integer id keep pagination deterministic
_SORT_ORDERS = {
    SortKey.NEWEST: (AssetModel.created_at.desc(), AssetModel.id.desc()),
    SortKey.OLDEST: (AssetModel.created_at.asc(), AssetModel.id.asc()),
    SortKey.PRICE_LOW: (AssetModel.price.asc(), AssetModel.id.asc()),
    SortKey.PRICE_HIGH: (AssetModel.price.desc(), AssetModel.id.asc()),
    SortKey.POPULAR: (AssetModel.download_count.desc(), AssetModel.id.asc()),
}

UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "category",
        "price",
        "is_free",
        "file_url",
        "preview_images",
        "demo_url",
        "features",
        "technologies",
        "requirements",
    }
)


def parse_asset_id(asset_id: str | int | None) -> int | None:
    """Return the numeric key, or ``None`` for malformed identifiers."""
    if isinstance(asset_id, bool):
        return None
    try:
        return int(str(asset_id))
    except (TypeError, ValueError):
        return None


def escape_like(term: str) -> str:
    return (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )


def catalog_conditions(criteria: CatalogFilter) -> list[ColumnElement[bool]]:
    """Public listing predicate: approval first, then the caller's filters."""
    conditions: list[ColumnElement[bool]] = [AssetModel.is_approved.is_(True)]
    if criteria.category is not None:
        conditions.append(AssetModel.category == criteria.category.value)
    if criteria.search:
        pattern = f"%{escape_like(criteria.search)}%"
        tag_match = (
            select(AssetTagModel.id)
            .where(
                AssetTagModel.asset_id == AssetModel.id,
                AssetTagModel.value.ilike(pattern, escape=_LIKE_ESCAPE),
            )
            .exists()
        )
        conditions.append(
            or_(
                AssetModel.title.ilike(pattern, escape=_LIKE_ESCAPE),
                AssetModel.description.ilike(pattern, escape=_LIKE_ESCAPE),
                tag_match,
            )
        )
    if criteria.is_free is not None:
        conditions.append(AssetModel.is_free.is_(criteria.is_free))
    return conditions


class SqlAssetRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, seller_id: str, tags: Sequence[str], **fields: Any) -> Asset:
        model = AssetModel(seller_id=seller_id, **fields)
        model.tag_rows = self._tag_rows(tags)
        self._session.add(model)
        await self._session.flush()
        created = await self._fetch_model(model.id)
        assert created is not None
        return asset_from_model(created)

    async def get_by_id(self, asset_id: str) -> Asset | None:
        key = parse_asset_id(asset_id)
        if key is None:
            return None
        model = await self._fetch_model(key)
        return asset_from_model(model) if model else None

    async def update(self, asset_id: str, changes: dict[str, Any], tags: Sequence[str] | None = None) -> Asset | None:
        key = parse_asset_id(asset_id)
        model = await self._fetch_model(key) if key is not None else None
        if model is None:
            return None
        for name, value in changes.items():
            if name not in UPDATABLE_FIELDS:
                raise ValueError(f"Field is not updatable: {name}")
            setattr(model, name, value)
        if tags is not None:
            model.tag_rows = self._tag_rows(tags)
        await self._session.flush()
        refreshed = await self._fetch_model(model.id)
        return asset_from_model(refreshed) if refreshed else None

    async def set_flags(
        self,
        asset_id: str,
        *,
        is_approved: bool | None = None,
        is_featured: bool | None = None,
    ) -> Asset | None:
        key = parse_asset_id(asset_id)
        if key is None:
            return None
        values: dict[str, bool] = {}
        if is_approved is not None:
            values["is_approved"] = is_approved
        if is_featured is not None:
            values["is_featured"] = is_featured
        if values:
            result = await self._session.execute(
                update(AssetModel).where(AssetModel.id == key).values(**values)
            )
            if result.rowcount == 0:
                return None
        model = await self._fetch_model(key)
        return asset_from_model(model) if model else None

    async def increment_downloads(self, asset_id: str) -> Asset | None:
        key = parse_asset_id(asset_id)
        if key is None:
            return None
        stmt = (
            update(AssetModel)
            .where(AssetModel.id == key)
            .values(download_count=AssetModel.download_count + 1)
            .execution_options(synchronize_session="fetch")
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        model = await self._fetch_model(key)
        return asset_from_model(model) if model else None

    async def delete(self, asset_id: str) -> bool:
        key = parse_asset_id(asset_id)
        if key is None:
            return False
        await self._session.execute(delete(WishlistItemModel).where(WishlistItemModel.asset_id == key))
        await self._session.execute(delete(ReviewModel).where(ReviewModel.asset_id == key))
        await self._session.execute(delete(AssetTagModel).where(AssetTagModel.asset_id == key))
        result = await self._session.execute(delete(AssetModel).where(AssetModel.id == key))
        return result.rowcount > 0

    async def search(
        self,
        criteria: CatalogFilter,
        *,
        sort: SortKey,
        offset: int,
        limit: int,
    ) -> tuple[list[Asset], int]:
        conditions = catalog_conditions(criteria)
        count_query = select(func.count(AssetModel.id)).where(*conditions)
        total = (await self._session.execute(count_query)).scalar() or 0
        if offset >= total:
            return [], int(total)

        query = (
            select(AssetModel)
            .where(*conditions)
            .order_by(*_SORT_ORDERS[sort])
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(query)
        return [asset_from_model(model) for model in result.scalars().all()], int(total)

    async def list_featured(self, limit: int) -> list[Asset]:
        query = (
            select(AssetModel)
            .where(AssetModel.is_approved.is_(True), AssetModel.is_featured.is_(True))
            .order_by(AssetModel.id.asc())
            .limit(limit)
        )
        result = await self._session.execute(query)
        return [asset_from_model(model) for model in result.scalars().all()]

    async def list_all(self) -> list[Asset]:
        query = select(AssetModel).order_by(AssetModel.created_at.desc(), AssetModel.id.desc())
        result = await self._session.execute(query)
        return [asset_from_model(model, include_seller_email=True) for model in result.scalars().all()]

    async def list_by_seller(self, seller_id: str) -> list[Asset]:
        query = (
            select(AssetModel)
            .where(AssetModel.seller_id == seller_id)
            .order_by(AssetModel.created_at.desc(), AssetModel.id.desc())
        )
        result = await self._session.execute(query)
        return [asset_from_model(model) for model in result.scalars().all()]

    async def count_summary(self) -> dict[str, int]:
        stmt = select(
            func.count(AssetModel.id),
            func.count(AssetModel.id).filter(AssetModel.is_approved.is_(True)),
            func.count(AssetModel.id).filter(AssetModel.is_featured.is_(True)),
        )
        total, approved, featured = (await self._session.execute(stmt)).one()
        return {"total": int(total), "approved": int(approved), "featured": int(featured)}

    async def count_by_category(self) -> dict[Category, int]:
        stmt = select(AssetModel.category, func.count(AssetModel.id)).group_by(AssetModel.category)
        result = await self._session.execute(stmt)
        counts: dict[Category, int] = {}
        for category, count in result.all():
            member = Category.lookup(category)
            if member is not None:
                counts[member] = int(count)
        return counts

    async def _fetch_model(self, key: int) -> AssetModel | None:
        stmt = (
            select(AssetModel)
            .where(AssetModel.id == key)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _tag_rows(tags: Sequence[str]) -> list[AssetTagModel]:
        return [AssetTagModel(position=index, value=value) for index, value in enumerate(tags)]


def asset_from_model(model: AssetModel, *, include_seller_email: bool = False) -> Asset:
    seller = None
    if model.seller is not None:
        seller = SellerSummary(
            id=str(model.seller.id),
            name=model.seller.name,
            avatar=model.seller.avatar or "",
            email=model.seller.email if include_seller_email else None,
        )
    return Asset(
        id=str(model.id),
        title=model.title,
        description=model.description,
        category=Category(model.category),
        price=float(model.price or 0),
        is_free=bool(model.is_free),
        seller_id=str(model.seller_id),
        file_url=model.file_url,
        preview_images=list(model.preview_images or []),
        demo_url=model.demo_url or "",
        tags=[row.value for row in model.tag_rows],
        features=list(model.features or []),
        technologies=list(model.technologies or []),
        requirements=model.requirements or "",
        version=model.version or "1.0.0",
        is_approved=bool(model.is_approved),
        is_featured=bool(model.is_featured),
        download_count=int(model.download_count or 0),
        created_at=model.created_at,
        seller=seller,
    )
