"""SQLAlchemy implementation of the user repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from codemart.db.models import Asset as AssetModel
from codemart.db.models import AssetTag as AssetTagModel
from codemart.db.models import Review as ReviewModel
from codemart.db.models import User as UserModel
from codemart.db.models import WishlistItem as WishlistItemModel
from codemart.modules.common.errors import NotFoundError
from codemart.modules.users.models import Role, SocialLinks, User


class SqlUserRepository:
    """User repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: str) -> User | None:
        return self._to_domain(await self._fetch_model(user_id))

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_users(self) -> Sequence[User]:
        stmt = select(UserModel).order_by(UserModel.created_at.desc(), UserModel.email)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
    ) -> User:
        model = UserModel(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role.value,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_profile(self, user_id: str, changes: dict[str, str]) -> User:
        model = await self._fetch_model(user_id)
        if model is None:
            raise NotFoundError("User not found")
        for key, value in changes.items():
            setattr(model, key, value)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def set_role(self, user_id: str, role: Role) -> User | None:
        stmt = update(UserModel).where(UserModel.id == user_id).values(role=role.value)
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_by_id(user_id)

    async def delete_user(self, user_id: str) -> bool:
        """Remove the user with their assets, reviews and wishlist rows."""
        owned_assets = select(AssetModel.id).where(AssetModel.seller_id == user_id).scalar_subquery()
        await self._session.execute(
            delete(WishlistItemModel).where(
                (WishlistItemModel.user_id == user_id) | WishlistItemModel.asset_id.in_(owned_assets)
            )
        )
        await self._session.execute(
            delete(ReviewModel).where(
                (ReviewModel.user_id == user_id) | ReviewModel.asset_id.in_(owned_assets)
            )
        )
        await self._session.execute(delete(AssetTagModel).where(AssetTagModel.asset_id.in_(owned_assets)))
        await self._session.execute(delete(AssetModel).where(AssetModel.seller_id == user_id))
        result = await self._session.execute(delete(UserModel).where(UserModel.id == user_id))
        return result.rowcount > 0

    async def count_by_role(self) -> dict[Role, int]:
        stmt = select(UserModel.role, func.count(UserModel.id)).group_by(UserModel.role)
        result = await self._session.execute(stmt)
        return {Role(role): int(count) for role, count in result.all()}

    async def _fetch_model(self, user_id: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: UserModel | None) -> User | None:
        if model is None:
            return None
        return User(
            id=str(model.id),
            name=model.name,
            email=model.email,
            role=Role(model.role or Role.BUYER.value),
            password_hash=model.password_hash,
            bio=model.bio or "",
            avatar=model.avatar or "",
            website=model.website or "",
            social=SocialLinks(
                github=model.github or "",
                twitter=model.twitter or "",
                linkedin=model.linkedin or "",
            ),
            is_verified=bool(model.is_verified),
            created_at=model.created_at,
        )
