"""Shared fixtures: a throwaway SQLite database per test and an HTTP client
bound to an app whose sessions and upload storage point at it."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from codemart.core.crypto import hash_password
from codemart.core.security import create_access_token
from codemart.db import models  # noqa: F401
from codemart.infrastructure.database.base import Base
from codemart.infrastructure.database.repositories import SqlAssetRepository, SqlReviewRepository, SqlUserRepository
from codemart.interfaces.http.deps import get_asset_storage, get_db_session
from codemart.main import create_app
from codemart.modules.assets import Asset, AssetFileStorage, Category
from codemart.modules.users import Role, User

PASSWORD = "secret123"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
async def engine(tmp_path: Path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'codemart.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path: Path) -> AssetFileStorage:
    return AssetFileStorage(tmp_path / "uploads", public_prefix="/uploads", max_bytes=1024 * 1024)


@pytest.fixture
def app(session_factory, storage):
    application = create_app()

    async def override_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_session
    application.dependency_overrides[get_asset_storage] = lambda: storage
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as http:
        yield http


@pytest.fixture
def make_user(session):
    """Create and commit a user; emails default to ``<name>@example.com``."""
    counter = {"value": 0}

    async def _make(name: str = "Buyer", *, role: Role = Role.BUYER, email: str | None = None) -> User:
        counter["value"] += 1
        address = email or f"{name.lower().replace(' ', '.')}{counter['value']}@example.com"
        user = await SqlUserRepository(session).create_user(
            name=name,
            email=address,
            password_hash=PASSWORD_HASH,
            role=role,
        )
        await session.commit()
        return user

    return _make


@pytest.fixture
def make_asset(session):
    async def _make(
        seller: User,
        title: str = "Asset",
        *,
        category: Category = Category.UI_KITS,
        price: float = 10.0,
        is_free: bool = False,
        approved: bool = True,
        featured: bool = False,
        downloads: int = 0,
        description: str = "A reusable piece of code",
        tags: Iterable[str] = (),
    ) -> Asset:
        asset = await SqlAssetRepository(session).create(
            seller_id=seller.id,
            tags=list(tags),
            title=title,
            description=description,
            category=category.value,
            price=0.0 if is_free else price,
            is_free=is_free,
            file_url=f"/uploads/{title.lower().replace(' ', '-')}.zip",
            is_approved=approved,
            is_featured=featured,
            download_count=downloads,
        )
        await session.commit()
        return asset

    return _make


@pytest.fixture
def make_review(session):
    async def _make(asset: Asset, reviewer: User, rating: int, comment: str = "") -> None:
        await SqlReviewRepository(session).create(
            asset_id=asset.id,
            user_id=reviewer.id,
            rating=rating,
            comment=comment,
        )
        await session.commit()

    return _make


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role.value)}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def user_password() -> str:
    return PASSWORD
