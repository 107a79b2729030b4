"""Domain services for user accounts and profiles."""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from codemart.core.crypto import MAX_PASSWORD_BYTES, hash_password, verify_password
from codemart.modules.common.errors import ConflictError, NotFoundError, ValidationFailedError

from .models import ProfileUpdateInput, Role, User, UserCreateInput
from .repository import UserRepository

logger = logging.getLogger(__name__)

# roles a visitor may pick for themselves at registration
SELF_SERVICE_ROLES = {Role.BUYER, Role.SELLER}
MIN_PASSWORD_LENGTH = 6


class UserService:
    """Encapsulates account and profile use cases."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "UserService":
        # imported late to avoid a cycle with the repository package
        from codemart.infrastructure.database.repositories import SqlUserRepository

        return cls(SqlUserRepository(session))

    async def get_by_id(self, user_id: str) -> User | None:
        return await self._repository.get_by_id(user_id)

    async def require(self, user_id: str) -> User:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_users(self) -> Sequence[User]:
        return await self._repository.list_users()

    async def register(self, payload: UserCreateInput) -> User:
        name = payload.name.strip()
        email = payload.email.strip().lower()
        if not name:
            raise ValidationFailedError("Please add a name")
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailedError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if len(payload.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationFailedError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        if await self._repository.get_by_email(email) is not None:
            raise ConflictError("User already exists")

        role = payload.role if payload.role in SELF_SERVICE_ROLES else Role.BUYER
        user = await self._repository.create_user(
            name=name,
            email=email,
            password_hash=hash_password(payload.password),
            role=role,
        )
        logger.info("Registered user %s as %s", user.id, user.role.value)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        user = await self._repository.get_by_email(email.strip().lower())
        if not verify_password(password, user.password_hash if user else None):
            return None
        return user

    async def update_profile(self, user_id: str, payload: ProfileUpdateInput) -> User:
        await self.require(user_id)
        changes = {
            key: value.strip()
            for key, value in (
                ("name", payload.name),
                ("bio", payload.bio),
                ("avatar", payload.avatar),
                ("website", payload.website),
                ("github", payload.github),
                ("twitter", payload.twitter),
                ("linkedin", payload.linkedin),
            )
            if value is not None and value.strip()
        }
        return await self._repository.update_profile(user_id, changes)

    async def set_role(self, user_id: str, role: Role) -> User:
        user = await self._repository.set_role(user_id, role)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def delete_user(self, user_id: str) -> None:
        if not await self._repository.delete_user(user_id):
            raise NotFoundError("User not found")

    async def count_by_role(self) -> dict[Role, int]:
        counts = await self._repository.count_by_role()
        return {role: counts.get(role, 0) for role in Role}
