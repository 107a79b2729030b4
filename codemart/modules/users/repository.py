"""Repository protocol for users."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Role, User


class UserRepository(Protocol):
    """Abstract repository interface for user persistence."""

    async def get_by_id(self, user_id: str) -> User | None:
        ...

    async def get_by_email(self, email: str) -> User | None:
        ...

    async def list_users(self) -> Sequence[User]:
        ...

    async def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
    ) -> User:
        ...

    async def update_profile(self, user_id: str, changes: dict[str, str]) -> User:
        ...

    async def set_role(self, user_id: str, role: Role) -> User | None:
        ...

    async def delete_user(self, user_id: str) -> bool:
        ...

    async def count_by_role(self) -> dict[Role, int]:
        ...
