"""Repository protocol for wishlist membership."""

from __future__ import annotations

from typing import Protocol

from codemart.modules.assets.models import Asset


class WishlistRepository(Protocol):
    async def contains(self, user_id: str, asset_id: str) -> bool:
        ...

    async def add(self, user_id: str, asset_id: str) -> None:
        ...

    async def remove(self, user_id: str, asset_id: str) -> bool:
        ...

    async def list_assets(self, user_id: str) -> list[Asset]:
        ...
