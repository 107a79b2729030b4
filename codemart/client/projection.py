"""In-memory projection of catalog, featured, detail and wishlist state.

Each fetch goes through three phases:

* pending   - ``loading`` is set and ``error`` cleared
* fulfilled - the payload replaces the resource's previous data
* rejected  - ``error`` is set and previous data is kept

Every resource keeps a request sequence number. Only the newest request for
a resource may complete it; older responses are dropped without touching
data, ``loading`` or ``error``.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from codemart.schemas import AssetDetailResponse, AssetResponse, CatalogPageResponse

logger = logging.getLogger(__name__)


class Resource(str, Enum):
    CATALOG = "catalog"
    ASSET = "asset"
    FEATURED = "featured"
    WISHLIST = "wishlist"


@dataclass(slots=True)
class CatalogView:
    items: list[AssetResponse] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 1
    total_count: int = 0


class ProjectionCache:
    def __init__(self) -> None:
        self.catalog = CatalogView()
        self.asset: Optional[AssetDetailResponse] = None
        self.featured: list[AssetResponse] = []
        self.wishlist: list[AssetResponse] = []
        self.error: Optional[str] = None
        self._sequence = itertools.count(1)
        self._latest: dict[Resource, int] = {}
        self._inflight: set[Resource] = set()

    @property
    def loading(self) -> bool:
        return bool(self._inflight)

    def is_loading(self, resource: Resource) -> bool:
        return resource in self._inflight

    def begin(self, resource: Resource) -> int:
        """Enter the pending phase and return the request's sequence token."""
        token = next(self._sequence)
        self._latest[resource] = token
        self._inflight.add(resource)
        self.error = None
        return token

    def is_current(self, resource: Resource, token: int) -> bool:
        return self._latest.get(resource) == token

    def fulfill(self, resource: Resource, token: int, apply: Callable[[], None]) -> bool:
        if not self.is_current(resource, token):
            logger.debug("Dropping stale %s response (request %s)", resource.value, token)
            return False
        self._inflight.discard(resource)
        apply()
        return True

    def reject(self, resource: Resource, token: int, message: str) -> bool:
        if not self.is_current(resource, token):
            logger.debug("Dropping stale %s failure (request %s)", resource.value, token)
            return False
        self._inflight.discard(resource)
        self.error = message
        return True

    def invalidate(self, resource: Resource) -> None:
        """Make any in-flight request for ``resource`` stale."""
        self._latest[resource] = next(self._sequence)
        self._inflight.discard(resource)

    def set_catalog(self, page: CatalogPageResponse) -> None:
        self.catalog = CatalogView(
            items=list(page.items),
            current_page=page.current_page,
            total_pages=page.total_pages,
            total_count=page.total_count,
        )

    def set_asset(self, asset: AssetDetailResponse) -> None:
        self.asset = asset

    def set_featured(self, assets: list[AssetResponse]) -> None:
        self.featured = list(assets)

    def set_wishlist(self, assets: list[AssetResponse]) -> None:
        self.wishlist = list(assets)

    def confirm_wishlist_add(self, asset: AssetResponse) -> None:
        # a wishlist fetch sent before this mutation may return the old list
        self.invalidate(Resource.WISHLIST)
        if all(item.id != asset.id for item in self.wishlist):
            self.wishlist.append(asset)

    def confirm_wishlist_remove(self, asset_id: str) -> None:
        self.invalidate(Resource.WISHLIST)
        self.wishlist = [item for item in self.wishlist if item.id != asset_id]

    def fail(self, message: str) -> None:
        self.error = message

    def clear_user_data(self) -> None:
        self.invalidate(Resource.WISHLIST)
        self.wishlist = []
