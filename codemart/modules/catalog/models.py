"""Query and result types for the public catalog."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from codemart.modules.assets.models import Asset, Category

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 12


class SortKey(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    POPULAR = "popular"

    @classmethod
    def parse(cls, value: str | None) -> "SortKey":
        """Unknown or missing keys sort newest first."""
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST


@dataclass(slots=True)
class CatalogQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    category: Optional[str] = None
    search: Optional[str] = None
    is_free: Optional[bool] = None
    sort: SortKey = SortKey.NEWEST

    def normalized(self, *, default_limit: int = DEFAULT_LIMIT, max_limit: int | None = None) -> "CatalogQuery":
        page = self.page if self.page and self.page > 0 else DEFAULT_PAGE
        limit = self.limit if self.limit and self.limit > 0 else default_limit
        if max_limit is not None:
            limit = min(limit, max_limit)
        search = self.search.strip() if self.search else None
        category = self.category.strip() if self.category else None
        return replace(self, page=page, limit=limit, search=search or None, category=category or None)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True)
class CatalogFilter:
    """Validated filter handed to the repository; visibility is applied there."""

    category: Optional[Category] = None
    search: Optional[str] = None
    is_free: Optional[bool] = None


@dataclass(slots=True)
class CatalogPage:
    items: list[Asset] = field(default_factory=list)
    current_page: int = DEFAULT_PAGE
    total_pages: int = 0
    total_count: int = 0

    @classmethod
    def build(cls, items: list[Asset], *, page: int, limit: int, total_count: int) -> "CatalogPage":
        return cls(
            items=items,
            current_page=page,
            total_pages=total_pages(total_count, limit),
            total_count=total_count,
        )


def total_pages(total_count: int, limit: int) -> int:
    if limit <= 0:
        raise ValueError("limit must be positive")
    return math.ceil(total_count / limit)
