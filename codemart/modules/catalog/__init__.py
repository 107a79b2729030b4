"""Catalog query engine exports."""

from .models import CatalogFilter, CatalogPage, CatalogQuery, SortKey, total_pages
from .rating import average_rating
from .service import CatalogService

__all__ = [
    "CatalogFilter",
    "CatalogPage",
    "CatalogQuery",
    "CatalogService",
    "SortKey",
    "average_rating",
    "total_pages",
]
