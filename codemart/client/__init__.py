"""Client-side session, API access and projection cache."""

from .api import ApiError, MarketplaceClient
from .projection import CatalogView, ProjectionCache, Resource
from .session import SessionContext

__all__ = [
    "ApiError",
    "CatalogView",
    "MarketplaceClient",
    "ProjectionCache",
    "Resource",
    "SessionContext",
]
