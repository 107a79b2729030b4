"""Async marketplace API client that keeps a ``ProjectionCache`` current."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from codemart.schemas import (
    AssetDetailResponse,
    AssetResponse,
    AuthResponse,
    CatalogPageResponse,
    DownloadResponse,
)

from .projection import ProjectionCache, Resource
from .session import SessionContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

NO_TOKEN_MESSAGE = "No token found"

_AUTH = TypeAdapter(AuthResponse)
_PAGE = TypeAdapter(CatalogPageResponse)
_DETAIL = TypeAdapter(AssetDetailResponse)
_ASSET = TypeAdapter(AssetResponse)
_ASSET_LIST = TypeAdapter(list[AssetResponse])
_DOWNLOAD = TypeAdapter(DownloadResponse)


def _parse(adapter: TypeAdapter[T], data: Any) -> T:
    """Validate a success body; a payload of the wrong shape counts as a failed call."""
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        logger.warning("Unexpected response payload: %s", exc)
        raise ApiError("") from exc


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class MarketplaceClient:
    def __init__(self, session: SessionContext, cache: ProjectionCache | None = None, api_prefix: str = "/api") -> None:
        self.session = session
        self.cache = cache or ProjectionCache()
        self.api_prefix = api_prefix.rstrip("/")

    async def login(self, email: str, password: str) -> Optional[AuthResponse]:
        try:
            data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
            auth = _parse(_AUTH, data)
        except ApiError as exc:
            self.cache.fail(exc.message or "Login failed")
            return None
        self.session.token = auth.token
        return auth

    async def logout(self) -> None:
        self.cache.clear_user_data()
        await self.session.close()

    async def fetch_assets(
        self,
        *,
        page: int = 1,
        limit: int = 12,
        category: str | None = None,
        search: str | None = None,
        free: bool | None = None,
        sort: str = "newest",
    ) -> Optional[CatalogPageResponse]:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if free is not None:
            params["free"] = "true" if free else "false"
        if sort:
            params["sort"] = sort

        async def call() -> CatalogPageResponse:
            return _parse(_PAGE, await self._request("GET", "/assets", params=params))

        return await self._fetch(Resource.CATALOG, call, self.cache.set_catalog, "Failed to fetch assets")

    async def fetch_asset(self, asset_id: str) -> Optional[AssetDetailResponse]:
        async def call() -> AssetDetailResponse:
            return _parse(_DETAIL, await self._request("GET", f"/assets/{asset_id}"))

        return await self._fetch(Resource.ASSET, call, self.cache.set_asset, "Failed to fetch asset")

    async def fetch_featured(self) -> Optional[list[AssetResponse]]:
        async def call() -> list[AssetResponse]:
            data = await self._request("GET", "/assets/featured")
            return _parse(_ASSET_LIST, data)

        return await self._fetch(Resource.FEATURED, call, self.cache.set_featured, "Failed to fetch featured assets")

    async def fetch_wishlist(self) -> Optional[list[AssetResponse]]:
        async def call() -> list[AssetResponse]:
            self._require_token()
            data = await self._request("GET", "/users/wishlist")
            return _parse(_ASSET_LIST, data)

        return await self._fetch(Resource.WISHLIST, call, self.cache.set_wishlist, "Failed to fetch user wishlist")

    async def add_to_wishlist(self, asset_id: str) -> Optional[AssetResponse]:
        """Add on the server, then mirror the confirmed asset into the cache."""
        try:
            self._require_token()
            asset = _parse(_ASSET, await self._request("POST", f"/users/wishlist/{asset_id}"))
        except ApiError as exc:
            self.cache.fail(exc.message or "Failed to add to wishlist")
            return None
        self.cache.confirm_wishlist_add(asset)
        return asset

    async def remove_from_wishlist(self, asset_id: str) -> bool:
        try:
            self._require_token()
            await self._request("DELETE", f"/users/wishlist/{asset_id}")
        except ApiError as exc:
            self.cache.fail(exc.message or "Failed to remove from wishlist")
            return False
        self.cache.confirm_wishlist_remove(asset_id)
        return True

    async def download(self, asset_id: str) -> Optional[str]:
        try:
            self._require_token()
            download = _parse(_DOWNLOAD, await self._request("POST", f"/assets/{asset_id}/download"))
        except ApiError as exc:
            self.cache.fail(exc.message or "Failed to download asset")
            return None
        return download.download_url

    async def _fetch(
        self,
        resource: Resource,
        call: Callable[[], Awaitable[T]],
        apply: Callable[[T], None],
        fallback_message: str,
    ) -> Optional[T]:
        token = self.cache.begin(resource)
        try:
            payload = await call()
        except ApiError as exc:
            self.cache.reject(resource, token, exc.message or fallback_message)
            return None
        self.cache.fulfill(resource, token, lambda: apply(payload))
        return payload

    def _require_token(self) -> None:
        if not self.session.is_authenticated:
            raise ApiError(NO_TOKEN_MESSAGE, status_code=401, code="unauthorized")

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        if self.session.closed:
            logger.warning("%s %s on a closed session", method, path)
            raise ApiError("")
        try:
            response = await self.session.http.request(
                method,
                f"{self.api_prefix}{path}",
                headers=self.session.auth_headers(),
                **kwargs,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError("") from exc

        if response.is_success:
            try:
                return response.json()
            except ValueError as exc:
                logger.warning("%s %s returned a non-JSON body", method, path)
                raise ApiError("") from exc

        message, code = "", None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = str(body.get("message") or "")
            code = body.get("code")
        raise ApiError(message, status_code=response.status_code, code=code)
