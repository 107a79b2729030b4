"""Explicit per-session connection state for API clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import httpx


@dataclass(slots=True)
class SessionContext:
    """Base URL, bearer token and HTTP connection for one signed-in session.

    Created at startup and handed to every data-access call; closing it on
    logout drops the token and the connection pool together.
    """

    http: httpx.AsyncClient
    token: Optional[str] = field(default=None, repr=False)
    closed: bool = False

    @classmethod
    def open(
        cls,
        base_url: str,
        *,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | httpx.Timeout | None = None,
    ) -> "SessionContext":
        kwargs: dict = {"base_url": base_url}
        if transport is not None:
            kwargs["transport"] = transport
        if timeout is not None:
            kwargs["timeout"] = timeout
        return cls(http=httpx.AsyncClient(**kwargs), token=token)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and not self.closed

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def close(self) -> None:
        self.token = None
        if not self.closed:
            self.closed = True
            await self.http.aclose()

    async def __aenter__(self) -> "SessionContext":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
