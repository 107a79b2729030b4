from fastapi import APIRouter

from codemart.interfaces.http.routers import admin, assets, auth, users


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(assets.router, prefix="/assets", tags=["assets"])
    router.include_router(users.router, prefix="/users", tags=["users"])
    router.include_router(admin.router, prefix="/admin", tags=["admin"])
    return router


__all__ = [
    "create_api_router",
]
