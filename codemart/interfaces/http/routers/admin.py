"""Administrative endpoints for moderating listings and users."""
from typing import List

from fastapi import APIRouter, Depends

from codemart.core.security import get_current_admin
from codemart.interfaces.http.deps import get_moderation_service
from codemart.modules.moderation import ModerationService
from codemart.modules.users import Role, User
from codemart.schemas import (
    AssetResponse,
    MessageResponse,
    ModerationResponse,
    RoleUpdateRequest,
    StatsResponse,
    UserResponse,
)

router = APIRouter()


@router.get("/users", response_model=List[UserResponse], summary="List every user")
async def list_users(
    admin: User = Depends(get_current_admin),
    service: ModerationService = Depends(get_moderation_service),
) -> List[UserResponse]:
    return [UserResponse.from_domain(user) for user in await service.list_users(admin)]


@router.delete("/users/{user_id}", response_model=MessageResponse, summary="Delete a user and their listings")
async def delete_user(
    user_id: str,
    admin: User = Depends(get_current_admin),
    service: ModerationService = Depends(get_moderation_service),
) -> MessageResponse:
    await service.delete_user(admin, user_id)
    return MessageResponse(message="User removed")


@router.put("/users/{user_id}/role", response_model=UserResponse, summary="Change a user's role")
async def update_user_role(
    user_id: str,
    payload: RoleUpdateRequest,
    admin: User = Depends(get_current_admin),
    service: ModerationService = Depends(get_moderation_service),
) -> UserResponse:
    user = await service.set_role(admin, user_id, Role.parse(payload.role))
    return UserResponse.from_domain(user)


@router.get("/assets", response_model=List[AssetResponse], summary="Every asset, pending included")
async def list_assets(
    admin: User = Depends(get_current_admin),
    service: ModerationService = Depends(get_moderation_service),
) -> List[AssetResponse]:
    return [AssetResponse.from_domain(asset) for asset in await service.list_assets(admin)]


@router.put("/assets/{asset_id}/approve", response_model=ModerationResponse, summary="Approve an asset")
async def approve_asset(
    asset_id: str,
    admin: User = Depends(get_current_admin),
    service: ModerationService = Depends(get_moderation_service),
) -> ModerationResponse:
    result = await service.approve(admin, asset_id)
    return ModerationResponse(message=result.message, asset=AssetResponse.from_domain(result.asset))


@router.put("/assets/{asset_id}/reject", response_model=ModerationResponse, summary="Reject an asset")
async def reject_asset(
    asset_id: str,
    admin: User = Depends(get_current_admin),
    service: ModerationService = Depends(get_moderation_service),
) -> ModerationResponse:
    result = await service.reject(admin, asset_id)
    return ModerationResponse(message=result.message, asset=AssetResponse.from_domain(result.asset))


@router.put("/assets/{asset_id}/feature", response_model=ModerationResponse, summary="Toggle featured status")
async def feature_asset(
    asset_id: str,
    admin: User = Depends(get_current_admin),
    service: ModerationService = Depends(get_moderation_service),
) -> ModerationResponse:
    result = await service.toggle_feature(admin, asset_id)
    return ModerationResponse(message=result.message, asset=AssetResponse.from_domain(result.asset))


@router.get("/stats", response_model=StatsResponse, summary="Platform statistics")
async def get_admin_stats(
    admin: User = Depends(get_current_admin),
    service: ModerationService = Depends(get_moderation_service),
) -> StatsResponse:
    return StatsResponse.from_domain(await service.stats(admin))
