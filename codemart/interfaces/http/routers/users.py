"""Endpoints scoped to the signed-in user: profile, own assets and wishlist."""
from typing import List

from fastapi import APIRouter, Depends

from codemart.core.security import get_current_user
from codemart.interfaces.http.deps import get_asset_service, get_user_service, get_wishlist_service
from codemart.modules.assets import AssetService
from codemart.modules.users import ProfileUpdateInput, User, UserService
from codemart.modules.wishlist import WishlistService
from codemart.schemas import AssetResponse, MessageResponse, ProfileUpdateRequest, UserResponse

router = APIRouter()


@router.get("/profile", response_model=UserResponse, summary="Current user's profile")
async def get_profile(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_domain(user)


@router.put("/profile", response_model=UserResponse, summary="Update the current user's profile")
async def update_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    updated = await service.update_profile(user.id, ProfileUpdateInput(**payload.model_dump()))
    return UserResponse.from_domain(updated)


@router.get("/assets", response_model=List[AssetResponse], summary="Assets uploaded by the current user")
async def my_assets(
    user: User = Depends(get_current_user),
    service: AssetService = Depends(get_asset_service),
) -> List[AssetResponse]:
    return [AssetResponse.from_domain(asset) for asset in await service.list_for_seller(user)]


@router.get("/wishlist", response_model=List[AssetResponse], summary="Current user's wishlist")
async def get_wishlist(
    user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
) -> List[AssetResponse]:
    return [AssetResponse.from_domain(asset) for asset in await service.get_wishlist(user)]


@router.post("/wishlist/{asset_id}", response_model=AssetResponse, summary="Add an asset to the wishlist")
async def add_to_wishlist(
    asset_id: str,
    user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
) -> AssetResponse:
    return AssetResponse.from_domain(await service.add(user, asset_id))


@router.delete("/wishlist/{asset_id}", response_model=MessageResponse, summary="Remove an asset from the wishlist")
async def remove_from_wishlist(
    asset_id: str,
    user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
) -> MessageResponse:
    await service.remove(user, asset_id)
    return MessageResponse(message="Asset removed from wishlist", data={"id": asset_id})
