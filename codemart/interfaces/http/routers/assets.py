"""Public catalog and seller asset endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from codemart.core.security import get_current_seller, get_current_user
from codemart.interfaces.http.deps import (
    get_asset_service,
    get_catalog_service,
    get_review_service,
)
from codemart.interfaces.http.forms import build_create_input, build_update_input, parse_flag
from codemart.modules.assets import AssetService
from codemart.modules.catalog import CatalogQuery, CatalogService, SortKey
from codemart.modules.reviews import ReviewService
from codemart.modules.users import User
from codemart.schemas import (
    AssetDetailResponse,
    AssetResponse,
    CatalogPageResponse,
    DownloadResponse,
    MessageResponse,
    ReviewCreateRequest,
    ReviewResponse,
)

router = APIRouter()


@router.get("", response_model=CatalogPageResponse, summary="List approved assets")
async def list_assets(
    page: int = Query(1),
    limit: int = Query(12),
    category: Optional[str] = None,
    search: Optional[str] = None,
    free: Optional[str] = None,
    sort: Optional[str] = None,
    catalog: CatalogService = Depends(get_catalog_service),
) -> CatalogPageResponse:
    result = await catalog.list_assets(
        CatalogQuery(
            page=page,
            limit=limit,
            category=category,
            search=search,
            is_free=parse_flag(free),
            sort=SortKey.parse(sort),
        )
    )
    return CatalogPageResponse.from_page(result)


@router.get("/featured", response_model=List[AssetResponse], summary="Featured approved assets")
async def featured_assets(catalog: CatalogService = Depends(get_catalog_service)) -> List[AssetResponse]:
    return [AssetResponse.from_domain(asset) for asset in await catalog.featured()]


@router.get("/{asset_id}", response_model=AssetDetailResponse, summary="Asset detail (no approval gate)")
async def get_asset(asset_id: str, catalog: CatalogService = Depends(get_catalog_service)) -> AssetDetailResponse:
    return AssetDetailResponse.from_detail(await catalog.get_detail(asset_id))


@router.post("", response_model=AssetResponse, status_code=status.HTTP_201_CREATED, summary="Upload a new asset")
async def create_asset(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    is_free: Optional[str] = Form(None, alias="isFree"),
    demo_url: Optional[str] = Form(None, alias="demoUrl"),
    tags: Optional[str] = Form(None),
    features: Optional[str] = Form(None),
    technologies: Optional[str] = Form(None),
    requirements: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    preview_images: Optional[List[UploadFile]] = File(None, alias="previewImages"),
    seller: User = Depends(get_current_seller),
    service: AssetService = Depends(get_asset_service),
) -> AssetResponse:
    payload = build_create_input(
        title=title,
        description=description,
        category=category,
        price=price,
        is_free=is_free,
        demo_url=demo_url,
        tags=tags,
        features=features,
        technologies=technologies,
        requirements=requirements,
    )
    asset = await service.create(seller, payload, file, preview_images or [])
    return AssetResponse.from_domain(asset)


@router.put("/{asset_id}", response_model=AssetResponse, summary="Update an asset (owner or admin)")
async def update_asset(
    asset_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    is_free: Optional[str] = Form(None, alias="isFree"),
    demo_url: Optional[str] = Form(None, alias="demoUrl"),
    tags: Optional[str] = Form(None),
    features: Optional[str] = Form(None),
    technologies: Optional[str] = Form(None),
    requirements: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    preview_images: Optional[List[UploadFile]] = File(None, alias="previewImages"),
    seller: User = Depends(get_current_seller),
    service: AssetService = Depends(get_asset_service),
) -> AssetResponse:
    payload = build_update_input(
        title=title,
        description=description,
        category=category,
        price=price,
        is_free=is_free,
        demo_url=demo_url,
        tags=tags,
        features=features,
        technologies=technologies,
        requirements=requirements,
    )
    asset = await service.update(seller, asset_id, payload, file, preview_images or [])
    return AssetResponse.from_domain(asset)


@router.delete("/{asset_id}", response_model=MessageResponse, summary="Delete an asset (owner or admin)")
async def delete_asset(
    asset_id: str,
    seller: User = Depends(get_current_seller),
    service: AssetService = Depends(get_asset_service),
) -> MessageResponse:
    await service.delete(seller, asset_id)
    return MessageResponse(message="Asset removed")


@router.post("/{asset_id}/download", response_model=DownloadResponse, summary="Count a download and return the file URL")
async def download_asset(
    asset_id: str,
    user: User = Depends(get_current_user),
    service: AssetService = Depends(get_asset_service),
) -> DownloadResponse:
    asset = await service.download(asset_id)
    return DownloadResponse(download_url=asset.file_url)


@router.post(
    "/{asset_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review an asset",
)
async def review_asset(
    asset_id: str,
    payload: ReviewCreateRequest,
    user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    review = await service.add_review(user, asset_id, payload.rating, payload.comment)
    return ReviewResponse.from_domain(review)
