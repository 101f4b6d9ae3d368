"""
Asset Management API Routes.

Endpoints for assets and their allocation to centre locations. The
allocation of an asset is a sub-resource: PUT allocates, DELETE deallocates.
"""

from fastapi import APIRouter, Query, status

from asset_allocation.api.deps import ActorRefDep, AssetServiceDep
from asset_allocation.application.dtos.asset_dtos import (
    AllocateRequest,
    AllocationResponse,
    AllocationStateResponse,
    AssetResponse,
    CreateAssetRequest,
    UpdateAssetRequest,
)

router = APIRouter(prefix="/assets", tags=["assets"])


@router.post(
    "",
    summary="Create asset",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"description": "Invalid asset data"}},
)
def create_asset(
    request: CreateAssetRequest, service: AssetServiceDep, actor_ref: ActorRefDep
) -> AssetResponse:
    asset = service.create_asset(
        request.model_dump(exclude_unset=True), actor_ref=actor_ref
    )
    return AssetResponse.from_entity(asset)


@router.get("", summary="List assets", response_model=list[AssetResponse])
def list_assets(
    service: AssetServiceDep,
    include_deleted: bool = Query(False, description="Include soft-deleted assets"),
) -> list[AssetResponse]:
    return [
        AssetResponse.from_entity(asset)
        for asset in service.list_assets(include_deleted=include_deleted)
    ]


@router.get(
    "/{asset_id}",
    summary="Get asset",
    response_model=AssetResponse,
    responses={404: {"description": "Asset not found"}},
)
def get_asset(asset_id: str, service: AssetServiceDep) -> AssetResponse:
    return AssetResponse.from_entity(service.get_asset(asset_id))


@router.patch(
    "/{asset_id}",
    summary="Update asset",
    description="Patch an asset. Setting active to false also removes its allocation.",
    response_model=AssetResponse,
    responses={
        404: {"description": "Asset not found"},
        422: {"description": "Invalid asset data"},
    },
)
def update_asset(
    asset_id: str,
    request: UpdateAssetRequest,
    service: AssetServiceDep,
    actor_ref: ActorRefDep,
) -> AssetResponse:
    asset = service.update_asset(
        asset_id, request.model_dump(exclude_unset=True), actor_ref=actor_ref
    )
    return AssetResponse.from_entity(asset)


@router.delete(
    "/{asset_id}",
    summary="Delete asset",
    response_model=AssetResponse,
    responses={404: {"description": "Asset not found"}},
)
def delete_asset(
    asset_id: str, service: AssetServiceDep, actor_ref: ActorRefDep
) -> AssetResponse:
    return AssetResponse.from_entity(service.delete_asset(asset_id, actor_ref=actor_ref))


@router.put(
    "/{asset_id}/allocation",
    summary="Allocate asset",
    response_model=AllocationResponse,
    responses={
        404: {"description": "Asset not found"},
        409: {"description": "Asset already allocated"},
        412: {"description": "Asset inactive, centre not active, or location unavailable"},
    },
)
def allocate_asset(
    asset_id: str,
    request: AllocateRequest,
    service: AssetServiceDep,
    actor_ref: ActorRefDep,
) -> AllocationResponse:
    allocation = service.allocate(
        asset_id, request.centre_id, request.location_code, actor_ref=actor_ref
    )
    return AllocationResponse.from_entity(allocation)


@router.delete(
    "/{asset_id}/allocation",
    summary="Deallocate asset",
    response_model=AllocationStateResponse,
    responses={404: {"description": "Asset not found"}},
)
def deallocate_asset(
    asset_id: str, service: AssetServiceDep, actor_ref: ActorRefDep
) -> AllocationStateResponse:
    removed = service.deallocate(asset_id, actor_ref=actor_ref)
    return AllocationStateResponse.for_asset(asset_id, removed)


@router.get(
    "/{asset_id}/allocation",
    summary="Get current allocation",
    response_model=AllocationStateResponse,
    responses={404: {"description": "Asset not found"}},
)
def get_allocation(asset_id: str, service: AssetServiceDep) -> AllocationStateResponse:
    return AllocationStateResponse.for_asset(asset_id, service.get_allocation(asset_id))
