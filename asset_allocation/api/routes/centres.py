"""
Centre Management API Routes.

Endpoints for shopping centres and the locations inside them. Errors are
rendered by the handlers in ``asset_allocation.api.errors``.
"""

from fastapi import APIRouter, Query, status

from asset_allocation.api.deps import ActorRefDep, CentreServiceDep
from asset_allocation.application.dtos.centre_dtos import (
    CentreResponse,
    CreateCentreRequest,
    CreateLocationRequest,
    LocationResponse,
    UpdateCentreRequest,
    UpdateLocationRequest,
)

router = APIRouter(prefix="/centres", tags=["centres"])


@router.post(
    "",
    summary="Create centre",
    response_model=CentreResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"description": "Name or address already used by a live centre"},
        422: {"description": "Invalid centre data"},
    },
)
def create_centre(
    request: CreateCentreRequest, service: CentreServiceDep, actor_ref: ActorRefDep
) -> CentreResponse:
    centre = service.create_centre(
        request.model_dump(exclude_unset=True), actor_ref=actor_ref
    )
    return CentreResponse.from_entity(centre)


@router.get("", summary="List centres", response_model=list[CentreResponse])
def list_centres(
    service: CentreServiceDep,
    include_deleted: bool = Query(False, description="Include soft-deleted centres"),
) -> list[CentreResponse]:
    return [
        CentreResponse.from_entity(centre)
        for centre in service.list_centres(include_deleted=include_deleted)
    ]


@router.get(
    "/{centre_id}",
    summary="Get centre",
    response_model=CentreResponse,
    responses={404: {"description": "Centre not found"}},
)
def get_centre(centre_id: str, service: CentreServiceDep) -> CentreResponse:
    return CentreResponse.from_entity(service.get_centre(centre_id))


@router.patch(
    "/{centre_id}",
    summary="Update centre",
    response_model=CentreResponse,
    responses={
        404: {"description": "Centre not found"},
        409: {"description": "Name or address already used by a live centre"},
        422: {"description": "Invalid centre data"},
    },
)
def update_centre(
    centre_id: str,
    request: UpdateCentreRequest,
    service: CentreServiceDep,
    actor_ref: ActorRefDep,
) -> CentreResponse:
    centre = service.update_centre(
        centre_id, request.model_dump(exclude_unset=True), actor_ref=actor_ref
    )
    return CentreResponse.from_entity(centre)


@router.delete(
    "/{centre_id}",
    summary="Delete centre",
    description="Soft-delete a centre together with its locations and their allocations.",
    response_model=CentreResponse,
    responses={404: {"description": "Centre not found"}},
)
def delete_centre(
    centre_id: str, service: CentreServiceDep, actor_ref: ActorRefDep
) -> CentreResponse:
    return CentreResponse.from_entity(
        service.delete_centre(centre_id, actor_ref=actor_ref)
    )


@router.post(
    "/{centre_id}/locations",
    summary="Add location",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"description": "Code already used in this centre"},
        412: {"description": "Centre absent or not active"},
        422: {"description": "Invalid location data"},
    },
)
def add_location(
    centre_id: str,
    request: CreateLocationRequest,
    service: CentreServiceDep,
    actor_ref: ActorRefDep,
) -> LocationResponse:
    location = service.add_location(
        centre_id, request.code, request.description, actor_ref=actor_ref
    )
    return LocationResponse.from_entity(location)


@router.get(
    "/{centre_id}/locations",
    summary="List locations",
    response_model=list[LocationResponse],
    responses={404: {"description": "Centre not found"}},
)
def list_locations(centre_id: str, service: CentreServiceDep) -> list[LocationResponse]:
    return [
        LocationResponse.from_entity(location)
        for location in service.list_locations(centre_id)
    ]


@router.get(
    "/{centre_id}/locations/{location_id}",
    summary="Get location",
    response_model=LocationResponse,
    responses={404: {"description": "Centre or location not found"}},
)
def get_location(
    centre_id: str, location_id: str, service: CentreServiceDep
) -> LocationResponse:
    return LocationResponse.from_entity(service.get_location(centre_id, location_id))


@router.patch(
    "/{centre_id}/locations/{location_id}",
    summary="Update location",
    response_model=LocationResponse,
    responses={
        404: {"description": "Centre or location not found"},
        409: {"description": "Code already used in this centre"},
    },
)
def update_location(
    centre_id: str,
    location_id: str,
    request: UpdateLocationRequest,
    service: CentreServiceDep,
    actor_ref: ActorRefDep,
) -> LocationResponse:
    location = service.update_location(
        centre_id,
        location_id,
        request.model_dump(exclude_unset=True),
        actor_ref=actor_ref,
    )
    return LocationResponse.from_entity(location)


@router.delete(
    "/{centre_id}/locations/{location_id}",
    summary="Remove location",
    description="Soft-delete a location and remove the allocation occupying it.",
    response_model=LocationResponse,
    responses={404: {"description": "Centre or location not found"}},
)
def remove_location(
    centre_id: str,
    location_id: str,
    service: CentreServiceDep,
    actor_ref: ActorRefDep,
) -> LocationResponse:
    location = service.remove_location(centre_id, location_id, actor_ref=actor_ref)
    return LocationResponse.from_entity(location)
