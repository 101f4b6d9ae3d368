"""
Asset and allocation Data Transfer Objects.

As with centres, request DTOs fix the shape only and leave the value rules
to the domain factories.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from asset_allocation.domain.allocation.entities.allocation import Allocation
from asset_allocation.domain.allocation.entities.asset import Asset


class CreateAssetRequest(BaseModel):
    """DTO for creating a new asset."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "name": "Digital panel 55in",
                "length": 1.23,
                "breadth": 0.71,
                "depth": 0.05,
            }
        },
    )

    name: str | None = None
    length: float | None = None
    breadth: float | None = None
    depth: float | None = None
    active: bool | None = None


class UpdateAssetRequest(BaseModel):
    """DTO for patching an asset. Setting ``active`` to false removes its allocation."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    length: float | None = None
    breadth: float | None = None
    depth: float | None = None
    active: bool | None = None


class AllocateRequest(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {"centre_id": "01HZX3Q7M2K8V5T9C4N6B1R0DE", "location_code": "L234"}
        },
    )

    centre_id: str
    location_code: str


class DimensionsResponse(BaseModel):
    length: float
    breadth: float
    depth: float


class AssetResponse(BaseModel):
    """DTO for asset response with full details."""

    id: str
    name: str
    dimensions: DimensionsResponse
    status: str
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, asset: Asset) -> "AssetResponse":
        return cls(
            id=asset.id,
            name=asset.name,
            dimensions=DimensionsResponse(**asset.dimensions.model_dump()),
            status=asset.status.value,
            created_at=asset.created_at,
            updated_at=asset.updated_at,
        )


class AllocationResponse(BaseModel):
    id: str
    asset_id: str
    centre_id: str
    location_id: str
    location_code: str
    status: str
    allocated_at: datetime
    removed_at: datetime | None

    @classmethod
    def from_entity(cls, allocation: Allocation) -> "AllocationResponse":
        return cls(
            id=allocation.id,
            asset_id=allocation.asset_id,
            centre_id=allocation.centre_id,
            location_id=allocation.location_id,
            location_code=allocation.location_code,
            status=allocation.status.value,
            allocated_at=allocation.allocated_at,
            removed_at=allocation.removed_at,
        )


class AllocationStateResponse(BaseModel):
    """Current allocation of an asset, or the one a deallocation removed; null when none."""

    asset_id: str
    allocation: AllocationResponse | None

    @classmethod
    def for_asset(
        cls, asset_id: str, allocation: Allocation | None
    ) -> "AllocationStateResponse":
        return cls(
            asset_id=asset_id,
            allocation=(
                AllocationResponse.from_entity(allocation)
                if allocation is not None
                else None
            ),
        )
