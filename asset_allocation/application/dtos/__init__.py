"""
Data Transfer Objects for the application layer.

This module contains DTOs that provide a stable interface between the HTTP
adapter and the management services.
"""

from .asset_dtos import (
    AllocateRequest,
    AllocationResponse,
    AllocationStateResponse,
    AssetResponse,
    CreateAssetRequest,
    DimensionsResponse,
    UpdateAssetRequest,
)
from .centre_dtos import (
    AddressPayload,
    AddressResponse,
    CentreResponse,
    CreateCentreRequest,
    CreateLocationRequest,
    LocationResponse,
    UpdateCentreRequest,
    UpdateLocationRequest,
)

__all__ = [
    "AddressPayload",
    "AddressResponse",
    "AllocateRequest",
    "AllocationResponse",
    "AllocationStateResponse",
    "AssetResponse",
    "CentreResponse",
    "CreateAssetRequest",
    "CreateCentreRequest",
    "CreateLocationRequest",
    "DimensionsResponse",
    "LocationResponse",
    "UpdateAssetRequest",
    "UpdateCentreRequest",
    "UpdateLocationRequest",
]
