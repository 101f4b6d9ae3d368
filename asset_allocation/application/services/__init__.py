"""Application services coordinating the allocation use cases."""

from .asset_service import AssetManagementService
from .base_service import ApplicationServiceBase
from .centre_service import CentreManagementService

__all__ = [
    "ApplicationServiceBase",
    "AssetManagementService",
    "CentreManagementService",
]
