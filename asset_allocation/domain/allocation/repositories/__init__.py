from .allocation_repository import AllocationRepository
from .asset_repository import AssetRepository
from .centre_repository import CentreRepository
from .change_log_repository import ChangeLogRepository
from .location_repository import LocationRepository

__all__ = [
    "AllocationRepository",
    "AssetRepository",
    "CentreRepository",
    "ChangeLogRepository",
    "LocationRepository",
]
