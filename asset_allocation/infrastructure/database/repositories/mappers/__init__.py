"""
Mappers for converting between domain entities and SQL records.

This module provides mapping functionality to convert between domain entities
and their corresponding SQLModel database representations.
"""

from .allocation_mapper import AllocationMapper
from .asset_mapper import AssetMapper
from .centre_mapper import CentreMapper
from .change_log_mapper import ChangeLogMapper
from .location_mapper import LocationMapper

__all__ = [
    "AllocationMapper",
    "AssetMapper",
    "CentreMapper",
    "ChangeLogMapper",
    "LocationMapper",
]
