"""
Repository implementations for the SQLModel persistence layer.

Each repository implements the matching domain interface and works inside
the session of the unit of work that created it.
"""

from .allocation_repository import SqlAllocationRepository
from .asset_repository import SqlAssetRepository
from .base import (
    BaseRepository,
    DatabaseError,
    EntityNotFoundError,
    constraint_name_from_error,
)
from .centre_repository import SqlCentreRepository
from .change_log_repository import SqlChangeLogRepository
from .location_repository import SqlLocationRepository

__all__ = [
    "BaseRepository",
    "DatabaseError",
    "EntityNotFoundError",
    "SqlAllocationRepository",
    "SqlAssetRepository",
    "SqlCentreRepository",
    "SqlChangeLogRepository",
    "SqlLocationRepository",
    "constraint_name_from_error",
]
