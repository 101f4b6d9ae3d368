"""
Allocation repository implementation.

Implements the AllocationRepository interface over asset_allocation. The two
partial unique indexes on that table reject a second active allocation for
an asset or a location; the rejection surfaces from ``add`` as a
ConstraintViolationError naming the index.
"""

from sqlmodel import select

from asset_allocation.domain.allocation.entities.allocation import Allocation
from asset_allocation.domain.allocation.repositories.allocation_repository import (
    AllocationRepository,
)
from asset_allocation.domain.allocation.value_objects.enums import AllocationStatus
from asset_allocation.infrastructure.database.models import AssetAllocation

from .base import BaseRepository
from .mappers import AllocationMapper

_ACTIVE = AllocationStatus.ACTIVE.value


class SqlAllocationRepository(
    BaseRepository[AssetAllocation, Allocation], AllocationRepository
):
    """Repository implementation for Allocation entities."""

    @property
    def record_class(self):
        return AssetAllocation

    def to_domain(self, record: AssetAllocation) -> Allocation:
        return AllocationMapper.sql_to_domain(record)

    def to_record(self, entity: Allocation) -> AssetAllocation:
        return AllocationMapper.domain_to_sql(entity)

    def find_active_by_asset(self, asset_id: str) -> Allocation | None:
        statement = select(AssetAllocation).where(
            AssetAllocation.asset_id == asset_id, AssetAllocation.status == _ACTIVE
        )
        record = self._first(statement, f"find active for asset {asset_id}")
        return self.to_domain(record) if record is not None else None

    def find_active_by_location(self, location_id: str) -> Allocation | None:
        statement = select(AssetAllocation).where(
            AssetAllocation.location_id == location_id,
            AssetAllocation.status == _ACTIVE,
        )
        record = self._first(statement, f"find active for location {location_id}")
        return self.to_domain(record) if record is not None else None
