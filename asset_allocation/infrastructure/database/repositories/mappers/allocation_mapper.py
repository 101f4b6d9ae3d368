"""Mapper for converting between Allocation entities and asset_allocation rows."""

from asset_allocation.domain.allocation.entities.allocation import (
    Allocation as DomainAllocation,
)
from asset_allocation.domain.allocation.value_objects.enums import AllocationStatus
from asset_allocation.infrastructure.database.models import (
    AssetAllocation as SQLAllocation,
)

from .common import as_utc


class AllocationMapper:
    @staticmethod
    def domain_to_sql(domain_allocation: DomainAllocation) -> SQLAllocation:
        return SQLAllocation(
            id=domain_allocation.id,
            asset_id=domain_allocation.asset_id,
            centre_id=domain_allocation.centre_id,
            location_id=domain_allocation.location_id,
            location_code=domain_allocation.location_code,
            status=domain_allocation.status.value,
            allocated_at=domain_allocation.allocated_at,
            removed_at=domain_allocation.removed_at,
            created_at=domain_allocation.created_at,
            updated_at=domain_allocation.updated_at,
        )

    @staticmethod
    def sql_to_domain(sql_allocation: SQLAllocation) -> DomainAllocation:
        return DomainAllocation(
            id=sql_allocation.id,
            asset_id=sql_allocation.asset_id,
            centre_id=sql_allocation.centre_id,
            location_id=sql_allocation.location_id,
            location_code=sql_allocation.location_code,
            status=AllocationStatus(sql_allocation.status),
            allocated_at=as_utc(sql_allocation.allocated_at),
            removed_at=as_utc(sql_allocation.removed_at),
            created_at=as_utc(sql_allocation.created_at),
            updated_at=as_utc(sql_allocation.updated_at),
        )
