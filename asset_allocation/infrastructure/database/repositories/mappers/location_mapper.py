"""Mapper for converting between Location entities and location_within_centre rows."""

from asset_allocation.domain.allocation.entities.location import (
    Location as DomainLocation,
)
from asset_allocation.domain.allocation.value_objects.enums import LocationStatus
from asset_allocation.infrastructure.database.models import (
    LocationWithinCentre as SQLLocation,
)

from .common import as_utc


class LocationMapper:
    @staticmethod
    def domain_to_sql(domain_location: DomainLocation) -> SQLLocation:
        return SQLLocation(
            id=domain_location.id,
            centre_id=domain_location.centre_id,
            code=domain_location.code,
            description=domain_location.description,
            status=domain_location.status.value,
            created_at=domain_location.created_at,
            updated_at=domain_location.updated_at,
        )

    @staticmethod
    def sql_to_domain(sql_location: SQLLocation) -> DomainLocation:
        return DomainLocation(
            id=sql_location.id,
            centre_id=sql_location.centre_id,
            code=sql_location.code,
            description=sql_location.description,
            status=LocationStatus(sql_location.status),
            created_at=as_utc(sql_location.created_at),
            updated_at=as_utc(sql_location.updated_at),
        )
