"""
Location repository implementation.

Implements the LocationRepository interface over location_within_centre.
"""

from sqlmodel import select

from asset_allocation.domain.allocation.entities.location import Location
from asset_allocation.domain.allocation.repositories.location_repository import (
    LocationRepository,
)
from asset_allocation.domain.allocation.value_objects.enums import LocationStatus
from asset_allocation.infrastructure.database.models import LocationWithinCentre

from .base import BaseRepository
from .mappers import LocationMapper

_ACTIVE = LocationStatus.ACTIVE.value


class SqlLocationRepository(
    BaseRepository[LocationWithinCentre, Location], LocationRepository
):
    """Repository implementation for Location entities."""

    @property
    def record_class(self):
        return LocationWithinCentre

    def to_domain(self, record: LocationWithinCentre) -> Location:
        return LocationMapper.sql_to_domain(record)

    def to_record(self, entity: Location) -> LocationWithinCentre:
        return LocationMapper.domain_to_sql(entity)

    def find_active_by_unique_key(self, centre_id: str, code: str) -> Location | None:
        statement = select(LocationWithinCentre).where(
            LocationWithinCentre.centre_id == centre_id,
            LocationWithinCentre.code == code,
            LocationWithinCentre.status == _ACTIVE,
        )
        record = self._first(statement, f"find {centre_id}/{code}")
        return self.to_domain(record) if record is not None else None

    def find_active_by_centre(self, centre_id: str) -> list[Location]:
        statement = (
            select(LocationWithinCentre)
            .where(
                LocationWithinCentre.centre_id == centre_id,
                LocationWithinCentre.status == _ACTIVE,
            )
            .order_by(LocationWithinCentre.id)
        )
        return [
            self.to_domain(record)
            for record in self._all(statement, f"list for centre {centre_id}")
        ]
