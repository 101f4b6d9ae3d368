"""
Centre repository implementation.

Implements the CentreRepository interface from the domain layer over the
shopping_centre table.
"""

from sqlmodel import select

from asset_allocation.domain.allocation.entities.centre import Centre
from asset_allocation.domain.allocation.repositories.centre_repository import (
    CentreRepository,
)
from asset_allocation.domain.allocation.value_objects.address import Address
from asset_allocation.domain.allocation.value_objects.enums import CentreStatus
from asset_allocation.infrastructure.database.models import ShoppingCentre

from .base import BaseRepository
from .mappers import CentreMapper

_DELETED = CentreStatus.DELETED.value


class SqlCentreRepository(BaseRepository[ShoppingCentre, Centre], CentreRepository):
    """Repository implementation for Centre entities."""

    @property
    def record_class(self):
        return ShoppingCentre

    def to_domain(self, record: ShoppingCentre) -> Centre:
        return CentreMapper.sql_to_domain(record)

    def to_record(self, entity: Centre) -> ShoppingCentre:
        return CentreMapper.domain_to_sql(entity)

    def find_live_by_name(self, name: str) -> Centre | None:
        """
        Find the live centre carrying the given name.

        Raises:
            DatabaseError: If database operation fails
        """
        statement = select(ShoppingCentre).where(
            ShoppingCentre.name == name, ShoppingCentre.status != _DELETED
        )
        record = self._first(statement, f"find by name {name}")
        return self.to_domain(record) if record is not None else None

    def find_live_by_address(self, address: Address) -> Centre | None:
        line_one, line_two, city, state, postal_code, country = address.unique_key
        statement = select(ShoppingCentre).where(
            ShoppingCentre.line_one == line_one,
            ShoppingCentre.line_two == line_two,
            ShoppingCentre.city == city,
            ShoppingCentre.state == state,
            ShoppingCentre.postal_code == postal_code,
            ShoppingCentre.country == country,
            ShoppingCentre.status != _DELETED,
        )
        record = self._first(statement, "find by address")
        return self.to_domain(record) if record is not None else None

    def list_all(self, include_deleted: bool = False) -> list[Centre]:
        statement = select(ShoppingCentre).order_by(ShoppingCentre.id)
        if not include_deleted:
            statement = statement.where(ShoppingCentre.status != _DELETED)
        return [self.to_domain(record) for record in self._all(statement, "list")]
