"""
Mapper for converting between Centre domain entities and shopping_centre rows.

The address value object is flattened into columns. ``line_two`` is stored as
an empty string when absent so the live-address unique index can compare it.
"""

from asset_allocation.domain.allocation.entities.centre import Centre as DomainCentre
from asset_allocation.domain.allocation.value_objects.address import Address
from asset_allocation.domain.allocation.value_objects.enums import CentreStatus
from asset_allocation.infrastructure.database.models import ShoppingCentre as SQLCentre

from .common import as_utc


class CentreMapper:
    """Mapper class for converting between Centre entities and SQL records."""

    @staticmethod
    def domain_to_sql(domain_centre: DomainCentre) -> SQLCentre:
        """
        Convert domain Centre entity to SQL ShoppingCentre record.

        Args:
            domain_centre: Domain centre entity to convert

        Returns:
            SQL shopping centre record
        """
        address = domain_centre.address
        return SQLCentre(
            id=domain_centre.id,
            name=domain_centre.name,
            line_one=address.line_one,
            line_two=address.line_two or "",
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            status=domain_centre.status.value,
            created_at=domain_centre.created_at,
            updated_at=domain_centre.updated_at,
        )

    @staticmethod
    def sql_to_domain(sql_centre: SQLCentre) -> DomainCentre:
        """
        Convert SQL ShoppingCentre record to domain Centre entity.

        Args:
            sql_centre: SQL record to convert

        Returns:
            Domain centre entity
        """
        return DomainCentre(
            id=sql_centre.id,
            name=sql_centre.name,
            address=Address(
                line_one=sql_centre.line_one,
                line_two=sql_centre.line_two or None,
                city=sql_centre.city,
                state=sql_centre.state,
                postal_code=sql_centre.postal_code,
                country=sql_centre.country,
            ),
            status=CentreStatus(sql_centre.status),
            created_at=as_utc(sql_centre.created_at),
            updated_at=as_utc(sql_centre.updated_at),
        )
