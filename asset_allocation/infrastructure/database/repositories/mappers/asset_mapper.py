"""Mapper for converting between Asset entities and asset rows."""

from asset_allocation.domain.allocation.entities.asset import Asset as DomainAsset
from asset_allocation.domain.allocation.value_objects.dimensions import Dimensions
from asset_allocation.domain.allocation.value_objects.enums import AssetStatus
from asset_allocation.infrastructure.database.models import Asset as SQLAsset

from .common import as_utc


class AssetMapper:
    """Flattens the dimensions value object into length/breadth/depth columns."""

    @staticmethod
    def domain_to_sql(domain_asset: DomainAsset) -> SQLAsset:
        return SQLAsset(
            id=domain_asset.id,
            name=domain_asset.name,
            length=domain_asset.dimensions.length,
            breadth=domain_asset.dimensions.breadth,
            depth=domain_asset.dimensions.depth,
            status=domain_asset.status.value,
            created_at=domain_asset.created_at,
            updated_at=domain_asset.updated_at,
        )

    @staticmethod
    def sql_to_domain(sql_asset: SQLAsset) -> DomainAsset:
        return DomainAsset(
            id=sql_asset.id,
            name=sql_asset.name,
            dimensions=Dimensions(
                length=sql_asset.length,
                breadth=sql_asset.breadth,
                depth=sql_asset.depth,
            ),
            status=AssetStatus(sql_asset.status),
            created_at=as_utc(sql_asset.created_at),
            updated_at=as_utc(sql_asset.updated_at),
        )
