"""
Asset repository implementation.

Implements the AssetRepository interface over the asset table.
"""

from sqlmodel import select

from asset_allocation.domain.allocation.entities.asset import Asset
from asset_allocation.domain.allocation.repositories.asset_repository import (
    AssetRepository,
)
from asset_allocation.domain.allocation.value_objects.enums import AssetStatus
from asset_allocation.infrastructure.database.models import Asset as AssetRecord

from .base import BaseRepository
from .mappers import AssetMapper

_DELETED = AssetStatus.DELETED.value


class SqlAssetRepository(BaseRepository[AssetRecord, Asset], AssetRepository):
    """Repository implementation for Asset entities."""

    @property
    def record_class(self):
        return AssetRecord

    def to_domain(self, record: AssetRecord) -> Asset:
        return AssetMapper.sql_to_domain(record)

    def to_record(self, entity: Asset) -> AssetRecord:
        return AssetMapper.domain_to_sql(entity)

    def find_active_by_unique_key(self, asset_id: str) -> Asset | None:
        statement = select(AssetRecord).where(
            AssetRecord.id == asset_id, AssetRecord.status != _DELETED
        )
        record = self._first(statement, f"find live {asset_id}")
        return self.to_domain(record) if record is not None else None

    def list_all(self, include_deleted: bool = False) -> list[Asset]:
        statement = select(AssetRecord).order_by(AssetRecord.id)
        if not include_deleted:
            statement = statement.where(AssetRecord.status != _DELETED)
        return [self.to_domain(record) for record in self._all(statement, "list")]
