"""
Asset Repository Interface

Defines the contract for asset data access operations.
"""

from abc import abstractmethod

from ...shared.base import Repository
from ..entities.asset import Asset


class AssetRepository(Repository[Asset]):
    """Abstract repository interface for Asset entities."""

    @abstractmethod
    def get(self, asset_id: str) -> Asset | None:
        pass

    @abstractmethod
    def get_for_update(self, asset_id: str) -> Asset | None:
        """Retrieve an asset and lock its row until the transaction ends."""
        pass

    @abstractmethod
    def save(self, asset: Asset) -> Asset:
        pass

    @abstractmethod
    def find_active_by_unique_key(self, asset_id: str) -> Asset | None:
        """Assets are keyed by id only: the live asset with this id, if any."""
        pass

    @abstractmethod
    def list_all(self, include_deleted: bool = False) -> list[Asset]:
        pass
