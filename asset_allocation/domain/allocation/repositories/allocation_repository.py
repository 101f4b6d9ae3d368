"""
Allocation Repository Interface

Defines the contract for allocation data access operations.
"""

from abc import abstractmethod

from ...shared.base import Repository
from ..entities.allocation import Allocation


class AllocationRepository(Repository[Allocation]):
    """
    Abstract repository interface for Allocation entities.

    Only active allocations are returned by the ``find_*`` lookups. The store
    is expected to hold at most one active allocation per asset and one per
    location, and to reject a save that would break either rule with a
    ConstraintViolationError.
    """

    @abstractmethod
    def get(self, allocation_id: str) -> Allocation | None:
        pass

    @abstractmethod
    def save(self, allocation: Allocation) -> Allocation:
        pass

    @abstractmethod
    def find_active_by_asset(self, asset_id: str) -> Allocation | None:
        pass

    @abstractmethod
    def find_active_by_location(self, location_id: str) -> Allocation | None:
        pass

    def find_active_by_unique_key(
        self, asset_id: str | None = None, location_id: str | None = None
    ) -> Allocation | None:
        """Active allocation held by the asset, or else occupying the location."""
        if asset_id is not None:
            allocation = self.find_active_by_asset(asset_id)
            if allocation is not None:
                return allocation
        if location_id is not None:
            return self.find_active_by_location(location_id)
        return None
