"""
Location Repository Interface

Defines the contract for location data access operations.
"""

from abc import abstractmethod

from ...shared.base import Repository
from ..entities.location import Location


class LocationRepository(Repository[Location]):
    """Abstract repository interface for Location entities."""

    @abstractmethod
    def get(self, location_id: str) -> Location | None:
        pass

    @abstractmethod
    def get_for_update(self, location_id: str) -> Location | None:
        """Retrieve a location and lock its row until the transaction ends."""
        pass

    @abstractmethod
    def save(self, location: Location) -> Location:
        """
        Write back changes to an existing location.

        Raises:
            ConstraintViolationError: If the code is already used by an active
                location of the same centre
        """
        pass

    @abstractmethod
    def find_active_by_unique_key(self, centre_id: str, code: str) -> Location | None:
        """Find the active location of a centre carrying the given code."""
        pass

    @abstractmethod
    def find_active_by_centre(self, centre_id: str) -> list[Location]:
        pass
