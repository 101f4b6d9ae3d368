"""
Centre Repository Interface

Defines the contract for centre data access operations.
"""

from abc import abstractmethod

from ...shared.base import Repository
from ..entities.centre import Centre
from ..value_objects.address import Address


class CentreRepository(Repository[Centre]):
    """
    Abstract repository interface for Centre entities.

    "Live" centres are those not soft-deleted; name and address uniqueness is
    enforced among them.
    """

    @abstractmethod
    def get(self, centre_id: str) -> Centre | None:
        """
        Retrieve a centre by its ID, including soft-deleted ones.

        Args:
            centre_id: Centre identifier

        Returns:
            Centre entity or None if not found
        """
        pass

    @abstractmethod
    def get_for_update(self, centre_id: str) -> Centre | None:
        """Retrieve a centre and lock its row until the transaction ends."""
        pass

    @abstractmethod
    def save(self, centre: Centre) -> Centre:
        """
        Write back changes to an existing centre.

        Raises:
            ConstraintViolationError: If the write breaks a uniqueness constraint
            RepositoryError: If the save operation fails
        """
        pass

    @abstractmethod
    def find_live_by_name(self, name: str) -> Centre | None:
        pass

    @abstractmethod
    def find_live_by_address(self, address: Address) -> Centre | None:
        pass

    def find_active_by_unique_key(
        self, name: str, address: Address
    ) -> list[Centre]:
        """Live centres clashing with either unique key (name or address)."""
        found: list[Centre] = []
        for centre in (self.find_live_by_name(name), self.find_live_by_address(address)):
            if centre is not None and centre not in found:
                found.append(centre)
        return found

    @abstractmethod
    def list_all(self, include_deleted: bool = False) -> list[Centre]:
        pass
