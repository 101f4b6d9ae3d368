"""
Change Log Repository Interface

Append-only store of change log entries.
"""

from abc import ABC, abstractmethod

from ..entities.change_log import ChangeLogEntry
from ..value_objects.enums import EntityType


class ChangeLogRepository(ABC):
    """Insert-only access to the change log. Entries are never updated or deleted."""

    @abstractmethod
    def append(self, entry: ChangeLogEntry) -> ChangeLogEntry:
        pass

    @abstractmethod
    def find_by_entity(
        self, entity_type: EntityType, entity_id: str
    ) -> list[ChangeLogEntry]:
        """Entries for one entity in recording order."""
        pass
