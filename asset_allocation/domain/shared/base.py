"""Base classes for domain entities, repositories and domain services."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True)


class Entity(BaseModel, ABC):
    """Base class for entities (have identity, can change over time)."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime | None = None

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        return hash(self.id)

    def mark_updated(self, at: datetime | None = None) -> None:
        """Mark the entity as updated."""
        self.updated_at = at or utc_now()

    def snapshot(self) -> dict[str, Any]:
        """JSON-compatible copy of the entity state, used for change log entries."""
        return self.model_dump(mode="json")

    @abstractmethod
    def is_valid(self) -> bool:
        """Validate business rules for this entity."""
        pass


EntityT = TypeVar("EntityT", bound=Entity)


class Repository(ABC, Generic[EntityT]):
    """Base repository interface for persistence.

    Implementations work inside the transaction of the unit of work that
    created them and never commit on their own.
    """

    @abstractmethod
    def get(self, entity_id: str) -> EntityT | None:
        """Find an entity by its ID."""
        pass

    @abstractmethod
    def add(self, entity: EntityT) -> EntityT:
        """Insert a new entity. An identifier already in use is a constraint violation."""
        pass

    @abstractmethod
    def save(self, entity: EntityT) -> EntityT:
        """Write back changes to an existing entity."""
        pass


class DomainService(ABC):
    """Base class for domain services (business logic that doesn't belong to a single entity)."""

    pass
