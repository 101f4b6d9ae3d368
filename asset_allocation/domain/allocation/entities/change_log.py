"""Change log entry: an immutable record of one mutation."""

from datetime import datetime
from typing import Any

from pydantic import Field

from ...shared.base import Entity, ValueObject, utc_now
from ..value_objects.enums import ChangeOperation, EntityType


class ChangeLogEntry(ValueObject):
    """
    One append-only audit record.

    The shape is generic (entity type, operation, before/after snapshots) so
    the log can be replayed without knowing the aggregate schemas.
    """

    id: str = Field(min_length=1)
    entity_type: EntityType
    entity_id: str = Field(min_length=1)
    operation: ChangeOperation
    before_state: dict[str, Any] | None = None
    after_state: dict[str, Any]
    timestamp: datetime = Field(default_factory=utc_now)
    actor_ref: str = Field(min_length=1)

    @classmethod
    def capture(
        cls,
        entry_id: str,
        entity_type: EntityType,
        operation: ChangeOperation,
        before: Entity | dict[str, Any] | None,
        after: Entity,
        actor_ref: str,
        timestamp: datetime | None = None,
    ) -> "ChangeLogEntry":
        """Build an entry from entity states taken before and after the mutation."""
        before_state = before.snapshot() if isinstance(before, Entity) else before
        return cls(
            id=entry_id,
            entity_type=entity_type,
            entity_id=after.id,
            operation=operation,
            before_state=before_state,
            after_state=after.snapshot(),
            timestamp=timestamp or utc_now(),
            actor_ref=actor_ref,
        )
