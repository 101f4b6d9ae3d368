"""
Change Log Recorder

Appends one immutable entry per affected entity for every mutating management
operation. Entries go through the change log repository of the caller's unit
of work, so they commit or roll back together with the mutation they describe.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from ...shared.base import DomainService, Entity, utc_now
from ..entities.change_log import ChangeLogEntry
from ..repositories.change_log_repository import ChangeLogRepository
from ..value_objects.enums import ChangeOperation, EntityType
from ..value_objects.identifiers import IdentifierGenerator


class ChangeLogRecorder(DomainService):
    """Append-only writer bound to one unit of work's change log repository."""

    def __init__(
        self,
        repository: ChangeLogRepository,
        id_generator: IdentifierGenerator,
        actor_ref: str,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repository = repository
        self._id_generator = id_generator
        self._actor_ref = actor_ref
        self._clock = clock
        self._recorded: list[ChangeLogEntry] = []

    def record(self, entry: ChangeLogEntry) -> ChangeLogEntry:
        """Append an entry. Failures surface as failure of the shared transaction."""
        stored = self._repository.append(entry)
        self._recorded.append(stored)
        return stored

    def record_change(
        self,
        entity_type: EntityType,
        operation: ChangeOperation,
        before: dict[str, Any] | None,
        after: Entity,
    ) -> ChangeLogEntry:
        return self.record(
            ChangeLogEntry.capture(
                entry_id=self._id_generator.next(),
                entity_type=entity_type,
                operation=operation,
                before=before,
                after=after,
                actor_ref=self._actor_ref,
                timestamp=self._clock(),
            )
        )

    def created(self, entity_type: EntityType, entity: Entity) -> ChangeLogEntry:
        return self.record_change(entity_type, ChangeOperation.CREATE, None, entity)

    def updated(
        self, entity_type: EntityType, before: dict[str, Any], entity: Entity
    ) -> ChangeLogEntry:
        return self.record_change(entity_type, ChangeOperation.UPDATE, before, entity)

    def deleted(
        self, entity_type: EntityType, before: dict[str, Any], entity: Entity
    ) -> ChangeLogEntry:
        return self.record_change(entity_type, ChangeOperation.DELETE, before, entity)

    @property
    def recorded(self) -> list[ChangeLogEntry]:
        """Entries appended through this recorder, in order."""
        return list(self._recorded)
