"""Mapper for converting between ChangeLogEntry value objects and change_log rows."""

from asset_allocation.domain.allocation.entities.change_log import ChangeLogEntry
from asset_allocation.domain.allocation.value_objects.enums import (
    ChangeOperation,
    EntityType,
)
from asset_allocation.infrastructure.database.models import ChangeLog as SQLChangeLog

from .common import as_utc


class ChangeLogMapper:
    @staticmethod
    def domain_to_sql(entry: ChangeLogEntry) -> SQLChangeLog:
        return SQLChangeLog(
            id=entry.id,
            entity_type=entry.entity_type.value,
            entity_id=entry.entity_id,
            operation=entry.operation.value,
            before_state=entry.before_state,
            after_state=entry.after_state,
            timestamp=entry.timestamp,
            actor_ref=entry.actor_ref,
        )

    @staticmethod
    def sql_to_domain(sql_entry: SQLChangeLog) -> ChangeLogEntry:
        return ChangeLogEntry(
            id=sql_entry.id,
            entity_type=EntityType(sql_entry.entity_type),
            entity_id=sql_entry.entity_id,
            operation=ChangeOperation(sql_entry.operation),
            before_state=sql_entry.before_state,
            after_state=sql_entry.after_state,
            timestamp=as_utc(sql_entry.timestamp),
            actor_ref=sql_entry.actor_ref,
        )
