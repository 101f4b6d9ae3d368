"""
Change log repository implementation.

Insert-only: there is no update or delete path.
"""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from asset_allocation.domain.allocation.entities.change_log import ChangeLogEntry
from asset_allocation.domain.allocation.repositories.change_log_repository import (
    ChangeLogRepository,
)
from asset_allocation.domain.allocation.value_objects.enums import EntityType
from asset_allocation.domain.shared.exceptions import ConstraintViolationError
from asset_allocation.infrastructure.database.models import ChangeLog

from .base import DatabaseError, constraint_name_from_error
from .mappers import ChangeLogMapper


class SqlChangeLogRepository(ChangeLogRepository):
    def __init__(self, session: Session):
        self.session = session

    def append(self, entry: ChangeLogEntry) -> ChangeLogEntry:
        """
        Insert one entry in the caller's transaction.

        Raises:
            ConstraintViolationError: If the entry id is already in use
            DatabaseError: If database operation fails
        """
        try:
            self.session.add(ChangeLogMapper.domain_to_sql(entry))
            self.session.flush()
        except IntegrityError as e:
            raise ConstraintViolationError(
                f"Change log entry rejected: {str(e.orig)}",
                constraint_name_from_error(e),
            ) from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error appending change log entry: {str(e)}") from e
        return entry

    def find_by_entity(
        self, entity_type: EntityType, entity_id: str
    ) -> list[ChangeLogEntry]:
        statement = (
            select(ChangeLog)
            .where(
                ChangeLog.entity_type == entity_type.value,
                ChangeLog.entity_id == entity_id,
            )
            .order_by(ChangeLog.id)
        )
        try:
            records = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Error reading change log for {entity_type.value} {entity_id}: {str(e)}"
            ) from e
        return [ChangeLogMapper.sql_to_domain(record) for record in records]
