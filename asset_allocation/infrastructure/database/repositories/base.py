"""
Base repository implementation shared by the SQLModel repositories.

Concrete repositories map between domain entities and table records, and run
inside the session owned by a unit of work. They flush so that constraint
violations surface at the offending write, but they never commit.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from asset_allocation.domain.shared.base import Entity
from asset_allocation.domain.shared.exceptions import (
    ConstraintViolationError,
    RepositoryError,
)
from asset_allocation.infrastructure.database.models import UNIQUE_INDEX_COLUMNS

RecordT = TypeVar("RecordT", bound=SQLModel)
EntityT = TypeVar("EntityT", bound=Entity)

PRIMARY_KEY_SUFFIX = "_pkey"
_SQLITE_UNIQUE_MARKER = "UNIQUE constraint failed: "


class DatabaseError(RepositoryError):
    """Raised when a database operation fails."""

    pass


class EntityNotFoundError(RepositoryError):
    """Raised when a record expected to exist cannot be found."""

    pass


def constraint_name_from_error(error: IntegrityError) -> str | None:
    """
    Name of the constraint an IntegrityError reports.

    PostgreSQL (psycopg) exposes the name directly. SQLite only lists the
    affected columns, so they are matched against the known unique indexes;
    a bare ``<table>.id`` is the table's primary key.
    """
    original = error.orig
    diag = getattr(original, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return name

    message = str(original)
    if _SQLITE_UNIQUE_MARKER not in message:
        return None
    columns = {
        column.strip()
        for column in message.split(_SQLITE_UNIQUE_MARKER, 1)[1].split(",")
    }
    for index_name, index_columns in UNIQUE_INDEX_COLUMNS.items():
        if columns == set(index_columns):
            return index_name
    if len(columns) == 1:
        (column,) = columns
        table, _, field = column.partition(".")
        if field == "id":
            return f"{table}{PRIMARY_KEY_SUFFIX}"
    return None


class BaseRepository(ABC, Generic[RecordT, EntityT]):
    """
    Base repository class providing get/add/save over one table.

    Subclasses provide the record class and the mapping to and from the
    domain entity.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session owned by the unit of work
        """
        self.session = session

    @property
    @abstractmethod
    def record_class(self) -> type[RecordT]:
        """Return the SQLModel table class managed by this repository."""
        pass

    @abstractmethod
    def to_domain(self, record: RecordT) -> EntityT:
        pass

    @abstractmethod
    def to_record(self, entity: EntityT) -> RecordT:
        pass

    def get(self, entity_id: str) -> EntityT | None:
        """
        Get entity by ID.

        Raises:
            DatabaseError: If database operation fails
        """
        statement = select(self.record_class).where(self.record_class.id == entity_id)
        record = self._first(statement, f"get {entity_id}")
        return self.to_domain(record) if record is not None else None

    def get_for_update(self, entity_id: str) -> EntityT | None:
        """
        Get entity by ID and lock its row until the transaction ends.

        SQLite has no row locks; there the statement degrades to a plain read.
        """
        statement = (
            select(self.record_class)
            .where(self.record_class.id == entity_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        record = self._first(statement, f"lock {entity_id}")
        return self.to_domain(record) if record is not None else None

    def add(self, entity: EntityT) -> EntityT:
        """
        Insert a new entity.

        Raises:
            ConstraintViolationError: If the insert breaks a unique constraint,
                including reuse of an existing primary key
            DatabaseError: If database operation fails
        """
        if self._exists(entity.id, f"insert {entity.id}"):
            table = self.record_class.__tablename__
            raise ConstraintViolationError(
                f"Primary key already in use on {table}: {entity.id}",
                f"{table}{PRIMARY_KEY_SUFFIX}",
            )
        self.session.add(self.to_record(entity))
        self._flush(f"insert {entity.id}")
        return entity

    def save(self, entity: EntityT) -> EntityT:
        """
        Write back changes to an existing entity.

        Raises:
            EntityNotFoundError: If no record carries the entity's ID
            ConstraintViolationError: If the update breaks a unique constraint
            DatabaseError: If database operation fails
        """
        if not self._exists(entity.id, f"update {entity.id}"):
            raise EntityNotFoundError(
                f"{self.record_class.__tablename__} record not found: {entity.id}",
                {"entity_id": entity.id},
            )
        try:
            self.session.merge(self.to_record(entity))
        except SQLAlchemyError as e:
            raise self._database_error(f"update {entity.id}", e) from e
        self._flush(f"update {entity.id}")
        return entity

    def _database_error(self, action: str, error: SQLAlchemyError) -> DatabaseError:
        return DatabaseError(
            f"Database error during {action} on "
            f"{self.record_class.__tablename__}: {str(error)}"
        )

    def _exists(self, entity_id: str, action: str) -> bool:
        try:
            return self.session.get(self.record_class, entity_id) is not None
        except SQLAlchemyError as e:
            raise self._database_error(action, e) from e

    def _first(self, statement: Any, action: str) -> RecordT | None:
        try:
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise self._database_error(action, e) from e

    def _all(self, statement: Any, action: str) -> list[RecordT]:
        try:
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise self._database_error(action, e) from e

    def _flush(self, action: str) -> None:
        try:
            self.session.flush()
        except IntegrityError as e:
            constraint = constraint_name_from_error(e)
            raise ConstraintViolationError(
                f"Constraint violated during {action} on "
                f"{self.record_class.__tablename__}: {constraint or str(e.orig)}",
                constraint,
            ) from e
        except SQLAlchemyError as e:
            raise self._database_error(action, e) from e
