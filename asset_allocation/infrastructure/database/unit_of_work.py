"""
Unit of work over one SQLModel session.

One unit of work is one database transaction. Every repository it exposes
shares its session, so a mutation and the change log entries describing it
commit together or not at all.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from asset_allocation.core.db import create_session_factory, get_engine
from asset_allocation.domain.allocation.repositories import (
    AllocationRepository,
    AssetRepository,
    CentreRepository,
    ChangeLogRepository,
    LocationRepository,
)

from .repositories import (
    DatabaseError,
    SqlAllocationRepository,
    SqlAssetRepository,
    SqlCentreRepository,
    SqlChangeLogRepository,
    SqlLocationRepository,
)

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


class UnitOfWorkInterface(ABC):
    """
    Transaction boundary seen by the management services.

    Repositories are available only between ``__enter__`` and ``__exit__``.
    """

    centres: CentreRepository
    locations: LocationRepository
    assets: AssetRepository
    allocations: AllocationRepository
    change_log: ChangeLogRepository

    @abstractmethod
    def __enter__(self) -> "UnitOfWorkInterface":
        pass

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass


class SqlModelUnitOfWork(UnitOfWorkInterface):
    """
    Unit of work backed by a SQLModel session.

    Leaving the context commits when the block completed normally and rolls
    back when it raised. A failed commit is rolled back and re-raised as
    DatabaseError.
    """

    def __init__(self, session_factory: SessionFactory | None = None):
        """
        Args:
            session_factory: Opens the session for each transaction. Defaults
                to sessions on the process-wide engine.
        """
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> "SqlModelUnitOfWork":
        factory = self._session_factory or create_session_factory(get_engine())
        self._session = factory()
        self._bind_repositories(self._session)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            if exc_type is not None:
                logger.warning("Rolling back transaction after %s", exc_type.__name__)
                try:
                    self.rollback()
                except DatabaseError:
                    # The original exception propagates once __exit__ returns
                    logger.exception("Rollback failed after %s", exc_type.__name__)
            else:
                self.commit()
        finally:
            if self._session is not None:
                self._session.close()
                self._session = None

    def commit(self) -> None:
        """
        Raises:
            DatabaseError: If there is no open session or the commit fails
        """
        session = self.session
        try:
            session.commit()
            logger.debug("Transaction committed")
        except SQLAlchemyError as e:
            logger.warning("Commit failed, rolling back: %s", e)
            self.rollback()
            raise DatabaseError(f"Commit failed: {str(e)}") from e

    def rollback(self) -> None:
        session = self.session
        try:
            session.rollback()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Rollback failed: {str(e)}") from e

    def _bind_repositories(self, session: Session) -> None:
        self.centres = SqlCentreRepository(session)
        self.locations = SqlLocationRepository(session)
        self.assets = SqlAssetRepository(session)
        self.allocations = SqlAllocationRepository(session)
        self.change_log = SqlChangeLogRepository(session)

    @property
    def session(self) -> Session:
        """The open session. Raises DatabaseError outside the context."""
        if self._session is None:
            raise DatabaseError("Unit of work has no open session")
        return self._session


class UnitOfWorkManager:
    """Creates units of work bound to one session factory."""

    def __init__(self, session_factory: SessionFactory | None = None):
        self._session_factory = session_factory

    def create_unit_of_work(self) -> UnitOfWorkInterface:
        return SqlModelUnitOfWork(self._session_factory)

    @contextmanager
    def transaction(self) -> Iterator[UnitOfWorkInterface]:
        """
        Open a unit of work for the duration of a ``with`` block.

        Usage:
            with uow_manager.transaction() as uow:
                asset = uow.assets.get_for_update(asset_id)
                asset.set_active(False)
                uow.assets.save(asset)
        """
        with self.create_unit_of_work() as uow:
            yield uow


_manager: UnitOfWorkManager | None = None


def get_unit_of_work_manager() -> UnitOfWorkManager:
    global _manager
    if _manager is None:
        _manager = UnitOfWorkManager()
    return _manager


def configure_unit_of_work(
    session_factory: SessionFactory | None = None,
) -> UnitOfWorkManager:
    """Replace the process-wide manager, e.g. to bind it to a test engine."""
    global _manager
    _manager = UnitOfWorkManager(session_factory)
    return _manager
