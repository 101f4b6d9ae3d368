from collections.abc import Callable, Generator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine, func, select

from asset_allocation.application.services import (
    AssetManagementService,
    CentreManagementService,
)
from asset_allocation.core.db import create_session_factory, init_db
from asset_allocation.domain.allocation.entities.change_log import ChangeLogEntry
from asset_allocation.domain.allocation.value_objects.enums import EntityType
from asset_allocation.domain.allocation.value_objects.identifiers import UlidGenerator
from asset_allocation.infrastructure.database.models import ChangeLog
from asset_allocation.infrastructure.database.repositories import (
    SqlChangeLogRepository,
)
from asset_allocation.infrastructure.database.unit_of_work import UnitOfWorkManager

TEST_ACTOR = "test-suite"


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite database carrying the full schema, partial indexes included."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> Callable[[], Session]:
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory: Callable[[], Session]) -> Generator[Session, None, None]:
    with session_factory() as session:
        yield session


@pytest.fixture
def uow_manager(session_factory: Callable[[], Session]) -> UnitOfWorkManager:
    return UnitOfWorkManager(session_factory)


@pytest.fixture
def id_generator() -> UlidGenerator:
    return UlidGenerator()


@pytest.fixture
def centre_service(
    uow_manager: UnitOfWorkManager, id_generator: UlidGenerator
) -> CentreManagementService:
    return CentreManagementService(
        uow_manager.create_unit_of_work,
        id_generator=id_generator,
        default_actor_ref=TEST_ACTOR,
    )


@pytest.fixture
def asset_service(
    uow_manager: UnitOfWorkManager, id_generator: UlidGenerator
) -> AssetManagementService:
    return AssetManagementService(
        uow_manager.create_unit_of_work,
        id_generator=id_generator,
        default_actor_ref=TEST_ACTOR,
    )


@pytest.fixture
def change_log_for(
    session_factory: Callable[[], Session],
) -> Callable[[EntityType, str], list[ChangeLogEntry]]:
    """Read committed change log entries for one entity."""

    def read(entity_type: EntityType, entity_id: str) -> list[ChangeLogEntry]:
        with session_factory() as session:
            return SqlChangeLogRepository(session).find_by_entity(entity_type, entity_id)

    return read


@pytest.fixture
def change_log_count(session_factory: Callable[[], Session]) -> Callable[[], int]:
    def count() -> int:
        with session_factory() as session:
            return session.exec(select(func.count()).select_from(ChangeLog)).one()

    return count
