"""
API Dependencies

Dependency injection for FastAPI routes: database sessions, management
services bound to the unit of work manager, and the acting party taken from
the ``X-Actor-Ref`` header.
"""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Header
from sqlmodel import Session

from asset_allocation.application.services import (
    AssetManagementService,
    CentreManagementService,
)
from asset_allocation.application.services.base_service import UnitOfWorkFactory
from asset_allocation.core.db import get_engine
from asset_allocation.core.observability import set_actor_ref
from asset_allocation.domain.allocation.value_objects.identifiers import UlidGenerator
from asset_allocation.infrastructure.database.unit_of_work import (
    get_unit_of_work_manager,
)

# One generator per process keeps identifiers monotonic across requests
id_generator = UlidGenerator()


def get_db() -> Generator[Session, None, None]:
    with Session(get_engine()) as session:
        yield session


def get_unit_of_work_factory() -> UnitOfWorkFactory:
    return get_unit_of_work_manager().create_unit_of_work


def get_actor_ref(
    x_actor_ref: Annotated[str | None, Header()] = None,
) -> str | None:
    """Actor recorded in the change log; services fall back to the configured default."""
    actor_ref = x_actor_ref.strip() if x_actor_ref else None
    if actor_ref:
        set_actor_ref(actor_ref)
    return actor_ref or None


SessionDep = Annotated[Session, Depends(get_db)]
UnitOfWorkFactoryDep = Annotated[UnitOfWorkFactory, Depends(get_unit_of_work_factory)]
ActorRefDep = Annotated[str | None, Depends(get_actor_ref)]


def get_centre_service(uow_factory: UnitOfWorkFactoryDep) -> CentreManagementService:
    return CentreManagementService(uow_factory, id_generator=id_generator)


def get_asset_service(uow_factory: UnitOfWorkFactoryDep) -> AssetManagementService:
    return AssetManagementService(uow_factory, id_generator=id_generator)


CentreServiceDep = Annotated[CentreManagementService, Depends(get_centre_service)]
AssetServiceDep = Annotated[AssetManagementService, Depends(get_asset_service)]
