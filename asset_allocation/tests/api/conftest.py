from collections.abc import Callable, Generator
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import Session

from asset_allocation.api.deps import get_db
from asset_allocation.infrastructure.database.unit_of_work import (
    configure_unit_of_work,
    get_unit_of_work_manager,
)
from asset_allocation.main import app


@pytest.fixture
def client(
    engine: Engine, session_factory: Callable[[], Session]
) -> Generator[TestClient, None, None]:
    """Application client bound to the in-memory test database.

    Startup binds the unit of work manager to the engine it is handed, so
    request handlers share the test database without a dependency override.
    """

    def override_get_db() -> Generator[Session, None, None]:
        with session_factory() as session:
            yield session

    previous = get_unit_of_work_manager()
    app.dependency_overrides[get_db] = override_get_db
    try:
        with patch("asset_allocation.main.get_engine", return_value=engine):
            with TestClient(app) as test_client:
                yield test_client
    finally:
        app.dependency_overrides.clear()
        configure_unit_of_work(previous._session_factory)
