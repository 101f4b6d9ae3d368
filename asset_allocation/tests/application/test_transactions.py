"""
Atomicity and race handling of the management services.

A concurrent writer is simulated by hiding the conflicting row from the
service's own pre-check, so only the database's unique indexes stand between
the operation and a broken invariant.
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from asset_allocation.application.services import CentreManagementService
from asset_allocation.domain.shared.exceptions import (
    ConflictError,
    IdentifierCollisionError,
    PreconditionFailedError,
    TransactionFailureError,
)
from asset_allocation.infrastructure.database.repositories import (
    DatabaseError,
    SqlAllocationRepository,
    SqlCentreRepository,
    SqlChangeLogRepository,
    SqlLocationRepository,
)
from asset_allocation.tests.conftest import TEST_ACTOR
from asset_allocation.tests.utils.generators import ScriptedIdGenerator
from asset_allocation.tests.utils.payloads import asset_fields, centre_fields

REUSED_ID = "01HZX0000000000000000000A1"


@pytest.fixture
def centre(centre_service):
    centre = centre_service.create_centre(centre_fields())
    centre_service.add_location(centre.id, "L1")
    centre_service.add_location(centre.id, "L2")
    return centre


class TestRacesHitUniqueIndexes:
    def test_occupied_location_is_precondition_failure(self, asset_service, centre):
        first = asset_service.create_asset(asset_fields(name="A"))
        second = asset_service.create_asset(asset_fields(name="B"))
        asset_service.allocate(first.id, centre.id, "L1")

        with patch.object(
            SqlAllocationRepository, "find_active_by_location", return_value=None
        ):
            with pytest.raises(PreconditionFailedError) as exc_info:
                asset_service.allocate(second.id, centre.id, "L1")

        assert exc_info.value.details["constraint"] == "uq_asset_allocation_active_location"
        assert asset_service.get_allocation(second.id) is None

    def test_double_allocation_is_conflict(self, asset_service, centre):
        asset = asset_service.create_asset(asset_fields())
        first = asset_service.allocate(asset.id, centre.id, "L1")

        with patch.object(
            SqlAllocationRepository, "find_active_by_asset", return_value=None
        ):
            with pytest.raises(ConflictError):
                asset_service.allocate(asset.id, centre.id, "L2")

        assert asset_service.get_allocation(asset.id).id == first.id

    def test_duplicate_centre_name_is_conflict(self, centre_service):
        centre_service.create_centre(centre_fields(name="Plaza"))

        with patch.object(
            SqlCentreRepository, "find_active_by_unique_key", return_value=[]
        ):
            with pytest.raises(ConflictError) as exc_info:
                centre_service.create_centre(centre_fields(name="Plaza", line_one="2 Elm St"))

        assert exc_info.value.details["constraint"] == "uq_shopping_centre_name_live"
        assert len(centre_service.list_centres()) == 1

    def test_duplicate_location_code_is_conflict(self, centre_service, centre):
        with patch.object(
            SqlLocationRepository, "find_active_by_unique_key", return_value=None
        ):
            with pytest.raises(ConflictError):
                centre_service.add_location(centre.id, "L1")

        assert len(centre_service.list_locations(centre.id)) == 2

    def test_reused_identifier_is_collision(self, uow_manager, change_log_count):
        service = CentreManagementService(
            uow_manager.create_unit_of_work,
            id_generator=ScriptedIdGenerator([REUSED_ID, "01HZX0000000000000000000B1", REUSED_ID]),
            default_actor_ref=TEST_ACTOR,
        )
        service.create_centre(centre_fields(name="First"))

        with pytest.raises(IdentifierCollisionError) as exc_info:
            service.create_centre(centre_fields(name="Second", line_one="2 Elm St"))

        assert exc_info.value.retryable is True
        assert change_log_count() == 1


class TestAtomicity:
    def test_failed_change_log_write_undoes_cascade(
        self, centre_service, asset_service, centre, change_log_count
    ):
        asset = asset_service.create_asset(asset_fields())
        asset_service.allocate(asset.id, centre.id, "L1")
        entries_before = change_log_count()

        with patch.object(
            SqlChangeLogRepository, "append", side_effect=DatabaseError("boom")
        ):
            with pytest.raises(TransactionFailureError) as exc_info:
                centre_service.delete_centre(centre.id)

        assert exc_info.value.retryable is True
        assert change_log_count() == entries_before
        assert centre_service.get_centre(centre.id).is_active
        assert len(centre_service.list_locations(centre.id)) == 2
        assert asset_service.get_allocation(asset.id) is not None

    def test_failed_change_log_write_undoes_create(
        self, centre_service, change_log_count
    ):
        with patch.object(
            SqlChangeLogRepository, "append", side_effect=DatabaseError("boom")
        ):
            with pytest.raises(TransactionFailureError):
                centre_service.create_centre(centre_fields())

        assert centre_service.list_centres(include_deleted=True) == []
        assert change_log_count() == 0

    def test_failure_on_last_change_log_write_undoes_flushed_work(
        self, centre_service, asset_service, centre, change_log_count
    ):
        asset = asset_service.create_asset(asset_fields())
        asset_service.allocate(asset.id, centre.id, "L1")
        entries_before = change_log_count()
        real_append = SqlChangeLogRepository.append
        calls = []

        # Allocation, L1 and L2 are recorded before the centre itself
        def fail_on_centre_entry(repository, entry):
            calls.append(entry)
            if len(calls) == 4:
                raise DatabaseError("boom")
            return real_append(repository, entry)

        with patch.object(
            SqlChangeLogRepository,
            "append",
            autospec=True,
            side_effect=fail_on_centre_entry,
        ):
            with pytest.raises(TransactionFailureError):
                centre_service.delete_centre(centre.id)

        assert len(calls) == 4
        assert change_log_count() == entries_before
        assert centre_service.get_centre(centre.id).is_active
        assert len(centre_service.list_locations(centre.id)) == 2
        assert asset_service.get_allocation(asset.id) is not None


class TestDriverFailures:
    def test_unreachable_database_on_lookup_is_transaction_failure(
        self, asset_service, change_log_count
    ):
        with patch.object(
            Session,
            "get",
            side_effect=OperationalError("SELECT", {}, Exception("server closed the connection")),
        ):
            with pytest.raises(TransactionFailureError) as exc_info:
                asset_service.create_asset(asset_fields())

        assert exc_info.value.retryable is True
        assert asset_service.list_assets() == []
        assert change_log_count() == 0

    def test_driver_error_inside_block_is_transaction_failure(self, asset_service):
        with pytest.raises(TransactionFailureError) as exc_info:
            with asset_service._unit_of_work("reassign_asset"):
                raise OperationalError("UPDATE", {}, Exception("deadlock detected"))

        assert exc_info.value.details == {"operation": "reassign_asset"}
