"""Tests for AssetManagementService allocation rules."""

import pytest

from asset_allocation.domain.allocation.value_objects.enums import (
    AllocationStatus,
    AssetStatus,
    ChangeOperation,
    EntityType,
)
from asset_allocation.domain.shared.exceptions import (
    ConflictError,
    MultipleValidationError,
    NotFoundError,
    PreconditionFailedError,
    ValidationError,
)
from asset_allocation.tests.utils.payloads import asset_fields, centre_fields


@pytest.fixture
def centre(centre_service):
    centre = centre_service.create_centre(centre_fields(name="C1"))
    centre_service.add_location(centre.id, "L234")
    centre_service.add_location(centre.id, "L235")
    return centre


class TestAssetLifecycle:
    def test_create_and_log(self, asset_service, change_log_for):
        asset = asset_service.create_asset(asset_fields())

        assert asset.status is AssetStatus.ACTIVE
        assert asset.dimensions.length == 1.2
        entries = change_log_for(EntityType.ASSET, asset.id)
        assert [entry.operation for entry in entries] == [ChangeOperation.CREATE]

    def test_invalid_dimensions_report_every_field(self, asset_service):
        with pytest.raises(MultipleValidationError) as exc_info:
            asset_service.create_asset(asset_fields(length=0, depth=-1))

        assert sorted(exc_info.value.fields) == ["depth", "length"]

    def test_dimension_beyond_float_range_is_validation_error(
        self, asset_service, change_log_count
    ):
        with pytest.raises(MultipleValidationError) as exc_info:
            asset_service.create_asset(asset_fields(length=10**400))

        assert exc_info.value.fields == ["length"]
        assert change_log_count() == 0

    def test_update_merges_patch(self, asset_service):
        asset = asset_service.create_asset(asset_fields())

        updated = asset_service.update_asset(asset.id, {"depth": 0.1})

        assert updated.dimensions.depth == 0.1
        assert updated.dimensions.length == 1.2
        assert asset_service.get_asset(asset.id).dimensions.depth == 0.1

    def test_delete_hides_asset(self, asset_service):
        asset = asset_service.create_asset(asset_fields())

        asset_service.delete_asset(asset.id)

        with pytest.raises(NotFoundError):
            asset_service.get_asset(asset.id)
        assert asset_service.list_assets() == []
        assert len(asset_service.list_assets(include_deleted=True)) == 1


class TestAllocate:
    def test_allocate_records_location_code(self, asset_service, centre, change_log_for):
        asset = asset_service.create_asset(asset_fields())

        allocation = asset_service.allocate(asset.id, centre.id, " L234 ")

        assert allocation.location_code == "L234"
        assert allocation.status is AllocationStatus.ACTIVE
        assert asset_service.get_allocation(asset.id).id == allocation.id
        entries = change_log_for(EntityType.ALLOCATION, allocation.id)
        assert entries[0].operation is ChangeOperation.CREATE

    def test_second_allocation_conflicts_and_keeps_first(self, asset_service, centre):
        asset = asset_service.create_asset(asset_fields())
        first = asset_service.allocate(asset.id, centre.id, "L234")

        with pytest.raises(ConflictError):
            asset_service.allocate(asset.id, centre.id, "L235")

        assert asset_service.get_allocation(asset.id).id == first.id

    def test_occupied_location_needs_inactive_occupant(self, asset_service, centre):
        first = asset_service.create_asset(asset_fields(name="A"))
        second = asset_service.create_asset(asset_fields(name="B"))
        asset_service.allocate(first.id, centre.id, "L234")

        with pytest.raises(PreconditionFailedError):
            asset_service.allocate(second.id, centre.id, "L234")

        asset_service.update_asset(first.id, {"active": False})
        allocation = asset_service.allocate(second.id, centre.id, "L234")

        assert allocation.asset_id == second.id
        assert asset_service.get_allocation(first.id) is None

    def test_missing_location_code_is_validation_error(self, asset_service, centre):
        asset = asset_service.create_asset(asset_fields())

        with pytest.raises(ValidationError) as exc_info:
            asset_service.allocate(asset.id, centre.id, "  ")

        assert exc_info.value.field_name == "location_code"

    def test_unknown_location_code(self, asset_service, centre):
        asset = asset_service.create_asset(asset_fields())

        with pytest.raises(PreconditionFailedError):
            asset_service.allocate(asset.id, centre.id, "L999")

    def test_inactive_asset_cannot_be_allocated(self, asset_service, centre):
        asset = asset_service.create_asset(asset_fields(active=False))

        with pytest.raises(PreconditionFailedError):
            asset_service.allocate(asset.id, centre.id, "L234")

    def test_inactive_centre_cannot_take_allocations(
        self, asset_service, centre_service, centre
    ):
        asset = asset_service.create_asset(asset_fields())
        centre_service.update_centre(centre.id, {"active": False})

        with pytest.raises(PreconditionFailedError):
            asset_service.allocate(asset.id, centre.id, "L234")

    def test_unknown_asset_is_not_found(self, asset_service, centre):
        with pytest.raises(NotFoundError):
            asset_service.allocate("missing", centre.id, "L234")


class TestDeallocate:
    def test_round_trip(self, asset_service, centre):
        asset = asset_service.create_asset(asset_fields())
        asset_service.allocate(asset.id, centre.id, "L234")

        removed = asset_service.deallocate(asset.id)
        again = asset_service.allocate(asset.id, centre.id, "L234")

        assert removed.status is AllocationStatus.REMOVED
        assert removed.removed_at is not None
        assert again.id != removed.id

    def test_unallocated_asset_returns_none(self, asset_service, change_log_count):
        asset = asset_service.create_asset(asset_fields())
        entries_before = change_log_count()

        assert asset_service.deallocate(asset.id) is None
        assert change_log_count() == entries_before

    def test_deactivation_removes_allocation(self, asset_service, centre, change_log_for):
        asset = asset_service.create_asset(asset_fields())
        allocation = asset_service.allocate(asset.id, centre.id, "L234")

        updated = asset_service.update_asset(asset.id, {"active": False})

        assert updated.status is AssetStatus.INACTIVE
        assert asset_service.get_allocation(asset.id) is None
        log = change_log_for(EntityType.ALLOCATION, allocation.id)
        assert [entry.operation for entry in log] == [
            ChangeOperation.CREATE,
            ChangeOperation.DELETE,
        ]

    def test_reactivation_does_not_restore_allocation(self, asset_service, centre):
        asset = asset_service.create_asset(asset_fields())
        asset_service.allocate(asset.id, centre.id, "L234")
        asset_service.update_asset(asset.id, {"active": False})

        asset_service.update_asset(asset.id, {"active": True})

        assert asset_service.get_allocation(asset.id) is None

    def test_delete_asset_removes_allocation(self, asset_service, centre):
        asset = asset_service.create_asset(asset_fields())
        other = asset_service.create_asset(asset_fields(name="Other"))
        asset_service.allocate(asset.id, centre.id, "L234")

        asset_service.delete_asset(asset.id)

        assert asset_service.allocate(other.id, centre.id, "L234").asset_id == other.id

    def test_removed_location_frees_asset(self, asset_service, centre_service, centre):
        asset = asset_service.create_asset(asset_fields())
        allocation = asset_service.allocate(asset.id, centre.id, "L234")

        centre_service.remove_location(centre.id, allocation.location_id)

        assert asset_service.get_allocation(asset.id) is None
        assert asset_service.allocate(asset.id, centre.id, "L235").location_code == "L235"

    def test_code_change_keeps_historical_code(self, asset_service, centre_service, centre):
        asset = asset_service.create_asset(asset_fields())
        allocation = asset_service.allocate(asset.id, centre.id, "L234")

        centre_service.update_location(centre.id, allocation.location_id, {"code": "L300"})

        current = asset_service.get_allocation(asset.id)
        assert current.location_id == allocation.location_id
        assert current.location_code == "L234"
