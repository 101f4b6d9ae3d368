"""Tests for the entity factories and their validation rules."""

from datetime import datetime, timezone

import pytest

from asset_allocation.domain.allocation.factories import (
    AllocationFactory,
    AssetFactory,
    CentreFactory,
    LocationFactory,
)
from asset_allocation.domain.allocation.value_objects.enums import (
    AllocationStatus,
    AssetStatus,
    CentreStatus,
    LocationStatus,
)
from asset_allocation.domain.shared.exceptions import (
    ErrorType,
    MultipleValidationError,
    ValidationError,
)
from asset_allocation.tests.utils.generators import ScriptedIdGenerator
from asset_allocation.tests.utils.payloads import (
    address_fields,
    asset_fields,
    centre_fields,
)

CREATED = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
PATCHED = datetime(2024, 3, 2, 9, 0, tzinfo=timezone.utc)


def ids(*values: str) -> ScriptedIdGenerator:
    return ScriptedIdGenerator(values)


class TestCentreFactory:
    def test_create_builds_active_centre(self):
        factory = CentreFactory(ids("C1"), clock=lambda: CREATED)

        centre = factory.create(centre_fields(name="  Westfield  ", line_two="Level 2"))

        assert centre.id == "C1"
        assert centre.name == "Westfield"
        assert centre.status is CentreStatus.ACTIVE
        assert centre.address.line_two == "Level 2"
        assert centre.created_at == CREATED
        assert centre.updated_at is None

    def test_create_inactive_when_active_is_false(self):
        factory = CentreFactory(ids("C1"))
        fields = {**centre_fields(), "active": False}

        assert factory.create(fields).status is CentreStatus.INACTIVE

    def test_create_reports_every_violation(self):
        factory = CentreFactory(ids("C1"))
        fields = {"name": " ", "address": address_fields(city="", country=None)}

        with pytest.raises(MultipleValidationError) as exc_info:
            factory.create(fields)

        assert exc_info.value.fields == ["name", "address.city", "address.country"]
        assert exc_info.value.error_type is ErrorType.VALIDATION

    def test_missing_address_is_reported(self):
        errors = CentreFactory(ids()).validate({"name": "Centre"})

        assert [error.field_name for error in errors] == ["address"]
        assert errors[0].error_code == "REQUIRED"

    def test_unknown_fields_are_rejected(self):
        fields = centre_fields()
        fields["colour"] = "blue"
        fields["address"]["suburb"] = "Haymarket"

        errors = CentreFactory(ids()).validate(fields)

        assert {error.field_name for error in errors} == {"colour", "address.suburb"}
        assert {error.error_code for error in errors} == {"UNKNOWN_FIELD"}

    def test_active_must_be_boolean(self):
        errors = CentreFactory(ids()).validate({**centre_fields(), "active": "yes"})

        assert [(e.field_name, e.error_code) for e in errors] == [
            ("active", "INVALID_TYPE")
        ]

    def test_line_two_is_optional(self):
        assert CentreFactory(ids()).validate(centre_fields()) == []

    def test_patch_merges_address_fields(self):
        ticks = iter([CREATED, PATCHED])
        factory = CentreFactory(ids("C1"), clock=lambda: next(ticks))
        centre = factory.create(centre_fields())

        patched = factory.apply_patch(centre, {"address": {"city": "Melbourne"}})

        assert patched.id == centre.id
        assert patched.address.city == "Melbourne"
        assert patched.address.line_one == centre.address.line_one
        assert patched.created_at == CREATED
        assert patched.updated_at == PATCHED
        assert centre.address.city == "Sydney"

    def test_patch_can_deactivate_and_none_keeps_status(self):
        factory = CentreFactory(ids("C1"))
        centre = factory.create(centre_fields())

        assert factory.apply_patch(centre, {"active": False}).status is (
            CentreStatus.INACTIVE
        )
        assert factory.apply_patch(centre, {"active": None}).status is (
            CentreStatus.ACTIVE
        )

    def test_patch_revalidates_merged_result(self):
        factory = CentreFactory(ids("C1"))
        centre = factory.create(centre_fields())

        with pytest.raises(MultipleValidationError) as exc_info:
            factory.apply_patch(
                centre, {"name": "", "address": {"postal_code": " "}, "rating": 5}
            )

        assert set(exc_info.value.fields) == {"rating", "name", "address.postal_code"}


class TestLocationFactory:
    def test_create_trims_code_and_description(self):
        factory = LocationFactory(ids("L1"))

        location = factory.create("C1", {"code": " L234 ", "description": "  "})

        assert location.code == "L234"
        assert location.description is None
        assert location.centre_id == "C1"
        assert location.status is LocationStatus.ACTIVE

    def test_code_is_required(self):
        with pytest.raises(MultipleValidationError) as exc_info:
            LocationFactory(ids("L1")).create("C1", {"code": ""})

        assert exc_info.value.fields == ["code"]

    def test_code_length_is_limited(self):
        errors = LocationFactory(ids()).validate({"code": "X" * 33})

        assert [error.error_code for error in errors] == ["TOO_LONG"]

    def test_patch_changes_code(self):
        factory = LocationFactory(ids("L1"), clock=lambda: PATCHED)
        location = factory.create("C1", {"code": "L1"})

        patched = factory.apply_patch(location, {"code": "L2"})

        assert patched.id == location.id
        assert patched.code == "L2"
        assert patched.updated_at == PATCHED


class TestAssetFactory:
    def test_create_builds_unallocated_active_asset(self):
        asset = AssetFactory(ids("A1")).create(asset_fields(length=2))

        assert asset.id == "A1"
        assert asset.status is AssetStatus.ACTIVE
        assert asset.dimensions.length == 2.0

    def test_dimension_rules_are_all_reported(self):
        fields = {"name": "", "length": 0, "breadth": True, "depth": float("inf")}

        with pytest.raises(MultipleValidationError) as exc_info:
            AssetFactory(ids("A1")).create(fields)

        codes = {
            error.field_name: error.error_code
            for error in exc_info.value.validation_errors
        }
        assert codes == {
            "name": "REQUIRED",
            "length": "NOT_POSITIVE",
            "breadth": "INVALID_TYPE",
            "depth": "NOT_POSITIVE",
        }

    def test_missing_dimensions_are_required(self):
        errors = AssetFactory(ids()).validate({"name": "Panel"})

        assert [(e.field_name, e.error_code) for e in errors] == [
            ("length", "REQUIRED"),
            ("breadth", "REQUIRED"),
            ("depth", "REQUIRED"),
        ]

    def test_patch_updates_single_dimension(self):
        factory = AssetFactory(ids("A1"))
        asset = factory.create(asset_fields())

        patched = factory.apply_patch(asset, {"depth": 0.1})

        assert patched.dimensions.depth == 0.1
        assert patched.dimensions.length == asset.dimensions.length

    def test_patch_rejects_non_positive_dimension(self):
        factory = AssetFactory(ids("A1"))
        asset = factory.create(asset_fields())

        with pytest.raises(ValidationError):
            factory.apply_patch(asset, {"breadth": -1})

    def test_patch_deactivates(self):
        factory = AssetFactory(ids("A1"))
        asset = factory.create(asset_fields())

        assert factory.apply_patch(asset, {"active": False}).status is (
            AssetStatus.INACTIVE
        )


class TestAllocationFactory:
    def test_create_active_allocation(self):
        allocation = AllocationFactory(ids("X1"), clock=lambda: CREATED).create(
            "A1", "C1", "L1", "L234"
        )

        assert allocation.status is AllocationStatus.ACTIVE
        assert allocation.allocated_at == CREATED
        assert allocation.removed_at is None

    def test_references_are_required(self):
        with pytest.raises(MultipleValidationError) as exc_info:
            AllocationFactory(ids("X1")).create("A1", "", "L1", " ")

        assert exc_info.value.fields == ["centre_id", "location_code"]
