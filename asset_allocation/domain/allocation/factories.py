"""
Entity Factories

Factories build fully formed Centre, Location, Asset and Allocation entities
from already-parsed field mappings. They never touch persistence: identities
come from the injected IdentifierGenerator and timestamps from the injected
clock. Validation collects every violated rule before raising, so a caller
sees all problems with its input at once.
"""

import math
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from ..shared.base import utc_now
from ..shared.exceptions import MultipleValidationError, ValidationError
from .entities.allocation import Allocation
from .entities.asset import Asset
from .entities.centre import Centre
from .entities.location import LOCATION_CODE_MAX_LENGTH, Location
from .value_objects.address import Address
from .value_objects.dimensions import Dimensions
from .value_objects.enums import AssetStatus, CentreStatus
from .value_objects.identifiers import IdentifierGenerator

Fields = Mapping[str, Any]


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _check_unknown(
    fields: Fields, allowed: Iterable[str], errors: list[ValidationError], prefix: str = ""
) -> None:
    allowed = set(allowed)
    for key in fields:
        if key not in allowed:
            errors.append(
                ValidationError(f"{prefix}{key}", fields[key], "unknown field", "UNKNOWN_FIELD")
            )


def _require_text(
    fields: Fields, name: str, errors: list[ValidationError], label: str | None = None
) -> None:
    value = fields.get(name)
    if _is_blank(value):
        errors.append(
            ValidationError(label or name, value, "is required", "REQUIRED")
        )


def _optional_text(
    fields: Fields, name: str, errors: list[ValidationError], label: str | None = None
) -> None:
    value = fields.get(name)
    if value is not None and not isinstance(value, str):
        errors.append(
            ValidationError(label or name, value, "must be a string", "INVALID_TYPE")
        )


def _optional_bool(fields: Fields, name: str, errors: list[ValidationError]) -> None:
    value = fields.get(name)
    if value is not None and not isinstance(value, bool):
        errors.append(ValidationError(name, value, "must be a boolean", "INVALID_TYPE"))


def _require_positive_number(
    fields: Fields, name: str, errors: list[ValidationError]
) -> None:
    value = fields.get(name)
    if value is None:
        errors.append(ValidationError(name, value, "is required", "REQUIRED"))
        return
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        errors.append(ValidationError(name, value, "must be a number", "INVALID_TYPE"))
        return

    # Ints beyond float range and signalling NaNs cannot be stored as a dimension
    try:
        number = float(value)
    except (OverflowError, ValueError):
        errors.append(
            ValidationError(name, value, "must be a finite number", "NOT_FINITE")
        )
        return
    if not math.isfinite(number) or number <= 0:
        errors.append(
            ValidationError(name, value, "must be a positive number", "NOT_POSITIVE")
        )


def _raise_if_any(errors: list[ValidationError]) -> None:
    if errors:
        raise MultipleValidationError(errors)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _patched_flag(patch: Fields, name: str, current: bool) -> Any:
    value = patch.get(name)
    return current if value is None else value


class EntityFactory:
    """Shared construction dependencies for the domain factories."""

    def __init__(
        self,
        id_generator: IdentifierGenerator,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._id_generator = id_generator
        self._clock = clock


class CentreFactory(EntityFactory):
    FIELDS = ("name", "address", "active")
    ADDRESS_FIELDS = ("line_one", "line_two", "city", "state", "postal_code", "country")

    def validate(self, fields: Fields) -> list[ValidationError]:
        """Return every rule the centre fields break."""
        errors: list[ValidationError] = []
        _check_unknown(fields, self.FIELDS, errors)
        _require_text(fields, "name", errors)
        _optional_bool(fields, "active", errors)

        address = fields.get("address")
        if not isinstance(address, Mapping):
            errors.append(
                ValidationError("address", address, "is required", "REQUIRED")
            )
            return errors

        _check_unknown(address, self.ADDRESS_FIELDS, errors, prefix="address.")
        for name in Address.REQUIRED_FIELDS:
            _require_text(address, name, errors, label=f"address.{name}")
        _optional_text(address, "line_two", errors, label="address.line_two")
        return errors

    def create(self, fields: Fields) -> Centre:
        _raise_if_any(self.validate(fields))
        now = self._clock()
        return Centre(
            id=self._id_generator.next(),
            name=fields["name"].strip(),
            address=self._build_address(fields["address"]),
            status=(
                CentreStatus.ACTIVE
                if fields.get("active") is not False
                else CentreStatus.INACTIVE
            ),
            created_at=now,
        )

    def apply_patch(self, centre: Centre, patch: Fields) -> Centre:
        """Merge a partial update over the centre and re-validate the result."""
        current_address = centre.address.model_dump()
        patch_address = patch.get("address")
        if isinstance(patch_address, Mapping):
            merged_address: Any = {**current_address, **patch_address}
        elif "address" in patch:
            merged_address = patch_address
        else:
            merged_address = current_address

        merged = {
            "name": patch.get("name", centre.name),
            "address": merged_address,
            "active": _patched_flag(patch, "active", centre.is_active),
        }
        errors: list[ValidationError] = []
        _check_unknown(patch, self.FIELDS, errors)
        errors.extend(self.validate(merged))
        _raise_if_any(errors)

        return Centre(
            id=centre.id,
            name=merged["name"].strip(),
            address=self._build_address(merged["address"]),
            status=CentreStatus.ACTIVE if merged["active"] else CentreStatus.INACTIVE,
            created_at=centre.created_at,
            updated_at=self._clock(),
        )

    @staticmethod
    def _build_address(address: Fields) -> Address:
        return Address(
            line_one=address["line_one"].strip(),
            line_two=_clean(address.get("line_two")),
            city=address["city"].strip(),
            state=address["state"].strip(),
            postal_code=address["postal_code"].strip(),
            country=address["country"].strip(),
        )


class LocationFactory(EntityFactory):
    FIELDS = ("code", "description")

    def validate(self, fields: Fields) -> list[ValidationError]:
        errors: list[ValidationError] = []
        _check_unknown(fields, self.FIELDS, errors)
        _require_text(fields, "code", errors)
        code = fields.get("code")
        if not _is_blank(code) and len(code.strip()) > LOCATION_CODE_MAX_LENGTH:
            errors.append(
                ValidationError(
                    "code",
                    code,
                    f"must be at most {LOCATION_CODE_MAX_LENGTH} characters",
                    "TOO_LONG",
                )
            )
        _optional_text(fields, "description", errors)
        return errors

    def create(self, centre_id: str, fields: Fields) -> Location:
        errors = self.validate(fields)
        if _is_blank(centre_id):
            errors.append(ValidationError("centre_id", centre_id, "is required", "REQUIRED"))
        _raise_if_any(errors)
        return Location(
            id=self._id_generator.next(),
            centre_id=centre_id,
            code=fields["code"].strip(),
            description=_clean(fields.get("description")),
            created_at=self._clock(),
        )

    def apply_patch(self, location: Location, patch: Fields) -> Location:
        merged = {
            "code": patch.get("code", location.code),
            "description": patch.get("description", location.description),
        }
        errors: list[ValidationError] = []
        _check_unknown(patch, self.FIELDS, errors)
        errors.extend(self.validate(merged))
        _raise_if_any(errors)

        return location.model_copy(
            update={
                "code": merged["code"].strip(),
                "description": _clean(merged["description"]),
                "updated_at": self._clock(),
            }
        )


class AssetFactory(EntityFactory):
    FIELDS = ("name", "length", "breadth", "depth", "active")
    DIMENSION_FIELDS = ("length", "breadth", "depth")

    def validate(self, fields: Fields) -> list[ValidationError]:
        errors: list[ValidationError] = []
        _check_unknown(fields, self.FIELDS, errors)
        _require_text(fields, "name", errors)
        for name in self.DIMENSION_FIELDS:
            _require_positive_number(fields, name, errors)
        _optional_bool(fields, "active", errors)
        return errors

    def create(self, fields: Fields) -> Asset:
        _raise_if_any(self.validate(fields))
        return Asset(
            id=self._id_generator.next(),
            name=fields["name"].strip(),
            dimensions=self._build_dimensions(fields),
            status=(
                AssetStatus.ACTIVE
                if fields.get("active") is not False
                else AssetStatus.INACTIVE
            ),
            created_at=self._clock(),
        )

    def apply_patch(self, asset: Asset, patch: Fields) -> Asset:
        merged = {
            "name": patch.get("name", asset.name),
            "length": patch.get("length", asset.dimensions.length),
            "breadth": patch.get("breadth", asset.dimensions.breadth),
            "depth": patch.get("depth", asset.dimensions.depth),
            "active": _patched_flag(patch, "active", asset.is_active),
        }
        errors: list[ValidationError] = []
        _check_unknown(patch, self.FIELDS, errors)
        errors.extend(self.validate(merged))
        _raise_if_any(errors)

        return Asset(
            id=asset.id,
            name=merged["name"].strip(),
            dimensions=self._build_dimensions(merged),
            status=AssetStatus.ACTIVE if merged["active"] else AssetStatus.INACTIVE,
            created_at=asset.created_at,
            updated_at=self._clock(),
        )

    @staticmethod
    def _build_dimensions(fields: Fields) -> Dimensions:
        return Dimensions(
            length=float(fields["length"]),
            breadth=float(fields["breadth"]),
            depth=float(fields["depth"]),
        )


class AllocationFactory(EntityFactory):
    def create(
        self, asset_id: str, centre_id: str, location_id: str, location_code: str
    ) -> Allocation:
        """
        Build an active allocation.

        Only presence of the references is checked here. Whether the location
        exists and is free is decided by the asset management service, which
        has repository access.
        """
        fields = {
            "asset_id": asset_id,
            "centre_id": centre_id,
            "location_id": location_id,
            "location_code": location_code,
        }
        errors: list[ValidationError] = []
        for name in fields:
            _require_text(fields, name, errors)
        _raise_if_any(errors)

        now = self._clock()
        return Allocation(
            id=self._id_generator.next(),
            asset_id=asset_id,
            centre_id=centre_id,
            location_id=location_id,
            location_code=location_code.strip(),
            allocated_at=now,
            created_at=now,
        )
