"""
Centre and location Data Transfer Objects.

Request DTOs only fix the JSON shape. Field rules (required values, lengths,
uniqueness) are applied by the domain factories so that every violation is
reported together.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from asset_allocation.domain.allocation.entities.centre import Centre
from asset_allocation.domain.allocation.entities.location import Location


class AddressPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    line_one: str | None = None
    line_two: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


class CreateCentreRequest(BaseModel):
    """DTO for creating a new centre."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "name": "Westfield Parramatta",
                "address": {
                    "line_one": "159-175 Church St",
                    "city": "Parramatta",
                    "state": "NSW",
                    "postal_code": "2150",
                    "country": "Australia",
                },
            }
        },
    )

    name: str | None = None
    address: AddressPayload | None = None
    active: bool | None = None


class UpdateCentreRequest(BaseModel):
    """DTO for patching a centre. Address fields merge over the current address."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    address: AddressPayload | None = None
    active: bool | None = None


class CreateLocationRequest(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"code": "L234", "description": "Level 2 atrium"}},
    )

    code: str | None = None
    description: str | None = Field(None, max_length=500)


class UpdateLocationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str | None = None
    description: str | None = Field(None, max_length=500)


class AddressResponse(BaseModel):
    line_one: str
    line_two: str | None
    city: str
    state: str
    postal_code: str
    country: str


class CentreResponse(BaseModel):
    """DTO for centre response with full details."""

    id: str
    name: str
    address: AddressResponse
    status: str
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, centre: Centre) -> "CentreResponse":
        return cls(
            id=centre.id,
            name=centre.name,
            address=AddressResponse(**centre.address.model_dump()),
            status=centre.status.value,
            created_at=centre.created_at,
            updated_at=centre.updated_at,
        )


class LocationResponse(BaseModel):
    id: str
    centre_id: str
    code: str
    description: str | None
    status: str
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, location: Location) -> "LocationResponse":
        return cls(
            id=location.id,
            centre_id=location.centre_id,
            code=location.code,
            description=location.description,
            status=location.status.value,
            created_at=location.created_at,
            updated_at=location.updated_at,
        )
