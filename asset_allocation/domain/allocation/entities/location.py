"""Location within a shopping centre."""

from datetime import datetime

from pydantic import Field

from ...shared.base import Entity
from ...shared.exceptions import PreconditionFailedError
from ..value_objects.enums import LocationStatus

LOCATION_CODE_MAX_LENGTH = 32


class Location(Entity):
    """A slot inside one centre where a single asset may be installed."""

    centre_id: str = Field(min_length=1)
    code: str = Field(min_length=1, max_length=LOCATION_CODE_MAX_LENGTH)
    description: str | None = None
    status: LocationStatus = LocationStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is LocationStatus.ACTIVE

    def belongs_to(self, centre_id: str) -> bool:
        return self.centre_id == centre_id

    def is_valid(self) -> bool:
        return bool(self.code.strip()) and bool(self.centre_id)

    def soft_delete(self, at: datetime | None = None) -> None:
        if not self.is_active:
            raise PreconditionFailedError(
                f"Location {self.id} is already deleted", {"location_id": self.id}
            )
        self.status = LocationStatus.DELETED
        self.mark_updated(at)
