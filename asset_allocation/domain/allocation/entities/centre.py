"""Shopping centre aggregate root."""

from datetime import datetime

from pydantic import Field

from ...shared.base import Entity
from ...shared.exceptions import PreconditionFailedError
from ..value_objects.address import Address
from ..value_objects.enums import CentreStatus


class Centre(Entity):
    """
    A shopping centre hosting display locations.

    Centres are never physically removed. ``soft_delete`` flips the status to
    DELETED; the management service cascades that to the centre's locations.
    """

    name: str = Field(min_length=1)
    address: Address
    status: CentreStatus = CentreStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is CentreStatus.ACTIVE

    @property
    def is_deleted(self) -> bool:
        return self.status is CentreStatus.DELETED

    def is_valid(self) -> bool:
        return bool(self.name.strip()) and all(
            getattr(self.address, field).strip()
            for field in Address.REQUIRED_FIELDS
        )

    def set_active(self, active: bool, at: datetime | None = None) -> None:
        if self.is_deleted:
            raise PreconditionFailedError(
                f"Centre {self.id} is deleted", {"centre_id": self.id}
            )
        self.status = CentreStatus.ACTIVE if active else CentreStatus.INACTIVE
        self.mark_updated(at)

    def soft_delete(self, at: datetime | None = None) -> None:
        if self.is_deleted:
            raise PreconditionFailedError(
                f"Centre {self.id} is already deleted", {"centre_id": self.id}
            )
        self.status = CentreStatus.DELETED
        self.mark_updated(at)
