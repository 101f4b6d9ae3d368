"""Allocation of one asset to one location."""

from datetime import datetime

from pydantic import Field

from ...shared.base import Entity, utc_now
from ...shared.exceptions import PreconditionFailedError
from ..value_objects.enums import AllocationStatus


class Allocation(Entity):
    """
    The binding of an asset to a location within a centre.

    Allocations are created and removed, never edited. Removing one retires
    the row (status REMOVED) so it stops counting toward the one-per-asset and
    one-per-location rules while its history is kept.
    """

    asset_id: str = Field(min_length=1)
    centre_id: str = Field(min_length=1)
    location_id: str = Field(min_length=1)
    location_code: str = Field(min_length=1)
    status: AllocationStatus = AllocationStatus.ACTIVE
    allocated_at: datetime = Field(default_factory=utc_now)
    removed_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status is AllocationStatus.ACTIVE

    def is_valid(self) -> bool:
        if self.status is AllocationStatus.REMOVED:
            return self.removed_at is not None
        return self.removed_at is None

    def remove(self, at: datetime | None = None) -> None:
        if not self.is_active:
            raise PreconditionFailedError(
                f"Allocation {self.id} is already removed",
                {"allocation_id": self.id},
            )
        removed_at = at or utc_now()
        self.status = AllocationStatus.REMOVED
        self.removed_at = removed_at
        self.mark_updated(removed_at)
