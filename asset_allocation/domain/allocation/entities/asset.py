"""Display panel asset."""

from datetime import datetime

from pydantic import Field

from ...shared.base import Entity
from ...shared.exceptions import PreconditionFailedError
from ..value_objects.dimensions import Dimensions
from ..value_objects.enums import AssetStatus


class Asset(Entity):
    """
    A physical display panel.

    An asset does not own its allocation. The current allocation, if any, is
    looked up through the allocation repository by asset id.
    """

    name: str = Field(min_length=1)
    dimensions: Dimensions
    status: AssetStatus = AssetStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is AssetStatus.ACTIVE

    @property
    def is_deleted(self) -> bool:
        return self.status is AssetStatus.DELETED

    def is_valid(self) -> bool:
        return bool(self.name.strip())

    def _ensure_not_deleted(self) -> None:
        if self.is_deleted:
            raise PreconditionFailedError(
                f"Asset {self.id} is deleted", {"asset_id": self.id}
            )

    def set_active(self, active: bool, at: datetime | None = None) -> None:
        self._ensure_not_deleted()
        self.status = AssetStatus.ACTIVE if active else AssetStatus.INACTIVE
        self.mark_updated(at)

    def soft_delete(self, at: datetime | None = None) -> None:
        self._ensure_not_deleted()
        self.status = AssetStatus.DELETED
        self.mark_updated(at)
