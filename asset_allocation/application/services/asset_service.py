"""
Asset management service.

Coordinates asset lifecycle and allocation use cases. An asset holds at most
one active allocation, and a location hosts at most one; both rules are
checked here against the current state and backed by unique indexes in the
store for the case where two transactions race.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from asset_allocation.core.observability import get_logger
from asset_allocation.domain.allocation.entities.allocation import Allocation
from asset_allocation.domain.allocation.entities.asset import Asset
from asset_allocation.domain.allocation.factories import (
    AllocationFactory,
    AssetFactory,
)
from asset_allocation.domain.allocation.value_objects.enums import EntityType
from asset_allocation.domain.allocation.value_objects.identifiers import (
    IdentifierGenerator,
)
from asset_allocation.domain.shared.base import utc_now
from asset_allocation.domain.shared.exceptions import (
    ConflictError,
    NotFoundError,
    PreconditionFailedError,
    ValidationError,
)
from asset_allocation.infrastructure.database.unit_of_work import UnitOfWorkInterface

from .base_service import ApplicationServiceBase, UnitOfWorkFactory

logger = get_logger(__name__)


class AssetManagementService(ApplicationServiceBase):
    """
    Application service for asset and allocation operations.

    Allocation transitions: ``allocate`` moves an asset from unallocated to
    allocated; ``deallocate``, deactivation through ``update_asset`` and
    ``delete_asset`` move it back. Reactivating an asset does not restore an
    allocation it lost.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory | None = None,
        id_generator: IdentifierGenerator | None = None,
        clock: Callable[[], datetime] = utc_now,
        default_actor_ref: str | None = None,
    ):
        super().__init__(unit_of_work_factory, id_generator, clock, default_actor_ref)
        self._asset_factory = AssetFactory(self._id_generator, clock)
        self._allocation_factory = AllocationFactory(self._id_generator, clock)

    def create_asset(
        self, fields: Mapping[str, Any], *, actor_ref: str | None = None
    ) -> Asset:
        """
        Create a new, unallocated asset.

        Raises:
            MultipleValidationError: If any field breaks a validation rule
        """
        asset = self._asset_factory.create(fields)

        with self._unit_of_work("create_asset") as uow:
            uow.assets.add(asset)
            self._recorder(uow, actor_ref).created(EntityType.ASSET, asset)

        logger.info("asset_created", asset_id=asset.id, name=asset.name)
        return asset

    def update_asset(
        self,
        asset_id: str,
        patch: Mapping[str, Any],
        *,
        actor_ref: str | None = None,
    ) -> Asset:
        """
        Merge a partial update over an asset.

        Deactivating an allocated asset removes its allocation in the same
        transaction as the status change.

        Raises:
            NotFoundError: If the asset is unknown or deleted
            MultipleValidationError: If the merged asset is invalid
        """
        allocation: Allocation | None = None
        with self._unit_of_work("update_asset") as uow:
            asset = self._live_asset(uow, asset_id, lock=True)
            recorder = self._recorder(uow, actor_ref)
            before = asset.snapshot()
            updated = self._asset_factory.apply_patch(asset, patch)

            if not updated.is_active:
                allocation = uow.allocations.find_active_by_asset(asset.id)
                if allocation is not None:
                    self._retire_allocation(uow, recorder, allocation)

            uow.assets.save(updated)
            recorder.updated(EntityType.ASSET, before, updated)

        logger.info(
            "asset_updated",
            asset_id=asset_id,
            status=updated.status.value,
            allocation_removed=allocation is not None,
        )
        return updated

    def allocate(
        self,
        asset_id: str,
        centre_id: str,
        location_code: str,
        *,
        actor_ref: str | None = None,
    ) -> Allocation:
        """
        Allocate an asset to the location with the given code in a centre.

        A location still held by an inactive asset is treated as free: the
        stale allocation is removed and logged before the new one is made.

        Raises:
            ValidationError: If the location code is missing
            NotFoundError: If the asset is unknown or deleted
            PreconditionFailedError: If the asset is inactive, the centre is not
                active, the code does not name an active location of the
                centre, or an active asset occupies the location
            ConflictError: If the asset already has an active allocation
        """
        if not isinstance(location_code, str) or not location_code.strip():
            raise ValidationError(
                "location_code", location_code, "is required", "REQUIRED"
            )
        location_code = location_code.strip()

        stale: Allocation | None = None
        with self._unit_of_work("allocate") as uow:
            asset = self._live_asset(uow, asset_id, lock=True)
            if not asset.is_active:
                raise PreconditionFailedError(
                    f"Asset {asset_id} is not active", {"asset_id": asset_id}
                )

            current = uow.allocations.find_active_by_asset(asset.id)
            if current is not None:
                raise ConflictError(
                    f"Asset {asset_id} is already allocated; deallocate it first",
                    {"asset_id": asset_id, "allocation_id": current.id},
                )

            centre = uow.centres.get(centre_id)
            if centre is None or not centre.is_active:
                raise PreconditionFailedError(
                    f"Centre {centre_id} does not exist or is not active",
                    {"centre_id": centre_id},
                )

            location = uow.locations.find_active_by_unique_key(centre.id, location_code)
            if location is not None:
                location = uow.locations.get_for_update(location.id)
            if location is None or not location.is_active:
                raise PreconditionFailedError(
                    f"No active location '{location_code}' in centre {centre_id}",
                    {"centre_id": centre_id, "location_code": location_code},
                )

            recorder = self._recorder(uow, actor_ref)
            occupying = uow.allocations.find_active_by_location(location.id)
            if occupying is not None:
                occupant = uow.assets.get(occupying.asset_id)
                if occupant is not None and occupant.is_active:
                    raise PreconditionFailedError(
                        f"Location '{location_code}' is occupied by an active asset",
                        {"location_id": location.id, "occupant_id": occupant.id},
                    )
                stale = self._retire_allocation(uow, recorder, occupying)

            allocation = self._allocation_factory.create(
                asset.id, centre.id, location.id, location.code
            )
            uow.allocations.add(allocation)
            recorder.created(EntityType.ALLOCATION, allocation)

        logger.info(
            "asset_allocated",
            asset_id=asset_id,
            centre_id=centre_id,
            location_id=allocation.location_id,
            stale_allocation_removed=stale.id if stale is not None else None,
        )
        return allocation

    def deallocate(
        self, asset_id: str, *, actor_ref: str | None = None
    ) -> Allocation | None:
        """
        Remove the asset's allocation.

        Returns:
            The removed allocation, or None when the asset was not allocated

        Raises:
            NotFoundError: If the asset is unknown or deleted
        """
        with self._unit_of_work("deallocate") as uow:
            asset = self._live_asset(uow, asset_id, lock=True)
            allocation = uow.allocations.find_active_by_asset(asset.id)
            if allocation is None:
                return None
            self._retire_allocation(uow, self._recorder(uow, actor_ref), allocation)

        logger.info(
            "asset_deallocated", asset_id=asset_id, location_id=allocation.location_id
        )
        return allocation

    def delete_asset(self, asset_id: str, *, actor_ref: str | None = None) -> Asset:
        """
        Soft-delete an asset, removing its allocation first.

        Raises:
            NotFoundError: If the asset is unknown or already deleted
        """
        with self._unit_of_work("delete_asset") as uow:
            asset = self._live_asset(uow, asset_id, lock=True)
            recorder = self._recorder(uow, actor_ref)

            allocation = uow.allocations.find_active_by_asset(asset.id)
            if allocation is not None:
                self._retire_allocation(uow, recorder, allocation)

            before = asset.snapshot()
            asset.soft_delete(self._clock())
            uow.assets.save(asset)
            recorder.deleted(EntityType.ASSET, before, asset)

        logger.info(
            "asset_deleted", asset_id=asset_id, allocation_removed=allocation is not None
        )
        return asset

    def get_asset(self, asset_id: str) -> Asset:
        with self._unit_of_work("get_asset") as uow:
            return self._live_asset(uow, asset_id)

    def list_assets(self, include_deleted: bool = False) -> list[Asset]:
        with self._unit_of_work("list_assets") as uow:
            return uow.assets.list_all(include_deleted=include_deleted)

    def get_allocation(self, asset_id: str) -> Allocation | None:
        """Active allocation of a live asset, or None."""
        with self._unit_of_work("get_allocation") as uow:
            asset = self._live_asset(uow, asset_id)
            return uow.allocations.find_active_by_asset(asset.id)

    @staticmethod
    def _live_asset(uow: UnitOfWorkInterface, asset_id: str, lock: bool = False) -> Asset:
        asset = uow.assets.get_for_update(asset_id) if lock else uow.assets.get(asset_id)
        if asset is None or asset.is_deleted:
            raise NotFoundError("Asset", asset_id)
        return asset
