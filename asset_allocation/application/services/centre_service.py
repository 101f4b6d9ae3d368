"""
Centre management service.

Coordinates the centre and location use cases: creation, patching and soft
deletion, including the cascade from a centre to its locations and from a
location to the allocation occupying it.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from asset_allocation.core.observability import get_logger
from asset_allocation.domain.allocation.entities.centre import Centre
from asset_allocation.domain.allocation.entities.location import Location
from asset_allocation.domain.allocation.factories import CentreFactory, LocationFactory
from asset_allocation.domain.allocation.value_objects.enums import EntityType
from asset_allocation.domain.allocation.value_objects.identifiers import (
    IdentifierGenerator,
)
from asset_allocation.domain.shared.base import utc_now
from asset_allocation.domain.shared.exceptions import (
    ConflictError,
    NotFoundError,
    PreconditionFailedError,
)
from asset_allocation.infrastructure.database.unit_of_work import UnitOfWorkInterface

from .base_service import ApplicationServiceBase, UnitOfWorkFactory

logger = get_logger(__name__)


class CentreManagementService(ApplicationServiceBase):
    """
    Application service for centre and location operations.

    Deleted centres and locations are invisible: looking one up raises
    NotFoundError exactly as an unknown id does.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory | None = None,
        id_generator: IdentifierGenerator | None = None,
        clock: Callable[[], datetime] = utc_now,
        default_actor_ref: str | None = None,
    ):
        super().__init__(unit_of_work_factory, id_generator, clock, default_actor_ref)
        self._centre_factory = CentreFactory(self._id_generator, clock)
        self._location_factory = LocationFactory(self._id_generator, clock)

    # Centres

    def create_centre(
        self, fields: Mapping[str, Any], *, actor_ref: str | None = None
    ) -> Centre:
        """
        Create a new centre.

        Args:
            fields: ``name``, ``address`` mapping and optional ``active`` flag
            actor_ref: Actor written to the change log

        Returns:
            The persisted centre

        Raises:
            MultipleValidationError: If any field breaks a validation rule
            ConflictError: If a live centre has the same name or address
        """
        centre = self._centre_factory.create(fields)

        with self._unit_of_work("create_centre") as uow:
            self._ensure_unique(uow, centre)
            uow.centres.add(centre)
            self._recorder(uow, actor_ref).created(EntityType.CENTRE, centre)

        logger.info("centre_created", centre_id=centre.id, name=centre.name)
        return centre

    def update_centre(
        self,
        centre_id: str,
        patch: Mapping[str, Any],
        *,
        actor_ref: str | None = None,
    ) -> Centre:
        """
        Merge a partial update over a centre.

        Raises:
            NotFoundError: If the centre is unknown or deleted
            MultipleValidationError: If the merged centre is invalid
            ConflictError: If the new name or address clashes with another live centre
        """
        with self._unit_of_work("update_centre") as uow:
            centre = self._live_centre(uow, centre_id, lock=True)
            before = centre.snapshot()
            updated = self._centre_factory.apply_patch(centre, patch)
            self._ensure_unique(uow, updated)
            uow.centres.save(updated)
            self._recorder(uow, actor_ref).updated(EntityType.CENTRE, before, updated)

        logger.info("centre_updated", centre_id=centre_id, fields=sorted(patch))
        return updated

    def delete_centre(self, centre_id: str, *, actor_ref: str | None = None) -> Centre:
        """
        Soft-delete a centre with all of its active locations and their allocations.

        Change log entries are written allocations first, then locations, then
        the centre, one per affected entity.

        Raises:
            NotFoundError: If the centre is unknown or already deleted
        """
        with self._unit_of_work("delete_centre") as uow:
            centre = self._live_centre(uow, centre_id, lock=True)
            recorder = self._recorder(uow, actor_ref)
            locations = uow.locations.find_active_by_centre(centre.id)

            for location in locations:
                allocation = uow.allocations.find_active_by_location(location.id)
                if allocation is not None:
                    self._retire_allocation(uow, recorder, allocation)

            for location in locations:
                before = location.snapshot()
                location.soft_delete(self._clock())
                uow.locations.save(location)
                recorder.deleted(EntityType.LOCATION, before, location)

            before = centre.snapshot()
            centre.soft_delete(self._clock())
            uow.centres.save(centre)
            recorder.deleted(EntityType.CENTRE, before, centre)

        logger.info(
            "centre_deleted",
            centre_id=centre_id,
            locations_removed=len(locations),
            change_log_entries=len(recorder.recorded),
        )
        return centre

    def get_centre(self, centre_id: str) -> Centre:
        with self._unit_of_work("get_centre") as uow:
            return self._live_centre(uow, centre_id)

    def list_centres(self, include_deleted: bool = False) -> list[Centre]:
        with self._unit_of_work("list_centres") as uow:
            return uow.centres.list_all(include_deleted=include_deleted)

    # Locations

    def add_location(
        self,
        centre_id: str,
        code: str,
        description: str | None = None,
        *,
        actor_ref: str | None = None,
    ) -> Location:
        """
        Add a location to an active centre.

        Raises:
            MultipleValidationError: If the code or description is invalid
            PreconditionFailedError: If the centre is absent, deleted or inactive
            ConflictError: If an active location of the centre already uses the code
        """
        location = self._location_factory.create(
            centre_id, {"code": code, "description": description}
        )

        with self._unit_of_work("add_location") as uow:
            centre = uow.centres.get_for_update(centre_id)
            if centre is None or not centre.is_active:
                raise PreconditionFailedError(
                    f"Centre {centre_id} does not exist or is not active",
                    {"centre_id": centre_id},
                )
            self._ensure_code_free(uow, location)
            uow.locations.add(location)
            self._recorder(uow, actor_ref).created(EntityType.LOCATION, location)

        logger.info(
            "location_added",
            centre_id=centre_id,
            location_id=location.id,
            code=location.code,
        )
        return location

    def update_location(
        self,
        centre_id: str,
        location_id: str,
        patch: Mapping[str, Any],
        *,
        actor_ref: str | None = None,
    ) -> Location:
        """
        Merge a partial update over a location.

        An active allocation keeps the code it was made with.

        Raises:
            NotFoundError: If the centre or location is unknown or deleted, or
                the location belongs to another centre
            MultipleValidationError: If the merged location is invalid
            ConflictError: If the new code is used by another active location
        """
        with self._unit_of_work("update_location") as uow:
            self._live_centre(uow, centre_id)
            location = self._active_location(uow, centre_id, location_id)
            before = location.snapshot()
            updated = self._location_factory.apply_patch(location, patch)
            if updated.code != location.code:
                self._ensure_code_free(uow, updated)
            uow.locations.save(updated)
            self._recorder(uow, actor_ref).updated(
                EntityType.LOCATION, before, updated
            )

        logger.info("location_updated", centre_id=centre_id, location_id=location_id)
        return updated

    def remove_location(
        self, centre_id: str, location_id: str, *, actor_ref: str | None = None
    ) -> Location:
        """
        Soft-delete a location and remove the allocation occupying it.

        Raises:
            NotFoundError: If the centre or location is unknown or deleted
        """
        with self._unit_of_work("remove_location") as uow:
            self._live_centre(uow, centre_id)
            location = self._active_location(uow, centre_id, location_id)
            recorder = self._recorder(uow, actor_ref)

            allocation = uow.allocations.find_active_by_location(location.id)
            if allocation is not None:
                self._retire_allocation(uow, recorder, allocation)

            before = location.snapshot()
            location.soft_delete(self._clock())
            uow.locations.save(location)
            recorder.deleted(EntityType.LOCATION, before, location)

        logger.info(
            "location_removed",
            centre_id=centre_id,
            location_id=location_id,
            allocation_removed=allocation is not None,
        )
        return location

    def get_location(self, centre_id: str, location_id: str) -> Location:
        with self._unit_of_work("get_location") as uow:
            self._live_centre(uow, centre_id)
            return self._active_location(uow, centre_id, location_id, lock=False)

    def list_locations(self, centre_id: str) -> list[Location]:
        """Active locations of a live centre, oldest first."""
        with self._unit_of_work("list_locations") as uow:
            self._live_centre(uow, centre_id)
            return uow.locations.find_active_by_centre(centre_id)

    # Helpers

    @staticmethod
    def _live_centre(
        uow: UnitOfWorkInterface, centre_id: str, lock: bool = False
    ) -> Centre:
        centre = (
            uow.centres.get_for_update(centre_id) if lock else uow.centres.get(centre_id)
        )
        if centre is None or centre.is_deleted:
            raise NotFoundError("Centre", centre_id)
        return centre

    @staticmethod
    def _active_location(
        uow: UnitOfWorkInterface, centre_id: str, location_id: str, lock: bool = True
    ) -> Location:
        location = (
            uow.locations.get_for_update(location_id)
            if lock
            else uow.locations.get(location_id)
        )
        if location is None or not location.is_active or not location.belongs_to(
            centre_id
        ):
            raise NotFoundError("Location", location_id)
        return location

    @staticmethod
    def _ensure_unique(uow: UnitOfWorkInterface, centre: Centre) -> None:
        for other in uow.centres.find_active_by_unique_key(centre.name, centre.address):
            if other.id == centre.id:
                continue
            if other.name == centre.name:
                raise ConflictError(
                    f"A centre named '{centre.name}' already exists",
                    {"field": "name", "conflicting_id": other.id},
                )
            raise ConflictError(
                "A centre with this address already exists",
                {"field": "address", "conflicting_id": other.id},
            )

    @staticmethod
    def _ensure_code_free(uow: UnitOfWorkInterface, location: Location) -> None:
        other = uow.locations.find_active_by_unique_key(location.centre_id, location.code)
        if other is not None and other.id != location.id:
            raise ConflictError(
                f"Location code '{location.code}' is already in use in centre "
                f"{location.centre_id}",
                {"field": "code", "conflicting_id": other.id},
            )
