"""
Base application service providing common functionality.

This module provides a base class for the management services: construction
dependencies, the per-operation transaction boundary, change log recording
and translation of persistence failures into domain errors.
"""

from abc import ABC
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from asset_allocation.core.config import get_settings
from asset_allocation.core.observability import get_logger
from asset_allocation.domain.allocation.entities.allocation import Allocation
from asset_allocation.domain.allocation.services.change_log_recorder import (
    ChangeLogRecorder,
)
from asset_allocation.domain.allocation.value_objects.enums import EntityType
from asset_allocation.domain.allocation.value_objects.identifiers import (
    IdentifierGenerator,
    UlidGenerator,
)
from asset_allocation.domain.shared.base import utc_now
from asset_allocation.domain.shared.exceptions import (
    ConflictError,
    ConstraintViolationError,
    DomainError,
    IdentifierCollisionError,
    PreconditionFailedError,
    RepositoryError,
    TransactionFailureError,
)
from asset_allocation.infrastructure.database.repositories.base import (
    PRIMARY_KEY_SUFFIX,
)
from asset_allocation.infrastructure.database.unit_of_work import (
    UnitOfWorkInterface,
    get_unit_of_work_manager,
)

logger = get_logger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWorkInterface]

# Errors a caller would have received had it read the conflicting row itself
CONSTRAINT_ERRORS: dict[str, tuple[type[DomainError], str]] = {
    "uq_shopping_centre_name_live": (
        ConflictError,
        "A centre with this name already exists",
    ),
    "uq_shopping_centre_address_live": (
        ConflictError,
        "A centre with this address already exists",
    ),
    "uq_location_code_per_centre_active": (
        ConflictError,
        "Location code is already in use in this centre",
    ),
    "uq_asset_allocation_active_asset": (
        ConflictError,
        "Asset is already allocated; deallocate it first",
    ),
    "uq_asset_allocation_active_location": (
        PreconditionFailedError,
        "Location is occupied by an active asset",
    ),
}


class ApplicationServiceBase(ABC):
    """
    Base class for application services.

    Every public mutating operation runs inside exactly one ``_unit_of_work``
    block, so it either commits in full or leaves no trace.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory | None = None,
        id_generator: IdentifierGenerator | None = None,
        clock: Callable[[], datetime] = utc_now,
        default_actor_ref: str | None = None,
    ):
        """
        Initialize the application service.

        Args:
            unit_of_work_factory: Factory for creating unit of work instances.
                Defaults to the global unit of work manager.
            id_generator: Source of entity and change log identifiers
            clock: Source of timestamps
            default_actor_ref: Actor recorded when an operation names none
        """
        self._uow_factory = (
            unit_of_work_factory or get_unit_of_work_manager().create_unit_of_work
        )
        self._id_generator = id_generator or UlidGenerator()
        self._clock = clock
        self._default_actor_ref = default_actor_ref or get_settings().DEFAULT_ACTOR_REF

    @contextmanager
    def _unit_of_work(self, operation: str) -> Iterator[UnitOfWorkInterface]:
        """
        Run one operation as one transaction.

        Domain errors raised inside the block roll back and propagate
        unchanged. Persistence errors are translated: constraint violations
        into the error the rule they guard would have produced, anything else
        into TransactionFailureError.
        """
        try:
            with self._uow_factory() as uow:
                yield uow
        except ConstraintViolationError as e:
            raise self._translate_constraint(operation, e) from e
        except (RepositoryError, SQLAlchemyError) as e:
            logger.warning("transaction_failed", operation=operation, error=str(e))
            raise TransactionFailureError(
                f"{operation} could not be committed", {"operation": operation}
            ) from e

    def _translate_constraint(
        self, operation: str, error: ConstraintViolationError
    ) -> DomainError:
        constraint = error.constraint_name or ""
        logger.info(
            "constraint_violation_translated",
            operation=operation,
            constraint=constraint,
        )
        if constraint in CONSTRAINT_ERRORS:
            error_class, message = CONSTRAINT_ERRORS[constraint]
            return error_class(message, {"constraint": constraint})
        if constraint.endswith(PRIMARY_KEY_SUFFIX):
            return IdentifierCollisionError(
                f"Generated identifier already in use during {operation}"
            )
        return TransactionFailureError(
            f"{operation} violated a database constraint",
            {"operation": operation, "constraint": constraint or None},
        )

    def _recorder(
        self, uow: UnitOfWorkInterface, actor_ref: str | None
    ) -> ChangeLogRecorder:
        return ChangeLogRecorder(
            uow.change_log,
            self._id_generator,
            actor_ref or self._default_actor_ref,
            clock=self._clock,
        )

    def _retire_allocation(
        self,
        uow: UnitOfWorkInterface,
        recorder: ChangeLogRecorder,
        allocation: Allocation,
    ) -> Allocation:
        """Mark an active allocation removed, persist it and log the removal."""
        before = allocation.snapshot()
        allocation.remove(self._clock())
        uow.allocations.save(allocation)
        recorder.deleted(EntityType.ALLOCATION, before, allocation)
        return allocation
