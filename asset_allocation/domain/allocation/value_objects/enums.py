"""Status and classification enums for the allocation domain."""

from enum import Enum


class CentreStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


class LocationStatus(str, Enum):
    ACTIVE = "active"
    DELETED = "deleted"


class AssetStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


class AllocationStatus(str, Enum):
    ACTIVE = "active"
    REMOVED = "removed"


class EntityType(str, Enum):
    """Entity types recorded in the change log."""

    CENTRE = "centre"
    LOCATION = "location"
    ASSET = "asset"
    ALLOCATION = "allocation"


class ChangeOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
