from .address import Address
from .dimensions import Dimensions
from .enums import (
    AllocationStatus,
    AssetStatus,
    CentreStatus,
    ChangeOperation,
    EntityType,
    LocationStatus,
)
from .identifiers import IdentifierGenerator, UlidGenerator

__all__ = [
    "Address",
    "AllocationStatus",
    "AssetStatus",
    "CentreStatus",
    "ChangeOperation",
    "Dimensions",
    "EntityType",
    "IdentifierGenerator",
    "LocationStatus",
    "UlidGenerator",
]
