from .allocation import Allocation
from .asset import Asset
from .centre import Centre
from .change_log import ChangeLogEntry
from .location import LOCATION_CODE_MAX_LENGTH, Location

__all__ = [
    "Allocation",
    "Asset",
    "Centre",
    "ChangeLogEntry",
    "LOCATION_CODE_MAX_LENGTH",
    "Location",
]
