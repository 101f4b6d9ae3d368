"""Field mappings for creating test centres and assets."""

from typing import Any


def address_fields(**overrides: Any) -> dict[str, Any]:
    address = {
        "line_one": "1 George St",
        "city": "Sydney",
        "state": "NSW",
        "postal_code": "2000",
        "country": "Australia",
    }
    address.update(overrides)
    return address


def centre_fields(name: str = "Central Plaza", **address_overrides: Any) -> dict[str, Any]:
    return {"name": name, "address": address_fields(**address_overrides)}


def asset_fields(name: str = "Panel 55in", **overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "name": name,
        "length": 1.2,
        "breadth": 0.7,
        "depth": 0.05,
    }
    fields.update(overrides)
    return fields
