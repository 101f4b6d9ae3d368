"""
SQLModel table definitions for the allocation domain.

These models map the persisted schema (``shopping_centre``,
``location_within_centre``, ``asset``, ``asset_allocation``, ``change_log``).
Rows of the first four tables are never physically deleted: their ``status``
column carries soft deletion. ``change_log`` is insert-only.

The partial unique indexes below are what keeps the uniqueness and
occupancy rules true when two transactions race at Read Committed.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Index, text
from sqlmodel import Field, SQLModel

ID_LENGTH = 26


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _partial_unique_index(name: str, *columns: str, where: str) -> Index:
    return Index(
        name,
        *columns,
        unique=True,
        postgresql_where=text(where),
        sqlite_where=text(where),
    )


# Base classes for shared fields
class TimestampedModel(SQLModel):
    """Base model with timestamp fields."""

    created_at: datetime = Field(
        default_factory=_utc_now, sa_type=DateTime(timezone=True)
    )
    updated_at: datetime | None = Field(
        default=None, sa_type=DateTime(timezone=True)
    )


class IdentifiedModel(TimestampedModel):
    """Base model with a generated string primary key and timestamps."""

    id: str = Field(primary_key=True, max_length=ID_LENGTH)


class ShoppingCentre(IdentifiedModel, table=True):
    """shopping_centre table definition."""

    __tablename__ = "shopping_centre"
    __table_args__ = (
        _partial_unique_index(
            "uq_shopping_centre_name_live", "name", where="status <> 'deleted'"
        ),
        _partial_unique_index(
            "uq_shopping_centre_address_live",
            "line_one",
            "line_two",
            "city",
            "state",
            "postal_code",
            "country",
            where="status <> 'deleted'",
        ),
    )

    name: str = Field(max_length=200)
    line_one: str = Field(max_length=200)
    # Stored as '' rather than NULL so the address index treats it as a value
    line_two: str = Field(default="", max_length=200)
    city: str = Field(max_length=100)
    state: str = Field(max_length=100)
    postal_code: str = Field(max_length=20)
    country: str = Field(max_length=100)
    status: str = Field(default="active", max_length=16, index=True)


class LocationWithinCentre(IdentifiedModel, table=True):
    """location_within_centre table definition."""

    __tablename__ = "location_within_centre"
    __table_args__ = (
        _partial_unique_index(
            "uq_location_code_per_centre_active",
            "centre_id",
            "code",
            where="status = 'active'",
        ),
    )

    centre_id: str = Field(
        foreign_key="shopping_centre.id", max_length=ID_LENGTH, index=True
    )
    code: str = Field(max_length=32)
    description: str | None = Field(default=None, max_length=500)
    status: str = Field(default="active", max_length=16)


class Asset(IdentifiedModel, table=True):
    """asset table definition."""

    __tablename__ = "asset"
    __table_args__ = (
        CheckConstraint("length > 0", name="ck_asset_length_positive"),
        CheckConstraint("breadth > 0", name="ck_asset_breadth_positive"),
        CheckConstraint("depth > 0", name="ck_asset_depth_positive"),
    )

    name: str = Field(max_length=200)
    length: float
    breadth: float
    depth: float
    status: str = Field(default="active", max_length=16, index=True)


class AssetAllocation(IdentifiedModel, table=True):
    """asset_allocation table definition."""

    __tablename__ = "asset_allocation"
    __table_args__ = (
        _partial_unique_index(
            "uq_asset_allocation_active_asset", "asset_id", where="status = 'active'"
        ),
        _partial_unique_index(
            "uq_asset_allocation_active_location",
            "location_id",
            where="status = 'active'",
        ),
    )

    asset_id: str = Field(foreign_key="asset.id", max_length=ID_LENGTH, index=True)
    centre_id: str = Field(foreign_key="shopping_centre.id", max_length=ID_LENGTH)
    location_id: str = Field(
        foreign_key="location_within_centre.id", max_length=ID_LENGTH, index=True
    )
    location_code: str = Field(max_length=32)
    status: str = Field(default="active", max_length=16)
    allocated_at: datetime = Field(
        default_factory=_utc_now, sa_type=DateTime(timezone=True)
    )
    removed_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))


class ChangeLog(SQLModel, table=True):
    """change_log table definition. Insert-only."""

    __tablename__ = "change_log"
    __table_args__ = (
        Index("ix_change_log_entity", "entity_type", "entity_id"),
    )

    id: str = Field(primary_key=True, max_length=ID_LENGTH)
    entity_type: str = Field(max_length=32)
    entity_id: str = Field(max_length=ID_LENGTH)
    operation: str = Field(max_length=16)
    before_state: dict[str, Any] | None = Field(
        default=None, sa_column=Column(JSON, nullable=True)
    )
    after_state: dict[str, Any] = Field(sa_column=Column(JSON, nullable=False))
    timestamp: datetime = Field(
        default_factory=_utc_now, sa_type=DateTime(timezone=True), index=True
    )
    actor_ref: str = Field(max_length=200)


# Unique indexes by name, with the columns they cover. Used to recognise which
# rule a rejected write broke when the driver reports columns instead of names.
UNIQUE_INDEX_COLUMNS: dict[str, tuple[str, ...]] = {
    "uq_shopping_centre_name_live": ("shopping_centre.name",),
    "uq_shopping_centre_address_live": (
        "shopping_centre.line_one",
        "shopping_centre.line_two",
        "shopping_centre.city",
        "shopping_centre.state",
        "shopping_centre.postal_code",
        "shopping_centre.country",
    ),
    "uq_location_code_per_centre_active": (
        "location_within_centre.centre_id",
        "location_within_centre.code",
    ),
    "uq_asset_allocation_active_asset": ("asset_allocation.asset_id",),
    "uq_asset_allocation_active_location": ("asset_allocation.location_id",),
}

TABLE_NAMES = (
    ShoppingCentre.__tablename__,
    LocationWithinCentre.__tablename__,
    Asset.__tablename__,
    AssetAllocation.__tablename__,
    ChangeLog.__tablename__,
)
