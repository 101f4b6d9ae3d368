"""Postal address of a shopping centre."""

from typing import ClassVar

from pydantic import Field

from ...shared.base import ValueObject


class Address(ValueObject):
    """
    Centre address.

    Every line except ``line_two`` is mandatory. Two live centres may not share
    the same address; ``unique_key`` is the tuple compared for that rule.
    """

    line_one: str = Field(min_length=1)
    line_two: str | None = None
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "line_one",
        "city",
        "state",
        "postal_code",
        "country",
    )

    @property
    def unique_key(self) -> tuple[str, str, str, str, str, str]:
        return (
            self.line_one,
            self.line_two or "",
            self.city,
            self.state,
            self.postal_code,
            self.country,
        )
