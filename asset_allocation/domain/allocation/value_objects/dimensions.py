"""Physical size of a display panel."""

import math

from pydantic import Field, field_validator

from ...shared.base import ValueObject


class Dimensions(ValueObject):
    """Length, breadth and depth of an asset. Each must be a positive finite number."""

    length: float = Field(gt=0)
    breadth: float = Field(gt=0)
    depth: float = Field(gt=0)

    @field_validator("length", "breadth", "depth")
    @classmethod
    def must_be_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("must be a finite number")
        return v

    @property
    def volume(self) -> float:
        return self.length * self.breadth * self.depth
