"""Pydantic frozen configuration models for digit_augmentation."""

from __future__ import annotations

import math

import numpy as np
from pydantic import BaseModel, model_validator

CANVAS_SIZE = 28
BACKGROUND_VALUE = 0.0

MAX_ROTATION_DEGREES = 15.0
MAX_SHIFT_PIXELS = 4
MIN_ZOOM = 0.8
MAX_ZOOM = 1.2
MAX_SHEAR = 0.2


class AxisRange(BaseModel, frozen=True):
    """Closed interval ``[min, max]`` used to validate or sample a parameter.

    Frozen and validated at construction time: ``min <= max``.
    """

    min: float
    max: float

    @model_validator(mode="after")
    def _ordered(self) -> "AxisRange":
        if self.min > self.max:
            raise ValueError(
                f"min ({self.min}) must be <= max ({self.max})"
            )
        return self

    @classmethod
    def symmetric(cls, magnitude: float) -> "AxisRange":
        """Build ``[-magnitude, magnitude]``."""
        return cls(min=-abs(magnitude), max=abs(magnitude))

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def within(self, other: "AxisRange") -> bool:
        """True if this range lies entirely inside ``other``."""
        return other.min <= self.min and self.max <= other.max

    def sample(self, rng: np.random.Generator) -> float:
        """Draw a uniformly distributed float from the interval."""
        if self.min == self.max:
            return self.min
        return float(rng.uniform(self.min, self.max))

    def has_integer(self) -> bool:
        return math.ceil(self.min) <= math.floor(self.max)

    def sample_int(self, rng: np.random.Generator) -> int:
        """Draw a uniformly distributed integer from the interval, inclusive."""
        low, high = math.ceil(self.min), math.floor(self.max)
        if not self.has_integer():
            raise ValueError(f"[{self.min}, {self.max}] contains no integer")
        return int(rng.integers(low, high, endpoint=True))


ROTATION_LIMIT = AxisRange.symmetric(MAX_ROTATION_DEGREES)
SHIFT_LIMIT = AxisRange.symmetric(MAX_SHIFT_PIXELS)
ZOOM_LIMIT = AxisRange(min=MIN_ZOOM, max=MAX_ZOOM)
SHEAR_LIMIT = AxisRange.symmetric(MAX_SHEAR)


class ShiftRange(BaseModel, frozen=True):
    """Independent width/height pixel ranges for translation."""

    width: AxisRange = SHIFT_LIMIT
    height: AxisRange = SHIFT_LIMIT

    @classmethod
    def symmetric(cls, width: float, height: float) -> "ShiftRange":
        """Build ``[-width, width] x [-height, height]``."""
        return cls(width=AxisRange.symmetric(width), height=AxisRange.symmetric(height))

    @model_validator(mode="after")
    def _axes_hold_whole_pixels(self) -> "ShiftRange":
        for axis, bounds in (("width", self.width), ("height", self.height)):
            if not bounds.has_integer():
                raise ValueError(
                    f"{axis} range [{bounds.min}, {bounds.max}] contains no integer"
                )
        return self


class AugmentationConfig(BaseModel, frozen=True):
    """Configuration for a single ``augment`` call.

    Ranges left as ``None`` fall back to the domain default for that
    transform. Explicit values (``angle``, ``width_shift``, ...) bypass
    sampling; they are range-checked by the transforms themselves so that a
    bad value surfaces as ``RangeViolation`` rather than a config error.
    """

    rotation_range: AxisRange | None = None
    shift_range: ShiftRange | None = None
    zoom_range: AxisRange | None = None
    shear_range: AxisRange | None = None

    angle: float | None = None
    # Fractional shifts are range-checked, then rounded to whole pixels
    width_shift: float | None = None
    height_shift: float | None = None
    zoom: float | None = None
    shear: float | None = None

    @model_validator(mode="after")
    def _ranges_within_domain(self) -> "AugmentationConfig":
        """Sampling from a configured range must never leave the domain bound."""
        checks = [
            ("rotation_range", self.rotation_range, ROTATION_LIMIT),
            ("zoom_range", self.zoom_range, ZOOM_LIMIT),
            ("shear_range", self.shear_range, SHEAR_LIMIT),
        ]
        if self.shift_range is not None:
            checks.append(("shift_range.width", self.shift_range.width, SHIFT_LIMIT))
            checks.append(("shift_range.height", self.shift_range.height, SHIFT_LIMIT))
        for field, bounds, limit in checks:
            if bounds is not None and not bounds.within(limit):
                raise ValueError(
                    f"{field} [{bounds.min}, {bounds.max}] exceeds "
                    f"[{limit.min}, {limit.max}]"
                )
        return self

    @classmethod
    def identity(cls) -> "AugmentationConfig":
        """Config whose explicit values leave the image unchanged."""
        return cls(angle=0.0, width_shift=0, height_shift=0, zoom=1.0, shear=0.0)
