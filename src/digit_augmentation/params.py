"""Shared validate-or-sample logic for bounded transform parameters.

Every transform resolves its parameters through ``resolve_or_sample`` so the
constraint semantics cannot drift between transforms.
"""

from __future__ import annotations

import math

import numpy as np
from loguru import logger

from digit_augmentation.config import AxisRange
from digit_augmentation.errors import RangeViolation


def default_rng(rng: np.random.Generator | None) -> np.random.Generator:
    """Return ``rng`` or a freshly seeded generator when it is ``None``."""
    return rng if rng is not None else np.random.default_rng()


def validate(name: str, value: float, bounds: AxisRange) -> None:
    """Raise ``RangeViolation`` unless ``bounds.min <= value <= bounds.max``."""
    if not bounds.contains(value):
        raise RangeViolation(name, value, bounds.min, bounds.max)


def check_bounds(name: str, bounds: AxisRange, limit: AxisRange) -> None:
    """Reject a custom range that reaches outside the hard domain limit."""
    if bounds.min < limit.min:
        raise RangeViolation(f"{name} lower bound", bounds.min, limit.min, limit.max)
    if bounds.max > limit.max:
        raise RangeViolation(f"{name} upper bound", bounds.max, limit.min, limit.max)


def resolve_or_sample(
    name: str,
    value: float | None,
    bounds: AxisRange | None,
    limit: AxisRange,
    rng: np.random.Generator | None = None,
    integer: bool = False,
) -> float:
    """Validate an explicit parameter or sample one when it is absent.

    Args:
        name: Human-readable parameter name used in error messages.
        value: Explicit value, or ``None`` to sample.
        bounds: Allowed/sampling interval.  ``None`` means ``limit``.
        limit: Hard domain bound that ``bounds`` may not exceed.
        rng: Source of randomness for sampling.
        integer: Sample and return integers (pixel quantities).

    Returns:
        The validated or sampled value.

    Raises:
        RangeViolation: ``value`` lies outside ``bounds`` or ``bounds`` lies
            outside ``limit``.
    """
    if bounds is None:
        bounds = limit
    else:
        check_bounds(name, bounds, limit)

    if value is None:
        gen = default_rng(rng)
        sampled = bounds.sample_int(gen) if integer else bounds.sample(gen)
        logger.debug(f"Sampled {name}={sampled} from [{bounds.min}, {bounds.max}]")
        return sampled

    validate(name, value, bounds)
    return math.floor(value + 0.5) if integer else float(value)
