"""Tests for RangeViolation and the shared validate-or-sample helper."""

from __future__ import annotations

import numpy as np
import pytest

from digit_augmentation.config import ROTATION_LIMIT, SHIFT_LIMIT, AxisRange
from digit_augmentation.errors import RangeViolation
from digit_augmentation.params import check_bounds, resolve_or_sample, validate


class TestRangeViolation:
    def test_is_value_error(self) -> None:
        assert issubclass(RangeViolation, ValueError)

    def test_carries_name_value_and_bounds(self) -> None:
        err = RangeViolation("zoom factor", 1.5, 0.8, 1.2)
        assert err.name == "zoom factor"
        assert err.value == 1.5
        assert (err.low, err.high) == (0.8, 1.2)

    def test_message(self) -> None:
        err = RangeViolation("zoom factor", 1.5, 0.8, 1.2)
        assert str(err) == "zoom factor 1.5 outside allowed range [0.8, 1.2]"


class TestValidate:
    def test_inside_passes(self) -> None:
        validate("rotation angle", 15.0, ROTATION_LIMIT)
        validate("rotation angle", -15.0, ROTATION_LIMIT)
        validate("rotation angle", 0.0, ROTATION_LIMIT)

    def test_outside_raises(self) -> None:
        with pytest.raises(RangeViolation, match="rotation angle 15.5"):
            validate("rotation angle", 15.5, ROTATION_LIMIT)

    def test_check_bounds_rejects_wider_range(self) -> None:
        with pytest.raises(RangeViolation, match="upper bound") as exc_info:
            check_bounds("rotation angle", AxisRange(min=-10, max=30), ROTATION_LIMIT)
        assert exc_info.value.value == 30

    def test_check_bounds_rejects_lower(self) -> None:
        with pytest.raises(RangeViolation, match="lower bound"):
            check_bounds("rotation angle", AxisRange(min=-20, max=0), ROTATION_LIMIT)


class TestResolveOrSample:
    def test_explicit_value_returned(self) -> None:
        assert resolve_or_sample("angle", 7.5, None, ROTATION_LIMIT) == 7.5

    def test_explicit_value_validated_against_custom_bounds(self) -> None:
        bounds = AxisRange(min=-5, max=5)
        with pytest.raises(RangeViolation) as exc_info:
            resolve_or_sample("angle", 7.5, bounds, ROTATION_LIMIT)
        assert exc_info.value.high == 5

    def test_none_bounds_fall_back_to_limit(self) -> None:
        with pytest.raises(RangeViolation) as exc_info:
            resolve_or_sample("angle", 16.0, None, ROTATION_LIMIT)
        assert (exc_info.value.low, exc_info.value.high) == (-15.0, 15.0)

    def test_custom_bounds_wider_than_limit_rejected_before_sampling(self) -> None:
        with pytest.raises(RangeViolation):
            resolve_or_sample("angle", None, AxisRange(min=-45, max=45), ROTATION_LIMIT)

    def test_samples_within_bounds(self, rng: np.random.Generator) -> None:
        bounds = AxisRange(min=-3.0, max=8.0)
        for _ in range(200):
            value = resolve_or_sample("angle", None, bounds, ROTATION_LIMIT, rng)
            assert -3.0 <= value <= 8.0

    def test_sampling_is_seedable(self) -> None:
        a = resolve_or_sample("angle", None, None, ROTATION_LIMIT, np.random.default_rng(7))
        b = resolve_or_sample("angle", None, None, ROTATION_LIMIT, np.random.default_rng(7))
        assert a == b

    def test_integer_sampling_covers_inclusive_range(
        self, rng: np.random.Generator
    ) -> None:
        values = {
            resolve_or_sample("width shift", None, None, SHIFT_LIMIT, rng, integer=True)
            for _ in range(500)
        }
        assert values == set(range(-4, 5))
        assert all(isinstance(v, int) for v in values)

    def test_integer_explicit_value_rounded(self) -> None:
        value = resolve_or_sample("width shift", 2.6, None, SHIFT_LIMIT, integer=True)
        assert value == 3
        assert isinstance(value, int)

    def test_degenerate_range_returns_its_value(self, rng: np.random.Generator) -> None:
        bounds = AxisRange(min=2.0, max=2.0)
        assert resolve_or_sample("angle", None, bounds, ROTATION_LIMIT, rng) == 2.0
