"""Unit tests for digit_augmentation.config."""

import numpy as np
import pytest
from pydantic import ValidationError

from digit_augmentation.config import (
    AugmentationConfig,
    AxisRange,
    ShiftRange,
)


class TestAxisRange:
    def test_inverted_range_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must be <="):
            AxisRange(min=1.0, max=0.0)

    def test_frozen_raises_on_mutation(self) -> None:
        bounds = AxisRange(min=0.0, max=1.0)
        with pytest.raises(ValidationError):
            bounds.min = -1.0  # type: ignore[misc]

    def test_symmetric(self) -> None:
        bounds = AxisRange.symmetric(15)
        assert (bounds.min, bounds.max) == (-15.0, 15.0)

    def test_contains_is_inclusive(self) -> None:
        bounds = AxisRange(min=0.8, max=1.2)
        assert bounds.contains(0.8)
        assert bounds.contains(1.2)
        assert not bounds.contains(1.2001)

    def test_sample_int_without_integers_raises(self) -> None:
        with pytest.raises(ValueError, match="contains no integer"):
            AxisRange(min=0.2, max=0.7).sample_int(np.random.default_rng(0))


class TestShiftRange:
    def test_defaults(self) -> None:
        shift_range = ShiftRange()
        assert (shift_range.width.min, shift_range.width.max) == (-4.0, 4.0)
        assert (shift_range.height.min, shift_range.height.max) == (-4.0, 4.0)

    def test_symmetric_independent_axes(self) -> None:
        shift_range = ShiftRange.symmetric(3, 1)
        assert shift_range.width.max == 3.0
        assert shift_range.height.min == -1.0

    def test_axis_without_whole_pixel_rejected(self) -> None:
        with pytest.raises(ValidationError, match="width range .* contains no integer"):
            ShiftRange(width=AxisRange(min=0.2, max=0.7))

    def test_config_with_fractional_only_shift_rejected(self) -> None:
        with pytest.raises(ValidationError, match="height range"):
            AugmentationConfig.model_validate(
                {"shift_range": {"height": {"min": -0.9, "max": -0.1}}}
            )

    def test_fractional_bounds_containing_integers_accepted(self) -> None:
        shift_range = ShiftRange(width=AxisRange(min=-2.5, max=0.5))
        assert shift_range.width.has_integer()


class TestAugmentationConfig:
    def test_defaults(self) -> None:
        cfg = AugmentationConfig()
        assert cfg.rotation_range is None
        assert cfg.shift_range is None
        assert cfg.zoom_range is None
        assert cfg.shear_range is None
        assert cfg.angle is None

    def test_frozen_raises_on_mutation(self) -> None:
        cfg = AugmentationConfig()
        with pytest.raises(ValidationError):
            cfg.angle = 3.0  # type: ignore[misc]

    def test_custom_ranges(self) -> None:
        cfg = AugmentationConfig(
            rotation_range=AxisRange(min=-10, max=10),
            shift_range=ShiftRange.symmetric(3, 3),
            zoom_range=AxisRange(min=0.9, max=1.1),
            shear_range=AxisRange(min=-0.1, max=0.1),
        )
        assert cfg.rotation_range == AxisRange(min=-10, max=10)
        assert cfg.zoom_range is not None and cfg.zoom_range.max == 1.1

    def test_from_dict(self) -> None:
        cfg = AugmentationConfig.model_validate(
            {"rotation_range": {"min": -5, "max": 5}, "shift_range": {"width": {"min": -2, "max": 2}}}
        )
        assert cfg.rotation_range == AxisRange(min=-5, max=5)
        assert cfg.shift_range is not None
        assert cfg.shift_range.height == AxisRange(min=-4, max=4)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"rotation_range": AxisRange(min=-30, max=30)},
            {"zoom_range": AxisRange(min=0.5, max=1.0)},
            {"shear_range": AxisRange(min=-0.2, max=0.4)},
            {"shift_range": ShiftRange.symmetric(5, 0)},
            {"shift_range": ShiftRange.symmetric(0, 6)},
        ],
    )
    def test_ranges_beyond_domain_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValidationError, match="exceeds"):
            AugmentationConfig(**kwargs)

    def test_explicit_values_not_validated_by_config(self) -> None:
        cfg = AugmentationConfig(angle=45.0)
        assert cfg.angle == 45.0

    def test_identity(self) -> None:
        cfg = AugmentationConfig.identity()
        assert cfg.angle == 0.0
        assert (cfg.width_shift, cfg.height_shift) == (0, 0)
        assert cfg.zoom == 1.0
        assert cfg.shear == 0.0
