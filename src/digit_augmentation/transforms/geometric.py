"""Torchvision v2 wrappers around the bounded geometric transforms.

These let the digit augmentations sit inside a ``v2.Compose`` training
pipeline and be instantiated from Hydra YAML.  Each accepts either a
grayscale PIL image or a ``(1, N, N)`` / ``(N, N)`` float tensor and returns
the same kind of object.  Range arguments are validated at construction;
values outside the domain limits raise ``ValueError``.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import torch
from PIL import Image
from torchvision.transforms import v2

from digit_augmentation.config import (
    MAX_ROTATION_DEGREES,
    MAX_SHEAR,
    MAX_SHIFT_PIXELS,
    MAX_ZOOM,
    MIN_ZOOM,
    AugmentationConfig,
    AxisRange,
    ShiftRange,
)
from digit_augmentation.pipeline import augment
from digit_augmentation.transforms.conversion import (
    pil_to_unit_tensor,
    unit_tensor_to_pil,
)
from digit_augmentation.transforms.functional import rotate, shear, shift, zoom
from digit_augmentation.utils.hydra import register


class _BoundedTransform(v2.Transform):
    """Shared probability gate and PIL/tensor handling.

    Args:
        p: Probability of applying the transform.
        seed: Seed for a private generator.  ``None`` draws fresh entropy on
            every call, which keeps forked DataLoader workers independent.
    """

    def __init__(self, p: float = 1.0, seed: int | None = None) -> None:
        super().__init__()
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"p must be in [0, 1], got {p}")
        self.p = p
        self._rng = np.random.default_rng(seed) if seed is not None else None

    def _generator(self) -> np.random.Generator:
        return self._rng if self._rng is not None else np.random.default_rng()

    def _augment(self, tensor: torch.Tensor, rng: np.random.Generator) -> torch.Tensor:
        raise NotImplementedError

    def forward(self, *inputs: Any) -> Any:
        img = inputs[0]
        rest = inputs[1:]

        if not isinstance(img, (Image.Image, torch.Tensor)):
            raise TypeError(
                f"{type(self).__name__} expects a PIL Image or tensor, got {type(img)}"
            )

        rng = self._generator()
        if rng.random() >= self.p:
            return inputs if rest else img

        if isinstance(img, Image.Image):
            result = unit_tensor_to_pil(self._augment(pil_to_unit_tensor(img), rng))
        else:
            result = self._augment(img, rng)

        return (result, *rest) if rest else result


class BoundedRotation(_BoundedTransform):
    """Random rotation within ``[min_angle, max_angle]`` degrees (at most ±15)."""

    def __init__(
        self,
        min_angle: float = -MAX_ROTATION_DEGREES,
        max_angle: float = MAX_ROTATION_DEGREES,
        p: float = 1.0,
        seed: int | None = None,
    ) -> None:
        super().__init__(p=p, seed=seed)
        self.config = AugmentationConfig(
            rotation_range=AxisRange(min=min_angle, max=max_angle)
        )

    def _augment(self, tensor: torch.Tensor, rng: np.random.Generator) -> torch.Tensor:
        return rotate(tensor, bounds=self.config.rotation_range, rng=rng)


class BoundedShift(_BoundedTransform):
    """Random whole-pixel translation up to ``max_width`` / ``max_height`` (at most 4)."""

    def __init__(
        self,
        max_width: int = MAX_SHIFT_PIXELS,
        max_height: int = MAX_SHIFT_PIXELS,
        p: float = 1.0,
        seed: int | None = None,
    ) -> None:
        super().__init__(p=p, seed=seed)
        self.config = AugmentationConfig(
            shift_range=ShiftRange.symmetric(max_width, max_height)
        )

    def _augment(self, tensor: torch.Tensor, rng: np.random.Generator) -> torch.Tensor:
        return shift(tensor, bounds=self.config.shift_range, rng=rng)


class BoundedZoom(_BoundedTransform):
    """Random zoom with factor in ``[min_factor, max_factor]`` (within [0.8, 1.2])."""

    def __init__(
        self,
        min_factor: float = MIN_ZOOM,
        max_factor: float = MAX_ZOOM,
        p: float = 1.0,
        seed: int | None = None,
    ) -> None:
        super().__init__(p=p, seed=seed)
        self.config = AugmentationConfig(
            zoom_range=AxisRange(min=min_factor, max=max_factor)
        )

    def _augment(self, tensor: torch.Tensor, rng: np.random.Generator) -> torch.Tensor:
        return zoom(tensor, bounds=self.config.zoom_range, rng=rng)


class BoundedShear(_BoundedTransform):
    """Random horizontal shear with factor in ``[min_factor, max_factor]`` (within ±0.2)."""

    def __init__(
        self,
        min_factor: float = -MAX_SHEAR,
        max_factor: float = MAX_SHEAR,
        p: float = 1.0,
        seed: int | None = None,
    ) -> None:
        super().__init__(p=p, seed=seed)
        self.config = AugmentationConfig(
            shear_range=AxisRange(min=min_factor, max=max_factor)
        )

    def _augment(self, tensor: torch.Tensor, rng: np.random.Generator) -> torch.Tensor:
        return shear(tensor, bounds=self.config.shear_range, rng=rng)


@register("transforms")
class DigitAugmentation(_BoundedTransform):
    """Full rotate -> shear -> zoom -> shift augmentation as one transform.

    Symmetric ranges are given by their magnitude so the transform is easy to
    express in YAML::

        _target_: digit_augmentation.transforms.geometric.DigitAugmentation
        max_rotation: 10.0
        max_shift: 3

    Args:
        max_rotation: Rotation range ``[-max_rotation, max_rotation]`` degrees.
        max_shift: Per-axis shift range in pixels.
        min_zoom: Lower zoom factor.
        max_zoom: Upper zoom factor.
        max_shear: Shear range ``[-max_shear, max_shear]``.
        p: Probability of applying the transform.
        seed: Seed for a private generator.
    """

    def __init__(
        self,
        max_rotation: float = MAX_ROTATION_DEGREES,
        max_shift: int = MAX_SHIFT_PIXELS,
        min_zoom: float = MIN_ZOOM,
        max_zoom: float = MAX_ZOOM,
        max_shear: float = MAX_SHEAR,
        p: float = 1.0,
        seed: int | None = None,
    ) -> None:
        super().__init__(p=p, seed=seed)
        self.config = AugmentationConfig(
            rotation_range=AxisRange.symmetric(max_rotation),
            shift_range=ShiftRange.symmetric(max_shift, max_shift),
            zoom_range=AxisRange(min=min_zoom, max=max_zoom),
            shear_range=AxisRange.symmetric(max_shear),
        )

    def _augment(self, tensor: torch.Tensor, rng: np.random.Generator) -> torch.Tensor:
        return augment(tensor, self.config, rng)
