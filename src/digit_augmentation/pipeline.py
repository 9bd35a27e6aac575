"""Label-preserving augmentation pipeline: rotate -> shear -> zoom -> shift.

Rotation runs first so that shear and zoom do not compound its distortion;
shift runs last so repositioning is not itself sheared or scaled.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import torch
from loguru import logger

from digit_augmentation.config import (
    ROTATION_LIMIT,
    SHEAR_LIMIT,
    SHIFT_LIMIT,
    ZOOM_LIMIT,
    AugmentationConfig,
    ShiftRange,
)
from digit_augmentation.params import default_rng, resolve_or_sample
from digit_augmentation.transforms.functional import (
    check_image,
    rotate,
    shear,
    shift,
    zoom,
)


@dataclass(frozen=True)
class AugmentationParams:
    """Concrete parameters for one pass through the pipeline."""

    angle: float
    shear: float
    zoom: float
    width_shift: int
    height_shift: int


def resolve_params(
    config: AugmentationConfig | None = None,
    rng: np.random.Generator | None = None,
) -> AugmentationParams:
    """Validate explicit values and sample the rest, in pipeline order.

    Resolving everything up front means a bad value in any stage raises
    before any stage computes.

    Raises:
        RangeViolation: an explicit value in ``config`` is out of range.
    """
    config = config or AugmentationConfig()
    rng = default_rng(rng)
    shift_range = config.shift_range or ShiftRange()
    params = AugmentationParams(
        angle=resolve_or_sample(
            "rotation angle", config.angle, config.rotation_range, ROTATION_LIMIT, rng
        ),
        shear=resolve_or_sample(
            "shear factor", config.shear, config.shear_range, SHEAR_LIMIT, rng
        ),
        zoom=resolve_or_sample(
            "zoom factor", config.zoom, config.zoom_range, ZOOM_LIMIT, rng
        ),
        width_shift=int(
            resolve_or_sample(
                "width shift", config.width_shift, shift_range.width, SHIFT_LIMIT, rng,
                integer=True,
            )
        ),
        height_shift=int(
            resolve_or_sample(
                "height shift", config.height_shift, shift_range.height, SHIFT_LIMIT, rng,
                integer=True,
            )
        ),
    )
    logger.debug(f"Augmentation params: {params}")
    return params


def augment(
    image: torch.Tensor,
    config: AugmentationConfig | None = None,
    rng: np.random.Generator | None = None,
) -> torch.Tensor:
    """Apply rotation, shear, zoom and shift to a single image.

    Args:
        image: Image tensor, ``(N, N)`` or ``(1, N, N)``, values in ``[0, 1]``.
        config: Ranges and/or explicit values per stage.  Defaults to the
            domain ranges for every stage.
        rng: Generator used to sample missing parameters.

    Returns:
        A new tensor with the same shape and dtype as ``image``.

    Raises:
        RangeViolation: propagated unchanged from the first offending stage.
    """
    check_image(image, "augment")
    config = config or AugmentationConfig()
    params = resolve_params(config, rng)

    rotated = rotate(image, params.angle, config.rotation_range)
    sheared = shear(rotated, params.shear, config.shear_range)
    zoomed = zoom(sheared, params.zoom, config.zoom_range)
    return shift(
        zoomed,
        {"width": params.width_shift, "height": params.height_shift},
        config.shift_range,
    )


def augment_batch(
    images: torch.Tensor,
    config: AugmentationConfig | None = None,
    rng: np.random.Generator | None = None,
) -> torch.Tensor:
    """Augment every sample of a ``(B, N, N)`` or ``(B, 1, N, N)`` batch.

    Each sample draws its own parameters.
    """
    if not isinstance(images, torch.Tensor) or images.ndim not in (3, 4):
        raise ValueError(
            "augment_batch expects a (B, N, N) or (B, 1, N, N) tensor, got "
            f"{getattr(images, 'shape', type(images))}"
        )
    rng = default_rng(rng)
    return torch.stack([augment(img, config, rng) for img in images])


def expand(
    image: torch.Tensor,
    copies: int,
    config: AugmentationConfig | None = None,
    rng: np.random.Generator | None = None,
) -> torch.Tensor:
    """Generate ``copies`` independent augmentations of a single image.

    Returns:
        Tensor of shape ``(copies, *image.shape)``.
    """
    if copies < 1:
        raise ValueError(f"copies must be >= 1, got {copies}")
    rng = default_rng(rng)
    return torch.stack([augment(image, config, rng) for _ in range(copies)])


class AugmentationPipeline:
    """Callable pipeline bound to a config and its own seeded generator.

    Args:
        config: Ranges and/or explicit values per stage.
        seed: Seed for the internal generator; ``None`` draws OS entropy.
    """

    def __init__(
        self,
        config: AugmentationConfig | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config or AugmentationConfig()
        self.rng = np.random.default_rng(seed)

    def __call__(self, image: torch.Tensor) -> torch.Tensor:
        return augment(image, self.config, self.rng)

    def batch(self, images: torch.Tensor) -> torch.Tensor:
        return augment_batch(images, self.config, self.rng)

    def expand(self, image: torch.Tensor, copies: int) -> torch.Tensor:
        return expand(image, copies, self.config, self.rng)
