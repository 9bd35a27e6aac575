"""Label-preserving geometric augmentation for handwritten-digit bitmaps."""

from digit_augmentation.config import (
    AugmentationConfig,
    AxisRange,
    ShiftRange,
)
from digit_augmentation.errors import RangeViolation
from digit_augmentation.params import resolve_or_sample
from digit_augmentation.pipeline import (
    AugmentationParams,
    AugmentationPipeline,
    augment,
    augment_batch,
    expand,
    resolve_params,
)
from digit_augmentation.transforms import rotate, shear, shift, zoom
from digit_augmentation.transforms.geometric import (
    BoundedRotation,
    BoundedShear,
    BoundedShift,
    BoundedZoom,
    DigitAugmentation,
)
from digit_augmentation.types import ShiftAmount

__version__ = "0.1.0"

__all__ = [
    "AugmentationConfig",
    "AugmentationParams",
    "AugmentationPipeline",
    "AxisRange",
    "BoundedRotation",
    "BoundedShear",
    "BoundedShift",
    "BoundedZoom",
    "DigitAugmentation",
    "RangeViolation",
    "ShiftAmount",
    "ShiftRange",
    "augment",
    "augment_batch",
    "expand",
    "resolve_or_sample",
    "resolve_params",
    "rotate",
    "shear",
    "shift",
    "zoom",
]
