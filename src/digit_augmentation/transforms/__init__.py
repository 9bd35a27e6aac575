"""Bounded geometric transforms for handwritten-digit images.

``functional`` holds the pure tensor operations.  The torchvision v2 wrappers
live in ``geometric`` and are re-exported from the top-level package.
"""

from digit_augmentation.transforms.conversion import (
    pil_to_unit_tensor,
    unit_tensor_to_pil,
)
from digit_augmentation.transforms.functional import rotate, shear, shift, zoom

__all__ = [
    "pil_to_unit_tensor",
    "rotate",
    "shear",
    "shift",
    "unit_tensor_to_pil",
    "zoom",
]
