"""Bounded geometric transforms for single-channel digit images.

Each function takes an image tensor of shape ``(N, N)`` or ``(1, N, N)`` with
float intensities in ``[0, 1]`` and returns a *new* tensor of the same shape
and dtype.  Parameters left as ``None`` are sampled from their range using the
supplied ``numpy.random.Generator``; explicit parameters are range-checked
before any pixel is touched.  Exposed pixels are filled with
``BACKGROUND_VALUE``.
"""

from __future__ import annotations

import math

import numpy as np
import torch
import torch.nn.functional as nnf
from torchvision.transforms import InterpolationMode
from torchvision.transforms.v2 import functional as F

from digit_augmentation.config import (
    BACKGROUND_VALUE,
    ROTATION_LIMIT,
    SHEAR_LIMIT,
    SHIFT_LIMIT,
    ZOOM_LIMIT,
    AxisRange,
    ShiftRange,
)
from digit_augmentation.params import resolve_or_sample
from digit_augmentation.types import ShiftAmount

ROTATION_EPSILON = 0.1  # degrees
ZOOM_EPSILON = 1e-3
SHEAR_EPSILON = 1e-3


def check_image(image: torch.Tensor, op: str) -> int:
    """Validate image layout and return its side length N."""
    if not isinstance(image, torch.Tensor):
        raise TypeError(f"{op} expects a torch.Tensor, got {type(image)}")
    if not image.is_floating_point():
        raise TypeError(f"{op} expects a floating point image, got {image.dtype}")
    if image.ndim not in (2, 3) or (image.ndim == 3 and image.shape[0] != 1):
        raise ValueError(
            f"{op} expects shape (N, N) or (1, N, N), got {tuple(image.shape)}"
        )
    if image.shape[-1] != image.shape[-2]:
        raise ValueError(f"{op} expects a square image, got {tuple(image.shape)}")
    return int(image.shape[-1])


def _to_chw(image: torch.Tensor, size: int) -> torch.Tensor:
    return image.reshape(1, size, size).to(torch.float32)


def _restore(result: torch.Tensor, image: torch.Tensor) -> torch.Tensor:
    return result.clamp(0.0, 1.0).reshape(image.shape).to(image.dtype)


def rotate(
    image: torch.Tensor,
    angle: float | None = None,
    bounds: AxisRange | None = None,
    rng: np.random.Generator | None = None,
) -> torch.Tensor:
    """Rotate content about the image center.

    Positive angles rotate counter-clockwise.  The default bound of
    ``[-15, 15]`` degrees keeps 6 and 9 distinguishable.

    Args:
        image: Image tensor, ``(N, N)`` or ``(1, N, N)``.
        angle: Rotation in degrees; sampled from ``bounds`` if ``None``.
        bounds: Allowed range, at most ``[-15, 15]``.
        rng: Generator used for sampling.

    Raises:
        RangeViolation: ``angle`` is outside ``bounds``.
    """
    size = check_image(image, "rotate")
    angle = resolve_or_sample("rotation angle", angle, bounds, ROTATION_LIMIT, rng)
    if abs(angle) < ROTATION_EPSILON:
        return image.clone()

    with torch.no_grad():
        rotated = F.rotate(
            _to_chw(image, size),
            angle=angle,
            interpolation=InterpolationMode.BILINEAR,
            fill=[BACKGROUND_VALUE],
        )
    return _restore(rotated, image)


def shift(
    image: torch.Tensor,
    amount: ShiftAmount | None = None,
    bounds: ShiftRange | None = None,
    rng: np.random.Generator | None = None,
) -> torch.Tensor:
    """Translate content by whole pixels, filling the exposed border.

    The image is zero-padded on the side content moves away from, then the
    ``N x N`` window that keeps content at its shifted position is cropped.

    Args:
        image: Image tensor, ``(N, N)`` or ``(1, N, N)``.
        amount: ``{"width": w, "height": h}``; positive ``w`` moves content
            right, positive ``h`` moves it down.  Missing axes are sampled.
        bounds: Per-axis pixel ranges, at most ``[-4, 4]`` each.
        rng: Generator used for sampling.

    Raises:
        RangeViolation: either axis is outside its range (width is checked
            first).
    """
    size = check_image(image, "shift")
    amount = amount or {}
    bounds = bounds or ShiftRange()
    width = int(
        resolve_or_sample(
            "width shift", amount.get("width"), bounds.width, SHIFT_LIMIT, rng, integer=True
        )
    )
    height = int(
        resolve_or_sample(
            "height shift", amount.get("height"), bounds.height, SHIFT_LIMIT, rng, integer=True
        )
    )
    if width == 0 and height == 0:
        return image.clone()

    left, right = max(width, 0), max(-width, 0)
    top, bottom = max(height, 0), max(-height, 0)
    with torch.no_grad():
        padded = nnf.pad(image, (left, right, top, bottom), value=BACKGROUND_VALUE)
        shifted = padded[..., bottom : bottom + size, right : right + size].clone()
    return shifted


def zoom(
    image: torch.Tensor,
    factor: float | None = None,
    bounds: AxisRange | None = None,
    rng: np.random.Generator | None = None,
) -> torch.Tensor:
    """Rescale content about the center, keeping the canvas size.

    The image is bilinearly resized to ``floor(N * factor + 0.5)``.  Enlargements
    are center-cropped back to ``N`` (strokes get thicker, edges may clip);
    reductions are zero-padded symmetrically.

    Args:
        image: Image tensor, ``(N, N)`` or ``(1, N, N)``.
        factor: Scale factor; sampled from ``bounds`` if ``None``.
        bounds: Allowed range, at most ``[0.8, 1.2]``.
        rng: Generator used for sampling.

    Raises:
        RangeViolation: ``factor`` is outside ``bounds``.
    """
    size = check_image(image, "zoom")
    factor = resolve_or_sample("zoom factor", factor, bounds, ZOOM_LIMIT, rng)
    if abs(factor - 1.0) < ZOOM_EPSILON:
        return image.clone()

    # Half-way sizes round up
    new_size = math.floor(size * factor + 0.5)
    with torch.no_grad():
        resized = F.resize(
            _to_chw(image, size),
            [new_size, new_size],
            interpolation=InterpolationMode.BILINEAR,
            antialias=False,
        )
        if new_size >= size:
            start = (new_size - size) // 2
            zoomed = resized[..., start : start + size, start : start + size]
        else:
            before = (size - new_size) // 2
            after = size - new_size - before
            zoomed = nnf.pad(
                resized, (before, after, before, after), value=BACKGROUND_VALUE
            )
    return _restore(zoomed, image)


def shear(
    image: torch.Tensor,
    factor: float | None = None,
    bounds: AxisRange | None = None,
    rng: np.random.Generator | None = None,
) -> torch.Tensor:
    """Apply a horizontal shear ``x' = x + factor * y`` anchored at the top row.

    Rows further down move further sideways, simulating handwriting slant.
    Sampling is bilinear with zero padding, so output stays in ``[0, 1]``.

    Args:
        image: Image tensor, ``(N, N)`` or ``(1, N, N)``.
        factor: Shear coefficient; sampled from ``bounds`` if ``None``.
        bounds: Allowed range, at most ``[-0.2, 0.2]``.
        rng: Generator used for sampling.

    Raises:
        RangeViolation: ``factor`` is outside ``bounds``.
    """
    size = check_image(image, "shear")
    factor = resolve_or_sample("shear factor", factor, bounds, SHEAR_LIMIT, rng)
    if abs(factor) < SHEAR_EPSILON or size == 1:
        return image.clone()

    with torch.no_grad():
        coords = torch.arange(size, dtype=torch.float32)
        ys, xs = torch.meshgrid(coords, coords, indexing="ij")
        # Inverse mapping: each output pixel reads from x - factor * y
        src_x = xs - factor * ys
        scale = 2.0 / (size - 1)
        grid = torch.stack((src_x * scale - 1.0, ys * scale - 1.0), dim=-1)
        sheared = nnf.grid_sample(
            _to_chw(image, size).unsqueeze(0),
            grid.unsqueeze(0),
            mode="bilinear",
            padding_mode="zeros",
            align_corners=True,
        )
    return _restore(sheared, image)
