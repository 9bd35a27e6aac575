"""Conversion between grayscale PIL images and unit-range float tensors."""

from __future__ import annotations

import torch
from PIL import Image
from torchvision.transforms.v2 import functional as F


def pil_to_unit_tensor(img: Image.Image) -> torch.Tensor:
    """Convert a PIL image to a ``(1, H, W)`` float32 tensor in ``[0, 1]``.

    Non-grayscale images are converted to mode ``"L"`` first.
    """
    if img.mode != "L":
        img = img.convert("L")
    return F.to_dtype(F.pil_to_tensor(img), torch.float32, scale=True)


def unit_tensor_to_pil(tensor: torch.Tensor) -> Image.Image:
    """Convert a ``(1, H, W)`` or ``(H, W)`` unit-range tensor to a mode ``"L"`` image."""
    if tensor.ndim == 2:
        tensor = tensor.unsqueeze(0)
    as_uint8 = F.to_dtype(tensor.clamp(0.0, 1.0), torch.uint8, scale=True)
    return F.to_pil_image(as_uint8, mode="L")
