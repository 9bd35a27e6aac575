"""Shared pytest fixtures for digit_augmentation tests."""

import numpy as np
import pytest
import torch


@pytest.fixture()
def ones_image() -> torch.Tensor:
    """28x28 all-ones single-channel image, shape (1, 28, 28)."""
    return torch.ones(1, 28, 28)


@pytest.fixture()
def digit_image() -> torch.Tensor:
    """Crude "7" glyph: a top bar and a slanted stroke, shape (1, 28, 28).

    Asymmetric so that different augmentations give visibly different output.
    """
    img = torch.zeros(1, 28, 28)
    img[0, 6:9, 7:21] = 1.0
    for row in range(9, 23):
        col = 20 - (row - 9) // 2
        img[0, row, col - 1 : col + 2] = 1.0
    return img


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
