"""Type aliases and TypedDicts for digit_augmentation inter-module contracts."""

from typing import TypedDict


class ShiftAmount(TypedDict, total=False):
    """Signed pixel translation for ``shift``.

    width: Horizontal shift, positive moves content right.
    height: Vertical shift, positive moves content down.

    Either key may be omitted, in which case that axis is sampled.
    """

    width: int
    height: int
