"""Error types raised by the augmentation transforms."""

from __future__ import annotations


class RangeViolation(ValueError):
    """An explicit transform parameter lies outside its permitted range.

    Raised before any geometric computation runs, so no partially transformed
    image is ever observable.

    Args:
        name: Parameter or axis name (e.g. ``"rotation angle"``, ``"width"``).
        value: The offending value.
        low: Lower bound of the permitted range.
        high: Upper bound of the permitted range.
    """

    def __init__(self, name: str, value: float, low: float, high: float) -> None:
        self.name = name
        self.value = value
        self.low = low
        self.high = high
        super().__init__(
            f"{name} {value} outside allowed range [{low}, {high}]"
        )
