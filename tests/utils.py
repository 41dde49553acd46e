"""Functions/Classes shared between tests."""

from typing import Self

import numpy as np
from numpy import uint8
from numpy.typing import NDArray

from src.classes.pixel_buffer import PixelBuffer
from src.type_utils import RGBAColor


class FixedRandom:
    """Random source that repeats a sequence of numbers."""

    __slots__ = (
        "_values", "_i", "num_calls",
    )

    def __init__(self: Self, *values: float) -> None:
        """
        Initializes the sequence.

        Args:
            numbers in [0, 1)
        """

        self._values: tuple[float, ...] = values
        self._i: int = 0
        self.num_calls: int = 0

    def random(self: Self) -> float:
        """
        Gets the next number of the sequence.

        Returns:
            number
        """

        value: float = self._values[self._i]
        self._i = (self._i + 1) % len(self._values)
        self.num_calls += 1
        return value


class FailingRandom:
    """Random source that fails after a number of draws."""

    def __init__(self: Self, num_draws: int) -> None:
        """
        Initializes the draws left.

        Args:
            number of draws before failing
        """

        self.num_draws: int = num_draws

    def random(self: Self) -> float:
        """
        Gets 0.5 until there are no draws left.

        Returns:
            number
        Raises:
            RuntimeError: when there are no draws left
        """

        if self.num_draws == 0:
            raise RuntimeError("No draws left.")
        self.num_draws -= 1
        return 0.5


def make_pixels(w: int, h: int, color: RGBAColor) -> NDArray[uint8]:
    """
    Creates pixels with a single color.

    Args:
        width, height, color
    Returns:
        pixels
    """

    return np.tile(np.array(color, uint8), (w, h, 1))


def make_buffer(w: int, h: int, color: RGBAColor) -> PixelBuffer:
    """
    Creates a buffer with a single color.

    Args:
        width, height, color
    Returns:
        buffer
    """

    return PixelBuffer(w, h, make_pixels(w, h, color))
