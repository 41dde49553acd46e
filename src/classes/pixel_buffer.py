"""
Rectangular rgba pixel grid the fills are applied to.

Pixels are stored in a (width, height, 4) uint8 array indexed [x, y],
the same layout pygame.surfarray uses, so it converts to surfaces without transposing.
"""

from typing import Self

import pygame as pg
import numpy as np
from numpy import uint8
from numpy.typing import NDArray

from src.utils import get_pixels
from src.type_utils import RGBAColor


class OutOfBoundsError(Exception):
    """Exception raised when a coordinate is outside the buffer."""

    __slots__ = (
        "x", "y",
    )

    def __init__(self: Self, x: int, y: int) -> None:
        """
        Initializes the exception.

        Args:
            x coordinate, y coordinate
        """

        super().__init__(f"({x}, {y}) is outside the buffer.")
        self.x: int = x
        self.y: int = y


class BufferAccessError(Exception):
    """Exception raised when the pixels can't be read from or written to the buffer."""

    __slots__ = (
        "error_str",
    )

    def __init__(self: Self, error_str: str) -> None:
        """
        Initializes the exception.

        Args:
            error string
        """

        super().__init__(error_str)
        self.error_str: str = error_str


class PixelBuffer:
    """Class to read and write the pixels of a fixed size rgba grid."""

    __slots__ = (
        "w", "h", "pixels",
    )

    def __init__(self: Self, w: int, h: int, pixels: NDArray[uint8] | None = None) -> None:
        """
        Creates the grid, opaque white if no pixels are given.

        Args:
            width, height, pixels indexed [x, y] (copied, default = None)
        Raises:
            ValueError: on invalid dimensions or pixels shape
        """

        if w <= 0 or h <= 0:
            raise ValueError(f"Invalid buffer size: {w}x{h}.")

        self.w: int = w
        self.h: int = h
        if pixels is None:
            self.pixels: NDArray[uint8] = np.full((w, h, 4), 255, uint8)
        else:
            if pixels.shape != (w, h, 4):
                raise ValueError(f"Pixels shape {pixels.shape} doesn't match {w}x{h}.")
            self.pixels = np.array(pixels, uint8, order="C")

    @classmethod
    def from_bytes(cls: type[Self], w: int, h: int, data: bytes) -> Self:
        """
        Creates a buffer from row-major rgba channels.

        Args:
            width, height, channels
        Returns:
            buffer
        Raises:
            ValueError: if the data length isn't width * height * 4
        """

        if len(data) != w * h * 4:
            raise ValueError(f"Expected {w * h * 4} bytes, got {len(data)}.")

        rows: NDArray[uint8] = np.frombuffer(data, uint8).reshape((h, w, 4))
        return cls(w, h, rows.transpose((1, 0, 2)))

    @classmethod
    def from_surface(cls: type[Self], img: pg.Surface) -> Self:
        """
        Creates a buffer from the pixels of a surface.

        Args:
            image
        Returns:
            buffer
        Raises:
            BufferAccessError: if the surface can't be read
        """

        try:
            pixels: NDArray[uint8] = get_pixels(img)
        except (pg.error, ValueError) as e:
            raise BufferAccessError(str(e)) from e

        return cls(img.get_width(), img.get_height(), pixels)

    def is_in_bounds(self: Self, x: int, y: int) -> bool:
        """
        Checks if a coordinate is inside the buffer.

        Args:
            x coordinate, y coordinate
        Returns:
            inside flag
        """

        return 0 <= x < self.w and 0 <= y < self.h

    def get(self: Self, x: int, y: int) -> RGBAColor:
        """
        Gets a pixel.

        Args:
            x coordinate, y coordinate
        Returns:
            rgba color
        Raises:
            OutOfBoundsError: if the coordinate is outside the buffer
        """

        if not self.is_in_bounds(x, y):
            raise OutOfBoundsError(x, y)

        r, g, b, a = self.pixels[x, y].tolist()
        return r, g, b, a

    def set(self: Self, x: int, y: int, r: int, g: int, b: int, a: int) -> None:
        """
        Sets a pixel.

        Args:
            x coordinate, y coordinate, red, green, blue, alpha
        Raises:
            OutOfBoundsError: if the coordinate is outside the buffer
        """

        if not self.is_in_bounds(x, y):
            raise OutOfBoundsError(x, y)

        self.pixels[x, y] = (r, g, b, a)

    def snapshot(self: Self) -> NDArray[uint8]:
        """
        Copies every pixel.

        Returns:
            pixels
        """

        return self.pixels.copy()

    def restore(self: Self, pixels: NDArray[uint8]) -> None:
        """
        Overwrites every pixel in one operation.

        Args:
            pixels
        Raises:
            BufferAccessError: if the pixels shape doesn't match the buffer
        """

        if pixels.shape != self.pixels.shape:
            raise BufferAccessError(
                f"Can't restore pixels of shape {pixels.shape} into {self.pixels.shape}."
            )

        self.pixels[...] = pixels

    def to_bytes(self: Self) -> bytes:
        """
        Gets the channels in row-major rgba order.

        Returns:
            channels
        """

        return self.pixels.transpose((1, 0, 2)).tobytes()

    def to_surface(self: Self) -> pg.Surface:
        """
        Creates a surface with the pixels.

        Returns:
            image
        Raises:
            BufferAccessError: if the surface can't be created
        """

        try:
            img: pg.Surface = pg.Surface((self.w, self.h), pg.SRCALPHA)
            pg.surfarray.blit_array(img, self.pixels[..., :3])
            pg.surfarray.pixels_alpha(img)[...] = self.pixels[..., 3]
        except (pg.error, ValueError) as e:
            raise BufferAccessError(str(e)) from e

        return img
