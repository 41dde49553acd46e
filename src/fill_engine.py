"""
Flood fill to color and erase the regions enclosed by the line art.

A fill starts from a seed pixel and spreads to the 4-connected pixels that match it:
    painting matches pixels with the exact same rgba value,
    erasing matches pixels whose rgb channels are all within ERASE_TOLERANCE.

Diagonal neighbors are never visited, a diagonal line of outline pixels blocks the fill.

Outlines (near-black seeds) are never filled and erasing an already white seed does nothing.

Painted pixels get the selected color shaded by the stroke effect of the tool style,
every pixel has one random draw that scales both its color and its alpha.

Changes are made to a snapshot and written back to the buffer in one operation,
a fill that fails midway leaves the buffer untouched.
"""

from dataclasses import dataclass
from typing import Protocol, Self, Final

import numpy as np
from numpy import uint8, uint32, int16, intp, float64, bool_
from numpy.typing import NDArray

from src.classes.pixel_buffer import PixelBuffer
from src.utils import hex_to_rgb, profile
from src.type_utils import RGBColor, HexColor, ToolStyle, FillStatus
from src.consts import (
    BACKGROUND_RGBA, OUTLINE_MAX_CHANNEL, BACKGROUND_MIN_CHANNEL, ERASE_TOLERANCE,
)


class RandomSource(Protocol):
    """Class to reinforce type hinting of random number generators."""

    def random(self: Self) -> float:
        """
        Draws a number.

        Returns:
            number in [0, 1)
        """


@dataclass(frozen=True, slots=True)
class StrokeEffect:
    """
    Dataclass for representing the shading of a tool style.

    Args:
        base opacity, variation magnitude
    """

    opacity: float
    variation: float


STROKE_EFFECTS: Final[dict[ToolStyle, StrokeEffect]] = {
    "solid" : StrokeEffect(opacity=1   , variation=0),
    "pastel": StrokeEffect(opacity=0.7 , variation=0.1),
    "pencil": StrokeEffect(opacity=0.85, variation=0.3),
    "brush" : StrokeEffect(opacity=0.95, variation=0.15),
}
TOOL_STYLES: Final[tuple[ToolStyle, ...]] = tuple(STROKE_EFFECTS)


@dataclass(slots=True)
class FillRequest:
    """
    Dataclass for representing a fill started by the user.

    Args:
        x coordinate, y coordinate, hexadecimal color,
        tool style (default = solid), erasing flag (default = False)
    """

    x: int
    y: int
    hex_color: HexColor
    tool_style: ToolStyle = "solid"
    is_erasing: bool = False


@dataclass(frozen=True, slots=True)
class FillResult:
    """
    Dataclass for representing the outcome of a fill.

    Args:
        status, number of changed pixels (default = 0)
    """

    status: FillStatus
    num_pixels: int = 0

    @property
    def did_fill(self: Self) -> bool:
        """
        Checks if the buffer was changed.

        Returns:
            filled flag
        """

        return self.status == "filled"


def _get_matching_mask(
        pixels: NDArray[uint8], ref_color: NDArray[uint8], is_erasing: bool
) -> NDArray[bool_]:
    """
    Gets the pixels that pass the membership test.

    Args:
        pixels, reference color, erasing flag
    Returns:
        mask
    """

    if is_erasing:
        rgb_diffs: NDArray[int16] = pixels[..., :3].astype(int16)
        rgb_diffs -= ref_color[:3].astype(int16)
        return (np.abs(rgb_diffs) <= ERASE_TOLERANCE).all(axis=2)

    # Packs a color as a uint32 and compares
    return pixels.view(uint32)[..., 0] == ref_color.view(uint32)[0]


def _get_region(mask: NDArray[bool_], seed_x: int, seed_y: int) -> list[int]:
    """
    Gets the pixels connected to the seed with an explicit stack.

    Args:
        mask, seed x, seed y
    Returns:
        indexes of the region in visiting order (x * height + y)
    """

    i: int

    w: int = mask.shape[0]
    h: int = mask.shape[1]
    last_col_start: int = (w - 1) * h

    # Pixels are only written after the traversal so the mask always reflects unvisited pixels
    is_matching: bytes = mask.tobytes()
    visited: bytearray = bytearray(w * h)
    region: list[int] = []

    stack: list[int] = [seed_x * h + seed_y]
    stack_pop, stack_append, region_append = stack.pop, stack.append, region.append
    while stack:
        i = stack_pop()
        if visited[i]:
            continue
        visited[i] = 1
        if not is_matching[i]:
            continue

        region_append(i)
        y: int = i % h
        if i >= h:
            stack_append(i - h)
        if i < last_col_start:
            stack_append(i + h)
        if y != 0:
            stack_append(i - 1)
        if y != h - 1:
            stack_append(i + 1)

    return region


def _get_painted_colors(
        rgb_color: RGBColor, effect: StrokeEffect, num_pixels: int, rng: RandomSource
) -> NDArray[uint8]:
    """
    Shades a color with a stroke effect, one random draw per pixel.

    Args:
        rgb color, stroke effect, number of pixels, random source
    Returns:
        rgba colors
    """

    factors: NDArray[float64]
    if effect.variation == 0:
        factors = np.ones(num_pixels, float64)
    else:
        variations: NDArray[float64] = np.fromiter(
            (rng.random() - 0.5 for _ in range(num_pixels)), float64, num_pixels
        )
        factors = 1 + (effect.variation * variations)

    colors: NDArray[float64] = np.empty((num_pixels, 4), float64)
    colors[:, :3] = np.array(rgb_color, float64)[np.newaxis, :] * factors[:, np.newaxis]
    colors[:, 3] = (255 * effect.opacity) * factors

    # Rounds half up and clamps lighter colors that would overflow
    np.floor(colors + 0.5, out=colors)
    np.clip(colors, 0, 255, out=colors)
    return colors.astype(uint8)


@profile
def fill(
        buffer: PixelBuffer, x: int, y: int, hex_color: HexColor,
        tool_style: ToolStyle, is_erasing: bool, rng: RandomSource | None = None
) -> FillResult:
    """
    Colors or erases the region connected to a pixel.

    Args:
        buffer, seed x, seed y, hexadecimal color, tool style, erasing flag,
        random source (default = None, a new numpy generator)
    Returns:
        result
    """

    if not buffer.is_in_bounds(x, y):
        return FillResult("out_of_bounds")
    rgb_color: RGBColor | None = hex_to_rgb(hex_color)
    if rgb_color is None:
        return FillResult("invalid_color")

    pixels: NDArray[uint8] = buffer.snapshot()
    ref_color: NDArray[uint8] = pixels[x, y].copy()
    if (ref_color[:3] <= OUTLINE_MAX_CHANNEL).all():
        return FillResult("outline")
    if is_erasing and (ref_color[:3] >= BACKGROUND_MIN_CHANNEL).all():
        return FillResult("already_erased")

    mask: NDArray[bool_] = _get_matching_mask(pixels, ref_color, is_erasing)
    region_indexes: NDArray[intp] = np.array(_get_region(mask, x, y), intp)

    flat_pixels: NDArray[uint8] = pixels.reshape(-1, 4)
    if is_erasing:
        flat_pixels[region_indexes] = BACKGROUND_RGBA
    else:
        if rng is None:
            rng = np.random.default_rng()
        flat_pixels[region_indexes] = _get_painted_colors(
            rgb_color, STROKE_EFFECTS[tool_style], region_indexes.size, rng
        )

    buffer.restore(pixels)
    return FillResult("filled", region_indexes.size)


def fill_request(
        buffer: PixelBuffer, request: FillRequest, rng: RandomSource | None = None
) -> FillResult:
    """
    Colors or erases the region connected to the pixel of a request.

    Args:
        buffer, request, random source (default = None, a new numpy generator)
    Returns:
        result
    """

    return fill(
        buffer, request.x, request.y, request.hex_color,
        request.tool_style, request.is_erasing, rng
    )
