"""Functions shared between files."""

import re

from math import floor
from collections.abc import Callable
from sys import stderr
from typing import Final, Any

import pygame as pg
import numpy as np
import cv2
from numpy import uint8, uint16
from numpy.typing import NDArray

from src.type_utils import WH, RGBColor, HexColor
from src.consts import WIN_MARGIN

_HEX_COLOR_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE
)

_FUNCS_NAMES: Final[list[str]] = []
_FUNCS_TOT_TIMES: Final[list[float]] = []
_FUNCS_NUM_CALLS: Final[list[int]] = []


def profile(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to time the average runtime of a function."""

    func_i: int = len(_FUNCS_NAMES)
    _FUNCS_NAMES.append(func.__qualname__)
    _FUNCS_TOT_TIMES.append(0)
    _FUNCS_NUM_CALLS.append(0)

    def _upt_info(*args: Any, **kwargs: Any) -> Any:
        """Runs a function and updates its total runtime and number of calls."""

        start: int = pg.time.get_ticks()
        try:
            return func(*args, **kwargs)
        finally:
            _FUNCS_TOT_TIMES[func_i] += pg.time.get_ticks() - start
            _FUNCS_NUM_CALLS[func_i] += 1

    _upt_info.__name__ = func.__name__
    _upt_info.__qualname__ = func.__qualname__
    _upt_info.__doc__ = func.__doc__
    return _upt_info


def print_funcs_profiles() -> None:
    """Prints the info of every profiled function that was called."""

    name: str
    tot_time: float
    num_calls: int

    for name, tot_time, num_calls in zip(_FUNCS_NAMES, _FUNCS_TOT_TIMES, _FUNCS_NUM_CALLS):
        if num_calls:
            print(f"{name}: {tot_time / num_calls:.4f}ms | calls: {num_calls}", file=stderr)


def hex_to_rgb(hex_color: HexColor) -> RGBColor | None:
    """
    Parses a color in the form #RRGGBB, the # is optional.

    Args:
        hexadecimal color
    Returns:
        rgb color (None if malformed)
    """

    match: re.Match[str] | None = _HEX_COLOR_PATTERN.fullmatch(hex_color)
    if match is None:
        return None

    return int(match[1], 16), int(match[2], 16), int(match[3], 16)


def display_to_buffer_coord(display_coord: float, buffer_dim: int, display_dim: int) -> int:
    """
    Converts a coordinate relative to the displayed canvas to a buffer coordinate.

    Args:
        display coordinate, buffer dimension, display dimension
    Returns:
        buffer coordinate (-1 if the display has no size)
    """

    if display_dim <= 0:
        return -1
    return floor(display_coord * (buffer_dim / display_dim))


def fit_canvas_size(
        win_w: int, win_h: int, buffer_w: int, buffer_h: int,
        max_w: int, toolbar_h: int
) -> WH:
    """
    Gets the largest display size that keeps the buffer ratio and leaves room for the toolbar.

    Args:
        window width, window height, buffer width, buffer height, max width, toolbar height
    Returns:
        width, height
    """

    w: float = min(win_w - (WIN_MARGIN * 2), max_w)
    h: float = w * (buffer_h / buffer_w)

    available_h: int = win_h - toolbar_h - (WIN_MARGIN * 2)
    if h > available_h:
        h = available_h
        w = h * (buffer_w / buffer_h)

    return max(floor(w), 1), max(floor(h), 1)


def get_pixels(img: pg.Surface) -> NDArray[uint8]:
    """
    Gets the rgba values of the pixels in an image.

    Args:
        image
    Returns:
        pixels
    """

    return np.dstack((
        pg.surfarray.array3d(img),
        pg.surfarray.array_alpha(img)
    ))


def rasterize_artwork(img_arr: NDArray[uint8], w: int, h: int) -> NDArray[uint8]:
    """
    Scales the artwork to fit, centers it and flattens it on an opaque white page.

    Args:
        rgba pixels indexed [x, y], page width, page height
    Returns:
        page pixels
    """

    img_w: int = img_arr.shape[0]
    img_h: int = img_arr.shape[1]
    scale: float = min(w / img_w, h / img_h)
    scaled_w: int = min(max(round(img_w * scale), 1), w)
    scaled_h: int = min(max(round(img_h * scale), 1), h)

    scaled_arr: NDArray[uint8] = img_arr
    if (scaled_w, scaled_h) != (img_w, img_h):
        # Nearest keeps outlines hard when enlarging, area avoids moire when shrinking
        interpolation: int = cv2.INTER_AREA if scale < 1 else cv2.INTER_NEAREST
        scaled_arr = cv2.resize(
            np.ascontiguousarray(img_arr),
            (scaled_h, scaled_w),
            interpolation=interpolation
        ).astype(uint8)

    alpha: NDArray[uint16] = scaled_arr[..., 3:4].astype(uint16)
    rgb: NDArray[uint16] = scaled_arr[..., :3].astype(uint16)
    rgb *= alpha
    rgb += 255 * (255 - alpha) + 127
    rgb //= 255

    page: NDArray[uint8] = np.full((w, h, 4), 255, uint8)
    offset_x: int = (w - scaled_w) // 2
    offset_y: int = (h - scaled_h) // 2
    page[offset_x:offset_x + scaled_w, offset_y:offset_y + scaled_h, :3] = rgb
    return page
