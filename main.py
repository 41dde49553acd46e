"""
Coloring book for line art.

----------INFO----------
The page is a fixed line-art image rasterized on a pixel buffer,
clicking or tapping inside a region fills it with the selected color.

Toolbar:
    swatches for the colors of the active palette,
    tool styles (solid, pastel, pencil, brush) that shade every filled pixel differently,
    an eraser that restores regions to white,
    a palette switcher and a reset button.

Keyboard:
    1-9 and 0 select a swatch, E toggles the eraser, S cycles the style,
    P switches palette, R resets the page, ESCAPE quits.

Fills:
    They run on a separate thread so large regions don't freeze the window,
    a click while a fill is still running is ignored.

Inactivity:
    After inactivity_reset_s seconds without any press the page is reset,
    the timer goes through the same reset as the button so it waits for an active fill.

Settings are in assets/data/settings.json and palettes in assets/data/palettes,
a different settings file can be passed as the first command line argument.
"""

import os

from tkinter import messagebox
from threading import Thread
from pathlib import Path
from sys import argv, stderr
from traceback import format_exc
from typing import Self, Final, Any

os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"
import pygame as pg
from pygame.locals import *
import numpy as np
from numpy import uint8
from numpy.typing import NDArray

from src.classes.coloring_canvas import ColoringCanvas
from src.classes.toolbar import Toolbar

from src.fill_engine import FillRequest
from src.settings import load_settings, load_palettes
from src.file_utils import try_load_artwork
from src.utils import (
    display_to_buffer_coord, fit_canvas_size, rasterize_artwork,
    print_funcs_profiles,
)
from src.type_utils import ToolbarAction, Palette
from src.consts import (
    BG_COLOR, DARKER_GRAY,
    MOUSE_LEFT,
    WIN_INIT_W, WIN_INIT_H, WIN_MIN_W, WIN_MIN_H, WIN_MARGIN, TOOLBAR_H,
)

pg.init()

_WIN: Final[pg.Window] = pg.Window(
    "Coloring Book", (WIN_INIT_W, WIN_INIT_H),
    hidden=True, resizable=True, allow_high_dpi=True
)
_WIN_SURF: Final[pg.Surface] = _WIN.get_surface()
_WIN.minimum_size = (WIN_MIN_W, WIN_MIN_H)

_INACTIVITY_RESET: Final[int] = pg.event.custom_type()
_PRESS_EVENTS: Final[tuple[int, ...]] = (MOUSEBUTTONDOWN, FINGERDOWN, KEYDOWN)
_COLOR_KEYS: Final[tuple[int, ...]] = (K_1, K_2, K_3, K_4, K_5, K_6, K_7, K_8, K_9, K_0)

_SETTINGS_PATH: Final[Path] = Path("assets", "data", "settings.json")
_PALETTES_DIR_PATH: Final[Path] = Path("assets", "data", "palettes")


def _get_artwork(settings: dict[str, Any]) -> NDArray[uint8]:
    """
    Loads and rasterizes the artwork, a blank page is used on failure.

    Args:
        settings
    Returns:
        page pixels
    """

    error_str: str | None

    w: int = settings["canvas_w"]
    h: int = settings["canvas_h"]
    artwork_path: Path = Path(settings["artwork"])
    img_arr: NDArray[uint8] | None
    img_arr, error_str = try_load_artwork(artwork_path)
    if img_arr is None:
        messagebox.showerror("Artwork Load Failed", f"{artwork_path.name}: {error_str}")
        return np.full((w, h, 4), 255, uint8)

    return rasterize_artwork(img_arr, w, h)


class _ColoringBook:
    """Coloring book for line art."""

    __slots__ = (
        "_settings", "_canvas", "_toolbar", "_font",
        "_canvas_rect", "_page_img", "_drawn_num_changes", "_clock",
    )

    def __init__(self: Self) -> None:
        """Loads the settings, palettes and artwork and shows the window."""

        error_str: str | None
        palettes: list[Palette]
        errors: list[str]

        settings_path: Path = Path(argv[1]) if len(argv) > 1 else _SETTINGS_PATH
        self._settings: dict[str, Any]
        self._settings, error_str = load_settings(settings_path)
        if error_str is not None:
            messagebox.showerror("Settings Load Failed", f"{settings_path.name}: {error_str}")

        palettes, errors = load_palettes(_PALETTES_DIR_PATH)
        if errors != []:
            messagebox.showerror("Palettes Load Failed", "\n".join(errors))

        self._canvas: ColoringCanvas = ColoringCanvas(_get_artwork(self._settings))
        self._toolbar: Toolbar = Toolbar(
            palettes,
            self._settings["palette_i"], self._settings["color_i"], self._settings["tool_style"]
        )
        self._font: pg.font.Font = pg.font.Font(None, 24)

        self._canvas_rect: pg.Rect = pg.Rect(0, 0, 1, 1)
        self._page_img: pg.Surface = pg.Surface((1, 1))
        self._drawn_num_changes: int = -1
        self._clock: pg.time.Clock = pg.time.Clock()

        self._resize()
        _WIN.show()
        _WIN.focus()
        self._restart_inactivity_timer()

    def _restart_inactivity_timer(self: Self) -> None:
        """Schedules the reset after the inactivity time, replacing the previous one."""

        pg.time.set_timer(_INACTIVITY_RESET, self._settings["inactivity_reset_s"] * 1_000, loops=1)

    def _resize(self: Self) -> None:
        """Fits the page in the window and places the toolbar under it."""

        win_w: int = _WIN_SURF.get_width()
        win_h: int = _WIN_SURF.get_height()
        self._canvas_rect.size = fit_canvas_size(
            win_w, win_h, self._canvas.buffer.w, self._canvas.buffer.h,
            self._settings["max_display_w"], TOOLBAR_H
        )
        self._canvas_rect.midtop = (win_w // 2, WIN_MARGIN)
        self._toolbar.resize(self._canvas_rect.bottom + WIN_MARGIN, win_w)

        # Forces the page image to be scaled again
        self._drawn_num_changes = -1

    def _fill(self: Self, request: FillRequest) -> None:
        """
        Fills a region, runs on a separate thread.

        Args:
            request
        """

        self._canvas.fill(request, should_wait=False)

    def _handle_click(self: Self, x: int, y: int) -> None:
        """
        Fills the page or uses the toolbar.

        Args:
            x coordinate, y coordinate
        """

        if self._canvas_rect.collidepoint(x, y):
            request: FillRequest = FillRequest(
                display_to_buffer_coord(
                    x - self._canvas_rect.x, self._canvas.buffer.w, self._canvas_rect.w
                ),
                display_to_buffer_coord(
                    y - self._canvas_rect.y, self._canvas.buffer.h, self._canvas_rect.h
                ),
                self._toolbar.hex_color, self._toolbar.tool_style, self._toolbar.is_erasing
            )
            Thread(target=self._fill, args=(request,), daemon=True).start()
            return

        action: ToolbarAction | None = self._toolbar.get_clicked(x, y)
        if action is not None and self._toolbar.handle_action(action):
            self._canvas.reset()

    def _handle_key_press(self: Self, k: int) -> None:
        """
        Handles the keyboard shortcuts.

        Args:
            key
        Raises:
            SystemExit: on escape
        """

        if   k == K_ESCAPE:
            raise SystemExit
        elif k in _COLOR_KEYS:
            self._toolbar.select_color(_COLOR_KEYS.index(k))
        elif k == K_e:
            self._toolbar.handle_action(("eraser", None))
        elif k == K_s:
            self._toolbar.cycle_style()
        elif k == K_p:
            self._toolbar.switch_palette()
        elif k == K_r:
            self._canvas.reset()

    def _handle_events(self: Self) -> None:
        """
        Handles the events.

        Raises:
            SystemExit: when the window is closed
        """

        event: pg.Event

        for event in pg.event.get():
            if event.type in (QUIT, WINDOWCLOSE):
                raise SystemExit

            if event.type in _PRESS_EVENTS:
                self._restart_inactivity_timer()

            if   event.type == MOUSEBUTTONDOWN and event.button == MOUSE_LEFT:
                self._handle_click(*event.pos)
            elif event.type == KEYDOWN:
                self._handle_key_press(event.key)
            elif event.type == WINDOWSIZECHANGED:
                self._resize()
            elif event.type == _INACTIVITY_RESET:
                self._canvas.reset()

    def _handle_draw(self: Self) -> None:
        """Draws the page and the toolbar, the page image is scaled only when it changed."""

        num_changes: int = self._canvas.num_changes
        if num_changes != self._drawn_num_changes and not self._canvas.is_busy:
            self._page_img = pg.transform.smoothscale(
                self._canvas.to_surface(), self._canvas_rect.size
            )
            self._drawn_num_changes = num_changes

        _WIN_SURF.fill(BG_COLOR)
        _WIN_SURF.blit(self._page_img, self._canvas_rect)
        pg.draw.rect(_WIN_SURF, DARKER_GRAY, self._canvas_rect.inflate(2, 2), width=1)
        self._toolbar.draw(_WIN_SURF, self._font)
        _WIN.flip()

    def run(self: Self) -> None:
        """App loop."""

        try:
            while True:
                self._clock.tick(self._settings["fps_cap"])
                self._handle_events()
                self._handle_draw()
        except (SystemExit, KeyboardInterrupt):
            pass
        except Exception:
            print(format_exc(), file=stderr)

        pg.quit()


if __name__ == "__main__":
    _ColoringBook().run()
    print_funcs_profiles()
