"""
Toolbar under the page with the color swatches and the tool buttons.

The first row has a swatch for every color of the active palette,
the second one has the tool styles, the eraser, the palette switcher and the reset button.
"""

from typing import Self, Final

import pygame as pg

from src.fill_engine import TOOL_STYLES
from src.type_utils import HexColor, ToolStyle, ToolbarAction, Palette
from src.consts import BLACK, WHITE, LIGHT_GRAY, DARKER_GRAY

_SWATCH_RADIUS: Final[int] = 18
_SWATCH_GAP: Final[int] = 10
_BUTTON_W: Final[int] = 92
_BUTTON_H: Final[int] = 34
_BUTTON_GAP: Final[int] = 8
_ROWS_GAP: Final[int] = 16


class Toolbar:
    """Class to pick the color, tool style and eraser and to request a reset."""

    __slots__ = (
        "palettes", "palette_i", "color_i", "tool_style", "is_erasing",
        "swatch_rects", "style_rects", "eraser_rect", "palette_rect", "reset_rect",
        "_top", "_win_w",
    )

    def __init__(
            self: Self, palettes: list[Palette],
            palette_i: int = 0, color_i: int = 0, tool_style: ToolStyle = "solid"
    ) -> None:
        """
        Sets the selection and creates the rects.

        Args:
            palettes (not empty), palette index (default = 0), color index (default = 0),
            tool style (default = solid)
        """

        self.palettes: list[Palette] = palettes
        self.palette_i: int = min(palette_i, len(self.palettes) - 1)
        self.color_i: int = min(color_i, len(self.palettes[self.palette_i]["colors"]) - 1)
        self.tool_style: ToolStyle = tool_style
        self.is_erasing: bool = False

        self.swatch_rects: list[pg.Rect] = []
        self.style_rects: dict[ToolStyle, pg.Rect] = {}
        self.eraser_rect: pg.Rect = pg.Rect(0, 0, _BUTTON_W, _BUTTON_H)
        self.palette_rect: pg.Rect = pg.Rect(0, 0, _BUTTON_W, _BUTTON_H)
        self.reset_rect: pg.Rect = pg.Rect(0, 0, _BUTTON_W, _BUTTON_H)
        self._top: int = 0
        self._win_w: int = 0

    @property
    def colors(self: Self) -> list[HexColor]:
        """
        Gets the colors of the active palette.

        Returns:
            hexadecimal colors
        """

        return list(self.palettes[self.palette_i]["colors"].values())

    @property
    def hex_color(self: Self) -> HexColor:
        """
        Gets the selected color.

        Returns:
            hexadecimal color
        """

        return self.colors[self.color_i]

    def resize(self: Self, top: int, win_w: int) -> None:
        """
        Places the swatches and buttons centered under a y coordinate.

        Args:
            top y, window width
        """

        self._top, self._win_w = top, win_w

        num_colors: int = len(self.colors)
        swatch_dim: int = _SWATCH_RADIUS * 2
        row_w: int = (num_colors * swatch_dim) + ((num_colors - 1) * _SWATCH_GAP)
        x: int = (win_w - row_w) // 2
        self.swatch_rects = []
        for _ in range(num_colors):
            self.swatch_rects.append(pg.Rect(x, top, swatch_dim, swatch_dim))
            x += swatch_dim + _SWATCH_GAP

        num_buttons: int = len(TOOL_STYLES) + 3
        row_w = (num_buttons * _BUTTON_W) + ((num_buttons - 1) * _BUTTON_GAP)
        x = (win_w - row_w) // 2
        y: int = top + swatch_dim + _ROWS_GAP
        self.style_rects = {}
        for style in TOOL_STYLES:
            self.style_rects[style] = pg.Rect(x, y, _BUTTON_W, _BUTTON_H)
            x += _BUTTON_W + _BUTTON_GAP

        for rect in (self.eraser_rect, self.palette_rect, self.reset_rect):
            rect.topleft = (x, y)
            x += _BUTTON_W + _BUTTON_GAP

    def get_clicked(self: Self, x: int, y: int) -> ToolbarAction | None:
        """
        Gets the element under a click.

        Args:
            x coordinate, y coordinate
        Returns:
            action (can be None)
        """

        i: int
        rect: pg.Rect

        for i, rect in enumerate(self.swatch_rects):
            # Swatches are circles
            if (x - rect.centerx) ** 2 + (y - rect.centery) ** 2 <= _SWATCH_RADIUS ** 2:
                return "color", i

        for style, rect in self.style_rects.items():
            if rect.collidepoint(x, y):
                return "style", style
        if self.eraser_rect.collidepoint(x, y):
            return "eraser", None
        if self.palette_rect.collidepoint(x, y):
            return "palette", None
        if self.reset_rect.collidepoint(x, y):
            return "reset", None

        return None

    def select_color(self: Self, color_i: int) -> None:
        """
        Selects a color of the active palette, turning off the eraser.

        Args:
            color index
        """

        if 0 <= color_i < len(self.colors):
            self.color_i = color_i
            self.is_erasing = False

    def cycle_style(self: Self) -> None:
        """Selects the next tool style."""

        style_i: int = TOOL_STYLES.index(self.tool_style)
        self.tool_style = TOOL_STYLES[(style_i + 1) % len(TOOL_STYLES)]
        self.is_erasing = False

    def switch_palette(self: Self) -> None:
        """Activates the next palette, keeping the color index when possible."""

        self.palette_i = (self.palette_i + 1) % len(self.palettes)
        self.color_i = min(self.color_i, len(self.colors) - 1)
        self.resize(self._top, self._win_w)

    def handle_action(self: Self, action: ToolbarAction) -> bool:
        """
        Changes the selection with an action.

        Args:
            action
        Returns:
            reset requested flag
        """

        if   action[0] == "color":
            self.select_color(action[1])
        elif action[0] == "style":
            self.tool_style = action[1]
            self.is_erasing = False
        elif action[0] == "eraser":
            self.is_erasing = not self.is_erasing
        elif action[0] == "palette":
            self.switch_palette()

        return action[0] == "reset"

    def _draw_button(
            self: Self, surf: pg.Surface, font: pg.font.Font,
            rect: pg.Rect, text: str, is_selected: bool
    ) -> None:
        """
        Draws a rounded button with centered text.

        Args:
            surface, font, rect, text, selected flag
        """

        pg.draw.rect(surf, DARKER_GRAY if is_selected else LIGHT_GRAY, rect, border_radius=6)
        text_img: pg.Surface = font.render(text, True, WHITE if is_selected else BLACK)
        surf.blit(text_img, text_img.get_rect(center=rect.center))

    def draw(self: Self, surf: pg.Surface, font: pg.font.Font) -> None:
        """
        Draws the swatches and buttons, highlighting the selection.

        Args:
            surface, font
        """

        i: int
        rect: pg.Rect

        for i, rect in enumerate(self.swatch_rects):
            pg.draw.circle(surf, pg.Color(self.colors[i]), rect.center, _SWATCH_RADIUS)
            is_selected: bool = i == self.color_i and not self.is_erasing
            pg.draw.circle(
                surf, DARKER_GRAY if is_selected else LIGHT_GRAY, rect.center, _SWATCH_RADIUS,
                width=3 if is_selected else 2
            )

        for style, rect in self.style_rects.items():
            self._draw_button(
                surf, font, rect, style.capitalize(),
                style == self.tool_style and not self.is_erasing
            )
        self._draw_button(surf, font, self.eraser_rect , "Eraser" , self.is_erasing)
        self._draw_button(surf, font, self.palette_rect, "Palette", False)
        self._draw_button(surf, font, self.reset_rect  , "Reset"  , False)
