"""Constants shared between files."""

from typing import Literal, Final

from pygame import Color

from src.type_utils import RGBAColor, HexColor


BLACK: Final[Color]       = Color(0  , 0  , 0)
WHITE: Final[Color]       = Color(255, 255, 255)
LIGHT_GRAY: Final[Color]  = Color(200, 200, 200)
DARKER_GRAY: Final[Color] = Color(50 , 50 , 50)
BG_COLOR: Final[Color]    = Color(235, 235, 235)

BACKGROUND_RGBA: Final[RGBAColor] = (255, 255, 255, 255)
HEX_BLACK: Final[HexColor] = "#000000"

# A seed whose R, G and B are all <= this is part of an outline
OUTLINE_MAX_CHANNEL: Final[int] = 10
# When erasing, a seed whose R, G and B are all >= this is already background
BACKGROUND_MIN_CHANNEL: Final[int] = 245
ERASE_TOLERANCE: Final[int] = 30

FILE_ATTEMPT_START_I: Final[int] = 4
FILE_ATTEMPT_STOP_I: Final[int]  = 9

MOUSE_LEFT: Final[Literal[1]] = 1

WIN_INIT_W: Final[int] = 1_000
WIN_INIT_H: Final[int] = 900
WIN_MIN_W: Final[int] = 480
WIN_MIN_H: Final[int] = 420
WIN_MARGIN: Final[int] = 16
TOOLBAR_H: Final[int] = 132
