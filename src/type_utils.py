"""Types shared between files."""

from typing import Literal, TypeAlias, Any

WH: TypeAlias = tuple[int, int]
RGBColor: TypeAlias = tuple[int, int, int]
RGBAColor: TypeAlias = tuple[int, int, int, int]
HexColor: TypeAlias = str

ToolStyle: TypeAlias = Literal["solid", "pastel", "pencil", "brush"]
FillStatus: TypeAlias = Literal[
    "filled",
    "out_of_bounds", "invalid_color",
    "outline", "already_erased",
    "busy",
]
ToolbarActionName: TypeAlias = Literal["color", "style", "eraser", "palette", "reset"]
ToolbarAction: TypeAlias = tuple[ToolbarActionName, Any]

Palette: TypeAlias = dict[str, Any]
