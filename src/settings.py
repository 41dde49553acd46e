"""
Functions to load the settings and the color palettes.

Settings file keys (all optional):
    artwork: path of the line art
    canvas_w, canvas_h: size of the page in pixels
    max_display_w: max width of the displayed page
    inactivity_reset_s: seconds without input before the page is reset
    palette_i, color_i: initially selected palette and color
    tool_style: initially selected tool style
    fps_cap: frames per second cap

Palette files contain a name and a mapping of color identifiers to #RRGGBB strings.
"""

from pathlib import Path
from typing import Final, Any

from src.fill_engine import TOOL_STYLES
from src.file_utils import try_load_json
from src.utils import hex_to_rgb
from src.type_utils import RGBColor, HexColor, Palette
from src.consts import HEX_BLACK

DEFAULT_SETTINGS: Final[dict[str, Any]] = {
    "artwork": str(Path("assets", "artwork", "coloring_page.pbm")),

    "canvas_w": 960,
    "canvas_h": 720,
    "max_display_w": 960,

    "inactivity_reset_s": 60,

    "palette_i": 0,
    "color_i": 0,
    "tool_style": "solid",

    "fps_cap": 60,
}
FALLBACK_PALETTE: Final[Palette] = {
    "name": "Black",
    "colors": {"black": HEX_BLACK},
}


def _is_valid_setting(key: str, value: Any) -> bool:
    """
    Checks if a setting has the same type as its default and a usable value.

    Args:
        key, value
    Returns:
        valid flag
    """

    if key == "tool_style":
        return value in TOOL_STYLES

    default_value: Any = DEFAULT_SETTINGS[key]
    if isinstance(default_value, int):
        # bool is an int subclass
        return type(value) is int and value >= 0 and (value > 0 or key.endswith("_i"))

    return isinstance(value, type(default_value)) and value != ""


def load_settings(file_path: Path) -> tuple[dict[str, Any], str | None]:
    """
    Loads the settings, missing or invalid values use the defaults.

    Args:
        path
    Returns:
        settings, error string (can be None)
    """

    data: Any
    error_str: str | None

    settings: dict[str, Any] = DEFAULT_SETTINGS.copy()
    data, error_str = try_load_json(file_path)
    if data is None:
        # A missing file isn't an error, the defaults are enough
        return settings, None if error_str == "File missing." else error_str
    if not isinstance(data, dict):
        return settings, "Settings must be an object."

    invalid_keys: list[str] = []
    for key, value in data.items():
        if key not in DEFAULT_SETTINGS:
            continue

        if _is_valid_setting(key, value):
            settings[key] = value
        else:
            invalid_keys.append(key)

    if invalid_keys != []:
        error_str = f"Invalid values: {', '.join(invalid_keys)}."
    return settings, error_str


def _parse_palette(data: Any, file_name: str, errors: list[str]) -> Palette | None:
    """
    Validates the data of a palette file, invalid colors are dropped.

    Args:
        data, file name, errors list
    Returns:
        palette (can be None)
    """

    if not isinstance(data, dict) or not isinstance(data.get("colors"), dict):
        errors.append(f"{file_name}: missing colors.")
        return None

    rgb_color: RGBColor | None

    colors: dict[str, HexColor] = {}
    for color_id, hex_color in data["colors"].items():
        rgb_color = hex_to_rgb(hex_color) if isinstance(hex_color, str) else None
        if rgb_color is None:
            errors.append(f"{file_name}: invalid color {color_id}.")
            continue

        # Normalized to #RRGGBB
        colors[str(color_id)] = "#{:02X}{:02X}{:02X}".format(*rgb_color)

    if colors == {}:
        errors.append(f"{file_name}: no valid colors.")
        return None

    name: Any = data.get("name")
    return {
        "name": name if isinstance(name, str) and name != "" else Path(file_name).stem,
        "colors": colors,
    }


def load_palettes(dir_path: Path) -> tuple[list[Palette], list[str]]:
    """
    Loads every palette file in a directory sorted by name.

    Args:
        directory path
    Returns:
        palettes (never empty), errors
    """

    data: Any
    error_str: str | None

    errors: list[str] = []
    try:
        palettes_paths: list[Path] = sorted(dir_path.glob("*.json"))
    except OSError as e:
        palettes_paths = []
        errors.append(f"{dir_path}: {e.strerror or 'unreadable'}.")

    palettes: list[Palette] = []
    for palette_path in palettes_paths:
        data, error_str = try_load_json(palette_path)
        if data is None:
            errors.append(f"{palette_path.name}: {error_str}")
            continue

        palette: Palette | None = _parse_palette(data, palette_path.name, errors)
        if palette is not None:
            palettes.append(palette)

    if palettes == []:
        palettes.append({
            "name": FALLBACK_PALETTE["name"],
            "colors": FALLBACK_PALETTE["colors"].copy(),
        })
    return palettes, errors
