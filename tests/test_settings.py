"""Tests for the settings file."""

import json

from unittest import TestCase
from tempfile import TemporaryDirectory
from pathlib import Path
from typing import Self, Any

from src.settings import DEFAULT_SETTINGS, FALLBACK_PALETTE, load_settings, load_palettes
from src.type_utils import Palette


class TestSettings(TestCase):
    """Tests for the settings file."""

    def setUp(self: Self) -> None:
        """Creates a temporary directory."""

        self._tmp_dir: TemporaryDirectory[str] = TemporaryDirectory()
        self.dir_path: Path = Path(self._tmp_dir.name)

    def tearDown(self: Self) -> None:
        """Deletes the temporary directory."""

        self._tmp_dir.cleanup()

    def _write_json(self: Self, file_name: str, data: Any) -> Path:
        """
        Writes a json file in the temporary directory.

        Args:
            file name, data
        Returns:
            path
        """

        file_path: Path = self.dir_path / file_name
        file_path.write_text(json.dumps(data), "utf-8")

        return file_path

    def test_load_settings_missing(self: Self) -> None:
        """Tests the load_settings function without a file."""

        settings: dict[str, Any]
        error_str: str | None

        settings, error_str = load_settings(self.dir_path / "settings.json")
        self.assertDictEqual(settings, DEFAULT_SETTINGS)
        self.assertIsNone(error_str)

        settings["canvas_w"] = 1
        self.assertEqual(DEFAULT_SETTINGS["canvas_w"], 960)

    def test_load_settings(self: Self) -> None:
        """Tests the load_settings function with valid values."""

        settings: dict[str, Any]
        error_str: str | None

        file_path: Path = self._write_json("settings.json", {
            "canvas_w": 100, "palette_i": 0, "tool_style": "pencil", "unknown": [1],
        })
        settings, error_str = load_settings(file_path)
        self.assertIsNone(error_str)
        self.assertEqual(settings["canvas_w"], 100)
        self.assertEqual(settings["tool_style"], "pencil")
        self.assertEqual(settings["canvas_h"], DEFAULT_SETTINGS["canvas_h"])
        self.assertNotIn("unknown", settings)

    def test_load_settings_invalid(self: Self) -> None:
        """Tests the load_settings function with invalid values and files."""

        settings: dict[str, Any]
        error_str: str | None

        file_path: Path = self._write_json("settings.json", {
            "canvas_w": 0, "fps_cap": True, "color_i": 3, "tool_style": "marker",
            "artwork": "", "inactivity_reset_s": 1.5, "canvas_h": 10,
        })
        settings, error_str = load_settings(file_path)
        self.assertEqual(
            error_str, "Invalid values: canvas_w, fps_cap, tool_style, artwork, inactivity_reset_s."
        )
        self.assertEqual(settings["canvas_w"], DEFAULT_SETTINGS["canvas_w"])
        self.assertEqual(settings["fps_cap"], DEFAULT_SETTINGS["fps_cap"])
        self.assertEqual(settings["tool_style"], "solid")
        self.assertEqual(settings["color_i"], 3)
        self.assertEqual(settings["canvas_h"], 10)

        self._write_json("settings.json", [1, 2])
        self.assertTupleEqual(
            load_settings(file_path),
            (DEFAULT_SETTINGS, "Settings must be an object.")
        )

        file_path.write_text("{", "utf-8")
        self.assertTupleEqual(load_settings(file_path), (DEFAULT_SETTINGS, "Invalid json."))

    def test_load_palettes(self: Self) -> None:
        """Tests the load_palettes function, invalid files and colors are reported."""

        palettes: list[Palette]
        errors: list[str]

        self._write_json("1_a.json", {
            "name": "A",
            "colors": {"red": "#ff0000", "bad": "#12", "num": 5, "blue": "0000FF"},
        })
        self._write_json("2_b.json", {"name": "B", "colors": {}})
        self._write_json("3_c.json", [1])
        (self.dir_path / "4_d.json").write_text("{", "utf-8")
        self._write_json("5_e.json", {"name": "", "colors": {"black": "#000000"}})
        (self.dir_path / "notes.txt").write_text("{", "utf-8")

        palettes, errors = load_palettes(self.dir_path)
        self.assertListEqual(palettes, [
            {"name": "A", "colors": {"red": "#FF0000", "blue": "#0000FF"}},
            {"name": "5_e", "colors": {"black": "#000000"}},
        ])
        self.assertListEqual(errors, [
            "1_a.json: invalid color bad.",
            "1_a.json: invalid color num.",
            "2_b.json: no valid colors.",
            "3_c.json: missing colors.",
            "4_d.json: Invalid json.",
        ])

    def test_load_palettes_fallback(self: Self) -> None:
        """Tests the load_palettes function without valid palettes."""

        palettes: list[Palette]
        errors: list[str]

        palettes, errors = load_palettes(self.dir_path)
        self.assertListEqual(palettes, [FALLBACK_PALETTE])
        self.assertListEqual(errors, [])

        palettes[0]["colors"]["white"] = "#FFFFFF"
        self.assertDictEqual(FALLBACK_PALETTE["colors"], {"black": "#000000"})

        self._write_json("a.json", {"colors": "#FF0000"})
        palettes, errors = load_palettes(self.dir_path)
        self.assertListEqual(palettes, [FALLBACK_PALETTE])
        self.assertListEqual(errors, ["a.json: missing colors."])

    def test_load_bundled_data(self: Self) -> None:
        """Tests the load_settings and load_palettes functions with the bundled files."""

        palettes: list[Palette]
        errors: list[str]

        data_path: Path = Path(__file__).parent.parent / "assets" / "data"
        self.assertTupleEqual(load_settings(data_path / "settings.json"), (DEFAULT_SETTINGS, None))

        palettes, errors = load_palettes(data_path / "palettes")
        self.assertListEqual(errors, [])
        self.assertListEqual([palette["name"] for palette in palettes], ["Classic", "Pastel"])
        self.assertEqual(len(palettes[0]["colors"]), 10)
        self.assertEqual(palettes[0]["colors"]["orange"], "#FF9900")
