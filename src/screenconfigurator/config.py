"""
Configuration & Constants
=========================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: Slider ranges, defaults and the finish palette live in one
   place instead of being scattered through the widgets.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    ICON_PATH (str): Application window icon.
    SCENE_SCALE (float): Millimetres per scene unit.
    FINISHES (tuple[Finish, ...]): Selectable panel finishes.
    SLIDER_RANGES (dict): Slider limits per spacing policy.
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/screenconfigurator/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


class SpacingPolicy(str, Enum):
    """How the centre-to-centre distance of the holes is chosen."""
    FIXED = "fixed"  # explicit pattern_spacing
    DERIVED = "derived"  # derived from hole_diameter


@dataclass(frozen=True)
class Finish:
    name: str
    color: str


@dataclass(frozen=True)
class SliderRange:
    min_value: float
    max_value: float
    step: float

    def clamp(self, value: float) -> float:
        """Clamp to the range and snap to the nearest step."""
        value = min(max(value, self.min_value), self.max_value)
        steps = round((value - self.min_value) / self.step)
        return min(self.min_value + steps * self.step, self.max_value)

    @property
    def n_steps(self) -> int:
        return int(round((self.max_value - self.min_value) / self.step))


# Global Constants
VISIBLE_APP_NAME: str = "Screen Configurator"
ORG_ID: str = "screenconfigurator"

ASSETS_PATH: str = get_resource_path("assets")
ICON_PATH: str = os.path.join(ASSETS_PATH, "icon.svg")

SCENE_SCALE: float = 1000.0  # mm per scene unit (metres)
HOLE_DEPTH_CLEARANCE: float = 1.0  # mm, hole cylinders poke through both faces
EXPORT_FILENAME: str = "fusion_parameters.csv"

FINISHES: tuple[Finish, ...] = (
    Finish("Magenta", "#80428f"),
    Finish("Light Grey", "#D3D3D3"),
    Finish("Bronze", "#CD7F32"),
)

DEFAULTS: dict[str, float] = {
    "screen_width": 1200.0,
    "screen_height": 1800.0,
    "screen_thickness": 8.0,
    "border_margin": 30.0,
    "hole_diameter": 20.0,
    "pattern_spacing": 100.0,
}
DEFAULT_FINISH: Finish = FINISHES[0]
DEFAULT_POLICY: SpacingPolicy = SpacingPolicy.DERIVED

SLIDER_RANGES: dict[SpacingPolicy, dict[str, SliderRange]] = {
    SpacingPolicy.FIXED: {
        "screen_width": SliderRange(500, 3000, 10),
        "screen_height": SliderRange(500, 3000, 10),
        "screen_thickness": SliderRange(1, 50, 1),
        "border_margin": SliderRange(0, 200, 5),
        "pattern_spacing": SliderRange(10, 500, 5),
        "hole_diameter": SliderRange(1, 200, 1),
    },
    SpacingPolicy.DERIVED: {
        "screen_width": SliderRange(500, 1500, 10),
        "screen_height": SliderRange(500, 3000, 10),
        "screen_thickness": SliderRange(6, 25, 1),
        "border_margin": SliderRange(10, 200, 5),
        "hole_diameter": SliderRange(10, 200, 1),
    },
}

PARAMETER_LABELS: dict[str, str] = {
    "screen_width": "Width",
    "screen_height": "Height",
    "screen_thickness": "Thickness",
    "border_margin": "Border Margin",
    "pattern_spacing": "Spacing",
    "hole_diameter": "Hole Diameter",
}


def find_finish(value: str) -> Finish | None:
    """Look up a finish by colour (case-insensitive) or by name."""
    needle = value.strip().lower()
    for finish in FINISHES:
        if finish.color.lower() == needle or finish.name.lower() == needle:
            return finish
    return None
