"""
Hole Grid Layout
================
Computes the positions of the perforation holes for a screen panel.

The holes form a centred rectangular grid inside the panel interior (panel
minus the border margin on every side). Two spacing policies are supported:

FIXED:
    An explicit centre-to-centre ``pattern_spacing``. The number of columns
    and rows is how many whole spacings fit into the interior, and the block
    of holes is shifted so the leftover space is split evenly on both sides.

DERIVED:
    The spacing follows from the hole size. A reference unit of two hole
    diameters is fitted into the interior (rounded half-up, at least one
    hole per axis) and the interior is then divided evenly between the
    columns/rows. A single column/row sits exactly on the centre line.

Positions are returned in scene units (``config.SCENE_SCALE`` millimetres per
unit), relative to the panel centre, with ``z`` on the panel mid-plane.
Degenerate input never raises; it produces an empty grid.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import numpy as np

from screenconfigurator.config import SCENE_SCALE, SpacingPolicy

if TYPE_CHECKING:
    import numpy.typing as npt

    from screenconfigurator.model.state import ScreenParameters

logger = logging.getLogger(__name__)

# Parameters the grid depends on (not the finish colour).
LAYOUT_FIELDS: tuple[str, ...] = (
    "screen_width",
    "screen_height",
    "screen_thickness",
    "border_margin",
    "hole_diameter",
    "pattern_spacing",
    "spacing_policy",
)


@dataclass
class HoleGrid:
    """Result of a layout computation."""
    columns: int = 0
    rows: int = 0
    spacing_x: float = 0.0  # mm
    spacing_y: float = 0.0  # mm
    positions: npt.NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 3), dtype=np.float64))

    @property
    def count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HoleGrid):
            return NotImplemented
        return (
            self.columns == other.columns
            and self.rows == other.rows
            and self.spacing_x == other.spacing_x
            and self.spacing_y == other.spacing_y
            and np.array_equal(self.positions, other.positions)
        )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +infinity (28.5 -> 29)."""
    return int(math.floor(value + 0.5))


def available_area(params: ScreenParameters) -> tuple[float, float]:
    """Interior width and height left after removing the border margin."""
    return (
        params.screen_width - 2.0 * params.border_margin,
        params.screen_height - 2.0 * params.border_margin,
    )


def reference_unit(params: ScreenParameters) -> float:
    """Spacing basis of the derived policy: two hole diameters."""
    return 2.0 * params.hole_diameter


def compute_hole_grid(params: ScreenParameters, policy: Optional[SpacingPolicy] = None) -> HoleGrid:
    """
    Compute the hole grid for the given parameters.

    Args:
        params: Panel configuration (millimetres).
        policy: Spacing policy; defaults to ``params.spacing_policy``.

    Returns:
        HoleGrid with ``columns * rows`` positions, or an empty grid for
        degenerate input (non-positive spacing, no interior, NaN values).
    """
    policy = SpacingPolicy(policy if policy is not None else params.spacing_policy)

    # Only the inputs the selected policy reads
    spacing_input = params.pattern_spacing if policy == SpacingPolicy.FIXED else params.hole_diameter
    values = (
        params.screen_width, params.screen_height, params.screen_thickness,
        params.border_margin, spacing_input,
    )
    if not all(math.isfinite(v) for v in values):
        logger.debug("Non-finite parameter, returning empty grid.")
        return HoleGrid()

    if policy == SpacingPolicy.FIXED:
        grid = _fixed_grid(params)
    else:
        grid = _derived_grid(params)

    logger.debug(
        f"Layout ({policy.value}): {grid.columns} x {grid.rows} = {grid.count} holes"
    )
    return grid


# ------------------------------------------------------------------------------
# Policies
# ------------------------------------------------------------------------------

def _fixed_grid(params: ScreenParameters) -> HoleGrid:
    spacing = params.pattern_spacing
    if spacing <= 0:
        return HoleGrid()

    avail_w, avail_h = available_area(params)
    cols = math.floor(avail_w / spacing)
    rows = math.floor(avail_h / spacing)
    if cols <= 0 or rows <= 0:
        return HoleGrid()

    leftover_x = avail_w - (cols - 1) * spacing
    leftover_y = avail_h - (rows - 1) * spacing
    start_x = -params.screen_width / 2 + params.border_margin + leftover_x / 2
    start_y = params.screen_height / 2 - params.border_margin - leftover_y / 2

    xs = start_x + np.arange(cols) * spacing
    ys = start_y - np.arange(rows) * spacing
    return HoleGrid(
        columns=cols,
        rows=rows,
        spacing_x=spacing,
        spacing_y=spacing,
        positions=_to_scene(xs, ys, params.screen_thickness),
    )


def _derived_grid(params: ScreenParameters) -> HoleGrid:
    unit = reference_unit(params)
    if unit <= 0:
        return HoleGrid()

    avail_w, avail_h = available_area(params)
    if avail_w <= 0 or avail_h <= 0:
        return HoleGrid()

    cols = max(1, round_half_up(avail_w / unit))
    rows = max(1, round_half_up(avail_h / unit))

    spacing_x = avail_w / cols if cols > 1 else avail_w
    spacing_y = avail_h / rows if rows > 1 else avail_h

    leftover_x = avail_w - (cols - 1) * spacing_x
    leftover_y = avail_h - (rows - 1) * spacing_y
    start_x = -params.screen_width / 2 + params.border_margin + leftover_x / 2
    start_y = params.screen_height / 2 - params.border_margin - leftover_y / 2

    # A lone column/row goes on the centre line itself
    xs = np.zeros(1) if cols == 1 else start_x + np.arange(cols) * spacing_x
    ys = np.zeros(1) if rows == 1 else start_y - np.arange(rows) * spacing_y
    return HoleGrid(
        columns=cols,
        rows=rows,
        spacing_x=spacing_x,
        spacing_y=spacing_y,
        positions=_to_scene(xs, ys, params.screen_thickness),
    )


def _to_scene(
    xs: npt.NDArray[np.float64],
    ys: npt.NDArray[np.float64],
    thickness: float
) -> npt.NDArray[np.float64]:
    """Column-major (N, 3) array of hole centres in scene units."""
    gx, gy = np.meshgrid(xs, ys, indexing="ij")  # gx[i, j] = xs[i]
    n = gx.size
    z = np.full(n, thickness / 2.0)
    return np.column_stack((gx.ravel(), gy.ravel(), z)) / SCENE_SCALE
