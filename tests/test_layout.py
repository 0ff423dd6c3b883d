import math

import numpy as np
import pytest

from screenconfigurator.config import SCENE_SCALE, SpacingPolicy
from screenconfigurator.model.layout import (
    HoleGrid, available_area, compute_hole_grid, reference_unit, round_half_up
)
from screenconfigurator.model.state import ScreenParameters


def _derived(**kw):
    return ScreenParameters(spacing_policy=SpacingPolicy.DERIVED, **kw)


def _fixed(**kw):
    return ScreenParameters(spacing_policy=SpacingPolicy.FIXED, **kw)


# --- rounding / helpers ---

def test_round_half_up_matches_browser_rounding():
    assert round_half_up(28.5) == 29
    assert round_half_up(43.5) == 44
    assert round_half_up(2.4) == 2
    assert round_half_up(0.5) == 1
    assert round_half_up(-0.5) == 0


def test_available_area_and_reference_unit():
    p = _derived(screen_width=1200, screen_height=1800, border_margin=30, hole_diameter=20)
    assert available_area(p) == (1140.0, 1740.0)
    assert reference_unit(p) == 40.0


# --- derived spacing ---

def test_derived_reference_scenario():
    p = _derived(screen_width=1200, screen_height=1800, border_margin=30, hole_diameter=20)
    grid = compute_hole_grid(p)

    assert grid.columns == 29
    assert grid.rows == 44
    assert grid.count == 29 * 44
    assert grid.spacing_x == pytest.approx(1140 / 29)
    assert grid.spacing_y == pytest.approx(1740 / 44)


def test_derived_first_hole_and_scale():
    p = _derived(screen_width=1200, screen_height=1800, screen_thickness=8, border_margin=30, hole_diameter=20)
    grid = compute_hole_grid(p)
    sx = 1140 / 29
    sy = 1740 / 44

    x0, y0, z0 = grid.positions[0]
    assert x0 == pytest.approx((-570 + sx / 2) / SCENE_SCALE)
    assert y0 == pytest.approx((870 - sy / 2) / SCENE_SCALE)
    assert z0 == pytest.approx(8 / 2000)
    assert np.all(grid.positions[:, 2] == grid.positions[0, 2])


def test_derived_single_column_sits_on_centre_line():
    # available width 80, reference unit 80 -> exactly one column
    p = _derived(screen_width=100, screen_height=1000, border_margin=10, hole_diameter=40)
    grid = compute_hole_grid(p)

    assert grid.columns == 1
    assert grid.rows > 1
    assert np.all(grid.positions[:, 0] == 0.0)
    assert grid.spacing_x == 80.0


def test_derived_single_row_sits_on_centre_line():
    p = _derived(screen_width=1000, screen_height=100, border_margin=10, hole_diameter=40)
    grid = compute_hole_grid(p)

    assert grid.rows == 1
    assert np.all(grid.positions[:, 1] == 0.0)


def test_derived_small_interior_clamps_to_one_hole():
    # 30 / 200 rounds to 0, clamped to 1
    p = _derived(screen_width=50, screen_height=50, border_margin=10, hole_diameter=100)
    grid = compute_hole_grid(p)

    assert (grid.columns, grid.rows) == (1, 1)
    assert grid.positions.tolist() == [[0.0, 0.0, p.screen_thickness / 2 / SCENE_SCALE]]


# --- fixed spacing ---

def test_fixed_default_parameters():
    p = _fixed(screen_width=1200, screen_height=1800, border_margin=30, pattern_spacing=100)
    grid = compute_hole_grid(p)

    assert grid.columns == 11
    assert grid.rows == 17
    assert grid.count == 187
    assert grid.spacing_x == grid.spacing_y == 100

    xs = sorted(set(np.round(grid.positions[:, 0] * SCENE_SCALE, 9)))
    assert xs[0] == pytest.approx(-500)
    assert xs[-1] == pytest.approx(500)


def test_fixed_single_column_is_centred():
    p = _fixed(screen_width=300, screen_height=1000, border_margin=30, pattern_spacing=200)
    grid = compute_hole_grid(p)

    assert grid.columns == 1
    assert np.allclose(grid.positions[:, 0], 0.0)


@pytest.mark.parametrize(
    "width, height, margin, spacing",
    [
        (1200, 1800, 30, 100),
        (500, 500, 0, 10),
        (3000, 700, 200, 135),
        (1505, 2333, 45, 77),
    ],
)
def test_fixed_count_follows_floor_formula(width, height, margin, spacing):
    p = _fixed(screen_width=width, screen_height=height, border_margin=margin, pattern_spacing=spacing)
    grid = compute_hole_grid(p)

    cols = math.floor((width - 2 * margin) / spacing)
    rows = math.floor((height - 2 * margin) / spacing)
    assert (grid.columns, grid.rows) == (cols, rows)
    assert grid.count == cols * rows


# --- properties shared by both policies ---

@pytest.mark.parametrize("policy", list(SpacingPolicy))
@pytest.mark.parametrize(
    "width, height, margin, diameter, spacing",
    [
        (1200, 1800, 30, 20, 100),
        (1500, 500, 10, 13, 45),
        (777, 2900, 55, 37, 120),
    ],
)
def test_grid_is_symmetric_about_panel_centre(policy, width, height, margin, diameter, spacing):
    p = ScreenParameters(
        screen_width=width, screen_height=height, border_margin=margin,
        hole_diameter=diameter, pattern_spacing=spacing, spacing_policy=policy,
    )
    grid = compute_hole_grid(p)

    assert not grid.is_empty
    assert grid.positions[:, 0].sum() == pytest.approx(0.0, abs=1e-9)
    assert grid.positions[:, 1].sum() == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize("policy", list(SpacingPolicy))
def test_positions_are_column_major(policy):
    p = ScreenParameters(spacing_policy=policy)
    grid = compute_hole_grid(p)
    pos = grid.positions

    # Inner loop walks down a column: same x, decreasing y
    assert pos[0, 0] == pos[1, 0]
    assert pos[1, 1] < pos[0, 1]
    # Next column starts after `rows` entries
    assert pos[grid.rows, 0] > pos[0, 0]
    assert pos[grid.rows, 1] == pos[0, 1]


@pytest.mark.parametrize("policy", list(SpacingPolicy))
def test_layout_is_idempotent(policy):
    p = ScreenParameters(spacing_policy=policy)
    first = compute_hole_grid(p)
    second = compute_hole_grid(p)

    assert first == second
    assert first.positions is not second.positions


def test_policy_argument_overrides_parameters():
    p = _derived()
    assert compute_hole_grid(p, SpacingPolicy.FIXED) == compute_hole_grid(_fixed())


# --- degenerate input ---

@pytest.mark.parametrize("spacing", [0.0, -5.0])
def test_fixed_non_positive_spacing_gives_no_holes(spacing):
    grid = compute_hole_grid(_fixed(pattern_spacing=spacing))
    assert grid.is_empty
    assert grid.positions.shape == (0, 3)


@pytest.mark.parametrize("diameter", [0.0, -1.0])
def test_derived_non_positive_reference_unit_gives_no_holes(diameter):
    grid = compute_hole_grid(_derived(hole_diameter=diameter))
    assert grid.is_empty
    assert (grid.columns, grid.rows) == (0, 0)


@pytest.mark.parametrize("policy", list(SpacingPolicy))
def test_margin_swallowing_the_panel_gives_no_holes(policy):
    p = ScreenParameters(screen_width=500, screen_height=500, border_margin=300, spacing_policy=policy)
    assert compute_hole_grid(p).is_empty


def test_fixed_spacing_wider_than_interior_gives_no_holes():
    p = _fixed(screen_width=500, screen_height=3000, border_margin=0, pattern_spacing=600)
    grid = compute_hole_grid(p)
    assert grid.is_empty
    assert grid.count == 0


@pytest.mark.parametrize("policy", list(SpacingPolicy))
def test_non_finite_input_gives_no_holes(policy):
    p = ScreenParameters(screen_width=float("nan"), spacing_policy=policy)
    assert compute_hole_grid(p).is_empty


def test_unused_non_finite_input_is_ignored():
    derived = _derived(pattern_spacing=float("nan"))
    fixed = _fixed(hole_diameter=float("inf"))

    assert compute_hole_grid(derived) == compute_hole_grid(_derived())
    assert compute_hole_grid(fixed) == compute_hole_grid(_fixed())


@pytest.mark.parametrize(
    "params",
    [_derived(hole_diameter=float("nan")), _fixed(pattern_spacing=float("inf"))],
)
def test_used_non_finite_input_gives_no_holes(params):
    assert compute_hole_grid(params).is_empty


def test_empty_grid_defaults():
    grid = HoleGrid()
    assert grid.count == 0
    assert grid.is_empty
