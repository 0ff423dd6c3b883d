import csv
import io

import pytest

from screenconfigurator.config import EXPORT_FILENAME, SpacingPolicy
from screenconfigurator.model.io import CSV_HEADER, export_csv, format_value, parameter_rows, to_csv
from screenconfigurator.model.state import ScreenParameters


def test_format_value_drops_trailing_zero():
    assert format_value(1200.0) == "1200"
    assert format_value(12.5) == "12.5"
    assert format_value(8) == "8"
    assert format_value("#80428f") == "#80428f"


def test_csv_matches_parameter_table():
    text = to_csv(ScreenParameters())
    lines = text.split("\n")

    assert lines == [
        "Name,Unit,Expression,Value,Comments,Favorite",
        "screen_width,mm,1200,1200,,FALSE",
        "screen_height,mm,1800,1800,,FALSE",
        "screen_thickness,mm,8,8,,FALSE",
        "border_margin,mm,30,30,,FALSE",
        "hole_diameter,mm,20,20,,FALSE",
        "finish_color,,#80428f,#80428f,,FALSE",
    ]


def test_fixed_policy_exports_pattern_spacing():
    p = ScreenParameters(spacing_policy=SpacingPolicy.FIXED, pattern_spacing=125)
    names = [row.name for row in parameter_rows(p)]

    assert names == [
        "screen_width", "screen_height", "screen_thickness", "border_margin",
        "pattern_spacing", "hole_diameter", "finish_color",
    ]
    assert "pattern_spacing,mm,125,125,,FALSE" in to_csv(p).split("\n")


@pytest.mark.parametrize("policy", list(SpacingPolicy))
def test_row_count_equals_parameter_count(policy):
    p = ScreenParameters(spacing_policy=policy)
    rows = list(csv.reader(io.StringIO(to_csv(p))))

    assert tuple(rows[0]) == CSV_HEADER
    assert len(rows) - 1 == len(parameter_rows(p))
    assert all(len(r) == len(CSV_HEADER) for r in rows)


def test_export_reflects_live_values():
    p = ScreenParameters()
    p.screen_width = 1337.5
    assert "screen_width,mm,1337.5,1337.5,,FALSE" in to_csv(p).split("\n")


def test_export_into_directory_uses_default_filename(tmp_path):
    path = export_csv(ScreenParameters(), tmp_path)

    assert path == tmp_path / EXPORT_FILENAME
    assert path.read_text(encoding="utf-8") == to_csv(ScreenParameters())


def test_export_to_explicit_file(tmp_path):
    target = tmp_path / "panel.csv"
    path = export_csv(ScreenParameters(screen_height=2000), target)

    assert path == target
    assert "screen_height,mm,2000,2000,,FALSE" in target.read_text(encoding="utf-8")


def test_export_to_missing_directory_is_a_no_op(tmp_path):
    target = tmp_path / "missing" / "panel.csv"
    assert export_csv(ScreenParameters(), target) is None
    assert not target.exists()


def test_values_are_written_verbatim():
    p = ScreenParameters(finish_color="#80428f,matte")
    last = to_csv(p).split("\n")[-1]
    assert last == "finish_color,,#80428f,matte,#80428f,matte,,FALSE"
    assert "\\" not in to_csv(p)
