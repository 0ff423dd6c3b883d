from screenconfigurator.cli import main
from screenconfigurator.config import EXPORT_FILENAME


def test_layout_reports_reference_grid(capsys):
    rc = main(["layout", "--width", "1200", "--height", "1800", "--margin", "30", "--hole-diameter", "20"])
    out = capsys.readouterr().out

    assert rc == 0
    assert "columns: 29" in out
    assert "rows:    44" in out
    assert "holes:   1276" in out


def test_layout_fixed_policy_with_positions(capsys):
    rc = main([
        "layout", "--policy", "fixed", "--width", "500", "--height", "500",
        "--margin", "0", "--spacing", "250", "--positions",
    ])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert "holes:   4" in out
    assert "-125.000,125.000,4.000" in out
    assert "125.000,-125.000,4.000" in out


def test_layout_degenerate_input_prints_empty_grid(capsys):
    rc = main(["layout", "--hole-diameter", "0"])
    out = capsys.readouterr().out

    assert rc == 0
    assert "holes:   0" in out


def test_export_to_stdout(capsys):
    rc = main(["export", "--width", "1000", "--finish", "Bronze", "-o", "-"])
    out = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert out[0] == "Name,Unit,Expression,Value,Comments,Favorite"
    assert "screen_width,mm,1000,1000,,FALSE" in out
    assert "finish_color,,#CD7F32,#CD7F32,,FALSE" in out


def test_export_to_directory(tmp_path, capsys):
    rc = main(["export", "-o", str(tmp_path)])

    assert rc == 0
    assert (tmp_path / EXPORT_FILENAME).is_file()


def test_export_to_missing_directory_fails(tmp_path, capsys):
    rc = main(["export", "-o", str(tmp_path / "nope" / "out.csv")])
    assert rc == 1
    assert "Cannot write" in capsys.readouterr().err


def test_unknown_finish_is_an_error(capsys):
    rc = main(["export", "--finish", "Gold", "-o", "-"])
    assert rc == 2
    assert "Unknown finish" in capsys.readouterr().err
