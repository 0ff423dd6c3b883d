"""
Command-line interface.

    screenconfigurator                 open the configurator window
    screenconfigurator layout [...]    print the hole grid for given dimensions
    screenconfigurator export [...]    write the parameter CSV without the GUI
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from screenconfigurator.config import (
    DEFAULTS, DEFAULT_FINISH, DEFAULT_POLICY, EXPORT_FILENAME, SCENE_SCALE, SpacingPolicy, find_finish
)
from screenconfigurator.logging_config import setup_logging
from screenconfigurator.model.io import export_csv, to_csv
from screenconfigurator.model.layout import compute_hole_grid
from screenconfigurator.model.state import ScreenParameters

logger = logging.getLogger(__name__)


def _add_parameter_arguments(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--width", type=float, default=DEFAULTS["screen_width"], help="Panel width in mm (default: %(default)s)")
    ap.add_argument("--height", type=float, default=DEFAULTS["screen_height"], help="Panel height in mm (default: %(default)s)")
    ap.add_argument("--thickness", type=float, default=DEFAULTS["screen_thickness"], help="Panel thickness in mm (default: %(default)s)")
    ap.add_argument("--margin", type=float, default=DEFAULTS["border_margin"], help="Border margin in mm (default: %(default)s)")
    ap.add_argument("--hole-diameter", type=float, default=DEFAULTS["hole_diameter"], help="Hole diameter in mm (default: %(default)s)")
    ap.add_argument("--spacing", type=float, default=DEFAULTS["pattern_spacing"], help="Fixed pattern spacing in mm (default: %(default)s)")
    ap.add_argument(
        "--policy",
        choices=[p.value for p in SpacingPolicy],
        default=DEFAULT_POLICY.value,
        help="Hole spacing policy (default: %(default)s)",
    )
    ap.add_argument("--finish", default=DEFAULT_FINISH.name, help="Finish name or colour (default: %(default)s)")


def _parameters_from_args(args: argparse.Namespace) -> ScreenParameters:
    finish = find_finish(args.finish)
    if finish is None:
        raise ValueError(f"Unknown finish '{args.finish}'.")
    return ScreenParameters(
        screen_width=args.width,
        screen_height=args.height,
        screen_thickness=args.thickness,
        border_margin=args.margin,
        hole_diameter=args.hole_diameter,
        pattern_spacing=args.spacing,
        finish_color=finish.color,
        spacing_policy=SpacingPolicy(args.policy),
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="screenconfigurator",
        description="Configure a perforated screen panel and export its parameters.",
    )
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    ap.add_argument("--log-file", default=None, help="Also write the log to this file.")

    sub = ap.add_subparsers(dest="command")

    sub.add_parser("gui", help="Open the configurator window (default).")

    ap_layout = sub.add_parser("layout", help="Print the hole grid for the given dimensions.")
    _add_parameter_arguments(ap_layout)
    ap_layout.add_argument("--positions", action="store_true", help="Also list every hole centre (mm).")

    ap_export = sub.add_parser("export", help="Write the parameter CSV.")
    _add_parameter_arguments(ap_export)
    ap_export.add_argument(
        "-o", "--out",
        default=None,
        help=f"Output file or directory; '-' prints to stdout (default: ./{EXPORT_FILENAME})",
    )

    return ap


def _cmd_layout(args: argparse.Namespace) -> int:
    params = _parameters_from_args(args)
    grid = compute_hole_grid(params)
    print(f"policy:  {params.spacing_policy.value}")
    print(f"columns: {grid.columns}")
    print(f"rows:    {grid.rows}")
    print(f"holes:   {grid.count}")
    if not grid.is_empty:
        print(f"spacing: {grid.spacing_x:g} x {grid.spacing_y:g} mm")
    if args.positions:
        # back to millimetres for the listing
        for x, y, z in grid.positions * SCENE_SCALE:
            print(f"{x:.3f},{y:.3f},{z:.3f}")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    params = _parameters_from_args(args)
    if args.out == "-":
        print(to_csv(params))
        return 0

    target = Path(args.out) if args.out else Path.cwd()
    path = export_csv(params, target)
    if path is None:
        print(f"Cannot write to {target}", file=sys.stderr)
        return 1
    print(path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    if args.command in (None, "gui"):
        from screenconfigurator.main import run_gui
        return run_gui()

    try:
        if args.command == "layout":
            return _cmd_layout(args)
        return _cmd_export(args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
