"""
Input/Output Manager (CSV)
Writes the current panel parameters as a Fusion-style user parameter table.

The table has the columns ``Name,Unit,Expression,Value,Comments,Favorite``.
Expression and Value both hold the live value; there is no formula support.
Fields are joined verbatim: no quoting or escaping is applied.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from screenconfigurator.config import EXPORT_FILENAME, SpacingPolicy
from screenconfigurator.model.state import ScreenParameters

logger = logging.getLogger(__name__)

CSV_HEADER: tuple[str, ...] = ("Name", "Unit", "Expression", "Value", "Comments", "Favorite")


@dataclass(frozen=True)
class ParameterRow:
    name: str
    unit: str
    value: str

    def as_csv_fields(self) -> tuple[str, ...]:
        return self.name, self.unit, self.value, self.value, "", "FALSE"


def format_value(value: Union[float, int, str]) -> str:
    """Stringify a parameter value; whole numbers lose their '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parameter_rows(params: ScreenParameters) -> list[ParameterRow]:
    """One row per exported parameter, in table order."""
    rows = [
        ParameterRow("screen_width", "mm", format_value(params.screen_width)),
        ParameterRow("screen_height", "mm", format_value(params.screen_height)),
        ParameterRow("screen_thickness", "mm", format_value(params.screen_thickness)),
        ParameterRow("border_margin", "mm", format_value(params.border_margin)),
    ]
    # pattern_spacing only means something under the fixed policy
    if params.spacing_policy == SpacingPolicy.FIXED:
        rows.append(ParameterRow("pattern_spacing", "mm", format_value(params.pattern_spacing)))
    rows.append(ParameterRow("hole_diameter", "mm", format_value(params.hole_diameter)))
    rows.append(ParameterRow("finish_color", "", params.finish_color))
    return rows


def to_csv(params: ScreenParameters) -> str:
    """Render the parameter table as CSV text (newline separated, no trailing newline)."""
    lines = [",".join(CSV_HEADER)]
    lines.extend(",".join(row.as_csv_fields()) for row in parameter_rows(params))
    return "\n".join(lines)


def export_csv(params: ScreenParameters, target: Union[str, os.PathLike]) -> Optional[Path]:
    """
    Write the parameter table to disk.

    Args:
        params: Parameters to export.
        target: A directory (the file is named ``fusion_parameters.csv``) or a
                full file path.

    Returns:
        The written path, or None if the target directory is missing or not
        writable (nothing is written in that case).

    Raises:
        OSError: If the directory is usable but writing the file fails.
    """
    path = Path(target)
    if path.is_dir():
        path = path / EXPORT_FILENAME

    directory = path.parent
    if not directory.is_dir() or not os.access(directory, os.W_OK):
        logger.warning(f"Export skipped, directory not writable: {directory}")
        return None

    logger.info(f"Exporting parameters to: {path}")
    try:
        path.write_text(to_csv(params), encoding="utf-8")
    except OSError as e:
        logger.exception(f"Failed to export parameters: {e}")
        raise

    return path
