"""
Parameter State (Data Model)
============================
This module defines the central data structure for the running configurator.

Why is this file needed?
------------------------
1. State Management: It holds the current panel parameters in one explicitly
   owned object (no module-level globals).
2. Notification: Views subscribe to Qt signals instead of polling the record.
3. Derived data: The hole layout is recomputed here, only when one of its
   inputs changes, so every subscriber sees the same grid.

Classes:
    ScreenParameters: Data class for the panel parameters.
    ParameterStore: Signal-emitting owner of one ScreenParameters instance.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Optional, Union

from PySide6.QtCore import QObject, Signal

from screenconfigurator.config import (
    DEFAULTS, DEFAULT_FINISH, DEFAULT_POLICY, SpacingPolicy, find_finish
)
from screenconfigurator.model.layout import LAYOUT_FIELDS, HoleGrid, compute_hole_grid

logger = logging.getLogger(__name__)

NUMERIC_FIELDS: tuple[str, ...] = (
    "screen_width",
    "screen_height",
    "screen_thickness",
    "border_margin",
    "hole_diameter",
    "pattern_spacing",
)


@dataclass
class ScreenParameters:
    """
    Panel configuration in millimetres.

    ``pattern_spacing`` is only used by the fixed spacing policy. The margin
    is expected to satisfy ``2 * border_margin < min(width, height)`` but this
    is not enforced; a violating margin simply yields no holes.
    """
    screen_width: float = DEFAULTS["screen_width"]
    screen_height: float = DEFAULTS["screen_height"]
    screen_thickness: float = DEFAULTS["screen_thickness"]
    border_margin: float = DEFAULTS["border_margin"]
    hole_diameter: float = DEFAULTS["hole_diameter"]
    pattern_spacing: float = DEFAULTS["pattern_spacing"]
    finish_color: str = DEFAULT_FINISH.color
    spacing_policy: SpacingPolicy = field(default=DEFAULT_POLICY)

    def layout_key(self) -> tuple[Any, ...]:
        """Values the hole layout depends on."""
        return tuple(getattr(self, name) for name in LAYOUT_FIELDS)


class ParameterStore(QObject):
    """Central parameter store with signals for panel/preview sync."""
    parameters_changed = Signal(object)  # ScreenParameters
    layout_changed = Signal(object)  # HoleGrid
    finish_changed = Signal(str)

    def __init__(self, parameters: Optional[ScreenParameters] = None) -> None:
        super().__init__()
        self._parameters = parameters if parameters is not None else ScreenParameters()
        self._layout_key: tuple[Any, ...] = self._parameters.layout_key()
        self._layout: HoleGrid = compute_hole_grid(self._parameters)

    @property
    def parameters(self) -> ScreenParameters:
        return self._parameters

    def snapshot(self) -> ScreenParameters:
        """Detached copy of the current parameters."""
        return copy.copy(self._parameters)

    def layout(self) -> HoleGrid:
        return self._layout

    def set_parameter(self, name: str, value: Union[float, str, SpacingPolicy]) -> None:
        """
        Update one parameter and notify subscribers.

        Raises:
            KeyError: If ``name`` is not a parameter.
            ValueError: If the value cannot be interpreted for that parameter.
        """
        if name not in {f.name for f in fields(ScreenParameters)}:
            raise KeyError(f"Unknown parameter '{name}'.")

        if name == "finish_color":
            self.set_finish(str(value))
            return
        if name == "spacing_policy":
            self.set_spacing_policy(SpacingPolicy(value))
            return

        new_value = float(value)
        if getattr(self._parameters, name) == new_value:
            return
        setattr(self._parameters, name, new_value)
        logger.debug(f"{name} = {new_value}")
        self._commit()

    def set_finish(self, color_or_name: str) -> None:
        finish = find_finish(color_or_name)
        if finish is None:
            raise ValueError(f"Unknown finish '{color_or_name}'.")
        if self._parameters.finish_color == finish.color:
            return
        self._parameters.finish_color = finish.color
        logger.debug(f"finish_color = {finish.color} ({finish.name})")
        self._commit(finish_changed=True)

    def set_spacing_policy(self, policy: SpacingPolicy) -> None:
        policy = SpacingPolicy(policy)
        if self._parameters.spacing_policy == policy:
            return
        self._parameters.spacing_policy = policy
        logger.info(f"Spacing policy set to '{policy.value}'.")
        self._commit()

    def update(self, **values: Any) -> None:
        """
        Set several parameters at once, emitting a single notification.

        All-or-nothing: if any value is rejected, the earlier ones are rolled
        back and the error is re-raised without emitting anything.
        """
        before = copy.copy(self._parameters)
        layout_key_before = self._layout_key
        layout_before = self._layout

        signals_were_blocked = self.blockSignals(True)
        try:
            for name, value in values.items():
                self.set_parameter(name, value)
        except (KeyError, ValueError, TypeError):
            for f in fields(ScreenParameters):
                setattr(self._parameters, f.name, getattr(before, f.name))
            self._layout_key = layout_key_before
            self._layout = layout_before
            raise
        finally:
            self.blockSignals(signals_were_blocked)

        if self._parameters == before:
            return
        if self._parameters.finish_color != before.finish_color:
            self.finish_changed.emit(self._parameters.finish_color)
        self.parameters_changed.emit(self._parameters)
        if self._layout_key != layout_key_before:
            self.layout_changed.emit(self._layout)

    def reset(self) -> None:
        """Restore the default parameters."""
        self._parameters = ScreenParameters()
        logger.info("Parameters have been reset.")
        self._commit(finish_changed=True, force_layout=True)

    def _commit(self, finish_changed: bool = False, force_layout: bool = False) -> None:
        """
        Refresh the cached layout, then notify.

        Order: ``finish_changed`` (if requested), ``parameters_changed``,
        ``layout_changed`` (only if a layout input changed). Every slot sees
        the new parameters and the matching grid.
        """
        key = self._parameters.layout_key()
        layout_dirty = force_layout or key != self._layout_key
        if layout_dirty:
            self._layout_key = key
            self._layout = compute_hole_grid(self._parameters)

        if finish_changed:
            self.finish_changed.emit(self._parameters.finish_color)
        self.parameters_changed.emit(self._parameters)
        if layout_dirty:
            self.layout_changed.emit(self._layout)
