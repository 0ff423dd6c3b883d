"""
Parameters Control Panel
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QButtonGroup, QComboBox, QFormLayout, QGridLayout, QGroupBox, QHBoxLayout, QLabel,
    QPushButton, QSizePolicy, QSlider, QVBoxLayout, QWidget
)

from screenconfigurator.config import (
    FINISHES, PARAMETER_LABELS, SLIDER_RANGES, SliderRange, SpacingPolicy
)
from screenconfigurator.model.state import ParameterStore, ScreenParameters
from screenconfigurator.view.panels.base import BasePanel

logger = logging.getLogger(__name__)

POLICY_LABELS = {
    SpacingPolicy.DERIVED: "From hole diameter",
    SpacingPolicy.FIXED: "Fixed spacing",
}

ACCENT_COLOR = "#80428f"


# ==========================================
# HELPER WIDGETS
# ==========================================

class StepSlider(QWidget):
    """
    Horizontal slider over a SliderRange with a live "Label: value mm" caption.

    QSlider is integer-only, so the slider position is the step index and
    the physical value is ``min + index * step``.
    """
    value_changed = Signal(str, float)

    def __init__(self, key: str, label: str, slider_range: SliderRange, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.key = key
        self._label = label
        self._range = slider_range

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        self.caption = QLabel(self)
        layout.addWidget(self.caption)

        self.slider = QSlider(Qt.Orientation.Horizontal, self)
        self.slider.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.slider.valueChanged.connect(self._on_slider_moved)
        layout.addWidget(self.slider)

        self.set_range(slider_range)

    def set_range(self, slider_range: SliderRange) -> None:
        self._range = slider_range
        self.slider.blockSignals(True)
        self.slider.setRange(0, slider_range.n_steps)
        self.slider.setSingleStep(1)
        self.slider.setPageStep(max(1, slider_range.n_steps // 10))
        self.slider.blockSignals(False)

    def value(self) -> float:
        return self._range.min_value + self.slider.value() * self._range.step

    def set_value(self, value: float) -> None:
        """Move the handle without emitting value_changed."""
        value = self._range.clamp(value)
        self.slider.blockSignals(True)
        self.slider.setValue(int(round((value - self._range.min_value) / self._range.step)))
        self.slider.blockSignals(False)
        self._update_caption(value)

    def _update_caption(self, value: float) -> None:
        self.caption.setText(f"{self._label}: {value:g} mm")

    @Slot(int)
    def _on_slider_moved(self, _index: int) -> None:
        value = self.value()
        self._update_caption(value)
        self.value_changed.emit(self.key, value)


class FinishSelector(QWidget):
    """Row of colour swatches, one per finish; exactly one is checked."""
    finish_selected = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._group = QButtonGroup(self)
        self._group.setExclusive(True)
        self._buttons: dict[str, QPushButton] = {}

        for finish in FINISHES:
            btn = QPushButton(self)
            btn.setCheckable(True)
            btn.setFixedSize(40, 40)
            btn.setToolTip(finish.name)
            btn.setStyleSheet(
                f"QPushButton {{ background-color: {finish.color}; border: 2px solid #d1d5db; border-radius: 4px; }}"
                f"QPushButton:checked {{ border: 2px solid #3b82f6; }}"
            )
            btn.clicked.connect(lambda _=False, c=finish.color: self.finish_selected.emit(c))
            self._group.addButton(btn)
            self._buttons[finish.color.lower()] = btn
            layout.addWidget(btn)

        layout.addStretch()

    def set_color(self, color: str) -> None:
        btn = self._buttons.get(color.lower())
        if btn is not None and not btn.isChecked():
            btn.setChecked(True)


# ==========================================
# MAIN PARAMETERS PANEL
# ==========================================

class ParametersPanel(BasePanel):
    """
    Panel with one slider per dimension, the spacing policy, the finish
    swatches and the download button. Writes to the store; re-reads from it
    whenever the store reports a change.
    """
    download_requested = Signal()

    def __init__(self, store: ParameterStore, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        root = QVBoxLayout(self)

        # 1. Spacing policy
        policy_group = QGroupBox("Pattern", self)
        policy_form = QFormLayout(policy_group)
        self.policy_combo = QComboBox(policy_group)
        for policy, text in POLICY_LABELS.items():
            self.policy_combo.addItem(text, userData=policy)
        self.policy_combo.currentIndexChanged.connect(self._on_policy_changed)
        policy_form.addRow("Hole spacing:", self.policy_combo)
        root.addWidget(policy_group)

        # 2. Dimensions
        dims_group = QGroupBox("Dimensions", self)
        self.grid = QGridLayout(dims_group)
        self.grid.setVerticalSpacing(8)
        self._sliders: dict[str, StepSlider] = {}
        self._row = 0
        fixed_ranges = SLIDER_RANGES[SpacingPolicy.FIXED]
        for key, label in PARAMETER_LABELS.items():
            self._add_slider(key, label, fixed_ranges[key])
        root.addWidget(dims_group)

        # 3. Finish
        finish_group = QGroupBox("Finish", self)
        finish_layout = QVBoxLayout(finish_group)
        self.finish_selector = FinishSelector(finish_group)
        self.finish_selector.finish_selected.connect(self._on_finish_selected)
        finish_layout.addWidget(self.finish_selector)
        root.addWidget(finish_group)

        # 4. Download
        self.btn_download = QPushButton("Download Configuration", self)
        self.btn_download.setMinimumHeight(36)
        self.btn_download.setStyleSheet(
            f"QPushButton {{ background-color: {ACCENT_COLOR}; color: white; border-radius: 4px; }}"
        )
        self.btn_download.clicked.connect(self.download_requested)
        root.addWidget(self.btn_download)

        # 5. Layout summary
        self.lbl_summary = QLabel(self)
        self.lbl_summary.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_summary.setStyleSheet("color: gray;")
        root.addWidget(self.lbl_summary)

        root.addStretch()

        self.store.parameters_changed.connect(self.load_from_state)
        self.store.layout_changed.connect(self._update_summary)

        # Initial State Sync
        self.load_from_state()
        self._update_summary()

    # ---- utilities ----

    def _next_row(self) -> int:
        r = self._row
        self._row += 1
        return r

    def _add_slider(self, key: str, label: str, slider_range: SliderRange) -> StepSlider:
        w = StepSlider(key, label, slider_range, self)
        w.value_changed.connect(self._on_slider_changed)
        self.grid.addWidget(w, self._next_row(), 0)
        self._sliders[key] = w
        return w

    def _current_policy(self) -> SpacingPolicy:
        return SpacingPolicy(self.policy_combo.currentData())

    # ---- state sync ----

    def load_from_state(self, *_args) -> None:
        """Updates UI widgets to match the store."""
        params: ScreenParameters = self.store.parameters
        policy = SpacingPolicy(params.spacing_policy)
        ranges = SLIDER_RANGES[policy]

        self.policy_combo.blockSignals(True)
        self.policy_combo.setCurrentIndex(self.policy_combo.findData(policy))
        self.policy_combo.blockSignals(False)

        for key, slider in self._sliders.items():
            if key in ranges:
                slider.set_range(ranges[key])
                slider.set_value(getattr(params, key))
                slider.setVisible(True)
            else:
                slider.setVisible(False)

        self.finish_selector.set_color(params.finish_color)

    @Slot()
    def _update_summary(self, *_args) -> None:
        grid = self.store.layout()
        if grid.is_empty:
            self.lbl_summary.setText("No holes fit the current dimensions.")
        else:
            self.lbl_summary.setText(f"{grid.columns} x {grid.rows} grid, {grid.count} holes")

    # ---- slots ----

    @Slot(str, float)
    def _on_slider_changed(self, key: str, value: float) -> None:
        self.store.set_parameter(key, value)

    @Slot(str)
    def _on_finish_selected(self, color: str) -> None:
        self.store.set_finish(color)

    @Slot(int)
    def _on_policy_changed(self, _index: int) -> None:
        policy = self._current_policy()
        ranges = SLIDER_RANGES[policy]
        params = self.store.parameters

        # Pull values into the new policy's slider limits in one update
        clamped = {
            key: slider_range.clamp(getattr(params, key))
            for key, slider_range in ranges.items()
        }
        self.store.update(spacing_policy=policy, **clamped)
