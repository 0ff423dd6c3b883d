"""
3D Visualization Widget (PyVista Wrapper)
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np
import pyvista as pv
from PySide6.QtCore import QSize
from PySide6.QtGui import QCloseEvent, QResizeEvent
from PySide6.QtWidgets import QFrame, QHBoxLayout, QPushButton, QStyle, QVBoxLayout, QWidget
from pyvistaqt import QtInteractor

from screenconfigurator.config import HOLE_DEPTH_CLEARANCE, SCENE_SCALE
from screenconfigurator.model.layout import HoleGrid
from screenconfigurator.model.state import ScreenParameters

logger = logging.getLogger(__name__)

HOLE_COLOR = "#ffffff"
HOLE_RESOLUTION = 32
CAMERA_POSITION: Tuple[float, float, float] = (0.0, 0.0, 1.5)


class PyVistaWidget(QWidget):
    """
    PyVista/Qt preview of the perforated panel:
      - a box for the panel, coloured with the selected finish,
      - one cylinder per hole (glyphed, so large grids stay cheap),
      - perspective camera with orbit interaction.
    """
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Actors state ---
        self._panel_actor: Optional[pv.Actor] = None
        self._holes_actor: Optional[pv.Actor] = None

        # --- Data cache ---
        self._cached_panel_signature: Optional[Tuple[float, float, float]] = None
        self._cached_holes_signature: Optional[Tuple] = None

        # --- Visibility state ---
        self._visible_panel: bool = True
        self._visible_holes: bool = True

        self._setup_overlay_controls()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def update_scene(
        self,
        params: ScreenParameters,
        grid: HoleGrid,
        reset_camera: bool = False
    ) -> None:
        """
        Refreshes all layers in the 3D preview:
        1. Panel body (cached on its dimensions)
        2. Holes (cached on the grid and hole size)
        3. Finish colour (always applied, it is cheap)
        """
        logger.debug("Updating 3D preview scene.")
        self._update_panel_layer(params)
        self._update_holes_layer(params, grid)
        self.set_finish_color(params.finish_color, render=False)

        self._apply_visibility()

        if reset_camera:
            self.reset_camera()

        self.plotter.render()

    def set_finish_color(self, color: str, render: bool = True) -> None:
        """Recolour the panel without rebuilding any geometry."""
        if self._panel_actor is not None:
            self._panel_actor.prop.color = color
        if render:
            self.plotter.render()

    def reset_camera(self) -> None:
        cam = self.plotter.camera
        cam.position = CAMERA_POSITION
        cam.focal_point = (0.0, 0.0, 0.0)
        cam.up = (0.0, 1.0, 0.0)
        self.plotter.reset_camera_clipping_range()

    def set_panel_visible(self, visible: bool, render: bool = True) -> None:
        """Show or hide the panel body; also driven by the overlay toggle."""
        self._visible_panel = visible
        self._sync_toggle(self.btn_vis_panel, visible, render)

    def set_holes_visible(self, visible: bool, render: bool = True) -> None:
        """Show or hide the hole cylinders; also driven by the overlay toggle."""
        self._visible_holes = visible
        self._sync_toggle(self.btn_vis_holes, visible, render)

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _update_panel_layer(self, params: ScreenParameters) -> None:
        """Rebuild the panel box only if its dimensions changed."""
        signature = (params.screen_width, params.screen_height, params.screen_thickness)
        if self._cached_panel_signature == signature:
            return

        if self._panel_actor is not None:
            self.plotter.remove_actor(self._panel_actor)
            self._panel_actor = None
        self._cached_panel_signature = signature

        w, h, t = (v / SCENE_SCALE for v in signature)
        if w <= 0 or h <= 0 or t <= 0:
            return

        # Box sits on z=0 and extends to +t, so the hole mid-plane is t/2
        box = pv.Box(bounds=(-w / 2, w / 2, -h / 2, h / 2, 0.0, t))
        self._panel_actor = self.plotter.add_mesh(
            box,
            color=params.finish_color,
            pickable=False,
            show_scalar_bar=False,
            label="Panel",
        )

    def _update_holes_layer(self, params: ScreenParameters, grid: HoleGrid) -> None:
        """Rebuild hole cylinders only if the grid or hole size changed."""
        signature = (
            grid.columns, grid.rows, grid.spacing_x, grid.spacing_y,
            params.hole_diameter, params.screen_thickness,
            grid.positions.tobytes(),
        )
        if self._cached_holes_signature == signature:
            return

        self._clear_holes_layer()
        self._cached_holes_signature = signature

        if grid.is_empty or params.hole_diameter <= 0:
            return

        cylinder = pv.Cylinder(
            center=(0.0, 0.0, 0.0),
            direction=(0.0, 0.0, 1.0),
            radius=params.hole_diameter / 2.0 / SCENE_SCALE,
            height=(params.screen_thickness + HOLE_DEPTH_CLEARANCE) / SCENE_SCALE,
            resolution=HOLE_RESOLUTION,
        )
        centers = pv.PolyData(np.ascontiguousarray(grid.positions))
        try:
            holes = centers.glyph(geom=cylinder, orient=False, scale=False)
        except Exception as e:
            logger.exception(f"Failed to build hole glyphs: {e}")
            return

        self._holes_actor = self.plotter.add_mesh(
            holes,
            color=HOLE_COLOR,
            pickable=False,
            show_scalar_bar=False,
            label="Holes",
        )
        logger.debug(f"Rendered {grid.count} holes.")

    def _clear_holes_layer(self) -> None:
        if self._holes_actor is not None:
            self.plotter.remove_actor(self._holes_actor)
            self._holes_actor = None

    def _sync_toggle(self, button: QPushButton, visible: bool, render: bool) -> None:
        if button.isChecked() != visible:
            button.blockSignals(True)
            button.setChecked(visible)
            button.blockSignals(False)
        self._apply_visibility()
        if render:
            self.plotter.render()

    def _apply_visibility(self) -> None:
        """Applies visibility states to all layers."""
        if self._panel_actor is not None:
            self._panel_actor.SetVisibility(self._visible_panel)
        if self._holes_actor is not None:
            self._holes_actor.SetVisibility(self._visible_holes)

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background("white")
        self.plotter.enable_trackball_style()
        self.reset_camera()

    def _setup_overlay_controls(self) -> None:
        """Floating toggle buttons."""
        self.overlay_widget = QFrame(self)
        self.overlay_widget.setStyleSheet("""
            QFrame { background-color: rgba(255, 255, 255, 200); border-radius: 6px; border: 1px solid #ccc; }
            QPushButton { background-color: transparent; border: none; padding: 4px; }
            QPushButton:checked { background-color: rgba(0, 120, 215, 50); border: 1px solid #0078D7; border-radius: 3px; }
            QPushButton:hover { background-color: rgba(0, 0, 0, 10); }
        """)

        layout = QHBoxLayout(self.overlay_widget)
        layout.setContentsMargins(4, 4, 4, 4)

        def make_btn(icon, slot, tooltip, default_state=True):
            btn = QPushButton()
            btn.setIcon(self.style().standardIcon(icon))
            btn.setIconSize(QSize(16, 16))
            btn.setCheckable(True)
            btn.setChecked(default_state)
            btn.setToolTip(tooltip)
            btn.toggled.connect(slot)
            layout.addWidget(btn)
            return btn

        self.btn_vis_panel = make_btn(QStyle.StandardPixmap.SP_FileIcon, self.set_panel_visible, "Show Panel")
        self.btn_vis_holes = make_btn(QStyle.StandardPixmap.SP_DialogApplyButton, self.set_holes_visible, "Show Holes")

        btn_home = QPushButton()
        btn_home.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_BrowserReload))
        btn_home.setToolTip("Reset View")
        btn_home.clicked.connect(self.on_reset_view)
        layout.addWidget(btn_home)

        self.overlay_widget.adjustSize()
        self.overlay_widget.move(8, 8)

    # --- Overlay Slots ---
    def on_reset_view(self) -> None:
        self.reset_camera()
        self.plotter.render()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self.overlay_widget.raise_()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
