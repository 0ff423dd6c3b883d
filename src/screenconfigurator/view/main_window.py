"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the parameter panel and
the 3D preview.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (like File -> Download) to the store
   and the exporter, and store signals to the preview.
"""
from __future__ import annotations

import logging
import os

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent
from PySide6.QtWidgets import QFileDialog, QMainWindow, QMessageBox, QScrollArea, QSplitter

from screenconfigurator.config import EXPORT_FILENAME, VISIBLE_APP_NAME
from screenconfigurator.model.io import export_csv
from screenconfigurator.model.layout import HoleGrid
from screenconfigurator.model.state import ParameterStore
from screenconfigurator.view.panels.parameters import ParametersPanel
from screenconfigurator.view.widgets.plot_3d import PyVistaWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, store: ParameterStore) -> None:
        super().__init__()
        self.store: ParameterStore = store
        self._last_export_dir: str = os.getcwd()

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.params_panel = ParametersPanel(self.store)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.params_panel)
        splitter.addWidget(scroll)

        # --- RIGHT SIDE: 3D Visualization ---
        self.visualizer = PyVistaWidget()
        splitter.addWidget(self.visualizer)

        # Set initial proportions (1 part sidebar : 4 parts 3D view)
        splitter.setSizes([300, 1100])

        # --- SIGNAL CONNECTIONS ---
        self.store.parameters_changed.connect(self.on_parameters_changed)
        self.store.layout_changed.connect(self.on_layout_changed)
        self.store.finish_changed.connect(self.visualizer.set_finish_color)
        self.params_panel.download_requested.connect(self.on_download)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # Initial Render
        self.update_visualization(reset_camera=True)
        self.on_layout_changed(self.store.layout())

    def _create_actions(self) -> None:
        self.act_download = QAction("Download Configuration...", self)
        self.act_download.setShortcut("Ctrl+S")
        self.act_download.triggered.connect(self.on_download)

        self.act_reset = QAction("Reset Parameters", self)
        self.act_reset.triggered.connect(self.on_reset)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_download)
        file_menu.addSeparator()
        file_menu.addAction(self.act_reset)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

    # --- SLOTS ---

    def on_parameters_changed(self, *_args) -> None:
        self.update_visualization()

    def on_layout_changed(self, grid: HoleGrid) -> None:
        if grid.is_empty:
            self.statusBar().showMessage("No holes fit the current dimensions.")
        else:
            self.statusBar().showMessage(
                f"{grid.count} holes ({grid.columns} columns x {grid.rows} rows), "
                f"spacing {grid.spacing_x:.1f} x {grid.spacing_y:.1f} mm"
            )

    def on_reset(self) -> None:
        self.store.reset()
        self.update_visualization(reset_camera=True)

    def on_download(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(
            self,
            "Download Configuration",
            os.path.join(self._last_export_dir, EXPORT_FILENAME),
            "CSV Files (*.csv)"
        )
        if not fname:
            return
        if not fname.endswith(".csv"):
            fname += ".csv"

        try:
            path = export_csv(self.store.snapshot(), fname)
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Could not write the configuration:\n{e}")
            return

        if path is not None:
            self._last_export_dir = str(path.parent)
            self.statusBar().showMessage(f"Configuration saved to {path}", 5000)

    def update_visualization(self, reset_camera: bool = False) -> None:
        self.visualizer.update_scene(self.store.parameters, self.store.layout(), reset_camera=reset_camera)

    def closeEvent(self, event: QCloseEvent, /) -> None:
        """Close the PyVista plotter safely before the window goes away."""
        if self.visualizer and self.visualizer.plotter:
            self.visualizer.plotter.close()
        event.accept()
