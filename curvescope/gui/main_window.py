"""
Main application window: menus around a single CurveCanvas.

    File   -> Open...
    Graph  -> Show axes / Show markers / Show regions (checkable)
              Rotate left 90° / Rotate right 90° / Zoom out

Graph actions stay disabled until a file has been loaded.
"""

import os
from typing import Optional

from PyQt6.QtCore import pyqtSlot
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QFileDialog, QMainWindow, QMessageBox, QStatusBar

from ..core.engine import CurveEngine, DisplayFlags
from ..core.errors import SampleLoadError
from ..core.orientation import RotateDirection
from ..core.sample_loader import load_samples
from ..core.settings import get_setting, set_setting
from .curve_canvas import CurveCanvas

from curvescope.logging import get_logger
logger = get_logger(__name__)

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 800


class MainWindow(QMainWindow):
    """Top-level window hosting one curve view."""

    def __init__(self, data_path: Optional[str] = None):
        super().__init__()
        self.setWindowTitle("CurveScope")
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)

        flags = DisplayFlags(
            show_axis=bool(get_setting("show_axis")),
            show_markers=bool(get_setting("show_markers")),
            show_regions=bool(get_setting("show_regions")),
        )
        self._engine = CurveEngine(self, flags=flags,
                                   pick_radius_px=float(get_setting("pick_radius_px")))
        self._canvas = CurveCanvas(self._engine, parent=self)
        self.setCentralWidget(self._canvas)

        self._data_path: Optional[str] = None
        self._setup_menus(flags)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready - open a data file to begin")

        self._engine.data_loaded.connect(self._on_data_loaded)

        if data_path:
            self.open_file(data_path)

    @property
    def engine(self) -> CurveEngine:
        return self._engine

    @property
    def canvas(self) -> CurveCanvas:
        return self._canvas

    def _setup_menus(self, flags: DisplayFlags) -> None:
        file_menu = self.menuBar().addMenu("File")
        self._open_action = QAction("Open...", self)
        self._open_action.setShortcut(QKeySequence.StandardKey.Open)
        self._open_action.triggered.connect(self._on_open)
        file_menu.addAction(self._open_action)

        graph_menu = self.menuBar().addMenu("Graph")
        self._graph_menu = graph_menu

        self._axis_action = self._add_toggle(graph_menu, "Show axes", flags.show_axis,
                                             "show_axis", self._engine.set_show_axis)
        self._markers_action = self._add_toggle(graph_menu, "Show markers", flags.show_markers,
                                                "show_markers", self._engine.set_show_markers)
        self._regions_action = self._add_toggle(graph_menu, "Show enclosed regions",
                                                flags.show_regions, "show_regions",
                                                self._engine.set_show_regions)
        graph_menu.addSeparator()

        self._rotate_left_action = QAction("Rotate left 90°", self)
        self._rotate_left_action.triggered.connect(
            lambda: self._engine.rotate(RotateDirection.LEFT))
        graph_menu.addAction(self._rotate_left_action)

        self._rotate_right_action = QAction("Rotate right 90°", self)
        self._rotate_right_action.triggered.connect(
            lambda: self._engine.rotate(RotateDirection.RIGHT))
        graph_menu.addAction(self._rotate_right_action)

        self._zoom_out_action = QAction("Zoom out", self)
        self._zoom_out_action.triggered.connect(self._engine.zoom_out)
        graph_menu.addAction(self._zoom_out_action)

        self._set_graph_actions_enabled(False)

    def _add_toggle(self, menu, text: str, checked: bool, setting_key: str, apply) -> QAction:
        action = QAction(text, self)
        action.setCheckable(True)
        action.setChecked(checked)

        def _on_toggled(state: bool) -> None:
            apply(state)
            set_setting(setting_key, bool(state))

        action.toggled.connect(_on_toggled)
        menu.addAction(action)
        return action

    def _set_graph_actions_enabled(self, enabled: bool) -> None:
        for action in self._graph_menu.actions():
            action.setEnabled(enabled)

    # === Loading ===

    def open_file(self, path: str) -> bool:
        """Load samples from ``path`` into the engine. Returns False on failure."""
        try:
            samples = load_samples(path)
        except SampleLoadError as e:
            logger.warning(f"Load failed: {e}")
            QMessageBox.warning(self, "Data load error", str(e))
            return False

        self._data_path = os.path.abspath(path)
        set_setting("last_directory", os.path.dirname(self._data_path))
        self._engine.load(samples)
        return True

    @pyqtSlot()
    def _on_open(self) -> None:
        start_dir = get_setting("last_directory") or ""
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Open Data File",
            start_dir,
            "Sample Files (*.bin *.txt *.dat);;All Files (*)"
        )
        if path:
            self.open_file(path)

    @pyqtSlot(int)
    def _on_data_loaded(self, count: int) -> None:
        self._set_graph_actions_enabled(count > 0)
        name = os.path.basename(self._data_path) if self._data_path else "data"
        self._status_bar.showMessage(f"{name}: {count} points")
        self.setWindowTitle(f"CurveScope - {name}")
