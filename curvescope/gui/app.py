"""
Application entry point and setup.
"""

import sys
from typing import Optional
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt

# Configure PyQtGraph before any pens are built
import pyqtgraph as pg
pg.setConfigOptions(
    useOpenGL=False,
    antialias=True,
    enableExperimental=False,
)

from .main_window import MainWindow


def create_app() -> QApplication:
    """Create and configure the QApplication."""
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("CurveScope")
    app.setOrganizationName("CurveScope")
    return app


def run_app(data_path: Optional[str] = None) -> int:
    """Run the CurveScope application."""
    app = create_app()

    window = MainWindow(data_path=data_path)
    window.show()

    return app.exec()
