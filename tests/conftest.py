"""Shared test fixtures for CurveScope test suite.

Provides a session QApplication, sample data factories and an engine
with a square viewport ready for pointer gestures.
"""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest
from PyQt6.QtWidgets import QApplication

from curvescope.core import settings
from curvescope.core.engine import CurveEngine


@pytest.fixture(scope="session")
def qapp():
    """Session-scoped QApplication shared by all tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    """Point the settings file at a temp dir so tests never touch ~/.config."""
    monkeypatch.setattr(settings, "SETTINGS_DIR", tmp_path / "config")
    monkeypatch.setattr(settings, "SETTINGS_PATH", tmp_path / "config" / "settings.json")


@pytest.fixture
def wave_samples():
    """Sine-like curve crossing zero several times, deliberately unsorted."""
    x = np.linspace(0.0, 4.0 * np.pi, 41)
    samples = np.column_stack((x, 3.0 * np.sin(x)))
    rng = np.random.default_rng(7)
    return samples[rng.permutation(len(samples))]


@pytest.fixture
def square_samples():
    """Five samples spanning a 4x4 data box: (0,0) .. (4,4) on y = x."""
    return np.array([[float(i), float(i)] for i in range(5)])


@pytest.fixture
def engine_factory():
    """Factory fixture: an engine with a viewport and optional data."""
    engines = []

    def _make(samples=None, width=400, height=400, **kwargs):
        engine = CurveEngine(**kwargs)
        engine.set_viewport(width, height)
        if samples is not None:
            engine.load(samples)
        engines.append(engine)
        return engine

    yield _make
    for engine in engines:
        engine.deleteLater()


class RedrawCounter:
    """Counts redraw_requested emissions."""

    def __init__(self, engine):
        self.count = 0
        engine.redraw_requested.connect(self._on_redraw)

    def _on_redraw(self):
        self.count += 1


@pytest.fixture
def redraw_counter():
    return RedrawCounter
