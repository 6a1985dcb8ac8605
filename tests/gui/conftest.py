import gc

import pytest
from PyQt6 import sip
from PyQt6.QtWidgets import QApplication


@pytest.fixture(autouse=True)
def _enforce_widget_cleanup():
    """Error if a test leaks curvescope.* top-level widgets.

    Defined first so it tears down last, after _flush_qt_events has
    processed deferred deletes.
    """
    app = QApplication.instance()
    if app is None:
        yield
        return

    before = set(id(w) for w in app.allWidgets())
    yield

    gc.collect()
    app.processEvents()
    app.processEvents()

    leaked = [
        w for w in app.allWidgets()
        if id(w) not in before
        and w.parent() is None
        and not sip.isdeleted(w)
        and type(w).__module__.startswith("curvescope.")
        and w.isVisible()
    ]
    if leaked:
        names = [type(w).__name__ for w in leaked]
        for w in leaked:
            w.close()
            w.deleteLater()
        app.processEvents()
        pytest.fail(
            f"Leaked {len(leaked)} widget(s) without cleanup: {names}. "
            "Add qtbot.addWidget(w) or close the widget in fixture teardown.",
            pytrace=False,
        )


@pytest.fixture(autouse=True)
def _flush_qt_events():
    """Drain deferred Qt events (single-shot timers, deleteLater) between tests."""
    yield
    app = QApplication.instance()
    if app is None:
        return
    app.processEvents()
    gc.collect()
    app.processEvents()
