from dataclasses import replace

from PyQt6.QtGui import QColor

from curvescope.core.markers import MarkerKind
from curvescope.gui.styles import DEFAULT_STYLE, CanvasStyle, StrokeStyle


def test_canvas_style_is_hashable() -> None:
    assert hash(DEFAULT_STYLE) == hash(CanvasStyle())
    assert DEFAULT_STYLE == CanvasStyle()


def test_marker_lookup_by_kind() -> None:
    assert DEFAULT_STYLE.marker(MarkerKind.HIGHLIGHTED).color == '#ffff00'
    assert DEFAULT_STYLE.marker(MarkerKind.ASCENDING_DIGITS).color == '#00ff00'
    assert DEFAULT_STYLE.marker(MarkerKind.NORMAL).color == '#000000'


def test_missing_kind_falls_back_to_first_entry() -> None:
    style = replace(DEFAULT_STYLE, markers=((MarkerKind.NORMAL, StrokeStyle('#123456')),))
    assert style.marker(MarkerKind.HIGHLIGHTED).color == '#123456'


def test_dashed_pen(qapp) -> None:
    pen = DEFAULT_STYLE.zoom_rect.pen()
    assert pen.color() == QColor('#ffff00')
    assert list(pen.dashPattern()) == [25.0, 25.0]
