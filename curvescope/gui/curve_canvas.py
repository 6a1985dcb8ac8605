"""
CurveCanvas: Qt rendering and input backend for a CurveEngine.

Mouse events are forwarded to the engine as pointer events; every paint
asks the engine for a fresh ViewModel and draws it with the style
descriptors from ``styles``.
"""

from typing import Optional

from PyQt6.QtCore import QPointF, Qt, QTimer
from PyQt6.QtGui import QColor, QFontMetricsF, QPainter, QPolygonF
from PyQt6.QtWidgets import QWidget

from ..core.engine import CurveEngine
from ..core.interaction import PointerButton
from ..core.view_model import ViewModel
from .redraw_throttler import RedrawThrottler
from .styles import DEFAULT_STYLE, CanvasStyle

from curvescope.logging import get_logger
logger = get_logger(__name__)

_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.PRIMARY,
    Qt.MouseButton.RightButton: PointerButton.SECONDARY,
}


def _polygon(points) -> QPolygonF:
    return QPolygonF([QPointF(float(x), float(y)) for x, y in points])


class CurveCanvas(QWidget):
    """Widget that displays one curve and turns mouse input into gestures."""

    def __init__(self, engine: Optional[CurveEngine] = None,
                 style: CanvasStyle = DEFAULT_STYLE,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._engine = engine or CurveEngine(self)
        self._style = style
        self._throttler = RedrawThrottler()

        self._redraw_timer = QTimer(self)
        self._redraw_timer.setSingleShot(True)
        self._redraw_timer.timeout.connect(self._flush_redraw)

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.ClickFocus)
        self.setMinimumSize(200, 200)

        self._engine.redraw_requested.connect(self._on_redraw_requested)

    @property
    def engine(self) -> CurveEngine:
        return self._engine

    @property
    def style_descriptor(self) -> CanvasStyle:
        return self._style

    # === Redraw scheduling ===

    def _on_redraw_requested(self) -> None:
        self._throttler.request()
        if self._throttler.should_redraw():
            self.update()
        elif not self._redraw_timer.isActive():
            self._redraw_timer.start(int(self._throttler.remaining_ms()) + 1)

    def _flush_redraw(self) -> None:
        if self._throttler.should_redraw():
            self.update()
        elif self._throttler.pending:
            self._redraw_timer.start(int(self._throttler.remaining_ms()) + 1)

    # === Input ===

    def _sync_viewport(self) -> None:
        self._engine.set_viewport(self.width(), self.height())

    def mousePressEvent(self, event) -> None:
        button = _BUTTONS.get(event.button())
        if button is None:
            super().mousePressEvent(event)
            return
        self._sync_viewport()
        pos = event.position()
        self._engine.pointer_down(pos.x(), pos.y(), button)
        event.accept()

    def mouseMoveEvent(self, event) -> None:
        buttons = event.buttons()
        if buttons & Qt.MouseButton.LeftButton:
            held = PointerButton.PRIMARY
        elif buttons & Qt.MouseButton.RightButton:
            held = PointerButton.SECONDARY
        else:
            held = None
        self._sync_viewport()
        pos = event.position()
        self._engine.pointer_move(pos.x(), pos.y(), held)
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        button = _BUTTONS.get(event.button())
        if button is None:
            super().mouseReleaseEvent(event)
            return
        self._sync_viewport()
        pos = event.position()
        self._engine.pointer_up(pos.x(), pos.y(), button)
        event.accept()

    def focusOutEvent(self, event) -> None:
        # Losing focus mid-gesture (e.g. window switch) means the release may never arrive
        self._engine.cancel_gesture()
        super().focusOutEvent(event)

    def resizeEvent(self, event) -> None:
        self._sync_viewport()
        super().resizeEvent(event)

    # === Painting ===

    def paintEvent(self, event) -> None:
        self._sync_viewport()
        vm = self._engine.view_model()

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(self._style.background))

        if not vm.is_empty:
            if vm.orientation_degrees:
                cx, cy = self.width() / 2.0, self.height() / 2.0
                painter.translate(cx, cy)
                painter.rotate(vm.orientation_degrees)
                painter.translate(-cx, -cy)
            self.paint_view_model(painter, vm)

        painter.end()

    def paint_view_model(self, painter: QPainter, vm: ViewModel) -> None:
        """Draw one frame. Order: axes, curve, markers, regions, hover label, zoom rectangle."""
        self._paint_axes(painter, vm)
        self._paint_curve(painter, vm)
        self._paint_markers(painter, vm)
        self._paint_regions(painter, vm)
        self._paint_hover(painter, vm)
        self._paint_zoom_rect(painter, vm)

    def _paint_axes(self, painter: QPainter, vm: ViewModel) -> None:
        style = self._style
        font = style.axis_text.font()
        fm = QFontMetricsF(font)
        painter.setFont(font)
        for axis in vm.axes:
            painter.setPen(style.axis.pen())
            painter.setBrush(style.axis_fill.brush())
            painter.drawLine(QPointF(*axis.start), QPointF(*axis.end))
            painter.drawPolygon(_polygon(axis.arrowhead))

            lx, ly = axis.label_pos
            painter.setPen(style.axis_text.pen())
            if axis.name == 'y':
                painter.drawText(QPointF(lx, ly + fm.ascent()), axis.label)
            else:
                painter.drawText(QPointF(lx - fm.horizontalAdvance(axis.label), ly - fm.descent()),
                                 axis.label)

    def _paint_curve(self, painter: QPainter, vm: ViewModel) -> None:
        if len(vm.polyline) < 2:
            return
        painter.setPen(self._style.curve.pen())
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolyline(_polygon(vm.polyline))

    def _paint_markers(self, painter: QPainter, vm: ViewModel) -> None:
        s = self._style.marker_size
        for glyph in vm.markers:
            painter.setPen(self._style.marker(glyph.kind).pen())
            x, y = glyph.x, glyph.y
            painter.drawLine(QPointF(x - s, y), QPointF(x + s, y))
            painter.drawLine(QPointF(x, y - s), QPointF(x, y + s))
            painter.drawLine(QPointF(x - s, y - s), QPointF(x + s, y + s))
            painter.drawLine(QPointF(x - s, y + s), QPointF(x + s, y - s))

    def _paint_regions(self, painter: QPainter, vm: ViewModel) -> None:
        if not vm.regions:
            return
        style = self._style
        font = style.region_text.font()
        fm = QFontMetricsF(font)
        painter.setFont(font)
        for region in vm.regions:
            painter.setPen(style.region_outline.pen())
            painter.setBrush(style.region_fill.brush())
            painter.drawPolygon(_polygon(region.polygon))

            lx, ly = region.label_pos
            painter.setPen(style.region_text.pen())
            painter.drawText(
                QPointF(lx - fm.horizontalAdvance(region.label) / 2.0, ly + fm.height() / 2.0),
                region.label,
            )

    def _paint_hover(self, painter: QPainter, vm: ViewModel) -> None:
        if vm.hover is None:
            return
        style = self._style.hover_text
        font = style.font()
        fm = QFontMetricsF(font)
        text = vm.hover.text
        width, height = fm.horizontalAdvance(text), fm.height()
        view_w, _ = vm.viewport

        ax, ay = vm.hover.anchor
        pos_x = ax - width / 2.0
        pos_y = ay - height / 2.0
        # Keep the readout inside the viewport
        if pos_x + width > view_w:
            pos_x = view_w - width
        elif pos_x < 0:
            pos_x = 0.0
        if pos_y - height < 0:
            pos_y = height

        painter.setFont(font)
        painter.setPen(style.pen())
        painter.drawText(QPointF(pos_x, pos_y), text)

    def _paint_zoom_rect(self, painter: QPainter, vm: ViewModel) -> None:
        if vm.zoom_rect is None:
            return
        painter.setPen(self._style.zoom_rect.pen())
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolyline(_polygon(vm.zoom_rect.outline))
