"""
CurveEngine: the interactive data/geometry core behind one curve view.

Owns the point set, zoom stack, gesture state, orientation and display
flags. Input arrives as plain method calls (pointer events in widget
pixels, loads, commands); output is a ViewModel rebuilt from current
state on every view_model() call. Any mutation that changes what should
be on screen emits ``redraw_requested`` once; the backend repaints on its
own schedule.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

import numpy as np
from PyQt6.QtCore import QObject, pyqtSignal

from .errors import EmptyStateError, IndexOutOfRangeError
from .interaction import (
    DrawingZoomRect, Effect, GestureState, InteractionController, PointerAction,
    PointerButton, PointerEvent, PopZoom, PushZoom, RequestRedraw, SetHover,
    SetSampleY,
)
from .mapper import CoordinateMapper
from .markers import classify_marker
from .orientation import Orientation, RotateDirection
from .point_set import PICK_RADIUS_PX, PointSet, SampleInput
from .regions import RegionAnalyzer
from .view_model import (
    AxisGeometry, HoverLabel, MarkerGlyph, RegionShape, ViewModel, ZoomRect,
)
from .window import Window, ZoomStack
from curvescope.logging import get_logger
logger = get_logger(__name__)

# Arrowhead offsets in device pixels relative to the axis tip
_Y_ARROW = ((5.0, 20.0), (-5.0, 20.0))
_X_ARROW = ((-20.0, -5.0), (-20.0, 5.0))
_AXIS_LABEL_GAP = 10.0


@dataclass(frozen=True)
class DisplayFlags:
    show_axis: bool = True
    show_markers: bool = True
    show_regions: bool = False


class _Probe:
    """CurveProbe bound to one frame's mapper."""

    def __init__(self, engine: "CurveEngine", mapper: CoordinateMapper):
        self._engine = engine
        self._mapper = mapper

    def hit(self, px: float, py: float) -> Optional[int]:
        x, y = self._mapper.device_to_data(px, py)
        tolerance = self._mapper.pixels_to_data(self._engine.pick_radius_px)
        return self._engine.points.nearest(x, y, tolerance)

    def data_y(self, px: float, py: float) -> float:
        return float(self._mapper.device_to_data(px, py)[1])

    @property
    def hover_index(self) -> Optional[int]:
        return self._engine.hover_index


class CurveEngine(QObject):
    """Interactive engine for a single curve view.

    Signals:
        redraw_requested()
        data_loaded(int)   -- number of samples
    """

    redraw_requested = pyqtSignal()
    data_loaded = pyqtSignal(int)

    def __init__(self, parent: Optional[QObject] = None,
                 flags: Optional[DisplayFlags] = None,
                 pick_radius_px: float = PICK_RADIUS_PX):
        super().__init__(parent)
        self._points = PointSet()
        self._zoom = ZoomStack()
        self._regions = RegionAnalyzer(self._points)
        self._controller = InteractionController()
        self._orientation = Orientation()
        self._flags = flags or DisplayFlags()
        self._viewport: Tuple[float, float] = (0.0, 0.0)
        self._hover_index: Optional[int] = None
        self.pick_radius_px = float(pick_radius_px)

    # === State accessors ===

    @property
    def points(self) -> PointSet:
        return self._points

    @property
    def is_loaded(self) -> bool:
        return not self._points.is_empty() and self._zoom.depth > 0

    @property
    def state(self) -> GestureState:
        return self._controller.state

    @property
    def hover_index(self) -> Optional[int]:
        return self._hover_index

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @property
    def flags(self) -> DisplayFlags:
        return self._flags

    @property
    def viewport(self) -> Tuple[float, float]:
        return self._viewport

    @property
    def zoom_depth(self) -> int:
        return self._zoom.depth

    def current_window(self) -> Window:
        """Active zoom window (unpadded). Raises EmptyStateError before load."""
        return self._zoom.current()

    def crossings(self) -> np.ndarray:
        return self._regions.crossings()

    def areas(self) -> np.ndarray:
        return self._regions.areas()

    def mapper(self) -> Optional[CoordinateMapper]:
        """Mapper for the current window and viewport, or None if nothing can be drawn."""
        width, height = self._viewport
        if width <= 0 or height <= 0:
            return None
        try:
            window = self._zoom.current()
        except EmptyStateError:
            return None
        try:
            return CoordinateMapper.fit(window, width, height)
        except ValueError as e:
            logger.debug(f"Nothing drawn: {e}")
            return None

    # === Inputs ===

    def load(self, samples: SampleInput) -> None:
        """Replace the curve. Resets zoom, gestures, hover and region caches."""
        self._points.load(samples)
        self._controller.reset()
        self._hover_index = None
        self._regions.invalidate()
        if self._points.is_empty():
            self._zoom.clear()
            logger.debug("Loaded empty sample set; view cleared")
        else:
            self._zoom.reset(self._points.bounds())
            logger.info(f"Loaded {len(self._points)} samples, bounds={self._zoom.base}")
        self.data_loaded.emit(len(self._points))
        self.redraw_requested.emit()

    def set_viewport(self, width: float, height: float) -> None:
        """Viewport size in device pixels. Does not request a redraw."""
        self._viewport = (float(width), float(height))

    def pointer_down(self, x: float, y: float,
                     button: PointerButton = PointerButton.PRIMARY) -> None:
        self._dispatch(PointerAction.DOWN, x, y, button)

    def pointer_move(self, x: float, y: float,
                     button: Optional[PointerButton] = None) -> None:
        self._dispatch(PointerAction.MOVE, x, y, button)

    def pointer_up(self, x: float, y: float,
                   button: PointerButton = PointerButton.PRIMARY) -> None:
        self._dispatch(PointerAction.UP, x, y, button)

    def cancel_gesture(self) -> None:
        """Pointer capture was lost: drop a pending zoom rectangle or end a drag."""
        self._dispatch(PointerAction.CANCEL, 0.0, 0.0, None)

    def zoom_out(self) -> bool:
        if self._zoom.pop():
            self.redraw_requested.emit()
            return True
        return False

    def rotate(self, direction: RotateDirection) -> int:
        turns = self._orientation.rotate(direction)
        logger.debug(f"Rotated {direction.name.lower()}, turns={turns}")
        self.redraw_requested.emit()
        return turns

    def set_display_flags(self, flags: DisplayFlags) -> None:
        if flags != self._flags:
            self._flags = flags
            self.redraw_requested.emit()

    def set_show_axis(self, show: bool) -> None:
        self.set_display_flags(replace(self._flags, show_axis=bool(show)))

    def set_show_markers(self, show: bool) -> None:
        self.set_display_flags(replace(self._flags, show_markers=bool(show)))

    def set_show_regions(self, show: bool) -> None:
        self.set_display_flags(replace(self._flags, show_regions=bool(show)))

    # === Event handling ===

    def _dispatch(self, action: PointerAction, x: float, y: float,
                  button: Optional[PointerButton]) -> None:
        mapper = self.mapper()
        if mapper is None or self._points.is_empty():
            return
        width, height = self._viewport
        cx, cy = self._orientation.to_content(x, y, width, height)
        event = PointerEvent(action=action, x=cx, y=cy, button=button)
        effects = self._controller.handle(event, _Probe(self, mapper))
        if self._apply(effects, mapper):
            self.redraw_requested.emit()

    def _apply(self, effects: List[Effect], mapper: CoordinateMapper) -> bool:
        """Apply effects; returns True if a redraw is needed."""
        redraw = False
        for effect in effects:
            if isinstance(effect, SetSampleY):
                try:
                    self._points.set_y(effect.index, effect.y)
                except IndexOutOfRangeError as e:
                    logger.debug(f"Drag ignored: {e}")
                    self._controller.reset()
            elif isinstance(effect, PushZoom):
                x1, y1 = mapper.device_to_data(*effect.corner1)
                x2, y2 = mapper.device_to_data(*effect.corner2)
                self._zoom.push(Window.from_corners(x1, y1, x2, y2))
            elif isinstance(effect, PopZoom):
                redraw = self._zoom.pop() or redraw
            elif isinstance(effect, SetHover):
                self._hover_index = effect.index
            elif isinstance(effect, RequestRedraw):
                redraw = True
        return redraw

    # === Output ===

    def view_model(self) -> ViewModel:
        """Assemble the frame from current state."""
        degrees = self._orientation.degrees
        mapper = self.mapper()
        if mapper is None or self._points.is_empty():
            return ViewModel.empty(self._viewport, degrees)

        window = mapper.window
        x, y = self._points.x, self._points.y
        lo, hi = self._points.visible_range(window.min_x, window.max_x)

        # One sample of context either side so edge segments reach the border
        start, stop = max(lo - 1, 0), min(hi + 1, len(x))
        polyline = mapper.points_to_device(x[start:stop], y[start:stop])
        polyline.flags.writeable = False

        markers: Tuple[MarkerGlyph, ...] = ()
        if self._flags.show_markers:
            device = mapper.points_to_device(x[lo:hi], y[lo:hi])
            markers = tuple(
                MarkerGlyph(
                    index=i,
                    x=float(device[i - lo, 0]),
                    y=float(device[i - lo, 1]),
                    kind=classify_marker(i, float(y[i]), self._hover_index),
                )
                for i in range(lo, hi)
            )

        regions: Tuple[RegionShape, ...] = ()
        if self._flags.show_regions:
            regions = self._region_shapes(mapper)

        axes: Tuple[AxisGeometry, ...] = ()
        if self._flags.show_axis:
            axes = self._axes(mapper)

        return ViewModel(
            viewport=self._viewport,
            polyline=polyline,
            markers=markers,
            regions=regions,
            axes=axes,
            hover=self._hover_label(mapper),
            zoom_rect=self._zoom_rect(),
            orientation_degrees=degrees,
            scale=mapper.scale,
            window=window,
        )

    def _region_shapes(self, mapper: CoordinateMapper) -> Tuple[RegionShape, ...]:
        window = mapper.window
        shapes = []
        for region in self._regions.regions():
            if region.right < window.min_x or region.left > window.max_x:
                continue
            polygon = mapper.points_to_device(region.polygon[:, 0], region.polygon[:, 1])
            polygon.flags.writeable = False
            lx, ly = mapper.data_to_device(*region.label_anchor)
            shapes.append(RegionShape(
                polygon=polygon,
                area=region.area,
                label=region.label,
                label_pos=(float(lx), float(ly)),
            ))
        return tuple(shapes)

    def _axes(self, mapper: CoordinateMapper) -> Tuple[AxisGeometry, ...]:
        window = mapper.window
        axes = []
        if window.contains_x(0.0):
            start = mapper.data_to_device(0.0, window.min_y)
            tip = mapper.data_to_device(0.0, window.max_y)
            axes.append(self._axis('y', start, tip, _Y_ARROW,
                                   (tip[0] + _AXIS_LABEL_GAP, tip[1])))
        if window.contains_y(0.0):
            start = mapper.data_to_device(window.min_x, 0.0)
            tip = mapper.data_to_device(window.max_x, 0.0)
            axes.append(self._axis('x', start, tip, _X_ARROW,
                                   (tip[0] - _AXIS_LABEL_GAP, tip[1])))
        return tuple(axes)

    @staticmethod
    def _axis(name, start, tip, arrow, label_pos) -> AxisGeometry:
        tx, ty = float(tip[0]), float(tip[1])
        (ax1, ay1), (ax2, ay2) = arrow
        return AxisGeometry(
            name=name,
            start=(float(start[0]), float(start[1])),
            end=(tx, ty),
            arrowhead=((tx, ty), (tx + ax1, ty + ay1), (tx + ax2, ty + ay2)),
            label=name,
            label_pos=(float(label_pos[0]), float(label_pos[1])),
        )

    def _hover_label(self, mapper: CoordinateMapper) -> Optional[HoverLabel]:
        index = self._hover_index
        if index is None or index >= len(self._points):
            return None
        sx, sy = self._points.sample(index)
        px, py = mapper.data_to_device(sx, sy)
        return HoverLabel.for_sample(index, sx, sy, (float(px), float(py)))

    def _zoom_rect(self) -> Optional[ZoomRect]:
        state = self._controller.state
        if isinstance(state, DrawingZoomRect):
            return ZoomRect(state.corner1, state.corner2)
        return None
