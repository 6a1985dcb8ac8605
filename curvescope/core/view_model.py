"""Per-frame geometry handed to the rendering backend.

All coordinates are device-space pixels in the unrotated frame; the
backend applies ``orientation_degrees`` about the viewport centre.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from .markers import MarkerKind
from .window import Window

DevicePoint = Tuple[float, float]

COORD_LABEL_FORMAT = "({:.4f}; {:.4f})"


def _frozen(points: np.ndarray) -> np.ndarray:
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    points.flags.writeable = False
    return points


@dataclass(frozen=True)
class MarkerGlyph:
    index: int
    x: float
    y: float
    kind: MarkerKind = MarkerKind.NORMAL


@dataclass(frozen=True)
class RegionShape:
    polygon: np.ndarray
    area: float
    label: str
    label_pos: DevicePoint


@dataclass(frozen=True)
class AxisGeometry:
    name: str                       # 'x' or 'y'
    start: DevicePoint
    end: DevicePoint                # arrow tip
    arrowhead: Tuple[DevicePoint, DevicePoint, DevicePoint]
    label: str
    label_pos: DevicePoint


@dataclass(frozen=True)
class HoverLabel:
    """Coordinate readout for the sample under the pointer."""

    index: int
    text: str
    anchor: DevicePoint

    @classmethod
    def for_sample(cls, index: int, x: float, y: float, anchor: DevicePoint) -> "HoverLabel":
        return cls(index=index, text=COORD_LABEL_FORMAT.format(x, y), anchor=anchor)


@dataclass(frozen=True)
class ZoomRect:
    corner1: DevicePoint
    corner2: DevicePoint

    @property
    def outline(self) -> Tuple[DevicePoint, ...]:
        (x1, y1), (x2, y2) = self.corner1, self.corner2
        return ((x1, y1), (x1, y2), (x2, y2), (x2, y1), (x1, y1))


@dataclass(frozen=True)
class ViewModel:
    viewport: Tuple[float, float]
    polyline: np.ndarray = field(default_factory=lambda: _frozen(np.empty((0, 2))))
    markers: Tuple[MarkerGlyph, ...] = ()
    regions: Tuple[RegionShape, ...] = ()
    axes: Tuple[AxisGeometry, ...] = ()
    hover: Optional[HoverLabel] = None
    zoom_rect: Optional[ZoomRect] = None
    orientation_degrees: int = 0
    scale: float = 0.0
    window: Optional[Window] = None

    @classmethod
    def empty(cls, viewport: Tuple[float, float] = (0.0, 0.0),
              orientation_degrees: int = 0) -> "ViewModel":
        """Nothing to draw: no data yet or no usable viewport."""
        return cls(viewport=viewport, orientation_degrees=orientation_degrees)

    @property
    def is_empty(self) -> bool:
        return self.window is None
