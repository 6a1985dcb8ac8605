"""
Zero-crossing segmentation and enclosed-area integration.

A region is the stretch of curve between two consecutive x-axis
crossings. Its area is the trapezoid sum over the closed polygon
``(left, 0) -> samples in [left, right] -> (right, 0)``, reported as an
absolute value.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .point_set import PointSet
from curvescope.logging import get_logger
logger = get_logger(__name__)

AREA_LABEL_FORMAT = "{:.2f}"


def find_crossings(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Ascending x positions where the curve touches or crosses y = 0.

    Each sample contributes at most one crossing: its own x if its y is
    exactly zero, otherwise the linear zero of the segment from the
    previous sample when the two have strictly opposite signs.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if x.size == 0:
        return np.empty(0, dtype=np.float64)

    on_axis = y == 0.0

    sign_change = np.zeros(x.size, dtype=bool)
    sign_change[1:] = (y[:-1] * y[1:]) < 0.0

    crossings = np.where(on_axis, x, np.nan)
    if sign_change.any():
        i = np.flatnonzero(sign_change)
        x0, x1 = x[i - 1], x[i]
        y0, y1 = y[i - 1], y[i]
        crossings[i] = (x1 * y0 - x0 * y1) / (y0 - y1)

    return crossings[on_axis | sign_change]


def region_polygon(x: np.ndarray, y: np.ndarray, left: float, right: float) -> np.ndarray:
    """Closed outline of the region between two crossings as an (N, 2) array."""
    lo = np.searchsorted(x, left, side='left')
    hi = np.searchsorted(x, right, side='right')
    xs = np.concatenate(([left], x[lo:hi], [right]))
    ys = np.concatenate(([0.0], y[lo:hi], [0.0]))
    return np.column_stack((xs, ys))


def polygon_area(polygon: np.ndarray) -> float:
    """Absolute trapezoid sum under a region outline.

    Samples sitting exactly on a crossing give zero-width slices, so
    boundary points are never counted twice.
    """
    xs = polygon[:, 0]
    ys = polygon[:, 1]
    signed = np.sum((ys[1:] + ys[:-1]) * np.diff(xs)) / 2.0
    return float(abs(signed))


def compute_areas(x: np.ndarray, y: np.ndarray, crossings: np.ndarray) -> np.ndarray:
    """Area of each region between consecutive ``crossings``."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    areas = [
        polygon_area(region_polygon(x, y, left, right))
        for left, right in zip(crossings[:-1], crossings[1:])
    ]
    return np.asarray(areas, dtype=np.float64)


@dataclass(frozen=True)
class Region:
    """One enclosed region in data space."""

    left: float
    right: float
    polygon: np.ndarray
    area: float
    peak: float

    @property
    def label(self) -> str:
        return AREA_LABEL_FORMAT.format(self.area)

    @property
    def label_anchor(self) -> Tuple[float, float]:
        """Data-space point for the area label: mid-span, half the peak height."""
        return (self.left + self.right) / 2.0, self.peak / 2.0


def _peak(polygon: np.ndarray) -> float:
    ys = polygon[1:-1, 1]
    if ys.size == 0:
        return 0.0
    return float(ys[np.argmax(np.abs(ys))])


class RegionAnalyzer:
    """Lazily derived crossings, areas and region outlines for a PointSet.

    Results are recomputed at most once per PointSet revision and only
    when asked for.
    """

    def __init__(self, point_set: PointSet):
        self._points = point_set
        self._revision: Optional[int] = None
        self._crossings = np.empty(0, dtype=np.float64)
        self._regions: List[Region] = []

    def invalidate(self) -> None:
        self._revision = None

    @property
    def is_stale(self) -> bool:
        return self._revision != self._points.revision

    def crossings(self) -> np.ndarray:
        self._refresh()
        return self._crossings

    def regions(self) -> List[Region]:
        self._refresh()
        return list(self._regions)

    def areas(self) -> np.ndarray:
        self._refresh()
        return np.asarray([r.area for r in self._regions], dtype=np.float64)

    def _refresh(self) -> None:
        if not self.is_stale:
            return
        x, y = self._points.x, self._points.y
        crossings = find_crossings(x, y)
        regions = []
        for left, right in zip(crossings[:-1], crossings[1:]):
            polygon = region_polygon(x, y, left, right)
            polygon.flags.writeable = False
            regions.append(Region(
                left=float(left),
                right=float(right),
                polygon=polygon,
                area=polygon_area(polygon),
                peak=_peak(polygon),
            ))
        self._crossings = crossings
        self._regions = regions
        self._revision = self._points.revision
        logger.debug(f"Regions recomputed: {len(crossings)} crossings, {len(regions)} regions")
