"""
Data-space <-> device-space transform with a single uniform scale.

The requested window is fitted into the viewport without anisotropic
stretch: the tighter axis sets the scale and the looser axis is padded
symmetrically so the whole requested window stays visible and centred.
Device origin is top-left, so y is inverted.
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from .window import Window

ArrayLike = Union[float, np.ndarray]

# Stand-in span for an axis with zero extent (all x or all y equal)
DEGENERATE_SPAN = 1.0


def _span(lo: float, hi: float) -> Tuple[float, float]:
    if hi - lo > 0.0:
        return lo, hi
    mid = (lo + hi) / 2.0
    return mid - DEGENERATE_SPAN / 2.0, mid + DEGENERATE_SPAN / 2.0


@dataclass(frozen=True)
class CoordinateMapper:
    """Affine mapping for one frame.

    Build with :meth:`fit`; ``window`` is the effective (padded) window
    and ``scale`` is device pixels per data unit on both axes.
    """

    window: Window
    scale: float
    width: float
    height: float

    @classmethod
    def fit(cls, window: Window, width: float, height: float) -> "CoordinateMapper":
        """Fit ``window`` into a ``width`` x ``height`` viewport.

        Raises ValueError for a non-positive viewport or a window whose
        extent overflows float64.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must have positive size, got {width}x{height}")

        min_x, max_x = _span(window.min_x, window.max_x)
        min_y, max_y = _span(window.min_y, window.max_y)

        span_x, span_y = max_x - min_x, max_y - min_y
        # Finite samples can still span more than float64 holds
        if not np.isfinite([span_x, span_y]).all():
            raise ValueError(f"Window {window} extent overflows")

        scale_x = width / span_x
        scale_y = height / span_y

        if scale_x < scale_y:
            scale = scale_x
            pad = (height / scale - (max_y - min_y)) / 2.0
            min_y -= pad
            max_y += pad
        else:
            scale = scale_y
            pad = (width / scale - (max_x - min_x)) / 2.0
            min_x -= pad
            max_x += pad

        if not np.isfinite([min_x, max_x, min_y, max_y]).all():
            raise ValueError(f"Window {window} cannot be fitted into {width}x{height}")

        effective = Window(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)
        return cls(window=effective, scale=scale, width=float(width), height=float(height))

    def data_to_device(self, x: ArrayLike, y: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
        px = (x - self.window.min_x) * self.scale
        py = (self.window.max_y - y) * self.scale
        return px, py

    def device_to_data(self, px: ArrayLike, py: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
        x = px / self.scale + self.window.min_x
        y = self.window.max_y - py / self.scale
        return x, y

    def points_to_device(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        """Vectorized transform returning an (N, 2) array of device points."""
        px, py = self.data_to_device(np.asarray(x, dtype=np.float64),
                                     np.asarray(y, dtype=np.float64))
        return np.column_stack((px, py))

    def pixels_to_data(self, pixels: float) -> float:
        """Convert a device length to a data-space length."""
        return pixels / self.scale
