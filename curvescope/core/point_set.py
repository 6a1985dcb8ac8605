"""Ordered, x-sorted sample storage with hit-testing and y edits."""

from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import EmptyStateError, IndexOutOfRangeError
from .window import Window

# Hit radius in device pixels; matches the marker arm length
PICK_RADIUS_PX = 5.0

SampleInput = Union[np.ndarray, Sequence[Tuple[float, float]], Iterable[Sequence[float]]]


class PointSet:
    """Samples kept as two float64 arrays sorted ascending by x.

    ``revision`` increases on every mutation; derived caches compare
    against it to know when they are stale.
    """

    def __init__(self, samples: Optional[SampleInput] = None):
        self._x = np.empty(0, dtype=np.float64)
        self._y = np.empty(0, dtype=np.float64)
        self._revision = 0
        if samples is not None:
            self.load(samples)

    def load(self, samples: SampleInput) -> None:
        """Replace the contents with ``samples`` (pairs of x, y)."""
        data = np.asarray(samples, dtype=np.float64)
        if data.size == 0:
            data = data.reshape(0, 2)
        if data.ndim != 2 or data.shape[1] != 2:
            raise ValueError(f"Samples must be (N, 2), got shape {data.shape}")
        if not np.isfinite(data).all():
            raise ValueError("Samples must be finite (no inf or nan)")

        # Stable so equal x keep their input order
        order = np.argsort(data[:, 0], kind='stable')
        self._x = data[order, 0].copy()
        self._y = data[order, 1].copy()
        self._revision += 1

    def clear(self) -> None:
        self.load(np.empty((0, 2)))

    @property
    def x(self) -> np.ndarray:
        view = self._x.view()
        view.flags.writeable = False
        return view

    @property
    def y(self) -> np.ndarray:
        view = self._y.view()
        view.flags.writeable = False
        return view

    @property
    def revision(self) -> int:
        return self._revision

    def __len__(self) -> int:
        return len(self._x)

    def is_empty(self) -> bool:
        return len(self._x) == 0

    def sample(self, index: int) -> Tuple[float, float]:
        self._check_index(index)
        return float(self._x[index]), float(self._y[index])

    def bounds(self) -> Window:
        """Bounding window of all samples."""
        if self.is_empty():
            raise EmptyStateError("Point set is empty")
        return Window(
            min_x=float(self._x[0]),
            max_x=float(self._x[-1]),
            min_y=float(self._y.min()),
            max_y=float(self._y.max()),
        )

    def nearest(self, x: float, y: float, tolerance: float) -> Optional[int]:
        """Index of the first sample (in x order) within ``tolerance`` on both axes.

        This is the first qualifying sample, not the closest one. Returns
        None if nothing is in range.
        """
        if self.is_empty():
            return None
        lo = np.searchsorted(self._x, x - tolerance, side='left')
        hi = np.searchsorted(self._x, x + tolerance, side='right')
        if lo >= hi:
            return None
        hits = np.flatnonzero(np.abs(self._y[lo:hi] - y) <= tolerance)
        if hits.size == 0:
            return None
        return int(lo + hits[0])

    def set_y(self, index: int, y: float) -> None:
        """Move one sample vertically. x and sort order are untouched."""
        self._check_index(index)
        if not np.isfinite(y):
            raise ValueError(f"Sample y must be finite, got {y}")
        self._y[index] = float(y)
        self._revision += 1

    def visible_range(self, min_x: float, max_x: float) -> Tuple[int, int]:
        """Half-open index range of samples with min_x <= x <= max_x."""
        lo = int(np.searchsorted(self._x, min_x, side='left'))
        hi = int(np.searchsorted(self._x, max_x, side='right'))
        return lo, hi

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._x):
            raise IndexOutOfRangeError(
                f"Sample index {index} out of range for {len(self._x)} samples"
            )
