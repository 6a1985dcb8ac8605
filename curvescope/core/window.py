"""
Visible data-space windows and the zoom stack built from them.
"""

from dataclasses import dataclass
from typing import List, Optional

from .errors import DegenerateWindowError, EmptyStateError
from curvescope.logging import get_logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class Window:
    """Axis-aligned data-space rectangle with min <= max on both axes."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def __post_init__(self):
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(f"Window is not normalized: {self}")

    @classmethod
    def from_corners(cls, x1: float, y1: float, x2: float, y2: float) -> "Window":
        """Build a window from two opposite corners given in any order."""
        return cls(
            min_x=float(min(x1, x2)),
            max_x=float(max(x1, x2)),
            min_y=float(min(y1, y2)),
            max_y=float(max(y1, y2)),
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def is_degenerate(self) -> bool:
        """True when the window encloses no area."""
        return self.width <= 0.0 or self.height <= 0.0

    def contains_x(self, x: float) -> bool:
        return self.min_x <= x <= self.max_x

    def contains_y(self, y: float) -> bool:
        return self.min_y <= y <= self.max_y


class ZoomStack:
    """Stack of visible windows.

    The bottom entry is the full data bounds and is never popped. Each
    completed zoom rectangle pushes one entry; zoom-out pops one.
    """

    def __init__(self):
        self._windows: List[Window] = []

    def reset(self, bounds: Window) -> None:
        """Discard all zoom levels and start over from ``bounds``."""
        self._windows = [bounds]
        logger.debug(f"Zoom stack reset to {bounds}")

    def clear(self) -> None:
        self._windows = []

    def push(self, window: Window) -> bool:
        """Push a zoom window. Returns False (no mutation) if it has no area."""
        if not self._windows:
            logger.debug("Zoom push ignored: no data loaded")
            return False
        try:
            self._validate(window)
        except DegenerateWindowError as e:
            logger.debug(f"Zoom push rejected: {e}")
            return False
        self._windows.append(window)
        logger.debug(f"Zoom pushed {window} (depth={len(self._windows)})")
        return True

    def pop(self) -> bool:
        """Drop the top window. The base window is never removed."""
        if len(self._windows) <= 1:
            return False
        dropped = self._windows.pop()
        logger.debug(f"Zoom popped {dropped} (depth={len(self._windows)})")
        return True

    def current(self) -> Window:
        if not self._windows:
            raise EmptyStateError("Zoom stack is empty; no data has been loaded")
        return self._windows[-1]

    @property
    def base(self) -> Optional[Window]:
        return self._windows[0] if self._windows else None

    @property
    def depth(self) -> int:
        return len(self._windows)

    @staticmethod
    def _validate(window: Window) -> None:
        if window.is_degenerate:
            raise DegenerateWindowError(
                f"zero-area window {window.width}x{window.height}"
            )
