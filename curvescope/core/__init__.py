"""Curve engine: transforms, zoom stack, samples, regions and gestures."""

from .engine import CurveEngine, DisplayFlags
from .errors import (
    CurveScopeError, DegenerateWindowError, EmptyStateError,
    IndexOutOfRangeError, SampleLoadError,
)
from .interaction import PointerButton
from .orientation import Orientation, RotateDirection
from .view_model import ViewModel
from .window import Window, ZoomStack

__all__ = [
    "CurveEngine",
    "DisplayFlags",
    "CurveScopeError",
    "DegenerateWindowError",
    "EmptyStateError",
    "IndexOutOfRangeError",
    "SampleLoadError",
    "PointerButton",
    "Orientation",
    "RotateDirection",
    "ViewModel",
    "Window",
    "ZoomStack",
]
