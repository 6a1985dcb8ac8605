"""CurveScope - interactive curve viewer with zoom, point dragging and area labels."""

__version__ = "0.3.0"
