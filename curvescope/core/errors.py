"""Error kinds raised by the curve engine and its collaborators.

Everything except SampleLoadError is recovered inside the engine: a query
before data is loaded draws nothing, a degenerate zoom rectangle is ignored,
and a stale drag index ends the gesture.
"""


class CurveScopeError(Exception):
    """Base class for all curvescope errors."""


class EmptyStateError(CurveScopeError):
    """Raised when state is queried before any samples have been loaded."""


class DegenerateWindowError(CurveScopeError, ValueError):
    """Raised for a window with zero width or zero height."""


class IndexOutOfRangeError(CurveScopeError, IndexError):
    """Raised when a sample index does not address the current point set."""


class SampleLoadError(CurveScopeError):
    """Raised when a sample file cannot be read or parsed."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
