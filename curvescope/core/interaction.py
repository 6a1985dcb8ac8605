"""
Pointer gesture state machine.

States:
    Idle
    DraggingPoint(index)          -- left press landed on a sample
    DrawingZoomRect(c1, c2)       -- left press landed on empty space

``transition(state, event, probe)`` is pure: it reads the curve only
through ``probe`` and returns the next state plus a list of effects for
the engine to apply. Positions in events are device-space pixels.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Protocol, Tuple, Union

from curvescope.logging import get_logger
logger = get_logger(__name__)

DevicePoint = Tuple[float, float]


class PointerButton(Enum):
    PRIMARY = auto()
    SECONDARY = auto()


class PointerAction(Enum):
    DOWN = auto()
    MOVE = auto()
    UP = auto()
    CANCEL = auto()   # pointer capture lost mid-gesture


@dataclass(frozen=True)
class PointerEvent:
    action: PointerAction
    x: float = 0.0
    y: float = 0.0
    # For MOVE: the button held, or None when hovering
    button: Optional[PointerButton] = None

    @property
    def pos(self) -> DevicePoint:
        return (self.x, self.y)


# --- States -----------------------------------------------------------------

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class DraggingPoint:
    index: int


@dataclass(frozen=True)
class DrawingZoomRect:
    corner1: DevicePoint
    corner2: DevicePoint


GestureState = Union[Idle, DraggingPoint, DrawingZoomRect]


# --- Effects ----------------------------------------------------------------

@dataclass(frozen=True)
class SetSampleY:
    index: int
    y: float


@dataclass(frozen=True)
class PushZoom:
    corner1: DevicePoint
    corner2: DevicePoint


@dataclass(frozen=True)
class PopZoom:
    pass


@dataclass(frozen=True)
class SetHover:
    index: Optional[int]


@dataclass(frozen=True)
class RequestRedraw:
    pass


Effect = Union[SetSampleY, PushZoom, PopZoom, SetHover, RequestRedraw]


class CurveProbe(Protocol):
    """Read-only view of the curve needed to decide transitions."""

    def hit(self, px: float, py: float) -> Optional[int]:
        """Index of the sample under a device point, or None."""
        ...

    def data_y(self, px: float, py: float) -> float:
        """Data-space y of a device point."""
        ...

    @property
    def hover_index(self) -> Optional[int]:
        ...


def transition(state: GestureState, event: PointerEvent,
               probe: CurveProbe) -> Tuple[GestureState, List[Effect]]:
    """Next state and effects for one pointer event."""
    action = event.action

    if action == PointerAction.CANCEL:
        if isinstance(state, Idle):
            return state, []
        # Drag edits are already applied; a pending rectangle is dropped
        return Idle(), [RequestRedraw()]

    if isinstance(state, Idle):
        return _from_idle(state, event, probe)
    if isinstance(state, DraggingPoint):
        return _from_dragging(state, event, probe)
    if isinstance(state, DrawingZoomRect):
        return _from_drawing(state, event)
    raise TypeError(f"Unknown gesture state: {state!r}")


def _from_idle(state: Idle, event: PointerEvent,
               probe: CurveProbe) -> Tuple[GestureState, List[Effect]]:
    if event.action == PointerAction.DOWN:
        if event.button == PointerButton.SECONDARY:
            return state, [PopZoom()]
        if event.button == PointerButton.PRIMARY:
            index = probe.hit(event.x, event.y)
            if index is not None:
                return DraggingPoint(index), []
            return DrawingZoomRect(event.pos, event.pos), [RequestRedraw()]
        return state, []

    if event.action == PointerAction.MOVE and event.button is None:
        index = probe.hit(event.x, event.y)
        if index != probe.hover_index:
            return state, [SetHover(index), RequestRedraw()]
        return state, []

    return state, []


def _from_dragging(state: DraggingPoint, event: PointerEvent,
                   probe: CurveProbe) -> Tuple[GestureState, List[Effect]]:
    if event.action == PointerAction.MOVE:
        y = probe.data_y(event.x, event.y)
        return state, [SetSampleY(state.index, y), RequestRedraw()]
    if event.action == PointerAction.UP:
        return Idle(), [RequestRedraw()]
    return state, []


def _from_drawing(state: DrawingZoomRect,
                  event: PointerEvent) -> Tuple[GestureState, List[Effect]]:
    if event.action == PointerAction.MOVE:
        return DrawingZoomRect(state.corner1, event.pos), [RequestRedraw()]
    if event.action == PointerAction.UP and event.button == PointerButton.PRIMARY:
        return Idle(), [PushZoom(state.corner1, event.pos), RequestRedraw()]
    return state, []


class InteractionController:
    """Holds the current gesture state and feeds events through transition()."""

    def __init__(self):
        self._state: GestureState = Idle()

    @property
    def state(self) -> GestureState:
        return self._state

    def reset(self) -> None:
        self._state = Idle()

    def handle(self, event: PointerEvent, probe: CurveProbe) -> List[Effect]:
        new_state, effects = transition(self._state, event, probe)
        if type(new_state) is not type(self._state):
            logger.debug(f"Gesture {type(self._state).__name__} -> {type(new_state).__name__} on {event.action.name}")
        self._state = new_state
        return effects
