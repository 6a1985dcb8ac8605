"""Quarter-turn view rotation."""

from enum import Enum
from typing import Tuple

QUARTER_TURN_DEGREES = 90


class RotateDirection(Enum):
    LEFT = -1
    RIGHT = 1


class Orientation:
    """Cumulative 90-degree turn count in -3..3.

    Turning right is clockwise on screen. Four turns in the same
    direction wrap back to 0.
    """

    def __init__(self, turns: int = 0):
        self._turns = 0
        self.turns = turns

    @property
    def turns(self) -> int:
        return self._turns

    @turns.setter
    def turns(self, value: int) -> None:
        value = int(value)
        if not -3 <= value <= 3:
            raise ValueError(f"Turn count must be in -3..3, got {value}")
        self._turns = value

    def rotate(self, direction: RotateDirection) -> int:
        turns = self._turns + direction.value
        if abs(turns) == 4:
            turns = 0
        self._turns = turns
        return turns

    @property
    def degrees(self) -> int:
        return self._turns * QUARTER_TURN_DEGREES

    def to_content(self, px: float, py: float, width: float, height: float) -> Tuple[float, float]:
        """Map a pointer position on the rotated view back to unrotated content.

        The view is drawn rotated about the viewport centre, so the inverse
        rotation is applied about the same point.
        """
        cx, cy = width / 2.0, height / 2.0
        dx, dy = px - cx, py - cy
        # One inverse quarter turn (counter-clockwise on screen) per step
        for _ in range(self._turns % 4):
            dx, dy = dy, -dx
        return cx + dx, cy + dy

    def __eq__(self, other) -> bool:
        if isinstance(other, Orientation):
            return self._turns == other._turns
        return NotImplemented

    def __repr__(self) -> str:
        return f"Orientation(turns={self._turns})"
