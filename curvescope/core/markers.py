"""Marker classification for sample glyphs."""

from enum import Enum, auto
from typing import Optional


class MarkerKind(Enum):
    NORMAL = auto()
    HIGHLIGHTED = auto()        # sample under the pointer
    ASCENDING_DIGITS = auto()   # y passes has_ascending_digits()


def has_ascending_digits(value: float, precision: int = 14) -> bool:
    """True if the digits of ``value`` strictly increase left to right.

    The value is written with ``precision`` decimals, trailing zeros and the
    decimal point are dropped, and every remaining character must be
    greater than the one before it. ``1.2345`` qualifies, ``1.22`` and
    ``21`` do not.
    """
    text = f"{value:.{precision}f}"
    if '.' in text:
        text = text.rstrip('0').replace('.', '')
    return all(a < b for a, b in zip(text, text[1:]))


def classify_marker(index: int, y: float, hover_index: Optional[int]) -> MarkerKind:
    """Highlight wins over the digit rule."""
    if hover_index is not None and index == hover_index:
        return MarkerKind.HIGHLIGHTED
    if has_ascending_digits(y):
        return MarkerKind.ASCENDING_DIGITS
    return MarkerKind.NORMAL
