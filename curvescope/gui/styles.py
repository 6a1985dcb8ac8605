"""Immutable style descriptors for the canvas.

Each drawing call receives the descriptor it needs and builds its pen or
brush from it, so the painter is never left in a borrowed state.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import pyqtgraph as pg
from PyQt6.QtGui import QBrush, QFont, QPen

from ..core.markers import MarkerKind


@dataclass(frozen=True)
class StrokeStyle:
    color: str
    width: float = 1.0
    dash: Optional[Tuple[float, ...]] = None

    def pen(self) -> QPen:
        if self.dash:
            return pg.mkPen(self.color, width=self.width, dash=list(self.dash))
        return pg.mkPen(self.color, width=self.width)


@dataclass(frozen=True)
class FillStyle:
    color: str

    def brush(self) -> QBrush:
        return pg.mkBrush(self.color)


@dataclass(frozen=True)
class TextStyle:
    family: str
    point_size: int
    color: str
    bold: bool = True

    def font(self) -> QFont:
        font = QFont(self.family, self.point_size)
        font.setBold(self.bold)
        return font

    def pen(self) -> QPen:
        return pg.mkPen(self.color)


@dataclass(frozen=True)
class CanvasStyle:
    """Everything the canvas needs to paint one frame."""

    background: str = '#808080'
    curve: StrokeStyle = StrokeStyle('#ff0000', 2.0, (3, 1, 1, 1, 1, 1, 2, 1, 2, 1))
    axis: StrokeStyle = StrokeStyle('#000000', 2.0)
    axis_fill: FillStyle = FillStyle('#000000')
    axis_text: TextStyle = TextStyle('Serif', 36, '#000000')
    marker_size: float = 5.0
    markers: Tuple[Tuple[MarkerKind, StrokeStyle], ...] = (
        (MarkerKind.NORMAL, StrokeStyle('#000000', 1.0)),
        (MarkerKind.HIGHLIGHTED, StrokeStyle('#ffff00', 1.0)),
        (MarkerKind.ASCENDING_DIGITS, StrokeStyle('#00ff00', 1.0)),
    )
    region_outline: StrokeStyle = StrokeStyle('#000000', 1.0)
    region_fill: FillStyle = FillStyle('#000000')
    region_text: TextStyle = TextStyle('Times New Roman', 13, '#ff0000')
    hover_text: TextStyle = TextStyle('Times New Roman', 16, '#ffff00')
    zoom_rect: StrokeStyle = StrokeStyle('#ffff00', 2.0, (25, 25))

    def marker(self, kind: MarkerKind) -> StrokeStyle:
        """Stroke for a marker kind; kinds without an entry use the first one."""
        for entry_kind, stroke in self.markers:
            if entry_kind is kind:
                return stroke
        return self.markers[0][1]


DEFAULT_STYLE = CanvasStyle()
