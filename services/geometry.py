# services/geometry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

from services.rendering import Position

Point = Tuple[float, float]


@dataclass(frozen=True)
class LayoutMetrics:
    line_height: float = 1.5
    padding_x: float = 1.0
    padding_y: float = 1.0


@dataclass(frozen=True)
class RevealMask:
    """
    Boundary between the revealed prefix and the dimmed remainder.
    x is in character cells, y in lines; both already include padding.
    The hidden zone is L-shaped: from ``left`` to the right edge on the hole's
    row, plus the full width of every row below it.
    """
    top: float
    left: float
    line_height: float

    @property
    def bottom(self) -> float:
        return self.top + self.line_height

    def hidden_polygon(self, width: float, height: float) -> List[Point]:
        """Vertices of the hidden zone for a container of ``width`` x ``height``."""
        width = max(width, self.left)
        height = max(height, self.bottom)
        return [
            (self.left, self.top),
            (width, self.top),
            (width, height),
            (0.0, height),
            (0.0, self.bottom),
            (self.left, self.bottom),
        ]

    def is_hidden(self, x: float, y: float) -> bool:
        if y >= self.bottom:
            return True
        return self.top <= y < self.bottom and x >= self.left


@dataclass(frozen=True)
class CaretMarker:
    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class Geometry:
    hole_row: int
    hole_col: int
    caret_row: int
    caret_col: int
    mask: RevealMask
    caret: CaretMarker

    @property
    def caret_in_hidden_zone(self) -> bool:
        return (self.caret_row, self.caret_col) > (self.hole_row, self.hole_col)


def compute_geometry(hole: Position, caret: Position,
                     metrics: LayoutMetrics = LayoutMetrics()) -> Geometry:
    lh = metrics.line_height
    mask = RevealMask(
        top=metrics.padding_y + hole.row * lh,
        left=metrics.padding_x + hole.col,
        line_height=lh,
    )
    marker = CaretMarker(
        left=metrics.padding_x + caret.col,
        top=metrics.padding_y + caret.row * lh,
        width=1.0,
        height=lh,
    )
    return Geometry(hole.row, hole.col, caret.row, caret.col, mask, marker)
