"""
Geometry Provider - dot positions in surface-local coordinates.

The rendering layer owns an id -> rectangle table and refreshes it from the
browser on every pointer event. The engine only queries it and never keeps
positions across events.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Protocol, Tuple

from fieldmap.catalog import Side

NodeKey = Tuple[Side, str]


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance_to(self, other: 'Point') -> float:
        return math.sqrt((self.x - other.x)**2 + (self.y - other.y)**2)


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Point:
        return Point(self.left + self.width / 2, self.top + self.height / 2)

    def contains(self, point: Point) -> bool:
        # Edges inclusive, same as a getBoundingClientRect comparison
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def expanded(self, margin: float) -> 'Rect':
        return Rect(self.left - margin, self.top - margin,
                    self.width + 2 * margin, self.height + 2 * margin)


class GeometryProvider(Protocol):
    def bounds(self, side: Side, field_id: str) -> Optional[Rect]:
        ...

    def center(self, side: Side, field_id: str) -> Optional[Point]:
        ...


class RectTable:
    """In-memory GeometryProvider backed by a (side, field id) -> Rect table."""

    def __init__(self, rects: Optional[Dict[NodeKey, Rect]] = None):
        self._rects: Dict[NodeKey, Rect] = dict(rects or {})

    @classmethod
    def from_measurements(cls, measured: Dict[str, Dict[str, Iterable[float]]]) -> 'RectTable':
        """
        Build a table from the overlay's JS measurement payload.

        Expected shape: {'source': {id: [left, top, width, height]}, 'target': {...}}.
        Entries that are not four numbers are dropped (dot not mounted yet).
        """
        rects = {}
        for side in Side:
            for field_id, values in (measured.get(side.value) or {}).items():
                try:
                    left, top, width, height = (float(v) for v in values)
                except (TypeError, ValueError):
                    continue
                rects[(side, field_id)] = Rect(left, top, width, height)
        return cls(rects)

    def set(self, side: Side, field_id: str, rect: Rect) -> None:
        self._rects[(side, field_id)] = rect

    def discard(self, side: Side, field_id: str) -> None:
        self._rects.pop((side, field_id), None)

    def bounds(self, side: Side, field_id: str) -> Optional[Rect]:
        return self._rects.get((side, field_id))

    def center(self, side: Side, field_id: str) -> Optional[Point]:
        rect = self._rects.get((side, field_id))
        return rect.center if rect else None


def curve_path(start: Point, end: Point) -> str:
    """SVG path for a horizontal-tangent cubic bezier between two dots."""
    mid_x = (start.x + end.x) / 2
    return (f"M {start.x:g} {start.y:g} "
            f"C {mid_x:g} {start.y:g}, {mid_x:g} {end.y:g}, {end.x:g} {end.y:g}")


def midpoint(start: Point, end: Point) -> Point:
    return Point((start.x + end.x) / 2, (start.y + end.y) / 2)
