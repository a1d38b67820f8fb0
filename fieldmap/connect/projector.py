"""
View Projector - presentation flags derived from the connection set.

Everything here is a pure function of connection snapshots (plus geometry
for the curves), so it can be tested without a browser.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Set

from fieldmap.catalog import FieldCatalog, Side
from fieldmap.connect.controller import Dragging, GestureState
from fieldmap.connect.geometry import GeometryProvider, Point, curve_path, midpoint
from fieldmap.connect.store import Connection


class Animation(str, Enum):
    NONE = 'none'
    ENTERED = 'entered'
    EXITED = 'exited'


@dataclass(frozen=True)
class FieldView:
    field_id: str
    side: Side
    active: bool
    animation: Animation
    show_content: bool


@dataclass(frozen=True)
class EdgeView:
    connection_id: str
    path: str
    midpoint: Point


@dataclass(frozen=True)
class ViewModel:
    sources: List[FieldView]
    targets: List[FieldView]

    def field(self, field_id: str, side: Side) -> Optional[FieldView]:
        for view in (self.sources if side == Side.SOURCE else self.targets):
            if view.field_id == field_id:
                return view
        return None


def _ids(connections: Iterable[Connection], side: Side) -> Set[str]:
    return {c.source_id if side == Side.SOURCE else c.target_id for c in connections}


def _animation(was: bool, now: bool) -> Animation:
    if now and not was:
        return Animation.ENTERED
    if was and not now:
        return Animation.EXITED
    return Animation.NONE


def project(source_catalog: FieldCatalog, target_catalog: FieldCatalog,
            previous: Sequence[Connection], current: Sequence[Connection]) -> ViewModel:
    """Build per-field flags for one render, comparing against the last one."""
    views: Dict[Side, List[FieldView]] = {}
    for side, catalog in ((Side.SOURCE, source_catalog), (Side.TARGET, target_catalog)):
        before, after = _ids(previous, side), _ids(current, side)
        views[side] = [
            FieldView(
                field_id=f.id,
                side=side,
                active=f.id in after,
                animation=_animation(f.id in before, f.id in after),
                show_content=side == Side.TARGET and f.id in after,
            )
            for f in catalog
        ]
    return ViewModel(sources=views[Side.SOURCE], targets=views[Side.TARGET])


def project_edges(connections: Iterable[Connection], geometry: GeometryProvider) -> List[EdgeView]:
    edges = []
    for conn in connections:
        start = geometry.center(Side.SOURCE, conn.source_id)
        end = geometry.center(Side.TARGET, conn.target_id)
        if start is None or end is None:
            continue
        edges.append(EdgeView(conn.id, curve_path(start, end), midpoint(start, end)))
    return edges


def project_drag(state: GestureState, geometry: GeometryProvider) -> Optional[str]:
    """Dashed curve from the dragged source dot to the pointer, or None."""
    if not isinstance(state, Dragging):
        return None
    start = geometry.center(Side.SOURCE, state.source_id)
    if start is None:
        return None
    return curve_path(start, state.pointer)


def preview_values(connections: Iterable[Connection], source_catalog: FieldCatalog) -> Dict[str, str]:
    """
    Target id -> sample text for the preview card.

    The sample is the first entry of the mapped source column's example
    content. Unmapped targets are absent and render as placeholders.
    """
    values = {}
    for conn in connections:
        source = source_catalog.get(conn.source_id)
        if source is None:
            continue
        values[conn.target_id] = source.example.split(',')[0].strip() or source.name
    return values


class ViewProjector:
    """Remembers the previous snapshot so callers can just pass the current one."""

    def __init__(self, source_catalog: FieldCatalog, target_catalog: FieldCatalog,
                 initial: Sequence[Connection] = ()):
        self.source_catalog = source_catalog
        self.target_catalog = target_catalog
        self._previous = tuple(initial)

    def update(self, current: Sequence[Connection]) -> ViewModel:
        view = project(self.source_catalog, self.target_catalog, self._previous, current)
        self._previous = tuple(current)
        return view
