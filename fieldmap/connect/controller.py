"""
Gesture Controller - state machine for drag-to-connect.

This controller owns the lifecycle of a single drag gesture:
- pointer down on a free source dot starts a drag
- pointer moves update the loose end and the hovered target
- pointer up resolves a drop target and asks the MappingStore to connect
- leaving the surface cancels

Outside a drag, pointer moves drive the "drag to connect" hint shown next
to free dots. Geometry is queried from the provider on every event, never
cached here.
"""

import contextlib
import logging
from dataclasses import dataclass
from typing import Callable, ContextManager, Optional, Union

from fieldmap.catalog import Side
from fieldmap.connect import proximity
from fieldmap.connect.constants import CLICK_SLOP, DROP_HIT_MARGIN, HINT_RADIUS, HOVER_RADIUS
from fieldmap.connect.geometry import GeometryProvider, Point, RectTable
from fieldmap.connect.store import Connection, MappingStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tolerances:
    hint_radius: float = HINT_RADIUS
    hover_radius: float = HOVER_RADIUS
    drop_hit_margin: float = DROP_HIT_MARGIN
    click_slop: float = CLICK_SLOP


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    source_id: str
    origin: Point
    pointer: Point
    hovered_target_id: Optional[str] = None


GestureState = Union[Idle, Dragging]


@dataclass(frozen=True)
class ProximityHint:
    """A free dot near the pointer while no gesture is running."""
    side: Side
    field_id: str
    position: Point


@dataclass(frozen=True)
class GestureResult:
    source_id: Optional[str] = None
    target_id: Optional[str] = None
    connection: Optional[Connection] = None
    is_click: bool = False


class GestureController:
    """Turns pointer events into connections."""

    def __init__(self, store: MappingStore,
                 geometry: Optional[GeometryProvider] = None,
                 tolerances: Optional[Tolerances] = None,
                 drag_effect: Optional[Callable[[], ContextManager]] = None):
        self._store = store
        self._geometry: GeometryProvider = geometry if geometry is not None else RectTable()
        self._tolerances = tolerances or Tolerances()
        self._drag_effect = drag_effect
        self._effect_scope: Optional[contextlib.ExitStack] = None
        self._state: GestureState = Idle()
        self._hint: Optional[ProximityHint] = None
        self._on_state_change: Optional[Callable[[GestureState], None]] = None

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def hint(self) -> Optional[ProximityHint]:
        return self._hint

    @property
    def is_dragging(self) -> bool:
        return isinstance(self._state, Dragging)

    def set_on_state_change(self, callback: Callable[[GestureState], None]):
        self._on_state_change = callback

    def set_geometry(self, geometry: GeometryProvider):
        """Swap in the geometry measured for the current event."""
        self._geometry = geometry

    def begin_drag(self, source_id: str, pointer: Point) -> bool:
        """
        Start dragging from a source dot.

        Returns False when the drag cannot start: a gesture is already
        running, or the source is unknown or already connected. A connected
        source is the caller's cue to treat the press as click-to-manage.
        """
        if self.is_dragging:
            logger.debug(f"Ignoring drag from {source_id}: gesture already running")
            return False
        if source_id not in self._store.source_catalog:
            return False
        if self._store.is_connected(source_id, Side.SOURCE):
            return False

        self._hint = None
        self._enter_dragging(Dragging(source_id=source_id, origin=pointer, pointer=pointer))
        return True

    def move(self, pointer: Point) -> GestureState:
        if isinstance(self._state, Dragging):
            hovered = proximity.nearest(
                pointer, self._free_targets(), self._tolerances.hover_radius,
                self._geometry, Side.TARGET
            )
            self._state = Dragging(
                source_id=self._state.source_id, origin=self._state.origin,
                pointer=pointer, hovered_target_id=hovered
            )
        else:
            self._hint = self._find_hint(pointer)
        self._notify_change()
        return self._state

    def release(self, pointer: Point) -> GestureResult:
        if not isinstance(self._state, Dragging):
            return GestureResult()

        drag = self._state
        target_id = self._resolve_drop_target(drag, pointer)
        connection = None
        if target_id and not self._store.is_connected(target_id, Side.TARGET):
            connection = self._store.add_connection(drag.source_id, target_id)

        is_click = target_id is None and pointer.distance_to(drag.origin) <= self._tolerances.click_slop
        self._exit_dragging()
        return GestureResult(source_id=drag.source_id, target_id=target_id,
                             connection=connection, is_click=is_click)

    def cancel(self) -> GestureState:
        """Pointer left the surface: drop any gesture and hint without mutating."""
        self._hint = None
        if self.is_dragging:
            logger.debug(f"Cancelled drag from {self._state.source_id}")
            self._exit_dragging()
        else:
            self._notify_change()
        return self._state

    def _enter_dragging(self, state: Dragging):
        self._state = state
        self._effect_scope = contextlib.ExitStack()
        if self._drag_effect is not None:
            self._effect_scope.enter_context(self._drag_effect())
        self._notify_change()

    def _exit_dragging(self):
        self._state = Idle()
        scope, self._effect_scope = self._effect_scope, None
        try:
            if scope is not None:
                scope.close()
        finally:
            self._notify_change()

    def _notify_change(self):
        if self._on_state_change:
            self._on_state_change(self._state)

    def _free_targets(self):
        return [f.id for f in self._store.available_targets()]

    def _resolve_drop_target(self, drag: Dragging, pointer: Point) -> Optional[str]:
        free = self._free_targets()

        # Priority 1: the target highlighted by the last move
        if drag.hovered_target_id and drag.hovered_target_id in free:
            return drag.hovered_target_id

        # Priority 2: released directly on a dot
        hit = proximity.hit_test(pointer, free, self._geometry, Side.TARGET)
        if hit:
            return hit

        # Priority 3: released just beside a dot
        return proximity.hit_test(pointer, free, self._geometry, Side.TARGET,
                                  margin=self._tolerances.drop_hit_margin)

    def _find_hint(self, pointer: Point) -> Optional[ProximityHint]:
        radius = self._tolerances.hint_radius
        for side, fields in ((Side.SOURCE, self._store.available_sources()),
                             (Side.TARGET, self._store.available_targets())):
            field_id = proximity.nearest(pointer, [f.id for f in fields], radius, self._geometry, side)
            if field_id:
                return ProximityHint(side=side, field_id=field_id, position=pointer)
        return None
