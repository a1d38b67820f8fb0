"""
Connection editor for the field mapper.

This package provides drag-to-connect editing between two field lists:
- MappingStore: Connection set and the one-to-one rules
- GestureController: Drag state machine and hit detection
- ManageActions: Click-to-manage (confirm removal, pick a target)
- ViewProjector: Per-field presentation flags

None of these import NiceGUI. The browser side lives in the overlay and
handlers modules, which are imported by name:
- overlay.ConnectionOverlay: SVG rendering and DOM measurement
- handlers.setup_connect_handlers: Event handlers for app.py integration

Usage:
    from fieldmap.connect import MappingStore, GestureController, ManageActions
    from fieldmap.connect.handlers import setup_connect_handlers
"""

from fieldmap.connect.constants import (
    HINT_RADIUS,
    HOVER_RADIUS,
    DROP_HIT_MARGIN,
    CLICK_SLOP,
)
from fieldmap.connect.geometry import Point, Rect, RectTable
from fieldmap.connect.store import Connection, MappingStore
from fieldmap.connect.controller import (
    Dragging,
    GestureController,
    GestureResult,
    Idle,
    ProximityHint,
    Tolerances,
)
from fieldmap.connect.actions import ManageActions, PendingRemoval
from fieldmap.connect.projector import Animation, FieldView, ViewModel, ViewProjector

__all__ = [
    'Point',
    'Rect',
    'RectTable',
    'Connection',
    'MappingStore',
    'Idle',
    'Dragging',
    'GestureController',
    'GestureResult',
    'ProximityHint',
    'Tolerances',
    'ManageActions',
    'PendingRemoval',
    'Animation',
    'FieldView',
    'ViewModel',
    'ViewProjector',
    'HINT_RADIUS',
    'HOVER_RADIUS',
    'DROP_HIT_MARGIN',
    'CLICK_SLOP',
]
