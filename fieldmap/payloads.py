"""
Pointer payload helpers for the mapping surface.

The surface emits pointer events as dicts from its JS handler; older NiceGUI
event args may arrive as a list in REQUESTED_EVENT_KEYS order instead.
"""

from typing import Any, Dict, Optional, Tuple

from fieldmap.catalog import Side
from fieldmap.connect.geometry import Point
from fieldmap.connect.store import MappingStore

REQUESTED_EVENT_KEYS = ['x', 'y', 'side', 'fieldId', 'connectionId']


def normalize_pointer_payload(raw_payload: Any) -> Dict[str, Any]:
    """Normalize NiceGUI pointer payloads into a dictionary for easier parsing."""
    if hasattr(raw_payload, 'args'):
        raw_payload = raw_payload.args
    if isinstance(raw_payload, dict):
        return raw_payload
    if isinstance(raw_payload, (list, tuple)):
        return {
            REQUESTED_EVENT_KEYS[i]: raw_payload[i]
            for i in range(min(len(raw_payload), len(REQUESTED_EVENT_KEYS)))
        }
    return {}


def pointer_from_payload(payload: Dict[str, Any]) -> Optional[Point]:
    try:
        return Point(float(payload['x']), float(payload['y']))
    except (KeyError, TypeError, ValueError):
        return None


def resolve_dot_from_payload(payload: Dict[str, Any], store: MappingStore) -> Optional[Tuple[Side, str]]:
    """Return (side, field_id) for a press on a dot, validated against the catalogs."""
    if not isinstance(payload, dict):
        return None
    field_id = payload.get('fieldId')
    if not field_id:
        return None
    try:
        side = Side(payload.get('side'))
    except ValueError:
        return None

    catalog = store.source_catalog if side == Side.SOURCE else store.target_catalog
    if field_id not in catalog:
        return None
    return side, field_id


def resolve_connection_from_payload(payload: Dict[str, Any], store: MappingStore) -> Optional[str]:
    """Return the connection id for a press on a curve's trash button."""
    if not isinstance(payload, dict):
        return None
    connection_id = payload.get('connectionId')
    if connection_id and store.get(connection_id) is not None:
        return connection_id
    return None
