"""
Proximity Detector - hit detection for connection dots.

Candidates are scanned in catalog order and the FIRST match wins, so two
dots inside the radius resolve to the one listed earlier, not the closest.
Dots without geometry (not mounted) are skipped.
"""

from typing import Iterable, Optional

from fieldmap.catalog import Side
from fieldmap.connect.geometry import GeometryProvider, Point


def nearest(pointer: Point, candidates: Iterable[str], radius: float,
            geometry: GeometryProvider, side: Side) -> Optional[str]:
    for field_id in candidates:
        center = geometry.center(side, field_id)
        if center is None:
            continue
        if pointer.distance_to(center) <= radius:
            return field_id
    return None


def hit_test(pointer: Point, candidates: Iterable[str], geometry: GeometryProvider,
             side: Side, margin: float = 0) -> Optional[str]:
    for field_id in candidates:
        rect = geometry.bounds(side, field_id)
        if rect is None:
            continue
        if margin:
            rect = rect.expanded(margin)
        if rect.contains(pointer):
            return field_id
    return None
