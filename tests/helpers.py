"""Shared layout helpers for the connection editor tests."""

from fieldmap.catalog import FieldCatalog, Side
from fieldmap.connect.geometry import Point, Rect, RectTable
from fieldmap.connect.store import MappingStore

DOT = 16
ROW = 40
SOURCE_X = 100
TARGET_X = 400
TOP = 20


def dot_rect(side: Side, index: int) -> Rect:
    left = SOURCE_X if side == Side.SOURCE else TARGET_X
    return Rect(left, TOP + ROW * index, DOT, DOT)


def dot_center(side: Side, index: int) -> Point:
    return dot_rect(side, index).center


def make_layout(source: FieldCatalog, target: FieldCatalog) -> RectTable:
    """Two columns of 16px dots, one row every 40px."""
    table = RectTable()
    for catalog in (source, target):
        for i, field in enumerate(catalog):
            table.set(catalog.side, field.id, dot_rect(catalog.side, i))
    return table


def pairs(store: MappingStore):
    return [(c.source_id, c.target_id) for c in store.connections]


def assert_bijection(store: MappingStore):
    sources = [c.source_id for c in store.connections]
    targets = [c.target_id for c in store.connections]
    assert len(sources) == len(set(sources))
    assert len(targets) == len(set(targets))
