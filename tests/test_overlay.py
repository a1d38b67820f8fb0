from fieldmap.catalog import Side
from fieldmap.connect.controller import ProximityHint
from fieldmap.connect.geometry import Point, RectTable
from fieldmap.connect.overlay import HINT_TEXT, build_svg
from fieldmap.connect.projector import EdgeView


def test_empty_overlay():
    svg = build_svg([])
    assert svg.startswith('<svg')
    assert '<path' not in svg
    assert HINT_TEXT not in svg


def test_edges_have_trash_buttons():
    edges = [EdgeView('conn-1', 'M 0 0 C 5 0, 5 10, 10 10', Point(5, 5))]
    svg = build_svg(edges)

    assert svg.count('M 0 0 C 5 0, 5 10, 10 10') == 2
    assert 'data-connection-id="conn-1"' in svg
    assert 'cx="5" cy="5"' in svg


def test_connection_ids_are_escaped():
    svg = build_svg([EdgeView('a"b', 'M 0 0', Point(0, 0))])
    assert 'data-connection-id="a&quot;b"' in svg


def test_drag_line_hover_and_hint():
    hint = ProximityHint(Side.TARGET, 'X', Point(100, 50))
    svg = build_svg([], drag_path='M 1 1 C 2 1, 2 3, 3 3', hover=Point(7, 8), hint=hint)

    assert 'stroke-dasharray="5,5"' in svg
    assert 'cx="7" cy="8"' in svg
    assert HINT_TEXT in svg
    assert 'text-anchor="end"' in svg


def test_rect_table_from_measurements():
    table = RectTable.from_measurements({
        'source': {'A': [10, 20, 16, 16], 'broken': [1, 2]},
        'target': {'A': [300, 20, 16, 16]},
        'unknown': {'Q': [0, 0, 1, 1]},
    })

    assert table.center(Side.SOURCE, 'A') == Point(18, 28)
    assert table.center(Side.TARGET, 'A') == Point(308, 28)
    assert table.bounds(Side.SOURCE, 'broken') is None
