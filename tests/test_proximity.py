from fieldmap.catalog import Side
from fieldmap.connect.geometry import Point, Rect, RectTable
from fieldmap.connect.proximity import hit_test, nearest


def _table():
    return RectTable({
        (Side.TARGET, 'X'): Rect(0, 0, 10, 10),
        (Side.TARGET, 'Y'): Rect(20, 0, 10, 10),
        (Side.SOURCE, 'X'): Rect(200, 200, 10, 10),
    })


def test_nearest_returns_first_candidate_in_radius():
    table = _table()
    # Closer to Y (distance 5) than X (distance 15), but X is listed first
    pointer = Point(20, 5)
    assert nearest(pointer, ['X', 'Y'], 20, table, Side.TARGET) == 'X'
    assert nearest(pointer, ['Y', 'X'], 20, table, Side.TARGET) == 'Y'


def test_nearest_respects_radius_and_side():
    table = _table()
    assert nearest(Point(100, 100), ['X', 'Y'], 20, table, Side.TARGET) is None
    # Same id on the other side has its own geometry
    assert nearest(Point(205, 205), ['X'], 5, table, Side.SOURCE) == 'X'
    assert nearest(Point(205, 205), ['X'], 5, table, Side.TARGET) is None


def test_unknown_or_unmeasured_candidates_are_skipped():
    table = _table()
    assert nearest(Point(5, 5), ['ghost', 'X'], 5, table, Side.TARGET) == 'X'
    assert hit_test(Point(5, 5), ['ghost'], table, Side.TARGET) is None


def test_hit_test_bounding_box():
    table = _table()
    assert hit_test(Point(10, 10), ['X', 'Y'], table, Side.TARGET) == 'X'
    assert hit_test(Point(15, 5), ['X', 'Y'], table, Side.TARGET) is None


def test_hit_test_with_margin():
    table = _table()
    assert hit_test(Point(15, 5), ['X', 'Y'], table, Side.TARGET, margin=5) == 'X'
    assert hit_test(Point(15, 5), ['Y'], table, Side.TARGET, margin=5) == 'Y'
    assert hit_test(Point(-6, 5), ['X'], table, Side.TARGET, margin=5) is None
