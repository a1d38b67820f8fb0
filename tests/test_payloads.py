from types import SimpleNamespace

from fieldmap.catalog import Side
from fieldmap.connect.geometry import Point
from fieldmap.payloads import (
    normalize_pointer_payload,
    pointer_from_payload,
    resolve_connection_from_payload,
    resolve_dot_from_payload,
)


def test_normalize_pointer_payload_handles_dict():
    payload = {'x': 1, 'y': 2}
    assert normalize_pointer_payload(payload) is payload


def test_normalize_pointer_payload_handles_event_args():
    event = SimpleNamespace(args={'x': 3, 'y': 4})
    assert normalize_pointer_payload(event) == {'x': 3, 'y': 4}


def test_normalize_pointer_payload_handles_list():
    payload = normalize_pointer_payload([10, 20, 'source', 'A'])
    assert payload == {'x': 10, 'y': 20, 'side': 'source', 'fieldId': 'A'}


def test_normalize_pointer_payload_handles_garbage():
    assert normalize_pointer_payload('node') == {}
    assert normalize_pointer_payload(None) == {}


def test_pointer_from_payload():
    assert pointer_from_payload({'x': '1.5', 'y': 2}) == Point(1.5, 2.0)
    assert pointer_from_payload({'x': 1}) is None
    assert pointer_from_payload({'x': None, 'y': 1}) is None


def test_resolve_dot_validates_against_catalogs(store):
    assert resolve_dot_from_payload({'side': 'source', 'fieldId': 'A'}, store) == (Side.SOURCE, 'A')
    assert resolve_dot_from_payload({'side': 'target', 'fieldId': 'X'}, store) == (Side.TARGET, 'X')
    assert resolve_dot_from_payload({'side': 'target', 'fieldId': 'A'}, store) is None
    assert resolve_dot_from_payload({'side': 'middle', 'fieldId': 'A'}, store) is None
    assert resolve_dot_from_payload({'side': 'source'}, store) is None
    assert resolve_dot_from_payload([], store) is None


def test_resolve_connection(store):
    conn = store.add_connection('A', 'X')

    assert resolve_connection_from_payload({'connectionId': conn.id}, store) == conn.id
    assert resolve_connection_from_payload({'connectionId': 'conn-404'}, store) is None
    assert resolve_connection_from_payload({}, store) is None
