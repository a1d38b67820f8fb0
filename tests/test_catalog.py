import json

import pytest

from fieldmap.catalog import (
    DEFAULT_CONNECTIONS,
    CatalogError,
    FieldCatalog,
    FieldDescriptor,
    Side,
    default_catalogs,
    load_catalog_file,
    parse_catalogs,
)
from fieldmap.connect.store import MappingStore


def test_default_catalogs_seed_cleanly():
    source, target = default_catalogs()
    store = MappingStore(source, target, DEFAULT_CONNECTIONS)

    assert len(store.connections) == len(DEFAULT_CONNECTIONS)
    assert store.required_summary() == (3, 4)
    # "description" exists on both sides
    assert 'description' in source and 'description' in target


def test_duplicate_ids_rejected():
    with pytest.raises(CatalogError):
        FieldCatalog(Side.TARGET, [FieldDescriptor('id', 'ID'), FieldDescriptor('id', 'Other')])


def test_parse_catalogs():
    source, target, connections = parse_catalogs({
        'source': [{'id': 'sku', 'name': 'SKU', 'example': '1, 2'}, {'id': 'title'}],
        'target': [{'id': 'id', 'name': 'ID', 'required': True}],
        'connections': [['sku', 'id'], 'garbage'],
    })

    assert source.ids() == ['sku', 'title']
    assert source.get('title').name == 'title'
    assert target.get('id').required is True
    assert [f.id for f in target.required()] == ['id']
    assert connections == [('sku', 'id')]


def test_parse_catalogs_requires_ids():
    with pytest.raises(CatalogError):
        parse_catalogs({'source': [{'name': 'No id'}]})
    with pytest.raises(CatalogError):
        parse_catalogs(['not', 'an', 'object'])


def test_load_catalog_file(tmp_path):
    path = tmp_path / 'catalog.json'
    path.write_text(json.dumps({
        'source': [{'id': 'a'}],
        'target': [{'id': 'b'}],
        'connections': [['a', 'b']],
    }), encoding='utf-8')

    source, target, connections = load_catalog_file(path)

    assert source.side == Side.SOURCE
    assert target.ids() == ['b']
    assert connections == [('a', 'b')]


def test_load_catalog_file_errors(tmp_path):
    broken = tmp_path / 'broken.json'
    broken.write_text('{not json', encoding='utf-8')

    with pytest.raises(CatalogError):
        load_catalog_file(broken)
    with pytest.raises(CatalogError):
        load_catalog_file(tmp_path / 'missing.json')
