import pytest

from fieldmap.catalog import FieldCatalog, FieldDescriptor, Side
from fieldmap.connect.store import MappingStore

from helpers import make_layout


@pytest.fixture
def source_catalog():
    return FieldCatalog(Side.SOURCE, [
        FieldDescriptor('A', 'Alpha', 'a1, a2'),
        FieldDescriptor('B', 'Beta', 'b1, b2'),
        FieldDescriptor('C', 'Gamma', 'c1'),
    ])


@pytest.fixture
def target_catalog():
    return FieldCatalog(Side.TARGET, [
        FieldDescriptor('X', 'Ex', required=True),
        FieldDescriptor('Y', 'Why', required=True),
        FieldDescriptor('Z', 'Zed'),
    ])


@pytest.fixture
def store(source_catalog, target_catalog):
    return MappingStore(source_catalog, target_catalog)


@pytest.fixture
def layout(source_catalog, target_catalog):
    return make_layout(source_catalog, target_catalog)
