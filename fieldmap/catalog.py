"""
Field catalogs for the mapping editor.

A catalog is a fixed, ordered list of field descriptors. There are two of
them per editing session: the SOURCE catalog (columns found in the imported
file) and the TARGET catalog (attributes the product widgets understand).
Ids are unique inside a catalog; the same id may appear in both.

Catalog file format (JSON):
{
  "source": [{"id": "sku-id", "name": "SKU ID", "example": "1, 2, 3"}],
  "target": [{"id": "id", "name": "ID", "required": true}],
  "connections": [["sku-id", "id"]]
}
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class Side(str, Enum):
    SOURCE = 'source'
    TARGET = 'target'


class CatalogError(ValueError):
    """Raised when a catalog definition cannot be used."""


@dataclass(frozen=True)
class FieldDescriptor:
    id: str
    name: str
    example: str = ''
    required: bool = False


class FieldCatalog:
    """Ordered, read-only collection of field descriptors for one side."""

    def __init__(self, side: Side, fields: Iterable[FieldDescriptor]):
        self.side = side
        self._fields: Tuple[FieldDescriptor, ...] = tuple(fields)
        self._by_id: Dict[str, FieldDescriptor] = {}
        for field in self._fields:
            if field.id in self._by_id:
                raise CatalogError(f"Duplicate {side.value} field id '{field.id}'")
            self._by_id[field.id] = field

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._by_id

    def get(self, field_id: str) -> Optional[FieldDescriptor]:
        return self._by_id.get(field_id)

    def ids(self) -> List[str]:
        return [f.id for f in self._fields]

    def required(self) -> List[FieldDescriptor]:
        return [f for f in self._fields if f.required]


# Demo data shown by the editor when no catalog file is configured
DEFAULT_SOURCE_FIELDS = [
    FieldDescriptor('sku-id', 'SKU ID', '1, 2, 3, 4, 5'),
    FieldDescriptor('image-url', 'Image URL', 'https://store.storeimages.cdn-a...'),
    FieldDescriptor('title', 'Title', 'iPhone 15 Pro - Black, iPhone 1...'),
    FieldDescriptor('description', 'Description', 'General features A17 Pro ...'),
    FieldDescriptor('retail-price', 'Retail Price', '999, 1099, 1399, 1599, 799'),
    FieldDescriptor('url', 'URL', 'https://www.apple.com/iphone-16/'),
    FieldDescriptor('color', 'Color', 'Black Titanium, Natural Titaniu...'),
    FieldDescriptor('capacity', 'Capacity', '128, 256, 512, 1024'),
    FieldDescriptor('display-size', 'Display Size', 'Color'),
]

DEFAULT_TARGET_FIELDS = [
    FieldDescriptor('id', 'ID', required=True),
    FieldDescriptor('product-name', 'Product Name', required=True),
    FieldDescriptor('product-url', 'Product URL', required=True),
    FieldDescriptor('image', 'Image', required=True),
    FieldDescriptor('description', 'Description'),
    FieldDescriptor('price', 'Price'),
]

DEFAULT_CONNECTIONS = [
    ('sku-id', 'id'),
    ('title', 'product-name'),
    ('url', 'product-url'),
]


def default_catalogs() -> Tuple[FieldCatalog, FieldCatalog]:
    """Return the (source, target) demo catalogs."""
    return (
        FieldCatalog(Side.SOURCE, DEFAULT_SOURCE_FIELDS),
        FieldCatalog(Side.TARGET, DEFAULT_TARGET_FIELDS),
    )


def _field_from_dict(raw: Dict[str, Any], side: Side) -> FieldDescriptor:
    if not isinstance(raw, dict) or not raw.get('id'):
        raise CatalogError(f"Every {side.value} field needs an 'id': {raw!r}")
    return FieldDescriptor(
        id=str(raw['id']),
        name=str(raw.get('name') or raw['id']),
        example=str(raw.get('example', '')),
        required=bool(raw.get('required', False)),
    )


def parse_catalogs(data: Dict[str, Any]) -> Tuple[FieldCatalog, FieldCatalog, List[Tuple[str, str]]]:
    """
    Build catalogs from an already-decoded catalog document.

    Returns:
        (source_catalog, target_catalog, initial_connections)
    """
    if not isinstance(data, dict):
        raise CatalogError("Catalog document must be a JSON object")

    source = FieldCatalog(Side.SOURCE, [_field_from_dict(f, Side.SOURCE) for f in data.get('source', [])])
    target = FieldCatalog(Side.TARGET, [_field_from_dict(f, Side.TARGET) for f in data.get('target', [])])

    connections = []
    for pair in data.get('connections', []):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            logger.warning(f"Ignoring malformed connection entry {pair!r}")
            continue
        connections.append((str(pair[0]), str(pair[1])))

    return source, target, connections


def load_catalog_file(path: Path) -> Tuple[FieldCatalog, FieldCatalog, List[Tuple[str, str]]]:
    """Load catalogs and initial connections from a JSON file."""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise CatalogError(f"Failed to read catalog file {path}: {e}") from e

    source, target, connections = parse_catalogs(data)
    logger.info(f"Loaded catalog {path.name}: {len(source)} source, {len(target)} target fields")
    return source, target, connections
