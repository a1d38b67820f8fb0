"""
Mapping Store - single source of truth for field connections.

Every mutation of the mapping goes through add_connection / remove_connection,
which keep it a partial bijection: a source field feeds at most one target
and a target field is fed by at most one source.

Both the drag gesture and the click-to-manage menu call into this store, so
neither can bypass the uniqueness check.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from fieldmap.catalog import FieldCatalog, FieldDescriptor, Side

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Connection:
    id: str
    source_id: str
    target_id: str


class MappingStore:
    """
    Holds the active connections for one editing session.

    add_connection returns None when the mutation is rejected and
    remove_connection returns False when the id is unknown. Neither is an
    error: both are reachable through normal interaction.
    """

    def __init__(self, source_catalog: FieldCatalog, target_catalog: FieldCatalog,
                 initial: Iterable[Tuple[str, str]] = ()):
        self.source_catalog = source_catalog
        self.target_catalog = target_catalog
        self._connections: List[Connection] = []
        self._connected: Dict[str, bool] = {}
        self._ids = itertools.count(1)
        self._listeners: List[Callable[[Tuple[Connection, ...]], None]] = []

        for source_id, target_id in initial:
            if self.add_connection(source_id, target_id) is None:
                logger.warning(f"Skipping initial connection {source_id} -> {target_id}")

    @property
    def connections(self) -> Tuple[Connection, ...]:
        return tuple(self._connections)

    def set_on_change(self, callback: Callable[[Tuple[Connection, ...]], None]):
        self._listeners.append(callback)

    def _notify_change(self):
        snapshot = self.connections
        for callback in self._listeners:
            callback(snapshot)

    # --- Queries ---

    def get(self, connection_id: str) -> Optional[Connection]:
        for conn in self._connections:
            if conn.id == connection_id:
                return conn
        return None

    def connection_for(self, field_id: str, side: Side) -> Optional[Connection]:
        for conn in self._connections:
            if (conn.source_id if side == Side.SOURCE else conn.target_id) == field_id:
                return conn
        return None

    def is_connected(self, field_id: str, side: Side) -> bool:
        return self.connection_for(field_id, side) is not None

    def available_targets(self) -> List[FieldDescriptor]:
        return [f for f in self.target_catalog if not self.is_connected(f.id, Side.TARGET)]

    def available_sources(self) -> List[FieldDescriptor]:
        return [f for f in self.source_catalog if not self.is_connected(f.id, Side.SOURCE)]

    def connected_fields(self) -> Dict[str, bool]:
        """Target id -> has-connection flags. Only ids that were ever touched appear."""
        return dict(self._connected)

    def required_summary(self) -> Tuple[int, int]:
        """Return (mapped, total) for required target fields."""
        required = self.target_catalog.required()
        mapped = sum(1 for f in required if self.is_connected(f.id, Side.TARGET))
        return mapped, len(required)

    def is_complete(self) -> bool:
        mapped, total = self.required_summary()
        return mapped == total

    # --- Mutations ---

    def add_connection(self, source_id: str, target_id: str) -> Optional[Connection]:
        if source_id not in self.source_catalog or target_id not in self.target_catalog:
            logger.debug(f"Rejected {source_id} -> {target_id}: unknown field")
            return None
        if self.is_connected(source_id, Side.SOURCE) or self.is_connected(target_id, Side.TARGET):
            logger.debug(f"Rejected {source_id} -> {target_id}: already mapped")
            return None

        conn = Connection(id=f"conn-{next(self._ids)}", source_id=source_id, target_id=target_id)
        self._connections.append(conn)
        self._connected[target_id] = True
        logger.info(f"Connected {source_id} -> {target_id} ({conn.id})")
        self._notify_change()
        return conn

    def remove_connection(self, connection_id: str) -> bool:
        conn = self.get(connection_id)
        if conn is None:
            logger.debug(f"Connection {connection_id} already gone")
            return False

        self._connections.remove(conn)
        self._connected[conn.target_id] = False
        logger.info(f"Disconnected {conn.source_id} -> {conn.target_id} ({conn.id})")
        self._notify_change()
        return True
