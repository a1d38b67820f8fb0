"""
Manage Actions - click-to-manage path for connections.

Clicking a connected dot asks for confirmation before the connection is
removed. Clicking a free source dot opens a menu of free targets; choosing
one connects without a drag. All mutations go through the MappingStore.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from fieldmap.catalog import FieldDescriptor, Side
from fieldmap.connect.store import Connection, MappingStore


@dataclass(frozen=True)
class PendingRemoval:
    connection_id: str


class ManageActions:
    """
    Handles dot clicks that are not drags.

    The confirmation dialog and the selection menu are external; this class
    asks them to open through the callbacks and receives their answers via
    resolve_removal() and choose_target().
    """

    def __init__(self, store: MappingStore,
                 request_confirmation: Optional[Callable[[Connection], None]] = None,
                 open_menu: Optional[Callable[[str, List[FieldDescriptor]], None]] = None):
        self.store = store
        self._request_confirmation = request_confirmation
        self._open_menu = open_menu
        self.pending_removal: Optional[PendingRemoval] = None
        self.menu_source_id: Optional[str] = None

    def set_collaborators(self, request_confirmation: Callable[[Connection], None],
                          open_menu: Callable[[str, List[FieldDescriptor]], None]):
        self._request_confirmation = request_confirmation
        self._open_menu = open_menu

    def click_dot(self, field_id: str, side: Side) -> Optional[str]:
        """
        Route a click on a dot.

        Returns the action taken: 'confirm_removal', 'open_menu' or None.
        """
        conn = self.store.connection_for(field_id, side)
        if conn is not None:
            self.request_removal(conn.id)
            return 'confirm_removal'

        if side == Side.SOURCE and field_id in self.store.source_catalog:
            options = self.store.available_targets()
            self.menu_source_id = field_id
            if self._open_menu:
                self._open_menu(field_id, options)
            return 'open_menu'

        return None

    def request_removal(self, connection_id: str) -> bool:
        conn = self.store.get(connection_id)
        if conn is None:
            return False
        self.pending_removal = PendingRemoval(connection_id)
        if self._request_confirmation:
            self._request_confirmation(conn)
        return True

    def resolve_removal(self, confirmed: bool, connection_id: Optional[str] = None) -> bool:
        """
        Apply the dialog answer. Returns True if a connection was removed.

        A dialog passes the id of the connection it showed, so an answer
        never lands on a removal requested after it opened.
        """
        pending = self.pending_removal
        if connection_id is None:
            if pending is None:
                return False
            connection_id = pending.connection_id
        if pending is not None and pending.connection_id == connection_id:
            self.pending_removal = None
        if not confirmed:
            return False
        return self.store.remove_connection(connection_id)

    def choose_target(self, target_id: Optional[str]) -> Optional[Connection]:
        """Apply the menu answer; None closes the menu without changes."""
        source_id, self.menu_source_id = self.menu_source_id, None
        if source_id is None or target_id is None:
            return None
        return self.store.add_connection(source_id, target_id)
