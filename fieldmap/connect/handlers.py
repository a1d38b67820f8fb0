"""
Connect Handlers - event handlers for the mapping surface in app.py

This module keeps the pointer event handling out of app.py so the main
application file stays focused on layout. It also hosts the two external
collaborators of the click-to-manage path: the removal confirmation dialog
and the target selection menu.
"""

import functools
from typing import Any, Callable, Dict, List

from nicegui import background_tasks, ui

from fieldmap.catalog import FieldDescriptor, Side
from fieldmap.connect.actions import ManageActions
from fieldmap.connect.controller import Dragging, GestureController
from fieldmap.connect.geometry import RectTable
from fieldmap.connect.overlay import ConnectionOverlay
from fieldmap.connect.projector import ViewModel, ViewProjector, project_drag, project_edges
from fieldmap.connect.store import Connection, MappingStore
from fieldmap.payloads import (
    normalize_pointer_payload,
    pointer_from_payload,
    resolve_connection_from_payload,
    resolve_dot_from_payload,
)


def show_removal_dialog(conn: Connection, store: MappingStore, on_answer: Callable[[bool], None]):
    """Ask the user to confirm removing a connection."""
    source = store.source_catalog.get(conn.source_id)
    target = store.target_catalog.get(conn.target_id)

    with ui.dialog() as dialog, ui.card().classes('min-w-[320px]'):
        ui.label('Remove mapping?').classes('text-lg font-medium')
        ui.label(f'{source.name if source else conn.source_id} → {target.name if target else conn.target_id}') \
            .classes('text-gray-600')
        with ui.row().classes('w-full justify-end gap-2 mt-2'):
            ui.button('Cancel', on_click=lambda: dialog.submit(False)).props('flat')
            ui.button('Remove', color='negative', on_click=lambda: dialog.submit(True))

    async def ask():
        # Closing the dialog any other way counts as cancel
        confirmed = await dialog
        on_answer(bool(confirmed))
        dialog.delete()

    return ask()


def show_target_menu(source_id: str, options: List[FieldDescriptor], store: MappingStore,
                     on_choice: Callable[[Any], None]):
    """Let the user pick a free target for a source without dragging."""
    source = store.source_catalog.get(source_id)

    with ui.dialog() as dialog, ui.card().classes('min-w-[280px]'):
        ui.label(f'Map {source.name if source else source_id} to').classes('text-lg font-medium')
        if not options:
            ui.label('All fields are already mapped').classes('text-gray-500')
        with ui.list().props('dense separator'):
            for field in options:
                with ui.item(on_click=functools.partial(dialog.submit, field.id)):
                    with ui.item_section():
                        ui.item_label(field.name)
                    if field.required:
                        with ui.item_section().props('side'):
                            ui.item_label('required').props('caption')

    async def ask():
        choice = await dialog
        on_choice(choice)
        dialog.delete()

    return ask()


def setup_connect_handlers(
    store: MappingStore,
    controller: GestureController,
    actions: ManageActions,
    overlay: ConnectionOverlay,
    projector: ViewProjector,
    refresh_fields: Callable[[ViewModel], None],
):
    """
    Wire the engine to the NiceGUI surface.

    Args:
        store: MappingStore for this session
        controller: GestureController bound to the store
        actions: ManageActions bound to the store
        overlay: ConnectionOverlay already set up inside the surface
        projector: ViewProjector tracking the last rendered snapshot
        refresh_fields: Function applying per-field flags to the rows

    Returns:
        Dict with handler functions for binding to UI events
    """
    current: Dict[str, Any] = {'geometry': RectTable()}

    def render(*_):
        geometry = current['geometry']
        state = controller.state
        hover = None
        if isinstance(state, Dragging) and state.hovered_target_id:
            hover = geometry.center(Side.TARGET, state.hovered_target_id)
        overlay.render(
            project_edges(store.connections, geometry),
            project_drag(state, geometry),
            hover,
            controller.hint,
        )

    def on_connections_change(connections):
        refresh_fields(projector.update(connections))
        render()

    store.set_on_change(on_connections_change)
    controller.set_on_state_change(render)

    async def measure():
        geometry = await overlay.measure()
        current['geometry'] = geometry
        controller.set_geometry(geometry)
        return geometry

    async def sync_layout():
        """Re-measure and redraw, e.g. after page load or a resize."""
        await measure()
        render()

    def request_confirmation(conn: Connection):
        on_answer = functools.partial(actions.resolve_removal, connection_id=conn.id)
        background_tasks.create(show_removal_dialog(conn, store, on_answer),
                                name='fieldmap-confirm-removal')

    def open_menu(source_id: str, options: List[FieldDescriptor]):
        background_tasks.create(show_target_menu(source_id, options, store, actions.choose_target),
                                name='fieldmap-target-menu')

    actions.set_collaborators(request_confirmation, open_menu)

    # Every state transition a press causes happens before its first await,
    # so a release or leave arriving during the measurement sees it.

    async def handle_mouse_down(event):
        payload = normalize_pointer_payload(event)
        pointer = pointer_from_payload(payload)
        if pointer is None:
            return

        connection_id = resolve_connection_from_payload(payload, store)
        if connection_id:
            actions.request_removal(connection_id)
            return

        dot = resolve_dot_from_payload(payload, store)
        if dot is None:
            return
        side, field_id = dot

        if side == Side.SOURCE and controller.begin_drag(field_id, pointer):
            # Dashed edge needs the dot's current position
            await sync_layout()
            return

        # Connected dots open the removal dialog; free targets do nothing
        if store.is_connected(field_id, side):
            actions.click_dot(field_id, side)

    async def handle_mouse_move(event):
        pointer = pointer_from_payload(normalize_pointer_payload(event))
        if pointer is None:
            return
        await measure()
        controller.move(pointer)

    async def handle_mouse_up(event):
        if not controller.is_dragging:
            return
        pointer = pointer_from_payload(normalize_pointer_payload(event))
        if pointer is None:
            controller.cancel()
            return

        await measure()
        # A leave or an earlier release may have ended the gesture meanwhile
        result = controller.release(pointer)
        if result.is_click and result.source_id:
            actions.click_dot(result.source_id, Side.SOURCE)

    def handle_mouse_leave(event=None):
        controller.cancel()

    return {
        'handle_mouse_down': handle_mouse_down,
        'handle_mouse_move': handle_mouse_move,
        'handle_mouse_up': handle_mouse_up,
        'handle_mouse_leave': handle_mouse_leave,
        'sync_layout': sync_layout,
        'render': render,
    }
