"""
Main NiceGUI application for the field mapper.

Shows the imported source columns on the left and the target attributes on
the right. Dragging from a source dot to a target dot maps the column; the
preview card and the "required attributes" banner follow the mapping live.
The connection engine lives in fieldmap.connect; this file only lays out the
page and binds the surface events.
"""

import logging
import sys
from typing import Any, Dict

from dotenv import load_dotenv
from nicegui import ui

load_dotenv()

from fieldmap.catalog import DEFAULT_CONNECTIONS, Side, default_catalogs, load_catalog_file
from fieldmap.config import get_catalog_path, get_tolerances
from fieldmap.connect import (
    Animation,
    GestureController,
    ManageActions,
    MappingStore,
    ViewModel,
    ViewProjector,
)
from fieldmap.connect.handlers import setup_connect_handlers
from fieldmap.connect.overlay import ConnectionOverlay, suppress_text_selection
from fieldmap.connect.projector import preview_values

logger = logging.getLogger(__name__)

SOURCE_FILE_NAME = 'product_catalog_2025.csv'

_ANIMATION_CLASSES = {
    Animation.ENTERED: 'fm-entered',
    Animation.EXITED: 'fm-exited',
    Animation.NONE: '',
}


def load_session_catalogs():
    """Catalogs are fixed for the lifetime of the process."""
    path = get_catalog_path()
    if path is None:
        logger.info("No catalog file configured, using demo catalogs")
        source, target = default_catalogs()
        return source, target, list(DEFAULT_CONNECTIONS)
    return load_catalog_file(path)


SOURCE_CATALOG, TARGET_CATALOG, INITIAL_CONNECTIONS = load_session_catalogs()


def dot_classes(active: bool, side: Side) -> str:
    if side == Side.TARGET and active:
        return 'w-4 h-4 rounded-full border-2 border-white bg-blue-500 mr-2'
    if active:
        return 'w-4 h-4 rounded-full border-2 border-blue-500 bg-blue-500'
    return 'w-4 h-4 rounded-full border-2 border-blue-500 bg-white cursor-pointer'


def pill_classes(active: bool) -> str:
    if active:
        return 'flex items-center rounded-full border px-2 py-2 bg-blue-500 text-white border-blue-500'
    return 'flex items-center rounded-full border px-2 py-2 bg-white text-gray-800 border-gray-200'


def summary_text(mapped: int, total: int) -> str:
    return f'{mapped} of {total} required attributes mapped'


@ui.page('/')
def main_page():
    store = MappingStore(SOURCE_CATALOG, TARGET_CATALOG, INITIAL_CONNECTIONS)
    controller = GestureController(store, tolerances=get_tolerances(), drag_effect=suppress_text_selection)
    actions = ManageActions(store)
    projector = ViewProjector(SOURCE_CATALOG, TARGET_CATALOG, store.connections)
    overlay = ConnectionOverlay()

    state: Dict[str, Any] = {'dots': {}, 'pills': {}, 'preview': {}}

    # Header
    with ui.row().classes('w-full items-center justify-between p-4 border-b'):
        ui.label('New Product Finder').classes('text-xl font-medium text-gray-800')
        ui.label('1 Import source — 2 Map fields — 3 Map Results').classes('text-gray-500')

    # Banner
    with ui.row().classes('w-full items-center justify-between bg-gray-50 p-6'):
        with ui.column().classes('gap-1'):
            ui.label('Data source successfully imported!').classes('text-xl font-medium text-gray-800')
            ui.label('We found the following attributes and mapped them to fields:').classes('text-gray-600')
        with ui.row().classes('items-center gap-4'):
            state['summary'] = ui.label().classes('text-gray-600')
            state['finalise'] = ui.button(
                'Finalise',
                on_click=lambda: ui.notify('Mapping finalised', type='positive', position='bottom'),
            )

    # Mapping surface
    with ui.element('div').props(f'id={overlay.container_id}').classes('p-6 flex gap-6 relative w-full') as surface:
        with ui.card().classes('w-1/2 p-0 gap-0'):
            with ui.column().classes('p-4 border-b w-full gap-0'):
                ui.label(SOURCE_FILE_NAME).classes('font-medium text-gray-800')
                ui.label('CSV, Imported').classes('text-sm text-gray-500')
            with ui.row().classes('w-full px-4 py-3 bg-gray-50 text-gray-600 font-medium'):
                ui.label('Column name').classes('w-1/3')
                ui.label('Example content').classes('flex-1')
            for field in SOURCE_CATALOG:
                with ui.row().classes('w-full px-4 py-3 items-center no-wrap border-t'):
                    ui.label(field.name).classes('w-1/3 font-medium text-gray-700')
                    ui.label(field.example).classes('flex-1 truncate text-gray-600')
                    state['dots'][(Side.SOURCE, field.id)] = ui.element('div').props(
                        f'data-side={Side.SOURCE.value} data-field-id={field.id}'
                    )

        with ui.column().classes('w-1/2 gap-6'):
            with ui.card().classes('w-full'):
                ui.label('Product Data').classes('font-medium text-gray-800')
                ui.label('These fields and attributes can be used inside the widgets').classes('text-sm text-gray-500')
                for field in TARGET_CATALOG:
                    with ui.row().classes('w-full no-wrap') as pill:
                        state['dots'][(Side.TARGET, field.id)] = ui.element('div').props(
                            f'data-side={Side.TARGET.value} data-field-id={field.id}'
                        )
                        ui.label(field.name).classes('flex-1')
                        ui.label('required' if field.required else '').classes('text-xs')
                    state['pills'][field.id] = pill

            with ui.card().classes('w-full'):
                ui.label('Preview').classes('text-sm text-blue-500')
                for field in TARGET_CATALOG:
                    with ui.row().classes('w-full items-center no-wrap'):
                        ui.label(field.name).classes('w-1/3 text-xs text-gray-500')
                        state['preview'][field.id] = ui.label()

        overlay.setup()

    def refresh_fields(view: ViewModel):
        for fv in view.sources + view.targets:
            dot = state['dots'][(fv.side, fv.field_id)]
            dot.classes(replace=f'{dot_classes(fv.active, fv.side)} {_ANIMATION_CLASSES[fv.animation]}'.strip())
            if fv.side == Side.TARGET:
                state['pills'][fv.field_id].classes(replace=pill_classes(fv.active))

        values = preview_values(store.connections, SOURCE_CATALOG)
        for fv in view.targets:
            label = state['preview'][fv.field_id]
            if fv.show_content:
                label.set_text(values.get(fv.field_id, ''))
                label.classes(replace='flex-1 text-gray-800')
            else:
                label.set_text('')
                label.classes(replace='flex-1 h-3 rounded bg-gray-200')

        mapped, total = store.required_summary()
        state['summary'].set_text(summary_text(mapped, total))
        state['finalise'].set_enabled(store.is_complete())

    handlers = setup_connect_handlers(
        store=store,
        controller=controller,
        actions=actions,
        overlay=overlay,
        projector=projector,
        refresh_fields=refresh_fields,
    )

    js_handler = overlay.pointer_js_handler()
    surface.on('mousedown', handlers['handle_mouse_down'], js_handler=js_handler)
    surface.on('mousemove', handlers['handle_mouse_move'], js_handler=js_handler)
    surface.on('mouseup', handlers['handle_mouse_up'], js_handler=js_handler)
    surface.on('mouseleave', handlers['handle_mouse_leave'])

    refresh_fields(projector.update(store.connections))
    # Curves need measured dots, which exist only after the first paint
    ui.timer(0.1, handlers['sync_layout'], once=True)


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='Field Mapper',
        port=8081,
        reload=not getattr(sys, 'frozen', False),
    )
