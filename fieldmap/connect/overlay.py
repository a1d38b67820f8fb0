"""
Connection Overlay - SVG layer for curves, the dragged edge and hints.

The overlay sits on top of the mapping surface and is redrawn from engine
output after every event. It also owns the browser side of the geometry
table: dot rectangles are measured from the DOM on demand and handed to the
engine as a RectTable, never cached between events.
"""

import contextlib
import html
import logging
from typing import Iterable, Optional

from nicegui import ui

from fieldmap.catalog import Side
from fieldmap.connect.constants import (
    DOT_SIZE,
    EDGE_COLOR,
    EDGE_DASH,
    EDGE_HIT_PADDING,
    EDGE_WIDTH,
)
from fieldmap.connect.controller import ProximityHint
from fieldmap.connect.geometry import Point, RectTable
from fieldmap.connect.projector import EdgeView

logger = logging.getLogger(__name__)

HINT_TEXT = 'Drag to connect'


def build_svg(edges: Iterable[EdgeView], drag_path: Optional[str] = None,
              hover: Optional[Point] = None, hint: Optional[ProximityHint] = None) -> str:
    """Render the overlay contents as an SVG string."""
    parts = []
    for edge in edges:
        cid = html.escape(edge.connection_id, quote=True)
        parts.append(
            f'<g class="fm-edge">'
            f'<path d="{edge.path}" fill="none" stroke="transparent" '
            f'stroke-width="{EDGE_WIDTH + EDGE_HIT_PADDING}"/>'
            f'<path d="{edge.path}" fill="none" stroke="{EDGE_COLOR}" stroke-width="{EDGE_WIDTH}"/>'
            f'<g class="fm-trash" data-connection-id="{cid}" style="pointer-events: auto; cursor: pointer">'
            f'<circle cx="{edge.midpoint.x:g}" cy="{edge.midpoint.y:g}" r="12" fill="white" stroke="#e5e7eb"/>'
            f'<text x="{edge.midpoint.x:g}" y="{edge.midpoint.y:g}" text-anchor="middle" '
            f'dominant-baseline="central" font-size="12" fill="#ef4444">&#x2715;</text>'
            f'</g></g>'
        )

    if drag_path:
        parts.append(
            f'<path d="{drag_path}" fill="none" stroke="{EDGE_COLOR}" '
            f'stroke-width="{EDGE_WIDTH}" stroke-dasharray="{EDGE_DASH}"/>'
        )

    if hover:
        parts.append(
            f'<circle cx="{hover.x:g}" cy="{hover.y:g}" r="{DOT_SIZE}" fill="none" '
            f'stroke="{EDGE_COLOR}" stroke-width="2" opacity="0.5"/>'
        )

    if hint:
        anchor = 'start' if hint.side == Side.SOURCE else 'end'
        offset = 14 if hint.side == Side.SOURCE else -14
        parts.append(
            f'<text x="{hint.position.x + offset:g}" y="{hint.position.y - 10:g}" '
            f'text-anchor="{anchor}" font-size="12" fill="#6b7280">{HINT_TEXT}</text>'
        )

    return (
        '<svg class="absolute top-0 left-0 w-full h-full" '
        'style="pointer-events: none; z-index: 10">' + ''.join(parts) + '</svg>'
    )


@contextlib.contextmanager
def suppress_text_selection():
    """Disable text selection and show a grabbing cursor for the duration of a drag."""
    ui.run_javascript("document.body.style.userSelect = 'none'; document.body.style.cursor = 'grabbing';")
    try:
        yield
    finally:
        ui.run_javascript("document.body.style.userSelect = ''; document.body.style.cursor = '';")


class ConnectionOverlay:
    """
    Renders engine output into an SVG element inside the mapping surface.

    Call setup() once inside the surface container, then render() after
    every state change.
    """

    def __init__(self, container_id: str = 'fieldmap-surface'):
        self.container_id = container_id
        self._svg = None
        self._is_setup = False

    def setup(self):
        """Create the SVG element and JS helpers. Call once inside the container."""
        if self._is_setup:
            return

        ui.add_head_html('''
            <style>
                .fm-entered { animation: fm-pop 0.3s ease-out; }
                .fm-exited { animation: fm-fade 0.3s ease-out; }
                @keyframes fm-pop { from { transform: scale(0.6); } to { transform: scale(1); } }
                @keyframes fm-fade { from { opacity: 0.4; } to { opacity: 1; } }
            </style>
        ''')

        ui.add_body_html('''
            <script>
                window.measureFieldmapDots = function(containerId) {
                    const container = document.getElementById(containerId);
                    if (!container) return null;
                    const box = container.getBoundingClientRect();
                    const out = { source: {}, target: {} };
                    container.querySelectorAll('[data-field-id]').forEach(el => {
                        const r = el.getBoundingClientRect();
                        if (!r.width && !r.height) return;
                        const side = out[el.dataset.side];
                        if (side) side[el.dataset.fieldId] = [r.left - box.left, r.top - box.top, r.width, r.height];
                    });
                    return out;
                };

                window.fieldmapPointer = function(e, containerId) {
                    const container = document.getElementById(containerId);
                    const box = container ? container.getBoundingClientRect() : { left: 0, top: 0 };
                    const dot = e.target.closest ? e.target.closest('[data-field-id]') : null;
                    const trash = e.target.closest ? e.target.closest('[data-connection-id]') : null;
                    return {
                        x: e.clientX - box.left,
                        y: e.clientY - box.top,
                        side: dot ? dot.dataset.side : null,
                        fieldId: dot ? dot.dataset.fieldId : null,
                        connectionId: trash ? trash.dataset.connectionId : null,
                    };
                };
            </script>
        ''')

        self._svg = ui.html(build_svg([])).classes('absolute inset-0 pointer-events-none')
        self._is_setup = True

    def pointer_js_handler(self) -> str:
        """JS handler for surface events that emits a pointer payload."""
        return f"(e) => emit(window.fieldmapPointer(e, '{self.container_id}'))"

    async def measure(self) -> RectTable:
        """Read current dot rectangles from the browser."""
        try:
            measured = await ui.run_javascript(
                f"return window.measureFieldmapDots ? window.measureFieldmapDots('{self.container_id}') : null;"
            )
        except Exception as e:
            logger.warning(f"Dot measurement failed: {e}")
            return RectTable()
        if not isinstance(measured, dict):
            return RectTable()
        return RectTable.from_measurements(measured)

    def render(self, edges: Iterable[EdgeView], drag_path: Optional[str] = None,
               hover: Optional[Point] = None, hint: Optional[ProximityHint] = None):
        if self._svg is None:
            return
        self._svg.set_content(build_svg(edges, drag_path, hover, hint))
