"""
Render Driver Module.

Turns the editor state (viewport, tool mode, selection and interaction
phase) into a render request, asks the map snapshot for primitives and hands
them to the renderer.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from PySide6.QtCore import QObject, Signal

from rerail.core.interaction import InteractionStateMachine
from rerail.core.map_document import MapDocument
from rerail.core.map_types import (
    BorderEdgePreview,
    BorderFeaturePreview,
    OverlayHint,
    PointPreview,
    RenderOptions,
    RenderPrimitives,
)
from rerail.core.phases import (
    AddingBorderEdge,
    DraggingBorderFeature,
    DraggingPoint,
    Phase,
)
from rerail.core.protocols import Renderer
from rerail.core.tool_mode import ToolMode, ToolModeManager
from rerail.core.viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderRequest:
    viewport: Viewport
    options: RenderOptions


def overlay_for_phase(phase: Phase) -> Optional[OverlayHint]:
    """
    Returns the preview hint of a gesture phase.

    Only one phase is active at a time, so at most one hint exists.
    """
    if isinstance(phase, DraggingPoint):
        return PointPreview(
            phase.railway_id, phase.target, phase.pointer_x, phase.pointer_y
        )
    if isinstance(phase, DraggingBorderFeature):
        return BorderFeaturePreview(phase.target, phase.pointer_x, phase.pointer_y)
    if isinstance(phase, AddingBorderEdge):
        return BorderEdgePreview(
            phase.anchor_id, phase.style, phase.pointer_x, phase.pointer_y
        )
    return None


def build_render_request(
    viewport: Viewport,
    mode: ToolMode,
    selected_railway_id: Optional[int],
    phase: Phase,
) -> RenderRequest:
    """
    Builds the render request for the current editor state.

    Args:
        viewport: The visible region.
        mode: Active tool. Border mode hides the railway selection and shows
            border point markers.
        selected_railway_id: Selected railway, if any.
        phase: Current interaction phase.

    Returns:
        RenderRequest: Viewport plus render options.
    """
    editing_borders = mode == ToolMode.EDIT_BORDERS
    options = RenderOptions(
        selected_railway_id=None if editing_borders else selected_railway_id,
        overlay=overlay_for_phase(phase),
        show_border_markers=editing_borders,
    )
    return RenderRequest(viewport=viewport, options=options)


class RenderDriver(QObject):
    """
    Rebuilds the frame whenever anything that affects it changes.

    Signals:
        frame_ready: Emitted with the new RenderPrimitives.
    """

    frame_ready = Signal(object)

    def __init__(
        self,
        document: MapDocument,
        tools: ToolModeManager,
        machine: InteractionStateMachine,
        renderer: Renderer,
    ) -> None:
        super().__init__()
        self._document = document
        self._tools = tools
        self._machine = machine
        self._renderer = renderer
        self._primitives: Optional[RenderPrimitives] = None

        document.map_changed.connect(self.refresh)
        tools.mode_changed.connect(self.refresh)
        tools.selection_changed.connect(self.refresh)
        machine.phase_changed.connect(self.refresh)
        machine.viewport_changed.connect(self.refresh)

    @property
    def primitives(self) -> Optional[RenderPrimitives]:
        """The most recently built frame."""
        return self._primitives

    def current_request(self) -> RenderRequest:
        return build_render_request(
            self._machine.viewport,
            self._tools.mode,
            self._tools.selected_railway_id,
            self._machine.phase,
        )

    def refresh(self, *_args) -> RenderPrimitives:
        """Re-renders the current snapshot and emits frame_ready."""
        request = self.current_request()
        self._primitives = self._document.snapshot.render(
            request.viewport, request.options
        )
        logger.debug(
            f"Frame rebuilt at zoom level {request.viewport.zoom_level_index}, "
            f"overlay={type(request.options.overlay).__name__}"
        )
        self.frame_ready.emit(self._primitives)
        return self._primitives

    def draw(self, surface: Any, width_px: int, height_px: int) -> None:
        """Paints the latest frame, building one first if necessary."""
        primitives = self._primitives
        if primitives is None:
            primitives = self.refresh()
        self._renderer.draw(surface, width_px, height_px, primitives)
