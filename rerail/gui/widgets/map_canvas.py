"""
Map Canvas Widget Module.

Provides MapCanvas, the drawing surface of the editor. The canvas translates
Qt input events into toolkit-independent pointer events for the interaction
state machine and paints the frames produced by the render driver.
"""

import logging
from typing import Optional

from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import (
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPaintEvent,
    QResizeEvent,
    QWheelEvent,
)
from PySide6.QtWidgets import QWidget

from rerail.core.input_events import PointerButton, PointerEvent, WheelEvent
from rerail.core.interaction import InteractionStateMachine
from rerail.core.phases import (
    AddingBorderEdge,
    DraggingBorderFeature,
    DraggingPoint,
    Idle,
    LinkingStation,
    PanningViewport,
    Phase,
)
from rerail.core.tool_mode import ToolMode, ToolModeManager
from rerail.gui.render_driver import RenderDriver

logger = logging.getLogger(__name__)

_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.LEFT,
    Qt.MouseButton.RightButton: PointerButton.RIGHT,
    Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
}


def cursor_shape(phase: Phase, mode: ToolMode) -> Qt.CursorShape:
    """Returns the cursor shape for a phase and tool mode."""
    if isinstance(phase, PanningViewport):
        return Qt.CursorShape.ClosedHandCursor
    if isinstance(phase, (DraggingPoint, DraggingBorderFeature)):
        return Qt.CursorShape.SizeAllCursor
    if isinstance(phase, (LinkingStation, AddingBorderEdge)):
        return Qt.CursorShape.CrossCursor
    if isinstance(phase, Idle) and mode == ToolMode.PAN:
        return Qt.CursorShape.OpenHandCursor
    if mode == ToolMode.NEW_RAILWAY:
        return Qt.CursorShape.CrossCursor
    return Qt.CursorShape.ArrowCursor


class MapCanvas(QWidget):
    """
    Interactive railway map surface.
    """

    def __init__(
        self,
        machine: InteractionStateMachine,
        tools: ToolModeManager,
        driver: RenderDriver,
        parent: Optional[QWidget] = None,
    ) -> None:
        """
        Initializes the canvas.

        Args:
            machine: Receives the translated input events.
            tools: Current tool mode, used for the cursor shape.
            driver: Supplies the frames to paint.
            parent: Parent widget.
        """
        super().__init__(parent)
        self.machine = machine
        self.tools = tools
        self.driver = driver

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(200, 150)

        driver.frame_ready.connect(self.update)
        machine.phase_changed.connect(self._update_cursor)
        tools.mode_changed.connect(self._update_cursor)
        self._update_cursor()

    def _update_cursor(self, *_args) -> None:
        self.setCursor(cursor_shape(self.machine.phase, self.tools.mode))

    @staticmethod
    def _pointer_event(event: QMouseEvent) -> PointerEvent:
        pos = event.position().toPoint()
        modifiers = event.modifiers()
        return PointerEvent(
            x=pos.x(),
            y=pos.y(),
            button=_BUTTONS.get(event.button(), PointerButton.NONE),
            shift=bool(modifiers & Qt.KeyboardModifier.ShiftModifier),
            ctrl=bool(modifiers & Qt.KeyboardModifier.ControlModifier),
        )

    # ------------------------------------------------------------------
    # Qt event handlers
    # ------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        self.setFocus()
        self.machine.on_pointer_down(self._pointer_event(event))
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        self.machine.on_pointer_move(self._pointer_event(event))

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        self.machine.on_pointer_up(self._pointer_event(event))
        event.accept()

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Zooms in for wheel-up and out for wheel-down."""
        delta = event.angleDelta().y()
        if delta == 0:
            event.ignore()
            return
        pos = event.position().toPoint()
        self.machine.on_wheel(WheelEvent(pos.x(), pos.y(), -1 if delta > 0 else 1))
        event.accept()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key.Key_Escape and self.machine.cancel():
            event.accept()
            return
        super().keyPressEvent(event)

    def leaveEvent(self, event: QEvent) -> None:
        self.machine.on_pointer_leave()
        super().leaveEvent(event)

    def resizeEvent(self, event: QResizeEvent) -> None:
        size = event.size()
        logger.debug(f"Canvas resized to {size.width()}x{size.height()}")
        self.machine.set_canvas_size(size.width(), size.height())
        super().resizeEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            self.driver.draw(painter, self.width(), self.height())
        finally:
            painter.end()
