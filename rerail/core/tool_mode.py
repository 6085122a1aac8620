"""
Tool Mode Manager Module.

Tracks the active editing tool, the selected railway and the border style
used for new border edges. Mode and selection changes are refused while a
gesture is in progress.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from rerail.core.map_types import BorderStyle

logger = logging.getLogger(__name__)


class ToolMode(Enum):
    PAN = "pan"
    NEW_RAILWAY = "new_railway"
    EDIT_RAILWAY = "edit_railway"
    EDIT_STATION = "edit_station"
    EDIT_BORDERS = "edit_borders"


class ToolModeManager(QObject):
    """
    Holds the active tool mode and railway selection.

    Signals:
        mode_changed: Emitted with the new ToolMode.
        selection_changed: Emitted with the new railway id, or None.
        border_style_changed: Emitted with the new BorderStyle.
    """

    mode_changed = Signal(object)
    selection_changed = Signal(object)
    border_style_changed = Signal(object)

    def __init__(self, mode: ToolMode = ToolMode.PAN) -> None:
        """
        Args:
            mode: The initially active tool.
        """
        super().__init__()
        self._mode = mode
        self._selected_railway_id: Optional[int] = None
        self._border_style = BorderStyle.DOTTED
        self._is_idle: Callable[[], bool] = lambda: True

    def bind_gesture_state(self, is_idle: Callable[[], bool]) -> None:
        """
        Connects the manager to the interaction state machine.

        Args:
            is_idle: Returns True when no gesture is in progress.
        """
        self._is_idle = is_idle

    @property
    def mode(self) -> ToolMode:
        return self._mode

    @property
    def selected_railway_id(self) -> Optional[int]:
        return self._selected_railway_id

    @property
    def border_style(self) -> BorderStyle:
        return self._border_style

    def set_mode(self, mode: ToolMode) -> bool:
        """
        Switches the active tool.

        Args:
            mode: The tool to activate.

        Returns:
            bool: False if a gesture is in progress and the switch was refused.
        """
        if not self._is_idle():
            logger.warning(f"Refusing mode switch to {mode.value}: gesture in progress")
            return False
        if mode != self._mode:
            self._mode = mode
            logger.debug(f"Tool mode -> {mode.value}")
            self.mode_changed.emit(mode)
        return True

    def select_railway(self, railway_id: Optional[int]) -> bool:
        """
        Selects a railway (or clears the selection with None).

        Returns:
            bool: False if a gesture is in progress and the change was refused.
        """
        if not self._is_idle():
            logger.warning(
                f"Refusing selection of railway {railway_id}: gesture in progress"
            )
            return False
        if railway_id != self._selected_railway_id:
            self._selected_railway_id = railway_id
            logger.debug(f"Selected railway -> {railway_id}")
            self.selection_changed.emit(railway_id)
        return True

    def clear_selection(self) -> bool:
        return self.select_railway(None)

    def cycle_border_style(self) -> BorderStyle:
        """Advances to the next border style and returns it."""
        self._border_style = self._border_style.next()
        self.border_style_changed.emit(self._border_style)
        return self._border_style
