"""
Main Window Module.

Assembles the editor: map document, tool mode manager, interaction state
machine, render driver, map canvas, railway list dock and mode toolbar.
"""

import logging
from typing import Dict, Optional

from PySide6.QtCore import QSettings, Qt
from PySide6.QtGui import QAction, QActionGroup, QCloseEvent, QKeySequence
from PySide6.QtWidgets import QDockWidget, QLabel, QMainWindow, QWidget

from rerail.app.constants import (
    CONFIRM_DELETE_RAILWAY,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    DOCK_OBJ_RAILWAYS,
    DOCK_TITLE_RAILWAYS,
    HOTKEY_EDIT_BORDERS,
    HOTKEY_EDIT_RAILWAY,
    HOTKEY_EDIT_STATION,
    HOTKEY_NEW_RAILWAY,
    HOTKEY_PAN,
    SETTINGS_GEOMETRY_KEY,
    SETTINGS_WINDOW_STATE_KEY,
    STATUS_MESSAGE_TIMEOUT_MS,
    STATUS_MODE_REFUSED,
    TOOLBAR_OBJ_MODES,
    TOOLBAR_TITLE_MODES,
    WINDOW_SETTINGS_APP,
    WINDOW_SETTINGS_KEY,
    WINDOW_TITLE,
)
from rerail.commands.map_commands import RemoveRailwayCommand, SetRailwayInfoCommand
from rerail.core.editor_config import DEFAULT_ZOOM_LEVEL_INDEX, EditorConfig
from rerail.core.errors import InvalidReference, OutOfRangeZoom
from rerail.core.interaction import InteractionStateMachine
from rerail.core.map_document import MapDocument
from rerail.core.map_types import BorderStyle, RailwayInfo
from rerail.core.protocols import DialogService, MapEngine
from rerail.core.railway_map import RailwayMap
from rerail.core.tool_mode import ToolMode, ToolModeManager
from rerail.core.viewport import Viewport
from rerail.gui.dialog_coordinator import DialogCoordinator
from rerail.gui.render_driver import RenderDriver
from rerail.gui.renderer import QtRenderer
from rerail.gui.widgets.map_canvas import MapCanvas
from rerail.gui.widgets.railway_list import RailwayListWidget

logger = logging.getLogger(__name__)

MODE_ACTIONS = (
    (ToolMode.PAN, "Move", HOTKEY_PAN),
    (ToolMode.EDIT_RAILWAY, "Edit Railway", HOTKEY_EDIT_RAILWAY),
    (ToolMode.EDIT_STATION, "Edit Station", HOTKEY_EDIT_STATION),
    (ToolMode.EDIT_BORDERS, "Edit Borders", HOTKEY_EDIT_BORDERS),
    (ToolMode.NEW_RAILWAY, "New Railway", HOTKEY_NEW_RAILWAY),
)

BORDER_STYLE_LABELS = {
    BorderStyle.DOTTED: "Border: Dotted",
    BorderStyle.THIN: "Border: Thin",
    BorderStyle.BOLD: "Border: Bold",
}


class MainWindow(QMainWindow):
    """
    The main application window.
    """

    def __init__(
        self,
        snapshot: Optional[MapEngine] = None,
        config: Optional[EditorConfig] = None,
        dialogs: Optional[DialogService] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        """
        Initializes the window and wires the editor components together.

        Args:
            snapshot: Initial map. Defaults to an empty RailwayMap.
            config: Editor configuration. Defaults to EditorConfig().
            dialogs: Dialog service. Defaults to a DialogCoordinator owned by
                this window.
            parent: Parent widget.
        """
        super().__init__(parent)
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.config = config or EditorConfig()
        if snapshot is None:
            snapshot = RailwayMap.empty()
        self.document = MapDocument(snapshot)
        self.tools = ToolModeManager()
        self.dialogs = dialogs if dialogs is not None else DialogCoordinator(self)
        self.machine = InteractionStateMachine(
            self.document,
            self.tools,
            self.dialogs,
            self._initial_viewport(),
            self.config,
        )
        self.driver = RenderDriver(self.document, self.tools, self.machine, QtRenderer())

        self.canvas = MapCanvas(self.machine, self.tools, self.driver, self)
        self.setCentralWidget(self.canvas)

        self.mode_actions: Dict[ToolMode, QAction] = {}
        self._create_toolbar()
        self._create_railway_dock()
        self._create_status_bar()

        self.document.map_changed.connect(self.refresh_railway_list)
        self.document.command_failed.connect(self._on_command_failed)
        self.machine.viewport_changed.connect(self.refresh_railway_list)
        self.tools.selection_changed.connect(self.refresh_railway_list)
        self.tools.mode_changed.connect(self._sync_mode_actions)
        self.tools.border_style_changed.connect(self._sync_border_style_action)

        self._restore_settings()
        self.refresh_railway_list()
        self.canvas.setFocus()
        logger.info("Main window initialized")

    def _initial_viewport(self) -> Viewport:
        config = self.config
        try:
            return Viewport(
                config.initial_top_x,
                config.initial_top_y,
                DEFAULT_WINDOW_HEIGHT,
                DEFAULT_WINDOW_WIDTH,
                config.initial_zoom_level,
            )
        except OutOfRangeZoom as e:
            logger.warning(f"{e}; using zoom level {DEFAULT_ZOOM_LEVEL_INDEX}")
            return Viewport(
                config.initial_top_x,
                config.initial_top_y,
                DEFAULT_WINDOW_HEIGHT,
                DEFAULT_WINDOW_WIDTH,
                DEFAULT_ZOOM_LEVEL_INDEX,
            )

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------

    def _create_toolbar(self) -> None:
        toolbar = self.addToolBar(TOOLBAR_TITLE_MODES)
        toolbar.setObjectName(TOOLBAR_OBJ_MODES)

        self.mode_group = QActionGroup(self)
        self.mode_group.setExclusive(True)
        for mode, label, hotkey in MODE_ACTIONS:
            action = QAction(f"{label} ({hotkey})", self)
            action.setCheckable(True)
            action.setShortcut(QKeySequence(hotkey))
            action.setChecked(mode == self.tools.mode)
            action.triggered.connect(lambda checked=False, m=mode: self.request_mode(m))
            self.mode_group.addAction(action)
            toolbar.addAction(action)
            self.mode_actions[mode] = action

        toolbar.addSeparator()
        self.border_style_action = QAction(self)
        self.border_style_action.triggered.connect(self.tools.cycle_border_style)
        toolbar.addAction(self.border_style_action)
        self._sync_border_style_action(self.tools.border_style)

    def _create_railway_dock(self) -> None:
        self.railway_list = RailwayListWidget()
        self.railway_list.railway_selected.connect(self.request_selection)
        self.railway_list.settings_requested.connect(self.open_railway_settings)
        self.railway_list.station_list_requested.connect(self.open_station_list)
        self.railway_list.delete_requested.connect(self.request_railway_deletion)

        self.railway_dock = QDockWidget(DOCK_TITLE_RAILWAYS, self)
        self.railway_dock.setObjectName(DOCK_OBJ_RAILWAYS)
        self.railway_dock.setWidget(self.railway_list)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea, self.railway_dock)

    def _create_status_bar(self) -> None:
        self.zoom_label = QLabel()
        self.statusBar().addPermanentWidget(self.zoom_label)
        self.machine.viewport_changed.connect(self._update_zoom_label)
        self._update_zoom_label(self.machine.viewport)

    def _update_zoom_label(self, viewport: Viewport) -> None:
        self.zoom_label.setText(f"1 px = {viewport.zoom_factor} units")

    # ------------------------------------------------------------------
    # Tool mode and selection
    # ------------------------------------------------------------------

    def request_mode(self, mode: ToolMode) -> bool:
        """Switches tool mode; a refused switch restores the checked action."""
        accepted = self.tools.set_mode(mode)
        if not accepted:
            self.statusBar().showMessage(STATUS_MODE_REFUSED, STATUS_MESSAGE_TIMEOUT_MS)
        self._sync_mode_actions(self.tools.mode)
        return accepted

    def request_selection(self, railway_id: int) -> bool:
        accepted = self.tools.select_railway(railway_id)
        if not accepted:
            self.statusBar().showMessage(STATUS_MODE_REFUSED, STATUS_MESSAGE_TIMEOUT_MS)
        return accepted

    def _sync_mode_actions(self, mode: ToolMode) -> None:
        action = self.mode_actions.get(mode)
        if action is not None and not action.isChecked():
            action.setChecked(True)

    def _sync_border_style_action(self, style: BorderStyle) -> None:
        self.border_style_action.setText(BORDER_STYLE_LABELS[BorderStyle(style)])

    def refresh_railway_list(self, *_args) -> None:
        """Lists the railways visible in the current viewport."""
        railways = self.document.snapshot.railways_in_viewport(self.machine.viewport)
        self.railway_list.set_railways(railways, self.tools.selected_railway_id)

    # ------------------------------------------------------------------
    # Railway list requests
    # ------------------------------------------------------------------

    def _refuse_if_busy(self) -> bool:
        if self.machine.is_idle():
            return False
        logger.warning("Railway list request ignored: gesture in progress")
        self.statusBar().showMessage(STATUS_MODE_REFUSED, STATUS_MESSAGE_TIMEOUT_MS)
        return True

    def open_railway_settings(self, railway_id: int) -> None:
        """Opens the railway dialog and applies its result."""
        if self._refuse_if_busy():
            return
        try:
            info = self.document.snapshot.get_railway_info(railway_id)
        except InvalidReference as e:
            logger.error(f"Cannot edit railway: {e}")
            return
        self.dialogs.open_railway_dialog(
            info, lambda result: self._on_railway_settings(railway_id, result)
        )

    def _on_railway_settings(
        self, railway_id: int, result: Optional[RailwayInfo]
    ) -> None:
        if result is None:
            logger.debug(f"Railway {railway_id} settings cancelled")
            return
        self.document.execute(SetRailwayInfoCommand(railway_id, result))

    def open_station_list(self, railway_id: int) -> None:
        try:
            data = self.document.snapshot.station_list_on_railway(railway_id)
        except InvalidReference as e:
            logger.error(f"Cannot list stations: {e}")
            return
        self.dialogs.open_station_list_dialog(data)

    def request_railway_deletion(self, railway_id: int) -> None:
        """Asks for confirmation, then removes the railway."""
        if self._refuse_if_busy():
            return
        try:
            name = self.document.snapshot.get_railway_info(railway_id).name
        except InvalidReference as e:
            logger.error(f"Cannot delete railway: {e}")
            return
        self.dialogs.open_confirmation(
            CONFIRM_DELETE_RAILWAY.format(name=name),
            lambda confirmed: self._on_delete_confirmed(railway_id, confirmed),
        )

    def _on_delete_confirmed(self, railway_id: int, confirmed: bool) -> None:
        if not confirmed:
            return
        if self._refuse_if_busy():
            return
        result = self.document.execute(RemoveRailwayCommand(railway_id))
        if result.success and self.tools.selected_railway_id == railway_id:
            self.tools.clear_selection()

    def _on_command_failed(self, result) -> None:
        self.statusBar().showMessage(result.message, STATUS_MESSAGE_TIMEOUT_MS)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def _restore_settings(self) -> None:
        settings = QSettings(WINDOW_SETTINGS_KEY, WINDOW_SETTINGS_APP)
        geometry = settings.value(SETTINGS_GEOMETRY_KEY)
        if geometry:
            self.restoreGeometry(geometry)
        state = settings.value(SETTINGS_WINDOW_STATE_KEY)
        if state:
            self.restoreState(state)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Saves window geometry and dock layout."""
        settings = QSettings(WINDOW_SETTINGS_KEY, WINDOW_SETTINGS_APP)
        settings.setValue(SETTINGS_GEOMETRY_KEY, self.saveGeometry())
        settings.setValue(SETTINGS_WINDOW_STATE_KEY, self.saveState())
        logger.info("Window state saved")
        super().closeEvent(event)
