"""
Railway List Widget Module.

Lists the railways visible in the current viewport. Clicking a row selects the
railway; the context menu offers railway settings, the station list and
deletion.
"""

import logging
from typing import Optional

from PySide6.QtCore import QPoint, Qt, Signal
from PySide6.QtGui import QAction, QColor
from PySide6.QtWidgets import (
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMenu,
    QVBoxLayout,
    QWidget,
)

from rerail.core.map_types import ViewportRailwayList

logger = logging.getLogger(__name__)

SELECTED_BACKGROUND = "#ddddff"


class RailwayListWidget(QWidget):
    """
    A dumb widget that displays railway names and emits user requests.
    """

    railway_selected = Signal(int)  # railway_id
    settings_requested = Signal(int)  # railway_id
    station_list_requested = Signal(int)  # railway_id
    delete_requested = Signal(int)  # railway_id

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self.list_widget = QListWidget()
        self.list_widget.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        self.list_widget.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.list_widget.itemClicked.connect(self._on_item_clicked)
        self.list_widget.customContextMenuRequested.connect(self._on_context_menu)
        layout.addWidget(self.list_widget)

        self.empty_label = QLabel("No railways in view")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.empty_label)
        self.empty_label.hide()

    def set_railways(
        self, railways: ViewportRailwayList, selected_id: Optional[int]
    ) -> None:
        """
        Populates the list.

        Args:
            railways: Railways crossing the viewport.
            selected_id: Railway to highlight, if any.
        """
        self.list_widget.clear()
        if not railways.ids:
            self.list_widget.hide()
            self.empty_label.show()
            return

        self.list_widget.show()
        self.empty_label.hide()
        for railway_id, name in zip(railways.ids, railways.names):
            item = QListWidgetItem(name)
            item.setData(Qt.ItemDataRole.UserRole, railway_id)
            if railway_id == selected_id:
                item.setBackground(QColor(SELECTED_BACKGROUND))
            self.list_widget.addItem(item)

    def railway_ids(self) -> list:
        """Returns the listed railway ids in display order."""
        return [
            self.list_widget.item(row).data(Qt.ItemDataRole.UserRole)
            for row in range(self.list_widget.count())
        ]

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        self.railway_selected.emit(item.data(Qt.ItemDataRole.UserRole))

    def build_context_menu(self, railway_id: int) -> QMenu:
        """Creates the context menu for one railway row."""
        menu = QMenu(self)

        settings_action = QAction("Railway Settings...", menu)
        settings_action.triggered.connect(
            lambda: self.settings_requested.emit(railway_id)
        )
        menu.addAction(settings_action)

        stations_action = QAction("Station List...", menu)
        stations_action.triggered.connect(
            lambda: self.station_list_requested.emit(railway_id)
        )
        menu.addAction(stations_action)

        menu.addSeparator()
        delete_action = QAction("Delete Railway", menu)
        delete_action.triggered.connect(lambda: self.delete_requested.emit(railway_id))
        menu.addAction(delete_action)
        return menu

    def _on_context_menu(self, pos: QPoint) -> None:
        item = self.list_widget.itemAt(pos)
        if item is None:
            return
        railway_id = item.data(Qt.ItemDataRole.UserRole)
        logger.debug(f"Context menu for railway {railway_id}")
        menu = self.build_context_menu(railway_id)
        menu.exec(self.list_widget.viewport().mapToGlobal(pos))
        menu.deleteLater()
