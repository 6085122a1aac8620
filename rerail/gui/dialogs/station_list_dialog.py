"""
Station List Dialog Module.

Read-only table of the stations along a railway with their distance from the
first point in kilometres.
"""

from typing import Optional

from PySide6.QtWidgets import (
    QAbstractItemView,
    QDialog,
    QDialogButtonBox,
    QHeaderView,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from rerail.core.map_types import StationListOnRailway

# World units per kilometre.
UNITS_PER_KM = 1000


def format_km(distance: float) -> str:
    """Formats a world-unit distance as kilometres with two decimals."""
    return f"{distance / UNITS_PER_KM:.2f}"


class StationListDialog(QDialog):
    def __init__(
        self,
        data: StationListOnRailway,
        title: str = "Station List",
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setMinimumSize(360, 400)

        layout = QVBoxLayout(self)

        self.table = QTableWidget(len(data.names), 2)
        self.table.setHorizontalHeaderLabels(["Station", "Distance (km)"])
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(
            0, QHeaderView.ResizeMode.Stretch
        )
        for row, (name, distance) in enumerate(
            zip(data.names, data.cumulative_distances)
        ):
            self.table.setItem(row, 0, QTableWidgetItem(name))
            self.table.setItem(row, 1, QTableWidgetItem(format_km(distance)))
        layout.addWidget(self.table)

        self.button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        self.button_box.rejected.connect(self.reject)
        layout.addWidget(self.button_box)
