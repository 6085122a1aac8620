"""
Station Dialog Module.

Edits the name and level of a station. Clearing the name and accepting
detaches the station from the clicked railway point.
"""

from typing import Optional

from PySide6.QtWidgets import (
    QButtonGroup,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGroupBox,
    QLineEdit,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from rerail.core.map_types import StationInfo, StationLevel

STATION_LEVEL_LABELS = {
    StationLevel.LOCAL: "Local station",
    StationLevel.MAJOR: "Major station",
    StationLevel.REGIONAL_HUB: "Regional hub",
    StationLevel.CITY_HUB: "City hub",
}


class StationDialog(QDialog):
    """
    A dialog for naming a station and choosing its level.
    """

    def __init__(
        self, initial: StationInfo, parent: Optional[QWidget] = None
    ) -> None:
        """
        Initializes the dialog.

        Args:
            initial: The station's current info (empty name for a new station).
            parent: Parent widget.
        """
        super().__init__(parent)
        self.setWindowTitle("Station Settings")
        self.setMinimumWidth(320)

        main_layout = QVBoxLayout(self)
        form_layout = QFormLayout()

        self.name_edit = QLineEdit(initial.name)
        self.name_edit.setPlaceholderText("Leave empty to remove the station")
        form_layout.addRow("Name:", self.name_edit)
        main_layout.addLayout(form_layout)

        # Level
        level_group = QGroupBox("Level")
        level_layout = QVBoxLayout(level_group)
        self.level_buttons = QButtonGroup(self)
        for level, label in STATION_LEVEL_LABELS.items():
            button = QRadioButton(label)
            self.level_buttons.addButton(button, int(level))
            level_layout.addWidget(button)
        selected = self.level_buttons.button(int(initial.level))
        if selected is None:
            selected = self.level_buttons.button(int(StationLevel.LOCAL))
        selected.setChecked(True)
        main_layout.addWidget(level_group)

        self.button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)
        main_layout.addWidget(self.button_box)

        self.name_edit.setFocus()

    def get_info(self) -> StationInfo:
        """Returns the edited station info."""
        return StationInfo(
            name=self.name_edit.text().strip(),
            level=self.level_buttons.checkedId(),
        )
