"""
Railway Dialog Module.

Edits the name, line colour and level of a railway.
"""

import logging
from typing import Optional

from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QButtonGroup,
    QColorDialog,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGroupBox,
    QLineEdit,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from rerail.core.map_types import RailwayInfo, RailwayLevel

logger = logging.getLogger(__name__)

RAILWAY_LEVEL_LABELS = {
    RailwayLevel.SUBWAY: "Subway",
    RailwayLevel.REGIONAL: "Regional line",
    RailwayLevel.WIDE_AREA: "Wide-area line",
    RailwayLevel.INTERCITY: "Intercity line",
}


class RailwayDialog(QDialog):
    """
    A dialog for editing railway settings.

    The colour button opens a QColorDialog and shows the chosen colour as
    its label and background.
    """

    def __init__(
        self, initial: RailwayInfo, parent: Optional[QWidget] = None
    ) -> None:
        """
        Initializes the dialog.

        Args:
            initial: The railway's current settings.
            parent: Parent widget.
        """
        super().__init__(parent)
        self.setWindowTitle("Railway Settings")
        self.setMinimumWidth(360)

        self._color = initial.color & 0xFFFFFF

        main_layout = QVBoxLayout(self)
        form_layout = QFormLayout()

        self.name_edit = QLineEdit(initial.name)
        form_layout.addRow("Name:", self.name_edit)

        self.color_button = QPushButton()
        self.color_button.clicked.connect(self._choose_color)
        form_layout.addRow("Colour:", self.color_button)
        main_layout.addLayout(form_layout)
        self._update_color_button()

        level_group = QGroupBox("Level")
        level_layout = QVBoxLayout(level_group)
        self.level_buttons = QButtonGroup(self)
        for level, label in RAILWAY_LEVEL_LABELS.items():
            button = QRadioButton(label)
            self.level_buttons.addButton(button, int(level))
            level_layout.addWidget(button)
        selected = self.level_buttons.button(int(initial.level))
        if selected is None:
            selected = self.level_buttons.button(int(RailwayLevel.REGIONAL))
        selected.setChecked(True)
        main_layout.addWidget(level_group)

        self.button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)
        main_layout.addWidget(self.button_box)

    @property
    def color(self) -> int:
        return self._color

    def set_color(self, color: int) -> None:
        """Sets the packed 0xRRGGBB colour shown by the dialog."""
        self._color = color & 0xFFFFFF
        self._update_color_button()

    def _choose_color(self) -> None:
        chosen = QColorDialog.getColor(
            QColor(f"#{self._color:06x}"), self, "Railway Colour"
        )
        if chosen.isValid():
            self.set_color(chosen.rgb())
        else:
            logger.debug("Colour selection cancelled")

    def _update_color_button(self) -> None:
        hex_name = f"#{self._color:06x}"
        self.color_button.setText(hex_name)
        self.color_button.setStyleSheet(f"background-color: {hex_name};")

    def get_info(self) -> RailwayInfo:
        """Returns the edited railway settings."""
        return RailwayInfo(
            name=self.name_edit.text().strip(),
            color=self._color,
            level=self.level_buttons.checkedId(),
        )
