"""
Dialog Coordinator.

Opens the editor's modal dialogs without blocking the event loop. Each
``open_*`` call shows the dialog with ``QDialog.open()`` and returns at once;
the result reaches the caller later through a continuation callback.

Only one dialog of a kind is pending at a time. Opening a second dialog of the
same kind closes the first and resolves its continuation as cancelled.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from PySide6.QtCore import QObject
from PySide6.QtWidgets import QDialog, QWidget

from rerail.core.map_types import RailwayInfo, StationInfo, StationListOnRailway
from rerail.core.protocols import DialogKind
from rerail.gui.dialogs.confirmation_dialog import ConfirmationDialog
from rerail.gui.dialogs.railway_dialog import RailwayDialog
from rerail.gui.dialogs.station_dialog import StationDialog
from rerail.gui.dialogs.station_list_dialog import StationListDialog

logger = logging.getLogger(__name__)


@dataclass
class _PendingDialog:
    dialog: QDialog
    on_result: Callable[[Any], None]
    cancelled_value: Any = None


class DialogCoordinator(QObject):
    """
    Qt implementation of the DialogService protocol.

    Attributes:
        parent_widget: Window the dialogs are modal to.
    """

    def __init__(self, parent_widget: Optional[QWidget] = None) -> None:
        super().__init__()
        self.parent_widget = parent_widget
        self._pending: Dict[DialogKind, _PendingDialog] = {}

    def pending_dialog(self, kind: DialogKind) -> Optional[QDialog]:
        """Returns the open dialog of a kind, or None."""
        pending = self._pending.get(kind)
        return pending.dialog if pending is not None else None

    def has_pending(self) -> bool:
        return bool(self._pending)

    # ------------------------------------------------------------------
    # DialogService
    # ------------------------------------------------------------------

    def open_station_dialog(
        self, initial: StationInfo, on_result: Callable[[Optional[StationInfo]], None]
    ) -> None:
        dialog = StationDialog(initial, self.parent_widget)
        self._open(DialogKind.STATION, dialog, dialog.get_info, on_result)

    def open_railway_dialog(
        self, initial: RailwayInfo, on_result: Callable[[Optional[RailwayInfo]], None]
    ) -> None:
        dialog = RailwayDialog(initial, self.parent_widget)
        self._open(DialogKind.RAILWAY, dialog, dialog.get_info, on_result)

    def open_station_list_dialog(
        self, data: StationListOnRailway, title: str = "Station List"
    ) -> None:
        """Shows the station table; there is no result to deliver."""
        dialog = StationListDialog(data, title, self.parent_widget)
        self._open(DialogKind.STATION_LIST, dialog, lambda: None, lambda _: None)

    def open_confirmation(self, message: str, on_result: Callable[[bool], None]) -> None:
        dialog = ConfirmationDialog(message, self.parent_widget)
        self._open(
            DialogKind.CONFIRMATION,
            dialog,
            lambda: True,
            on_result,
            cancelled_value=False,
        )

    def cancel_pending(self, kind: DialogKind) -> None:
        """
        Closes the pending dialog of a kind without delivering a result.

        Args:
            kind: The dialog kind to discard. Missing dialogs are ignored.
        """
        pending = self._pending.pop(kind, None)
        if pending is None:
            return
        logger.debug(f"Discarding pending {kind.value} dialog")
        pending.dialog.reject()
        pending.dialog.deleteLater()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _open(
        self,
        kind: DialogKind,
        dialog: QDialog,
        extract: Callable[[], Any],
        on_result: Callable[[Any], None],
        cancelled_value: Any = None,
    ) -> None:
        superseded = self._pending.pop(kind, None)
        if superseded is not None:
            logger.info(f"Replacing pending {kind.value} dialog")
            superseded.dialog.reject()
            superseded.dialog.deleteLater()
            superseded.on_result(superseded.cancelled_value)

        pending = _PendingDialog(dialog, on_result, cancelled_value)
        self._pending[kind] = pending
        dialog.accepted.connect(lambda: self._resolve(kind, pending, extract()))
        dialog.rejected.connect(
            lambda: self._resolve(kind, pending, pending.cancelled_value)
        )
        logger.debug(f"Opening {kind.value} dialog")
        dialog.open()

    def _resolve(self, kind: DialogKind, pending: _PendingDialog, value: Any) -> None:
        if self._pending.get(kind) is not pending:
            # Already superseded or discarded.
            return
        del self._pending[kind]
        pending.dialog.deleteLater()
        logger.debug(f"{kind.value} dialog resolved: {value!r}")
        pending.on_result(value)
