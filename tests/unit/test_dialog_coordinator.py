"""
Unit tests for DialogCoordinator.
"""

import pytest

from rerail.core.map_types import RailwayInfo, StationInfo, StationListOnRailway
from rerail.core.protocols import DialogKind
from rerail.gui.dialog_coordinator import DialogCoordinator
from rerail.gui.dialogs.confirmation_dialog import ConfirmationDialog
from rerail.gui.dialogs.station_list_dialog import StationListDialog


@pytest.fixture
def coordinator(qapp):
    coordinator = DialogCoordinator()
    yield coordinator
    for kind in DialogKind:
        coordinator.cancel_pending(kind)


@pytest.mark.unit
class TestStationDialog:
    def test_accept_delivers_edited_info(self, coordinator):
        results = []
        coordinator.open_station_dialog(StationInfo("Old", 1), results.append)
        dialog = coordinator.pending_dialog(DialogKind.STATION)
        assert dialog.isVisible()

        dialog.name_edit.setText("New ")
        dialog.accept()

        assert results == [StationInfo("New", 1)]
        assert coordinator.has_pending() is False

    def test_reject_delivers_none(self, coordinator):
        results = []
        coordinator.open_station_dialog(StationInfo("Old"), results.append)

        coordinator.pending_dialog(DialogKind.STATION).reject()

        assert results == [None]

    def test_second_dialog_supersedes_first(self, coordinator):
        first, second = [], []
        coordinator.open_station_dialog(StationInfo("A"), first.append)
        coordinator.open_station_dialog(StationInfo("B"), second.append)

        assert first == [None]
        assert second == []
        dialog = coordinator.pending_dialog(DialogKind.STATION)
        assert dialog.name_edit.text() == "B"

        dialog.accept()
        assert first == [None]
        assert second == [StationInfo("B")]

    def test_cancel_pending_delivers_nothing(self, coordinator):
        results = []
        coordinator.open_station_dialog(StationInfo("A"), results.append)

        coordinator.cancel_pending(DialogKind.STATION)

        assert results == []
        assert coordinator.pending_dialog(DialogKind.STATION) is None

    def test_cancel_without_pending_dialog(self, coordinator):
        coordinator.cancel_pending(DialogKind.STATION)
        assert coordinator.has_pending() is False


def test_railway_dialog_result(coordinator):
    results = []
    coordinator.open_railway_dialog(RailwayInfo("Coast", 0x1E88E5, 2), results.append)
    dialog = coordinator.pending_dialog(DialogKind.RAILWAY)

    dialog.set_color(0x00FF00)
    dialog.accept()

    assert results == [RailwayInfo("Coast", 0x00FF00, 2)]


def test_kinds_are_independent(coordinator):
    stations, railways = [], []
    coordinator.open_station_dialog(StationInfo("A"), stations.append)
    coordinator.open_railway_dialog(RailwayInfo("R"), railways.append)

    assert stations == []
    assert coordinator.pending_dialog(DialogKind.STATION) is not None
    assert coordinator.pending_dialog(DialogKind.RAILWAY) is not None


class TestConfirmation:
    def test_yes_delivers_true(self, coordinator):
        results = []
        coordinator.open_confirmation("Delete?", results.append)
        dialog = coordinator.pending_dialog(DialogKind.CONFIRMATION)
        assert isinstance(dialog, ConfirmationDialog)
        assert dialog.message_label.text() == "Delete?"

        dialog.accept()
        assert results == [True]

    def test_no_delivers_false(self, coordinator):
        results = []
        coordinator.open_confirmation("Delete?", results.append)
        coordinator.pending_dialog(DialogKind.CONFIRMATION).reject()
        assert results == [False]

    def test_superseded_confirmation_is_false(self, coordinator):
        results = []
        coordinator.open_confirmation("First?", results.append)
        coordinator.open_confirmation("Second?", lambda _: None)
        assert results == [False]


def test_station_list_dialog(coordinator):
    data = StationListOnRailway(names=["A", "B"], cumulative_distances=[0.0, 2500.0])

    coordinator.open_station_list_dialog(data)

    dialog = coordinator.pending_dialog(DialogKind.STATION_LIST)
    assert isinstance(dialog, StationListDialog)
    assert dialog.table.rowCount() == 2
    dialog.reject()
    assert coordinator.has_pending() is False
