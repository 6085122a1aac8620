"""
Unit tests for RailwayListWidget.
"""

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor

from rerail.core.map_types import ViewportRailwayList
from rerail.gui.widgets.railway_list import SELECTED_BACKGROUND, RailwayListWidget


@pytest.fixture
def railway_list(qtbot):
    widget = RailwayListWidget()
    qtbot.addWidget(widget)
    widget.show()
    return widget


def test_set_railways(railway_list):
    railway_list.set_railways(
        ViewportRailwayList(ids=[0, 1], names=["Coast Line", "Hill Line"]), 1
    )

    assert railway_list.railway_ids() == [0, 1]
    assert railway_list.list_widget.item(0).text() == "Coast Line"
    assert railway_list.list_widget.item(1).background().color() == QColor(
        SELECTED_BACKGROUND
    )
    assert railway_list.empty_label.isHidden()


def test_empty_list_shows_placeholder(railway_list):
    railway_list.set_railways(ViewportRailwayList(), None)
    assert railway_list.railway_ids() == []
    assert not railway_list.empty_label.isHidden()
    assert railway_list.list_widget.isHidden()


def test_click_selects_railway(qtbot, railway_list):
    railway_list.set_railways(ViewportRailwayList(ids=[4], names=["Branch"]), None)
    item = railway_list.list_widget.item(0)
    rect = railway_list.list_widget.visualItemRect(item)

    with qtbot.waitSignal(railway_list.railway_selected) as blocker:
        qtbot.mouseClick(
            railway_list.list_widget.viewport(), Qt.LeftButton, pos=rect.center()
        )

    assert blocker.args == [4]


@pytest.mark.parametrize(
    "index, signal_name",
    [
        (0, "settings_requested"),
        (1, "station_list_requested"),
        (3, "delete_requested"),
    ],
)
def test_context_menu_actions(qtbot, railway_list, index, signal_name):
    menu = railway_list.build_context_menu(7)
    action = menu.actions()[index]

    with qtbot.waitSignal(getattr(railway_list, signal_name)) as blocker:
        action.trigger()

    assert blocker.args == [7]


def test_context_menu_labels(railway_list):
    menu = railway_list.build_context_menu(0)
    labels = [a.text() for a in menu.actions() if not a.isSeparator()]
    assert labels == ["Railway Settings...", "Station List...", "Delete Railway"]
