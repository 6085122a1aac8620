"""
Unit tests for map edit commands.
"""

from unittest.mock import MagicMock

from rerail.commands.map_commands import (
    AddBorderPointCommand,
    ConnectBorderPointsCommand,
    ConnectNewBorderPointCommand,
    CreateRailwayCommand,
    DetachStationCommand,
    InsertBorderPointOnEdgeCommand,
    InsertPointCommand,
    LinkStationCommand,
    MoveBorderPointCommand,
    MovePointCommand,
    RemoveBorderEdgeCommand,
    RemoveBorderPointCommand,
    RemovePointCommand,
    RemoveRailwayCommand,
    SetRailwayInfoCommand,
    SetStationInfoCommand,
)
from rerail.core.errors import InvalidReference
from rerail.core.map_types import BorderStyle, RailwayInfo, StationInfo, StationRef


def test_insert_point_command(sample_map):
    """Test inserting a point via command."""
    cmd = InsertPointCommand(0, 1, 11, 12)
    result = cmd.execute(sample_map)

    assert result.success is True
    assert result.command_name == "InsertPointCommand"
    assert cmd.is_executed
    assert result.data["map"].number_of_points(0) == 4
    # The input snapshot is untouched
    assert sample_map.number_of_points(0) == 3


def test_move_point_command(sample_map):
    result = MovePointCommand(0, 2, 11, 12).execute(sample_map)
    assert result.success is True
    assert result.data["map"].railways[0].points[2].coord == (11, 12)


def test_remove_point_command(sample_map):
    result = RemovePointCommand(1, 1).execute(sample_map)
    assert result.success is True
    assert result.data["map"].number_of_points(1) == 1


def test_failed_command_reports_error(sample_map):
    """Test that engine errors become failed results."""
    cmd = RemovePointCommand(0, 10)
    result = cmd.execute(sample_map)

    assert result.success is False
    assert "remove point 10" in result.message
    assert "map" not in result.data
    assert not cmd.is_executed


def test_command_on_unknown_railway(sample_map):
    result = MovePointCommand(42, 0, 0, 0).execute(sample_map)
    assert result.success is False
    assert "Invalid railway reference" in result.message


def test_station_commands(sample_map):
    named = SetStationInfoCommand(0, 1, StationInfo("Midtown")).execute(sample_map)
    assert named.data["map"].get_station_info(0, 1) == StationInfo("Midtown")

    detached = DetachStationCommand(0, 1).execute(named.data["map"])
    assert detached.data["map"].get_station_info(0, 1) is None

    linked = LinkStationCommand(1, 1, StationRef(0, 2)).execute(sample_map)
    assert linked.success is True
    assert linked.data["map"].get_station_info(1, 1).name == "East Cape"


def test_create_railway_command_returns_id(sample_map):
    result = CreateRailwayCommand(RailwayInfo("Branch"), 1, 2).execute(sample_map)
    assert result.success is True
    assert result.data["id"] == 2
    assert result.data["map"].get_railway_info(2).name == "Branch"


def test_railway_info_and_removal(sample_map):
    info = RailwayInfo("Renamed", 0x123456, 0)
    renamed = SetRailwayInfoCommand(0, info).execute(sample_map)
    assert renamed.data["map"].get_railway_info(0) == info

    removed = RemoveRailwayCommand(0).execute(sample_map)
    assert 0 not in removed.data["map"].railways


def test_border_commands(sample_map):
    added = AddBorderPointCommand(5, 5).execute(sample_map)
    assert added.data["id"] == 3

    moved = MoveBorderPointCommand(3, 6, 6).execute(added.data["map"])
    assert moved.data["map"].border_points[3].coord == (6, 6)

    connected = ConnectBorderPointsCommand(3, 0, BorderStyle.BOLD).execute(
        moved.data["map"]
    )
    assert connected.data["map"].border_edges[(0, 3)] == BorderStyle.BOLD

    edge_removed = RemoveBorderEdgeCommand(0, 3).execute(connected.data["map"])
    assert (0, 3) not in edge_removed.data["map"].border_edges

    point_removed = RemoveBorderPointCommand(3).execute(edge_removed.data["map"])
    assert 3 not in point_removed.data["map"].border_points


def test_border_edge_commands(sample_map):
    split = InsertBorderPointOnEdgeCommand(0, 1, 7, 7).execute(sample_map)
    assert split.success is True
    assert (0, 1) not in split.data["map"].border_edges

    extended = ConnectNewBorderPointCommand(2, 8, 8, BorderStyle.THIN).execute(
        sample_map
    )
    assert extended.data["map"].border_edges[(2, 3)] == BorderStyle.THIN


def test_command_passes_arguments_to_engine():
    """Test that commands call the matching engine mutation."""
    engine = MagicMock()
    result = MovePointCommand(3, 2, 100, 200).execute(engine)

    engine.move_point.assert_called_once_with(3, 2, 100, 200)
    engine.insert_point.assert_not_called()
    assert result.data["map"] is engine.move_point.return_value


def test_engine_error_is_caught():
    engine = MagicMock()
    engine.remove_railway.side_effect = InvalidReference("railway", 7)

    result = RemoveRailwayCommand(7).execute(engine)

    assert result.success is False
    assert result.command_name == "RemoveRailwayCommand"
