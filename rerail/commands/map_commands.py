"""
Map Commands Module.

Provides one command class per map engine mutation:
- Railway points: InsertPointCommand, MovePointCommand, RemovePointCommand
- Stations: SetStationInfoCommand, DetachStationCommand, LinkStationCommand
- Railways: CreateRailwayCommand, SetRailwayInfoCommand, RemoveRailwayCommand
- Borders: AddBorderPointCommand, MoveBorderPointCommand,
  RemoveBorderPointCommand, RemoveBorderEdgeCommand,
  InsertBorderPointOnEdgeCommand, ConnectBorderPointsCommand,
  ConnectNewBorderPointCommand

Commands convert engine errors into failed CommandResult objects.
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, Tuple, Union

from rerail.commands.base_command import BaseCommand, CommandResult
from rerail.core.errors import RerailError
from rerail.core.map_types import BorderStyle, RailwayInfo, StationInfo, StationRef
from rerail.core.protocols import MapEngine

logger = logging.getLogger(__name__)


class MapEditCommand(BaseCommand):
    """
    Shared execute() for commands wrapping a single engine mutation.

    Subclasses implement _apply(), returning either the new snapshot or a
    (snapshot, created_id) tuple, and describe() for log messages.
    """

    @abstractmethod
    def _apply(self, snapshot: MapEngine) -> Union[MapEngine, Tuple[MapEngine, int]]:
        """
        Calls the engine mutation this command wraps.

        Args:
            snapshot (MapEngine): The snapshot to derive the new one from.

        Returns:
            The new snapshot, or (snapshot, created_id) for creations.

        Raises:
            RerailError: If the engine rejects the mutation.
        """

    @abstractmethod
    def describe(self) -> str:
        """Returns a lower-case summary such as "move point 2 on railway 0"."""

    def execute(self, snapshot: MapEngine) -> CommandResult:
        """
        Applies the mutation to the snapshot.

        Args:
            snapshot (MapEngine): The current map snapshot.

        Returns:
            CommandResult: On success ``data["map"]`` is the new snapshot and,
                           for creations, ``data["id"]`` the new id.
        """
        name = self.__class__.__name__
        try:
            logger.info(f"Executing {name}: {self.describe()}")
            outcome = self._apply(snapshot)
        except RerailError as e:
            logger.error(f"{name} failed: {e}")
            return CommandResult(
                success=False,
                message=f"Failed to {self.describe()}: {e}",
                command_name=name,
            )

        data: Dict[str, Any] = {}
        if isinstance(outcome, tuple):
            data["map"], data["id"] = outcome
        else:
            data["map"] = outcome
        self._is_executed = True
        return CommandResult(
            success=True,
            message=f"Done: {self.describe()}",
            command_name=name,
            data=data,
        )


# --- Railway points ---


class InsertPointCommand(MapEditCommand):
    """Inserts a railway point before ``index``."""

    def __init__(self, railway_id: int, index: int, x: int, y: int):
        """
        Initializes the InsertPointCommand.

        Args:
            railway_id (int): Railway to extend.
            index (int): Position of the new point; equal to the point count
                         to append.
            x (int): World X of the new point.
            y (int): World Y of the new point.
        """
        super().__init__()
        self.railway_id = railway_id
        self.index = index
        self.x = x
        self.y = y

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Inserts the point via MapEngine.insert_point."""
        return snapshot.insert_point(self.railway_id, self.index, self.x, self.y)

    def describe(self) -> str:
        """Returns "insert point <index> on railway <id>"."""
        return f"insert point {self.index} on railway {self.railway_id}"


class MovePointCommand(MapEditCommand):
    """Moves an existing railway point to new world coordinates."""

    def __init__(self, railway_id: int, index: int, x: int, y: int):
        """
        Initializes the MovePointCommand.

        Args:
            railway_id (int): Railway owning the point.
            index (int): Index of the point to move.
            x (int): New world X.
            y (int): New world Y.
        """
        super().__init__()
        self.railway_id = railway_id
        self.index = index
        self.x = x
        self.y = y

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Moves the point via MapEngine.move_point."""
        return snapshot.move_point(self.railway_id, self.index, self.x, self.y)

    def describe(self) -> str:
        """Returns "move point <index> on railway <id>"."""
        return f"move point {self.index} on railway {self.railway_id}"


class RemovePointCommand(MapEditCommand):
    """Removes a railway point, keeping the railway itself."""

    def __init__(self, railway_id: int, index: int):
        """
        Initializes the RemovePointCommand.

        Args:
            railway_id (int): Railway owning the point.
            index (int): Index of the point to remove.
        """
        super().__init__()
        self.railway_id = railway_id
        self.index = index

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Removes the point via MapEngine.remove_point."""
        return snapshot.remove_point(self.railway_id, self.index)

    def describe(self) -> str:
        """Returns "remove point <index> from railway <id>"."""
        return f"remove point {self.index} from railway {self.railway_id}"


# --- Stations ---


class SetStationInfoCommand(MapEditCommand):
    """Names (and if needed creates) the station at a railway point."""

    def __init__(self, railway_id: int, index: int, info: StationInfo):
        """
        Initializes the SetStationInfoCommand.

        Args:
            railway_id (int): Railway owning the point.
            index (int): Index of the point.
            info (StationInfo): Name and level to store; a shared station is
                                renamed on every railway.
        """
        super().__init__()
        self.railway_id = railway_id
        self.index = index
        self.info = info

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Stores the info via MapEngine.set_station_info."""
        return snapshot.set_station_info(self.railway_id, self.index, self.info)

    def describe(self) -> str:
        """Returns a summary naming the station and point."""
        return (
            f"set station '{self.info.name}' at point {self.index} "
            f"of railway {self.railway_id}"
        )


class DetachStationCommand(MapEditCommand):
    """Unlinks the station from a railway point."""

    def __init__(self, railway_id: int, index: int):
        """
        Initializes the DetachStationCommand.

        Args:
            railway_id (int): Railway owning the point.
            index (int): Index of a point that is linked to a station.
        """
        super().__init__()
        self.railway_id = railway_id
        self.index = index

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Detaches via MapEngine.detach_station."""
        return snapshot.detach_station(self.railway_id, self.index)

    def describe(self) -> str:
        """Returns "detach station at point <index> of railway <id>"."""
        return f"detach station at point {self.index} of railway {self.railway_id}"


class LinkStationCommand(MapEditCommand):
    """Links a railway point to the station of another point."""

    def __init__(self, railway_id: int, index: int, target: StationRef):
        """
        Initializes the LinkStationCommand.

        Args:
            railway_id (int): Railway owning the point to link.
            index (int): Index of the point to link.
            target (StationRef): A point that already carries the station.
        """
        super().__init__()
        self.railway_id = railway_id
        self.index = index
        self.target = target

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Links via MapEngine.link_existing_point_to_station."""
        return snapshot.link_existing_point_to_station(
            self.railway_id, self.index, self.target
        )

    def describe(self) -> str:
        """Returns a summary naming both points."""
        return (
            f"link point {self.index} of railway {self.railway_id} to station at "
            f"point {self.target.point_index} of railway {self.target.railway_id}"
        )


# --- Railways ---


class CreateRailwayCommand(MapEditCommand):
    """Creates a railway with one point; the new id is in ``data["id"]``."""

    def __init__(self, info: RailwayInfo, x: int, y: int):
        """
        Initializes the CreateRailwayCommand.

        Args:
            info (RailwayInfo): Name, color and level of the new railway.
            x (int): World X of its first point.
            y (int): World Y of its first point.
        """
        super().__init__()
        self.info = info
        self.x = x
        self.y = y

    def _apply(self, snapshot: MapEngine) -> Tuple[MapEngine, int]:
        """Creates via MapEngine.create_railway, returning the new id too."""
        return snapshot.create_railway(self.info, self.x, self.y)

    def describe(self) -> str:
        """Returns "create railway '<name>'"."""
        return f"create railway '{self.info.name}'"


class SetRailwayInfoCommand(MapEditCommand):
    """Replaces a railway's name, color and level."""

    def __init__(self, railway_id: int, info: RailwayInfo):
        """
        Initializes the SetRailwayInfoCommand.

        Args:
            railway_id (int): Railway to update.
            info (RailwayInfo): The new settings.
        """
        super().__init__()
        self.railway_id = railway_id
        self.info = info

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Updates via MapEngine.set_railway_info."""
        return snapshot.set_railway_info(self.railway_id, self.info)

    def describe(self) -> str:
        """Returns "update railway <id> to '<name>'"."""
        return f"update railway {self.railway_id} to '{self.info.name}'"


class RemoveRailwayCommand(MapEditCommand):
    """Deletes a railway with all of its points."""

    def __init__(self, railway_id: int):
        """
        Initializes the RemoveRailwayCommand.

        Args:
            railway_id (int): Railway to delete.
        """
        super().__init__()
        self.railway_id = railway_id

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Deletes via MapEngine.remove_railway."""
        return snapshot.remove_railway(self.railway_id)

    def describe(self) -> str:
        """Returns "remove railway <id>"."""
        return f"remove railway {self.railway_id}"


# --- Borders ---


class AddBorderPointCommand(MapEditCommand):
    """Adds an unconnected border point; the new id is in ``data["id"]``."""

    def __init__(self, x: int, y: int):
        """
        Initializes the AddBorderPointCommand.

        Args:
            x (int): World X of the new point.
            y (int): World Y of the new point.
        """
        super().__init__()
        self.x = x
        self.y = y

    def _apply(self, snapshot: MapEngine) -> Tuple[MapEngine, int]:
        """Adds via MapEngine.add_border_point, returning the new id too."""
        return snapshot.add_border_point(self.x, self.y)

    def describe(self) -> str:
        """Returns "add border point at (<x>, <y>)"."""
        return f"add border point at ({self.x}, {self.y})"


class MoveBorderPointCommand(MapEditCommand):
    """Moves a border point; its edges follow."""

    def __init__(self, point_id: int, x: int, y: int):
        """
        Initializes the MoveBorderPointCommand.

        Args:
            point_id (int): Border point to move.
            x (int): New world X.
            y (int): New world Y.
        """
        super().__init__()
        self.point_id = point_id
        self.x = x
        self.y = y

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Moves via MapEngine.move_border_point."""
        return snapshot.move_border_point(self.point_id, self.x, self.y)

    def describe(self) -> str:
        """Returns "move border point <id>"."""
        return f"move border point {self.point_id}"


class RemoveBorderPointCommand(MapEditCommand):
    """Removes a border point together with its edges."""

    def __init__(self, point_id: int):
        """
        Initializes the RemoveBorderPointCommand.

        Args:
            point_id (int): Border point to remove.
        """
        super().__init__()
        self.point_id = point_id

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Removes via MapEngine.remove_border_point."""
        return snapshot.remove_border_point(self.point_id)

    def describe(self) -> str:
        """Returns "remove border point <id>"."""
        return f"remove border point {self.point_id}"


class RemoveBorderEdgeCommand(MapEditCommand):
    """Removes the edge between two border points, keeping the points."""

    def __init__(self, first_id: int, second_id: int):
        """
        Initializes the RemoveBorderEdgeCommand.

        Args:
            first_id (int): One end of the edge.
            second_id (int): The other end; order does not matter.
        """
        super().__init__()
        self.first_id = first_id
        self.second_id = second_id

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Removes via MapEngine.remove_border_edge."""
        return snapshot.remove_border_edge(self.first_id, self.second_id)

    def describe(self) -> str:
        """Returns "remove border edge <first>-<second>"."""
        return f"remove border edge {self.first_id}-{self.second_id}"


class InsertBorderPointOnEdgeCommand(MapEditCommand):
    """Splits a border edge with a new point, keeping the edge's style."""

    def __init__(self, first_id: int, second_id: int, x: int, y: int):
        """
        Initializes the InsertBorderPointOnEdgeCommand.

        Args:
            first_id (int): One end of the edge to split.
            second_id (int): The other end.
            x (int): World X of the new point.
            y (int): World Y of the new point.
        """
        super().__init__()
        self.first_id = first_id
        self.second_id = second_id
        self.x = x
        self.y = y

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Splits via MapEngine.insert_border_point_on_edge."""
        return snapshot.insert_border_point_on_edge(
            self.first_id, self.second_id, self.x, self.y
        )

    def describe(self) -> str:
        """Returns "split border edge <first>-<second>"."""
        return f"split border edge {self.first_id}-{self.second_id}"


class ConnectBorderPointsCommand(MapEditCommand):
    """Adds an edge between two existing border points."""

    def __init__(self, first_id: int, second_id: int, style: BorderStyle):
        """
        Initializes the ConnectBorderPointsCommand.

        Args:
            first_id (int): One end of the new edge.
            second_id (int): The other end.
            style (BorderStyle): Line style of the edge.
        """
        super().__init__()
        self.first_id = first_id
        self.second_id = second_id
        self.style = style

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Connects via MapEngine.connect_existing_border_points."""
        return snapshot.connect_existing_border_points(
            self.first_id, self.second_id, self.style
        )

    def describe(self) -> str:
        """Returns a summary naming both points and the style."""
        return (
            f"connect border points {self.first_id}-{self.second_id} "
            f"({BorderStyle(self.style).name.lower()})"
        )


class ConnectNewBorderPointCommand(MapEditCommand):
    """Adds a border point connected to an existing one."""

    def __init__(self, anchor_id: int, x: int, y: int, style: BorderStyle):
        """
        Initializes the ConnectNewBorderPointCommand.

        Args:
            anchor_id (int): Existing border point the new edge starts at.
            x (int): World X of the new point.
            y (int): World Y of the new point.
            style (BorderStyle): Line style of the new edge.
        """
        super().__init__()
        self.anchor_id = anchor_id
        self.x = x
        self.y = y
        self.style = style

    def _apply(self, snapshot: MapEngine) -> MapEngine:
        """Connects via MapEngine.connect_new_border_point."""
        return snapshot.connect_new_border_point(
            self.anchor_id, self.x, self.y, self.style
        )

    def describe(self) -> str:
        """Returns "connect border point <id> to a new point"."""
        return f"connect border point {self.anchor_id} to a new point"
