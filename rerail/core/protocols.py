"""
Protocol Interfaces for Loose Coupling.

This module defines Protocol interfaces (PEP 544) for the collaborators of the
interaction state machine: the map engine, the renderer and the dialog
service. Any class implementing the required methods satisfies the protocol
without explicit inheritance, which lets tests substitute fakes.
"""

from enum import Enum
from typing import Any, Callable, Optional, Protocol, Tuple, runtime_checkable

from rerail.core.map_types import (
    BorderFeature,
    BorderStyle,
    NearestSegment,
    RailwayInfo,
    RenderOptions,
    RenderPrimitives,
    StationInfo,
    StationListOnRailway,
    StationRef,
    ViewportRailwayList,
)
from rerail.core.viewport import Viewport


@runtime_checkable
class MapEngine(Protocol):
    """
    Contract the editor requires from a map snapshot.

    Query methods are side-effect free. Mutation methods never modify the
    snapshot they are called on; they return a new snapshot and raise
    InvalidReference when a referenced id or index does not exist.
    """

    # --- Queries ---

    def render(self, viewport: Viewport, options: RenderOptions) -> RenderPrimitives:
        ...

    def railways_in_viewport(self, viewport: Viewport) -> ViewportRailwayList:
        ...

    def find_nearest_segment(
        self, viewport: Viewport, railway_id: int, px: int, py: int, threshold_px: int
    ) -> Optional[NearestSegment]:
        ...

    def find_nearest_border_feature(
        self, viewport: Viewport, px: int, py: int, threshold_px: int
    ) -> Optional[BorderFeature]:
        ...

    def find_nearest_station(
        self,
        viewport: Viewport,
        px: int,
        py: int,
        threshold_px: int,
        exclude: Optional[StationRef] = None,
    ) -> Optional[StationRef]:
        ...

    def get_station_info(
        self, railway_id: int, point_index: int
    ) -> Optional[StationInfo]:
        ...

    def get_railway_info(self, railway_id: int) -> RailwayInfo:
        ...

    def number_of_points(self, railway_id: int) -> int:
        ...

    def station_list_on_railway(self, railway_id: int) -> StationListOnRailway:
        ...

    # --- Mutations ---

    def insert_point(self, railway_id: int, index: int, x: int, y: int) -> "MapEngine":
        ...

    def move_point(self, railway_id: int, index: int, x: int, y: int) -> "MapEngine":
        ...

    def remove_point(self, railway_id: int, index: int) -> "MapEngine":
        ...

    def set_station_info(
        self, railway_id: int, index: int, info: StationInfo
    ) -> "MapEngine":
        ...

    def detach_station(self, railway_id: int, index: int) -> "MapEngine":
        ...

    def link_existing_point_to_station(
        self, railway_id: int, index: int, target: StationRef
    ) -> "MapEngine":
        ...

    def set_railway_info(self, railway_id: int, info: RailwayInfo) -> "MapEngine":
        ...

    def create_railway(
        self, info: RailwayInfo, x: int, y: int
    ) -> Tuple["MapEngine", int]:
        ...

    def remove_railway(self, railway_id: int) -> "MapEngine":
        ...

    def add_border_point(self, x: int, y: int) -> Tuple["MapEngine", int]:
        ...

    def move_border_point(self, point_id: int, x: int, y: int) -> "MapEngine":
        ...

    def remove_border_point(self, point_id: int) -> "MapEngine":
        ...

    def remove_border_edge(self, first_id: int, second_id: int) -> "MapEngine":
        ...

    def insert_border_point_on_edge(
        self, first_id: int, second_id: int, x: int, y: int
    ) -> "MapEngine":
        ...

    def connect_existing_border_points(
        self, first_id: int, second_id: int, style: BorderStyle
    ) -> "MapEngine":
        ...

    def connect_new_border_point(
        self, anchor_id: int, x: int, y: int, style: BorderStyle
    ) -> "MapEngine":
        ...


@runtime_checkable
class Renderer(Protocol):
    """Stateless translation of render primitives into drawing calls."""

    def draw(
        self, surface: Any, width_px: int, height_px: int, primitives: RenderPrimitives
    ) -> None:
        ...


class DialogKind(Enum):
    STATION = "station"
    RAILWAY = "railway"
    STATION_LIST = "station_list"
    CONFIRMATION = "confirmation"


@runtime_checkable
class DialogService(Protocol):
    """
    Asynchronous modal dialogs.

    Each ``open_*`` call returns immediately; the result is delivered later
    through ``on_result``. ``None`` means the dialog was cancelled.
    """

    def open_station_dialog(
        self, initial: StationInfo, on_result: Callable[[Optional[StationInfo]], None]
    ) -> None:
        ...

    def open_railway_dialog(
        self, initial: RailwayInfo, on_result: Callable[[Optional[RailwayInfo]], None]
    ) -> None:
        ...

    def open_station_list_dialog(self, data: StationListOnRailway) -> None:
        ...

    def open_confirmation(
        self, message: str, on_result: Callable[[bool], None]
    ) -> None:
        ...

    def cancel_pending(self, kind: DialogKind) -> None:
        ...
