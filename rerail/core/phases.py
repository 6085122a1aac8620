"""
Interaction Phases.

One frozen dataclass per phase of the interaction state machine. Each phase
carries only the data its gesture needs; pointer positions are screen pixels.
"""

from dataclasses import dataclass
from typing import Union

from rerail.core.map_types import BorderFeature, BorderStyle, NearestSegment


@dataclass(frozen=True)
class Idle:
    """No gesture in progress."""


@dataclass(frozen=True)
class PanningViewport:
    """
    Dragging the viewport.

    Attributes:
        anchor_x: Pointer X at gesture start.
        anchor_y: Pointer Y at gesture start.
        origin_x: Viewport world_top_x at gesture start.
        origin_y: Viewport world_top_y at gesture start.
    """

    anchor_x: int
    anchor_y: int
    origin_x: int
    origin_y: int


@dataclass(frozen=True)
class DraggingPoint:
    """
    Moving an existing railway point or placing an inserted one.

    Attributes:
        railway_id: The selected railway.
        target: The hit point, or the segment a new point is inserted into.
        pointer_x: Live pointer X.
        pointer_y: Live pointer Y.
    """

    railway_id: int
    target: NearestSegment
    pointer_x: int
    pointer_y: int


@dataclass(frozen=True)
class LinkingStation:
    """
    Pressed on a railway point in station mode.

    A release without movement opens the station dialog; a drag links the
    point to the station under the release position.

    Attributes:
        railway_id: The selected railway.
        point_index: Index of the pressed point.
        press_x: Pointer X at press.
        press_y: Pointer Y at press.
        pointer_x: Live pointer X.
        pointer_y: Live pointer Y.
        moved: Set once the pointer travelled past the drag threshold.
    """

    railway_id: int
    point_index: int
    press_x: int
    press_y: int
    pointer_x: int
    pointer_y: int
    moved: bool = False


@dataclass(frozen=True)
class DraggingBorderFeature:
    """
    Moving a border point, or splitting a border edge with a new point.

    Attributes:
        target: The pressed border point or edge.
        pointer_x: Live pointer X.
        pointer_y: Live pointer Y.
    """

    target: BorderFeature
    pointer_x: int
    pointer_y: int


@dataclass(frozen=True)
class AddingBorderEdge:
    """
    Rubber-banding a new border edge from an existing border point (Ctrl).

    Attributes:
        anchor_id: Border point the edge starts at.
        style: Edge style captured when the gesture started.
        pointer_x: Live pointer X.
        pointer_y: Live pointer Y.
    """

    anchor_id: int
    style: BorderStyle
    pointer_x: int
    pointer_y: int


@dataclass(frozen=True)
class DrawingNewRailway:
    """
    Appending points to a freshly created railway.

    Left presses append, a right press finishes. A right press while the
    draft still has a single point deletes it again.

    Attributes:
        railway_id: The draft railway.
        point_count: Points placed so far; the next one is appended here.
    """

    railway_id: int
    point_count: int


@dataclass(frozen=True)
class AwaitingDialog:
    """
    A station gesture suspended on the station dialog.

    Attributes:
        railway_id: Railway of the clicked point.
        point_index: Index of the clicked point.
        had_station: Whether the point was linked to a station when opened.
    """

    railway_id: int
    point_index: int
    had_station: bool


Phase = Union[
    Idle,
    PanningViewport,
    DraggingPoint,
    LinkingStation,
    DraggingBorderFeature,
    AddingBorderEdge,
    DrawingNewRailway,
    AwaitingDialog,
]

# Phases that end like a pointer-up when the pointer leaves the canvas.
RELEASE_ON_LEAVE = (PanningViewport, DraggingPoint, DraggingBorderFeature)
