"""
Map Data Types.

Value objects exchanged between the editor and the map engine: hit-test
results, railway and station info records, render options and the abstract
render primitives handed to the renderer.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple, Union


class BorderStyle(IntEnum):
    """Line style of a border edge."""

    DOTTED = 0
    THIN = 1
    BOLD = 2

    def next(self) -> "BorderStyle":
        """Returns the following style, wrapping around."""
        return BorderStyle((self.value + 1) % len(BorderStyle))


class StationLevel(IntEnum):
    LOCAL = 0
    MAJOR = 1
    REGIONAL_HUB = 2
    CITY_HUB = 3


class RailwayLevel(IntEnum):
    SUBWAY = 0
    REGIONAL = 1
    WIDE_AREA = 2
    INTERCITY = 3


@dataclass(frozen=True)
class StationInfo:
    """Editable attributes of a station."""

    name: str
    level: int = StationLevel.LOCAL


@dataclass(frozen=True)
class RailwayInfo:
    """
    Editable attributes of a railway.

    Attributes:
        name: Display name.
        color: Packed 0xRRGGBB colour.
        level: RailwayLevel value.
    """

    name: str
    color: int = 0x000000
    level: int = RailwayLevel.REGIONAL

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.color >> 16) & 0xFF, (self.color >> 8) & 0xFF, self.color & 0xFF


@dataclass(frozen=True)
class NearestSegment:
    """
    Result of a railway hit-test.

    Attributes:
        point_index: The existing point index, or the index a new point would
            be inserted before when ``is_insertion_point`` is True.
        is_insertion_point: True if the pointer is near a segment rather than
            an existing point.
    """

    point_index: int
    is_insertion_point: bool = False


@dataclass(frozen=True)
class BorderPointRef:
    """Hit-test result naming a single border point."""

    point_id: int


@dataclass(frozen=True)
class BorderEdgeRef:
    """Hit-test result naming the border edge between two points."""

    first_id: int
    second_id: int


BorderFeature = Union[BorderPointRef, BorderEdgeRef]


@dataclass(frozen=True)
class StationRef:
    """A station-bearing point on a railway."""

    railway_id: int
    point_index: int


@dataclass(frozen=True)
class ViewportRailwayList:
    """Railways with at least one segment crossing the viewport."""

    ids: List[int] = field(default_factory=list)
    names: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class StationListOnRailway:
    """
    Stations along a railway in point order.

    Attributes:
        names: Station names.
        cumulative_distances: World-unit distance along the railway from its
            first point to each station.
    """

    names: List[str] = field(default_factory=list)
    cumulative_distances: List[float] = field(default_factory=list)


# --- Overlay hints ---


@dataclass(frozen=True)
class PointPreview:
    """Temporary preview of a railway point being moved or inserted."""

    railway_id: int
    target: NearestSegment
    pointer_x: int
    pointer_y: int


@dataclass(frozen=True)
class BorderFeaturePreview:
    """Temporary preview of a border point or edge being dragged."""

    target: BorderFeature
    pointer_x: int
    pointer_y: int


@dataclass(frozen=True)
class BorderEdgePreview:
    """Temporary preview of a new border edge from an anchor to the pointer."""

    anchor_id: int
    style: BorderStyle
    pointer_x: int
    pointer_y: int


OverlayHint = Union[PointPreview, BorderFeaturePreview, BorderEdgePreview]


@dataclass(frozen=True)
class RenderOptions:
    """
    Rendering switches passed to the map engine.

    Attributes:
        selected_railway_id: Railway drawn with point markers, if any.
        overlay: At most one in-progress gesture preview.
        show_border_markers: Draw a marker on every visible border point.
    """

    selected_railway_id: Optional[int] = None
    overlay: Optional[OverlayHint] = None
    show_border_markers: bool = False


# --- Render primitives ---


@dataclass
class LineBatch:
    """
    Screen-space line segments sharing one stroke.

    Attributes:
        color: Packed 0xRRGGBB colour.
        width: Pen width in pixels.
        dashed: Draw with a dotted pen.
        segments: (x0, y0, x1, y1) tuples in pixels.
    """

    color: int
    width: int
    dashed: bool = False
    segments: List[Tuple[int, int, int, int]] = field(default_factory=list)


@dataclass(frozen=True)
class StationLabel:
    name: str
    x: int
    y: int


@dataclass
class RenderPrimitives:
    """Abstract drawing instructions produced by the map engine."""

    lines: List[LineBatch] = field(default_factory=list)
    markers: List[Tuple[int, int]] = field(default_factory=list)
    labels: List[StationLabel] = field(default_factory=list)
