"""
Railway Map Module.

Provides RailwayMap, an in-memory immutable map snapshot holding:
- Railways: named, coloured polylines whose points may link to stations
- Stations: named records shared by every railway point linked to them
- Border graph: border points connected by styled edges

Every mutation returns a new RailwayMap and leaves the receiver untouched.
Mutations referencing unknown ids or indices raise InvalidReference.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Tuple

from rerail.core.errors import InvalidReference
from rerail.core.geometry import (
    Coord,
    Rect,
    distance_sq_point_segment,
    distance_sq_points,
    segment_length,
    station_tick,
)
from rerail.core.map_types import (
    BorderEdgePreview,
    BorderEdgeRef,
    BorderFeature,
    BorderFeaturePreview,
    BorderPointRef,
    BorderStyle,
    LineBatch,
    NearestSegment,
    PointPreview,
    RailwayInfo,
    RailwayLevel,
    RenderOptions,
    RenderPrimitives,
    StationInfo,
    StationLabel,
    StationListOnRailway,
    StationRef,
    ViewportRailwayList,
)
from rerail.core.viewport import Viewport, world_to_screen

logger = logging.getLogger(__name__)

STATION_TICK_HALF_PX = 5
STATION_TICK_COLOR = 0x949494
STATION_TICK_WIDTH = 4
BORDER_COLOR = 0x000000

EdgeKey = Tuple[int, int]


def _edge_key(first_id: int, second_id: int) -> EdgeKey:
    return (first_id, second_id) if first_id < second_id else (second_id, first_id)


@dataclass(frozen=True)
class RailwayPoint:
    """A polyline vertex, optionally linked to a station."""

    x: int
    y: int
    station_id: Optional[int] = None

    @property
    def coord(self) -> Coord:
        return self.x, self.y


@dataclass(frozen=True)
class Railway:
    railway_id: int
    info: RailwayInfo
    points: Tuple[RailwayPoint, ...] = ()


@dataclass(frozen=True)
class BorderPoint:
    point_id: int
    x: int
    y: int

    @property
    def coord(self) -> Coord:
        return self.x, self.y


@dataclass(frozen=True, eq=False)
class RailwayMap:
    """
    Immutable railway map snapshot.

    The mapping attributes must be treated as read-only; mutation methods
    build fresh dictionaries for the snapshot they return.
    """

    railways: Dict[int, Railway] = field(default_factory=dict)
    stations: Dict[int, StationInfo] = field(default_factory=dict)
    border_points: Dict[int, BorderPoint] = field(default_factory=dict)
    border_edges: Dict[EdgeKey, BorderStyle] = field(default_factory=dict)
    next_railway_id: int = 0
    next_station_id: int = 0
    next_border_point_id: int = 0

    @classmethod
    def empty(cls) -> "RailwayMap":
        """Returns a map with no railways, stations or borders."""
        return cls()

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def _railway(self, railway_id: int) -> Railway:
        railway = self.railways.get(railway_id)
        if railway is None:
            raise InvalidReference("railway", railway_id)
        return railway

    def _point(self, railway_id: int, index: int) -> RailwayPoint:
        railway = self._railway(railway_id)
        if not 0 <= index < len(railway.points):
            raise InvalidReference("point", (railway_id, index))
        return railway.points[index]

    def _border_point(self, point_id: int) -> BorderPoint:
        point = self.border_points.get(point_id)
        if point is None:
            raise InvalidReference("border point", point_id)
        return point

    def _with_railway(self, railway: Railway, **changes) -> "RailwayMap":
        railways = dict(self.railways)
        railways[railway.railway_id] = railway
        return replace(self, railways=railways, **changes)

    def _with_points(
        self, railway: Railway, points: List[RailwayPoint]
    ) -> "RailwayMap":
        updated = self._with_railway(replace(railway, points=tuple(points)))
        return updated._pruned_stations()

    def _pruned_stations(self) -> "RailwayMap":
        # Drop stations that no railway point links to any more.
        used = {
            p.station_id
            for railway in self.railways.values()
            for p in railway.points
            if p.station_id is not None
        }
        if used.issuperset(self.stations.keys()):
            return self
        stations = {sid: info for sid, info in self.stations.items() if sid in used}
        return replace(self, stations=stations)

    def _station_points(self) -> Iterator[Tuple[int, int, RailwayPoint]]:
        for railway in self.railways.values():
            for index, point in enumerate(railway.points):
                if point.station_id is not None:
                    yield railway.railway_id, index, point

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def number_of_points(self, railway_id: int) -> int:
        """Returns the number of points on a railway."""
        return len(self._railway(railway_id).points)

    def get_railway_info(self, railway_id: int) -> RailwayInfo:
        return self._railway(railway_id).info

    def get_station_info(
        self, railway_id: int, point_index: int
    ) -> Optional[StationInfo]:
        """Returns the station linked to a railway point, or None."""
        point = self._point(railway_id, point_index)
        if point.station_id is None:
            return None
        return self.stations[point.station_id]

    def station_list_on_railway(self, railway_id: int) -> StationListOnRailway:
        """
        Lists the stations along a railway with their distance from its start.

        Args:
            railway_id: The railway to walk.

        Returns:
            StationListOnRailway: Names and cumulative world-unit distances.
        """
        railway = self._railway(railway_id)
        names: List[str] = []
        distances: List[float] = []
        travelled = 0.0
        for i, point in enumerate(railway.points):
            if i > 0:
                travelled += segment_length(railway.points[i - 1].coord, point.coord)
            if point.station_id is not None:
                names.append(self.stations[point.station_id].name)
                distances.append(travelled)
        return StationListOnRailway(names=names, cumulative_distances=distances)

    def railways_in_viewport(self, viewport: Viewport) -> ViewportRailwayList:
        """Lists railways with at least one point or segment in the viewport."""
        box = _bounding_rect(viewport)
        ids: List[int] = []
        names: List[str] = []
        for railway in self.railways.values():
            points = railway.points
            visible = any(box.contains(p.coord) for p in points[:1]) or any(
                box.crosses_segment(points[i - 1].coord, points[i].coord)
                for i in range(1, len(points))
            )
            if visible:
                ids.append(railway.railway_id)
                names.append(railway.info.name)
        return ViewportRailwayList(ids=ids, names=names)

    def find_nearest_segment(
        self, viewport: Viewport, railway_id: int, px: int, py: int, threshold_px: int
    ) -> Optional[NearestSegment]:
        """
        Hit-tests a railway at a screen position.

        Existing points take precedence over segments: a segment is only
        reported when no point lies within the threshold.

        Args:
            viewport: The current viewport.
            railway_id: Railway to test. Unknown ids produce no hit.
            px: Pointer X in pixels.
            py: Pointer Y in pixels.
            threshold_px: Maximum distance in pixels.

        Returns:
            Optional[NearestSegment]: The hit, or None.
        """
        railway = self.railways.get(railway_id)
        if railway is None:
            return None

        pointer = (px, py)
        limit = threshold_px * threshold_px
        screen = [world_to_screen(viewport, p.x, p.y) for p in railway.points]

        best: Optional[Tuple[float, int]] = None
        for i, coord in enumerate(screen):
            d = distance_sq_points(coord, pointer)
            if d <= limit and (best is None or d < best[0]):
                best = (d, i)
        if best is not None:
            return NearestSegment(point_index=best[1], is_insertion_point=False)

        for i in range(1, len(screen)):
            d = distance_sq_point_segment(screen[i - 1], screen[i], pointer)
            if d <= limit and (best is None or d < best[0]):
                best = (d, i)
        if best is not None:
            return NearestSegment(point_index=best[1], is_insertion_point=True)
        return None

    def find_nearest_border_feature(
        self, viewport: Viewport, px: int, py: int, threshold_px: int
    ) -> Optional[BorderFeature]:
        """Hit-tests the border graph, preferring points over edges."""
        pointer = (px, py)
        limit = threshold_px * threshold_px
        screen = {
            pid: world_to_screen(viewport, bp.x, bp.y)
            for pid, bp in self.border_points.items()
        }

        best_point: Optional[Tuple[int, int]] = None
        for pid in sorted(screen):
            d = distance_sq_points(screen[pid], pointer)
            if d <= limit and (best_point is None or d < best_point[0]):
                best_point = (d, pid)
        if best_point is not None:
            return BorderPointRef(best_point[1])

        best_edge: Optional[Tuple[float, EdgeKey]] = None
        for key in sorted(self.border_edges):
            d = distance_sq_point_segment(screen[key[0]], screen[key[1]], pointer)
            if d <= limit and (best_edge is None or d < best_edge[0]):
                best_edge = (d, key)
        if best_edge is not None:
            return BorderEdgeRef(*best_edge[1])
        return None

    def find_nearest_station(
        self,
        viewport: Viewport,
        px: int,
        py: int,
        threshold_px: int,
        exclude: Optional[StationRef] = None,
    ) -> Optional[StationRef]:
        """Finds the station-bearing railway point nearest to the pointer."""
        pointer = (px, py)
        limit = threshold_px * threshold_px
        best: Optional[Tuple[int, StationRef]] = None
        for railway_id, index, point in self._station_points():
            ref = StationRef(railway_id, index)
            if ref == exclude:
                continue
            d = distance_sq_points(world_to_screen(viewport, point.x, point.y), pointer)
            if d <= limit and (best is None or d < best[0]):
                best = (d, ref)
        return best[1] if best is not None else None

    # ------------------------------------------------------------------
    # Railway mutations
    # ------------------------------------------------------------------

    def insert_point(self, railway_id: int, index: int, x: int, y: int) -> "RailwayMap":
        """Inserts a new point before ``index`` (``index == len`` appends)."""
        railway = self._railway(railway_id)
        if not 0 <= index <= len(railway.points):
            raise InvalidReference("point", (railway_id, index))
        points = list(railway.points)
        points.insert(index, RailwayPoint(x, y))
        return self._with_points(railway, points)

    def move_point(self, railway_id: int, index: int, x: int, y: int) -> "RailwayMap":
        railway = self._railway(railway_id)
        point = self._point(railway_id, index)
        points = list(railway.points)
        points[index] = replace(point, x=x, y=y)
        return self._with_points(railway, points)

    def remove_point(self, railway_id: int, index: int) -> "RailwayMap":
        railway = self._railway(railway_id)
        self._point(railway_id, index)
        points = list(railway.points)
        del points[index]
        return self._with_points(railway, points)

    def set_station_info(
        self, railway_id: int, index: int, info: StationInfo
    ) -> "RailwayMap":
        """
        Names the station at a railway point, creating it if necessary.

        A station shared with other railways is renamed everywhere.
        """
        railway = self._railway(railway_id)
        point = self._point(railway_id, index)
        stations = dict(self.stations)
        if point.station_id is not None:
            stations[point.station_id] = info
            return replace(self, stations=stations)

        station_id = self.next_station_id
        stations[station_id] = info
        points = list(railway.points)
        points[index] = replace(point, station_id=station_id)
        return self._with_railway(
            replace(railway, points=tuple(points)),
            stations=stations,
            next_station_id=station_id + 1,
        )

    def detach_station(self, railway_id: int, index: int) -> "RailwayMap":
        railway = self._railway(railway_id)
        point = self._point(railway_id, index)
        if point.station_id is None:
            raise InvalidReference("station", (railway_id, index))
        points = list(railway.points)
        points[index] = replace(point, station_id=None)
        return self._with_points(railway, points)

    def link_existing_point_to_station(
        self, railway_id: int, index: int, target: StationRef
    ) -> "RailwayMap":
        """
        Links a railway point to the station at ``target``.

        The point snaps onto the target point's coordinates so that the shared
        station has a single location.
        """
        railway = self._railway(railway_id)
        point = self._point(railway_id, index)
        target_point = self._point(target.railway_id, target.point_index)
        if target_point.station_id is None:
            raise InvalidReference("station", target)

        linked = RailwayPoint(target_point.x, target_point.y, target_point.station_id)
        if linked == point:
            logger.debug(f"Point {railway_id}/{index} already linked to {target}")
            return self

        points = list(railway.points)
        points[index] = linked
        return self._with_points(railway, points)

    def set_railway_info(self, railway_id: int, info: RailwayInfo) -> "RailwayMap":
        railway = self._railway(railway_id)
        return self._with_railway(replace(railway, info=info))

    def create_railway(
        self, info: RailwayInfo, x: int, y: int
    ) -> Tuple["RailwayMap", int]:
        """
        Creates a railway with a single point.

        Returns:
            Tuple[RailwayMap, int]: The new snapshot and the railway id.
        """
        railway_id = self.next_railway_id
        railway = Railway(railway_id, info, (RailwayPoint(x, y),))
        return self._with_railway(railway, next_railway_id=railway_id + 1), railway_id

    def remove_railway(self, railway_id: int) -> "RailwayMap":
        self._railway(railway_id)
        railways = {rid: r for rid, r in self.railways.items() if rid != railway_id}
        return replace(self, railways=railways)._pruned_stations()

    # ------------------------------------------------------------------
    # Border mutations
    # ------------------------------------------------------------------

    def add_border_point(self, x: int, y: int) -> Tuple["RailwayMap", int]:
        """Adds an unconnected border point and returns its id."""
        point_id = self.next_border_point_id
        border_points = dict(self.border_points)
        border_points[point_id] = BorderPoint(point_id, x, y)
        updated = replace(
            self, border_points=border_points, next_border_point_id=point_id + 1
        )
        return updated, point_id

    def move_border_point(self, point_id: int, x: int, y: int) -> "RailwayMap":
        point = self._border_point(point_id)
        border_points = dict(self.border_points)
        border_points[point_id] = replace(point, x=x, y=y)
        return replace(self, border_points=border_points)

    def remove_border_point(self, point_id: int) -> "RailwayMap":
        """Removes a border point together with its incident edges."""
        self._border_point(point_id)
        border_points = {
            pid: bp for pid, bp in self.border_points.items() if pid != point_id
        }
        border_edges = {
            key: style
            for key, style in self.border_edges.items()
            if point_id not in key
        }
        return replace(self, border_points=border_points, border_edges=border_edges)

    def remove_border_edge(self, first_id: int, second_id: int) -> "RailwayMap":
        key = _edge_key(first_id, second_id)
        if key not in self.border_edges:
            raise InvalidReference("border edge", key)
        border_edges = {k: s for k, s in self.border_edges.items() if k != key}
        return replace(self, border_edges=border_edges)

    def insert_border_point_on_edge(
        self, first_id: int, second_id: int, x: int, y: int
    ) -> "RailwayMap":
        """Splits an edge with a new border point; both halves keep its style."""
        key = _edge_key(first_id, second_id)
        style = self.border_edges.get(key)
        if style is None:
            raise InvalidReference("border edge", key)

        updated, new_id = self.remove_border_edge(first_id, second_id).add_border_point(
            x, y
        )
        border_edges = dict(updated.border_edges)
        border_edges[_edge_key(first_id, new_id)] = style
        border_edges[_edge_key(new_id, second_id)] = style
        return replace(updated, border_edges=border_edges)

    def connect_existing_border_points(
        self, first_id: int, second_id: int, style: BorderStyle
    ) -> "RailwayMap":
        """Connects two border points; an existing edge takes the new style."""
        self._border_point(first_id)
        self._border_point(second_id)
        if first_id == second_id:
            raise InvalidReference("border edge", (first_id, second_id))
        border_edges = dict(self.border_edges)
        border_edges[_edge_key(first_id, second_id)] = BorderStyle(style)
        return replace(self, border_edges=border_edges)

    def connect_new_border_point(
        self, anchor_id: int, x: int, y: int, style: BorderStyle
    ) -> "RailwayMap":
        self._border_point(anchor_id)
        updated, new_id = self.add_border_point(x, y)
        return updated.connect_existing_border_points(anchor_id, new_id, style)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, viewport: Viewport, options: RenderOptions) -> RenderPrimitives:
        """
        Produces screen-space drawing primitives for the viewport.

        Args:
            viewport: The viewport to draw.
            options: Selection, overlay hint and marker switches.

        Returns:
            RenderPrimitives: Line batches, point markers and station labels.
        """
        out = RenderPrimitives()
        box = _bounding_rect(viewport)

        def to_screen(c: Coord) -> Coord:
            return world_to_screen(viewport, c[0], c[1])

        preview = options.overlay if isinstance(options.overlay, PointPreview) else None

        for railway in self.railways.values():
            selected = railway.railway_id == options.selected_railway_id
            batch = LineBatch(
                color=railway.info.color, width=_railway_width(railway.info, selected)
            )
            points = railway.points
            skipped_segments = set()
            hidden_point: Optional[int] = None

            previewing = preview is not None and preview.railway_id == railway.railway_id
            if selected and previewing:
                pointer = (preview.pointer_x, preview.pointer_y)
                out.markers.append(pointer)
                i = preview.target.point_index
                if preview.target.is_insertion_point:
                    skipped_segments.add(i)
                    neighbours = (i - 1, i)
                else:
                    skipped_segments.update((i, i + 1))
                    hidden_point = i
                    neighbours = (i - 1, i + 1)
                for n in neighbours:
                    if 0 <= n < len(points):
                        batch.segments.append(pointer + to_screen(points[n].coord))

            if selected:
                for i, p in enumerate(points):
                    if i != hidden_point and box.contains(p.coord):
                        out.markers.append(to_screen(p.coord))

            for i in range(1, len(points)):
                if i in skipped_segments:
                    continue
                a, b = points[i - 1].coord, points[i].coord
                if box.crosses_segment(a, b):
                    batch.segments.append(to_screen(a) + to_screen(b))

            if batch.segments:
                out.lines.append(batch)

        self._render_stations(out, box, to_screen)
        self._render_borders(out, box, to_screen, options)
        return out

    def _render_stations(self, out: RenderPrimitives, box: Rect, to_screen) -> None:
        ticks = LineBatch(color=STATION_TICK_COLOR, width=STATION_TICK_WIDTH)
        labelled = set()
        for railway in self.railways.values():
            points = railway.points
            for i, point in enumerate(points):
                if point.station_id is None or not box.contains(point.coord):
                    continue
                prev = to_screen(points[i - 1].coord) if i > 0 else None
                nxt = to_screen(points[i + 1].coord) if i + 1 < len(points) else None
                here = to_screen(point.coord)
                c0, c1 = station_tick(prev, here, nxt, STATION_TICK_HALF_PX)
                ticks.segments.append(c0 + c1)

                if point.station_id in labelled:
                    continue
                labelled.add(point.station_id)
                name = self.stations[point.station_id].name
                out.labels.append(StationLabel(name, here[0], here[1]))
        if ticks.segments:
            out.lines.append(ticks)

    def _render_borders(
        self, out: RenderPrimitives, box: Rect, to_screen, options: RenderOptions
    ) -> None:
        batches = {style: _border_batch(style) for style in BorderStyle}
        overlay = options.overlay
        dragged = overlay if isinstance(overlay, BorderFeaturePreview) else None
        pointer: Optional[Coord] = None
        if isinstance(overlay, (BorderFeaturePreview, BorderEdgePreview)):
            pointer = (overlay.pointer_x, overlay.pointer_y)
            out.markers.append(pointer)

        for key, style in self.border_edges.items():
            a = self.border_points[key[0]]
            b = self.border_points[key[1]]
            if dragged is not None:
                target = dragged.target
                if isinstance(target, BorderEdgeRef) and _edge_key(
                    target.first_id, target.second_id
                ) == key:
                    batches[style].segments.append(to_screen(a.coord) + pointer)
                    batches[style].segments.append(pointer + to_screen(b.coord))
                    continue
                if isinstance(target, BorderPointRef) and target.point_id in key:
                    other = b if target.point_id == a.point_id else a
                    batches[style].segments.append(pointer + to_screen(other.coord))
                    continue
            if box.crosses_segment(a.coord, b.coord):
                batches[style].segments.append(to_screen(a.coord) + to_screen(b.coord))

        if isinstance(overlay, BorderEdgePreview):
            anchor = self.border_points.get(overlay.anchor_id)
            if anchor is not None:
                batches[BorderStyle(overlay.style)].segments.append(
                    to_screen(anchor.coord) + pointer
                )

        if options.show_border_markers:
            hidden = (
                dragged.target.point_id
                if dragged is not None and isinstance(dragged.target, BorderPointRef)
                else None
            )
            for pid, bp in self.border_points.items():
                if pid != hidden and box.contains(bp.coord):
                    out.markers.append(to_screen(bp.coord))

        out.lines.extend(batch for batch in batches.values() if batch.segments)


def _bounding_rect(viewport: Viewport) -> Rect:
    return Rect(
        top=viewport.world_top_y,
        bottom=viewport.world_bottom_y,
        left=viewport.world_top_x,
        right=viewport.world_right_x,
    )


def _railway_width(info: RailwayInfo, selected: bool) -> int:
    width = 2 if info.level >= RailwayLevel.WIDE_AREA else 1
    return width + 1 if selected else width


def _border_batch(style: BorderStyle) -> LineBatch:
    if style == BorderStyle.DOTTED:
        return LineBatch(color=BORDER_COLOR, width=1, dashed=True)
    if style == BorderStyle.BOLD:
        return LineBatch(color=BORDER_COLOR, width=3)
    return LineBatch(color=BORDER_COLOR, width=1)
