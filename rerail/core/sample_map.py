"""
Sample Map Builder.

Builds a small map around the default world origin, used for the demo
startup mode and as a shared test fixture.
"""

from rerail.core.editor_config import DEFAULT_WORLD_ORIGIN
from rerail.core.map_types import (
    BorderStyle,
    RailwayInfo,
    RailwayLevel,
    StationInfo,
    StationRef,
)
from rerail.core.railway_map import RailwayMap

O = DEFAULT_WORLD_ORIGIN


def build_sample_map() -> RailwayMap:
    """
    Returns a map with two railways sharing a station and a border triangle.

    Railway 0 ("Coast Line") runs east with stations at both ends; railway 1
    ("Hill Line") runs south from the coast line's western terminus and
    shares its station.
    """
    m = RailwayMap.empty()

    m, coast = m.create_railway(
        RailwayInfo("Coast Line", 0x1E88E5, RailwayLevel.WIDE_AREA), O + 5000, O + 5000
    )
    m = m.insert_point(coast, 1, O + 15000, O + 5000)
    m = m.insert_point(coast, 2, O + 25000, O + 7500)
    m = m.set_station_info(coast, 0, StationInfo("West Harbour", 2))
    m = m.set_station_info(coast, 2, StationInfo("East Cape", 1))

    m, hill = m.create_railway(
        RailwayInfo("Hill Line", 0xE53935, RailwayLevel.REGIONAL), O + 5000, O + 5000
    )
    m = m.insert_point(hill, 1, O + 5000, O + 20000)
    m = m.link_existing_point_to_station(hill, 0, StationRef(coast, 0))

    m, a = m.add_border_point(O + 2500, O + 2500)
    m = m.connect_new_border_point(a, O + 30000, O + 2500, BorderStyle.THIN)
    b = m.next_border_point_id - 1
    m = m.connect_new_border_point(b, O + 30000, O + 25000, BorderStyle.DOTTED)
    c = m.next_border_point_id - 1
    m = m.connect_existing_border_points(c, a, BorderStyle.BOLD)
    return m
