"""
Geometry Utilities.

Integer-coordinate helpers used by the reference map engine:
- Squared distances between points and from a point to a segment
- Axis-aligned rectangle containment and segment crossing tests
- Station tick segments drawn across a railway at a station point
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

Coord = Tuple[int, int]


def distance_sq_points(a: Coord, b: Coord) -> int:
    """Returns the squared Euclidean distance between two points."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def distance_sq_point_segment(a: Coord, b: Coord, p: Coord) -> float:
    """
    Returns the squared distance from point p to the segment a-b.

    Args:
        a: Segment start.
        b: Segment end.
        p: Query point.

    Returns:
        float: Squared distance. Equals the point distance when a == b.
    """
    ax, ay = a
    bx, by = b
    px, py = p
    vx, vy = bx - ax, by - ay
    length_sq = vx * vx + vy * vy
    if length_sq == 0:
        return float(distance_sq_points(a, p))

    t = ((px - ax) * vx + (py - ay) * vy) / length_sq
    t = max(0.0, min(1.0, t))
    cx = ax + t * vx
    cy = ay + t * vy
    return (px - cx) ** 2 + (py - cy) ** 2


def segment_length(a: Coord, b: Coord) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def _crosses_vertical_line(
    ax: int, ay: int, bx: int, by: int, x: int, ylo: int, yhi: int
) -> bool:
    # Does segment a-b cross the open vertical segment x, (ylo, yhi)?
    if ax == bx:
        return False
    if not min(ax, bx) <= x <= max(ax, bx):
        return False
    # y * (bx - ax) at the crossing, kept in integers
    t = (x - ax) * (by - ay) + ay * (bx - ax)
    if ax < bx:
        return ylo * (bx - ax) < t < yhi * (bx - ax)
    return ylo * (bx - ax) > t > yhi * (bx - ax)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with exclusive bounds."""

    top: int
    bottom: int
    left: int
    right: int

    def contains(self, p: Coord) -> bool:
        return self.top < p[1] < self.bottom and self.left < p[0] < self.right

    def crosses_segment(self, a: Coord, b: Coord) -> bool:
        """True if any part of segment a-b lies inside the rectangle."""
        if self.contains(a) or self.contains(b):
            return True
        ax, ay = a
        bx, by = b
        return (
            _crosses_vertical_line(ax, ay, bx, by, self.left, self.top, self.bottom)
            or _crosses_vertical_line(ax, ay, bx, by, self.right, self.top, self.bottom)
            or _crosses_vertical_line(ay, ax, by, bx, self.top, self.left, self.right)
            or _crosses_vertical_line(ay, ax, by, bx, self.bottom, self.left, self.right)
        )


def station_tick(
    prev: Optional[Coord], current: Coord, nxt: Optional[Coord], half_length: int
) -> Tuple[Coord, Coord]:
    """
    Computes a short segment across the railway at a station point.

    The tick is perpendicular to the direction from the previous to the next
    point (or to the single adjacent segment at the railway's ends).

    Args:
        prev: Previous point on the railway, if any.
        current: The station point.
        nxt: Next point on the railway, if any.
        half_length: Half of the tick length in world units.

    Returns:
        Tuple[Coord, Coord]: The two tick end points.
    """
    start = prev if prev is not None else current
    end = nxt if nxt is not None else current
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    norm = math.hypot(dx, dy)
    if norm == 0:
        return (current[0] - half_length, current[1]), (current[0] + half_length, current[1])

    ox = round(-dy / norm * half_length)
    oy = round(dx / norm * half_length)
    return (current[0] - ox, current[1] - oy), (current[0] + ox, current[1] + oy)
