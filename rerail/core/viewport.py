"""
Viewport Coordinate System Module.

Handles translation between the two coordinate spaces of the editor:
1. World Coordinates: absolute integer positions on the unbounded map plane.
2. Screen Coordinates: pixel positions on the canvas, (0, 0) top-left.

A viewport is the world position of the canvas' top-left corner plus a zoom
level index into ZOOM_FACTORS (world units per screen pixel). All arithmetic
is exact integer arithmetic.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from rerail.core.errors import OutOfRangeZoom

ZOOM_FACTORS: Tuple[int, ...] = (
    1,
    2,
    5,
    10,
    20,
    50,
    100,
    200,
    500,
    1000,
    2000,
    5000,
    10000,
)


def zoom_level_factor(index: int) -> int:
    """
    Returns the world-units-per-pixel factor for a zoom level index.

    Args:
        index: Index into ZOOM_FACTORS.

    Returns:
        int: The zoom factor.

    Raises:
        OutOfRangeZoom: If the index is outside the table.
    """
    if not 0 <= index < len(ZOOM_FACTORS):
        raise OutOfRangeZoom(index)
    return ZOOM_FACTORS[index]


@dataclass(frozen=True)
class Viewport:
    """
    The visible region of the world plane.

    Attributes:
        world_top_x: World X of the top-left pixel.
        world_top_y: World Y of the top-left pixel.
        height_px: Canvas height in pixels.
        width_px: Canvas width in pixels.
        zoom_level_index: Index into ZOOM_FACTORS.
    """

    world_top_x: int
    world_top_y: int
    height_px: int
    width_px: int
    zoom_level_index: int

    def __post_init__(self) -> None:
        zoom_level_factor(self.zoom_level_index)

    @property
    def zoom_factor(self) -> int:
        """World units per screen pixel."""
        return ZOOM_FACTORS[self.zoom_level_index]

    @property
    def world_bottom_y(self) -> int:
        return self.world_top_y + self.height_px * self.zoom_factor

    @property
    def world_right_x(self) -> int:
        return self.world_top_x + self.width_px * self.zoom_factor


def screen_to_world(viewport: Viewport, px: int, py: int) -> Tuple[int, int]:
    """
    Converts a screen pixel position to world coordinates.

    Args:
        viewport: The current viewport.
        px: Pixel X on the canvas.
        py: Pixel Y on the canvas.

    Returns:
        Tuple[int, int]: (world_x, world_y).
    """
    factor = viewport.zoom_factor
    return viewport.world_top_x + px * factor, viewport.world_top_y + py * factor


def world_to_screen(viewport: Viewport, wx: int, wy: int) -> Tuple[int, int]:
    """
    Converts world coordinates to a screen pixel position.

    Positions between pixels are floored, so the result is the pixel that
    contains the world point.

    Args:
        viewport: The current viewport.
        wx: World X.
        wy: World Y.

    Returns:
        Tuple[int, int]: (pixel_x, pixel_y), possibly outside the canvas.
    """
    factor = viewport.zoom_factor
    return (wx - viewport.world_top_x) // factor, (wy - viewport.world_top_y) // factor


def pan_by(viewport: Viewport, dx_px: int, dy_px: int) -> Viewport:
    """
    Moves the viewport by a screen-pixel delta.

    The delta is scaled by the current zoom factor so that panning speed is
    visually constant at every zoom level.

    Args:
        viewport: The viewport to pan.
        dx_px: Horizontal delta in pixels.
        dy_px: Vertical delta in pixels.

    Returns:
        Viewport: The panned viewport.
    """
    factor = viewport.zoom_factor
    return replace(
        viewport,
        world_top_x=viewport.world_top_x + dx_px * factor,
        world_top_y=viewport.world_top_y + dy_px * factor,
    )


def zoom_at(viewport: Viewport, px: int, py: int, direction: int) -> Viewport:
    """
    Steps the zoom level by one, keeping the world point under the pointer fixed.

    A negative direction zooms in (smaller factor), a positive one zooms out.
    Requests beyond either end of the zoom table return the viewport unchanged.

    Args:
        viewport: The viewport to zoom.
        px: Pointer X in pixels.
        py: Pointer Y in pixels.
        direction: -1 to zoom in, +1 to zoom out.

    Returns:
        Viewport: The zoomed viewport, or the same viewport if out of range.
    """
    if direction == 0:
        return viewport
    step = 1 if direction > 0 else -1
    new_index = viewport.zoom_level_index + step
    if not 0 <= new_index < len(ZOOM_FACTORS):
        return viewport

    old_factor = viewport.zoom_factor
    new_factor = ZOOM_FACTORS[new_index]
    return replace(
        viewport,
        world_top_x=viewport.world_top_x + px * (old_factor - new_factor),
        world_top_y=viewport.world_top_y + py * (old_factor - new_factor),
        zoom_level_index=new_index,
    )


def resize(viewport: Viewport, width_px: int, height_px: int) -> Viewport:
    """Returns the viewport with a new canvas size; the top-left stays fixed."""
    return replace(viewport, width_px=max(0, width_px), height_px=max(0, height_px))
