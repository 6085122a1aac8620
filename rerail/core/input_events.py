"""
Input Event Types.

Toolkit-independent pointer events consumed by the interaction state machine.
Modifier state travels on each event rather than being tracked separately.
"""

from dataclasses import dataclass
from enum import Enum


class PointerButton(Enum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


@dataclass(frozen=True)
class PointerEvent:
    """
    A pointer press, move or release at a canvas pixel.

    Attributes:
        x: Pixel X relative to the canvas.
        y: Pixel Y relative to the canvas.
        button: Button that triggered a press/release; NONE for moves.
        shift: Shift held when the event fired.
        ctrl: Ctrl (Cmd on macOS) held when the event fired.
    """

    x: int
    y: int
    button: PointerButton = PointerButton.LEFT
    shift: bool = False
    ctrl: bool = False


@dataclass(frozen=True)
class WheelEvent:
    """
    A wheel step at a canvas pixel.

    Attributes:
        x: Pixel X relative to the canvas.
        y: Pixel Y relative to the canvas.
        direction: -1 to zoom in, +1 to zoom out.
    """

    x: int
    y: int
    direction: int
