"""
Qt Renderer Module.

Draws RenderPrimitives onto a QPainter. The renderer keeps no state between
calls; everything it draws comes from the primitives it is given.
"""

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPen

from rerail.core.map_types import RenderPrimitives

MARKER_SIZE_PX = 10
LABEL_FONT_PX = 16


class QtRenderer:
    """
    Renderer implementation for a QPainter surface.
    """

    def __init__(self) -> None:
        self.label_font = QFont("Sans Serif")
        self.label_font.setPixelSize(LABEL_FONT_PX)
        self.marker_pen = QPen(Qt.GlobalColor.black, 1)

    def draw(
        self,
        surface: QPainter,
        width_px: int,
        height_px: int,
        primitives: RenderPrimitives,
    ) -> None:
        """
        Paints a full frame.

        Args:
            surface: Active painter of the canvas.
            width_px: Canvas width.
            height_px: Canvas height.
            primitives: What to draw, in screen pixels.
        """
        painter = surface
        painter.fillRect(0, 0, width_px, height_px, Qt.GlobalColor.white)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)

        for batch in primitives.lines:
            pen = QPen(QColor(f"#{batch.color & 0xFFFFFF:06x}"), batch.width)
            if batch.dashed:
                pen.setStyle(Qt.PenStyle.DotLine)
            painter.setPen(pen)
            for x0, y0, x1, y1 in batch.segments:
                painter.drawLine(x0, y0, x1, y1)

        # Markers: hollow squares centred on the point
        half = MARKER_SIZE_PX // 2
        painter.setPen(self.marker_pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        for x, y in primitives.markers:
            painter.drawRect(x - half, y - half, MARKER_SIZE_PX, MARKER_SIZE_PX)

        painter.setFont(self.label_font)
        painter.setPen(Qt.GlobalColor.black)
        for label in primitives.labels:
            painter.drawText(label.x, label.y, label.name)
