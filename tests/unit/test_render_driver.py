"""
Unit tests for the render driver and the Qt renderer.
"""

from unittest.mock import MagicMock

import pytest
from PySide6.QtGui import QColor, QImage, QPainter

from rerail.core.input_events import PointerButton, PointerEvent
from rerail.core.interaction import InteractionStateMachine
from rerail.core.map_document import MapDocument
from rerail.core.map_types import (
    BorderEdgePreview,
    BorderFeaturePreview,
    BorderPointRef,
    BorderStyle,
    LineBatch,
    NearestSegment,
    PointPreview,
    RenderPrimitives,
)
from rerail.core.phases import (
    AddingBorderEdge,
    DraggingBorderFeature,
    DraggingPoint,
    Idle,
    LinkingStation,
)
from rerail.core.tool_mode import ToolMode, ToolModeManager
from rerail.gui.render_driver import RenderDriver, build_render_request, overlay_for_phase
from rerail.gui.renderer import QtRenderer


@pytest.mark.unit
class TestOverlayForPhase:
    def test_dragging_point(self):
        phase = DraggingPoint(0, NearestSegment(2, False), 5, 6)
        assert overlay_for_phase(phase) == PointPreview(0, NearestSegment(2, False), 5, 6)

    def test_dragging_border_feature(self):
        phase = DraggingBorderFeature(BorderPointRef(1), 7, 8)
        assert overlay_for_phase(phase) == BorderFeaturePreview(BorderPointRef(1), 7, 8)

    def test_adding_border_edge(self):
        phase = AddingBorderEdge(0, BorderStyle.BOLD, 3, 4)
        assert overlay_for_phase(phase) == BorderEdgePreview(0, BorderStyle.BOLD, 3, 4)

    def test_other_phases_have_no_overlay(self):
        assert overlay_for_phase(Idle()) is None
        assert overlay_for_phase(LinkingStation(0, 1, 0, 0, 0, 0)) is None


@pytest.mark.unit
class TestBuildRenderRequest:
    def test_selection_passed_through(self, viewport):
        request = build_render_request(viewport, ToolMode.EDIT_RAILWAY, 3, Idle())
        assert request.viewport is viewport
        assert request.options.selected_railway_id == 3
        assert request.options.show_border_markers is False
        assert request.options.overlay is None

    def test_border_mode_hides_selection(self, viewport):
        request = build_render_request(viewport, ToolMode.EDIT_BORDERS, 3, Idle())
        assert request.options.selected_railway_id is None
        assert request.options.show_border_markers is True


@pytest.fixture
def wired(sample_map, viewport, fake_dialogs):
    document = MapDocument(sample_map)
    tools = ToolModeManager()
    machine = InteractionStateMachine(document, tools, fake_dialogs, viewport)
    renderer = MagicMock()
    driver = RenderDriver(document, tools, machine, renderer)
    return document, tools, machine, renderer, driver


def test_draw_builds_first_frame(wired):
    _, _, _, renderer, driver = wired
    surface = object()

    driver.draw(surface, 800, 600)

    assert driver.primitives is not None
    renderer.draw.assert_called_once_with(surface, 800, 600, driver.primitives)


def test_selection_change_refreshes_frame(qtbot, wired):
    _, tools, _, _, driver = wired

    with qtbot.waitSignal(driver.frame_ready) as blocker:
        tools.select_railway(0)

    assert blocker.args == [driver.primitives]
    assert {(100, 100), (300, 100), (500, 150)} <= set(driver.primitives.markers)


def test_map_change_refreshes_frame(qtbot, wired):
    document, _, _, _, driver = wired
    with qtbot.waitSignal(driver.frame_ready):
        document.replace(document.snapshot.remove_railway(0))
    colors = {batch.color for batch in driver.primitives.lines}
    assert 0x1E88E5 not in colors


def test_drag_preview_follows_pointer(wired):
    _, tools, machine, _, driver = wired
    tools.set_mode(ToolMode.EDIT_RAILWAY)
    tools.select_railway(0)

    machine.on_pointer_down(PointerEvent(500, 150, PointerButton.LEFT))
    machine.on_pointer_move(PointerEvent(520, 160, PointerButton.NONE))

    assert driver.current_request().options.overlay == PointPreview(
        0, NearestSegment(2, False), 520, 160
    )
    assert (520, 160) in driver.primitives.markers
    assert (500, 150) not in driver.primitives.markers


def test_viewport_change_refreshes_frame(qtbot, wired):
    _, _, machine, _, driver = wired
    with qtbot.waitSignal(driver.frame_ready):
        machine.set_canvas_size(400, 300)
    assert driver.current_request().viewport.width_px == 400


class TestQtRenderer:
    @pytest.fixture
    def image(self, qapp):
        image = QImage(200, 100, QImage.Format.Format_RGB32)
        image.fill(QColor("black"))
        return image

    def paint(self, image, primitives):
        painter = QPainter(image)
        try:
            QtRenderer().draw(painter, image.width(), image.height(), primitives)
        finally:
            painter.end()

    def test_background_is_cleared(self, image):
        self.paint(image, RenderPrimitives())
        assert image.pixelColor(150, 80) == QColor("white")

    def test_line_batch_colour(self, image):
        batch = LineBatch(color=0xFF0000, width=4, segments=[(10, 10, 100, 10)])
        self.paint(image, RenderPrimitives(lines=[batch]))
        assert image.pixelColor(50, 10) == QColor(255, 0, 0)
        assert image.pixelColor(50, 60) == QColor("white")
