"""
Interaction State Machine Module.

Interprets pointer, wheel and keyboard input on the map canvas. The machine
holds exactly one phase at a time (see rerail.core.phases); a gesture starts
on pointer-down, updates on pointer-move and ends on pointer-up or Escape.
A completed gesture issues at most one command to the map document.

Modifier meanings:
- Shift + left press pans in every tool mode.
- Ctrl + left press in border mode starts a new border edge from the border
  point under the pointer, or adds a lone border point on empty ground.
- Right press removes the railway point / border feature under the pointer,
  and ends drawing in new-railway mode.
"""

import logging
from dataclasses import replace
from typing import Optional

from PySide6.QtCore import QObject, Signal

from rerail.commands.base_command import BaseCommand, CommandResult
from rerail.commands.map_commands import (
    AddBorderPointCommand,
    ConnectBorderPointsCommand,
    ConnectNewBorderPointCommand,
    CreateRailwayCommand,
    DetachStationCommand,
    InsertBorderPointOnEdgeCommand,
    InsertPointCommand,
    LinkStationCommand,
    MoveBorderPointCommand,
    MovePointCommand,
    RemoveBorderEdgeCommand,
    RemoveBorderPointCommand,
    RemovePointCommand,
    RemoveRailwayCommand,
    SetStationInfoCommand,
)
from rerail.core.editor_config import EditorConfig
from rerail.core.errors import InvalidReference
from rerail.core.input_events import PointerButton, PointerEvent, WheelEvent
from rerail.core.map_document import MapDocument
from rerail.core.map_types import (
    BorderEdgeRef,
    BorderPointRef,
    RailwayInfo,
    StationInfo,
    StationRef,
)
from rerail.core.phases import (
    RELEASE_ON_LEAVE,
    AddingBorderEdge,
    AwaitingDialog,
    DraggingBorderFeature,
    DraggingPoint,
    DrawingNewRailway,
    Idle,
    LinkingStation,
    PanningViewport,
    Phase,
)
from rerail.core.protocols import DialogKind, DialogService
from rerail.core.tool_mode import ToolMode, ToolModeManager
from rerail.core.viewport import Viewport, pan_by, resize, screen_to_world, zoom_at

logger = logging.getLogger(__name__)

NEW_RAILWAY_NAME = "New Railway"


class InteractionStateMachine(QObject):
    """
    The gesture core of the editor.

    Signals:
        phase_changed: Emitted with the new phase after every transition or
                       live-pointer update.
        viewport_changed: Emitted with the new Viewport after pan, zoom or
                          resize.
    """

    phase_changed = Signal(object)
    viewport_changed = Signal(object)

    def __init__(
        self,
        document: MapDocument,
        tools: ToolModeManager,
        dialogs: DialogService,
        viewport: Viewport,
        config: Optional[EditorConfig] = None,
    ) -> None:
        """
        Args:
            document: Holder of the current map snapshot.
            tools: Tool mode and selection; mode changes are gated on this
                   machine being idle.
            dialogs: Dialog service used to suspend station gestures.
            viewport: The initial viewport.
            config: Interaction thresholds. Defaults to EditorConfig().
        """
        super().__init__()
        self._document = document
        self._tools = tools
        self._dialogs = dialogs
        self._viewport = viewport
        self._config = config or EditorConfig()
        self._phase: Phase = Idle()
        tools.bind_gesture_state(self.is_idle)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    def is_idle(self) -> bool:
        return isinstance(self._phase, Idle)

    def _enter(self, phase: Phase) -> None:
        if type(phase) is not type(self._phase):
            logger.debug(
                f"Phase {type(self._phase).__name__} -> {type(phase).__name__}"
            )
        self._phase = phase
        self.phase_changed.emit(phase)

    def _set_viewport(self, viewport: Viewport) -> None:
        self._viewport = viewport
        self.viewport_changed.emit(viewport)

    def set_canvas_size(self, width_px: int, height_px: int) -> None:
        """Updates the viewport's pixel size; allowed in any phase."""
        self._set_viewport(resize(self._viewport, width_px, height_px))

    def _world(self, px: int, py: int):
        return screen_to_world(self._viewport, px, py)

    def _commit(self, command: BaseCommand) -> CommandResult:
        result = self._document.execute(command)
        if not result.success:
            logger.error(f"Gesture aborted, map unchanged: {result.message}")
        return result

    # ------------------------------------------------------------------
    # Pointer down
    # ------------------------------------------------------------------

    def on_pointer_down(self, event: PointerEvent) -> None:
        """Starts a gesture, or continues drawing a new railway."""
        phase = self._phase
        if isinstance(phase, DrawingNewRailway):
            self._press_while_drawing(phase, event)
            return
        if not isinstance(phase, Idle):
            logger.debug(f"Ignoring press during {type(phase).__name__}")
            return

        mode = self._tools.mode
        if event.button == PointerButton.LEFT and (mode == ToolMode.PAN or event.shift):
            self._enter(
                PanningViewport(
                    anchor_x=event.x,
                    anchor_y=event.y,
                    origin_x=self._viewport.world_top_x,
                    origin_y=self._viewport.world_top_y,
                )
            )
        elif mode == ToolMode.EDIT_RAILWAY:
            self._press_edit_railway(event)
        elif mode == ToolMode.EDIT_STATION:
            self._press_edit_station(event)
        elif mode == ToolMode.EDIT_BORDERS:
            self._press_edit_borders(event)
        elif mode == ToolMode.NEW_RAILWAY:
            self._press_new_railway(event)

    def _press_edit_railway(self, event: PointerEvent) -> None:
        railway_id = self._tools.selected_railway_id
        if railway_id is None:
            return
        nearest = self._document.snapshot.find_nearest_segment(
            self._viewport, railway_id, event.x, event.y, self._config.hit_threshold_px
        )
        if nearest is None:
            logger.debug(f"No point of railway {railway_id} near ({event.x}, {event.y})")
            return

        if event.button == PointerButton.RIGHT:
            if not nearest.is_insertion_point:
                self._remove_railway_point(railway_id, nearest.point_index)
        elif event.button == PointerButton.LEFT:
            self._enter(DraggingPoint(railway_id, nearest, event.x, event.y))

    def _remove_railway_point(self, railway_id: int, index: int) -> None:
        # A railway without points can no longer be hit or listed.
        if self._document.snapshot.number_of_points(railway_id) > 1:
            self._commit(RemovePointCommand(railway_id, index))
            return
        logger.info(f"Removing last point of railway {railway_id}; deleting it")
        if self._commit(RemoveRailwayCommand(railway_id)).success:
            self._tools.clear_selection()

    def _press_edit_station(self, event: PointerEvent) -> None:
        railway_id = self._tools.selected_railway_id
        if railway_id is None or event.button != PointerButton.LEFT:
            return
        nearest = self._document.snapshot.find_nearest_segment(
            self._viewport, railway_id, event.x, event.y, self._config.hit_threshold_px
        )
        if nearest is None or nearest.is_insertion_point:
            return
        self._enter(
            LinkingStation(
                railway_id=railway_id,
                point_index=nearest.point_index,
                press_x=event.x,
                press_y=event.y,
                pointer_x=event.x,
                pointer_y=event.y,
            )
        )

    def _press_edit_borders(self, event: PointerEvent) -> None:
        feature = self._document.snapshot.find_nearest_border_feature(
            self._viewport, event.x, event.y, self._config.hit_threshold_px
        )

        if event.button == PointerButton.RIGHT:
            if isinstance(feature, BorderPointRef):
                self._commit(RemoveBorderPointCommand(feature.point_id))
            elif isinstance(feature, BorderEdgeRef):
                self._commit(RemoveBorderEdgeCommand(feature.first_id, feature.second_id))
            return
        if event.button != PointerButton.LEFT:
            return

        if event.ctrl:
            if isinstance(feature, BorderPointRef):
                self._enter(
                    AddingBorderEdge(
                        feature.point_id, self._tools.border_style, event.x, event.y
                    )
                )
            elif feature is None:
                self._commit(AddBorderPointCommand(*self._world(event.x, event.y)))
        elif feature is not None:
            self._enter(DraggingBorderFeature(feature, event.x, event.y))

    def _press_new_railway(self, event: PointerEvent) -> None:
        if event.button != PointerButton.LEFT:
            return
        x, y = self._world(event.x, event.y)
        result = self._commit(CreateRailwayCommand(RailwayInfo(NEW_RAILWAY_NAME), x, y))
        if not result.success:
            return
        railway_id = result.data["id"]
        self._tools.select_railway(railway_id)
        self._enter(DrawingNewRailway(railway_id, point_count=1))

    def _press_while_drawing(self, phase: DrawingNewRailway, event: PointerEvent) -> None:
        if event.button == PointerButton.LEFT:
            x, y = self._world(event.x, event.y)
            result = self._commit(
                InsertPointCommand(phase.railway_id, phase.point_count, x, y)
            )
            if result.success:
                self._enter(replace(phase, point_count=phase.point_count + 1))
            else:
                self._enter(Idle())
        elif event.button == PointerButton.RIGHT:
            if phase.point_count >= 2:
                logger.info(
                    f"Finished railway {phase.railway_id} with {phase.point_count} points"
                )
                self._enter(Idle())
            else:
                self._commit(RemoveRailwayCommand(phase.railway_id))
                self._enter(Idle())
                self._tools.clear_selection()

    # ------------------------------------------------------------------
    # Pointer move / up / leave
    # ------------------------------------------------------------------

    def on_pointer_move(self, event: PointerEvent) -> None:
        """Updates the live pointer of the current gesture."""
        phase = self._phase
        if isinstance(phase, PanningViewport):
            origin = replace(
                self._viewport, world_top_x=phase.origin_x, world_top_y=phase.origin_y
            )
            self._set_viewport(
                pan_by(origin, phase.anchor_x - event.x, phase.anchor_y - event.y)
            )
        elif isinstance(phase, LinkingStation):
            displacement = abs(event.x - phase.press_x) + abs(event.y - phase.press_y)
            moved = phase.moved or displacement > self._config.drag_threshold_px
            self._enter(
                replace(phase, pointer_x=event.x, pointer_y=event.y, moved=moved)
            )
        elif isinstance(phase, (DraggingPoint, DraggingBorderFeature, AddingBorderEdge)):
            self._enter(replace(phase, pointer_x=event.x, pointer_y=event.y))

    def on_pointer_up(self, event: PointerEvent) -> None:
        """
        Completes the current gesture at the release position.

        Gestures start on the left button, so releases of any other button
        leave the gesture running.
        """
        if event.button != PointerButton.LEFT:
            logger.debug(f"Ignoring {event.button.value} release")
            return
        self._release(event.x, event.y)

    def on_pointer_leave(self) -> None:
        """
        Handles the pointer leaving the canvas.

        Pan and drag gestures complete as if released at the last pointer
        position; station linking and border edge gestures keep waiting for
        an explicit release.
        """
        phase = self._phase
        if not isinstance(phase, RELEASE_ON_LEAVE):
            return
        if isinstance(phase, PanningViewport):
            self._enter(Idle())
        else:
            self._release(phase.pointer_x, phase.pointer_y)

    def _release(self, px: int, py: int) -> None:
        phase = self._phase
        if isinstance(phase, PanningViewport):
            self._enter(Idle())
        elif isinstance(phase, DraggingPoint):
            self._release_point(phase, px, py)
        elif isinstance(phase, LinkingStation):
            self._release_station(phase, px, py)
        elif isinstance(phase, DraggingBorderFeature):
            self._release_border_feature(phase, px, py)
        elif isinstance(phase, AddingBorderEdge):
            self._release_border_edge(phase, px, py)

    def _release_point(self, phase: DraggingPoint, px: int, py: int) -> None:
        x, y = self._world(px, py)
        index = phase.target.point_index
        if phase.target.is_insertion_point:
            self._commit(InsertPointCommand(phase.railway_id, index, x, y))
        else:
            self._commit(MovePointCommand(phase.railway_id, index, x, y))
        self._enter(Idle())

    def _release_station(self, phase: LinkingStation, px: int, py: int) -> None:
        if not phase.moved:
            self._open_station_dialog(phase)
            return

        anchor = StationRef(phase.railway_id, phase.point_index)
        target = self._document.snapshot.find_nearest_station(
            self._viewport, px, py, self._config.hit_threshold_px, exclude=anchor
        )
        if target is None:
            logger.debug(f"No station near ({px}, {py}); link dropped")
        else:
            self._commit(LinkStationCommand(phase.railway_id, phase.point_index, target))
        self._enter(Idle())

    def _release_border_feature(
        self, phase: DraggingBorderFeature, px: int, py: int
    ) -> None:
        x, y = self._world(px, py)
        target = phase.target
        if isinstance(target, BorderPointRef):
            self._commit(MoveBorderPointCommand(target.point_id, x, y))
        else:
            self._commit(
                InsertBorderPointOnEdgeCommand(target.first_id, target.second_id, x, y)
            )
        self._enter(Idle())

    def _release_border_edge(self, phase: AddingBorderEdge, px: int, py: int) -> None:
        feature = self._document.snapshot.find_nearest_border_feature(
            self._viewport, px, py, self._config.hit_threshold_px
        )
        if isinstance(feature, BorderPointRef):
            if feature.point_id != phase.anchor_id:
                self._commit(
                    ConnectBorderPointsCommand(
                        phase.anchor_id, feature.point_id, phase.style
                    )
                )
        else:
            x, y = self._world(px, py)
            self._commit(ConnectNewBorderPointCommand(phase.anchor_id, x, y, phase.style))
        self._enter(Idle())

    # ------------------------------------------------------------------
    # Station dialog
    # ------------------------------------------------------------------

    def _open_station_dialog(self, phase: LinkingStation) -> None:
        try:
            info = self._document.snapshot.get_station_info(
                phase.railway_id, phase.point_index
            )
        except InvalidReference as e:
            logger.error(f"Cannot open station dialog: {e}")
            self._enter(Idle())
            return

        waiting = AwaitingDialog(phase.railway_id, phase.point_index, info is not None)
        self._enter(waiting)
        self._dialogs.open_station_dialog(
            info or StationInfo(""),
            lambda result: self._on_station_dialog_result(waiting, result),
        )

    def _on_station_dialog_result(
        self, waiting: AwaitingDialog, result: Optional[StationInfo]
    ) -> None:
        if self._phase is not waiting:
            logger.debug("Ignoring result of a superseded station dialog")
            return

        if result is None:
            logger.debug("Station dialog cancelled")
        elif result.name.strip():
            info = StationInfo(result.name.strip(), result.level)
            self._commit(
                SetStationInfoCommand(waiting.railway_id, waiting.point_index, info)
            )
        elif waiting.had_station:
            self._commit(DetachStationCommand(waiting.railway_id, waiting.point_index))
        self._enter(Idle())

    # ------------------------------------------------------------------
    # Wheel / keyboard
    # ------------------------------------------------------------------

    def on_wheel(self, event: WheelEvent) -> None:
        """Zooms toward the pointer; ignored unless idle."""
        if not self.is_idle():
            return
        zoomed = zoom_at(self._viewport, event.x, event.y, event.direction)
        if zoomed is self._viewport:
            logger.debug("Zoom request out of range; ignored")
            return
        self._set_viewport(zoomed)

    def cancel(self) -> bool:
        """
        Abandons the current gesture without touching the map (Escape).

        Returns:
            bool: True if a gesture was in progress.
        """
        phase = self._phase
        if isinstance(phase, Idle):
            return False
        self._enter(Idle())
        if isinstance(phase, AwaitingDialog):
            self._dialogs.cancel_pending(DialogKind.STATION)
        logger.info(f"Cancelled {type(phase).__name__}")
        return True
