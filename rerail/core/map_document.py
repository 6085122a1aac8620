"""
Map Document Module.

Owns the reference to the current map snapshot. Commands are executed
against it and, on success, the reference is replaced in one step.
"""

import logging

from PySide6.QtCore import QObject, Signal

from rerail.commands.base_command import BaseCommand, CommandResult
from rerail.core.protocols import MapEngine

logger = logging.getLogger(__name__)


class MapDocument(QObject):
    """
    Holder of the current immutable map snapshot.

    Signals:
        map_changed: Emitted with the new snapshot after every replacement.
        command_failed: Emitted with the CommandResult of a failed command.
    """

    map_changed = Signal(object)
    command_failed = Signal(object)

    def __init__(self, snapshot: MapEngine) -> None:
        """
        Args:
            snapshot: The initial map snapshot.
        """
        super().__init__()
        self._snapshot = snapshot

    @property
    def snapshot(self) -> MapEngine:
        return self._snapshot

    def replace(self, snapshot: MapEngine) -> None:
        """Swaps in an unrelated snapshot, e.g. a freshly created map."""
        self._snapshot = snapshot
        logger.info("Map snapshot replaced")
        self.map_changed.emit(snapshot)

    def execute(self, command: BaseCommand) -> CommandResult:
        """
        Executes a command against the current snapshot.

        Args:
            command: The edit to apply.

        Returns:
            CommandResult: The command's result. The document only changes
                           when ``result.success`` is True.
        """
        logger.debug(f"Executing command: {command.__class__.__name__}")
        result = command.execute(self._snapshot)
        if result.success:
            if result.data["map"] is self._snapshot:
                logger.debug("Command left the map unchanged")
                return result
            self._snapshot = result.data["map"]
            self.map_changed.emit(self._snapshot)
        else:
            logger.warning(f"Command failed: {result.message}")
            self.command_failed.emit(result)
        return result
