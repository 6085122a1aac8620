"""
Base Command Module.

Every map edit goes through a command: it receives the current immutable
snapshot, applies exactly one engine mutation and reports the outcome as a
CommandResult. The caller decides whether to adopt the new snapshot.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict

from rerail.core.protocols import MapEngine


@dataclass
class CommandResult:
    """
    Outcome of one command execution.

    Attributes:
        success: Whether the engine accepted the mutation.
        message: Status-bar friendly summary.
        command_name: Class name of the command that ran.
        data: Output of a successful edit: the new snapshot under "map" and,
              for creations, the new id under "id".
    """

    success: bool
    message: str = ""
    command_name: str = ""
    data: Dict[str, Any] = field(default_factory=dict)


class BaseCommand(ABC):
    """
    A single map edit.

    Commands never modify the snapshot they are given.
    """

    def __init__(self) -> None:
        self._is_executed = False

    @abstractmethod
    def execute(self, snapshot: MapEngine) -> CommandResult:
        """
        Applies the edit to ``snapshot``.

        Args:
            snapshot: The current map snapshot.

        Returns:
            CommandResult: Failed results carry no "map" entry.
        """

    @property
    def is_executed(self) -> bool:
        """True once execute() has succeeded."""
        return self._is_executed
