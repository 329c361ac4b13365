from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from blinker import Signal

from ..core.enums import OperationStatus
from .model import ShiftRecord


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one screen action, handed back to whoever triggered it."""

    status: OperationStatus
    message: str = ""
    record: Optional[ShiftRecord] = None
    # True when the selected record was edited locally but the server did not confirm it.
    local_changes_kept: bool = False

    @property
    def ok(self) -> bool:
        return self.status == OperationStatus.SUCCEEDED

    @classmethod
    def succeeded(cls, message: str = "", *, record: Optional[ShiftRecord] = None) -> "OperationResult":
        return cls(OperationStatus.SUCCEEDED, message, record)

    @classmethod
    def skipped(cls, message: str = "") -> "OperationResult":
        return cls(OperationStatus.SKIPPED, message)


class Command:
    """An action paired with a live "may it run now?" predicate.

    UI code polls can_execute() or subscribes to can_execute_changed
    (receivers are called as receiver(command)).
    """

    def __init__(self, name: str, execute: Callable[[], OperationResult], can_execute: Callable[[], bool]):
        self.name = name
        self._execute = execute
        self._can_execute = can_execute
        self.can_execute_changed = Signal(f"{name} can_execute changed")

    def can_execute(self) -> bool:
        return bool(self._can_execute())

    def execute(self) -> OperationResult:
        return self._execute()

    def raise_can_execute_changed(self) -> None:
        self.can_execute_changed.send(self)

    def __repr__(self) -> str:
        return f"Command({self.name!r})"
