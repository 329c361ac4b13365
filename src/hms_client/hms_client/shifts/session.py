from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Optional, Sequence, Tuple, Union

import requests
from blinker import Signal

from ..common.datetime_utils import format_hhmm, parse_hhmm, parse_iso_date
from ..common.validators import require_hhmm
from ..core.constants import DEFAULT_REQUEST_TIMEOUT, DEFAULT_SHIFTS_ENDPOINT, LOG_PREFIX
from ..core.enums import OperationStatus, Role
from ..core.exceptions import TransportError, ValidationError
from . import gates
from .commands import Command, OperationResult
from .http_shift_repository import HttpShiftRepository
from .model import ShiftRecord
from .repository import ShiftRepository


class ShiftEditingSession:
    """Use case: edit the shift roster from the admin screen.

    Holds the form inputs, the selected shift and the list shown on screen.
    Every named field announces changes through ``property_changed``
    (receivers are called as ``receiver(session, name=<field>)``), and the
    create/update/delete commands announce when their guard may have flipped.

    Failures never propagate out of an action: each action returns an
    OperationResult and prints one diagnostic line when it did not succeed.
    """

    def __init__(self, shifts: ShiftRepository, *, role: Role):
        self._shifts = shifts
        self._role = Role.parse(role)

        self._records: List[ShiftRecord] = []
        self._selected: Optional[ShiftRecord] = None
        self._input_date: Optional[date] = None
        self._input_start_text = ""
        self._input_end_text = ""

        self.property_changed = Signal("shift session property changed")

        self.create_command = Command("create", self.create, self.can_create)
        self.update_command = Command("update", self.update, self.can_mutate_selected)
        self.delete_command = Command("delete", self.delete, self.can_mutate_selected)

    @classmethod
    def from_transport(
        cls,
        http: requests.Session,
        token: str,
        *,
        base_url: str,
        role: Role,
        endpoint: str = DEFAULT_SHIFTS_ENDPOINT,
        timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
    ) -> "ShiftEditingSession":
        repo = HttpShiftRepository(http, token, base_url=base_url, endpoint=endpoint, timeout=timeout)
        return cls(repo, role=role)

    # ------------------------------------------------------------------
    # Observable fields
    # ------------------------------------------------------------------

    def _changed(self, name: str) -> None:
        self.property_changed.send(self, name=name)

    def _set(self, attr: str, value: Any, *commands: Command) -> bool:
        if getattr(self, attr) == value:
            return False
        setattr(self, attr, value)
        self._changed(attr.lstrip("_"))
        for command in commands:
            command.raise_can_execute_changed()
        return True

    @property
    def role(self) -> Role:
        return self._role

    @role.setter
    def role(self, value: Union[Role, str, int]) -> None:
        self._set("_role", Role.parse(value), self.create_command, self.update_command, self.delete_command)

    @property
    def display_list(self) -> Tuple[ShiftRecord, ...]:
        return tuple(self._records)

    @property
    def selected(self) -> Optional[ShiftRecord]:
        return self._selected

    @property
    def input_date(self) -> Optional[date]:
        return self._input_date

    @input_date.setter
    def input_date(self, value: Union[date, str, None]) -> None:
        if isinstance(value, str):
            text = value.strip()
            try:
                value = parse_iso_date(text) if text else None
            except ValueError:
                raise ValidationError(f"Shift date must be YYYY-MM-DD, got {text!r}")
        elif isinstance(value, datetime):
            value = value.date()
        self._set("_input_date", value, self.create_command, self.update_command)

    @property
    def input_start_text(self) -> str:
        return self._input_start_text

    @input_start_text.setter
    def input_start_text(self, value: Optional[str]) -> None:
        self._set("_input_start_text", value or "", self.create_command, self.update_command)

    @property
    def input_end_text(self) -> str:
        return self._input_end_text

    @input_end_text.setter
    def input_end_text(self, value: Optional[str]) -> None:
        self._set("_input_end_text", value or "", self.create_command, self.update_command)

    @property
    def state(self) -> gates.ShiftFormState:
        return gates.ShiftFormState(
            role=self._role,
            input_date=self._input_date,
            input_start_text=self._input_start_text,
            input_end_text=self._input_end_text,
            selected=self._selected,
        )

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def can_create(self) -> bool:
        return gates.can_create(self.state)

    def can_mutate_selected(self) -> bool:
        return gates.can_mutate_selected(self.state)

    # ------------------------------------------------------------------
    # Selection / inputs
    # ------------------------------------------------------------------

    def select_record(self, record: Optional[ShiftRecord]) -> None:
        if record is self._selected:
            return

        self._selected = record
        self._changed("selected")
        if record is not None:
            self.input_date = record.date
            self.input_start_text = format_hhmm(record.start_time)
            self.input_end_text = format_hhmm(record.end_time)
        else:
            self.clear_inputs()

        self.update_command.raise_can_execute_changed()
        self.delete_command.raise_can_execute_changed()

    def find_by_id(self, shift_id: int) -> Optional[ShiftRecord]:
        for record in self._records:
            if record.id == shift_id:
                return record
        return None

    def clear_inputs(self) -> None:
        self.input_date = None
        self.input_start_text = ""
        self.input_end_text = ""

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _report(
        self,
        status: OperationStatus,
        message: str,
        *,
        record: Optional[ShiftRecord] = None,
        local_changes_kept: bool = False,
    ) -> OperationResult:
        print(f"{LOG_PREFIX} {message}")
        return OperationResult(status, message, record, local_changes_kept)

    def _replace_records(self, records: Sequence[ShiftRecord]) -> None:
        self._records.clear()
        self._records.extend(records)
        self._changed("display_list")

    def _remove_record(self, record: ShiftRecord) -> None:
        for i, item in enumerate(self._records):
            if item is record:
                del self._records[i]
                self._changed("display_list")
                return

    def load(self) -> OperationResult:
        if not gates.can_load(self.state):
            return OperationResult.skipped("Only administrators can list shifts")

        try:
            shifts = list(self._shifts.fetch_all())
        except TransportError as e:
            return self._report(OperationStatus.TRANSPORT_ERROR, f"HTTP request error loading shifts: {e}")
        except Exception as e:
            return self._report(OperationStatus.FAILED, f"An error occurred loading shifts: {e}")

        self._replace_records(shifts)
        return OperationResult.succeeded(f"Loaded {len(shifts)} shifts")

    def create(self) -> OperationResult:
        if not self.can_create():
            return OperationResult.skipped("Shift form is incomplete")

        new_shift = ShiftRecord(
            date=self._input_date,
            start_time=parse_hhmm(self._input_start_text),
            end_time=parse_hhmm(self._input_end_text),
            doctor_ids=[],
        )

        try:
            added = self._shifts.create(new_shift)
        except TransportError as e:
            return self._report(OperationStatus.TRANSPORT_ERROR, f"HTTP request error adding shift: {e}")
        except Exception as e:
            return self._report(OperationStatus.FAILED, f"An error occurred adding shift: {e}")

        self._records.append(added)
        self._changed("display_list")
        self.clear_inputs()
        return OperationResult.succeeded("Shift added", record=added)

    def update(self) -> OperationResult:
        record = self._selected
        if not self.can_mutate_selected() or record is None:
            return OperationResult.skipped("No shift selected")

        try:
            if self._input_date is None:
                raise ValidationError("Shift date is required")
            start = require_hhmm(self._input_start_text, "Start time")
            end = require_hhmm(self._input_end_text, "End time")
        except ValidationError as e:
            return self._report(OperationStatus.FAILED, f"An error occurred updating shift: {e}", record=record)

        # The selected record is edited before the server answers and is not
        # restored if the server rejects the change or cannot be reached.
        record.date = self._input_date
        record.start_time = start
        record.end_time = end

        try:
            success = self._shifts.update(record)
        except TransportError as e:
            return self._report(
                OperationStatus.TRANSPORT_ERROR,
                f"HTTP request error updating shift: {e}",
                record=record,
                local_changes_kept=True,
            )
        except Exception as e:
            return self._report(
                OperationStatus.FAILED,
                f"An error occurred updating shift: {e}",
                record=record,
                local_changes_kept=True,
            )

        if not success:
            return self._report(
                OperationStatus.REJECTED,
                f"Update failed for shift with ID {record.id} on backend.",
                record=record,
                local_changes_kept=True,
            )

        self.clear_inputs()
        return OperationResult.succeeded("Shift updated", record=record)

    def delete(self) -> OperationResult:
        record = self._selected
        if not self.can_mutate_selected() or record is None:
            return OperationResult.skipped("No shift selected")

        try:
            success = self._shifts.delete(record.id)
        except TransportError as e:
            return self._report(OperationStatus.TRANSPORT_ERROR, f"HTTP request error deleting shift: {e}", record=record)
        except Exception as e:
            return self._report(OperationStatus.FAILED, f"An error occurred deleting shift: {e}", record=record)

        if not success:
            return self._report(
                OperationStatus.REJECTED,
                f"Delete failed for shift with ID {record.id} on backend.",
                record=record,
            )

        self._remove_record(record)
        self.select_record(None)
        self.clear_inputs()
        return OperationResult.succeeded("Shift deleted", record=record)
