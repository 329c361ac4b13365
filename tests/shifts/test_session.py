from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import List, Optional

import pytest

from src.hms_client.hms_client.core.enums import OperationStatus, Role
from src.hms_client.hms_client.core.exceptions import TransportError, ValidationError
from src.hms_client.hms_client.shifts.model import ShiftRecord
from src.hms_client.hms_client.shifts.session import ShiftEditingSession


class FakeShiftsRepo:
    """In-memory ShiftRepository; each call can be scripted to fail."""

    def __init__(self, shifts: Optional[List[ShiftRecord]] = None, *, next_id: int = 42):
        self.shifts = list(shifts or [])
        self.next_id = next_id
        self.fail_with: Optional[Exception] = None
        self.update_result = True
        self.delete_result = True
        self.calls: list[tuple] = []

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    def fetch_all(self):
        self.calls.append(("fetch_all",))
        self._maybe_fail()
        return [replace(s) for s in self.shifts]

    def create(self, record):
        self.calls.append(("create", record))
        self._maybe_fail()
        stored = replace(record, id=self.next_id, doctor_ids=list(record.doctor_ids))
        self.next_id += 1
        self.shifts.append(stored)
        return replace(stored)

    def update(self, record):
        self.calls.append(("update", record.id, record.date, record.start_time, record.end_time))
        self._maybe_fail()
        return self.update_result

    def delete(self, shift_id):
        self.calls.append(("delete", shift_id))
        self._maybe_fail()
        return self.delete_result


def _fill(editor: ShiftEditingSession, day="2024-05-01", start="08:00", end="16:00") -> None:
    editor.input_date = day
    editor.input_start_text = start
    editor.input_end_text = end


def _loaded(repo: FakeShiftsRepo, role: Role = Role.ADMIN) -> ShiftEditingSession:
    editor = ShiftEditingSession(repo, role=role)
    assert editor.load().ok
    return editor


# ---------------------------------------------------------------------------
# Gates
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("bad", ["", "8:00", "08:00:00", "24:00", "ab:cd", "08.00"])
@pytest.mark.parametrize("role", list(Role))
def test_can_create_false_for_non_hhmm_text(role, bad):
    editor = ShiftEditingSession(FakeShiftsRepo(), role=role)
    _fill(editor, start=bad)
    assert editor.can_create() is False

    _fill(editor, start="08:00", end=bad)
    assert editor.can_create() is False


@pytest.mark.parametrize("role", [Role.DOCTOR, Role.PATIENT])
def test_can_create_false_for_non_admin_with_valid_inputs(role):
    editor = ShiftEditingSession(FakeShiftsRepo(), role=role)
    _fill(editor)
    assert editor.can_create() is False


def test_can_create_requires_date():
    editor = ShiftEditingSession(FakeShiftsRepo(), role=Role.ADMIN)
    _fill(editor, day="")
    assert editor.input_date is None
    assert editor.can_create() is False


def test_can_create_does_not_check_end_after_start():
    editor = ShiftEditingSession(FakeShiftsRepo(), role=Role.ADMIN)
    _fill(editor, start="22:00", end="06:00")
    assert editor.can_create() is True


def test_patient_can_never_act(morning_shift):
    editor = ShiftEditingSession(FakeShiftsRepo([morning_shift]), role=Role.PATIENT)
    _fill(editor)
    editor.select_record(morning_shift)

    assert editor.can_create() is False
    assert editor.can_mutate_selected() is False
    assert editor.create().status == OperationStatus.SKIPPED
    assert editor.update().status == OperationStatus.SKIPPED
    assert editor.delete().status == OperationStatus.SKIPPED


def test_non_admin_load_is_skipped_without_calling_repository():
    repo = FakeShiftsRepo()
    editor = ShiftEditingSession(repo, role=Role.DOCTOR)

    result = editor.load()

    assert result.status == OperationStatus.SKIPPED
    assert repo.calls == []


def test_role_accepts_legacy_codes():
    editor = ShiftEditingSession(FakeShiftsRepo(), role=0)
    assert editor.role == Role.ADMIN
    editor.role = 2
    assert editor.role == Role.PATIENT


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def test_select_record_seeds_inputs_and_clearing_resets_them(morning_shift):
    editor = _loaded(FakeShiftsRepo([morning_shift]))
    record = editor.display_list[0]

    editor.select_record(record)
    assert editor.selected is record
    assert editor.input_date == date(2024, 5, 1)
    assert editor.input_start_text == "08:00"
    assert editor.input_end_text == "16:00"
    assert editor.can_mutate_selected() is True

    editor.select_record(None)
    assert editor.selected is None
    assert editor.input_date is None
    assert editor.input_start_text == ""
    assert editor.input_end_text == ""
    assert editor.can_mutate_selected() is False


def test_input_date_accepts_datetime_and_rejects_bad_text():
    editor = ShiftEditingSession(FakeShiftsRepo(), role=Role.ADMIN)
    editor.input_date = datetime(2024, 5, 1, 13, 45)
    assert editor.input_date == date(2024, 5, 1)

    with pytest.raises(ValidationError):
        editor.input_date = "01/05/2024"
    assert editor.input_date == date(2024, 5, 1)


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------


def test_property_changed_fires_only_on_actual_change():
    editor = ShiftEditingSession(FakeShiftsRepo(), role=Role.ADMIN)
    names: list[str] = []

    def on_change(sender, name):
        assert sender is editor
        names.append(name)

    editor.property_changed.connect(on_change, weak=False)

    editor.input_start_text = "08:00"
    editor.input_start_text = "08:00"
    editor.input_end_text = "16:00"
    editor.input_date = "2024-05-01"
    editor.input_date = date(2024, 5, 1)
    editor.role = Role.ADMIN

    assert names == ["input_start_text", "input_end_text", "input_date"]


def test_input_changes_raise_create_and_update_guards_only():
    editor = ShiftEditingSession(FakeShiftsRepo(), role=Role.ADMIN)
    raised: list[str] = []

    def on_guard(command):
        raised.append(command.name)

    for command in (editor.create_command, editor.update_command, editor.delete_command):
        command.can_execute_changed.connect(on_guard, weak=False)

    editor.input_start_text = "09:00"

    assert raised == ["create", "update"]


def test_select_record_raises_update_and_delete_guards(morning_shift):
    editor = _loaded(FakeShiftsRepo([morning_shift]))
    raised: list[str] = []

    def on_guard(command):
        raised.append(command.name)

    editor.update_command.can_execute_changed.connect(on_guard, weak=False)
    editor.delete_command.can_execute_changed.connect(on_guard, weak=False)

    editor.select_record(editor.display_list[0])

    assert raised[-2:] == ["update", "delete"]
    assert editor.update_command.can_execute() is True
    assert editor.delete_command.can_execute() is True


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


def test_load_replaces_list_in_repository_order(morning_shift, night_shift):
    repo = FakeShiftsRepo([night_shift, morning_shift])
    editor = _loaded(repo)

    assert [s.id for s in editor.display_list] == [2, 1]

    repo.shifts = [morning_shift]
    assert editor.load().ok
    assert [s.id for s in editor.display_list] == [1]


@pytest.mark.parametrize(
    "error, status",
    [
        (TransportError("connection refused"), OperationStatus.TRANSPORT_ERROR),
        (RuntimeError("boom"), OperationStatus.FAILED),
    ],
)
def test_load_failure_keeps_previous_list_and_logs(capsys, morning_shift, error, status):
    repo = FakeShiftsRepo([morning_shift])
    editor = _loaded(repo)
    before = editor.display_list

    repo.fail_with = error
    result = editor.load()

    assert result.status == status
    assert editor.display_list == before
    out = capsys.readouterr().out
    assert "loading shifts" in out
    assert str(error) in out


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


def test_create_scenario_appends_returned_record_and_clears_inputs():
    repo = FakeShiftsRepo(next_id=42)
    editor = ShiftEditingSession(repo, role=Role.ADMIN)
    _fill(editor, day="2024-05-01", start="08:00", end="16:00")
    assert editor.can_create() is True

    result = editor.create_command.execute()

    assert result.ok
    assert len(editor.display_list) == 1
    added = editor.display_list[0]
    assert added is result.record
    assert added.id == 42
    assert added.start_time == time(8, 0)
    assert added.end_time == time(16, 0)
    assert added.doctor_ids == []
    assert editor.input_date is None
    assert editor.input_start_text == ""
    assert editor.input_end_text == ""


def test_create_submits_record_without_id_and_empty_staff(morning_shift):
    repo = FakeShiftsRepo([morning_shift])
    editor = _loaded(repo)
    _fill(editor, day="2024-06-02", start="07:00", end="19:00")

    editor.create()

    submitted = repo.calls[-1][1]
    assert submitted.id is None
    assert submitted.date == date(2024, 6, 2)
    assert submitted.doctor_ids == []
    assert len(editor.display_list) == 2


def test_create_is_noop_when_gate_closed():
    repo = FakeShiftsRepo()
    editor = ShiftEditingSession(repo, role=Role.ADMIN)
    _fill(editor, end="4pm")

    result = editor.create()

    assert result.status == OperationStatus.SKIPPED
    assert repo.calls == []


def test_create_transport_failure_keeps_inputs(capsys):
    repo = FakeShiftsRepo()
    repo.fail_with = TransportError("timeout")
    editor = ShiftEditingSession(repo, role=Role.ADMIN)
    _fill(editor)

    result = editor.create()

    assert result.status == OperationStatus.TRANSPORT_ERROR
    assert editor.display_list == ()
    assert editor.input_start_text == "08:00"
    assert editor.input_end_text == "16:00"
    assert editor.input_date == date(2024, 5, 1)
    assert "HTTP request error adding shift: timeout" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


def test_update_success_submits_new_values_and_clears_inputs(morning_shift):
    repo = FakeShiftsRepo([morning_shift])
    editor = _loaded(repo)
    record = editor.display_list[0]
    editor.select_record(record)
    editor.input_end_text = "18:00"

    result = editor.update_command.execute()

    assert result.ok
    assert repo.calls[-1] == ("update", 1, date(2024, 5, 1), time(8, 0), time(18, 0))
    assert record.end_time == time(18, 0)
    assert editor.input_start_text == ""
    assert editor.selected is record


def test_update_rejected_keeps_local_changes(capsys, morning_shift):
    repo = FakeShiftsRepo([morning_shift])
    repo.update_result = False
    editor = _loaded(repo)
    record = editor.display_list[0]
    editor.select_record(record)
    editor.input_start_text = "09:30"

    result = editor.update()

    assert result.status == OperationStatus.REJECTED
    assert result.local_changes_kept is True
    # The local copy is not rolled back.
    assert record.start_time == time(9, 30)
    assert editor.input_start_text == "09:30"
    assert "Update failed for shift with ID 1 on backend." in capsys.readouterr().out


def test_update_transport_failure_keeps_local_changes(morning_shift):
    repo = FakeShiftsRepo([morning_shift])
    editor = _loaded(repo)
    record = editor.display_list[0]
    editor.select_record(record)
    editor.input_date = "2024-05-03"
    repo.fail_with = TransportError("reset by peer")

    result = editor.update()

    assert result.status == OperationStatus.TRANSPORT_ERROR
    assert result.local_changes_kept is True
    assert record.date == date(2024, 5, 3)


def test_update_with_unparseable_input_fails_without_touching_record(morning_shift):
    repo = FakeShiftsRepo([morning_shift])
    editor = _loaded(repo)
    record = editor.display_list[0]
    editor.select_record(record)
    editor.input_end_text = "late"

    result = editor.update()

    assert result.status == OperationStatus.FAILED
    assert record.end_time == time(16, 0)
    assert repo.calls[-1] == ("fetch_all",)


def test_update_without_selection_is_noop():
    repo = FakeShiftsRepo()
    editor = ShiftEditingSession(repo, role=Role.ADMIN)
    _fill(editor)

    assert editor.update().status == OperationStatus.SKIPPED
    assert repo.calls == []


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


def test_delete_success_removes_record_and_clears_selection(morning_shift, night_shift):
    repo = FakeShiftsRepo([morning_shift, night_shift])
    editor = _loaded(repo)
    editor.select_record(editor.display_list[0])

    result = editor.delete_command.execute()

    assert result.ok
    assert repo.calls[-1] == ("delete", 1)
    assert [s.id for s in editor.display_list] == [2]
    assert editor.selected is None
    assert editor.input_date is None
    assert editor.delete_command.can_execute() is False


def test_delete_rejected_keeps_record_in_place(capsys, morning_shift, night_shift):
    repo = FakeShiftsRepo([morning_shift, night_shift])
    repo.delete_result = False
    editor = _loaded(repo)
    target = editor.display_list[1]
    editor.select_record(target)

    result = editor.delete()

    assert result.status == OperationStatus.REJECTED
    assert editor.display_list[1] is target
    assert len(editor.display_list) == 2
    assert editor.selected is target
    assert "Delete failed for shift with ID 2 on backend." in capsys.readouterr().out


def test_delete_transport_failure_keeps_record(morning_shift):
    repo = FakeShiftsRepo([morning_shift])
    editor = _loaded(repo)
    target = editor.display_list[0]
    editor.select_record(target)
    repo.fail_with = TransportError("dns")

    result = editor.delete()

    assert result.status == OperationStatus.TRANSPORT_ERROR
    assert editor.display_list == (target,)


def test_from_transport_wires_http_repository():
    class NoHttp:
        pass

    editor = ShiftEditingSession.from_transport(NoHttp(), "tok", base_url="http://hms.test", role=Role.ADMIN)

    assert editor.role == Role.ADMIN
    assert editor.display_list == ()
