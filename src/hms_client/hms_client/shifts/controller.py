from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.enums import OperationStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from . import gates
from .session import ShiftEditingSession

_FLASH_CATEGORY = {
    OperationStatus.SUCCEEDED: "success",
    OperationStatus.SKIPPED: "warning",
    OperationStatus.REJECTED: "danger",
    OperationStatus.TRANSPORT_ERROR: "danger",
    OperationStatus.FAILED: "danger",
}


def register(app: Flask, container: Container) -> None:
    def _open_session() -> ShiftEditingSession:
        # One editing session per screen activation, i.e. per request here.
        return container.new_shift_session(role=Role.parse(app.config.get("USER_ROLE", Role.ADMIN)))

    def _fill_inputs(editor: ShiftEditingSession) -> None:
        editor.input_date = request.form.get("shift_date", "")
        editor.input_start_text = (request.form.get("start_time") or "").strip()
        editor.input_end_text = (request.form.get("end_time") or "").strip()

    def _select_loaded(editor: ShiftEditingSession, shift_id: int) -> None:
        result = editor.load()
        if result.status == OperationStatus.SKIPPED:
            raise AuthorizationError("You are not allowed to manage shifts")
        if not result.ok:
            raise ValidationError("Could not load shifts from the server")
        record = editor.find_by_id(shift_id)
        if record is None:
            raise ValidationError(f"Shift {shift_id} no longer exists")
        editor.select_record(record)

    def _flash_result(result) -> None:
        flash(result.message, _FLASH_CATEGORY[result.status])

    @app.route("/admin/shifts", methods=["GET", "POST"], endpoint="admin_shifts")
    def admin_shifts():
        editor = _open_session()

        if request.method == "POST":
            try:
                if not gates.can_manage(editor.state):
                    raise AuthorizationError("You are not allowed to manage shifts")
                _fill_inputs(editor)
                if not editor.create_command.can_execute():
                    raise ValidationError("Enter a date and HH:MM start and end times")
                _flash_result(editor.create_command.execute())
                return redirect(url_for("admin_shifts"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                flash("System error while adding the shift", "danger")

        load_result = editor.load()
        if load_result.status not in (OperationStatus.SUCCEEDED, OperationStatus.SKIPPED):
            _flash_result(load_result)

        selected_s = request.args.get("selected")
        if selected_s and selected_s.isdigit():
            editor.select_record(editor.find_by_id(int(selected_s)))

        return render_template(
            "shifts.html",
            editor=editor,
            shifts=editor.display_list,
            selected=editor.selected,
            # Inputs are re-checked on POST.
            can_add=gates.can_manage(editor.state),
            can_update=editor.update_command.can_execute(),
            can_delete=editor.delete_command.can_execute(),
            active_page="admin_shifts",
        )

    @app.route("/admin/shifts/<int:shift_id>/update", methods=["POST"], endpoint="admin_shifts_update")
    def admin_shifts_update(shift_id: int):
        editor = _open_session()
        try:
            _select_loaded(editor, shift_id)
            _fill_inputs(editor)
            _flash_result(editor.update_command.execute())
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            flash("System error while updating the shift", "danger")

        return redirect(url_for("admin_shifts"))

    @app.route("/admin/shifts/<int:shift_id>/delete", methods=["POST"], endpoint="admin_shifts_delete")
    def admin_shifts_delete(shift_id: int):
        editor = _open_session()
        try:
            _select_loaded(editor, shift_id)
            _flash_result(editor.delete_command.execute())
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            flash("System error while deleting the shift", "danger")

        return redirect(url_for("admin_shifts"))
