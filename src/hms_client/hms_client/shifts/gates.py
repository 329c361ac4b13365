from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.validators import is_hhmm
from ..core.enums import Role
from .model import ShiftRecord


@dataclass(frozen=True)
class ShiftFormState:
    """Snapshot of the shift form, enough to decide which actions are allowed."""

    role: Role
    input_date: Optional[date] = None
    input_start_text: str = ""
    input_end_text: str = ""
    selected: Optional[ShiftRecord] = None


def can_create(state: ShiftFormState) -> bool:
    # No end-after-start check: "22:00"-"06:00" passes.
    return (
        state.role == Role.ADMIN
        and state.input_date is not None
        and is_hhmm(state.input_start_text)
        and is_hhmm(state.input_end_text)
    )


def can_mutate_selected(state: ShiftFormState) -> bool:
    return state.role == Role.ADMIN and state.selected is not None


def can_manage(state: ShiftFormState) -> bool:
    return state.role == Role.ADMIN


def can_load(state: ShiftFormState) -> bool:
    return can_manage(state)
