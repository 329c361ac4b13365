from __future__ import annotations

from datetime import time
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_hhmm


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def is_hhmm(value: Optional[str]) -> bool:
    return parse_hhmm(value) is not None


def require_hhmm(value: Optional[str], field_name: str) -> time:
    parsed = parse_hhmm(value)
    if parsed is None:
        raise ValidationError(f"{field_name} must be a 24-hour HH:MM time, got {value!r}")
    return parsed
