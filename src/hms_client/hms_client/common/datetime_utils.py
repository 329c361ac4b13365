from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Any, Optional

from ..core.constants import INPUT_TIME_FORMAT, WIRE_DATE_FORMAT, WIRE_TIME_FORMAT

# Strict 24-hour, zero-padded "HH:MM" (strptime alone would accept "8:5").
_HHMM_RE = re.compile(r"(?:[01][0-9]|2[0-3]):[0-5][0-9]")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, WIRE_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(WIRE_DATE_FORMAT)


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """Parse a form field into a time, or None when it is not exactly HH:MM."""

    if not isinstance(value, str) or not _HHMM_RE.fullmatch(value):
        return None
    return datetime.strptime(value, INPUT_TIME_FORMAT).time()


def format_hhmm(value: time) -> str:
    return value.strftime(INPUT_TIME_FORMAT)


def format_wire_time(value: time) -> str:
    return value.strftime(WIRE_TIME_FORMAT)


def normalize_wire_time(value: Any) -> time:
    """Normalize time values coming back from the API.

    The server may send:
    - "HH:MM:SS" (TimeOnly default)
    - "HH:MM"
    - "HH:MM:SS.fffffff" (fractional seconds are dropped)
    """

    if isinstance(value, time):
        return value

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2].split(".")[0]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported wire time value type: {type(value)!r}")
