from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import format_iso_date, format_wire_time, normalize_wire_time, parse_iso_date


@dataclass(eq=False)
class ShiftRecord:
    """Thực thể (DTO): Ca trực nhận từ API.

    Lưu ý: mutable on purpose. The editing session updates the selected record
    in place, and identity (not field equality) is what ties a selection to an
    entry of the display list.
    """

    date: date
    start_time: time
    end_time: time
    doctor_ids: List[int] = field(default_factory=list)
    id: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ShiftRecord":
        raw_id = payload.get("id")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            date=parse_iso_date(str(payload["date"])[:10]),
            start_time=normalize_wire_time(payload["startTime"]),
            end_time=normalize_wire_time(payload["endTime"]),
            doctor_ids=[int(d) for d in (payload.get("doctorIds") or [])],
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "date": format_iso_date(self.date),
            "startTime": format_wire_time(self.start_time),
            "endTime": format_wire_time(self.end_time),
            "doctorIds": list(self.doctor_ids),
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload
