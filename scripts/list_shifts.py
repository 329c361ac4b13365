from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hms_client.hms_client.common.datetime_utils import format_hhmm, format_iso_date
from src.hms_client.hms_client.container import build_container
from src.hms_client.hms_client.core.enums import Role
from src.hms_client.hms_client.shifts.session import ShiftEditingSession


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(api_config=dict(settings.API_CONFIG))
    api = container.api.config

    editor = ShiftEditingSession.from_transport(
        container.api.connect(),
        api.token,
        base_url=api.base_url,
        role=Role.parse(getattr(settings, "USER_ROLE", Role.ADMIN)),
        endpoint=api.endpoint,
        timeout=api.timeout,
    )
    result = editor.load()
    if not result.ok:
        print(f"FAILED: {result.status.value} {result.message}")
        return 1

    for shift in editor.display_list:
        doctors = ", ".join(str(d) for d in shift.doctor_ids) or "-"
        print(
            f"#{shift.id} {format_iso_date(shift.date)} "
            f"{format_hhmm(shift.start_time)}-{format_hhmm(shift.end_time)} doctors={doctors}"
        )
    print(f"OK: {len(editor.display_list)} shifts from {api.base_url}{api.endpoint}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
