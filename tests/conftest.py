from __future__ import annotations

from datetime import date, time

import pytest

from src.hms_client.hms_client.shifts.model import ShiftRecord
from src.hms_client.hms_client.transport.connection import ApiConnection


@pytest.fixture(autouse=True)
def _testing_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(ApiConnection, "_instance", None)


@pytest.fixture
def morning_shift() -> ShiftRecord:
    return ShiftRecord(id=1, date=date(2024, 5, 1), start_time=time(8, 0), end_time=time(16, 0), doctor_ids=[3])


@pytest.fixture
def night_shift() -> ShiftRecord:
    return ShiftRecord(id=2, date=date(2024, 5, 1), start_time=time(22, 0), end_time=time(6, 0), doctor_ids=[])
