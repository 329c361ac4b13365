from __future__ import annotations

from enum import Enum
from typing import Union


class Role(str, Enum):
    """Vai trò người dùng dùng cho phân quyền màn hình ca trực."""

    ADMIN = "admin"
    DOCTOR = "doctor"
    PATIENT = "patient"

    @classmethod
    def parse(cls, value: Union["Role", str, int]) -> "Role":
        """Accept a Role, its name/value, or the legacy integer code (0/1/2)."""

        if isinstance(value, Role):
            return value

        codes = {0: cls.ADMIN, 1: cls.DOCTOR, 2: cls.PATIENT}
        if isinstance(value, int):
            if value not in codes:
                raise ValueError(f"Unknown role code: {value!r}")
            return codes[value]

        text = str(value).strip().lower()
        if text.isdigit():
            return cls.parse(int(text))
        return cls(text)


class OperationStatus(str, Enum):
    """Kết quả của một thao tác trên màn hình ca trực."""

    SUCCEEDED = "SUCCEEDED"
    SKIPPED = "SKIPPED"
    REJECTED = "REJECTED"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    FAILED = "FAILED"
