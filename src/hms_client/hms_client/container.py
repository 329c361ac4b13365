from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.validators import require_non_empty
from .core.constants import DEFAULT_REQUEST_TIMEOUT, DEFAULT_SHIFTS_ENDPOINT
from .core.enums import Role
from .shifts.http_shift_repository import HttpShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.session import ShiftEditingSession
from .transport.connection import ApiConfig, ApiConnection


@dataclass(frozen=True)
class Container:
    api: Optional[ApiConnection]
    shifts_repo: ShiftRepository

    def new_shift_session(self, *, role: Role) -> ShiftEditingSession:
        return ShiftEditingSession(self.shifts_repo, role=role)


def _as_api_config(api_config: dict) -> ApiConfig:
    timeout = api_config.get("timeout", DEFAULT_REQUEST_TIMEOUT)
    return ApiConfig(
        base_url=require_non_empty(str(api_config.get("base_url") or ""), "API base URL"),
        token=str(api_config.get("token") or ""),
        endpoint=str(api_config.get("endpoint") or DEFAULT_SHIFTS_ENDPOINT),
        timeout=float(timeout) if timeout not in (None, "") else None,
    )


def build_container(*, api_config: dict) -> Container:
    config = _as_api_config(api_config)
    api = ApiConnection.get_instance(config)

    shifts_repo = HttpShiftRepository(
        api.connect(),
        api.config.token,
        base_url=api.config.base_url,
        endpoint=api.config.endpoint,
        timeout=api.config.timeout,
    )

    return Container(api=api, shifts_repo=shifts_repo)
