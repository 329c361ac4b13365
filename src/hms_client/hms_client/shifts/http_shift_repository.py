from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import requests

from ..core.constants import DEFAULT_REQUEST_TIMEOUT, DEFAULT_SHIFTS_ENDPOINT
from ..core.exceptions import TransportError
from ..transport.http_base import api_call, bearer_headers, decode_json_list, decode_json_object
from .model import ShiftRecord
from .repository import ShiftRepository


def _to_record(payload: Dict[str, Any], action: str) -> ShiftRecord:
    try:
        return ShiftRecord.from_payload(payload)
    except (KeyError, TypeError, ValueError) as e:
        raise TransportError(f"{action}: malformed shift payload {payload!r}") from e


class HttpShiftRepository(ShiftRepository):
    """Shift proxy over the remote REST API.

    The transport handle and the token are used as given; the token is sent
    as a bearer header on every request.
    """

    def __init__(
        self,
        http: requests.Session,
        token: str,
        *,
        base_url: str,
        endpoint: str = DEFAULT_SHIFTS_ENDPOINT,
        timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
    ):
        self._http = http
        self._token = token
        self._url = base_url.rstrip("/") + "/" + endpoint.strip("/")
        self._timeout = timeout

    def _item_url(self, shift_id: int) -> str:
        return f"{self._url}/{int(shift_id)}"

    def fetch_all(self) -> Sequence[ShiftRecord]:
        action = "GET shifts"
        with api_call(action):
            resp = self._http.get(self._url, headers=bearer_headers(self._token), timeout=self._timeout)
            resp.raise_for_status()
        return [_to_record(item, action) for item in decode_json_list(resp, action)]

    def create(self, record: ShiftRecord) -> ShiftRecord:
        action = "POST shift"
        with api_call(action):
            resp = self._http.post(
                self._url,
                json=record.to_payload(),
                headers=bearer_headers(self._token),
                timeout=self._timeout,
            )
            resp.raise_for_status()
        return _to_record(decode_json_object(resp, action), action)

    def update(self, record: ShiftRecord) -> bool:
        if record.id is None:
            return False
        with api_call(f"PUT shift {record.id}"):
            resp = self._http.put(
                self._item_url(record.id),
                json=record.to_payload(),
                headers=bearer_headers(self._token),
                timeout=self._timeout,
            )
        return bool(resp.ok)

    def delete(self, shift_id: int) -> bool:
        with api_call(f"DELETE shift {shift_id}"):
            resp = self._http.delete(
                self._item_url(shift_id),
                headers=bearer_headers(self._token),
                timeout=self._timeout,
            )
        return bool(resp.ok)
