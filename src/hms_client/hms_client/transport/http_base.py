from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

import requests

from ..core.exceptions import TransportError


@contextmanager
def api_call(action: str) -> Iterator[None]:
    """Translate requests failures into TransportError.

    Covers connection errors, timeouts and HTTPError from raise_for_status().
    """

    try:
        yield
    except requests.RequestException as e:
        raise TransportError(f"{action}: {e}") from e


def bearer_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def decode_json(response: requests.Response, action: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise TransportError(f"{action}: invalid JSON in response") from e


def decode_json_object(response: requests.Response, action: str) -> Dict[str, Any]:
    body = decode_json(response, action)
    if not isinstance(body, dict):
        raise TransportError(f"{action}: expected a JSON object, got {type(body).__name__}")
    return body


def decode_json_list(response: requests.Response, action: str) -> List[Dict[str, Any]]:
    body = decode_json(response, action)
    if not isinstance(body, list):
        raise TransportError(f"{action}: expected a JSON array, got {type(body).__name__}")
    if not all(isinstance(item, dict) for item in body):
        raise TransportError(f"{action}: expected JSON objects in the array")
    return body
