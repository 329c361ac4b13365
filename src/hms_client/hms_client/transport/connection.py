from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from ..core.constants import DEFAULT_REQUEST_TIMEOUT, DEFAULT_SHIFTS_ENDPOINT


@dataclass
class ApiConfig:
    base_url: str
    token: str
    endpoint: str = DEFAULT_SHIFTS_ENDPOINT
    timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT


class ApiConnection:
    """Singleton-like HTTP transport factory.

    Note: one requests.Session is shared by every screen so connections are pooled.
    The first config wins: later get_instance() calls return the existing
    connection and ignore the config they pass.
    """

    _instance: Optional["ApiConnection"] = None

    def __init__(self, config: ApiConfig):
        self._config = config
        self._http: Optional[requests.Session] = None

    @classmethod
    def get_instance(cls, config: ApiConfig) -> "ApiConnection":
        if cls._instance is None:
            cls._instance = ApiConnection(config)
        return cls._instance

    @property
    def config(self) -> ApiConfig:
        return self._config

    def connect(self) -> requests.Session:
        if self._http is None:
            http = requests.Session()
            http.headers.update({"Accept": "application/json"})
            self._http = http
        return self._http

    def close(self) -> None:
        if self._http is not None:
            self._http.close()
            self._http = None
